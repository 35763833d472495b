"""Pure edits of a screen's consumed food list.

Entries are addressed by position. Every function returns a new tuple.
"""

from dataclasses import replace

from calorie_tracker.domain.meals import ConsumedFood


def add_consumed_food(
    consumed_foods: tuple[ConsumedFood, ...], consumed_food: ConsumedFood
) -> tuple[ConsumedFood, ...]:
    return (*consumed_foods, consumed_food)


def update_consumed_food_grams(
    consumed_foods: tuple[ConsumedFood, ...], index: int, grams: int
) -> tuple[ConsumedFood, ...]:
    check_consumed_food_index(consumed_foods, index)
    updated = replace(consumed_foods[index], grams=grams)
    return (*consumed_foods[:index], updated, *consumed_foods[index + 1 :])


def delete_consumed_food(
    consumed_foods: tuple[ConsumedFood, ...], index: int
) -> tuple[ConsumedFood, ...]:
    check_consumed_food_index(consumed_foods, index)
    return (*consumed_foods[:index], *consumed_foods[index + 1 :])


def check_consumed_food_index(
    consumed_foods: tuple[ConsumedFood, ...], index: int
) -> None:
    """Raise ``IndexError`` unless ``index`` addresses an entry."""
    if not 0 <= index < len(consumed_foods):
        raise IndexError(
            f"consumed food index {index} out of range for {len(consumed_foods)} items"
        )
