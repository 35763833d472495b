"""Failure reasons returned by use-cases."""


class AppException(Exception):
    """Base class for expected application failures."""


class NetworkException(AppException):
    """The backend could not be reached."""


class UnauthorizedException(AppException):
    """The backend rejected the credentials."""


class UnknownException(AppException):
    """A failure that does not fit any other category."""


class MealException(AppException):
    """A meal-specific rule was violated."""


class EmptyMealNameException(MealException):
    """A meal cannot be saved without a name."""


class MealNotFoundException(MealException):
    """The requested meal does not exist."""
