"""morphotest exception hierarchy."""

from typing import Any


class MorphoTestException(Exception):
    """Base class for all morphotest errors."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        self.context = kwargs
        super().__init__(message)


class ConfigurationError(MorphoTestException):
    """Configuration-related errors."""

    pass


class FixtureNotFoundException(MorphoTestException):
    """Raised when a fixture path does not name an existing file."""

    def __init__(
        self, message: str, fixture_path: str | None = None, **kwargs: Any
    ) -> None:
        self.fixture_path = fixture_path
        super().__init__(message, **kwargs)


class InvalidTargetException(MorphoTestException, TypeError):
    """Raised when injecting into something that is not an instance."""

    pass


class InjectionUnsupportedException(MorphoTestException):
    """Raised when a target offers no setter, injector or attribute for a name."""

    def __init__(
        self,
        message: str,
        field_name: str | None = None,
        target_type: type | None = None,
        **kwargs: Any,
    ) -> None:
        self.field_name = field_name
        self.target_type = target_type
        super().__init__(message, **kwargs)


class ClassAlreadyExistsException(MorphoTestException):
    """Raised when an explicit generated class name is already registered."""

    def __init__(
        self, message: str, class_name: str | None = None, **kwargs: Any
    ) -> None:
        self.class_name = class_name
        super().__init__(message, **kwargs)
