"""Custom exceptions for the font rasterization system."""

from typing import Any


class FontRasterError(Exception):
    """Base exception for all fontraster errors."""

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(message)
        self.details = details


class ValidationError(FontRasterError):
    """Exception raised for input validation errors."""


class ConfigurationError(FontRasterError):
    """Exception raised for configuration errors."""


class FontError(FontRasterError):
    """Exception raised when a font family cannot be resolved.

    Font errors are captured once when a descriptor is built and replayed on
    every later operation, so each replay raises an independent copy.
    """

    def __init__(self, message: str, family: str, details: Any | None = None):
        super().__init__(message, details)
        self.family = family

    def clone(self) -> "FontError":
        """Return an independent copy carrying the same message and state."""
        twin = self.__class__.__new__(self.__class__)
        twin.args = self.args
        twin.__dict__.update(self.__dict__)
        return twin


class LockFailureError(FontError):
    """Exception raised when the font cache lock cannot be acquired."""

    def __init__(self, family: str):
        super().__init__(f"Could not lock font cache while resolving '{family}'", family)


class FontNotFoundError(FontError):
    """Exception raised when no system font matches the requested family."""

    def __init__(self, family: str):
        super().__init__(f"No such font: {family}", family)


class FontLoadError(FontError):
    """Exception raised when font data cannot be parsed."""

    def __init__(self, family: str, cause: BaseException):
        super().__init__(f"Font loading error for '{family}': {cause}", family, details=cause)
        self.cause = cause


class DrawCallbackError(FontRasterError):
    """Exception raised when a draw callback refuses a pixel.

    Wraps whatever the callback raised, so a callback failure is never
    mistaken for a font failure, even when the callback raised a FontError.
    """

    def __init__(self, cause: BaseException):
        super().__init__(f"Draw callback failed: {cause!r}", details=cause)
        self.cause = cause


class InvalidFontSizeError(ValidationError):
    """Exception raised for non-positive or non-finite font sizes."""

    def __init__(self, size: Any):
        super().__init__(f"Font size must be a positive finite number, got {size!r}")


class InvalidRotationError(ValidationError):
    """Exception raised for rotations that are not a multiple of 90 degrees."""

    def __init__(self, degrees: Any):
        super().__init__(f"Rotation must be a multiple of 90 degrees, got {degrees!r}")


class InvalidFontSourceError(ValidationError):
    """Exception raised when a value cannot be turned into a font descriptor."""

    def __init__(self, value: Any):
        super().__init__(f"Cannot build a font descriptor from {type(value).__name__}: {value!r}")


class InvalidColorError(ValidationError):
    """Exception raised for colors that cannot be converted to RGBA."""

    def __init__(self, color: Any):
        super().__init__(f"Invalid color: {color!r}")


class ConfigFileNotFoundError(ConfigurationError):
    """Exception raised when configuration file is not found."""

    def __init__(self, config_path: str):
        super().__init__(f"Configuration file not found: {config_path}")


class EmptyConfigFileError(ConfigurationError):
    """Exception raised when configuration file is empty."""

    def __init__(self, config_path: str):
        super().__init__(f"Empty configuration file: {config_path}")


class InvalidYamlError(ConfigurationError):
    """Exception raised for invalid YAML content."""

    def __init__(self, config_path: str, error: str):
        super().__init__(f"Invalid YAML in {config_path}: {error}")


class ConfigLoadError(ConfigurationError):
    """Exception raised when configuration loading fails."""

    def __init__(self, error: str):
        super().__init__(f"Failed to load configuration: {error}")
