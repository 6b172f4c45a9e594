"""Exception types raised by protoprofile."""


class ProtoProfileError(Exception):
    """Base exception for all fatal protoprofile errors."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class ConfigError(ProtoProfileError):
    """Analysis options are missing a required collaborator or are inconsistent."""


class PatternError(ProtoProfileError):
    """The message filter is not a valid regular expression."""


class SchemaError(ProtoProfileError):
    """A schema document could not be read or failed validation."""


class ProfileLoadError(ProtoProfileError):
    """The profile dataset could not be loaded."""


class ProfileNotFoundError(ProfileLoadError):
    """The profile dataset does not exist."""


class ProfileParseError(ProfileLoadError):
    """The profile dataset exists but is malformed."""


__all__ = [
    "ConfigError",
    "PatternError",
    "ProfileLoadError",
    "ProfileNotFoundError",
    "ProfileParseError",
    "ProtoProfileError",
    "SchemaError",
]
