"""Exception hierarchy for configuration and mover provisioning.

Errors are raised where they are detected and propagated to the caller
unchanged. Nothing here is retried: configuration is operator-authored,
so a failing file keeps failing until someone edits it.
"""


class HsmConfigError(Exception):
    """Base exception for all configuration-related errors."""


class ConfigNotFoundError(HsmConfigError):
    """Raised when the configuration file or directory does not exist."""


class ConfigParseError(HsmConfigError):
    """Raised when the configuration cannot be read or violates the schema."""


class MissingEnvironmentError(HsmConfigError):
    """Raised when a required environment variable is not set.

    Attributes:
        variable: Name of the missing environment variable.
    """

    def __init__(self, variable: str, purpose: str) -> None:
        self.variable = variable
        super().__init__(f"Environment variable {variable} is not set ({purpose})")


class ArchiveValidationError(HsmConfigError):
    """Raised when an archive definition fails validation.

    Attributes:
        archive_id: Numeric ID of the offending archive.
        name: Name of the offending archive.
    """

    def __init__(self, archive_id: int, name: str, reason: str) -> None:
        self.archive_id = archive_id
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid archive {name!r} (id={archive_id}): {reason}")


class MoverCreationError(HsmConfigError):
    """Raised when a data mover cannot be created for an archive.

    The underlying backend failure is available as ``__cause__``.

    Attributes:
        archive_id: Numeric ID of the archive whose mover failed.
    """

    def __init__(self, archive_id: int, reason: str) -> None:
        self.archive_id = archive_id
        super().__init__(f"Cannot create mover for archive {archive_id}: {reason}")
