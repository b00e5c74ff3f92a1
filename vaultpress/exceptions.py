class ExportError(Exception):
    """Base exception for failures that abort an export."""

    pass


class ExportConfigurationError(ExportError):
    """Raised before any I/O when a required destination is not configured."""

    pass


class ExportIOError(ExportError):
    """Raised when creating a directory or writing a file fails.

    Files written before the failure are left in place.
    """

    pass


class HandledExportError(Exception):
    """An error that has already been properly displayed to the user.
    Parent processes should exit gracefully without showing a traceback."""

    pass
