"""Exceptions raised by the packaging pipeline."""


class PackagingError(RuntimeError):
    """Base class for every fatal pipeline error."""


class ArgumentError(PackagingError):
    """Raised when the build request is malformed."""


class DetectionError(PackagingError):
    """Raised when the host OS or the source version cannot be determined."""


class InvalidVersionError(PackagingError, ValueError):
    """Raised when a version string has a non-numeric segment."""


class UnsupportedPlatformError(PackagingError):
    """Raised when an OS tag has no entry in a dispatch table."""
