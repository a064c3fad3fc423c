"""Exception types raised by Campus Match."""


class CampusMatchError(Exception):
    """Base class for all Campus Match errors."""


class SchemeConfigurationError(CampusMatchError, ValueError):
    """A scoring scheme or a reference into one is invalid.

    Raised for unknown scheme names, unknown priority fields and scheme
    definitions that fail validation. These are caller errors, so they are
    raised immediately instead of being folded into a score.
    """


class SchemeFileError(SchemeConfigurationError):
    """The server-side custom scheme file is missing or invalid.

    Unlike other scheme errors this is a deployment problem, not a caller
    error.
    """
