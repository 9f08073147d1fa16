"""Exception hierarchy for job analysis and storage."""


class JobPrepError(Exception):
    """Base class for all jobprep errors."""


class ValidationError(JobPrepError, ValueError):
    """A job posting is incomplete or malformed. Fix the input, do not retry."""


class StorageError(JobPrepError):
    """A key-value store read or write failed."""


class AuthenticationError(JobPrepError):
    """An operation needed a signed-in user and the session has none."""
