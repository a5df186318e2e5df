"""Error types raised while reading, validating and submitting posts."""


class PostSyncError(Exception):
    """Base class for every error raised by postsync."""


class ContentReadError(PostSyncError):
    """The input directory or a content file could not be read."""


class ValidationError(PostSyncError):
    """A content file does not describe a valid post."""


class MissingTitleError(ValidationError):
    pass


class MissingDateError(ValidationError):
    pass


class DateParseError(ValidationError):
    pass


class MarshalError(ValidationError):
    """A value could not be escaped into a JSON string literal."""


class TransportError(PostSyncError):
    """The HTTP request itself failed (DNS, connection, TLS...)."""


class ResponseReadError(PostSyncError):
    """The response body could not be read or is not valid JSON."""


class ConfigError(PostSyncError):
    pass
