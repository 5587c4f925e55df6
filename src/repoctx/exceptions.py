"""Custom exceptions for repoctx."""


class RepoCtxError(Exception):
    """Base exception for all repoctx errors."""


class ConfigError(RepoCtxError):
    """Configuration-related errors."""


class ManifestParseError(RepoCtxError):
    """A dependency manifest could not be parsed."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not parse manifest '{path}': {reason}")
        self.path = path
        self.reason = reason


class SourceError(RepoCtxError):
    """Repository source (listing or content loading) errors."""


class MissingFileError(SourceError):
    """Raised by a content loader when a file does not exist."""

    def __init__(self, path: str):
        super().__init__(f"File not found in repository: {path}")
        self.path = path
