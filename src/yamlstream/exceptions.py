from typing import Optional


class YAMLStreamError(Exception):
    """Base class for every error raised by yamlstream."""


class ReadError(YAMLStreamError):
    """The byte source could not be read or is not valid UTF-8."""


class DecodeError(YAMLStreamError):
    """YAML content could not be decoded, or did not fit the requested destination."""


class UsageError(YAMLStreamError, TypeError):
    """A destination was passed that cannot be decoded into in place."""


class IndexOutOfRangeError(YAMLStreamError, IndexError):
    def __init__(self, message: str, index: int, max_index: Optional[int] = None) -> None:
        super().__init__(message)
        self.index = index
        self.max_index = max_index
