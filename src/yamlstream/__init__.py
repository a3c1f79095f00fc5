import logging

from .document import Document
from .exceptions import DecodeError, IndexOutOfRangeError, ReadError, UsageError, YAMLStreamError
from .settings import Settings
from .stream import Stream, read_file

__version__ = "0.1.0"

__all__ = [
    "DecodeError",
    "Document",
    "IndexOutOfRangeError",
    "ReadError",
    "Settings",
    "Stream",
    "UsageError",
    "YAMLStreamError",
    "read_file",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
