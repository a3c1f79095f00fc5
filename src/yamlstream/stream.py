import logging
import os

from typing import Any, IO, Iterator, List, Optional, Tuple, Union

import yaml

from . import codec
from .constants import DECODE_ERROR, ENCODING, EXPECTED_POINTER, INDEX_OUT_OF_RANGE, NOT_A_MAPPING, READ_ERROR
from .document import Document, is_destination
from .exceptions import DecodeError, IndexOutOfRangeError, ReadError, UsageError
from .settings import Settings

log = logging.getLogger(__name__)

Source = Union[IO[bytes], IO[str], bytes, str]


def _read_text(source: Source) -> str:
    """Drain ``source`` and return its contents as text, dropping a leading UTF-8 BOM."""
    try:
        data = source if isinstance(source, (bytes, str)) else source.read()

        if isinstance(data, bytes):
            data = data.decode("utf-8-sig")

    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(READ_ERROR.format(error=e)) from e

    return data[1:] if data.startswith("\ufeff") else data


class Stream:
    """An ordered sequence of YAML documents drawn from one source.

    A stream holding a single document is still a stream: a file without any ``---`` delimiter
    reads as exactly one document.

    .. code-block:: py

        >>> stream = Stream()
        >>> stream.read(b"a: 1\\n---\\nb: 2\\n")
        >>> stream.count
        2
        >>> stream.get(1).data
        {'b': 2}
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings: Settings = settings or Settings()
        self._documents: List[Document] = []

    def __repr__(self) -> str:
        return f"Stream(count={self.count})"

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __str__(self) -> str:
        return self.to_bytes().decode(ENCODING)

    @property
    def count(self) -> int:
        """The number of documents, i.e. how many files the stream would make if split apart."""
        return len(self._documents)

    def read(self, source: Source) -> None:
        """Consume ``source`` in full and split it into documents.

        Replaces whatever the stream held before. In strict mode a malformed document raises
        :class:`DecodeError` and the stream keeps its previous contents; in lenient mode the
        documents decoded up to that point are kept and the rest of the source is dropped.

        :param source: A binary or text file-like object, or the bytes/text themselves.
        :raises ReadError: If the source cannot be read or is not UTF-8.
        :raises DecodeError: On malformed content, in strict mode only.
        """
        text = _read_text(source)
        found: List[Tuple[int, Any]] = []

        try:
            for offset, data in codec.load_all(text):
                if data is not None and not isinstance(data, dict):
                    raise DecodeError(NOT_A_MAPPING.format(index=len(found), kind=type(data).__name__))

                found.append((offset, data))

        except (yaml.YAMLError, DecodeError) as e:
            if self.settings.strict:
                if isinstance(e, DecodeError):
                    raise
                raise DecodeError(DECODE_ERROR.format(index=len(found), error=e)) from e

            log.warning("stopped reading at document %d: %s", len(found), e)

        documents: List[Document] = []

        for index, (offset, data) in enumerate(found):
            end = found[index + 1][0] if index + 1 < len(found) else len(text)
            documents.append(Document(data, raw=text[offset:end], index=index))

        if not documents:
            documents.append(Document(raw=text))

        self._documents = documents
        log.debug("read %d document(s)", self.count)

    def read_file(self, path: Union[str, os.PathLike]) -> None:
        """Open the file at ``path`` and :meth:`read` it.

        :raises ReadError: If the file cannot be opened or read.
        """
        try:
            with open(path, "rb") as fd:
                self.read(fd)
        except OSError as e:
            raise ReadError(READ_ERROR.format(error=e)) from e

    def get(self, index: int) -> Document:
        """Return the document at the zero-based ``index``.

        :raises IndexOutOfRangeError: Unless ``0 <= index < count``; negative indices are not wrapped.
        """
        if not 0 <= index < self.count:
            max_index = self.count - 1
            raise IndexOutOfRangeError(
                INDEX_OUT_OF_RANGE.format(index=index, max_index=max_index), index=index, max_index=max_index
            )

        return self._documents[index]

    def get_unchecked(self, index: int) -> Document:
        """Return the document at ``index`` without validating it, for callers that already have."""
        return self._documents[index]

    def get_unmarshal(self, index: int, destination: Any) -> None:
        """Decode the document at ``index`` into ``destination`` in place.

        See :meth:`Document.unmarshal` for the accepted destinations.

        :raises UsageError: If ``destination`` cannot be written to; the stream is not consulted.
        """
        if not is_destination(destination):
            raise UsageError(EXPECTED_POINTER)

        self.get(index).unmarshal(destination)

    def to_bytes(self) -> bytes:
        """Concatenate every re-serialized document.

        The result is always a valid multi-document stream but not the original bytes;
        use :meth:`raw_bytes` for those.
        """
        return b"".join(document.to_bytes() for document in self._documents)

    def raw_bytes(self) -> bytes:
        return self.raw_string().encode(ENCODING)

    def raw_string(self) -> str:
        """The source text exactly as it was read."""
        return "".join(document.raw for document in self._documents)


def read_file(path: Union[str, os.PathLike], settings: Optional[Settings] = None) -> Stream:
    """Open the file at ``path`` and return it read as a :class:`Stream`.

    .. code-block:: py

        >>> stream = read_file("manifests.yaml")
        >>> stream.get(2)
    """
    stream = Stream(settings)
    stream.read_file(path)
    return stream
