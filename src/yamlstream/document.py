import copy
import dataclasses
import typing

from functools import partial
from typing import Any, Callable, Dict, List, Mapping, MutableMapping, Optional, Tuple

import yaml

from pydantic import BaseModel, ConfigDict, PydanticUserError, TypeAdapter, ValidationError

from . import codec
from .constants import DELIMITER, ENCODING, EXPECTED_POINTER, FIELD_DECODE_ERROR, REENCODE_ERROR
from .exceptions import DecodeError, UsageError

# dataclass field metadata key naming the document key a field is read from, e.g.
# ``api_version: str = field(default="", metadata={"yaml": "apiVersion"})``
YAML_KEY = "yaml"

# numeric scalars decode into str fields, as they would with a typed YAML decoder
SCALAR_CONFIG = ConfigDict(coerce_numbers_to_str=True)


def is_destination(obj: Any) -> bool:
    """Return true if ``obj`` can be decoded into in place.

    Supported destinations are mutable mappings and instances of non-frozen dataclasses or
    pydantic models. Classes, scalars, tuples and frozen records are rejected since anything
    decoded into them would be thrown away.

    :param obj: The candidate destination.
    """
    if isinstance(obj, type):
        return False

    if isinstance(obj, MutableMapping):
        return True

    if dataclasses.is_dataclass(obj):
        return not obj.__dataclass_params__.frozen  # type: ignore[attr-defined]

    if isinstance(obj, BaseModel):
        return not type(obj).model_config.get("frozen", False)

    return False


def _adapter(annotation: Any) -> TypeAdapter:
    try:
        return TypeAdapter(annotation, config=SCALAR_CONFIG)
    except PydanticUserError:
        # dataclasses and models bring their own config
        return TypeAdapter(annotation)


def _record_fields(destination: Any) -> Dict[str, Tuple[str, Any]]:
    """Map document keys to ``(attribute name, annotation)`` for a dataclass or model instance."""
    fields: Dict[str, Tuple[str, Any]] = {}

    if isinstance(destination, BaseModel):
        for name, info in type(destination).model_fields.items():
            fields[info.alias or name] = (name, info.annotation)

    else:
        hints = typing.get_type_hints(type(destination))
        for field in dataclasses.fields(destination):
            key = field.metadata.get(YAML_KEY, field.name)
            fields[key] = (field.name, hints.get(field.name, Any))

    return fields


def _plan(destination: Any, data: Any, path: str) -> List[Callable[[], None]]:
    """Work out every assignment needed to decode ``data`` into ``destination``.

    Nothing is written here; the returned callables are only run once the whole document has
    been converted, so a shape mismatch anywhere leaves the destination as it was.
    """
    if data is None:
        data = {}

    if not isinstance(data, Mapping):
        raise DecodeError(
            FIELD_DECODE_ERROR.format(
                path=path or "<root>",
                error=f"cannot decode {type(data).__name__} into {type(destination).__name__}",
            )
        )

    if isinstance(destination, MutableMapping):
        return [partial(destination.update, data)]

    assignments: List[Callable[[], None]] = []

    for key, (name, annotation) in _record_fields(destination).items():
        if key not in data:
            continue

        value = data[key]
        field_path = f"{path}.{key}" if path else key
        current = getattr(destination, name, None)

        # nested records are filled in place rather than replaced
        if is_destination(current) and not isinstance(current, MutableMapping):
            assignments.extend(_plan(current, value, field_path))
            continue

        try:
            converted = _adapter(annotation).validate_python(value)
        except ValidationError as e:
            raise DecodeError(FIELD_DECODE_ERROR.format(path=field_path, error=e)) from e

        assignments.append(partial(setattr, destination, name, converted))

    return assignments


class Document:
    """A single decoded YAML document.

    Holds the decoded mapping alongside ``raw``, the exact source text it was decoded from.
    Documents are created by :class:`yamlstream.Stream` and are not meant to be changed afterwards.
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None, raw: str = "", index: int = 0) -> None:
        self._data: Dict[str, Any] = dict(data) if data else {}
        self._raw: str = raw
        self._index: int = index

    def __repr__(self) -> str:
        return f"Document(index={self._index}, keys={list(self._data)!r})"

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __str__(self) -> str:
        return self.to_bytes().decode(ENCODING)

    @property
    def data(self) -> Dict[str, Any]:
        """A copy of the decoded mapping."""
        return copy.deepcopy(self._data)

    @property
    def raw(self) -> str:
        return self._raw

    @property
    def index(self) -> int:
        return self._index

    def raw_bytes(self) -> bytes:
        return self._raw.encode(ENCODING)

    def to_bytes(self) -> bytes:
        """Re-serialize the document, always led by a ``---`` delimiter.

        The delimiter is written even if the source omitted it, so the output of several
        documents can be concatenated into a valid stream. Formatting and comments of the
        source are not kept; see :attr:`raw` for that.
        """
        try:
            text = codec.dump(self._data)
        except yaml.YAMLError as e:
            # content decoded by the safe loader is always representable by the safe dumper
            raise RuntimeError(REENCODE_ERROR.format(index=self._index, error=e)) from e

        return (DELIMITER + text).encode(ENCODING)

    def unmarshal(self, destination: Any) -> None:
        """Decode this document into ``destination`` in place.

        ``destination`` is a mutable mapping (updated with the document's keys) or a dataclass or
        pydantic model instance (matching fields are converted to their annotated types, other
        fields keep their values, nested records are filled recursively).

        :param destination: The object to decode into.
        :raises UsageError: If ``destination`` cannot be written to.
        :raises DecodeError: If the document does not fit the shape of ``destination``.
        """
        if not is_destination(destination):
            raise UsageError(EXPECTED_POINTER)

        data = codec.load(self.to_bytes().decode(ENCODING))

        for assign in _plan(destination, data, ""):
            assign()
