"""PyYAML glue shared by ingestion and typed decode, so both go through one decoder."""
from typing import Any, Iterator, Mapping, Tuple

import yaml


def load_all(text: str) -> Iterator[Tuple[int, Any]]:
    """Yield ``(offset, data)`` for every document in ``text``.

    ``offset`` is the position in ``text`` where the document begins: the first document always
    begins at 0 (so leading comments belong to it), later ones at their ``---`` marker or first
    token. This is the loop ``yaml.load_all`` runs, with the composer's marks kept around.

    :param text: The YAML text to decode.
    """
    loader = yaml.SafeLoader(text)

    try:
        first = True

        while loader.check_node():
            offset = 0 if first else loader.peek_event().start_mark.index
            first = False
            yield offset, loader.construct_document(loader.get_node())

    finally:
        loader.dispose()


def load(text: str) -> Any:
    """Decode the first document in ``text``, or None if there is none."""
    for _, data in load_all(text):
        return data

    return None


def dump(data: Mapping[str, Any]) -> str:
    return yaml.safe_dump(dict(data), default_flow_style=False, sort_keys=False, allow_unicode=True)
