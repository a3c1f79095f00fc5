import sys

from typing import Optional

import click

from .constants import INDEX_OUT_OF_RANGE
from .exceptions import DecodeError, ReadError
from .settings import Settings
from .stream import read_file


def main(*, filename: str, index: int = 0, raw: bool = False, strict: Optional[bool] = None) -> None:
    """Main routine wrapped by the `ys` command.

    Enables direct use from python scripts:

    .. code-block:: py

        >>> main(filename="bundle.yaml", index=2)
        ---
        kind: Service
        ...
    """

    try:
        stream = read_file(filename, Settings(strict=strict))
    except (ReadError, DecodeError) as e:
        sys.exit(f"\n{e}\n")

    # the stream is only asked for indices known to exist
    if not 0 <= index <= stream.count - 1:
        sys.exit(INDEX_OUT_OF_RANGE.format(index=index, max_index=stream.count - 1))

    document = stream.get_unchecked(index)
    text = document.raw if raw else str(document)

    click.echo(text, nl=not text.endswith("\n"))

