"""
This module contains the ``Settings`` object, which combines settings chosen by the caller with
overrides defined at runtime (via environment variables).
"""
import os

from typing import Optional

from .constants import YAMLSTREAM_STRICT


def str_bool(v) -> bool:
    if not isinstance(v, bool):
        return str(v).lower() in ("yes", "true", "t", "1")
    return v


class Settings:
    STRICT: str = YAMLSTREAM_STRICT

    def __init__(self, strict: Optional[bool] = None) -> None:
        # properties
        self._strict: Optional[bool] = strict

    def __repr__(self) -> str:
        return f"Settings(strict={self.strict!r})"

    @property
    def strict(self) -> bool:
        """Whether a malformed document aborts ingestion (True) or truncates the stream (False).

        An explicit constructor value wins over ``YAMLSTREAM_STRICT``, which wins over the default.
        """
        if self._strict is not None:
            return self._strict
        return str_bool(os.environ.get(self.STRICT, True))
