"""
Fixture Loader

Reads fixture files relative to a base directory. The relative path always
gets exactly one leading separator and forward slashes are translated to the
platform separator; the result is appended to the base path as-is.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .exceptions import FixtureNotFoundException

logger = logging.getLogger("morphotest.fixtures")


def normalize_fixture_path(fixture: str) -> str:
    """``"sub/a.txt"`` and ``"/sub/a.txt"`` both become ``os.sep + "sub" + os.sep + "a.txt"``."""
    fixture = "/" + fixture.lstrip("/")
    return fixture.replace("/", os.sep)


class FixtureLoader:
    """Loads fixture files below ``base_path``."""

    def __init__(self, base_path: str | os.PathLike = ""):
        self._base_path = os.fspath(base_path)

    @property
    def base_path(self) -> str:
        return self._base_path

    def resolve(self, fixture: str) -> str:
        """Concatenate the base path and the normalized relative path."""
        return self._base_path + normalize_fixture_path(fixture)

    def load(self, fixture: str) -> bytes:
        """Return the raw content of a fixture file.

        Raises:
            FixtureNotFoundException: the resolved path is not a regular file
        """
        fixture_path = self.resolve(fixture)
        path = Path(fixture_path)
        if not path.is_file():
            raise FixtureNotFoundException(
                f'Fixture file: "{fixture_path}" not found!',
                fixture_path=fixture_path,
            )
        logger.debug(f"Loading fixture {fixture_path}")
        return path.read_bytes()

    def load_text(self, fixture: str, encoding: str = "utf-8") -> str:
        return self.load(fixture).decode(encoding)

    def load_json(self, fixture: str) -> Any:
        return json.loads(self.load(fixture))

    def __repr__(self) -> str:
        return f"FixtureLoader(base_path={self._base_path!r})"
