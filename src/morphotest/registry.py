"""
Generated Class Registry

Keeps track of the proxy and mock classes generated during a test session.
The registry lives in the session container and is discarded when the session
ends, so generated classes do not accumulate for the lifetime of the process.
"""

import logging
import threading
from dataclasses import dataclass

from .exceptions import ClassAlreadyExistsException

logger = logging.getLogger("morphotest.registry")

PROXY = "proxy"
MOCK = "mock"

# set in the namespace of every class built at runtime
GENERATED_MARKER = "__morphotest_generated__"


@dataclass(frozen=True)
class GeneratedClass:
    """A class generated at runtime together with the class it derives from."""

    name: str
    generated: type
    original: type
    kind: str


class ProxyRegistry:
    """Session-scoped catalog of generated proxy and mock classes."""

    def __init__(self):
        self._classes: dict[str, GeneratedClass] = {}
        self._lock = threading.RLock()

    def register(self, generated: type, original: type, kind: str) -> GeneratedClass:
        """Record a generated class under its ``__name__``.

        Raises:
            ClassAlreadyExistsException: if the name is already taken
        """
        name = generated.__name__
        with self._lock:
            if name in self._classes:
                raise ClassAlreadyExistsException(
                    f'Class "{name}" already exists.', class_name=name
                )
            record = GeneratedClass(
                name=name, generated=generated, original=original, kind=kind
            )
            self._classes[name] = record
        logger.debug(f"Registered {kind} class {name} for {original.__qualname__}")
        return record

    def get(self, name: str) -> type | None:
        record = self._classes.get(name)
        return record.generated if record else None

    def generated_for(self, original: type, kind: str | None = None) -> list[type]:
        """All classes generated from ``original``, oldest first."""
        with self._lock:
            return [
                record.generated
                for record in self._classes.values()
                if record.original is original and (kind is None or record.kind == kind)
            ]

    def clear(self) -> None:
        with self._lock:
            count = len(self._classes)
            self._classes.clear()
        logger.debug(f"Discarded {count} generated classes")

    def __contains__(self, name: object) -> bool:
        return name in self._classes

    def __len__(self) -> int:
        return len(self._classes)
