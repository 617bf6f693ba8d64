"""
Mock construction

Builds mock objects as generated subclasses of the original class, in the
spirit of classic xUnit ``getMock``: selected methods are replaced with
``unittest.mock.MagicMock`` stubs while the rest of the class keeps its real
behaviour. The original constructor and ``__copy__`` can be switched off.
"""

import logging
import uuid
from collections.abc import Iterable, Mapping, Sequence
from typing import Any
from unittest.mock import MagicMock

from .reflection import resolve_class, resolve_member_name
from .registry import GENERATED_MARKER, MOCK, ProxyRegistry

logger = logging.getLogger("morphotest.mocking")

MOCK_CLASS_PREFIX = "Mock"


class StubbedMethod:
    """Non-data descriptor handing out one ``MagicMock`` per instance.

    The mock is stored in the instance ``__dict__`` on first access, so later
    lookups (and ``return_value`` / ``side_effect`` configured by the test)
    hit the same object. Stubs are active during ``__init__`` too.
    """

    def __init__(self, name: str):
        self.name = name

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        stub = MagicMock(name=f"{type(instance).__name__}.{self.name}")
        return instance.__dict__.setdefault(self.name, stub)

    def __repr__(self) -> str:
        return f"StubbedMethod({self.name!r})"


def _copy_without_clone(self: Any) -> Any:
    clone = type(self).__new__(type(self))
    clone.__dict__.update(self.__dict__)
    return clone


def _stub_name(original: type, name: str) -> str:
    """Attribute name the stub must replace, with private names mangled."""
    return resolve_member_name(original, name) or name


def generate_mock_class(
    original: type,
    methods: Iterable[str] | None = None,
    mock_class_name: str = "",
    call_original_clone: bool = True,
    stub_abstract: bool = False,
    prefix: str = MOCK_CLASS_PREFIX,
) -> type:
    """Create the mock subclass of ``original`` without instantiating it.

    Method names may be given bare (``"fetch"``) or private (``"__fetch"``);
    either form stubs the mangled ``_Owner__fetch`` the class itself calls.
    """
    stubbed = [_stub_name(original, method_name) for method_name in methods or ()]
    if stub_abstract:
        stubbed.extend(sorted(getattr(original, "__abstractmethods__", ())))

    name = mock_class_name or f"{prefix}_{original.__name__}_{uuid.uuid4().hex}"
    namespace: dict[str, Any] = {
        "__module__": original.__module__,
        "__qualname__": name,
        GENERATED_MARKER: True,
    }
    for method_name in dict.fromkeys(stubbed):
        namespace[method_name] = StubbedMethod(method_name)
    if not call_original_clone:
        namespace["__copy__"] = _copy_without_clone

    return type(original)(name, (original,), namespace)


def _instantiate(
    mock_class: type,
    args: Sequence[Any],
    kwargs: Mapping[str, Any],
    call_original_constructor: bool,
) -> Any:
    if call_original_constructor:
        return mock_class(*args, **kwargs)
    return mock_class.__new__(mock_class)


def build_mock(
    original_class_name: str | type,
    methods: Iterable[str] | None = None,
    arguments: Mapping[str, Any] | None = None,
    mock_class_name: str = "",
    call_original_constructor: bool = True,
    call_original_clone: bool = True,
    call_autoload: bool = True,
    registry: ProxyRegistry | None = None,
    prefix: str = MOCK_CLASS_PREFIX,
) -> Any:
    """Return a mock instance of a concrete class.

    Args:
        original_class_name: class or dotted class name to mock
        methods: method names replaced by ``MagicMock`` stubs
        arguments: keyword arguments for the original constructor
        mock_class_name: explicit name for the generated class
        call_original_constructor: run ``__init__`` when True
        call_original_clone: keep the original ``__copy__`` when True
        call_autoload: allow importing the module of a dotted name
        registry: registry recording the generated class
        prefix: prefix of generated class names

    Raises:
        ClassAlreadyExistsException: ``mock_class_name`` is already registered
    """
    original = resolve_class(original_class_name, autoload=call_autoload)
    mock_class = generate_mock_class(
        original,
        methods=methods,
        mock_class_name=mock_class_name,
        call_original_clone=call_original_clone,
        prefix=prefix,
    )
    if registry is not None:
        registry.register(mock_class, original, MOCK)

    logger.debug(
        f"Instantiating mock {mock_class.__name__} "
        f"(constructor={'on' if call_original_constructor else 'off'})"
    )
    return _instantiate(mock_class, (), arguments or {}, call_original_constructor)


def build_mock_for_abstract_class(
    original_class_name: str | type,
    arguments: Sequence[Any] | None = None,
    mock_class_name: str = "",
    call_original_constructor: bool = True,
    call_original_clone: bool = True,
    call_autoload: bool = True,
    registry: ProxyRegistry | None = None,
    prefix: str = MOCK_CLASS_PREFIX,
) -> Any:
    """Return a mock instance of an abstract class.

    All abstract methods are stubbed, so the generated class is concrete.
    Constructor arguments are passed positionally.
    """
    original = resolve_class(original_class_name, autoload=call_autoload)
    mock_class = generate_mock_class(
        original,
        mock_class_name=mock_class_name,
        call_original_clone=call_original_clone,
        stub_abstract=True,
        prefix=prefix,
    )
    if registry is not None:
        registry.register(mock_class, original, MOCK)

    logger.debug(f"Instantiating abstract mock {mock_class.__name__}")
    return _instantiate(mock_class, arguments or (), {}, call_original_constructor)


def create_muted(
    class_name: str | type,
    registry: ProxyRegistry | None = None,
    prefix: str = MOCK_CLASS_PREFIX,
) -> Any:
    """Mock with no stubs whose constructor never runs."""
    return build_mock(
        class_name,
        methods=None,
        arguments=None,
        mock_class_name="",
        call_original_constructor=False,
        registry=registry,
        prefix=prefix,
    )
