"""
Dependency Injector

Sets a dependency on a test subject through the most specific channel the
subject offers. Channels are tried in the order of ``INJECTION_STRATEGIES``:

1. a setter: ``setName`` / ``set_name``
2. an injector: ``injectName`` / ``inject_name``
3. the attribute itself, whatever its visibility. Declared attributes are
   found even when the constructor never ran and they hold no value yet.
"""

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .exceptions import InjectionUnsupportedException, InvalidTargetException
from .mocking import StubbedMethod
from .reflection import resolve_field_name

logger = logging.getLogger("morphotest.injection")

_NON_INSTANCE_TYPES = (type(None), bool, int, float, complex, str, bytes, type)


def capitalize_first(name: str) -> str:
    """Upper-case the first character and leave the rest untouched."""
    return name[:1].upper() + name[1:]


def _has_method(cls: type, name: str) -> bool:
    if isinstance(inspect.getattr_static(cls, name, None), StubbedMethod):
        return True
    return callable(getattr(cls, name, None))


def _method_channel(prefix: str) -> Callable[[Any, str], Callable | None]:
    def find(target: Any, name: str) -> Callable | None:
        for method_name in (f"{prefix}{capitalize_first(name)}", f"{prefix}_{name}"):
            if _has_method(type(target), method_name):
                return getattr(target, method_name)
        return None

    return find


def _field_channel(target: Any, name: str) -> Callable | None:
    member = resolve_field_name(target, name)
    if member is None:
        return None
    return lambda dependency: setattr(target, member, dependency)


@dataclass(frozen=True)
class InjectionStrategy:
    """One injection channel: ``find`` returns a one-argument assigner or None."""

    name: str
    find: Callable[[Any, str], Callable | None]


INJECTION_STRATEGIES: tuple[InjectionStrategy, ...] = (
    InjectionStrategy("setter", _method_channel("set")),
    InjectionStrategy("injector", _method_channel("inject")),
    InjectionStrategy("field", _field_channel),
)


def inject(target: Any, name: str, dependency: Any) -> None:
    """Inject ``dependency`` into ``name`` of ``target``.

    Args:
        target: the instance which needs the dependency
        name: name of the attribute to be injected
        dependency: usually an object, but any value is accepted

    Raises:
        InvalidTargetException: ``target`` is not an instance
        InjectionUnsupportedException: no setter, injector or attribute exists
    """
    if isinstance(target, _NON_INSTANCE_TYPES):
        raise InvalidTargetException(
            "Wrong type for argument target, must be object.",
            target_type=type(target),
        )

    for strategy in INJECTION_STRATEGIES:
        assign = strategy.find(target, name)
        if assign is not None:
            logger.debug(
                f"Injecting {name} into {type(target).__qualname__} via {strategy.name}"
            )
            assign(dependency)
            return

    raise InjectionUnsupportedException(
        f"Could not inject {name} into object of type {type(target).__qualname__}",
        field_name=name,
        target_type=type(target),
    )
