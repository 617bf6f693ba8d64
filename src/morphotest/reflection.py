"""
Reflection Accessor

Helpers for reaching protected (``_name``) and private (``__name``) members of
objects under test.

Two entry points are provided:

- ``build_accessible_proxy`` creates a fresh subclass of a class that mixes in
  ``AccessibleMixin``. Instances of the proxy (or mocks built from it) expose
  ``call``, ``call_with_refs``, ``set_field`` and ``get_field``.
- ``Accessor`` wraps an instance that already exists and exposes the same four
  operations without creating any class.

Private names are looked up in their mangled form (``_Owner__name``) for every
class in the MRO, so ``get_field("secret")`` finds ``self.__secret``.
Field operations skip methods, so a private ``self.__cache`` is still reached
when the class also defines a public ``cache()`` accessor. Fields that are
declared but not yet assigned (the constructor was skipped) are found through
class annotations and the attributes assigned in the class's own methods.
"""

import dis
import inspect
import logging
import pkgutil
import sys
import types
import uuid
from typing import Any

from .registry import GENERATED_MARKER, PROXY, ProxyRegistry

logger = logging.getLogger("morphotest.reflection")

PROXY_CLASS_PREFIX = "AccessibleTestProxy"

_MISSING = object()


def resolve_class(class_name: str | type, autoload: bool = True) -> type:
    """Resolve a class object from a class or its dotted name.

    Args:
        class_name: a class, ``"pkg.module.Class"`` or ``"pkg.module:Class"``
        autoload: when False the owning module must already be imported

    Raises:
        ImportError: the module cannot be found (or is not loaded and
            autoloading is disabled)
        AttributeError: the module has no such attribute
        TypeError: the name does not refer to a class
    """
    if isinstance(class_name, type):
        return class_name

    if autoload:
        resolved = pkgutil.resolve_name(class_name)
    else:
        resolved = _resolve_loaded(class_name)
    if not isinstance(resolved, type):
        raise TypeError(f"{class_name!r} does not name a class")
    return resolved


def _resolve_loaded(class_name: str) -> Any:
    """Resolve a dotted name using only modules already in ``sys.modules``."""
    module_name, sep, qualname = class_name.partition(":")
    if sep:
        module = sys.modules.get(module_name)
        attrs = qualname.split(".")
    else:
        module, attrs = None, []
        parts = class_name.split(".")
        for i in range(len(parts) - 1, 0, -1):
            module = sys.modules.get(".".join(parts[:i]))
            if module is not None:
                attrs = parts[i:]
                break
        module_name = parts[0]
    if module is None:
        raise ModuleNotFoundError(
            f"Class {class_name!r} is not loaded and autoloading is disabled",
            name=module_name,
        )

    resolved = module
    for attr in attrs:
        resolved = getattr(resolved, attr)
    return resolved


def _mangled_names(cls: type, name: str) -> list[str]:
    if name.startswith("__") and name.endswith("__"):
        return []
    bare = name.lstrip("_")
    names = []
    for klass in cls.__mro__:
        owner = klass.__name__.lstrip("_")
        if owner:
            names.append(f"_{owner}__{bare}")
    return names


def _has_member(obj: Any, name: str) -> bool:
    return inspect.getattr_static(obj, name, _MISSING) is not _MISSING


def resolve_member_name(obj: Any, name: str) -> str | None:
    """Return the attribute name under which ``name`` is stored on ``obj``.

    Tries the name as given, then its mangled private form for each class in
    the MRO. Descriptors are not invoked while probing.
    """
    if _has_member(obj, name):
        return name
    owner = obj if isinstance(obj, type) else type(obj)
    for candidate in _mangled_names(owner, name):
        if _has_member(obj, candidate):
            return candidate
    return None


def _lookup_method(target: Any, method_name: str) -> Any:
    member = resolve_member_name(target, method_name)
    if member is None:
        raise AttributeError(
            f"{type(target).__name__!r} object has no method {method_name!r}",
            name=method_name,
            obj=target,
        )
    return getattr(target, member)


def invoke(target: Any, method_name: str, *args: Any, **kwargs: Any) -> Any:
    """Call a method of any visibility on ``target``."""
    return _lookup_method(target, method_name)(*args, **kwargs)


def invoke_with_refs(target: Any, method_name: str, *refs: Any) -> Any:
    """Call a method forwarding exactly the given arguments by identity.

    Nothing is copied and no placeholder is passed for arguments that were not
    supplied, so in-place mutations done by the callee are visible to the
    caller.
    """
    return _lookup_method(target, method_name)(*refs)


def _is_method(attr: Any) -> bool:
    # functions, static/class methods and stub descriptors
    return inspect.isfunction(attr) or inspect.ismethoddescriptor(attr)


def _instance_dict(obj: Any) -> dict:
    try:
        return vars(obj)
    except TypeError:
        return {}


def _holds_field(obj: Any, name: str) -> bool:
    if name in _instance_dict(obj):
        return True
    attr = inspect.getattr_static(type(obj), name, _MISSING)
    return attr is not _MISSING and not _is_method(attr)


def _assigned_attributes(func: types.FunctionType) -> set[str]:
    return {
        instruction.argval
        for instruction in dis.get_instructions(func)
        if instruction.opname == "STORE_ATTR"
    }


def declared_fields(cls: type) -> set[str]:
    """Attribute names declared anywhere in the MRO of ``cls``.

    A name counts as declared when a class annotates it or one of the class's
    own functions assigns it. Private names appear in their mangled form.
    """
    names: set[str] = set()
    for klass in cls.__mro__:
        if klass is object:
            continue
        names.update(inspect.get_annotations(klass))
        for member in vars(klass).values():
            if inspect.isfunction(member):
                names.update(_assigned_attributes(member))
    return names


def resolve_field_name(obj: Any, name: str) -> str | None:
    """Return the attribute name under which the field ``name`` lives on ``obj``.

    Candidates are the name as given followed by its mangled private forms.
    Methods are never returned. A candidate present on the instance wins over
    one that is only declared.
    """
    candidates = [name, *_mangled_names(type(obj), name)]
    for candidate in candidates:
        if _holds_field(obj, candidate):
            return candidate
    declared = declared_fields(type(obj))
    for candidate in candidates:
        if candidate in declared:
            return candidate
    return None


def _new_field_name(cls: type, name: str) -> str:
    """Storage name for a field nothing declares yet.

    ``"__x"`` becomes the mangled private name of the nearest class in the MRO
    that was not generated at runtime; any other name is kept as given.
    """
    if not name.startswith("__") or name.endswith("__"):
        return name
    owner = next(
        klass
        for klass in cls.__mro__
        if GENERATED_MARKER not in vars(klass) and klass is not AccessibleMixin
    )
    return f"_{owner.__name__.lstrip('_')}__{name.lstrip('_')}"


def read_field(target: Any, field_name: str) -> Any:
    member = resolve_field_name(target, field_name)
    if member is None:
        raise AttributeError(
            f"{type(target).__name__!r} object has no attribute {field_name!r}",
            name=field_name,
            obj=target,
        )
    return getattr(target, member)


def write_field(target: Any, field_name: str, value: Any) -> None:
    member = resolve_field_name(target, field_name)
    if member is None:
        member = _new_field_name(type(target), field_name)
    setattr(target, member, value)


class AccessibleMixin:
    """Adds visibility-ignoring accessors to a generated proxy class."""

    __slots__ = ()

    def call(self, method_name: str, *args: Any, **kwargs: Any) -> Any:
        return invoke(self, method_name, *args, **kwargs)

    def call_with_refs(self, method_name: str, *refs: Any) -> Any:
        return invoke_with_refs(self, method_name, *refs)

    def set_field(self, field_name: str, value: Any) -> None:
        write_field(self, field_name, value)

    def get_field(self, field_name: str) -> Any:
        return read_field(self, field_name)


class Accessor:
    """Visibility-ignoring view over an existing instance.

    Example:
        counter = Counter()
        Accessor(counter).call("_increment", 2)
        assert Accessor(counter).get_field("total") == 2
    """

    __slots__ = ("_target",)

    def __init__(self, target: Any):
        self._target = target

    @property
    def target(self) -> Any:
        return self._target

    def call(self, method_name: str, *args: Any, **kwargs: Any) -> Any:
        return invoke(self._target, method_name, *args, **kwargs)

    def call_with_refs(self, method_name: str, *refs: Any) -> Any:
        return invoke_with_refs(self._target, method_name, *refs)

    def set_field(self, field_name: str, value: Any) -> None:
        write_field(self._target, field_name, value)

    def get_field(self, field_name: str) -> Any:
        return read_field(self._target, field_name)

    def __repr__(self) -> str:
        return f"Accessor({self._target!r})"


def build_accessible_proxy(
    class_name: str | type,
    registry: ProxyRegistry | None = None,
    prefix: str = PROXY_CLASS_PREFIX,
    autoload: bool = True,
) -> type:
    """Create a new subclass of ``class_name`` mixing in ``AccessibleMixin``.

    A distinct class is created on every call. Abstract originals keep their
    abstract methods, so the proxy itself cannot be instantiated until a
    mocking layer stubs them.

    Returns:
        The generated proxy class
    """
    original = resolve_class(class_name, autoload=autoload)
    proxy_name = f"{prefix}{uuid.uuid4().hex}"

    def exec_body(namespace: dict) -> None:
        namespace["__module__"] = original.__module__
        namespace["__qualname__"] = proxy_name
        namespace[GENERATED_MARKER] = True

    proxy = types.new_class(proxy_name, (AccessibleMixin, original), exec_body=exec_body)

    if registry is not None:
        registry.register(proxy, original, PROXY)
    logger.debug(f"Built accessible proxy {proxy_name} for {original.__qualname__}")
    return proxy
