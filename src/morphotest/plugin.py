"""
pytest plugin for morphotest

Enable it from a ``conftest.py``::

    pytest_plugins = ["morphotest.plugin"]

Adds the ini option ``morphotest_fixture_base_path``, exposes the helpers as
fixtures and discards generated classes when the session finishes.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from dependency_injector import containers

from .container import ContainerFactory
from .fixtures import FixtureLoader
from .injection import inject
from .mocking import create_muted
from .reflection import Accessor, build_accessible_proxy
from .registry import ProxyRegistry


def pytest_addoption(parser):
    """Add the morphotest ini options."""
    parser.addini(
        "morphotest_fixture_base_path",
        help="Base directory for fixture files (relative to rootdir)",
        default="",
    )


def pytest_configure(config):
    """Make the ini fixture base path the default of every default container."""
    base_path = _configured_base_path(config)
    if base_path:
        ContainerFactory.set_default_settings({"fixture_base_path": base_path})
        ContainerFactory.reset_default_container()


def pytest_unconfigure(config):
    ContainerFactory.set_default_settings(None)


def pytest_sessionfinish(session, exitstatus):
    """Discard generated classes at the end of the session."""
    ContainerFactory.reset_default_container()


def _configured_base_path(pytestconfig) -> str:
    value = pytestconfig.getini("morphotest_fixture_base_path")
    if not value:
        return ""
    path = Path(value)
    if not path.is_absolute():
        path = Path(pytestconfig.rootpath) / path
    return str(path)


@pytest.fixture
def morphotest_container() -> containers.DynamicContainer:
    """The current default container."""
    return ContainerFactory.get_default_container()


@pytest.fixture
def proxy_registry(morphotest_container) -> ProxyRegistry:
    return morphotest_container.proxy_registry()


@pytest.fixture
def fixture_loader(morphotest_container) -> FixtureLoader:
    return morphotest_container.fixture_loader()


@pytest.fixture
def accessible_proxy(morphotest_container) -> Callable[[Any], type]:
    """Factory building accessible proxy classes registered for the session."""

    def _build(class_name) -> type:
        return build_accessible_proxy(
            class_name,
            registry=morphotest_container.proxy_registry(),
            prefix=morphotest_container.config.proxy_class_prefix(),
        )

    return _build


@pytest.fixture
def accessor() -> Callable[[Any], Accessor]:
    return Accessor


@pytest.fixture
def muted_mock(morphotest_container) -> Callable[[Any], Any]:
    """Factory for mocks whose constructor never runs."""

    def _create(class_name) -> Any:
        return create_muted(
            class_name,
            registry=morphotest_container.proxy_registry(),
            prefix=morphotest_container.config.mock_class_prefix(),
        )

    return _create


@pytest.fixture
def injector() -> Callable[[Any, str, Any], None]:
    return inject
