"""
morphotest - reflection helpers for unit tests

Fixture loading, accessible proxies for protected and private members,
dependency injection into test subjects and muted mocks.
"""

import logging

from .config import ConfigLoader, LoggingConfig, MorphoTestConfig
from .container import ContainerFactory, MorphoContainer
from .exceptions import (
    ClassAlreadyExistsException,
    ConfigurationError,
    FixtureNotFoundException,
    InjectionUnsupportedException,
    InvalidTargetException,
    MorphoTestException,
)
from .fixtures import FixtureLoader, normalize_fixture_path
from .injection import inject
from .mocking import (
    StubbedMethod,
    build_mock,
    build_mock_for_abstract_class,
    create_muted,
)
from .reflection import (
    AccessibleMixin,
    Accessor,
    build_accessible_proxy,
    resolve_class,
)
from .registry import GeneratedClass, ProxyRegistry
from .testcase import MorphoTestCase

logger = logging.getLogger("morphotest")

__version__ = "0.1.0"
__all__ = [
    # Test case API
    "MorphoTestCase",
    # Reflection
    "AccessibleMixin",
    "Accessor",
    "build_accessible_proxy",
    "resolve_class",
    # Mocking
    "StubbedMethod",
    "build_mock",
    "build_mock_for_abstract_class",
    "create_muted",
    # Fixtures
    "FixtureLoader",
    "normalize_fixture_path",
    # Injection
    "inject",
    # Registry and container
    "GeneratedClass",
    "ProxyRegistry",
    "MorphoContainer",
    "ContainerFactory",
    # Configuration
    "ConfigLoader",
    "LoggingConfig",
    "MorphoTestConfig",
    # Exceptions
    "MorphoTestException",
    "ConfigurationError",
    "FixtureNotFoundException",
    "InvalidTargetException",
    "InjectionUnsupportedException",
    "ClassAlreadyExistsException",
]
