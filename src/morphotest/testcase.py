"""
MorphoTestCase

Mixin for test classes providing general helpers for fixtures, mocking and
access to non-public members. It defines no ``__init__``, so pytest collects
subclasses normally; it can also be combined with ``unittest.TestCase``.

Example:
    class TestParser(MorphoTestCase):
        def setup_method(self):
            self.set_fixture_base_path(os.path.dirname(__file__))

        def test_header(self):
            parser = self.get_accessible_mock(Parser, ["fetch"])
            parser.fetch.return_value = self.get_fixture_content("header.txt")
            assert parser.call("_parse_header") == {...}
"""

import os
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from dependency_injector import containers

from .container import ContainerFactory
from .exceptions import ConfigurationError
from .fixtures import FixtureLoader
from .injection import inject
from .mocking import build_mock, build_mock_for_abstract_class, create_muted
from .reflection import Accessor, build_accessible_proxy


class MorphoTestCase:
    """Provides general testing methods for mocking and fixtures."""

    fixture_base_path: str = ""

    def _morphotest_container(self) -> containers.DynamicContainer:
        return ContainerFactory.get_default_container()

    def set_fixture_base_path(self, fixture_base_path: str | os.PathLike) -> None:
        """Set the fixture base path for this test case instance.

        Call this from ``setup_method``. Once set it cannot be changed for
        the same instance.

        Raises:
            ConfigurationError: a different base path was already set
        """
        fixture_base_path = os.fspath(fixture_base_path)
        if self.fixture_base_path and self.fixture_base_path != fixture_base_path:
            raise ConfigurationError(
                f"Fixture base path is already set to {self.fixture_base_path!r}",
                fixture_base_path=self.fixture_base_path,
            )
        self.fixture_base_path = fixture_base_path

    def get_fixture_content(self, fixture: str) -> bytes:
        """Return the content of a fixture file relative to the base path.

        Without a base path of its own the test case uses the configured one
        (``MORPHOTEST_FIXTURE_BASE_PATH`` or the ``morphotest_fixture_base_path``
        ini option).
        """
        base_path = (
            self.fixture_base_path
            or self._morphotest_container().config.fixture_base_path()
            or ""
        )
        return FixtureLoader(base_path).load(fixture)

    def build_accessible_proxy(
        self, class_name: str | type, autoload: bool = True
    ) -> type:
        """Create a proxy subclass exposing protected and private members."""
        container = self._morphotest_container()
        return build_accessible_proxy(
            class_name,
            registry=container.proxy_registry(),
            prefix=container.config.proxy_class_prefix(),
            autoload=autoload,
        )

    def accessible(self, instance: Any) -> Accessor:
        """Visibility-ignoring accessor for an existing instance."""
        return Accessor(instance)

    def get_mock(
        self,
        original_class_name: str | type,
        methods: Iterable[str] | None = None,
        arguments: Mapping[str, Any] | None = None,
        mock_class_name: str = "",
        call_original_constructor: bool = True,
        call_original_clone: bool = True,
        call_autoload: bool = True,
    ) -> Any:
        container = self._morphotest_container()
        return build_mock(
            original_class_name,
            methods=methods,
            arguments=arguments,
            mock_class_name=mock_class_name,
            call_original_constructor=call_original_constructor,
            call_original_clone=call_original_clone,
            call_autoload=call_autoload,
            registry=container.proxy_registry(),
            prefix=container.config.mock_class_prefix(),
        )

    def get_mock_for_abstract_class(
        self,
        original_class_name: str | type,
        arguments: Sequence[Any] | None = None,
        mock_class_name: str = "",
        call_original_constructor: bool = True,
        call_original_clone: bool = True,
        call_autoload: bool = True,
    ) -> Any:
        container = self._morphotest_container()
        return build_mock_for_abstract_class(
            original_class_name,
            arguments=arguments,
            mock_class_name=mock_class_name,
            call_original_constructor=call_original_constructor,
            call_original_clone=call_original_clone,
            call_autoload=call_autoload,
            registry=container.proxy_registry(),
            prefix=container.config.mock_class_prefix(),
        )

    def get_accessible_mock(
        self,
        original_class_name: str | type,
        methods: Iterable[str] | None = None,
        arguments: Mapping[str, Any] | None = None,
        mock_class_name: str = "",
        call_original_constructor: bool = True,
        call_original_clone: bool = True,
        call_autoload: bool = True,
    ) -> Any:
        """Mock whose protected and private members can be called and accessed."""
        return self.get_mock(
            self.build_accessible_proxy(original_class_name, call_autoload),
            methods,
            arguments,
            mock_class_name,
            call_original_constructor,
            call_original_clone,
            call_autoload,
        )

    def get_accessible_mock_for_abstract_class(
        self,
        original_class_name: str | type,
        arguments: Sequence[Any] | None = None,
        mock_class_name: str = "",
        call_original_constructor: bool = True,
        call_original_clone: bool = True,
        call_autoload: bool = True,
    ) -> Any:
        """Accessible mock of an abstract class with its abstract methods stubbed."""
        return self.get_mock_for_abstract_class(
            self.build_accessible_proxy(original_class_name, call_autoload),
            arguments,
            mock_class_name,
            call_original_constructor,
            call_original_clone,
            call_autoload,
        )

    def inject(self, target: Any, name: str, dependency: Any) -> None:
        """Inject ``dependency`` into attribute ``name`` of ``target``."""
        inject(target, name, dependency)

    def get_muted_mock(self, class_name: str | type) -> Any:
        """Mock without side effects: the constructor never runs."""
        container = self._morphotest_container()
        return create_muted(
            class_name,
            registry=container.proxy_registry(),
            prefix=container.config.mock_class_prefix(),
        )
