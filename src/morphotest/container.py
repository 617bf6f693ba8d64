"""
morphotest Dependency Injection Container

The ``MorphoContainer`` holds the session-wide services used by the test
helpers: the validated configuration, the registry of generated classes, the
fixture loader factory and the package logger. ``ContainerFactory`` creates
containers and keeps the default one used by ``MorphoTestCase``.
"""

import logging
from pathlib import Path
from typing import Any

from dependency_injector import containers, providers

from .config import ConfigLoader, MorphoTestConfig
from .fixtures import FixtureLoader
from .registry import ProxyRegistry

logger = logging.getLogger("morphotest.container")


class MorphoContainer(containers.DeclarativeContainer):
    """Session container for morphotest services."""

    config = providers.Configuration()

    proxy_registry = providers.Singleton(ProxyRegistry)

    fixture_loader = providers.Factory(
        FixtureLoader,
        base_path=config.fixture_base_path,
    )

    morphotest_logger = providers.Singleton(
        logging.getLogger,
        name="morphotest",
    )

    @classmethod
    def configure_logging_for_instance(cls, container) -> None:
        """Apply the logging section of the configuration to the package logger."""
        log_config = container.config.logging()
        package_logger = container.morphotest_logger()

        package_logger.setLevel(getattr(logging, log_config["level"]))

        handlers = log_config.get("handlers") or []
        if not handlers:
            return

        package_logger.handlers.clear()
        formatter = logging.Formatter(log_config.get("format"))

        if "console" in handlers:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            package_logger.addHandler(console_handler)

        if "file" in handlers and log_config.get("file_path"):
            file_handler = logging.FileHandler(log_config["file_path"])
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)


class ContainerFactory:
    """Creates ``MorphoContainer`` instances and manages the default one.

    Instantiating a ``DeclarativeContainer`` returns a ``DynamicContainer``
    carrying the declared providers, hence the return annotations.
    """

    _default_container: containers.DynamicContainer | None = None
    _default_settings: dict[str, Any] = {}

    @classmethod
    def create_container(
        cls,
        config: MorphoTestConfig | None = None,
        config_file: str | Path | None = None,
        defaults: dict[str, Any] | None = None,
        **overrides,
    ) -> containers.DynamicContainer:
        """
        Create a new container.

        Args:
            config: Pre-built configuration; sources are ignored when given
            config_file: Optional JSON configuration file
            defaults: Lowest-priority values, e.g. from the pytest ini file
            **overrides: Configuration values taking precedence over everything

        Raises:
            ConfigurationError: If configuration loading or validation fails
        """
        if config is None:
            loader = ConfigLoader()
            if defaults:
                loader.add_dict_source(defaults)
            if config_file is not None:
                loader.add_file_source(config_file, required=True)
            config = loader.add_env_source().add_dict_source(overrides).load()

        container = MorphoContainer()
        container.config.from_dict(config.dict_for_container())
        MorphoContainer.configure_logging_for_instance(container)

        logger.debug("Created MorphoContainer")
        return container

    @classmethod
    def get_default_container(cls) -> containers.DynamicContainer:
        if cls._default_container is None:
            cls._default_container = cls.create_container(defaults=cls._default_settings)
        return cls._default_container

    @classmethod
    def set_default_container(cls, container: containers.DynamicContainer) -> None:
        cls._default_container = container

    @classmethod
    def set_default_settings(cls, settings: dict[str, Any] | None) -> None:
        """Set the lowest-priority configuration of future default containers."""
        cls._default_settings = dict(settings or {})

    @classmethod
    def reset_default_container(cls) -> None:
        """Discard the default container and everything its registry holds."""
        container = cls._default_container
        cls._default_container = None
        if container is not None:
            container.proxy_registry().clear()
            container.proxy_registry.reset()
            logger.debug("Reset default MorphoContainer")
