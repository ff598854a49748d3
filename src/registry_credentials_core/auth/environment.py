"""Immutable snapshot of the environment used for credential discovery.

Credential discovery depends on process-wide state: environment variables such
as ``HOME`` and ``DOCKER_CONFIG``, the user's home directory and the operating
system name. ``SystemSnapshot`` captures that state once so that a retriever
chain is built from a fixed view of it.

Example:
    ```python
    from registry_credentials_core.auth import SystemSnapshot

    # Capture the running process
    snapshot = SystemSnapshot.from_process()

    # Or build one explicitly (useful for testing)
    snapshot = SystemSnapshot(
        environment={"HOME": "/home/u"},
        system_properties={"os.name": "Linux"},
    )
    ```
"""

import logging
import os
import platform
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

OS_NAME_PROPERTY = "os.name"
USER_HOME_PROPERTY = "user.home"


def _freeze(values: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(values or {}))


@dataclass(frozen=True)
class SystemSnapshot:
    """Read-only view of environment variables and system properties.

    Attributes:
        environment: Environment variable name to value.
        system_properties: System property name to value. The properties
            consulted are ``os.name`` and ``user.home``.
    """

    environment: Mapping[str, str] = field(default_factory=dict)
    system_properties: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Copy so later changes to the caller's dicts are not observed
        object.__setattr__(self, "environment", _freeze(self.environment))
        object.__setattr__(self, "system_properties", _freeze(self.system_properties))

    @classmethod
    def from_process(
        cls,
        *,
        dotenv_path: str | Path | None = None,
        load_dotenv: bool = False,
    ) -> "SystemSnapshot":
        """Capture the current process environment.

        Args:
            dotenv_path: Path to a .env file. If None, python-dotenv searches
                parent directories for one.
            load_dotenv: Whether to read a .env file. Values from the process
                environment take precedence over values from the file.

        Returns:
            A snapshot of ``os.environ`` plus the ``os.name`` and ``user.home``
            system properties.
        """
        environment: dict[str, str] = {}
        if load_dotenv:
            file_values = dotenv_values(dotenv_path=dotenv_path)
            environment.update({k: v for k, v in file_values.items() if v is not None})
            logger.debug(f"Loaded {len(environment)} value(s) from .env file")
        environment.update(os.environ)

        system_properties = {OS_NAME_PROPERTY: platform.system()}
        home = os.path.expanduser("~")
        if home != "~":
            system_properties[USER_HOME_PROPERTY] = home

        return cls(environment=environment, system_properties=system_properties)

    def env(self, name: str) -> str | None:
        """Return an environment variable, or None if it is not set."""
        return self.environment.get(name)

    def get_property(self, name: str) -> str | None:
        """Return a system property, or None if it is not set."""
        return self.system_properties.get(name)

    @property
    def os_name(self) -> str:
        return self.system_properties.get(OS_NAME_PROPERTY, "")

    @property
    def user_home(self) -> str | None:
        return self.get_property(USER_HOME_PROPERTY)

    @property
    def is_windows(self) -> bool:
        """Whether the ``os.name`` property names a Windows system."""
        return "windows" in self.os_name.lower()
