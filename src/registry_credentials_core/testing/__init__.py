"""Testing utilities for code that discovers registry credentials.

Provides an in-memory ``CredentialBackend`` that records every lookup and a
helper for building ``SystemSnapshot`` objects.

Example:
    ```python
    from registry_credentials_core.auth import Credential, CredentialRetrieverFactory, DefaultCredentialRetrievers
    from registry_credentials_core.testing import RecordingBackend, make_snapshot


    def test_uses_docker_config():
        backend = RecordingBackend(config_credentials={"/home/u/.docker/config.json": Credential("u", "p")})
        factory = CredentialRetrieverFactory("registry.example.com", backend=backend)
        builder = DefaultCredentialRetrievers(factory, make_snapshot(HOME="/home/u"))
        ...
    ```
"""

from pathlib import Path

from registry_credentials_core.auth.credentials import Credential
from registry_credentials_core.auth.environment import OS_NAME_PROPERTY, USER_HOME_PROPERTY, SystemSnapshot
from registry_credentials_core.auth.exceptions import CredentialHelperNotFoundError


def make_snapshot(*, os_name: str = "Linux", user_home: str | None = None, **environment: str) -> SystemSnapshot:
    """Build a snapshot with the given environment variables and properties."""
    system_properties = {OS_NAME_PROPERTY: os_name}
    if user_home is not None:
        system_properties[USER_HOME_PROPERTY] = user_home
    return SystemSnapshot(environment=environment, system_properties=system_properties)


class RecordingBackend:
    """In-memory credential backend that records the lookups it receives.

    Args:
        helper_credentials: Helper executable name or path to credential.
        config_credentials: Config file path to credential.
        default_credential: Credential returned for application defaults.
        installed_helpers: Helpers that exist. Running any other helper raises
            ``CredentialHelperNotFoundError``. Defaults to the keys of
            ``helper_credentials``.

    Attributes:
        calls: ``(operation, source)`` tuples in call order.
    """

    def __init__(
        self,
        *,
        helper_credentials: dict[str, Credential] | None = None,
        config_credentials: dict[str | Path, Credential] | None = None,
        default_credential: Credential | None = None,
        installed_helpers: set[str] | None = None,
    ):
        self.helper_credentials = helper_credentials or {}
        self.config_credentials = {Path(k): v for k, v in (config_credentials or {}).items()}
        self.default_credential = default_credential
        self.installed_helpers = installed_helpers if installed_helpers is not None else set(self.helper_credentials)
        self.calls: list[tuple[str, str]] = []

    def run_credential_helper(self, helper: str, registry: str) -> Credential | None:
        self.calls.append(("helper", helper))
        if helper not in self.installed_helpers:
            raise CredentialHelperNotFoundError(f"Credential helper not installed: {helper}", helper=helper)
        return self.helper_credentials.get(helper)

    def read_docker_config(self, path: Path, registry: str, legacy: bool) -> Credential | None:
        self.calls.append(("legacy-config" if legacy else "config", str(path)))
        return self.config_credentials.get(Path(path))

    def application_default_credentials(self, registry: str) -> Credential | None:
        self.calls.append(("default", registry))
        return self.default_credential


__all__ = ["RecordingBackend", "make_snapshot"]
