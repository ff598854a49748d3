"""Default chain of credential retrievers for a container registry.

Builds the ordered list of places to look for registry credentials, following
the precedence used by docker and podman.

Retrieval order (first checked to last checked):
1. Known credential, if set
2. Credential helper, if set (by path, or by ``docker-credential-<suffix>``)
3. Inferred credential, if set
4. ``$XDG_RUNTIME_DIR/containers/auth.json``
5. ``$XDG_CONFIG_HOME/containers/auth.json``
6. ``<user.home>/.config/containers/auth.json``
7. ``$HOME/.config/containers/auth.json``
8. ``config.json``, ``.dockerconfigjson`` and ``.dockercfg`` under
   ``$DOCKER_CONFIG``, ``<user.home>/.docker`` and ``$HOME/.docker``
9. Well-known credential helper for the registry
10. Application default credentials

Duplicate config file paths are listed once, at their first position.

Example:
    ```python
    from registry_credentials_core.auth import (
        Credential,
        CredentialRetrieverFactory,
        DefaultCredentialRetrievers,
        retrieve_first,
    )

    factory = CredentialRetrieverFactory("gcr.io", backend=my_backend)
    retrievers = (
        DefaultCredentialRetrievers.init(factory)
        .set_known_credential(Credential("user", "pass"), "--password flag")
        .set_credential_helper("gcr")
        .as_list()
    )
    credential = retrieve_first(retrievers)
    ```
"""

import logging
import os
from pathlib import Path

from registry_credentials_core.auth.credentials import Credential
from registry_credentials_core.auth.environment import SystemSnapshot
from registry_credentials_core.auth.exceptions import CredentialHelperNotFoundError
from registry_credentials_core.auth.retrievers import (
    CREDENTIAL_HELPER_PREFIX,
    CredentialRetriever,
    CredentialRetrieverFactory,
)

logger = logging.getLogger(__name__)

DOCKER_CONFIG_FILE = "config.json"
# Kubernetes image pull secrets
KUBERNETES_DOCKER_CONFIG_FILE = ".dockerconfigjson"
LEGACY_DOCKER_CONFIG_FILE = ".dockercfg"
# Podman, see containers-auth.json(5)
XDG_AUTH_FILE = Path("containers", "auth.json")

WINDOWS_EXECUTABLE_SUFFIXES = (".cmd", ".exe")


class DefaultCredentialRetrievers:
    """Generate the default list of credential retrievers.

    Configure explicit sources with the setters, then call ``as_list()``.
    A builder is meant for a single authentication attempt and is not safe to
    configure from several threads.

    Args:
        factory: Creates the retrievers placed in the list.
        snapshot: Environment variables and system properties used to
            discover config file locations.
    """

    def __init__(self, factory: CredentialRetrieverFactory, snapshot: SystemSnapshot):
        self._factory = factory
        self._snapshot = snapshot
        self._known_credential_retriever: CredentialRetriever | None = None
        self._inferred_credential_retriever: CredentialRetriever | None = None
        self._credential_helper: str | None = None

    @classmethod
    def init(cls, factory: CredentialRetrieverFactory) -> "DefaultCredentialRetrievers":
        """Create a builder over a snapshot of the running process."""
        return cls(factory, SystemSnapshot.from_process())

    def set_known_credential(self, credential: Credential, source: str) -> "DefaultCredentialRetrievers":
        """Set the known credential, tried before everything else.

        Args:
            credential: The known credential.
            source: Where the credential came from (for logging).

        Returns:
            This builder.
        """
        self._known_credential_retriever = self._factory.known(credential, source)
        return self

    def set_inferred_credential(self, credential: Credential, source: str) -> "DefaultCredentialRetrievers":
        """Set the inferred credential, tried after the credential helper.

        Args:
            credential: The inferred credential.
            source: Where the credential came from (for logging).

        Returns:
            This builder.
        """
        self._inferred_credential_retriever = self._factory.known(credential, source)
        return self

    def set_credential_helper(self, credential_helper: str | None) -> "DefaultCredentialRetrievers":
        """Set the credential helper.

        Args:
            credential_helper: Path to a credential helper executable, or a
                credential helper suffix (following ``docker-credential-``).
                None clears a previously set helper.

        Returns:
            This builder.
        """
        self._credential_helper = credential_helper
        return self

    def as_list(self) -> list[CredentialRetriever]:
        """Make the list of credential retrievers.

        Returns:
            Retrievers in the order they should be tried. Never empty.

        Raises:
            CredentialHelperNotFoundError: If the credential helper is a path
                and no file exists there.
        """
        retrievers: list[CredentialRetriever] = []

        if self._known_credential_retriever is not None:
            retrievers.append(self._known_credential_retriever)

        if self._credential_helper is not None:
            retrievers.append(self._credential_helper_retriever(self._credential_helper))

        if self._inferred_credential_retriever is not None:
            retrievers.append(self._inferred_credential_retriever)

        for path in self._docker_config_files():
            if path.name == LEGACY_DOCKER_CONFIG_FILE:
                retrievers.append(self._factory.legacy_docker_config(path))
            else:
                retrievers.append(self._factory.docker_config(path))

        retrievers.append(self._factory.well_known_credential_helpers())
        retrievers.append(self._factory.application_default_credentials())
        return retrievers

    def _credential_helper_retriever(self, credential_helper: str) -> CredentialRetriever:
        # Anything containing a path separator is a path, otherwise a suffix
        if os.sep not in credential_helper:
            logger.debug(f"Treating credential helper '{credential_helper}' as a helper suffix")
            return self._factory.docker_credential_helper(CREDENTIAL_HELPER_PREFIX + credential_helper)

        if not self._helper_exists(credential_helper):
            raise CredentialHelperNotFoundError(
                f"Specified credential helper was not found: {credential_helper}",
                helper=credential_helper,
            )
        logger.debug(f"Treating credential helper '{credential_helper}' as a path")
        return self._factory.docker_credential_helper_at_path(credential_helper)

    def _helper_exists(self, credential_helper: str) -> bool:
        if Path(credential_helper).exists():
            return True
        if not self._snapshot.is_windows:
            return False
        return any(Path(credential_helper + suffix).exists() for suffix in WINDOWS_EXECUTABLE_SUFFIXES)

    def _docker_config_files(self) -> list[Path]:
        """Discover candidate config files, deduplicated in discovery order."""
        # dict keys keep insertion order and drop later duplicates
        config_files: dict[Path, None] = {}

        xdg_runtime_dir = self._snapshot.env("XDG_RUNTIME_DIR")
        if xdg_runtime_dir is not None:
            config_files.setdefault(Path(xdg_runtime_dir) / XDG_AUTH_FILE)

        xdg_config_home = self._snapshot.env("XDG_CONFIG_HOME")
        if xdg_config_home is not None:
            config_files.setdefault(Path(xdg_config_home) / XDG_AUTH_FILE)

        home_property = self._snapshot.user_home
        if home_property is not None:
            config_files.setdefault(Path(home_property) / ".config" / XDG_AUTH_FILE)

        home_env = self._snapshot.env("HOME")
        if home_env is not None:
            config_files.setdefault(Path(home_env) / ".config" / XDG_AUTH_FILE)

        docker_config_dirs = [
            Path(directory) / subdirectory
            for directory, subdirectory in (
                (self._snapshot.env("DOCKER_CONFIG"), ""),
                (home_property, ".docker"),
                (home_env, ".docker"),
            )
            if directory is not None
        ]
        for config_dir in docker_config_dirs:
            for path in _docker_files(config_dir):
                config_files.setdefault(path)

        logger.debug(f"Discovered {len(config_files)} candidate docker config file(s)")
        return list(config_files)


def _docker_files(config_dir: Path) -> list[Path]:
    return [
        config_dir / DOCKER_CONFIG_FILE,
        config_dir / KUBERNETES_DOCKER_CONFIG_FILE,
        config_dir / LEGACY_DOCKER_CONFIG_FILE,
    ]
