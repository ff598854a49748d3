"""Credential retrievers and the factory that creates them.

A credential retriever attempts to produce a registry credential from one
source: a fixed value, a credential helper, a docker config file, or a
platform default. Retrievers only describe *where* to look; reading config
files, running helper executables and discovering application default
credentials is delegated to a ``CredentialBackend`` supplied by the caller.

Example:
    ```python
    from registry_credentials_core.auth import CredentialRetrieverFactory

    factory = CredentialRetrieverFactory("gcr.io", backend=my_backend)

    retriever = factory.docker_config(Path.home() / ".docker" / "config.json")
    credential = retriever.retrieve()
    ```
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

from registry_credentials_core.auth.credentials import Credential
from registry_credentials_core.auth.exceptions import CredentialHelperNotFoundError

logger = logging.getLogger(__name__)

CREDENTIAL_HELPER_PREFIX = "docker-credential-"

# Registry hostname suffix -> credential helper executable
WELL_KNOWN_CREDENTIAL_HELPERS: dict[str, str] = {
    "gcr.io": "docker-credential-gcr",
    "pkg.dev": "docker-credential-gcr",
    "amazonaws.com": "docker-credential-ecr-login",
    "azurecr.io": "docker-credential-acr-env",
}


class RetrieverKind(str, Enum):
    """Source type a credential retriever reads from."""

    KNOWN = "known"
    HELPER_AT_PATH = "helper-at-path"
    HELPER_BY_NAME = "helper-by-name"
    DOCKER_CONFIG = "docker-config"
    LEGACY_DOCKER_CONFIG = "legacy-docker-config"
    WELL_KNOWN_HELPERS = "well-known-helpers"
    APPLICATION_DEFAULT = "application-default"


class CredentialBackend(Protocol):
    """External collaborator that performs the actual credential lookups.

    Implementations raise ``CredentialRetrievalError`` when a source exists but
    cannot be read, and ``CredentialHelperNotFoundError`` when a helper
    executable is not installed. Returning None means "no credential here".
    """

    def run_credential_helper(self, helper: str, registry: str) -> Credential | None: ...

    def read_docker_config(self, path: Path, registry: str, legacy: bool) -> Credential | None: ...

    def application_default_credentials(self, registry: str) -> Credential | None: ...


class CredentialRetriever(ABC):
    """Attempts to produce a credential from a single source."""

    @property
    @abstractmethod
    def kind(self) -> RetrieverKind:
        """Source type of this retriever."""

    @abstractmethod
    def retrieve(self) -> Credential | None:
        """Retrieve a credential.

        Returns:
            The credential, or None if this source has none.

        Raises:
            CredentialRetrievalError: If the source exists but cannot be read.
        """


@dataclass(frozen=True)
class KnownCredentialRetriever(CredentialRetriever):
    """Returns a fixed credential.

    Attributes:
        credential: The credential to return.
        source: Where the credential came from (for logging only).
    """

    credential: Credential
    source: str

    @property
    def kind(self) -> RetrieverKind:
        return RetrieverKind.KNOWN

    def retrieve(self) -> Credential | None:
        logger.info(f"Using credentials from {self.source}")
        return self.credential


@dataclass(frozen=True)
class _BackendRetriever(CredentialRetriever):
    registry: str
    backend: CredentialBackend | None

    def _missing_backend(self, description: str) -> None:
        logger.debug(f"No credential backend configured, skipping {description}")


@dataclass(frozen=True)
class CredentialHelperRetriever(_BackendRetriever):
    """Runs a credential helper, given by executable name or by path."""

    helper: str
    at_path: bool = False

    @property
    def kind(self) -> RetrieverKind:
        return RetrieverKind.HELPER_AT_PATH if self.at_path else RetrieverKind.HELPER_BY_NAME

    def retrieve(self) -> Credential | None:
        if self.backend is None:
            self._missing_backend(f"credential helper {self.helper}")
            return None

        credential = self.backend.run_credential_helper(self.helper, self.registry)
        if credential is not None:
            logger.info(f"Using credential helper {self.helper} for {self.registry}")
        return credential


@dataclass(frozen=True)
class DockerConfigRetriever(_BackendRetriever):
    """Reads a docker config file.

    The standard format nests credentials under ``auths`` by registry; the
    legacy ``.dockercfg`` format maps registries to credentials at the top
    level.
    """

    path: Path
    legacy: bool = False

    @property
    def kind(self) -> RetrieverKind:
        return RetrieverKind.LEGACY_DOCKER_CONFIG if self.legacy else RetrieverKind.DOCKER_CONFIG

    def retrieve(self) -> Credential | None:
        if self.backend is None:
            self._missing_backend(f"docker config {self.path}")
            return None

        credential = self.backend.read_docker_config(self.path, self.registry, self.legacy)
        if credential is not None:
            logger.info(f"Using credentials from {self.path} for {self.registry}")
        return credential


@dataclass(frozen=True)
class WellKnownCredentialHelpersRetriever(_BackendRetriever):
    """Runs the platform credential helper registered for the registry's host."""

    @property
    def kind(self) -> RetrieverKind:
        return RetrieverKind.WELL_KNOWN_HELPERS

    def helper_for_registry(self) -> str | None:
        """Return the well-known helper for this registry, if any."""
        for suffix, helper in WELL_KNOWN_CREDENTIAL_HELPERS.items():
            if self.registry == suffix or self.registry.endswith("." + suffix):
                return helper
        return None

    def retrieve(self) -> Credential | None:
        helper = self.helper_for_registry()
        if helper is None:
            return None
        if self.backend is None:
            self._missing_backend(f"well-known credential helper {helper}")
            return None

        try:
            credential = self.backend.run_credential_helper(helper, self.registry)
        except CredentialHelperNotFoundError:
            logger.debug(f"Well-known credential helper {helper} is not installed")
            return None

        if credential is not None:
            logger.info(f"Using credential helper {helper} for {self.registry}")
        return credential


@dataclass(frozen=True)
class ApplicationDefaultCredentialsRetriever(_BackendRetriever):
    """Falls back to platform application default credentials."""

    @property
    def kind(self) -> RetrieverKind:
        return RetrieverKind.APPLICATION_DEFAULT

    def retrieve(self) -> Credential | None:
        if self.backend is None:
            self._missing_backend("application default credentials")
            return None

        credential = self.backend.application_default_credentials(self.registry)
        if credential is not None:
            logger.info(f"Using application default credentials for {self.registry}")
        return credential


class CredentialRetrieverFactory:
    """Create credential retrievers for a single registry.

    Factory methods are plain constructors and perform no I/O.

    Args:
        registry: Registry hostname credentials are looked up for.
        backend: Performs helper execution, config file reading and default
            credential discovery. Without one, only known credentials resolve.
    """

    def __init__(self, registry: str, backend: CredentialBackend | None = None):
        self.registry = registry
        self.backend = backend

    def known(self, credential: Credential, source: str) -> CredentialRetriever:
        return KnownCredentialRetriever(credential, source)

    def docker_credential_helper(self, name: str) -> CredentialRetriever:
        """Create a retriever for a helper executable found on the PATH."""
        return CredentialHelperRetriever(self.registry, self.backend, name)

    def docker_credential_helper_at_path(self, path: str | Path) -> CredentialRetriever:
        """Create a retriever for a helper executable at an explicit path."""
        return CredentialHelperRetriever(self.registry, self.backend, str(path), at_path=True)

    def docker_config(self, path: Path) -> CredentialRetriever:
        return DockerConfigRetriever(self.registry, self.backend, Path(path))

    def legacy_docker_config(self, path: Path) -> CredentialRetriever:
        return DockerConfigRetriever(self.registry, self.backend, Path(path), legacy=True)

    def well_known_credential_helpers(self) -> CredentialRetriever:
        return WellKnownCredentialHelpersRetriever(self.registry, self.backend)

    def application_default_credentials(self) -> CredentialRetriever:
        return ApplicationDefaultCredentialsRetriever(self.registry, self.backend)


def retrieve_first(retrievers: Iterable[CredentialRetriever]) -> Credential | None:
    """Return the first credential produced by a chain of retrievers.

    Retrievers are tried in order and the chain stops at the first one that
    returns a credential. Errors raised by a retriever propagate.

    Args:
        retrievers: Retrievers in priority order, e.g. from
            ``DefaultCredentialRetrievers.as_list()``.

    Returns:
        The first credential found, or None if no retriever produced one.
    """
    for retriever in retrievers:
        credential = retriever.retrieve()
        if credential is not None:
            logger.debug(f"Credential retrieved by {retriever.kind.value} retriever")
            return credential
    logger.debug("No credential retriever produced a credential")
    return None
