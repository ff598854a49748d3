"""Credential discovery for container registries.

This module provides:
- The default, ordered chain of credential retrievers (explicit values,
  credential helpers, podman and docker config files, platform fallbacks)
- A factory for individual retrievers backed by a pluggable backend
- An immutable snapshot of the environment used for discovery

Example:
    ```python
    from registry_credentials_core.auth import (
        CredentialRetrieverFactory,
        DefaultCredentialRetrievers,
        retrieve_first,
    )

    factory = CredentialRetrieverFactory("registry.example.com", backend=my_backend)
    credential = retrieve_first(DefaultCredentialRetrievers.init(factory).as_list())
    ```
"""

from registry_credentials_core.auth.credentials import Credential
from registry_credentials_core.auth.defaults import DefaultCredentialRetrievers
from registry_credentials_core.auth.environment import SystemSnapshot
from registry_credentials_core.auth.exceptions import (
    CredentialError,
    CredentialHelperNotFoundError,
    CredentialRetrievalError,
)
from registry_credentials_core.auth.retrievers import (
    CredentialBackend,
    CredentialRetriever,
    CredentialRetrieverFactory,
    RetrieverKind,
    retrieve_first,
)

__all__ = [
    "Credential",
    "CredentialBackend",
    "CredentialError",
    "CredentialHelperNotFoundError",
    "CredentialRetrievalError",
    "CredentialRetriever",
    "CredentialRetrieverFactory",
    "DefaultCredentialRetrievers",
    "RetrieverKind",
    "SystemSnapshot",
    "retrieve_first",
]
