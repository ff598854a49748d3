"""Registry Credentials Core - credential discovery for container registries.

This library works out where registry credentials should be looked up, in the
order docker and podman look for them:
- Explicit credentials and credential helpers
- Podman ``containers/auth.json`` under the XDG directories
- Docker ``config.json``, ``.dockerconfigjson`` and ``.dockercfg`` files
- Well-known credential helpers and application default credentials

Example:
    ```python
    from registry_credentials_core.auth import (
        CredentialRetrieverFactory,
        DefaultCredentialRetrievers,
        retrieve_first,
    )

    factory = CredentialRetrieverFactory("gcr.io", backend=my_backend)
    retrievers = DefaultCredentialRetrievers.init(factory).set_credential_helper("gcr").as_list()
    credential = retrieve_first(retrievers)
    ```
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
