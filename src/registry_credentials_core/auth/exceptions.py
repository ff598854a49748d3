"""Custom exceptions for registry credential discovery.

This module defines exceptions used throughout the credential retriever chain,
particularly for credential helper resolution errors.

Example:
    ```python
    from registry_credentials_core.auth.exceptions import CredentialHelperNotFoundError

    try:
        retrievers = DefaultCredentialRetrievers.init(factory).set_credential_helper("/opt/bin/helper").as_list()
    except CredentialHelperNotFoundError as e:
        print(f"Missing helper: {e.helper}")
    ```
"""


class CredentialError(Exception):
    """Base exception for credential-related errors.

    All credential-specific exceptions inherit from this class,
    making it easy to catch any credential-related error.
    """

    pass


class CredentialHelperNotFoundError(CredentialError):
    """Raised when a credential helper executable cannot be found.

    Raised while building the retriever list when the configured credential
    helper is a filesystem path and nothing exists there. Backends may also
    raise it when a helper named on the well-known table is not installed.

    Attributes:
        helper: The helper path or executable name that was looked up.

    Example:
        ```python
        try:
            retrievers = builder.as_list()
        except CredentialHelperNotFoundError as e:
            print(f"Credential helper missing: {e.helper}")
        ```
    """

    def __init__(self, message: str, helper: str | None = None):
        """Initialize CredentialHelperNotFoundError.

        Args:
            message: Error message describing which helper is missing.
            helper: Optional helper path or name for reference.
        """
        super().__init__(message)
        self.helper = helper


class CredentialRetrievalError(CredentialError):
    """Raised when a credential source exists but cannot be read.

    Backends raise this for malformed config files, failing helper processes
    and similar problems. Retrievers let it propagate to the caller.

    Attributes:
        source: Description of the source that failed (path or helper name).
    """

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source
