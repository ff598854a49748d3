"""Registry credential model.

A credential is a username/password pair. Docker config files can also hold an
identity token, which is stored with the ``<token>`` marker as the username.

Security Considerations:
    - The password is excluded from ``repr()`` and never logged
"""

from dataclasses import dataclass, field

OAUTH2_TOKEN_USER_NAME = "<token>"


@dataclass(frozen=True)
class Credential:
    """Username and password (or token) for a container registry.

    Example:
        ```python
        credential = Credential("user", "s3cret")
        print(credential)  # Credential(username='user')
        ```
    """

    username: str
    password: str = field(repr=False)

    def is_oauth2_refresh_token(self) -> bool:
        """Check whether this credential carries an OAuth2 refresh token."""
        return self.username == OAUTH2_TOKEN_USER_NAME
