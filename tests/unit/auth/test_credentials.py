"""Tests for the registry credential model."""

import dataclasses

import pytest

from registry_credentials_core.auth import Credential
from registry_credentials_core.auth.credentials import OAUTH2_TOKEN_USER_NAME


class TestCredential:
    """Test Credential value semantics."""

    def test_fields(self):
        """Test that username and password are stored."""
        credential = Credential("user", "pass")

        assert credential.username == "user"
        assert credential.password == "pass"

    def test_equality(self):
        """Test that credentials compare by value."""
        assert Credential("user", "pass") == Credential("user", "pass")
        assert Credential("user", "pass") != Credential("user", "other")

    def test_is_immutable(self):
        """Test that credentials cannot be modified."""
        credential = Credential("user", "pass")

        with pytest.raises(dataclasses.FrozenInstanceError):
            credential.password = "changed"


class TestCredentialMasking:
    """Test that passwords do not leak through repr."""

    def test_password_not_in_repr(self):
        """Test that repr shows the username only."""
        credential = Credential("user", "super-secret-key-123")

        assert "super-secret-key-123" not in repr(credential)
        assert "user" in repr(credential)


class TestOAuth2RefreshToken:
    """Test identity token detection."""

    def test_token_marker_username(self):
        """Test that the <token> username marks a refresh token."""
        assert Credential(OAUTH2_TOKEN_USER_NAME, "refresh-token").is_oauth2_refresh_token()

    def test_regular_username(self):
        """Test that ordinary usernames are not refresh tokens."""
        assert not Credential("user", "pass").is_oauth2_refresh_token()
