"""Unit tests for notion_api.auth module."""

from unittest.mock import patch

import pytest

from src.notion_api.auth import Authenticator
from src.notion_api.errors import MissingCredentialsError


class TestAuthenticator:
    """Test cases for Authenticator.get_credentials()."""

    @patch('src.notion_api.auth.load_dotenv')
    def test_token_from_environment(self, mock_load_dotenv, monkeypatch):
        monkeypatch.setenv("NOTION_API_KEY", "secret_abc")

        creds = Authenticator().get_credentials()

        assert creds.api_key == "secret_abc"
        mock_load_dotenv.assert_called_once()

    @patch('src.notion_api.auth.load_dotenv')
    def test_missing_token(self, mock_load_dotenv, monkeypatch):
        monkeypatch.delenv("NOTION_API_KEY", raising=False)

        with pytest.raises(MissingCredentialsError) as exc_info:
            Authenticator().get_credentials()

        assert str(exc_info.value) == "Missing NOTION_API_KEY environment variable."

    @patch('src.notion_api.auth.load_dotenv')
    def test_empty_token_is_missing(self, mock_load_dotenv, monkeypatch):
        monkeypatch.setenv("NOTION_API_KEY", "")

        with pytest.raises(MissingCredentialsError):
            Authenticator().get_credentials()
