"""Tests for the auth module."""

from unittest.mock import patch

import pytest
import requests

from wizishop_api_client import WiziShopClient
from wizishop_api_client.auth import authenticate, request_token
from wizishop_api_client.exceptions import AuthenticationError, MalformedCredentialError

pytestmark = pytest.mark.unit


@pytest.fixture
def mock_post():
    with patch("wizishop_api_client.auth.requests.post") as mock:
        yield mock


class TestRequestToken:
    """Tests for request_token."""

    def test_posts_credentials(self, mock_post, make_response, make_token, payload) -> None:
        token = make_token(payload)
        mock_post.return_value = make_response(200, {"token": token})

        credential = request_token("user", "secret")

        assert credential.token == token
        mock_post.assert_called_once_with(
            "https://api.wizishop.com/auth/login",
            json={"username": "user", "password": "secret"},
            timeout=None,
        )

    def test_custom_api_url(self, mock_post, make_response, make_token, payload) -> None:
        mock_post.return_value = make_response(200, {"token": make_token(payload)})

        request_token("user", "secret", api_url="http://localhost:8000/", timeout=3)

        assert mock_post.call_args.args == ("http://localhost:8000/auth/login",)
        assert mock_post.call_args.kwargs["timeout"] == 3

    def test_rejected_credentials(self, mock_post, make_response) -> None:
        response = make_response(401, {"message": "Bad credentials"})
        mock_post.return_value = response

        with pytest.raises(AuthenticationError) as exc_info:
            request_token("user", "wrong")

        assert exc_info.value.response is response
        assert exc_info.value.error_message == "Bad credentials"

    def test_connection_error(self, mock_post) -> None:
        mock_post.side_effect = requests.ConnectionError("Connection refused")

        with pytest.raises(AuthenticationError) as exc_info:
            request_token("user", "secret")

        assert exc_info.value.response is None
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)

    def test_missing_token(self, mock_post, make_response) -> None:
        mock_post.return_value = make_response(200, {"user": "user"})

        with pytest.raises(AuthenticationError, match="token"):
            request_token("user", "secret")

    def test_non_json_response(self, mock_post, make_response) -> None:
        mock_post.return_value = make_response(200, content=b"<html>", content_type="text/html")

        with pytest.raises(AuthenticationError):
            request_token("user", "secret")

    def test_malformed_token(self, mock_post, make_response) -> None:
        mock_post.return_value = make_response(200, {"token": "not-a-jwt"})

        with pytest.raises(MalformedCredentialError):
            request_token("user", "secret")

    @pytest.mark.parametrize("username, password", [("", "secret"), ("user", "")])
    def test_requires_username_and_password(self, mock_post, username, password) -> None:
        with pytest.raises(ValueError):
            request_token(username, password)

        mock_post.assert_not_called()


class TestAuthenticate:
    """Tests for authenticate."""

    def test_returns_client_for_shop(self, mock_post, make_response, make_token, payload) -> None:
        mock_post.return_value = make_response(200, {"token": make_token(payload)})

        client = authenticate("user", "secret", api_url="http://localhost:8000/")

        assert isinstance(client, WiziShopClient)
        assert client.base_url == "http://localhost:8000/v2/shops/131/"
        assert client.credential.shop_id == 131

    def test_passes_client_configuration(
        self, mock_post, make_response, make_token, payload
    ) -> None:
        mock_post.return_value = make_response(200, {"token": make_token(payload)})

        client = authenticate("user", "secret", not_found_as_empty=False, user_agent="app/1")

        assert client.not_found_as_empty is False
        assert client.user_agent == "app/1"
