"""Tests for token issuance and checking."""

import jwt
import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from solairdrop.api.auth import Auth
from solairdrop.errors import ConfigurationError


def test_round_trip():
    auth = Auth("secret")

    payload = auth.decode_token(auth.encode_token("ops", is_admin=True))

    assert payload["id"] == "ops"
    assert payload["admin"] is True
    assert payload["exp"] - payload["iat"] == 3600


def test_expired_token_rejected():
    auth = Auth("secret", exp_hours=-1)
    token = auth.encode_token("ops")

    with pytest.raises(HTTPException) as exc:
        auth.decode_token(token)
    assert exc.value.status_code == 401
    assert exc.value.detail == "Invalid or expired token"


def test_token_signed_with_other_secret_rejected():
    token = jwt.encode({"id": "ops"}, "other", algorithm="HS256")

    with pytest.raises(HTTPException):
        Auth("secret").decode_token(token)


def test_missing_credentials():
    with pytest.raises(HTTPException) as exc:
        Auth("secret").auth_wrapper(None)
    assert exc.value.detail == "Authentication required"


def test_wrapper_returns_payload():
    auth = Auth("secret")
    credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=auth.encode_token("ops"))

    assert auth.auth_wrapper(credentials)["id"] == "ops"


def test_missing_secret_is_configuration_error():
    with pytest.raises(ConfigurationError):
        Auth(None).encode_token("ops")
