"""Authenticator — bearer token verification with PyJWT."""

import jwt
import pytest

from teamhub.core.errors import UnauthorizedError
from teamhub.infrastructure.authenticator import Authenticator

SECRET = "unit-test-secret-with-enough-entropy-0123"


@pytest.fixture
def authenticator():
    return Authenticator(SECRET)


def test_round_trip_identity(authenticator):
    token = authenticator.issue_token("user-1", "u@acme.io", "org-1")
    identity = authenticator.authenticate(f"Bearer {token}")
    assert identity.user_id == "user-1"
    assert identity.email == "u@acme.io"
    assert identity.organization_id == "org-1"


def test_token_without_organization(authenticator):
    token = authenticator.issue_token("user-1")
    assert authenticator.authenticate(f"Bearer {token}").organization_id is None


@pytest.mark.parametrize("header", [None, "", "Basic abc", "Bearer not-a-jwt"])
def test_malformed_headers_are_unauthorized(authenticator, header):
    with pytest.raises(UnauthorizedError):
        authenticator.authenticate(header)


def test_wrong_secret_is_rejected(authenticator):
    forged = jwt.encode({"sub": "user-1"}, "some-other-secret-of-sufficient-length-99", algorithm="HS256")
    with pytest.raises(UnauthorizedError):
        authenticator.authenticate(f"Bearer {forged}")


def test_unsigned_token_is_rejected(authenticator):
    unsigned = jwt.encode({"sub": "user-1", "organizationId": "org-1"}, None, algorithm="none")
    with pytest.raises(UnauthorizedError):
        authenticator.authenticate(f"Bearer {unsigned}")


def test_expired_token_is_rejected():
    short_lived = Authenticator(SECRET, expiry_minutes=-1)
    token = short_lived.issue_token("user-1")
    with pytest.raises(UnauthorizedError):
        short_lived.authenticate(f"Bearer {token}")


def test_missing_subject_is_rejected(authenticator):
    token = jwt.encode({"email": "x@y.io"}, SECRET, algorithm="HS256")
    with pytest.raises(UnauthorizedError):
        authenticator.authenticate(f"Bearer {token}")


def test_numeric_organization_claim_becomes_string(authenticator):
    token = jwt.encode({"sub": "user-1", "organizationId": 7}, SECRET, algorithm="HS256")
    identity = authenticator.authenticate(f"Bearer {token}")
    assert identity.organization_id == "7"
