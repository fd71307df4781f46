"""Authenticator — resolves a bearer token into a RequestIdentity.

Invariants:
    - Only tokens signed with the configured secret and algorithm are accepted;
      unsigned ("alg": "none") tokens are always rejected
    - sub is required; email and organizationId are optional claims
    - sub and organizationId are always strings on the identity, whatever JSON type
      the issuer used, so tenant comparisons against stored ids hold
    - Every failure surfaces as UnauthorizedError (401), never as a 500

Design Decisions:
    - PyJWT HS256: symmetric secret shared with the issuing identity service
    - issue_token() exists for tooling and tests; production tokens come from the IdP
"""

import logging
from datetime import datetime, timedelta, timezone

import jwt

from teamhub.core.domain_types import OrganizationId, UserId
from teamhub.core.errors import UnauthorizedError
from teamhub.core.identity import RequestIdentity

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class Authenticator:

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        issuer: str | None = None,
        expiry_minutes: int = 60,
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._issuer = issuer
        self._expiry = timedelta(minutes=expiry_minutes)

    def authenticate(self, authorization: str | None) -> RequestIdentity:
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            raise UnauthorizedError("Missing or invalid Authorization header")
        token = authorization[len(BEARER_PREFIX):].strip()

        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options={"require": ["sub"]},
            )
        except jwt.InvalidTokenError as e:
            logger.debug(f"Token rejected: {e}")
            raise UnauthorizedError("Invalid or expired token")

        identity = RequestIdentity(
            user_id=UserId(str(claims["sub"])),
            email=claims.get("email"),
            organization_id=(
                OrganizationId(str(claims["organizationId"]))
                if claims.get("organizationId") else None
            ),
        )
        logger.debug(
            "Authenticated request",
            extra={"user_id": identity.user_id,
                   "organization_id": identity.organization_id},
        )
        return identity

    def issue_token(
        self,
        user_id: str,
        email: str | None = None,
        organization_id: str | None = None,
    ) -> str:
        now = datetime.now(timezone.utc)
        payload = {"sub": user_id, "iat": now, "exp": now + self._expiry}
        if email:
            payload["email"] = email
        if organization_id:
            payload["organizationId"] = organization_id
        if self._issuer:
            payload["iss"] = self._issuer
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)
