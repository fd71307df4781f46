"""API Key Service — issue, list, read and revoke organization API keys.

Invariants:
    - The plaintext secret is returned exactly once, by create(); only its SHA-256
      hex digest and a 12-character display prefix are stored
    - Every read and revoke is tenant-checked: a key of another organization is
      NotFound, indistinguishable from an absent one
    - list_keys() returns only keys that are not revoked; get() also returns revoked keys
    - revoke() is idempotent: the first revocation timestamp is kept
"""

import hashlib
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from teamhub.core.entities import ApiKey
from teamhub.core.errors import NotFoundError, ValidationError
from teamhub.core.repository_protocols import ApiKeyRepository

logger = logging.getLogger(__name__)

KEY_SCHEME = "thub"
PREFIX_LENGTH = 12


def generate_api_key() -> str:
    return f"{KEY_SCHEME}_{secrets.token_urlsafe(32)}"


def hash_api_key(secret: str) -> str:
    return hashlib.sha256(secret.encode()).hexdigest()


@dataclass(frozen=True)
class IssuedApiKey:
    key: ApiKey
    secret: str


class ApiKeyService:

    def __init__(self, api_keys: ApiKeyRepository):
        self._api_keys = api_keys

    async def create(
        self, payload: dict[str, Any], organization_id: str, user_id: str,
    ) -> IssuedApiKey:
        name = (payload.get("name") or "").strip()
        if not name:
            raise ValidationError("API key name is required", field="name")

        secret = generate_api_key()
        key = await self._api_keys.insert({
            "organization_id": organization_id,
            "name": name,
            "hashed_key": hash_api_key(secret),
            "prefix": secret[:PREFIX_LENGTH],
            "created_by": user_id,
        })
        logger.info(
            f"API key created: {name}",
            extra={"organization_id": organization_id, "user_id": user_id,
                   "api_key_id": key.id},
        )
        return IssuedApiKey(key=key, secret=secret)

    async def list_keys(self, organization_id: str) -> list[ApiKey]:
        return await self._api_keys.list_active(organization_id)

    async def get(self, key_id: str, organization_id: str) -> ApiKey:
        key = await self._api_keys.get(key_id)
        if key is None or key.organization_id != organization_id:
            raise NotFoundError("API key not found")
        return key

    async def revoke(self, key_id: str, organization_id: str) -> None:
        key = await self.get(key_id, organization_id)
        if key.revoked_at is not None:
            return
        await self._api_keys.update(key_id, {"revoked_at": datetime.now(timezone.utc)})
        logger.info(
            "API key revoked",
            extra={"organization_id": organization_id, "api_key_id": key_id},
        )
