from __future__ import annotations

import hmac
from typing import Mapping, Optional

from fastapi import HTTPException, status

from app.config import get_settings


def _load_api_keys() -> set[str]:
    settings = get_settings()
    keys = set()
    if settings.API_KEYS:
        for value in settings.API_KEYS.split(","):
            value = value.strip()
            if value:
                keys.add(value)
    return keys


def api_key_from_headers(headers: Mapping[str, str]) -> Optional[str]:
    return headers.get(get_settings().API_KEY_HEADER)


def authenticate_request(api_key: Optional[str]) -> Optional[dict]:
    keys = _load_api_keys()
    if not keys:
        # No keys configured: local/open mode.
        return None

    if api_key and any(hmac.compare_digest(api_key, key) for key in keys):
        return {"auth_type": "api_key"}

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
    )
