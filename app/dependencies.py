from fastapi import Request

from app.core.security import api_key_from_headers, authenticate_request
from app.database.session import get_db


def require_auth(request: Request):
    return authenticate_request(api_key_from_headers(request.headers))


__all__ = ["get_db", "require_auth"]
