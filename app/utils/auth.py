from functools import wraps
from flask import request, g
from .responses import error
from .jwt import decode_token, TokenError


def bearer_token():
    auth = request.headers.get("Authorization", "")
    if not auth:
        return None
    return auth.split(" ", 1)[1] if auth.startswith("Bearer ") else auth


def auth_required(func):
    """Resolve the caller from the bearer token into ``g.user_id``."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        token = bearer_token()
        if not token:
            return error("Auth header missing", status=401, code="unauthorized")
        try:
            payload = decode_token(token, expected_type="access")
        except TokenError as e:
            return error(str(e), status=401, code="unauthorized")

        g.user_id = payload["user_id"]
        return func(*args, **kwargs)

    return wrapper
