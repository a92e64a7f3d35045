from flask import Blueprint, request, current_app
from flask_limiter.util import get_remote_address
from extensions import limiter
from app.version import API_PREFIX
from app.utils import (
    ok,
    error,
    transactional,
    create_access_token,
    create_refresh_token,
    decode_token,
    TokenError,
)
from app.utils.validation import validate_schema
from app.schemas.auth import RegisterRequest, LoginRequest, RefreshRequest
from app.services.users import register_user, authenticate, get_user


auth_bp = Blueprint("auth", __name__, url_prefix=f"{API_PREFIX}/auth")


def _token_pair(user_id):
    return {
        "access_token": create_access_token(user_id),
        "refresh_token": create_refresh_token(user_id),
        "expires_in": current_app.config["ACCESS_TOKEN_LIFETIME_MIN"] * 60,
    }


@auth_bp.route("/register", methods=["POST"])
@validate_schema(RegisterRequest)
def register():
    data: RegisterRequest = request.validated_data
    with transactional("Failed to register user"):
        user = register_user(data.email, data.password, data.first_name, data.last_name)
    return ok(user.to_dict(), "User registered", 201)


@auth_bp.route("/login", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["LOGIN_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many login attempts from this IP",
)
@validate_schema(LoginRequest)
def login():
    data: LoginRequest = request.validated_data
    user = authenticate(data.email, data.password)
    return ok({"user": user.to_dict(), **_token_pair(user.id)}, "Logged in")


@auth_bp.route("/refresh", methods=["POST"])
@validate_schema(RefreshRequest)
def refresh_tokens():
    data: RefreshRequest = request.validated_data
    try:
        payload = decode_token(data.refresh_token, expected_type="refresh")
    except TokenError as e:
        return error(str(e), status=401, code="unauthorized")

    user = get_user(payload["user_id"])
    if not user:
        return error("User no longer exists", status=401, code="unauthorized")
    return ok(_token_pair(user.id), "Tokens refreshed")
