import hashlib
import uuid
from datetime import datetime, timedelta, timezone

import jwt
from django.conf import settings
from django.core.cache import cache

from ultmt.constants.messages import AuthErrorMessages
from ultmt.exceptions.auth_exceptions import (
    RefreshTokenExpiredError,
    TokenExpiredError,
    TokenInvalidError,
)

TOKEN_ISSUER = "ultmt-auth"
BLACKLIST_KEY_PREFIX = "blacklisted-token:"


def _generate_token(user_id: str, token_type: str, lifetime: int) -> str:
    now = datetime.now(timezone.utc)
    expiry = now + timedelta(seconds=lifetime)
    payload = {
        "iss": TOKEN_ISSUER,
        "exp": int(expiry.timestamp()),
        "iat": int(now.timestamp()),
        "sub": user_id,
        "user_id": user_id,
        "token_type": token_type,
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(
        payload=payload,
        key=settings.JWT_CONFIG.get("PRIVATE_KEY"),
        algorithm=settings.JWT_CONFIG.get("ALGORITHM"),
    )


def generate_access_token(user_id: str) -> str:
    return _generate_token(user_id, "access", settings.JWT_CONFIG.get("ACCESS_TOKEN_LIFETIME"))


def generate_refresh_token(user_id: str) -> str:
    return _generate_token(user_id, "refresh", settings.JWT_CONFIG.get("REFRESH_TOKEN_LIFETIME"))


def _decode(token: str) -> dict:
    return jwt.decode(
        jwt=token,
        key=settings.JWT_CONFIG.get("PUBLIC_KEY"),
        algorithms=[settings.JWT_CONFIG.get("ALGORITHM")],
    )


def validate_access_token(token: str) -> dict:
    if is_token_blacklisted(token):
        raise TokenInvalidError(AuthErrorMessages.TOKEN_BLACKLISTED)
    try:
        payload = _decode(token)
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError()
    except jwt.InvalidTokenError as e:
        raise TokenInvalidError(f"Invalid token: {str(e)}")

    if payload.get("token_type") != "access":
        raise TokenInvalidError(AuthErrorMessages.TOKEN_INVALID)
    return payload


def validate_refresh_token(token: str) -> dict:
    if is_token_blacklisted(token):
        raise TokenInvalidError(AuthErrorMessages.TOKEN_BLACKLISTED)
    try:
        payload = _decode(token)
    except jwt.ExpiredSignatureError:
        raise RefreshTokenExpiredError()
    except jwt.InvalidTokenError as e:
        raise TokenInvalidError(f"Invalid refresh token: {str(e)}")

    if payload.get("token_type") != "refresh":
        raise TokenInvalidError(AuthErrorMessages.TOKEN_INVALID)
    return payload


def generate_token_pair(user_id: str) -> dict:
    return {
        "access": generate_access_token(user_id),
        "refresh": generate_refresh_token(user_id),
    }


def blacklist_token(token: str) -> None:
    cache.set(_blacklist_key(token), True, timeout=settings.TOKEN_BLACKLIST_TTL)


def is_token_blacklisted(token: str) -> bool:
    return bool(cache.get(_blacklist_key(token)))


def _blacklist_key(token: str) -> str:
    return f"{BLACKLIST_KEY_PREFIX}{hashlib.sha256(token.encode()).hexdigest()}"
