import os
from itsdangerous import URLSafeTimedSerializer, BadSignature

from auth.login_manager import AuthError

SECRET = os.getenv("APP_SECRET", "dev-secret-change-me")
TOKEN_MAX_AGE = 60 * 60 * 24 * 7

serializer = URLSafeTimedSerializer(SECRET, salt="auth")


def sign_token(user: dict) -> str:
    return serializer.dumps({"uid": user["id"], "name": user["name"], "email": user["email"]})


def verify_token(token: str) -> dict:
    # SignatureExpired is a BadSignature
    try:
        payload = serializer.loads(token, max_age=TOKEN_MAX_AGE)
    except BadSignature:
        raise AuthError("Invalid token")
    if not isinstance(payload, dict) or "uid" not in payload:
        raise AuthError("Invalid token")
    return payload
