from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from werkzeug.security import generate_password_hash, check_password_hash

from rental_api.exceptions import AuthError


def generate_hash(password: str) -> str:
    return generate_password_hash(password)


def check_hash(password: str, hashed: str) -> bool:
    try:
        return check_password_hash(hashed, password)
    except (TypeError, ValueError):
        return False


def issue_token(user_id: str, secret: str, algorithm: str = "HS256", expires_days: int = 7) -> str:
    """Signed token whose `id` claim is the user id."""
    payload = {
        "id": user_id,
        "exp": datetime.now(timezone.utc) + timedelta(days=expires_days),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def read_token(token: str, secret: str, algorithm: str = "HS256") -> str:
    """Return the user id carried by `token`, or raise AuthError."""
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError:
        raise AuthError()
    user_id = payload.get("id") or payload.get("_id")
    if not user_id:
        raise AuthError()
    return str(user_id)
