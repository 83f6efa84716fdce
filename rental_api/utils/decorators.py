import logging
from functools import wraps

from flask import current_app, g, request

from rental_api.exceptions import AuthError
from rental_api.models.user import User
from rental_api.services.common import _store
from rental_api.utils.security import read_token

logger = logging.getLogger(__name__)


def _bearer_token() -> str:
    """Token from `Authorization: <token>` or `Authorization: Bearer <token>`."""
    raw = (request.headers.get("Authorization") or "").strip()
    if raw.lower().startswith("bearer "):
        raw = raw[7:].strip()
    return raw


def login_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        token = _bearer_token()
        if not token:
            raise AuthError()
        user_id = read_token(
            token,
            current_app.config["JWT_SECRET"],
            current_app.config.get("JWT_ALGORITHM", "HS256"),
        )
        doc = _store().get("users", user_id)
        if doc is None:
            logger.info("Token for unknown user %s rejected", user_id)
            raise AuthError()
        g.user = User.from_dict(doc)
        return fn(*args, **kwargs)

    return wrapper


def owner_required(fn):
    @login_required
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if not g.user.is_owner:
            raise AuthError("Unauthorized")
        return fn(*args, **kwargs)

    return wrapper
