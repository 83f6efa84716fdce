from __future__ import annotations

import logging
from typing import Optional

from rental_api.exceptions import NotFoundError, ValidationError
from rental_api.models.store import Store
from rental_api.models.user import User
from rental_api.services.common import require, resolve_store, setting, valid_image_path
from rental_api.utils.constants import MIN_PASSWORD_LENGTH, Role
from rental_api.utils.security import check_hash, generate_hash, issue_token

logger = logging.getLogger(__name__)


def _token_for(user_id: str) -> str:
    return issue_token(
        user_id,
        secret=setting("JWT_SECRET", "dev-secret-change-me"),
        algorithm=setting("JWT_ALGORITHM", "HS256"),
        expires_days=setting("JWT_EXPIRES_DAYS", 7),
    )


class UserService:
    """Registration, login and profile operations."""

    @staticmethod
    def register(name, email, password, store: Optional[Store] = None):
        """
        Returns:
            (ok: bool, message: str, token: Optional[str])
        """
        name = (name or "").strip()
        email = (email or "").strip().lower()
        if not name or not email or not password or len(password) < MIN_PASSWORD_LENGTH:
            return False, f"Fill all the fields and ensure password >= {MIN_PASSWORD_LENGTH} chars", None

        st = resolve_store(store)
        with st.locked():
            if st.find_one("users", email=email):
                return False, "User already exists", None
            doc = st.insert("users", {
                "name": name,
                "email": email,
                "password": generate_hash(password),
                "role": Role.USER,
                "image": "",
            })
        logger.info("Registered user %s", doc["_id"])
        return True, "Registered", _token_for(doc["_id"])

    @staticmethod
    def login(email, password, store: Optional[Store] = None):
        st = resolve_store(store)
        user = st.find_one("users", email=(email or "").strip().lower())
        if not user:
            return False, "User not found", None
        if not check_hash(password or "", user.get("password") or ""):
            logger.info("Failed login for user %s", user["_id"])
            return False, "Invalid Credentials", None
        return True, "Logged in", _token_for(user["_id"])

    @staticmethod
    def get_user(user_id, store: Optional[Store] = None) -> User:
        doc = resolve_store(store).get("users", user_id)
        if doc is None:
            raise NotFoundError("User not found")
        return User.from_dict(doc)

    @staticmethod
    def change_role_to_owner(user_id, store: Optional[Store] = None):
        st = resolve_store(store)
        if st.update("users", user_id, {"role": Role.OWNER}) is None:
            raise NotFoundError("User not found")
        return True, "Now you can list vehicles"

    @staticmethod
    def update_image(user_id, image, store: Optional[Store] = None):
        """Store a profile image URL (the upload itself happens elsewhere)."""
        require(image=image)
        if not valid_image_path(image):
            raise ValidationError("Image must be a /static/ path or an http(s) URL")
        st = resolve_store(store)
        if st.update("users", user_id, {"image": image.strip()}) is None:
            raise NotFoundError("User not found")
        return True, "Image Updated"
