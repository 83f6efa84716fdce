"""Shared service helpers."""

from typing import Optional
from urllib.parse import urlparse

from flask import current_app, has_app_context

from rental_api.exceptions import StoreError, ValidationError
from rental_api.models.store import Store


def _store() -> Store:
    """The store created by `create_app` for the running application."""
    if not has_app_context():
        raise StoreError("Error: no application context; pass a store explicitly")
    return current_app.extensions["store"]


def resolve_store(store: Optional[Store] = None) -> Store:
    """Prefer an injected store (tests); otherwise the app's store."""
    return store if store is not None else _store()


def setting(name: str, default=None):
    """Read an app config value, falling back to `default` outside a request."""
    if has_app_context():
        return current_app.config.get(name, default)
    return default


def require(**fields) -> None:
    """Raise ValidationError if any of the given values is missing or blank."""
    for value in fields.values():
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError()


def to_float_safe(value) -> Optional[float]:
    """Safely convert to float; return None if invalid."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _lc(s):
    """Safe lowercase for case-insensitive compare."""
    return (s or "").strip().lower()


def valid_image_path(s: Optional[str]) -> bool:
    """Accept /static/... or absolute http(s) URL."""
    if not s:
        return False
    s = s.strip()
    if s.startswith("/static/"):
        return True
    u = urlparse(s)
    return u.scheme in ("http", "https") and bool(u.netloc)
