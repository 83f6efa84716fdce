from flask import request

from rental_api.exceptions import ValidationError


def json_body(optional: bool = False) -> dict | None:
    """
    Parsed JSON body as a dict. A body that parses to anything but an object
    is a ValidationError. A missing/unparseable body gives {} (None when `optional`).
    """
    body = request.get_json(silent=True)
    if body is None:
        return None if optional else {}
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body
