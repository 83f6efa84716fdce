from dataclasses import dataclass

from rental_api.utils.constants import Role


@dataclass
class User:
    """
    Authenticated caller. The Store keeps raw dicts (password hash included);
    this is the view handed to controllers and services.
    """
    user_id: str
    name: str
    email: str
    role: str = Role.USER
    image: str = ""

    @property
    def is_owner(self) -> bool:
        return self.role == Role.OWNER

    @classmethod
    def from_dict(cls, d: dict) -> "User":
        return cls(
            user_id=d.get("_id"),
            name=d.get("name") or "",
            email=d.get("email") or "",
            role=(d.get("role") or Role.USER).lower(),
            image=d.get("image") or "",
        )

    def to_public(self) -> dict:
        """Serializable form without the password hash."""
        return {
            "_id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "image": self.image,
        }
