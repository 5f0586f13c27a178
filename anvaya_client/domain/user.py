"""
User Domain Model - The signed-in identity held by the session layer.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional, Union
from enum import Enum


class UserRole(Enum):
    """Roles issued by the backend."""
    ADMIN = "ADMIN"      # Hospital administration
    DOCTOR = "DOCTOR"    # Clinician
    PATIENT = "PATIENT"  # Patient self-service

    @classmethod
    def parse(cls, value: Any) -> Optional["UserRole"]:
        """Return the matching role, or None for anything unrecognised."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


@dataclass(frozen=True)
class User:
    """
    User entity - the Current User of a session.

    Domain rules:
    - user_id is immutable
    - role is a UserRole when recognised; an unknown role is kept verbatim
      as a string so the role gate can reject it instead of guessing
    """
    user_id: str
    email: str
    name: str
    role: Union[UserRole, str]

    @property
    def known_role(self) -> Optional[UserRole]:
        """The role as a UserRole, or None if the backend sent something else."""
        return UserRole.parse(self.role)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the backend's profile shape."""
        return {
            "id": self.user_id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value if isinstance(self.role, UserRole) else self.role,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        """
        Deserialize a backend profile.

        Accepts "id", "_id" or "user_id" for the identifier.

        Raises:
            KeyError: If no identifier is present
        """
        user_id = data.get("id") or data.get("_id") or data.get("user_id")
        if user_id is None:
            raise KeyError("id")

        raw_role = data.get("role")
        role = UserRole.parse(raw_role)

        return cls(
            user_id=str(user_id),
            email=data.get("email") or "",
            name=data.get("name") or "",
            role=role if role is not None else ("" if raw_role is None else str(raw_role)),
        )
