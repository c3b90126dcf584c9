from dataclasses import dataclass

from flask_jwt_extended import get_jwt, get_jwt_identity

STAFF_ROLES = ("admin", "librarian")


@dataclass(frozen=True)
class AuthContext:
    """The already-authenticated caller, handed explicitly to each handler."""

    user_id: int
    role: str

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES


def current_context() -> AuthContext:
    # only valid after verify_jwt_in_request()
    claims = get_jwt() or {}
    return AuthContext(user_id=int(get_jwt_identity()), role=claims.get("role", "member"))
