from dataclasses import dataclass

from policy_compass.errors import UnauthenticatedError


@dataclass(frozen=True)
class Identity:
    """A signed-in user as issued by the authentication provider."""

    user_id: str
    token: str

    @property
    def is_valid(self) -> bool:
        return bool(self.user_id and self.user_id.strip() and self.token and self.token.strip())


def require_identity(identity: Identity | None) -> Identity:
    """Return the identity or raise before any side effect happens.

    Raises:
        UnauthenticatedError: if no identity is present or it is incomplete.
    """
    if identity is None or not identity.is_valid:
        raise UnauthenticatedError("User not authenticated")
    return identity
