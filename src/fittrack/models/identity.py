"""Authenticated caller context."""

from dataclasses import dataclass

from ..exceptions import AuthenticationError


@dataclass(frozen=True)
class Identity:
    """The authenticated user on whose behalf an operation runs.

    Issued by the external identity provider; the user_id is opaque and
    stable. Passed explicitly into every repository call.
    """

    user_id: str

    @classmethod
    def from_user_id(cls, user_id: str | None) -> "Identity":
        """Build an identity, rejecting missing or blank identifiers."""
        if user_id is None or not user_id.strip():
            raise AuthenticationError()
        return cls(user_id=user_id.strip())

    def owns(self, owner: str) -> bool:
        return self.user_id == owner
