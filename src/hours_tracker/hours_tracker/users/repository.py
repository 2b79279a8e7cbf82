from __future__ import annotations

from typing import Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for the roster.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def load_users(self) -> Sequence[User]:
        raise NotImplementedError

    def save_user(self, user: User) -> None:
        raise NotImplementedError

    def delete_user(self, user_id: str) -> None:
        """Delete the user together with all of their entries and period status rows."""

        raise NotImplementedError

    def rename_user(self, user_id: str, name: str) -> None:
        raise NotImplementedError
