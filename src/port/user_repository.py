from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    The store assigns ids and owns the email uniqueness constraint.
    Read and write failures other than "not found" raise RepositoryError.
    """
    def create(self, user: User) -> int:
        """Persist a new user and return its assigned id.

        Raises DuplicateEmailError if the email is already taken.
        """
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: int) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def update(self, user: User) -> bool:
        """Overwrite the stored record with the same id. Return False if none matched."""
        ...

    def delete(self, user_id: int) -> bool:
        """Remove a user by ID. Return True if a record was deleted."""
        ...

    def exists(self, email: str) -> bool:
        """Return True if a user with this email is stored."""
        ...
