from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Lookups raise NotFoundError on a miss. Store failures surface as
    InfrastructureError.
    """
    def create(self, user: User) -> User:
        """Insert a user. Raise DuplicateError if id, email or phone exists."""
        ...

    def get_by_id(self, user_id: str) -> User:
        """Find a user by ID."""
        ...

    def get_by_email(self, email: str) -> User:
        """Find a user by email."""
        ...

    def get_by_phone(self, phone_number: str) -> User:
        """Find a user by phone number."""
        ...

    def list_all(self) -> list[User]:
        """Return every stored user."""
        ...

    def update(self, user_id: str, fields: dict) -> User:
        """Merge ``fields`` into the stored user and return the result.

        Unknown field names are rejected with ValidationError.
        """
        ...

    def delete(self, user_id: str) -> bool:
        """Delete a user. Return False if no such user existed."""
        ...

    def ping(self) -> bool:
        """Return True if the backing store is reachable."""
        ...
