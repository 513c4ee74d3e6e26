"""Repository interfaces for abstracting data persistence in the domain layer.

This module defines the abstract base classes (interfaces) for repositories,
which act as a "port" in the context of Hexagonal Architecture. The domain layer
uses these interfaces to interact with persistence mechanisms without being
coupled to any specific technology (e.g., a SQL database or a NoSQL store).

The concrete implementations of these interfaces reside in the `infrastructure`
layer, acting as "adapters" that translate the domain's requests into specific
database queries.
"""

from abc import ABC, abstractmethod
from typing import Optional

from passreset.domain.entities.password_reset_request import PasswordResetRequest
from passreset.domain.entities.user import User


class IUserDirectory(ABC):
    """Resolves email addresses to user identities.

    The directory is read-only from the point of view of the reset lifecycle;
    account creation and updates belong to whoever owns user accounts.
    """

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Retrieves a user by their email address.

        Args:
            email: The email address to search for.

        Returns:
            An optional `User` entity. Returns `None` if no user is found;
            absence is never signalled with an exception.
        """
        raise NotImplementedError


class IPasswordResetRequestRepository(ABC):
    """An interface defining the contract for reset request persistence.

    Implementations hold at most one request per user and provide optimistic
    concurrency on `save`.
    """

    @abstractmethod
    async def find_by_user(self, user: User) -> Optional[PasswordResetRequest]:
        """Retrieves the reset request of a user.

        Args:
            user: Owner of the request.

        Returns:
            The stored request, or `None` if the user never requested a reset.
        """
        raise NotImplementedError

    @abstractmethod
    async def save(self, request: PasswordResetRequest) -> PasswordResetRequest:
        """Inserts a new request or updates an existing one atomically.

        A new request (``request.id is None``) is inserted; an existing one is
        updated only if the stored version still equals ``request.version``.
        On success ``id`` is assigned and ``version`` incremented on the passed
        request, which is also returned.

        Raises:
            ConcurrentModificationError: If another request already exists for
                the user, or the stored version moved on since the read.
        """
        raise NotImplementedError
