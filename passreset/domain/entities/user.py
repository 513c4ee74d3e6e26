from datetime import datetime, timezone  # For timestamp fields
from typing import Optional  # For optional fields

from sqlalchemy import DateTime  # For explicit timezone-aware DateTime type
from sqlmodel import Column, Field, SQLModel, String  # For ORM and table definition


class User(SQLModel, table=True):
    """Represents the user identity a password reset request belongs to.

    The reset lifecycle only needs a stable identifier and an email address to
    look the user up by; account management, credentials and roles live in the
    system that owns user accounts.

    Attributes:
        id: The unique identifier for the user (primary key).
        email: A unique email address, looked up case-insensitively.
        is_active: Inactive users are not offered password resets.
        created_at: The timestamp of when the user record was created.
    """

    __tablename__ = "users"

    id: Optional[int] = Field(
        default=None,  # Auto-incremented by database
        primary_key=True,
        description="The unique identifier for the user.",
    )
    email: str = Field(
        sa_column=Column(String, unique=True, index=True, nullable=False),
        description="Unique, case-insensitive email address.",
    )
    is_active: bool = Field(default=True, description="Whether the account may reset its password.")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Timestamp of user creation.",
    )
