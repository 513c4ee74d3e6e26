"""SQL table backing the password reset request store."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Column, Field, SQLModel

from passreset.domain.value_objects.reset_token import ResetToken


class PasswordResetRequestRecord(SQLModel, table=True):
    """Row form of `PasswordResetRequest`.

    The unique constraint on ``user_id`` enforces one request per user at the
    database level; ``version`` backs the optimistic-concurrency update.
    """

    __tablename__ = "password_reset_requests"
    __table_args__ = (UniqueConstraint("user_id", name="uq_password_reset_requests_user_id"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, nullable=False)
    token: str = Field(max_length=ResetToken.TOKEN_LENGTH, nullable=False)
    expiration_date: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    version: int = Field(default=1, nullable=False)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
