"""
User SQLAlchemy model.
"""

from sqlalchemy import Boolean, Column, Index, Integer, Numeric, String

from marketplace.domain.value_objects.principal import UserType

from .base import BaseModel


class UserModel(BaseModel):
    """User database model.

    Rows are provisioned by the auth service; the booking core reads them
    and maintains the artist rating columns.
    """

    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=True)
    first_name = Column(String(100))
    last_name = Column(String(100))
    user_type = Column(String(20), default=UserType.CLIENT.value, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Notification preferences
    notify_new_jobs = Column(Boolean, default=True, nullable=False)
    email_new_jobs = Column(Boolean, default=False, nullable=False)

    # Cached artist rating, written only by the rating aggregator
    rating_average = Column(Numeric(precision=2, scale=1), default=0, nullable=False)
    rating_count = Column(Integer, default=0, nullable=False)

    __table_args__ = (
        Index("idx_users_type_active", "user_type", "is_active"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, type={self.user_type})>"
