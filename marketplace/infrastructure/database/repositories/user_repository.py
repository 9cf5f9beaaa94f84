"""User repository implementation."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.application.interfaces.repositories import UserRepositoryInterface
from marketplace.domain.entities.user import User
from marketplace.domain.value_objects.artist_rating import ArtistRating
from marketplace.domain.value_objects.principal import UserType
from marketplace.infrastructure.database.models.user import UserModel


class UserRepository(UserRepositoryInterface):
    """User repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID."""
        stmt = (
            select(UserModel)
            .where(UserModel.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def find_new_job_subscribers(self) -> List[User]:
        stmt = select(UserModel).where(
            UserModel.user_type == UserType.ARTIST.value,
            UserModel.is_active.is_(True),
            UserModel.notify_new_jobs.is_(True),
        )
        result = await self.db.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def list_artist_ids(self, skip: int = 0, limit: int = 100) -> List[UUID]:
        stmt = (
            select(UserModel.id)
            .where(UserModel.user_type == UserType.ARTIST.value)
            .order_by(UserModel.id)
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def save_rating(self, artist_id: UUID, rating: ArtistRating) -> bool:
        stmt = (
            update(UserModel)
            .where(UserModel.id == artist_id)
            .values(rating_average=rating.average, rating_count=rating.count)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount > 0

    def _model_to_entity(self, model: UserModel) -> User:
        """Convert SQLAlchemy model to domain entity."""
        return User(
            id=model.id,
            user_type=UserType(model.user_type),
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            is_active=model.is_active,
            notify_new_jobs=model.notify_new_jobs,
            email_new_jobs=model.email_new_jobs,
            rating=ArtistRating(
                average=model.rating_average, count=model.rating_count
            ),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
