import logging
from typing import List

from shared.exceptions import ResourceNotFoundException
from shared.store import DocumentCollection
from rating_service.schemas import Rating, RatingCreate, RatingUpdate
from rating_service.metrics import RATINGS_CREATED, RATING_QUERIES

logger = logging.getLogger("rating-service")


class RatingService:
    """Owns Rating documents. Store faults propagate unchanged."""

    def __init__(self, ratings: DocumentCollection):
        self.ratings = ratings

    async def create(self, rating: RatingCreate) -> Rating:
        stored = await self.ratings.save(rating.model_dump())
        RATINGS_CREATED.inc()
        logger.info(f"[Rating] Created {stored['rating_id']} (user={stored['user_id']}, hotel={stored['hotel_id']})")
        return Rating(**stored)

    async def get_ratings(self) -> List[Rating]:
        return [Rating(**doc) for doc in await self.ratings.find_all()]

    async def get_rating_by_user_id(self, user_id: str) -> List[Rating]:
        RATING_QUERIES.labels(key="user_id").inc()
        docs = await self.ratings.find_by_field("user_id", user_id)
        return [Rating(**doc) for doc in docs]

    async def get_rating_by_hotel_id(self, hotel_id: str) -> List[Rating]:
        RATING_QUERIES.labels(key="hotel_id").inc()
        docs = await self.ratings.find_by_field("hotel_id", hotel_id)
        return [Rating(**doc) for doc in docs]

    async def update_rating(self, rating_id: str, changes: RatingUpdate) -> Rating:
        existing = await self.ratings.find_by_id(rating_id)
        if existing is None:
            raise ResourceNotFoundException(f"Rating with given id is not found on server: {rating_id}")

        update_vals = changes.model_dump(exclude_none=True)
        stored = await self.ratings.save({**existing, **update_vals})
        logger.info(f"[Rating] Updated {rating_id}: {sorted(update_vals)}")
        return Rating(**stored)

    async def delete_rating(self, rating_id: str) -> None:
        if not await self.ratings.delete_by_id(rating_id):
            raise ResourceNotFoundException(f"Rating with given id is not found on server: {rating_id}")
        logger.info(f"[Rating] Deleted {rating_id}")
