import uuid
import logging
from typing import List

from shared.exceptions import ResourceNotFoundException
from shared.store import DocumentCollection
from user_service.clients import HotelService, RatingQuery
from user_service.metrics import USER_AGGREGATIONS
from user_service.schemas import RatingWithHotel, User, UserCreate, UserWithRatings

logger = logging.getLogger("user-service")


class UserService:
    def __init__(self, users: DocumentCollection, rating_query: RatingQuery, hotel_service: HotelService):
        self.users = users
        self.rating_query = rating_query
        self.hotel_service = hotel_service

    async def save_user(self, user: UserCreate) -> User:
        """Persist ``user`` under a freshly generated id, whatever id it came with."""
        user_id = str(uuid.uuid4())
        document = user.model_dump()
        document["user_id"] = user_id
        stored = await self.users.save(document)
        logger.info(f"[User] Created {user_id} ({user.email})")
        return User(**stored)

    async def get_all_user(self) -> List[User]:
        return [User(**doc) for doc in await self.users.find_all()]

    async def get_user(self, user_id: str) -> UserWithRatings:
        """
        Fetch one user together with their ratings, each carrying its hotel.

        Ratings come from the rating service and hotels are looked up one at a
        time, in rating order. Any remote failure aborts the whole call; no
        partially enriched user is ever returned.
        """
        record = await self.users.find_by_id(user_id)
        if record is None:
            USER_AGGREGATIONS.labels(outcome="not_found").inc()
            raise ResourceNotFoundException(f"User with given id is not found on server: {user_id}")

        try:
            ratings = await self.rating_query.get_ratings_by_user_id(user_id)
            logger.info(f"[User] {len(ratings)} rating(s) from rating service for {user_id}")

            enriched = []
            for rating in ratings:
                hotel = await self.hotel_service.get_hotel(rating.hotel_id)
                enriched.append(RatingWithHotel(**rating.model_dump(), hotel=hotel))
        except Exception:
            USER_AGGREGATIONS.labels(outcome="error").inc()
            raise

        USER_AGGREGATIONS.labels(outcome="ok").inc()
        return UserWithRatings(**record, ratings=enriched)
