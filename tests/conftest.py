"""
Shared fixtures: real SQLite collections per test and in-process peer stubs.
"""
from typing import Dict, List

import pytest
from databases import Database
from sqlalchemy import create_engine

from shared.store import DocumentCollection
from user_service.clients import HotelService, RatingQuery
from user_service.schemas import Hotel, Rating
from user_service.database import metadata as user_metadata
from user_service.models import users
from rating_service.database import metadata as rating_metadata
from rating_service.models import ratings
from hotel_service.database import metadata as hotel_metadata
from hotel_service.models import hotels


async def _connect(tmp_path, name, metadata) -> Database:
    url = f"sqlite:///{tmp_path / name}"
    engine = create_engine(url)
    metadata.create_all(engine)
    engine.dispose()
    database = Database(url)
    await database.connect()
    return database


@pytest.fixture
async def user_collection(tmp_path):
    database = await _connect(tmp_path, "users.db", user_metadata)
    yield DocumentCollection(database, users, "user_id")
    await database.disconnect()


@pytest.fixture
async def rating_collection(tmp_path):
    database = await _connect(tmp_path, "ratings.db", rating_metadata)
    yield DocumentCollection(database, ratings, "rating_id")
    await database.disconnect()


@pytest.fixture
async def hotel_collection(tmp_path):
    database = await _connect(tmp_path, "hotels.db", hotel_metadata)
    yield DocumentCollection(database, hotels, "hotel_id")
    await database.disconnect()


# ============================================================================
# Peer stubs
# ============================================================================


class StubHotelService(HotelService):
    def __init__(self, hotels: Dict[str, dict], failing: set = frozenset()):
        self.hotels = hotels
        self.failing = failing
        self.calls: List[str] = []

    async def get_hotel(self, hotel_id: str) -> Hotel:
        self.calls.append(hotel_id)
        if hotel_id in self.failing or hotel_id not in self.hotels:
            raise RuntimeError(f"hotel lookup failed for {hotel_id}")
        return Hotel(hotel_id=hotel_id, **self.hotels[hotel_id])


class StubRatingQuery(RatingQuery):
    def __init__(self, ratings_by_user: Dict[str, List[dict]]):
        self.ratings_by_user = ratings_by_user
        self.calls: List[str] = []

    async def get_ratings_by_user_id(self, user_id: str) -> List[Rating]:
        self.calls.append(user_id)
        return [Rating(**r) for r in self.ratings_by_user.get(user_id, [])]


@pytest.fixture
def hotels_catalogue():
    return {
        "h-1": {"name": "Seaside Inn", "location": "Goa", "about": "Beachfront"},
        "h-2": {"name": "Hill View", "location": "Shimla", "about": "Mountains"},
        "h-3": {"name": "City Lodge", "location": "Pune", "about": "Central"},
    }
