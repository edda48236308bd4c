"""
Tests for the user aggregation service.

The store is a real SQLite collection; the rating and hotel services are
in-process stubs.
"""

import httpx
import pytest

from shared.exceptions import RemoteServiceError, ResourceNotFoundException
from user_service.clients import HttpRatingQuery, RatingQuery
from user_service.schemas import UserCreate
from user_service.service import UserService
from tests.conftest import StubHotelService, StubRatingQuery


def _user(name="Asha", email="asha@example.com", **extra):
    return UserCreate(name=name, email=email, about="Traveller", **extra)


@pytest.fixture
def hotel_stub(hotels_catalogue):
    return StubHotelService(hotels_catalogue)


@pytest.fixture
def rating_stub():
    return StubRatingQuery({})


@pytest.fixture
def service(user_collection, rating_stub, hotel_stub):
    return UserService(user_collection, rating_stub, hotel_stub)


class TestSaveUser:
    async def test_ids_are_non_empty_and_distinct(self, service):
        created = [await service.save_user(_user(email=f"u{i}@example.com")) for i in range(5)]

        ids = [u.user_id for u in created]
        assert all(ids)
        assert len(set(ids)) == len(ids)

    async def test_caller_supplied_id_is_overwritten(self, service):
        created = await service.save_user(_user(user_id="chosen-by-caller"))

        assert created.user_id != "chosen-by-caller"
        assert await service.users.find_by_id("chosen-by-caller") is None

    async def test_get_all_user_contains_every_created_user(self, service):
        created = [await service.save_user(_user(email=f"u{i}@example.com")) for i in range(3)]

        listed = await service.get_all_user()

        assert {u.user_id for u in listed} == {u.user_id for u in created}


class TestGetUser:
    async def test_unknown_id_raises_not_found_with_id(self, service, rating_stub):
        with pytest.raises(ResourceNotFoundException) as exc:
            await service.get_user("missing-42")

        assert "missing-42" in exc.value.message
        assert rating_stub.calls == []

    async def test_user_without_ratings_gets_empty_list(self, service):
        created = await service.save_user(_user())

        fetched = await service.get_user(created.user_id)

        assert fetched.user_id == created.user_id
        assert fetched.ratings == []

    async def test_ratings_are_enriched_in_order(self, service, rating_stub, hotel_stub, hotels_catalogue):
        created = await service.save_user(_user())
        rating_stub.ratings_by_user[created.user_id] = [
            {"rating_id": "r-3", "user_id": created.user_id, "hotel_id": "h-3", "rating": "2"},
            {"rating_id": "r-1", "user_id": created.user_id, "hotel_id": "h-1", "rating": "5"},
            {"rating_id": "r-2", "user_id": created.user_id, "hotel_id": "h-2", "rating": "4"},
        ]

        fetched = await service.get_user(created.user_id)

        assert [r.rating_id for r in fetched.ratings] == ["r-3", "r-1", "r-2"]
        for rating in fetched.ratings:
            assert rating.hotel.hotel_id == rating.hotel_id
            assert rating.hotel.name == hotels_catalogue[rating.hotel_id]["name"]
        assert hotel_stub.calls == ["h-3", "h-1", "h-2"]
        assert rating_stub.calls == [created.user_id]

    async def test_one_failed_hotel_lookup_fails_the_whole_call(self, user_collection, rating_stub, hotels_catalogue):
        hotel_stub = StubHotelService(hotels_catalogue, failing={"h-2"})
        service = UserService(user_collection, rating_stub, hotel_stub)
        created = await service.save_user(_user())
        rating_stub.ratings_by_user[created.user_id] = [
            {"rating_id": "r-1", "hotel_id": "h-1"},
            {"rating_id": "r-2", "hotel_id": "h-2"},
            {"rating_id": "r-3", "hotel_id": "h-3"},
        ]

        with pytest.raises(RuntimeError, match="h-2"):
            await service.get_user(created.user_id)

        # lookups stop at the first failure
        assert hotel_stub.calls == ["h-1", "h-2"]

    async def test_enrichment_is_not_persisted(self, service, rating_stub):
        created = await service.save_user(_user())
        rating_stub.ratings_by_user[created.user_id] = [{"rating_id": "r-1", "hotel_id": "h-1"}]

        await service.get_user(created.user_id)

        stored = await service.users.find_by_id(created.user_id)
        assert "ratings" not in stored
        assert (await service.get_all_user())[0].model_dump().keys() == created.model_dump().keys()


class UnreachableRatingQuery(RatingQuery):
    def __init__(self):
        self.calls = []

    async def get_ratings_by_user_id(self, user_id):
        self.calls.append(user_id)
        raise httpx.ConnectError("rating service unreachable")


class TestRatingQueryFailures:
    async def test_unreachable_rating_service_aborts_get_user(self, user_collection, hotel_stub):
        rating_query = UnreachableRatingQuery()
        service = UserService(user_collection, rating_query, hotel_stub)
        created = await service.save_user(_user())

        with pytest.raises(httpx.ConnectError):
            await service.get_user(created.user_id)

        assert rating_query.calls == [created.user_id]
        assert hotel_stub.calls == []

    async def test_null_rating_body_aborts_get_user(self, user_collection, hotel_stub):
        def handler(request):
            return httpx.Response(200, json=None)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            service = UserService(user_collection, HttpRatingQuery(client, "http://ratings"), hotel_stub)
            created = await service.save_user(_user())

            with pytest.raises(RemoteServiceError):
                await service.get_user(created.user_id)

        assert hotel_stub.calls == []
