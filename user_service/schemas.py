from typing import List, Optional

from pydantic import ConfigDict, EmailStr

from shared.schemas import CamelModel


class UserCreate(CamelModel):
    user_id: Optional[str] = None
    name: str
    email: EmailStr
    about: Optional[str] = None


class User(UserCreate):
    user_id: str


# ---------------------------------------------------------------------------
# Peer payloads, as the rating and hotel services send them
# ---------------------------------------------------------------------------
class Hotel(CamelModel):
    model_config = ConfigDict(extra="allow")

    hotel_id: str
    name: Optional[str] = None
    location: Optional[str] = None
    about: Optional[str] = None


class Rating(CamelModel):
    rating_id: Optional[str] = None
    user_id: Optional[str] = None
    hotel_id: Optional[str] = None
    rating: Optional[str] = None
    feedback: Optional[str] = None


# ---------------------------------------------------------------------------
# Response-only views, never persisted
# ---------------------------------------------------------------------------
class RatingWithHotel(Rating):
    hotel: Hotel


class UserWithRatings(User):
    ratings: List[RatingWithHotel] = []
