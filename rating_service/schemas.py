from typing import Optional

from shared.schemas import CamelModel


class RatingCreate(CamelModel):
    user_id: Optional[str] = None
    hotel_id: Optional[str] = None
    rating: Optional[str] = None
    feedback: Optional[str] = None


class RatingUpdate(CamelModel):
    rating: Optional[str] = None
    feedback: Optional[str] = None


class Rating(RatingCreate):
    rating_id: str
