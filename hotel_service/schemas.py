from typing import Optional

from shared.schemas import CamelModel


class HotelCreate(CamelModel):
    name: str
    location: Optional[str] = None
    about: Optional[str] = None


class Hotel(HotelCreate):
    hotel_id: str
