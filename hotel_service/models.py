from sqlalchemy import Table, Column, String, Text
from hotel_service.database import metadata

hotels = Table(
    "hotels",
    metadata,
    Column("hotel_id", String, primary_key=True),
    Column("name", String, nullable=False),
    Column("location", String),
    Column("about", Text),
)
