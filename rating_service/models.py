from sqlalchemy import Table, Column, String, Text
from rating_service.database import metadata

ratings = Table(
    "ratings",
    metadata,
    Column("rating_id", String, primary_key=True),
    Column("user_id", String, index=True),
    Column("hotel_id", String, index=True),
    Column("rating", String),
    Column("feedback", Text),
)
