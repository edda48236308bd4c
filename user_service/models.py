from sqlalchemy import Table, Column, String, Text
from user_service.database import metadata

users = Table(
    "users",
    metadata,
    Column("user_id", String, primary_key=True),
    Column("name", String, nullable=False),
    Column("email", String, nullable=False),
    Column("about", Text),
)
