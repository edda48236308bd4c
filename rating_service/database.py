# database.py
import os
from databases import Database
from sqlalchemy import create_engine, MetaData
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("RATING_DATABASE_URL", "sqlite:///./rating_service.db")

# Async database
database = Database(DATABASE_URL)

# SQLAlchemy sync engine for metadata.create_all()
SYNC_DATABASE_URL = DATABASE_URL.replace("+asyncpg", "").replace("+aiosqlite", "")
engine = create_engine(SYNC_DATABASE_URL)
metadata = MetaData()
