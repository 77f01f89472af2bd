"""
Database Connection and Session Management
Async queries go through `databases`; SQLAlchemy owns the schema
"""

import logging
import sqlite3

import asyncpg
from databases import Database
from sqlalchemy import create_engine, MetaData
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import settings

logger = logging.getLogger(__name__)

# Database URL
DATABASE_URL = settings.DATABASE_URL

if DATABASE_URL.startswith("sqlite"):
    db_options = {}
elif "supabase.com" in DATABASE_URL or "pooler.supabase.com" in DATABASE_URL:
    # pgbouncer in transaction mode cannot use prepared statements
    db_options = {"min_size": 1, "max_size": 5, "statement_cache_size": 0}
else:
    db_options = {"min_size": 1, "max_size": 10}

# Create database instance for async queries
database = Database(DATABASE_URL, **db_options)

# Create SQLAlchemy engine for migrations and table creation
engine = create_engine(
    DATABASE_URL.replace("postgresql://", "postgresql+psycopg2://")
    if "postgresql://" in DATABASE_URL else DATABASE_URL
)

# Create session maker
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Metadata for models
metadata = MetaData()

# Base class for models
Base = declarative_base(metadata=metadata)

# Unique-constraint violations as raised by the supported drivers
INTEGRITY_ERRORS = (sqlite3.IntegrityError, asyncpg.exceptions.UniqueViolationError)


async def connect_db():
    """Connect to database on startup"""
    await database.connect()
    logger.info("Database connected")


async def disconnect_db():
    """Disconnect from database on shutdown"""
    await database.disconnect()
    logger.info("Database disconnected")
