"""
Conexão ao banco de dados PostgreSQL

Este módulo centraliza as formas de acesso ao banco:
- SQLAlchemy (definição das tabelas e criação do schema)
- psycopg2 direto (queries SQL parametrizadas dos repositórios)
"""
import time
import logging

import psycopg2
from psycopg2.extras import RealDictCursor
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from .config import settings

logger = logging.getLogger(__name__)


# ============================================================================
# SQLAlchemy Configuration (table definitions)
# ============================================================================

# Base para modelos
Base = declarative_base()

_engine = None


def get_engine() -> Engine:
    """SQLAlchemy engine, created on first use"""
    global _engine
    if _engine is None:
        database_url = settings.DATABASE_URL
        if not database_url:
            raise Exception("DATABASE_URL not configured")
        _engine = create_engine(database_url, pool_pre_ping=True)
    return _engine


def init_schema() -> None:
    """
    Create any missing tables (customers, products, orders, order_items, payments).

    Existing tables are left untouched.
    """
    # Register the table definitions on Base.metadata
    from fiap_api import models  # noqa: F401

    logger.info("Creating database schema (missing tables only)")
    Base.metadata.create_all(bind=get_engine())


# ============================================================================
# psycopg2 Direct Connections (for raw SQL queries)
# ============================================================================

def get_db_connection_dict():
    """
    Get a database connection with RealDictCursor (returns dictionaries)

    Repositories use this one so rows map straight onto domain models.
    Connecting gives up after DATABASE_CONNECT_TIMEOUT seconds.

    Example:
        conn = get_db_connection_dict()
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM orders")
        results = cursor.fetchall()  # Returns list of dicts
        cursor.close()
        conn.close()
    """
    database_url = settings.DATABASE_URL
    if not database_url:
        raise Exception("DATABASE_URL not configured")

    return psycopg2.connect(
        database_url,
        cursor_factory=RealDictCursor,
        connect_timeout=settings.DATABASE_CONNECT_TIMEOUT
    )


def check_database() -> float:
    """
    Run ``SELECT 1`` on a fresh connection (single attempt).

    Returns:
        Query latency in milliseconds

    Raises:
        psycopg2.Error / Exception when the database is unreachable
    """
    conn = get_db_connection_dict()
    try:
        cursor = conn.cursor()
        start = time.time()
        cursor.execute("SELECT 1")
        cursor.fetchone()
        cursor.close()
        return round((time.time() - start) * 1000, 2)
    finally:
        conn.close()
