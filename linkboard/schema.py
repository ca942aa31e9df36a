"""Startup schema check: create the board tables when they are missing."""
import sys

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from linkboard.errors import SchemaError
from linkboard.logger import get_logger
from linkboard.models import db, Post, Comment

logger = get_logger("schema")

# posts must exist before comments can reference it
TABLES = (Post.__table__, Comment.__table__)


def ensure_schema(engine):
    """Create each board table that the catalog does not list yet.

    Returns the names of the tables created by this call. Any lookup or
    create failure raises SchemaError.
    """
    created = []
    try:
        for table in TABLES:
            # a fresh inspector each time; inspectors cache catalog lookups
            if inspect(engine).has_table(table.name):
                continue
            table.create(bind=engine)
            logger.info(f"{table.name} table created")
            created.append(table.name)
    except SQLAlchemyError as e:
        raise SchemaError(str(e)) from e
    return created


def init_database(app):
    """Run the schema check at startup; the process exits if it fails."""
    try:
        with app.app_context():
            ensure_schema(db.engine)
    except SchemaError as e:
        logger.error(f"✗ Database setup failed: {e}")
        sys.exit(1)
    logger.info("✓ Database connected successfully")
    return True
