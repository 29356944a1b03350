from fastapi import Request
from pymongo.database import Database

from trainboard.exceptions import DatabaseConnectionError


def get_db(request: Request) -> Database:
    """Database handle opened by the application lifespan (or injected by create_app)."""
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise DatabaseConnectionError("Database connection has not been initialized")
    return db
