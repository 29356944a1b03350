"""
API Routes

This module assembles the routers mounted under /api. Handlers are plain
(sync) functions because pymongo is blocking; FastAPI runs them in its
threadpool. Business errors are raised as trainboard exceptions and rendered
by the handlers registered in main.py.
"""

from fastapi import APIRouter, Depends
from pymongo.database import Database
from pymongo.errors import PyMongoError

from trainboard.exceptions import DatabaseConnectionError
from trainboard.routes.announcements import router as announcements_router
from trainboard.routes.deps import get_db
from trainboard.routes.stops import router as stops_router
from trainboard.routes.trains import router as trains_router
from trainboard.utils.logger import logger


router = APIRouter()


@router.get("/ping")
def ping():
    logger.debug("Ping endpoint called")
    return {"message": "pong"}


@router.get("/health")
def health(db: Database = Depends(get_db)):
    try:
        db.command("ping")
    except PyMongoError as e:
        raise DatabaseConnectionError("Database ping failed") from e
    return {"status": "healthy"}


router.include_router(trains_router)
router.include_router(stops_router)
router.include_router(announcements_router)
