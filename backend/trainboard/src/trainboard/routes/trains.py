from typing import List

from fastapi import Depends
from pymongo.database import Database

from trainboard.db.repository import DocumentRepository
from trainboard.exceptions import NotFoundError
from trainboard.models import Announcement, ResolvedReference, Stop, Train
from trainboard.routes.crud import build_crud_router
from trainboard.routes.deps import get_db


router = build_crud_router(Train, "/trains", ["trains"])


def _get_train(db: Database, train_id: str) -> dict:
    train = DocumentRepository(db, Train).get(train_id)
    if train is None:
        raise NotFoundError(Train.resource, train_id)
    return train


@router.get("/{train_id}/stops", response_model=List[ResolvedReference])
def train_stops(train_id: str, db: Database = Depends(get_db)):
    """The train's stops in route order. Deleted stops come back with found=false."""
    train = _get_train(db, train_id)
    return DocumentRepository(db, Stop).resolve(train["stops"])


@router.get("/{train_id}/announcements", response_model=List[ResolvedReference])
def train_announcements(train_id: str, db: Database = Depends(get_db)):
    train = _get_train(db, train_id)
    return DocumentRepository(db, Announcement).resolve(train["announcements"])
