from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Type

from bson import ObjectId
from loguru import logger
from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.database import Database

from trainboard.models.base import Document, ResolvedReference, stamp, to_object_id


def utcnow() -> datetime:
    # MongoDB keeps milliseconds; truncate so the returned value matches what is stored
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class DocumentRepository:
    """
    CRUD over the collection of one document model.

    Lookups by id return None for unknown or malformed ids; it is up to the
    caller to turn that into a 404. Writes validate the whole document first
    and never persist a partial one.

    Models with a ``legacy_collection`` are read from both collections. New
    documents go to the current collection, and a legacy document moves there
    the first time it is updated.
    """

    def __init__(self, database: Database, model: Type[Document], clock: Callable[[], datetime] = utcnow):
        self.model = model
        self.collection = database[model.collection]
        self.legacy = database[model.legacy_collection] if model.legacy_collection else None
        self.clock = clock

    @property
    def collections(self) -> List[Collection]:
        if self.legacy is None:
            return [self.collection]
        return [self.collection, self.legacy]

    def _find_by_id(self, oid: ObjectId) -> Tuple[Optional[Collection], Optional[dict]]:
        for collection in self.collections:
            doc = collection.find_one({"_id": oid})
            if doc is not None:
                return collection, doc
        return None, None

    def list(self) -> List[Dict[str, Any]]:
        docs = []
        for collection in self.collections:
            docs.extend(collection.find({}, sort=[("_id", ASCENDING)]))
        if self.legacy is not None:
            docs.sort(key=lambda doc: doc["_id"])
        return [self.model.serialize(doc) for doc in docs]

    def create(self, data: Any) -> Dict[str, Any]:
        entity = self.model.parse(data)
        doc = entity.to_document()
        if self.model.timestamps:
            stamp(doc, self.clock())

        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.bind(collection=self.model.collection, id=str(result.inserted_id)).info(
            f"  › [DB] Created {self.model.resource}"
        )
        return self.model.serialize(doc)

    def get(self, document_id: str) -> Optional[Dict[str, Any]]:
        oid = to_object_id(document_id)
        if oid is None:
            return None
        _, doc = self._find_by_id(oid)
        return self.model.serialize(doc) if doc else None

    def update(self, document_id: str, data: Any) -> Optional[Dict[str, Any]]:
        oid = to_object_id(document_id)
        if oid is None:
            return None
        collection, current = self._find_by_id(oid)
        if current is None:
            return None

        if isinstance(data, Mapping):
            data = {**self.model.serialize(current), **self.model.normalize(data)}
        entity = self.model.parse(data)

        doc = entity.to_document()
        doc["_id"] = oid
        if self.model.timestamps:
            stamp(doc, self.clock(), created=current.get("createdAt"))

        if collection is self.collection:
            result = self.collection.replace_one({"_id": oid}, doc)
            if result.matched_count == 0:
                return None
        else:
            self.collection.insert_one(doc)
            collection.delete_one({"_id": oid})
            logger.bind(collection=self.model.collection, id=document_id).info(
                f"  › [DB] Moved {self.model.resource} out of '{collection.name}'"
            )
        logger.bind(collection=self.model.collection, id=document_id).info(
            f"  › [DB] Updated {self.model.resource}"
        )
        return self.model.serialize(doc)

    def delete(self, document_id: str) -> bool:
        oid = to_object_id(document_id)
        if oid is None:
            return False
        for collection in self.collections:
            result = collection.delete_one({"_id": oid})
            if result.deleted_count:
                logger.bind(collection=collection.name, id=document_id).info(
                    f"  › [DB] Deleted {self.model.resource}"
                )
                return True
        return False

    def resolve(self, ids: Iterable[str]) -> List[ResolvedReference]:
        """Look ``ids`` up in order; ids with no document come back with found=False."""
        ids = list(ids)
        oids = [to_object_id(i) for i in ids]
        wanted = [oid for oid in oids if oid is not None]
        found = {}
        if wanted:
            # Reversed so the current collection wins if an id is in both
            for collection in reversed(self.collections):
                found.update({doc["_id"]: doc for doc in collection.find({"_id": {"$in": wanted}})})

        resolved = []
        for ref, oid in zip(ids, oids):
            doc = found.get(oid)
            resolved.append(ResolvedReference(
                id=str(ref),
                found=doc is not None,
                document=self.model.serialize(doc) if doc is not None else None,
            ))
        return resolved
