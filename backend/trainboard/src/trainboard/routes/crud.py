"""
Generic CRUD routes

Builds the list/create/read/update/delete endpoints for one document model.
Request bodies are taken as raw JSON so that every field rule is checked by
the model and reported together in a single ValidationError.
"""

from typing import Any, List, Type

from fastapi import APIRouter, Body, Depends, Response
from pymongo.database import Database

from trainboard.db.repository import DocumentRepository
from trainboard.exceptions import NotFoundError
from trainboard.models.base import Document
from trainboard.routes.deps import get_db


def build_crud_router(model: Type[Document], prefix: str, tags: List[str]) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=tags)

    def get_repository(db: Database = Depends(get_db)) -> DocumentRepository:
        return DocumentRepository(db, model)

    @router.get("")
    def list_documents(repo: DocumentRepository = Depends(get_repository)):
        return repo.list()

    @router.post("", status_code=201)
    def create_document(payload: Any = Body(...), repo: DocumentRepository = Depends(get_repository)):
        return repo.create(payload)

    @router.get("/{document_id}")
    def read_document(document_id: str, repo: DocumentRepository = Depends(get_repository)):
        doc = repo.get(document_id)
        if doc is None:
            raise NotFoundError(model.resource, document_id)
        return doc

    @router.put("/{document_id}")
    def update_document(
        document_id: str,
        payload: Any = Body(...),
        repo: DocumentRepository = Depends(get_repository),
    ):
        doc = repo.update(document_id, payload)
        if doc is None:
            raise NotFoundError(model.resource, document_id)
        return doc

    @router.delete("/{document_id}", status_code=204)
    def delete_document(document_id: str, repo: DocumentRepository = Depends(get_repository)):
        if not repo.delete(document_id):
            raise NotFoundError(model.resource, document_id)
        return Response(status_code=204)

    return router
