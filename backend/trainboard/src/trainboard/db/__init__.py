from .mongo_client import TrainboardMongoClient, open_database
from .repository import DocumentRepository

__all__ = [
    "TrainboardMongoClient",
    "open_database",
    "DocumentRepository",
]
