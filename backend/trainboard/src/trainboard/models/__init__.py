from .base import Document, ResolvedReference, to_object_id
from .announcement import Announcement
from .stop import STATUSES, Stop
from .train import Train

__all__ = [
    "Document",
    "ResolvedReference",
    "to_object_id",
    "Announcement",
    "STATUSES",
    "Stop",
    "Train",
]
