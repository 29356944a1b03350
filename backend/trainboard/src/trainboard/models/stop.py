from typing import ClassVar, Dict, List, Literal

from pydantic import Field

from trainboard.models.base import Document, Reference, TrimmedStr


STATUSES = ("coming", "passed")


class Stop(Document):
    """
    A stop on a train's route.

    ``usersLeaving`` points at User documents, which live outside this
    service; only the id shape is checked.
    """

    collection: ClassVar[str] = "stops"
    resource: ClassVar[str] = "Stop"
    references: ClassVar[Dict[str, str]] = {"usersLeaving": "users"}

    name: TrimmedStr
    usersLeaving: List[Reference] = Field(default_factory=list)
    status: Literal["coming", "passed"] = "coming"
