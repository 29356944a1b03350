from typing import ClassVar, Dict, List

from pydantic import Field

from trainboard.models.base import Document, Reference, TrimmedStr


class Train(Document):
    """
    A train run from ``startingAt`` to ``destination``.

    ``stops`` and ``announcements`` are non-owning references: deleting a Stop
    or an Announcement leaves its id in place. Older documents were written
    with the key ``announcemnets``; it is still accepted and rewritten as
    ``announcements`` on the next save.

    ``createdAt`` and ``updatedAt`` are maintained by the repository and are
    not part of the writable fields.
    """

    collection: ClassVar[str] = "trains"
    resource: ClassVar[str] = "Train"
    references: ClassVar[Dict[str, str]] = {"stops": "stops", "announcements": "announcements"}
    legacy_keys: ClassVar[Dict[str, str]] = {"announcemnets": "announcements"}
    timestamps: ClassVar[bool] = True

    trainId: TrimmedStr
    startingAt: TrimmedStr
    destination: TrimmedStr
    stops: List[Reference] = Field(default_factory=list)
    announcements: List[Reference] = Field(default_factory=list)
