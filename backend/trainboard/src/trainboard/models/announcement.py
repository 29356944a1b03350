from typing import ClassVar, Optional

from trainboard.models.base import Document, TrimmedStr


class Announcement(Document):
    """
    A free-text message attached to trains.

    Older deployments stored announcements in ``announcemnets``; those
    documents are still readable and move to ``announcements`` when updated.
    """

    collection: ClassVar[str] = "announcements"
    legacy_collection: ClassVar[Optional[str]] = "announcemnets"
    resource: ClassVar[str] = "Announcement"

    text: TrimmedStr
