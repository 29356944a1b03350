"""
Document Models

Base class for the persisted entities. Each entity declares its fields with
Pydantic; this module turns Pydantic's errors into field-level
``FieldError`` lists and converts between API dicts and MongoDB documents.
"""

from datetime import datetime
from typing import Annotated, Any, ClassVar, Dict, List, Mapping, Optional, Type, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import AfterValidator, BaseModel, ConfigDict, StringConstraints
from pydantic import ValidationError as PydanticValidationError

from trainboard.exceptions import FieldError, ValidationError


TIMESTAMP_FIELDS = ("createdAt", "updatedAt")


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Return ``value`` as an ObjectId, or None when it is not a valid id."""
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str):
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def _check_reference(value: str) -> str:
    oid = to_object_id(value)
    if oid is None:
        raise ValueError("must be a 24 character hex ObjectId")
    return str(oid)


# Required string, trimmed, empty after trimming is rejected
TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Weak reference to a document in another collection; existence is not checked
Reference = Annotated[str, AfterValidator(_check_reference)]


class ResolvedReference(BaseModel):
    """Outcome of looking up one reference. Dangling references have found=False."""

    id: str
    found: bool
    document: Optional[Dict[str, Any]] = None


D = TypeVar("D", bound="Document")


class Document(BaseModel):
    model_config = ConfigDict(extra="ignore")

    collection: ClassVar[str]
    resource: ClassVar[str]
    # field name -> collection it points at
    references: ClassVar[Dict[str, str]] = {}
    # stored/input key -> field name
    legacy_keys: ClassVar[Dict[str, str]] = {}
    # collection older documents were written to, read alongside ``collection``
    legacy_collection: ClassVar[Optional[str]] = None
    timestamps: ClassVar[bool] = False

    @classmethod
    def normalize(cls, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Rename legacy keys to their field names; the field name wins when both are given."""
        out = dict(data)
        for old, new in cls.legacy_keys.items():
            if old in out:
                value = out.pop(old)
                out.setdefault(new, value)
        return out

    @classmethod
    def check(cls, data: Any) -> List[FieldError]:
        """Validate ``data`` and return every field-level error (empty when valid)."""
        try:
            cls.parse(data)
        except ValidationError as exc:
            return exc.errors
        return []

    @classmethod
    def parse(cls: Type[D], data: Any) -> D:
        if not isinstance(data, Mapping):
            raise ValidationError([FieldError("body", "must be a JSON object")], resource=cls.resource)
        try:
            return cls.model_validate(cls.normalize(data))
        except PydanticValidationError as exc:
            errors = [
                FieldError(".".join(str(part) for part in err["loc"]) or "body", err["msg"])
                for err in exc.errors()
            ]
            raise ValidationError(errors, resource=cls.resource) from None

    def to_document(self) -> Dict[str, Any]:
        """Field values as stored in MongoDB, references cast to ObjectId."""
        doc = self.model_dump()
        for name in self.references:
            doc[name] = [ObjectId(ref) for ref in doc[name]]
        return doc

    @classmethod
    def serialize(cls, doc: Mapping[str, Any]) -> Dict[str, Any]:
        """Stored MongoDB document -> API dict with a string ``id``."""
        stored = cls.normalize(doc)
        out: Dict[str, Any] = {"id": str(stored["_id"])}
        for name, field in cls.model_fields.items():
            if name in stored:
                value = stored[name]
            else:
                value = field.get_default(call_default_factory=True)
            if name in cls.references:
                value = [str(ref) for ref in value or []]
            out[name] = value
        if cls.timestamps:
            for name in TIMESTAMP_FIELDS:
                out[name] = stored.get(name)
        return out


def stamp(doc: Dict[str, Any], now: datetime, created: Optional[datetime] = None) -> Dict[str, Any]:
    doc["createdAt"] = created or now
    doc["updatedAt"] = now
    return doc
