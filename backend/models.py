from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

MAX_LINKS = 1000
MAX_NAME_LENGTH = 100
MAX_URL_LENGTH = 2048
REQUIRED_FIELDS = ("name", "url", "category")


class Category(str, Enum):
    SERVERS = "servers"
    INFRASTRUCTURE = "infrastructure"
    MEDIA = "media"
    WEBSITES = "websites"


CATEGORIES = frozenset(c.value for c in Category)


class ValidationReason(str, Enum):
    NOT_AN_ARRAY = "NotAnArray"
    TOO_MANY = "TooMany"
    NOT_AN_OBJECT = "NotAnObject"
    MISSING_FIELDS = "MissingFields"
    INVALID_NAME = "InvalidName"
    DUPLICATE_NAME = "DuplicateName"
    INVALID_URL = "InvalidURL"
    INVALID_CATEGORY = "InvalidCategory"


class LinkViolation(BaseModel):
    reason: ValidationReason
    message: str
    index: Optional[int] = None  # None for collection-level failures
    fields: List[str] = Field(default_factory=list)
