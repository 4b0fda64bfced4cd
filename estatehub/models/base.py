from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def new_document_id() -> str:
    """Return an opaque, URL-safe identifier for a new document."""
    return uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
