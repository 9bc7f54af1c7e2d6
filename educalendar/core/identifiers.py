import uuid
from datetime import datetime, timezone


def new_document_id() -> str:
    return uuid.uuid4().hex


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. ``2024-05-01T09:30:00.000Z``."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
