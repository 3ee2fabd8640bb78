from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(ts):
    """
    Normalizes a stored timestamp to an ISO-8601 UTC string.
    Accepts datetimes (including Firestore's DatetimeWithNanoseconds),
    objects exposing `.datetime`, and passes strings/None through.
    """
    if ts is None:
        return None
    if isinstance(ts, str):
        return ts

    dt = getattr(ts, "datetime", ts)
    if isinstance(dt, datetime):
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc).isoformat()
    return str(ts)


def serialize_document(doc_id: str, data: dict) -> dict:
    """
    Shapes a stored document for the wire: `_id` first, then fields,
    timestamps as ISO strings.
    """
    out = {"_id": doc_id}
    for key, value in (data or {}).items():
        if key in ("createdAt", "updatedAt"):
            out[key] = to_iso(value)
        else:
            out[key] = value
    return out
