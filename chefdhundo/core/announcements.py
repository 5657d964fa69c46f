"""
Announcement scheduling rules shared by the API and the client SDK.
"""
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional


def to_naive_utc(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _field(announcement: Any, name: str) -> Any:
    if isinstance(announcement, Mapping):
        return announcement.get(name)
    return getattr(announcement, name, None)


def is_currently_active(announcement: Any, now: Optional[datetime] = None) -> bool:
    """
    An announcement is live when its status is ``active`` and ``now`` falls
    inside ``[start_date, end_date]``. A missing end date never expires.
    """
    now = to_naive_utc(now or datetime.utcnow())

    if _field(announcement, "status") != "active":
        return False

    start_date = to_naive_utc(_field(announcement, "start_date"))
    if start_date and start_date > now:
        return False

    end_date = to_naive_utc(_field(announcement, "end_date"))
    if end_date and end_date < now:
        return False

    return True


def select_current_announcement(
    announcements: Iterable[Any],
    now: Optional[datetime] = None,
    dismissed_ids: Iterable[Any] = (),
) -> Optional[Any]:
    """
    Pick the single banner to show: the highest-priority live announcement
    that the viewer has not dismissed. Ties keep their incoming order.
    """
    dismissed = set(dismissed_ids)
    live = [
        ann for ann in announcements
        if is_currently_active(ann, now) and _field(ann, "id") not in dismissed
    ]
    if not live:
        return None

    live.sort(key=lambda ann: _field(ann, "priority") or 0, reverse=True)
    return live[0]
