"""
Bulk event copy: replicate a week's or a month's lessons forward (or back).

Week mode takes the Sunday-to-Saturday window around ``from_date`` and
shifts every event in it by the whole-week part of ``to_date - from_date``.
Month mode takes every event in ``from_date``'s calendar month and shifts it
by the month distance to ``to_date``; an event whose day does not exist in
the target month (e.g. the 31st into April) is dropped rather than clamped.
Windows are clipped to the representable calendar, and a copy whose target
would fall outside it is dropped the same way.

A target slot (date + time) that is already taken is skipped, so running the
same copy twice creates nothing the second time. Inserts are sequential and
not transactional: a failure part-way leaves earlier copies in place and the
copy can simply be re-run.
"""

import calendar
import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional, Tuple

from educalendar.core.enums import CopyType
from educalendar.core.identifiers import new_document_id
from educalendar.core.validation import parse_iso_date
from educalendar.db import collections
from educalendar.db.store import Document, DocumentStore

logger = logging.getLogger(__name__)


def week_window(day: date) -> Tuple[date, date]:
    """Sunday-starting 7-day window containing ``day`` (both ends inclusive), clipped to the calendar range."""
    days_since_sunday = (day.weekday() + 1) % 7
    start = max(day.toordinal() - days_since_sunday, date.min.toordinal())
    end = min(day.toordinal() - days_since_sunday + 6, date.max.toordinal())
    return date.fromordinal(start), date.fromordinal(end)


def whole_week_offset(from_date: date, to_date: date) -> int:
    """Day delta floored to a multiple of 7 (floor, so negative deltas round down)."""
    day_diff = (to_date - from_date).days
    return (day_diff // 7) * 7


def month_offset(from_date: date, to_date: date) -> int:
    return (to_date.year - from_date.year) * 12 + (to_date.month - from_date.month)


def shift_months(day: date, months: int) -> Optional[date]:
    """``day`` moved by ``months`` calendar months, or None when that day overflows the target month."""
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    if year < 1 or year > 9999:
        return None
    if day.day > calendar.monthrange(year, month)[1]:
        return None
    return date(year, month, day.day)


def select_week_events(events: Iterable[Document], from_date: date) -> List[Document]:
    start, end = week_window(from_date)
    start_str, end_str = start.isoformat(), end.isoformat()
    # YYYY-MM-DD is fixed width, so string order is date order.
    return [e for e in events if isinstance(e.data.get("date"), str) and start_str <= e.data["date"] <= end_str]


def select_month_events(events: Iterable[Document], from_date: date) -> List[Document]:
    prefix = f"{from_date.year:04d}-{from_date.month:02d}"
    return [e for e in events if isinstance(e.data.get("date"), str) and e.data["date"].startswith(prefix)]


def plan_copies(
    copy_type: str, events: Iterable[Document], from_date: date, to_date: date
) -> List[Tuple[Document, date]]:
    """Pair each source event with its target date; dropped events are left out."""
    planned: List[Tuple[Document, date]] = []
    if copy_type == CopyType.WEEK:
        offset = timedelta(days=whole_week_offset(from_date, to_date))
        for event in select_week_events(events, from_date):
            source = parse_iso_date(event.data["date"])
            if source is None:
                logger.warning("Skipping event %s with unparseable date %r", event.id, event.data["date"])
                continue
            try:
                target = source + offset
            except OverflowError:
                logger.debug("Dropping event %s: %s shifted by %s leaves the calendar", event.id, source, offset)
                continue
            planned.append((event, target))
    elif copy_type == CopyType.MONTH:
        months = month_offset(from_date, to_date)
        for event in select_month_events(events, from_date):
            source = parse_iso_date(event.data["date"])
            if source is None:
                logger.warning("Skipping event %s with unparseable date %r", event.id, event.data["date"])
                continue
            target = shift_months(source, months)
            if target is None:
                logger.debug("Dropping event %s: day %d does not exist %+d months later", event.id, source.day, months)
                continue
            planned.append((event, target))
    return planned


async def copy_events(
    store: DocumentStore, copy_type: str, from_date: date, to_date: date
) -> List[Document]:
    """Copy events and return only the newly created ones."""
    source_events = await store.all(collections.EVENTS)
    created: List[Document] = []

    for event, target in plan_copies(copy_type, source_events, from_date, to_date):
        target_str = target.isoformat()
        time_value = event.data.get("time")
        existing = await store.find(collections.EVENTS, {"date": target_str, "time": time_value})
        if existing:
            continue

        data = {
            "date": target_str,
            "time": time_value,
            "studentId": event.data.get("studentId"),
            "notes": event.data.get("notes") or "",
        }
        event_id = new_document_id()
        await store.set(collections.EVENTS, event_id, data)
        created.append(Document(event_id, data))

    logger.info(
        "Copied %d %s event(s) from %s to %s", len(created), copy_type, from_date.isoformat(), to_date.isoformat()
    )
    return created
