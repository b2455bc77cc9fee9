"""Search and dashboard statistics over element collections."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel, Field

from content_engines.config import runtime_config
from content_engines.elements.models import BaseCardElement


class CollectionStats(BaseModel):
    kind: str
    total: int = 0
    active: int = 0
    inactive: int = 0
    recently_updated: int = 0
    last_updated: Optional[datetime] = None


class WorkspaceSummary(BaseModel):
    total: int = 0
    active: int = 0
    inactive: int = 0
    recently_updated: int = 0
    by_kind: Dict[str, CollectionStats] = Field(default_factory=dict)


class ActivityEntry(BaseModel):
    kind: str
    element_id: str
    title: str
    updated_at: datetime


class StatisticHighlights(BaseModel):
    high_value: int = 0
    total_value: float = 0


def filter_elements(elements: Sequence[BaseCardElement], term: Optional[str]) -> List[BaseCardElement]:
    """Case-insensitive match on title, description, id and (statistics) label."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(elements)
    results = []
    for item in elements:
        haystacks = [item.title, item.description, item.id, getattr(item, "label", "")]
        if any(needle in (value or "").lower() for value in haystacks):
            results.append(item)
    return results


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def collection_stats(
    kind: str,
    elements: Sequence[BaseCardElement],
    now: Optional[datetime] = None,
    recent_days: Optional[int] = None,
) -> CollectionStats:
    now = now or datetime.now(timezone.utc)
    days = recent_days if recent_days is not None else runtime_config.get_recent_days()
    cutoff = now - timedelta(days=days)
    updated = [_aware(item.updated_at) for item in elements if item.updated_at]
    active = sum(1 for item in elements if item.enabled)
    return CollectionStats(
        kind=kind,
        total=len(elements),
        active=active,
        inactive=len(elements) - active,
        recently_updated=sum(1 for ts in updated if ts > cutoff),
        last_updated=max(updated) if updated else None,
    )


def summarize(
    collections: Mapping[str, Sequence[BaseCardElement]],
    now: Optional[datetime] = None,
    recent_days: Optional[int] = None,
) -> WorkspaceSummary:
    summary = WorkspaceSummary()
    for kind, elements in collections.items():
        stats = collection_stats(kind, elements, now=now, recent_days=recent_days)
        summary.by_kind[kind] = stats
        summary.total += stats.total
        summary.active += stats.active
        summary.inactive += stats.inactive
        summary.recently_updated += stats.recently_updated
    return summary


def recent_activity(collections: Mapping[str, Sequence[BaseCardElement]], limit: int = 10) -> List[ActivityEntry]:
    entries = [
        ActivityEntry(
            kind=kind,
            element_id=item.id,
            title=item.title or getattr(item, "name", ""),
            updated_at=_aware(item.updated_at),
        )
        for kind, elements in collections.items()
        for item in elements
        if item.updated_at
    ]
    entries.sort(key=lambda entry: entry.updated_at, reverse=True)
    return entries[:limit]


def statistic_highlights(elements: Sequence[BaseCardElement], threshold: float = 100) -> StatisticHighlights:
    values = [float(getattr(item, "value", 0) or 0) for item in elements]
    return StatisticHighlights(
        high_value=sum(1 for value in values if value > threshold),
        total_value=sum(values),
    )
