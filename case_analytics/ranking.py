"""Participant leaderboards."""
from collections import Counter
from collections.abc import Callable, Iterable

from .adapters import RecordAdapter
from .models import RankingEntry, SpeedEntry, UserRef


def rank_participants(records: Iterable, extract: Callable[[object], Iterable[UserRef]]) -> list[RankingEntry]:
    """Count identities per record role, most frequent first.

    Identities without an id or display name are skipped. The first identity
    object seen for an id is kept. Equal counts stay in first-encounter order.
    """
    counts = Counter()
    identities: dict[str, UserRef] = {}
    for record in records:
        for user in extract(record):
            if not user.id or not user.display_name:
                continue
            identities.setdefault(user.id, user)
            counts[user.id] += 1
    return [
        RankingEntry(identity=identities[user_id], count=count)
        for user_id, count in counts.most_common()
    ]


def rank_fastest(records: Iterable, adapter: RecordAdapter) -> list[SpeedEntry]:
    """Completers ordered by mean completion time, fastest first."""
    totals: dict[str, float] = {}
    counts: dict[str, int] = {}
    identities: dict[str, UserRef] = {}
    for record in records:
        days = completion_days(record, adapter)
        if days is None:
            continue
        for user in adapter.roles["completers"](record):
            if not user.id or not user.display_name:
                continue
            identities.setdefault(user.id, user)
            totals[user.id] = totals.get(user.id, 0.0) + days
            counts[user.id] = counts.get(user.id, 0) + 1

    entries = [
        SpeedEntry(
            identity=identities[user_id],
            average_days=totals[user_id] / counts[user_id],
            count=counts[user_id],
        )
        for user_id in identities
    ]
    return sorted(entries, key=lambda entry: entry.average_days)


def completion_days(record, adapter: RecordAdapter) -> float | None:
    """Fractional days from creation to completion of a terminal record."""
    if adapter.completed_at is None or not adapter.is_terminal(record):
        return None
    created = adapter.timestamp(record)
    completed = adapter.completed_at(record)
    if created is None or completed is None:
        return None
    return (completed - created).total_seconds() / 86400.0
