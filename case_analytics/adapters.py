"""Record adapters: how the engine reads Cases and Tasks."""
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from datetime import datetime

from .constants import (
    COMMENT_ACTIVITY,
    PRIORITY_COLORS,
    PRIORITY_SERIES_KEYS,
    PRIORITY_VALUES,
    STATUS_COLORS,
    STATUS_SERIES_KEYS,
    STATUS_VALUES,
    TYPE_COLORS,
    TYPE_SERIES_KEYS,
    TYPE_VALUES,
)
from .models import Case, SeriesDimension, Task, UserRef

RoleExtractor = Callable[[object], Iterable[UserRef]]


@dataclass(frozen=True)
class Classifier:
    """A single-valued record field with a fixed, ordered set of known values."""
    dimension: SeriesDimension
    accessor: Callable[[object], str | None]
    values: tuple[str, ...]
    series_keys: dict[str, str]
    colors: dict[str, str]

    def classify(self, record) -> str | None:
        """Known value of the record, or None when it matches no classifier."""
        raw = self.accessor(record)
        if not raw:
            return None
        value = str(raw).upper()
        return value if value in self.values else None

    def zero_counts(self) -> dict[str, int]:
        return {self.series_keys[value]: 0 for value in self.values}


@dataclass(frozen=True)
class RecordAdapter:
    """Field accessors for one record kind."""
    kind: str
    timestamp: Callable[[object], datetime | None]
    classifiers: dict[SeriesDimension, Classifier]
    roles: dict[str, RoleExtractor] = field(default_factory=dict)
    categories: Callable[[object], list[str]] | None = None
    rating: Callable[[object], float | None] | None = None
    completed_at: Callable[[object], datetime | None] | None = None
    terminal_status: str | None = None

    @property
    def dimensions(self) -> list[SeriesDimension]:
        return list(self.classifiers)

    def classifier(self, dimension: SeriesDimension) -> Classifier:
        try:
            return self.classifiers[dimension]
        except KeyError:
            raise ValueError(
                f"{self.kind} records have no {dimension.value!r} dimension"
            ) from None

    def is_terminal(self, record) -> bool:
        status = self.classifiers.get(SeriesDimension.STATUS)
        return status is not None and status.classify(record) == self.terminal_status


def _priority(record) -> str | None:
    return record.priority


PRIORITY_CLASSIFIER = Classifier(
    dimension=SeriesDimension.PRIORITY,
    accessor=_priority,
    values=PRIORITY_VALUES,
    series_keys=PRIORITY_SERIES_KEYS,
    colors=PRIORITY_COLORS,
)


# --- Cases ---

def _case_creators(case: Case) -> Iterator[UserRef]:
    if case.creator:
        yield case.creator


def _case_solution_providers(case: Case) -> Iterator[UserRef]:
    for answer in case.answers:
        if answer.creator:
            yield answer.creator


def _case_approvers(case: Case) -> Iterator[UserRef]:
    for answer in case.answers:
        if answer.approved:
            yield answer.approved


def _case_raters(case: Case) -> Iterator[UserRef]:
    # One rating spans several metric scores; count each rater once per case.
    seen = set()
    for score in case.metric_scores:
        user = score.user
        if user is None or user.id in seen:
            continue
        seen.add(user.id)
        yield user


CASE_ADAPTER = RecordAdapter(
    kind="case",
    timestamp=lambda case: case.created,
    classifiers={
        SeriesDimension.TYPE: Classifier(
            dimension=SeriesDimension.TYPE,
            accessor=lambda case: case.type,
            values=TYPE_VALUES,
            series_keys=TYPE_SERIES_KEYS,
            colors=TYPE_COLORS,
        ),
        SeriesDimension.PRIORITY: PRIORITY_CLASSIFIER,
    },
    roles={
        "creators": _case_creators,
        "solution_providers": _case_solution_providers,
        "approvers": _case_approvers,
        "raters": _case_raters,
    },
    categories=lambda case: [category.name for category in case.categories],
    rating=lambda case: case.calculated_rating,
)


# --- Tasks ---

def _task_creators(task: Task) -> Iterator[UserRef]:
    if task.creator:
        yield task.creator


def _task_completers(task: Task) -> Iterator[UserRef]:
    if task.assignee and TASK_ADAPTER.is_terminal(task):
        yield task.assignee


def _task_commenters(task: Task) -> Iterator[UserRef]:
    for activity in task.activities:
        if activity.created_by and (activity.type or "").upper() == COMMENT_ACTIVITY:
            yield activity.created_by


TASK_ADAPTER = RecordAdapter(
    kind="task",
    timestamp=lambda task: task.created_at,
    classifiers={
        SeriesDimension.STATUS: Classifier(
            dimension=SeriesDimension.STATUS,
            accessor=lambda task: task.status,
            values=STATUS_VALUES,
            series_keys=STATUS_SERIES_KEYS,
            colors=STATUS_COLORS,
        ),
        SeriesDimension.PRIORITY: PRIORITY_CLASSIFIER,
    },
    roles={
        "creators": _task_creators,
        "completers": _task_completers,
        "commenters": _task_commenters,
    },
    completed_at=lambda task: task.completed_at,
    terminal_status="DONE",
)
