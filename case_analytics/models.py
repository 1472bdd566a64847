"""Data models for records, view selections and dashboard outputs."""
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .calendar_math import iso_year, parse_timestamp, week_of_year


class ExportModel(BaseModel):
    """Base for records read from the dashboard export (accepts field aliases)."""
    model_config = ConfigDict(populate_by_name=True)


class UserRef(ExportModel):
    """A participant as embedded in a record."""
    id: str | None = Field(default=None, alias="_id")
    display_name: str | None = Field(default=None, alias="name")
    username: str | None = None
    avatar: str | None = None


class Category(ExportModel):
    id: str | None = Field(default=None, alias="_id")
    name: str


class Answer(ExportModel):
    """A proposed solution attached to a case."""
    id: str | None = Field(default=None, alias="_id")
    creator: UserRef | None = None
    approved: UserRef | None = None
    approved_date: datetime | None = None
    financial_approved: UserRef | None = None

    @field_validator("approved_date", mode="before")
    @classmethod
    def _parse_approved_date(cls, value):
        return parse_timestamp(value)


class MetricScore(ExportModel):
    user: UserRef | None = None
    score: float | None = None


class Case(ExportModel):
    """Incident report or improvement suggestion."""
    id: str | None = Field(default=None, alias="_id")
    case_number: int | None = None
    created: datetime | None = Field(default=None, alias="date")
    type: str | None = None
    priority: str | None = None
    status: str | None = None
    categories: list[Category] = []
    creator: UserRef | None = None
    answers: list[Answer] = []
    metric_scores: list[MetricScore] = Field(default=[], alias="metricScores")
    calculated_rating: float | None = Field(default=None, alias="calculatedRating")

    @field_validator("created", mode="before")
    @classmethod
    def _parse_created(cls, value):
        return parse_timestamp(value)


class TaskActivity(ExportModel):
    type: str | None = None
    created_by: UserRef | None = Field(default=None, alias="createdBy")
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_created_at(cls, value):
        return parse_timestamp(value)


class Task(ExportModel):
    """Work item, optionally spawned from a case."""
    id: str | None = Field(default=None, alias="_id")
    task_number: int | None = Field(default=None, alias="taskNumber")
    title: str | None = None
    status: str | None = None
    priority: str | None = None
    created_at: datetime | None = Field(default=None, alias="createdAt")
    completed_at: datetime | None = Field(default=None, alias="completedAt")
    creator: UserRef | None = None
    assignee: UserRef | None = None
    activities: list[TaskActivity] = []

    @field_validator("created_at", "completed_at", mode="before")
    @classmethod
    def _parse_timestamps(cls, value):
        return parse_timestamp(value)


class ViewMode(str, Enum):
    ALL = "all"
    YEARLY = "yearly"
    MONTHLY = "monthly"
    WEEKLY = "weekly"
    CUSTOM = "custom"


class SeriesDimension(str, Enum):
    TYPE = "type"
    PRIORITY = "priority"
    STATUS = "status"


class ViewSelection(BaseModel):
    """Time scope chosen on the dashboard. Only fields relevant to ``mode`` matter."""
    model_config = ConfigDict(frozen=True)

    mode: ViewMode = ViewMode.ALL
    year: int = Field(ge=1, le=9999)
    month: int = Field(default=1, ge=1, le=12)
    week: int = Field(default=1, ge=1, le=53)
    custom_start: date | None = None
    custom_end: date | None = None

    @classmethod
    def current(cls, today: date | None = None, mode: ViewMode = ViewMode.ALL) -> "ViewSelection":
        """Selection pointing at today's year, month and ISO week.

        Weeks are numbered within the calendar year. Late-December days that
        belong to ISO week 1 of the next year get week 53, which rolls over to
        the week containing them; early-January days owned by the previous
        ISO year fall back to week 1.
        """
        today = today or date.today()
        week = week_of_year(today)
        owner = iso_year(today)
        if owner > today.year:
            week = 53
        elif owner < today.year:
            week = 1
        return cls(mode=mode, year=today.year, month=today.month, week=week)

    def with_custom_start(self, start: date | None) -> "ViewSelection":
        """Set the custom start, dropping an end that now precedes it."""
        end = self.custom_end
        if start is not None and end is not None and start > end:
            end = None
        return self.model_copy(update={"custom_start": start, "custom_end": end})

    def with_custom_end(self, end: date | None) -> "ViewSelection":
        return self.model_copy(update={"custom_end": end})


class Window(BaseModel):
    """Inclusive time range; a missing bound is open."""
    model_config = ConfigDict(frozen=True)

    start: datetime | None = None
    end: datetime | None = None

    @property
    def is_unbounded(self) -> bool:
        return self.start is None and self.end is None

    def contains(self, timestamp: datetime) -> bool:
        if self.start is not None and timestamp < self.start:
            return False
        if self.end is not None and timestamp > self.end:
            return False
        return True


UNBOUNDED = Window()


class SeriesConfig(BaseModel):
    """One bar series: row key, display label and color."""
    key: str
    label: str
    color: str


class SeriesPoint(BaseModel):
    """One time bucket with a count per classifier."""
    period_label: str
    counts: dict[str, int]

    def as_row(self) -> dict:
        return {"period_label": self.period_label, **self.counts}


class BarChartData(BaseModel):
    title: str
    series: list[SeriesConfig]
    points: list[SeriesPoint]


class DistributionSlice(BaseModel):
    """Pie chart segment."""
    label: str
    value: int
    color: str


class RankingEntry(BaseModel):
    identity: UserRef
    count: int


class SpeedEntry(BaseModel):
    """Average completion time of one completer."""
    identity: UserRef
    average_days: float
    count: int


class AverageRollup(BaseModel):
    average: float | None = None
    count: int = 0


class PeriodSummary(BaseModel):
    """Total windowed records plus counts for the active series dimension."""
    total: int
    counts: dict[str, int]


class CaseRankings(BaseModel):
    creators: list[RankingEntry] = []
    solution_providers: list[RankingEntry] = []
    approvers: list[RankingEntry] = []
    raters: list[RankingEntry] = []


class TaskRankings(BaseModel):
    creators: list[RankingEntry] = []
    completers: list[RankingEntry] = []
    commenters: list[RankingEntry] = []
    fastest: list[SpeedEntry] = []


class Dashboard(BaseModel):
    """Everything computed for one record kind and one view selection."""
    selection: ViewSelection
    window: Window
    available_years: list[int]
    dimension: SeriesDimension
    bar_chart: BarChartData
    priority_distribution: list[DistributionSlice]
    summary: PeriodSummary


class CaseDashboard(Dashboard):
    category_distribution: list[DistributionSlice]
    type_distribution: list[DistributionSlice]
    average_rating: AverageRollup
    rankings: CaseRankings


class TaskDashboard(Dashboard):
    status_distribution: list[DistributionSlice]
    average_completion: AverageRollup
    rankings: TaskRankings
