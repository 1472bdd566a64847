"""Dashboard orchestration: scope, aggregate, rank, roll up."""
import logging
from datetime import date

from .adapters import CASE_ADAPTER, TASK_ADAPTER, RecordAdapter
from .aggregation import AggregationEngine
from .cache import ResultCache, fingerprint
from .config import load_settings
from .models import (
    CaseDashboard,
    CaseRankings,
    Dashboard,
    SeriesDimension,
    TaskDashboard,
    TaskRankings,
    ViewSelection,
)
from .ranking import rank_fastest, rank_participants
from .rollups import average_completion_days, average_rating
from .scope import available_years, reconcile_year, resolve_window

logger = logging.getLogger(__name__)


class DashboardBuilder:
    """Computes every dashboard output for one record kind.

    Results are memoized by a fingerprint of the records and the selection,
    so repeated calls with unchanged inputs skip the aggregation passes.
    """

    adapter: RecordAdapter

    def __init__(self, cache: ResultCache | None = None, locale: str | None = None):
        if cache is None or locale is None:
            settings = load_settings()
            if cache is None:
                cache = ResultCache(settings.cache_size)
            if locale is None:
                locale = settings.locale
        self.cache = cache
        self.locale = locale
        self.engine = AggregationEngine(self.adapter, locale)

    def build(
        self,
        records: list,
        selection: ViewSelection,
        dimension: SeriesDimension | None = None,
        today: date | None = None,
    ) -> Dashboard:
        """Build the dashboard for ``selection`` over the complete record set."""
        today = today or date.today()
        dimension = dimension or self.adapter.dimensions[0]
        self.adapter.classifier(dimension)  # ValueError for a dimension this kind lacks

        key = fingerprint(records, self.adapter.kind, selection, dimension.value, today.year, self.locale)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Dashboard cache hit for %s (%s)", self.adapter.kind, key[:12])
            return cached.model_copy(deep=True)

        years = available_years(records, self.adapter, today)
        selection = reconcile_year(selection, years)
        window = resolve_window(selection)
        windowed = self.engine.windowed(records, window)
        logger.debug(
            "%s dashboard: %d records, %d in window %s",
            self.adapter.kind, len(records), len(windowed), window,
        )

        common = dict(
            selection=selection,
            window=window,
            available_years=years,
            dimension=dimension,
            bar_chart=self.engine.bar_series(records, windowed, selection, dimension),
            priority_distribution=self.engine.classifier_distribution(windowed, SeriesDimension.PRIORITY),
            summary=self.engine.period_summary(windowed, dimension),
        )
        dashboard = self._assemble(windowed, common)

        self.cache.save(key, dashboard)
        # callers get their own copy; the cached instance stays untouched
        return dashboard.model_copy(deep=True)

    def _assemble(self, windowed: list, common: dict) -> Dashboard:
        raise NotImplementedError

    def _rank(self, windowed: list, role: str):
        return rank_participants(windowed, self.adapter.roles[role])


class CaseDashboardBuilder(DashboardBuilder):
    """Cases: type/priority dimensions, categories, ratings."""

    adapter = CASE_ADAPTER

    def _assemble(self, windowed: list, common: dict) -> CaseDashboard:
        return CaseDashboard(
            **common,
            category_distribution=self.engine.category_distribution(windowed),
            type_distribution=self.engine.classifier_distribution(windowed, SeriesDimension.TYPE),
            average_rating=average_rating(windowed, self.adapter),
            rankings=CaseRankings(
                creators=self._rank(windowed, "creators"),
                solution_providers=self._rank(windowed, "solution_providers"),
                approvers=self._rank(windowed, "approvers"),
                raters=self._rank(windowed, "raters"),
            ),
        )


class TaskDashboardBuilder(DashboardBuilder):
    """Tasks: status/priority dimensions, completion times."""

    adapter = TASK_ADAPTER

    def _assemble(self, windowed: list, common: dict) -> TaskDashboard:
        return TaskDashboard(
            **common,
            status_distribution=self.engine.classifier_distribution(windowed, SeriesDimension.STATUS),
            average_completion=average_completion_days(windowed, self.adapter),
            rankings=TaskRankings(
                creators=self._rank(windowed, "creators"),
                completers=self._rank(windowed, "completers"),
                commenters=self._rank(windowed, "commenters"),
                fastest=rank_fastest(windowed, self.adapter),
            ),
        )


def builder_for(kind: str, cache: ResultCache | None = None, locale: str | None = None) -> DashboardBuilder:
    builders = {"case": CaseDashboardBuilder, "task": TaskDashboardBuilder}
    if kind not in builders:
        raise ValueError(f"Unknown record kind: {kind!r}")
    return builders[kind](cache=cache, locale=locale)
