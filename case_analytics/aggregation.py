"""Time bucketing and categorical distributions for one record kind.

Two base sets flow through this module and must not be confused:

* ``full``: every record supplied by the caller.
* ``windowed``: the records inside the resolved window of the selection.

Pie charts and summaries use the windowed set. Bar charts use the full set
narrowed to the selected year/month/week, except custom ranges which bucket
the windowed set by weekday.
"""
import logging
from collections import Counter
from datetime import datetime

from .adapters import Classifier, RecordAdapter
from .calendar_math import days_in_month, start_and_end_of_week, utc_weekday
from .constants import CATEGORY_COLORS, FALLBACK_COLOR, labels_for
from .models import (
    BarChartData,
    DistributionSlice,
    PeriodSummary,
    SeriesConfig,
    SeriesDimension,
    SeriesPoint,
    ViewMode,
    ViewSelection,
    Window,
)

logger = logging.getLogger(__name__)


class AggregationEngine:
    """Buckets and distributions for the records described by ``adapter``."""

    def __init__(self, adapter: RecordAdapter, locale: str = "en"):
        self.adapter = adapter
        self.labels = labels_for(locale)

    # ------------------------------------------------------------------
    # Base sets
    # ------------------------------------------------------------------

    def windowed(self, records: list, window: Window) -> list:
        """Records whose creation timestamp lies inside ``window``.

        An unbounded window passes every record through unchanged.
        """
        if window.is_unbounded:
            return list(records)
        result = []
        for record in records:
            timestamp = self.adapter.timestamp(record)
            if timestamp is not None and window.contains(timestamp):
                result.append(record)
        return result

    def _dated(self, records: list) -> list[tuple[datetime, object]]:
        dated = []
        for record in records:
            timestamp = self.adapter.timestamp(record)
            if timestamp is None:
                logger.debug("Skipping %s without creation timestamp", self.adapter.kind)
                continue
            dated.append((timestamp, record))
        return dated

    # ------------------------------------------------------------------
    # Bar chart
    # ------------------------------------------------------------------

    def bar_series(
        self,
        full: list,
        windowed: list,
        selection: ViewSelection,
        dimension: SeriesDimension,
    ) -> BarChartData:
        """Per-period classifier counts for the selected view mode."""
        classifier = self.adapter.classifier(dimension)

        if not full:
            return BarChartData(title=self.labels["no_data"], series=[], points=[])

        mode = selection.mode
        if mode == ViewMode.ALL:
            points = self._by_year(full, classifier)
        elif mode == ViewMode.YEARLY:
            points = self._by_month(full, classifier, selection.year)
        elif mode == ViewMode.MONTHLY:
            points = self._by_day(full, classifier, selection.year, selection.month)
        elif mode == ViewMode.WEEKLY:
            points = self._by_week_day(full, classifier, selection.week, selection.year)
        elif mode == ViewMode.CUSTOM:
            points = self._by_weekday(self._dated(windowed), classifier)
        else:
            raise ValueError(f"Unsupported view mode: {mode!r}")

        return BarChartData(
            title=self._title(selection, dimension),
            series=self.series_config(dimension),
            points=points,
        )

    def series_config(self, dimension: SeriesDimension) -> list[SeriesConfig]:
        classifier = self.adapter.classifier(dimension)
        return [
            SeriesConfig(
                key=classifier.series_keys[value],
                label=self.labels["values"][value],
                color=classifier.colors.get(value, FALLBACK_COLOR),
            )
            for value in classifier.values
        ]

    def _by_year(self, full: list, classifier: Classifier) -> list[SeriesPoint]:
        buckets: dict[int, dict[str, int]] = {}
        for timestamp, record in self._dated(full):
            counts = buckets.setdefault(timestamp.year, classifier.zero_counts())
            _increment(counts, classifier, record)
        return [
            SeriesPoint(period_label=str(year), counts=counts)
            for year, counts in sorted(buckets.items())
        ]

    def _by_month(self, full: list, classifier: Classifier, year: int) -> list[SeriesPoint]:
        buckets = [classifier.zero_counts() for _ in range(12)]
        for timestamp, record in self._dated(full):
            if timestamp.year == year:
                _increment(buckets[timestamp.month - 1], classifier, record)
        return [
            SeriesPoint(period_label=name, counts=counts)
            for name, counts in zip(self.labels["months"], buckets)
        ]

    def _by_day(self, full: list, classifier: Classifier, year: int, month: int) -> list[SeriesPoint]:
        buckets = [classifier.zero_counts() for _ in range(days_in_month(year, month))]
        for timestamp, record in self._dated(full):
            if timestamp.year == year and timestamp.month == month:
                _increment(buckets[timestamp.day - 1], classifier, record)
        return [
            SeriesPoint(period_label=str(day), counts=counts)
            for day, counts in enumerate(buckets, 1)
        ]

    def _by_week_day(self, full: list, classifier: Classifier, week: int, year: int) -> list[SeriesPoint]:
        start, end = start_and_end_of_week(week, year)
        week_window = Window(start=start, end=end)
        in_week = [
            (timestamp, record)
            for timestamp, record in self._dated(full)
            if week_window.contains(timestamp)
        ]
        return self._by_weekday(in_week, classifier)

    def _by_weekday(self, dated: list[tuple[datetime, object]], classifier: Classifier) -> list[SeriesPoint]:
        buckets = [classifier.zero_counts() for _ in range(7)]
        for timestamp, record in dated:
            _increment(buckets[utc_weekday(timestamp)], classifier, record)
        return [
            SeriesPoint(period_label=name, counts=counts)
            for name, counts in zip(self.labels["days"], buckets)
        ]

    def _title(self, selection: ViewSelection, dimension: SeriesDimension) -> str:
        template = self.labels["titles"][selection.mode.value]
        month = self.labels["months"][selection.month - 1]
        return template.format(
            records=self.labels["records"][self.adapter.kind],
            dimension=self.labels["by_dimension"][dimension.value],
            year=selection.year,
            month=month,
            week=selection.week,
            period=self._custom_period(selection),
        )

    def _custom_period(self, selection: ViewSelection) -> str:
        fmt = self.labels["date_format"]
        start = selection.custom_start.strftime(fmt) if selection.custom_start else None
        end = selection.custom_end.strftime(fmt) if selection.custom_end else None
        if start and end:
            return f"{start} - {end}"
        if start:
            return self.labels["from"].format(start=start)
        if end:
            return self.labels["until"].format(end=end)
        return self.labels["whole_period"]

    # ------------------------------------------------------------------
    # Distributions
    # ------------------------------------------------------------------

    def category_distribution(self, windowed: list) -> list[DistributionSlice]:
        """Category memberships, most frequent first, colored by rank.

        A record in several categories counts once for each of them.
        """
        if self.adapter.categories is None:
            return []
        counts = Counter()
        for record in windowed:
            for name in self.adapter.categories(record):
                counts[name] += 1
        return [
            DistributionSlice(
                label=name,
                value=value,
                color=CATEGORY_COLORS[index % len(CATEGORY_COLORS)],
            )
            for index, (name, value) in enumerate(counts.most_common())
        ]

    def classifier_distribution(self, windowed: list, dimension: SeriesDimension) -> list[DistributionSlice]:
        """Counts per known value in fixed order, zero counts omitted."""
        classifier = self.adapter.classifier(dimension)
        counts = {value: 0 for value in classifier.values}
        for record in windowed:
            value = classifier.classify(record)
            if value is not None:
                counts[value] += 1
        return [
            DistributionSlice(
                label=self.labels["values"].get(value, value),
                value=count,
                color=classifier.colors.get(value, FALLBACK_COLOR),
            )
            for value, count in counts.items()
            if count > 0
        ]

    def period_summary(self, windowed: list, dimension: SeriesDimension) -> PeriodSummary:
        """Windowed total plus counts for the active dimension only."""
        classifier = self.adapter.classifier(dimension)
        counts = classifier.zero_counts()
        for record in windowed:
            _increment(counts, classifier, record)
        return PeriodSummary(total=len(windowed), counts=counts)


def _increment(counts: dict[str, int], classifier: Classifier, record) -> None:
    value = classifier.classify(record)
    if value is None:
        logger.debug("Dropping record with unmapped %s value", classifier.dimension.value)
        return
    counts[classifier.series_keys[value]] += 1
