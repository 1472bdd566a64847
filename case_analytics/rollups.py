"""Scalar averages over windowed records."""
from .adapters import RecordAdapter
from .models import AverageRollup
from .ranking import completion_days


def average_rating(windowed: list, adapter: RecordAdapter) -> AverageRollup:
    """Mean precomputed rating; records without one are left out entirely."""
    if adapter.rating is None:
        return AverageRollup()
    ratings = [adapter.rating(record) for record in windowed]
    ratings = [rating for rating in ratings if rating is not None]
    if not ratings:
        return AverageRollup()
    return AverageRollup(average=sum(ratings) / len(ratings), count=len(ratings))


def average_completion_days(windowed: list, adapter: RecordAdapter) -> AverageRollup:
    days = [completion_days(record, adapter) for record in windowed]
    days = [value for value in days if value is not None]
    if not days:
        return AverageRollup()
    return AverageRollup(average=sum(days) / len(days), count=len(days))
