"""Classifier keys, chart colors and label tables."""

# Cyclic palette assigned to categories by rank.
CATEGORY_COLORS = [
    "#FF6384",
    "#36A2EB",
    "#FFCE56",
    "#4BC0C0",
    "#9966FF",
    "#FF9F40",
    "#C9CBCF",
    "#F7A35C",
    "#8085E9",
    "#F15C80",
]

FALLBACK_COLOR = "#CCCCCC"

PRIORITY_COLORS = {
    "HIGH": "#F87171",
    "MEDIUM": "#FCD34D",
    "LOW": "#76c554",
}

TYPE_COLORS = {
    "PROBLEM": "#DE4444",
    "SUGGESTION": "#22C55E",
}

STATUS_COLORS = {
    "TODO": "#94A3B8",
    "IN_PROGRESS": "#3B82F6",
    "DONE": "#22C55E",
}

# Display order matters: charts and summaries iterate these in order.
PRIORITY_VALUES = ("HIGH", "MEDIUM", "LOW")
TYPE_VALUES = ("PROBLEM", "SUGGESTION")
STATUS_VALUES = ("TODO", "IN_PROGRESS", "DONE")

# Series keys used in bar chart rows and period summaries.
PRIORITY_SERIES_KEYS = {
    "HIGH": "high_priority",
    "MEDIUM": "medium_priority",
    "LOW": "low_priority",
}
TYPE_SERIES_KEYS = {
    "PROBLEM": "problems",
    "SUGGESTION": "suggestions",
}
STATUS_SERIES_KEYS = {
    "TODO": "todo",
    "IN_PROGRESS": "in_progress",
    "DONE": "done",
}

COMMENT_ACTIVITY = "COMMENT"


LABELS = {
    "en": {
        "values": {
            "HIGH": "High",
            "MEDIUM": "Medium",
            "LOW": "Low",
            "PROBLEM": "Problems",
            "SUGGESTION": "Suggestions",
            "TODO": "Not started",
            "IN_PROGRESS": "In progress",
            "DONE": "Completed",
        },
        "months": [
            "January", "February", "March", "April", "May", "June",
            "July", "August", "September", "October", "November", "December",
        ],
        "days": [
            "Monday", "Tuesday", "Wednesday", "Thursday",
            "Friday", "Saturday", "Sunday",
        ],
        "no_data": "No data",
        "by_dimension": {
            "type": "by type",
            "priority": "by priority",
            "status": "by status",
        },
        "records": {"case": "cases", "task": "tasks"},
        "titles": {
            "all": "Total {records} by year ({dimension})",
            "yearly": "Comparison by month ({year}) ({dimension})",
            "monthly": "Comparison by day ({month} {year}) ({dimension})",
            "weekly": "Comparison by day (Week {week}, {year}) ({dimension})",
            "custom": "Total by day of week ({period}) ({dimension})",
        },
        "whole_period": "Whole period",
        "from": "From {start}",
        "until": "Until {end}",
        "date_format": "%Y-%m-%d",
    },
    "bg": {
        "values": {
            "HIGH": "Висок",
            "MEDIUM": "Среден",
            "LOW": "Нисък",
            "PROBLEM": "Проблеми",
            "SUGGESTION": "Предложения",
            "TODO": "Незапочнати",
            "IN_PROGRESS": "В процес",
            "DONE": "Завършени",
        },
        "months": [
            "Януари", "Февруари", "Март", "Април", "Май", "Юни",
            "Юли", "Август", "Септември", "Октомври", "Ноември", "Декември",
        ],
        "days": [
            "Понеделник", "Вторник", "Сряда", "Четвъртък",
            "Петък", "Събота", "Неделя",
        ],
        "no_data": "Няма данни",
        "by_dimension": {
            "type": "по тип",
            "priority": "по приоритет",
            "status": "по статус",
        },
        "records": {"case": "случаи", "task": "задачи"},
        "titles": {
            "all": "Общо {records} по години ({dimension})",
            "yearly": "Сравнение по месеци ({year}) ({dimension})",
            "monthly": "Сравнение по дни ({month} {year}) ({dimension})",
            "weekly": "Сравнение по дни (Седмица {week}, {year}) ({dimension})",
            "custom": "Общо по ден от седмицата ({period}) ({dimension})",
        },
        "whole_period": "Цял период",
        "from": "От {start}",
        "until": "До {end}",
        "date_format": "%d.%m.%Y",
    },
}


def labels_for(locale: str) -> dict:
    """Label table for ``locale``; raises ValueError for unknown locales."""
    if locale not in LABELS:
        raise ValueError(f"Unsupported locale: {locale!r}")
    return LABELS[locale]
