from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from datetime import date, datetime, timedelta, timezone
from typing import Any

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from career_insights.schemas.insights import DashboardView, OutlookBadge, SalaryChartRow

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "Unable to load industry insights"
UNKNOWN = "Unknown"
DEFAULT_UPDATE_INTERVAL = timedelta(days=7)

MINUTES_IN_DAY = 1440
MINUTES_IN_MONTH = 43200
MINUTES_IN_TWO_MONTHS = 86400

_DEMAND_TONES = {"high": "green", "medium": "yellow", "low": "red"}
_OUTLOOK_BADGES = {
    "positive": OutlookBadge(icon="trending-up", tone="green"),
    "neutral": OutlookBadge(icon="line-chart", tone="yellow"),
    "negative": OutlookBadge(icon="trending-down", tone="red"),
}


def _is_number(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # Integers beyond float range cannot be charted or formatted.
        return False



def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list) else []


def _as_text_list(value: Any) -> list[str]:
    return [str(item) for item in _as_list(value) if item is not None]


def _salary_k(value: Any) -> float:
    return value / 1000 if _is_number(value) else 0


def salary_chart_rows(salary_ranges: list[Any]) -> list[SalaryChartRow]:
    rows: list[SalaryChartRow] = []
    for item in salary_ranges:
        entry = item if isinstance(item, Mapping) else {}
        rows.append(
            SalaryChartRow(
                name=str(entry.get("role") or "Unknown Role"),
                min=_salary_k(entry.get("min")),
                max=_salary_k(entry.get("max")),
                median=_salary_k(entry.get("median")),
            )
        )
    return rows


def demand_level_tone(level: Any) -> str:
    return _DEMAND_TONES.get(str(level).lower(), "gray")


def market_outlook_badge(outlook: Any) -> OutlookBadge:
    return _OUTLOOK_BADGES.get(str(outlook).lower(), OutlookBadge(icon="line-chart", tone="gray"))


def parse_timestamp(value: Any) -> datetime:
    """Parse a datetime, an epoch in milliseconds or a date string. Naive values are UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif _is_number(value):
        parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    elif isinstance(value, str):
        parsed = date_parser.parse(value)
    else:
        raise ValueError(f"unsupported timestamp type {type(value).__name__}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _round(value: float) -> int:
    # Half-up, not banker's rounding.
    return math.floor(value + 0.5)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_distance(target: datetime, base: datetime) -> str:
    """Human distance between two instants with an "in"/"ago" suffix."""
    seconds = abs((target - base).total_seconds())
    minutes = _round(seconds / 60)

    if minutes < 2:
        text = "less than a minute" if minutes == 0 else "1 minute"
    elif minutes < 45:
        text = _plural(minutes, "minute")
    elif minutes < 90:
        text = "about 1 hour"
    elif minutes < MINUTES_IN_DAY:
        text = f"about {_plural(_round(minutes / 60), 'hour')}"
    elif minutes < 2520:
        text = "1 day"
    elif minutes < MINUTES_IN_MONTH:
        text = _plural(_round(minutes / MINUTES_IN_DAY), "day")
    elif minutes < MINUTES_IN_TWO_MONTHS:
        text = f"about {_plural(_round(minutes / MINUTES_IN_MONTH), 'month')}"
    else:
        later, earlier = (target, base) if target >= base else (base, target)
        delta = relativedelta(later, earlier)
        months = delta.years * 12 + delta.months
        if months < 12:
            text = _plural(_round(minutes / MINUTES_IN_MONTH), "month")
        else:
            years, remainder = divmod(months, 12)
            if remainder < 3:
                text = f"about {_plural(years, 'year')}"
            elif remainder < 9:
                text = f"over {_plural(years, 'year')}"
            else:
                text = f"almost {_plural(years + 1, 'year')}"

    return f"in {text}" if target > base else f"{text} ago"


def build_dashboard_view(insights: Any, now: datetime | None = None) -> DashboardView:
    if not isinstance(insights, Mapping):
        return DashboardView(available=False, message=UNAVAILABLE_MESSAGE)

    now = parse_timestamp(now) if now else datetime.now(timezone.utc)
    growth_rate = insights.get("growthRate")
    growth_rate = growth_rate if _is_number(growth_rate) else 0
    demand_level = insights.get("demandLevel") or UNKNOWN
    market_outlook = insights.get("marketOutlook") or UNKNOWN
    last_updated = insights.get("lastUpdated") or now
    next_update = insights.get("nextUpdate") or now + DEFAULT_UPDATE_INTERVAL

    try:
        last_updated_label = parse_timestamp(last_updated).strftime("%d/%m/%Y")
        next_update_label = format_distance(parse_timestamp(next_update), now)
    except (ValueError, OverflowError, OSError) as exc:
        logger.info("dashboard_insights_date_unparsable error=%s", exc)
        last_updated_label = UNKNOWN
        next_update_label = UNKNOWN

    return DashboardView(
        salary_chart=salary_chart_rows(_as_list(insights.get("salaryRanges"))),
        growth_rate=growth_rate,
        growth_rate_label=f"{growth_rate:.1f}%",
        demand_level=str(demand_level),
        demand_tone=demand_level_tone(demand_level),
        market_outlook=str(market_outlook),
        outlook=market_outlook_badge(market_outlook),
        top_skills=_as_text_list(insights.get("topSkills")),
        key_trends=_as_text_list(insights.get("keyTrends")),
        recommended_skills=_as_text_list(insights.get("recommendedSkills")),
        last_updated=last_updated_label,
        next_update=next_update_label,
    )
