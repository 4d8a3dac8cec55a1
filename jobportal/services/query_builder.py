"""Google site-search query construction."""

from collections.abc import Sequence
from datetime import date, timedelta
from enum import Enum
from urllib.parse import quote

from jobportal.errors import ValidationError

GOOGLE_SEARCH_URL = "https://www.google.com/search?q="

# Characters encodeURIComponent leaves alone, beyond the unreserved set
_URI_COMPONENT_SAFE = "!~*'()"


class DateRange(str, Enum):
    """How far back search results may go."""

    TODAY = "today"
    THIS_WEEK = "this-week"
    THIS_MONTH = "this-month"
    ANY = "any"


# "this-month" is a fixed lookback, not the first day of the calendar month
LOOKBACK_DAYS = {
    DateRange.TODAY: 0,
    DateRange.THIS_WEEK: 7,
    DateRange.THIS_MONTH: 31,
}


def build_site_filter(sites: Sequence[str]) -> str:
    """``(site:a OR site:b)`` in input order, or an empty string."""
    if not sites:
        return ""
    return "(" + " OR ".join(f"site:{site}" for site in sites) + ")"


def compute_after_date(date_range: str | DateRange | None, today: date | None = None) -> str:
    """Earliest result date as ``YYYY-MM-DD``. Unknown ranges mean today."""
    today = today or date.today()
    try:
        days = LOOKBACK_DAYS.get(DateRange(date_range), 0)
    except ValueError:
        days = 0
    return (today - timedelta(days=days)).isoformat()


def build_search_query(
    keyword: str,
    date_range: str | DateRange | None,
    sites: Sequence[str],
    exclude_hybrid: bool = False,
    exclude_onsite: bool = False,
    today: date | None = None,
) -> str:
    """Build the query string for a remote-job search.

    Shape: ``{site filter} "{keyword}" after:{date} Remote [-hybrid] [-onsite]``.
    With no sites the query keeps its single leading space.
    """
    keyword = (keyword or "").strip()
    if not keyword:
        raise ValidationError("Please enter a keyword.")

    site_filter = build_site_filter(sites)
    after_date = compute_after_date(date_range, today)

    query = f'{site_filter} "{keyword}" after:{after_date} Remote'
    if exclude_hybrid:
        query += " -hybrid"
    if exclude_onsite:
        query += " -onsite"
    return query


def search_url(query: str) -> str:
    """Google search URL for a query."""
    return GOOGLE_SEARCH_URL + quote(query, safe=_URI_COMPONENT_SAFE)
