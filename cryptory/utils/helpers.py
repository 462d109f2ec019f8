"""Utility helper functions."""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

NEWS_PUB_DATE_FORMAT = "%a, %d %b %Y %H:%M:%S %z"


@dataclass(frozen=True)
class SortSpec:
    """Sort order for paged catalog queries."""
    field: str = "id"
    descending: bool = False


DEFAULT_SORT = SortSpec()


def parse_sort(sort: Optional[str], allowed_fields: Optional[Iterable[str]] = None) -> SortSpec:
    """Parse a "<field>[,asc|desc]" sort parameter.

    Never raises: blank, malformed or unknown-field input yields
    ``DEFAULT_SORT`` (ascending by id).

    Args:
        sort: Raw sort parameter (e.g., "korean_name,desc")
        allowed_fields: Field names accepted; any field when None

    Returns:
        Parsed SortSpec
    """
    if sort is None or not isinstance(sort, str) or not sort.strip():
        return DEFAULT_SORT

    try:
        parts = sort.split(",")
        field = parts[0].strip()
        if not field:
            return DEFAULT_SORT
        if allowed_fields is not None and field not in set(allowed_fields):
            logger.warning(f"Unknown sort field '{field}' in '{sort}', using default sort")
            return DEFAULT_SORT

        descending = len(parts) > 1 and parts[1].strip().lower() == "desc"
        return SortSpec(field=field, descending=descending)
    except Exception as e:
        logger.warning(f"Failed to parse sort parameter '{sort}': {e}. Using default sort")
        return DEFAULT_SORT


def format_timestamp(dt: datetime) -> str:
    """Format datetime to string.

    Args:
        dt: Datetime object

    Returns:
        Formatted datetime string
    """
    return dt.strftime("%Y-%m-%d %H:%M:%S")


def format_trade_time(trade_date: str, trade_time: str) -> str:
    """Combine ticker trade date and time into one readable timestamp.

    Args:
        trade_date: Date as "YYYYMMDD"
        trade_time: Time as "HHMMSS"

    Returns:
        Timestamp string (e.g., "2024-01-10 09:30:00")
    """
    return format_timestamp(datetime.strptime(f"{trade_date}{trade_time}", "%Y%m%d%H%M%S"))


def format_news_date(pub_date: str) -> str:
    """Convert an RFC-822 news publish date to "YYYY-MM-DD HH:MM".

    Raises:
        ValueError: If the date cannot be parsed
    """
    return datetime.strptime(pub_date.strip(), NEWS_PUB_DATE_FORMAT).strftime("%Y-%m-%d %H:%M")
