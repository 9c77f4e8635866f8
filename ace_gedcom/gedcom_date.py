"""
gedcom_date.py - Year extraction for GEDCOM date values.

GEDCOM dates carry calendar qualifiers and free text ("ABT 1850", "BET 1801 AND 1805",
"(Oct.12,1929)"). ged4py parses them into DateValue objects; only the year is
needed for convergence scoring. Ranges and periods use their first date, and
phrases or unparsed strings fall back to the first four-digit run.

Module: ace_gedcom.gedcom_date
"""

import logging
import re
from typing import Optional, Union

from ged4py.date import DateValue

logger = logging.getLogger(__name__)

YEAR_RE = re.compile(r'(\d{4})')
MIN_YEAR = 1000
MAX_YEAR = 9999


def _date_value(date: Union[DateValue, str]) -> Optional[DateValue]:
    if isinstance(date, DateValue):
        return date
    try:
        return DateValue.parse(date)
    except Exception as e:
        logger.debug(f"Failed to parse date string '{date}': {e}")
        return None


def _calendar_year(value: DateValue) -> Optional[int]:
    """Year of the single, first-of-range or first-of-period calendar date."""
    kind = getattr(value, 'kind', None)
    if kind is None or kind.name == "PHRASE":
        return None
    calendar_date = getattr(value, 'date1', None) or getattr(value, 'date', None)
    year = getattr(calendar_date, 'year', None)
    if isinstance(year, int) and MIN_YEAR <= year <= MAX_YEAR:
        return year
    return None


def extract_year(date: Union[DateValue, str, None]) -> Optional[int]:
    """
    Extract the year from a GEDCOM date.

    Args:
        date (Union[DateValue, str, None]): The DATE value, as parsed by ged4py or raw.

    Returns:
        Optional[int]: The four-digit year, or None if absent.
    """
    if not date:
        return None
    value = _date_value(date)
    if value is not None:
        year = _calendar_year(value)
        if year is not None:
            return year
    text = date if isinstance(date, str) else (getattr(value, 'phrase', None) or str(date))
    match = YEAR_RE.search(text)
    if match:
        return int(match.group(1))
    logger.debug('extract_year: no year found in date: "%s"', date)
    return None
