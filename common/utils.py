"""
Utility functions for accessing settings and parsing request input
"""
from datetime import date
import logging

from django.utils.dateparse import parse_date

from .models import SiteSettings

logger = logging.getLogger(__name__)


def get_site_settings():
    """Get site settings singleton"""
    return SiteSettings.load()


def parse_positive_int(value, default=None):
    """Parse a query-string integer, default for missing or invalid values"""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def parse_iso_date(value):
    """
    Parse an ISO date (YYYY-MM-DD, optionally followed by a time part).
    Returns None for anything that is not one.
    """
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        return None
    try:
        return parse_date(value.strip()[:10])
    except ValueError:
        logger.debug(f"Ignoring invalid date value: {value!r}")
        return None


def blank_to_none(value):
    """Strip strings; empty strings become None"""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value
