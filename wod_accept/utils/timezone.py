"""Timezone conversion and formatting utilities"""
from datetime import datetime
import pytz


def to_utc(dt: datetime) -> datetime:
    """
    Convert a datetime to an aware UTC datetime.
    
    Naive datetimes are taken to be UTC already; the provider's class
    times carry no zone.
    
    Args:
        dt: Datetime object (naive or timezone-aware)
    
    Returns:
        Datetime object in UTC
    """
    if dt.tzinfo is None:
        dt = pytz.UTC.localize(dt)
    
    return dt.astimezone(pytz.UTC)


def format_timestamp(dt: datetime) -> str:
    """
    Render a timestamp the way operators see it in notifications.
    
    Example: ``2024-10-15 18:30:00 +0000 UTC``
    """
    return to_utc(dt).strftime("%Y-%m-%d %H:%M:%S %z %Z")
