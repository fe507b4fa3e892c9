from datetime import date, datetime
import logging
import zoneinfo
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_ZONE = 'America/Sao_Paulo'


def _zone(tz_name: Optional[str]):
    try:
        return zoneinfo.ZoneInfo(tz_name or DEFAULT_ZONE)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        logger.warning('Unknown timezone %s, falling back to %s', tz_name, DEFAULT_ZONE)
        return zoneinfo.ZoneInfo(DEFAULT_ZONE)


def now_local(tz_name: Optional[str] = None) -> datetime:
    """Current datetime in the operator's timezone."""
    return datetime.now(_zone(tz_name))


def today_local(tz_name: Optional[str] = None) -> date:
    """Today's date in the operator's timezone; used to split upcoming/completed trips."""
    return now_local(tz_name).date()
