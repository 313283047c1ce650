"""
Per-tenant site visit tracking and statistics.

Client identity (session and visitor IDs) is passed in explicitly through
a ClientContext rather than read from ambient browser storage.
"""

import logging
import re
import uuid
from collections import Counter
from datetime import datetime, timedelta
from typing import Optional

from salon_booking.config import settings
from salon_booking.repositories.base import RepositoryError, VisitRepository
from salon_booking.schemas.analytics_schema import (
    ClientContext,
    DailyVisitCount,
    DeviceType,
    SiteVisit,
    VisitStats,
)

logger = logging.getLogger(__name__)

_TABLET_RE = re.compile(r"(tablet|ipad|playbook|silk)|(android(?!.*mobi))", re.IGNORECASE)
_MOBILE_RE = re.compile(
    r"Mobile|Android|iP(hone|od)|IEMobile|BlackBerry|Kindle|Silk-Accelerated"
    r"|(hpw|web)OS|Opera M(obi|ini)"
)

# Checked in order; Edge and Opera UAs also contain "Chrome".
_BROWSERS: list[tuple[tuple[str, ...], str]] = [
    (("Firefox",), "Firefox"),
    (("Edg",), "Edge"),
    (("OPR", "Opera"), "Opera"),
    (("Chrome",), "Chrome"),
    (("Safari",), "Safari"),
]
_OPERATING_SYSTEMS: list[tuple[tuple[str, ...], str]] = [
    (("Android",), "Android"),
    (("iPhone", "iPad", "iOS"), "iOS"),
    (("Win",), "Windows"),
    (("Mac",), "macOS"),
    (("Linux",), "Linux"),
]


def new_client_context(user_agent: str = "", referrer: Optional[str] = None) -> ClientContext:
    """Start a brand-new visitor with a fresh session."""
    return ClientContext(
        session_id=str(uuid.uuid4()),
        visitor_id=str(uuid.uuid4()),
        user_agent=user_agent,
        referrer=referrer,
    )


def detect_device_type(user_agent: str) -> DeviceType:
    if _TABLET_RE.search(user_agent):
        return DeviceType.TABLET
    if _MOBILE_RE.search(user_agent):
        return DeviceType.MOBILE
    return DeviceType.DESKTOP


def _first_match(user_agent: str, table: list[tuple[tuple[str, ...], str]]) -> str:
    for needles, name in table:
        if any(n in user_agent for n in needles):
            return name
    return "Unknown"


def detect_browser(user_agent: str) -> str:
    return _first_match(user_agent, _BROWSERS)


def detect_os(user_agent: str) -> str:
    return _first_match(user_agent, _OPERATING_SYSTEMS)


class VisitTracker:
    """Records page views and aggregates them per tenant."""

    def __init__(self, visits: VisitRepository) -> None:
        self._visits = visits

    async def track_page_visit(
        self, client: ClientContext, tenant_id: str, page_path: str
    ) -> SiteVisit:
        visit = SiteVisit(
            tenant_id=tenant_id,
            page_path=page_path,
            referrer=client.referrer,
            user_agent=client.user_agent or None,
            session_id=client.session_id,
            visitor_id=client.visitor_id,
            device_type=detect_device_type(client.user_agent),
            browser=detect_browser(client.user_agent),
            os=detect_os(client.user_agent),
        )
        stored = await self._visits.insert(visit)
        logger.debug("Visit tracked: tenant=%s path=%s", tenant_id, page_path)
        return stored

    async def get_visit_stats(
        self,
        tenant_id: str,
        days: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> Optional[VisitStats]:
        """Aggregate the trailing ``days`` window. Returns None when there are no visits."""
        days = days or settings.analytics.default_stats_days
        try:
            visits = await self._window(tenant_id, days, now)
        except RepositoryError:
            logger.exception("Fetching visit stats failed for tenant=%s", tenant_id)
            return None
        if not visits:
            return None

        total = len(visits)
        devices = Counter(v.device_type for v in visits)

        def pct(device: DeviceType) -> float:
            return round(devices[device] * 100 / total, 2)

        return VisitStats(
            total_visits=total,
            unique_visitors=len({v.visitor_id for v in visits}),
            unique_sessions=len({v.session_id for v in visits}),
            avg_daily_visits=round(total / days, 2),
            mobile_percentage=pct(DeviceType.MOBILE),
            desktop_percentage=pct(DeviceType.DESKTOP),
            tablet_percentage=pct(DeviceType.TABLET),
        )

    async def get_daily_visits(
        self,
        tenant_id: str,
        days: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> list[DailyVisitCount]:
        """Visit counts per calendar day, oldest first."""
        days = days or settings.analytics.default_stats_days
        try:
            visits = await self._window(tenant_id, days, now)
        except RepositoryError:
            logger.exception("Fetching daily visits failed for tenant=%s", tenant_id)
            return []
        by_date = Counter(v.created_at.date().isoformat() for v in visits)
        return [DailyVisitCount(date=d, count=c) for d, c in sorted(by_date.items())]

    async def _window(
        self, tenant_id: str, days: int, now: Optional[datetime]
    ) -> list[SiteVisit]:
        since = (now or datetime.now()) - timedelta(days=days)
        return await self._visits.list_since(tenant_id, since)
