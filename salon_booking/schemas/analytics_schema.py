"""Site visit analytics schemas."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class DeviceType(str, Enum):
    MOBILE = "mobile"
    TABLET = "tablet"
    DESKTOP = "desktop"


@dataclass(frozen=True)
class ClientContext:
    """
    Identity of one browsing client, passed explicitly to the tracker.

    ``session_id`` lives for one browser session; ``visitor_id`` persists
    across sessions. Callers own both and thread them through each call.
    """
    session_id: str
    visitor_id: str
    user_agent: str = ""
    referrer: Optional[str] = None


class SiteVisit(BaseModel):
    """A single recorded page view."""
    id: Optional[str] = None
    tenant_id: str
    page_path: str
    referrer: Optional[str] = None
    user_agent: Optional[str] = None
    session_id: str
    visitor_id: str
    device_type: DeviceType
    browser: Optional[str] = None
    os: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)


class VisitStats(BaseModel):
    """Aggregated visit statistics over a trailing window."""
    total_visits: int = 0
    unique_visitors: int = 0
    unique_sessions: int = 0
    avg_daily_visits: float = 0.0
    mobile_percentage: float = 0.0
    desktop_percentage: float = 0.0
    tablet_percentage: float = 0.0


class DailyVisitCount(BaseModel):
    date: str
    count: int
