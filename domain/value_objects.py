from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal, Optional

from domain.models import Identity

SessionEventType = Literal["sign_in", "sign_out", "expired", "restored"]


@dataclass(frozen=True)
class Route:
    path: str
    view: str  # key into the console's view registry
    protected: bool = True
    title: str = ""
    nav_label: Optional[str] = None  # shown in the navbar when set


@dataclass(frozen=True)
class SessionEvent:
    """A change of the signed-in identity, as seen by subscribers."""

    type: SessionEventType
    old_user: Optional[Identity]
    new_user: Optional[Identity]
    reason: str = ""
    ts_utc: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
