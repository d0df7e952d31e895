"""
Trial module data models.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TrialAction(str, Enum):
    """Gated actions, counted independently."""

    GAME = "game"
    ANALYSIS = "analysis"


class PaywallReason(str, Enum):
    """Tag shown with the upgrade prompt so it can name the blocked action."""

    GAME = "game"
    ANALYSIS = "analysis"

    @classmethod
    def for_action(cls, action: TrialAction) -> "PaywallReason":
        return cls(action.value)


class TrialPolicy(BaseModel):
    """
    How many times an action may be taken per window.

    window=None means a fixed lifetime quota that never resets.
    """

    model_config = {"frozen": True}

    limit: int = Field(..., ge=0)
    window: Optional[timedelta] = None


class TrialUsage(BaseModel):
    """Counter for one action within its current window."""

    count: int = Field(default=0, ge=0)
    window_started_at: datetime


class TrialState(BaseModel):
    """Everything persisted on the device."""

    usage: dict[TrialAction, TrialUsage] = Field(default_factory=dict)


class GateDecision(BaseModel):
    """Whether a gated action may start, and the paywall tag if not."""

    model_config = {"frozen": True}

    allowed: bool
    paywall_reason: Optional[PaywallReason] = None
    remaining: Optional[int] = Field(
        None,
        description="Uses left in the window after this decision; None when not gated",
    )
