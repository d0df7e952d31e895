"""
Trial gate.

Decides whether a non-entitled user may start another game or analysis
session. Entitled callers bypass the gate entirely; entitlement itself is
decided upstream by modules.entitlements, never here.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from shared.config import Settings

from .exceptions import PaywallRequiredError
from .models import (
    GateDecision,
    PaywallReason,
    TrialAction,
    TrialPolicy,
    TrialState,
    TrialUsage,
)
from .store import TrialCounterStore

logger = logging.getLogger(__name__)


DEFAULT_POLICIES = {
    TrialAction.GAME: TrialPolicy(limit=3, window=timedelta(days=1)),
    TrialAction.ANALYSIS: TrialPolicy(limit=1, window=timedelta(days=1)),
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TrialGate:
    """
    Usage-counter policy for gated actions.

    Each action has its own policy and counter; exhausting one never
    affects the other.
    """

    def __init__(
        self,
        store: TrialCounterStore,
        policies: Optional[dict[TrialAction, TrialPolicy]] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._store = store
        self._policies = {**DEFAULT_POLICIES, **(policies or {})}
        self._clock = clock
        self._state: TrialState = store.load()

    def policy(self, action: TrialAction) -> TrialPolicy:
        return self._policies[action]

    def _current(self, action: TrialAction) -> TrialUsage:
        now = self._clock()
        usage = self._state.usage.get(action)
        window = self._policies[action].window
        if usage is None or (window is not None and now - usage.window_started_at >= window):
            return TrialUsage(count=0, window_started_at=now)
        return usage

    def usage(self, action: TrialAction) -> TrialUsage:
        return self._current(action)

    def remaining(self, action: TrialAction) -> int:
        return max(self._policies[action].limit - self._current(action).count, 0)

    def can_play(self, action: TrialAction) -> bool:
        return self.remaining(action) > 0

    def record(self, action: TrialAction) -> TrialUsage:
        """Count one use of an action and persist the counters."""
        current = self._current(action)
        updated = TrialUsage(count=current.count + 1, window_started_at=current.window_started_at)
        self._state.usage[action] = updated
        self._store.save(self._state)
        return updated

    def check(self, action: TrialAction, entitled: bool) -> GateDecision:
        if entitled:
            return GateDecision(allowed=True)
        remaining = self.remaining(action)
        if remaining <= 0:
            return GateDecision(
                allowed=False,
                paywall_reason=PaywallReason.for_action(action),
                remaining=0,
            )
        return GateDecision(allowed=True, remaining=remaining)

    def start(self, action: TrialAction, entitled: bool) -> GateDecision:
        """
        Check the gate and, when a non-entitled caller is let through,
        record the use.

        Returns:
            GateDecision; remaining reflects the use just recorded
        """
        decision = self.check(action, entitled)
        if not decision.allowed:
            logger.info(f"Trial exhausted for {action.value}; showing paywall")
            return decision
        if entitled:
            return decision
        usage = self.record(action)
        return GateDecision(
            allowed=True,
            remaining=max(self._policies[action].limit - usage.count, 0),
        )

    def require(self, action: TrialAction, entitled: bool) -> GateDecision:
        """Like start(), but raises PaywallRequiredError on denial."""
        decision = self.start(action, entitled)
        if not decision.allowed:
            raise PaywallRequiredError(decision.paywall_reason)
        return decision

    def reset(self) -> None:
        self._state = TrialState()
        self._store.clear()


def policies_from_settings(settings: Settings) -> dict[TrialAction, TrialPolicy]:
    def window(hours: Optional[int]) -> Optional[timedelta]:
        return timedelta(hours=hours) if hours else None

    return {
        TrialAction.GAME: TrialPolicy(
            limit=settings.trial_game_limit,
            window=window(settings.trial_game_window_hours),
        ),
        TrialAction.ANALYSIS: TrialPolicy(
            limit=settings.trial_analysis_limit,
            window=window(settings.trial_analysis_window_hours),
        ),
    }


def create_trial_gate(settings: Settings) -> TrialGate:
    """Build a gate from settings, persisting to settings.trial_state_path."""
    return TrialGate(
        TrialCounterStore(settings.trial_state_path),
        policies=policies_from_settings(settings),
    )
