"""
Trial module.

Local usage counters limiting how many games and analyses a non-entitled
user may start before being shown the upgrade prompt.

Public API:
- TrialGate, create_trial_gate: The gate
- TrialCounterStore: Device-local persistence
- TrialAction, PaywallReason, TrialPolicy, GateDecision: Data models
- PaywallRequiredError
"""

from .models import GateDecision, PaywallReason, TrialAction, TrialPolicy, TrialUsage
from .service import DEFAULT_POLICIES, TrialGate, create_trial_gate
from .store import TrialCounterStore
from .exceptions import PaywallRequiredError

__all__ = [
    "TrialGate",
    "create_trial_gate",
    "DEFAULT_POLICIES",
    "TrialCounterStore",
    "TrialAction",
    "PaywallReason",
    "TrialPolicy",
    "TrialUsage",
    "GateDecision",
    "PaywallRequiredError",
]
