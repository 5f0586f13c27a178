"""
Gate Port - Types for role-based area decisions.

The UI asks the gate before entering a protected area:
- Which area does this session belong in?
- May this session enter a given area?
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AppArea(Enum):
    """Role-scoped top-level areas of the application."""
    ADMIN = "admin"
    CLINICIAN = "clinician"
    PATIENT = "patient"


class GateOutcome(Enum):
    """Gate decision outcome."""
    ALLOW = "allow"
    WAIT = "wait"                                      # session still restoring
    DENY_REDIRECT_TO_LOGIN = "deny_redirect_to_login"  # anonymous visitor
    DENY_NO_VALID_ROLE = "deny_no_valid_role"          # authenticated, unknown role
    DENY_WRONG_AREA = "deny_wrong_area"                # valid role, other area


@dataclass(frozen=True)
class GateDecision:
    """
    Result of a gate check.

    area is set for ALLOW, and for DENY_WRONG_AREA where it names the area
    the user does belong in.
    """
    outcome: GateOutcome
    area: Optional[AppArea] = None
    reason: str = ""

    @property
    def allowed(self) -> bool:
        return self.outcome is GateOutcome.ALLOW

    @property
    def redirect_to_login(self) -> bool:
        return self.outcome is GateOutcome.DENY_REDIRECT_TO_LOGIN
