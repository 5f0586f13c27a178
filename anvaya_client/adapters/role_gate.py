"""
Role Gate - Maps session state to the application area a user may enter.

Pure functions of a SessionSnapshot: no side effects, same input gives
the same decision, never raises.
"""

from typing import Dict, Optional
from anvaya_client.domain.session import SessionSnapshot, SessionState
from anvaya_client.domain.user import UserRole
from anvaya_client.ports.gate_port import AppArea, GateOutcome, GateDecision


ROLE_AREAS: Dict[UserRole, AppArea] = {
    UserRole.ADMIN: AppArea.ADMIN,
    UserRole.DOCTOR: AppArea.CLINICIAN,
    UserRole.PATIENT: AppArea.PATIENT,
}


def area_for_role(role) -> Optional[AppArea]:
    """Area for a role value, or None if the role is not recognised."""
    known = UserRole.parse(role)
    if known is None:
        return None
    return ROLE_AREAS.get(known)


def decide(snapshot: Optional[SessionSnapshot]) -> GateDecision:
    """
    Decide which area the session belongs in.

    Args:
        snapshot: Current session state (None is treated as anonymous)

    Returns:
        ALLOW(area), WAIT while restoring, DENY_REDIRECT_TO_LOGIN for
        anonymous visitors, DENY_NO_VALID_ROLE for an unknown role
    """
    if snapshot is None or snapshot.state is SessionState.ANONYMOUS:
        return GateDecision(
            outcome=GateOutcome.DENY_REDIRECT_TO_LOGIN,
            reason="Not signed in",
        )

    if snapshot.state is SessionState.RESTORING:
        return GateDecision(
            outcome=GateOutcome.WAIT,
            reason="Session is being restored",
        )

    area = area_for_role(snapshot.user.role)
    if area is None:
        return GateDecision(
            outcome=GateOutcome.DENY_NO_VALID_ROLE,
            reason=f"Account has no valid role assigned: {snapshot.user.role!r}",
        )

    return GateDecision(
        outcome=GateOutcome.ALLOW,
        area=area,
        reason=f"Role {snapshot.user.known_role.value} enters {area.value} area",
    )


def can_enter(snapshot: Optional[SessionSnapshot], area: AppArea) -> GateDecision:
    """
    Check entry to one specific protected area.

    Args:
        snapshot: Current session state
        area: Area being entered

    Returns:
        The decide() result, except that a user whose role belongs to a
        different area gets DENY_WRONG_AREA naming their own area
    """
    decision = decide(snapshot)
    if not decision.allowed or decision.area is area:
        return decision

    return GateDecision(
        outcome=GateOutcome.DENY_WRONG_AREA,
        area=decision.area,
        reason=f"{area.value} area is not available to this account",
    )
