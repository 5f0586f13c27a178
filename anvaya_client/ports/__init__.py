"""
Ports - Interfaces for credential storage and area gating.

Hexagonal architecture: These define WHAT we need, not HOW.
Adapters provide the HOW.
"""

from anvaya_client.ports.credential_port import CredentialStorePort
from anvaya_client.ports.gate_port import AppArea, GateOutcome, GateDecision

__all__ = [
    "CredentialStorePort",
    "AppArea",
    "GateOutcome",
    "GateDecision",
]
