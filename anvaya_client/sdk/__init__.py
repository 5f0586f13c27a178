"""
SDK - Request gateway, named API operations, session manager and client facade.
"""

from anvaya_client.sdk.gateway import (
    RequestGateway,
    extract_error_message,
    NO_TOKEN_MESSAGE,
    FALLBACK_MESSAGE,
)
from anvaya_client.sdk.api import HealthcareApi
from anvaya_client.sdk.session_manager import SessionManager
from anvaya_client.sdk.client import AnvayaClient

__all__ = [
    "RequestGateway",
    "extract_error_message",
    "NO_TOKEN_MESSAGE",
    "FALLBACK_MESSAGE",
    "HealthcareApi",
    "SessionManager",
    "AnvayaClient",
]
