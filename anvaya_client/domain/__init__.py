"""
Domain Models - Pure entities for the session and gateway layer.

No infrastructure dependencies. Domain logic only.
"""

from anvaya_client.domain.user import User, UserRole
from anvaya_client.domain.session import SessionState, SessionSnapshot
from anvaya_client.domain.result import ApiResult
from anvaya_client.domain.records import (
    AppointmentRequest,
    DoctorNotes,
    DoctorRegistration,
    Gender,
    LoginCredentials,
    MedicalHistory,
    PatientRegistration,
    PersonalDetails,
    SymptomsVitals,
    UploadFile,
)

__all__ = [
    "User",
    "UserRole",
    "SessionState",
    "SessionSnapshot",
    "ApiResult",
    "AppointmentRequest",
    "DoctorNotes",
    "DoctorRegistration",
    "Gender",
    "LoginCredentials",
    "MedicalHistory",
    "PatientRegistration",
    "PersonalDetails",
    "SymptomsVitals",
    "UploadFile",
]
