"""
Healthcare API - Named operations over the request gateway.

Each method is a thin typed wrapper around RequestGateway.request().
None of them touch the credential store; persisting the login token is
the session manager's job.
"""

from typing import Any, Dict, Iterable, Optional, Union
from urllib.parse import quote

from anvaya_client.domain.records import (
    AppointmentRequest,
    DoctorRegistration,
    LoginCredentials,
    PatientRegistration,
    UploadFile,
)
from anvaya_client.domain.result import ApiResult
from anvaya_client.sdk.gateway import RequestGateway

NO_FILES_MESSAGE = "No documents selected for upload"


def _segment(value: Any) -> str:
    """Quote a caller-supplied value for use as one path segment."""
    return quote(str(value), safe="")


def _payload(data: Any) -> Any:
    """Records serialise themselves; plain dicts pass through."""
    return data.to_dict() if hasattr(data, "to_dict") else data


class HealthcareApi:
    """
    Typed client for the healthcare backend.

    Example:
        api = HealthcareApi(gateway)
        result = await api.search_patient("P-104")
    """

    def __init__(self, gateway: RequestGateway, logout_path: Optional[str] = None):
        """
        Args:
            gateway: Request gateway used for every call
            logout_path: Server-side session invalidation path, if the backend has one
        """
        self._gateway = gateway
        self._logout_path = logout_path

    @property
    def gateway(self) -> RequestGateway:
        return self._gateway

    # Authentication

    async def sign_up(self, user_data: Dict[str, Any]) -> ApiResult:
        return await self._gateway.request("post", "/signup", _payload(user_data), requires_auth=False)

    async def login(self, credentials: Union[LoginCredentials, Dict[str, Any]]) -> ApiResult:
        """
        Exchange email/password for a token.

        Returns:
            Payload {"token": ..., "user": {...}} on success. The token is
            not stored; pass it to SessionManager.sign_in().
        """
        return await self._gateway.request("post", "/login", _payload(credentials), requires_auth=False)

    async def verify_token(self) -> ApiResult:
        """Validate the stored token; payload {"valid": bool, "user": {...}}."""
        return await self._gateway.request("get", "/verify-token")

    async def invalidate_session(self) -> ApiResult:
        """Best-effort server-side logout; succeeds trivially if not configured."""
        if not self._logout_path:
            return ApiResult.ok(None)
        return await self._gateway.request("post", self._logout_path)

    # Clinicians

    async def create_doctor(self, registration: Union[DoctorRegistration, Dict[str, Any]]) -> ApiResult:
        return await self._gateway.request("post", "/register", _payload(registration), requires_auth=False)

    async def create_patient(self, registration: Union[PatientRegistration, Dict[str, Any]]) -> ApiResult:
        return await self._gateway.request("post", "/patients", _payload(registration))

    async def search_patient(self, patient_id: str) -> ApiResult:
        return await self._gateway.request("get", f"/patients/search/{_segment(patient_id)}")

    async def verify_patient_otp(self, patient_id: str, otp: str) -> ApiResult:
        return await self._gateway.request(
            "post", f"/patients/verify-otp/{_segment(patient_id)}", {"otp": otp}
        )

    async def get_patient_detail(self, patient_id: str) -> ApiResult:
        return await self._gateway.request("get", f"/patients/{_segment(patient_id)}")

    async def create_appointment(self, appointment: Union[AppointmentRequest, Dict[str, Any]]) -> ApiResult:
        return await self._gateway.request("post", "/appointments", _payload(appointment))

    # Documents

    async def upload_documents(self, patient_id: str, files: Iterable[UploadFile]) -> ApiResult:
        """
        Upload one or more documents to a patient record.

        Args:
            patient_id: Patient ID
            files: Documents, each sent as a "files" part

        Returns:
            Backend payload for the updated record, or a failure if no
            files were given
        """
        files = list(files)
        if not files:
            return ApiResult.fail(NO_FILES_MESSAGE)
        return await self._gateway.request(
            "post",
            f"/patients/{_segment(patient_id)}/documents",
            {"files": files},
            is_multipart=True,
        )

    async def delete_document(self, patient_id: str, doc_url: str) -> ApiResult:
        # doc_url is usually a full URL, so it must be quoted as one segment
        return await self._gateway.request(
            "delete", f"/patients/{_segment(patient_id)}/documents/{_segment(doc_url)}"
        )

    # Administration

    async def get_admin_dashboard(self) -> ApiResult:
        return await self._gateway.request("get", "/admin/dashboard")

    # Patients

    async def get_my_profile(self) -> ApiResult:
        return await self._gateway.request("get", "/my-profile")

    async def get_my_appointments(self, status: Optional[str] = None) -> ApiResult:
        params = {"status": status} if status else None
        return await self._gateway.request("get", "/patient/appointments", params)

    async def cancel_appointment(self, appointment_id: str) -> ApiResult:
        return await self._gateway.request("put", f"/patient/appointments/{_segment(appointment_id)}/cancel")
