"""
Request Gateway - Single entry point for every call to the backend.

Attaches the session credential, negotiates JSON vs. multipart bodies and
folds every outcome into an ApiResult.
"""

import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Tuple

import httpx

from anvaya_client.config import ClientConfig
from anvaya_client.domain.records import UploadFile
from anvaya_client.domain.result import ApiResult
from anvaya_client.ports.credential_port import CredentialStorePort

logger = logging.getLogger(__name__)

NO_TOKEN_MESSAGE = "Authentication token not available"
FALLBACK_MESSAGE = "Something went wrong with the request"


def extract_error_message(payload: Any, transport_message: Optional[str] = None) -> str:
    """
    Pick the most specific failure message.

    Priority:
    1. payload["error"] when it is a non-empty string
    2. payload["errors"] list joined with ", "
    3. the transport / HTTP error description
    4. FALLBACK_MESSAGE

    Args:
        payload: Decoded error body (any shape, often None)
        transport_message: Description from the HTTP layer

    Returns:
        Message for ApiResult.fail
    """
    if isinstance(payload, Mapping):
        error = payload.get("error")
        if isinstance(error, str) and error.strip():
            return error

        errors = payload.get("errors")
        if isinstance(errors, (list, tuple)) and errors:
            return ", ".join(str(e) for e in errors)

    if transport_message:
        return transport_message

    return FALLBACK_MESSAGE


def _decode_body(response: httpx.Response) -> Any:
    """JSON payload, raw text if not JSON, None if empty."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _split_multipart(body: Optional[Mapping[str, Any]]) -> Tuple[Dict[str, str], List[tuple]]:
    """
    Split a multipart body into form fields and file parts.

    UploadFile values (or lists of them) become file parts under their
    field name; other list items are dropped. Everything else is sent
    as a text field.
    """
    fields: Dict[str, str] = {}
    files: List[tuple] = []

    for name, value in (body or {}).items():
        if isinstance(value, UploadFile):
            files.append((name, value.as_multipart()))
        elif isinstance(value, (list, tuple)):
            files.extend((name, v.as_multipart()) for v in value if isinstance(v, UploadFile))
        elif value is not None:
            fields[name] = value if isinstance(value, str) else str(value)

    return fields, files


class RequestGateway:
    """
    Issues one HTTP call per request() and normalizes the outcome.

    The credential store is only read here, never written.

    Example:
        gateway = RequestGateway(store, base_url="https://host/api")
        result = await gateway.request("get", "/my-profile")
        if result.success:
            profile = result.data
        else:
            show(result.message)
    """

    def __init__(
        self,
        credentials: CredentialStorePort,
        base_url: str,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the gateway.

        Args:
            credentials: Store holding the session credential
            base_url: API root (including any /api prefix)
            timeout: Per-request timeout in seconds
            client: Pre-built AsyncClient (base_url must already be set)
            transport: Transport for a new client (e.g. httpx.MockTransport)
        """
        self._credentials = credentials
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        credentials: CredentialStorePort,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "RequestGateway":
        return cls(
            credentials,
            base_url=config.api_base_url,
            timeout=config.timeout,
            transport=transport,
        )

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        requires_auth: bool = True,
        is_multipart: bool = False,
    ) -> ApiResult:
        """
        Send one request.

        Args:
            method: HTTP verb (get, post, put, delete, ...)
            path: Path relative to the API root
            body: Query parameters for GET, request body otherwise
            requires_auth: Attach the stored credential; fail locally if absent
            is_multipart: Send body as multipart/form-data (document upload)

        Returns:
            ApiResult.ok(payload) on 2xx, ApiResult.fail(message) otherwise
        """
        method = method.upper()
        headers: Dict[str, str] = {}

        if requires_auth:
            token = self._credentials.get()
            if not token:
                return ApiResult.fail(NO_TOKEN_MESSAGE)
            headers["Authorization"] = f"Bearer {token}"

        kwargs: Dict[str, Any] = {"headers": headers}
        if method == "GET":
            if body is not None:
                kwargs["params"] = body
        elif is_multipart:
            # httpx sets multipart/form-data with its boundary when parts exist
            fields, files = _split_multipart(body)
            if not files:
                # httpx only encodes multipart when file parts are present
                files = [(name, (None, value)) for name, value in fields.items()]
                fields = {}
            if files:
                kwargs["data"] = fields
                kwargs["files"] = files
            else:
                boundary = os.urandom(16).hex()
                headers["Content-Type"] = f"multipart/form-data; boundary={boundary}"
                kwargs["content"] = f"--{boundary}--\r\n".encode("ascii")
        else:
            headers["Content-Type"] = "application/json"
            if body is not None:
                kwargs["json"] = body

        logger.debug("%s %s (auth=%s, multipart=%s)", method, path, requires_auth, is_multipart)

        try:
            response = await self._client.request(method, path, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL, RuntimeError) as e:
            # RuntimeError: client already closed
            logger.warning("API error (%s %s): %s", method, path, e)
            return ApiResult.fail(extract_error_message(None, str(e) or type(e).__name__))

        if response.is_success:
            return ApiResult.ok(_decode_body(response))

        payload = _decode_body(response)
        logger.warning("API error (%s %s): %s %s", method, path, response.status_code, payload)
        return ApiResult.fail(
            extract_error_message(payload, f"Request failed with status code {response.status_code}")
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "RequestGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
