# core/api/client.py
"""
HTTP plumbing shared by every resource group.

Each call is one request: headers from the injected session provider, a JSON
or multipart body, and either the decoded success payload or an `ApiError`
carrying the best message available. No retries, caching or batching.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import requests

from core.session import SessionProvider

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong. Please try again."


class ApiError(Exception):
    """Normalized failure of a backend call.

    kind: "network" (no response), "http" (non-2xx with an error body),
    "unparseable" (non-2xx without JSON), "rejected" (2xx with success=false).
    """

    def __init__(self, message: str, status_code: Optional[int] = None, kind: str = "http"):
        super().__init__(message)
        self.message = message or GENERIC_ERROR
        self.status_code = status_code
        self.kind = kind

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class Upload:
    """An opaque file handle headed for a multipart field."""
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @classmethod
    def from_streamlit(cls, uploaded) -> Optional["Upload"]:
        """Wrap a `st.file_uploader` result; None stays None."""
        if uploaded is None:
            return None
        return cls(
            filename=uploaded.name,
            content=uploaded.getvalue(),
            content_type=getattr(uploaded, "type", None) or "application/octet-stream",
        )

    def as_part(self) -> Tuple[str, bytes, str]:
        return (self.filename, self.content, self.content_type)


Files = List[Tuple[str, Tuple[str, bytes, str]]]


class ApiClient:
    def __init__(self, base_url: str, session_provider: Optional[SessionProvider] = None,
                 timeout: float = 15, http: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.session_provider = session_provider
        self.timeout = timeout
        self.http = http or requests.Session()

    def _headers(self, auth: bool, json_body: bool) -> Dict[str, str]:
        headers: Dict[str, str] = {"Accept": "application/json"}
        if json_body:
            headers["Content-Type"] = "application/json"
        if auth:
            session = self.session_provider.current() if self.session_provider else None
            headers["Authorization"] = f"Bearer {session.api_key if session else ''}"
            headers["X-CSRF-Token"] = session.csrf_token if session else ""
        return headers

    def request(self, method: str, path: str, *, params: Optional[Dict[str, Any]] = None,
                json: Any = None, data: Optional[Dict[str, Any]] = None,
                files: Optional[Files] = None, auth: bool = True,
                fallback: str = GENERIC_ERROR) -> Dict[str, Any]:
        url = f"{self.base_url}/{path.lstrip('/')}"
        is_multipart = files is not None or data is not None
        if is_multipart and not files:
            # requests only encodes multipart/form-data when a file part is present
            files = [(name, (None, str(value))) for name, value in (data or {}).items()]
            data = None
        headers = self._headers(auth, json_body=not is_multipart and method.upper() != "GET")
        try:
            res = self.http.request(
                method.upper(), url,
                params=params, json=json, data=data, files=files,
                headers=headers, timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method.upper(), path, e)
            raise ApiError(f"Could not reach the server: {e}", kind="network") from e

        body = self._decode(res)
        if not res.ok:
            if isinstance(body, dict):
                message = body.get("error") or body.get("message") or fallback
                kind = "http"
            else:
                message = (res.text or "").strip() or fallback
                kind = "unparseable"
            logger.warning("%s %s -> %s: %s", method.upper(), path, res.status_code, message)
            raise ApiError(message, status_code=res.status_code, kind=kind)

        if not isinstance(body, dict):
            raise ApiError(fallback, status_code=res.status_code, kind="unparseable")
        if body.get("success") is False:
            message = body.get("error") or body.get("message") or fallback
            logger.warning("%s %s rejected: %s", method.upper(), path, message)
            raise ApiError(message, status_code=res.status_code, kind="rejected")
        return body

    def download(self, url: str) -> bytes:
        try:
            res = self.http.request("GET", url, timeout=self.timeout)
        except requests.RequestException as e:
            raise ApiError(f"Could not reach the server: {e}", kind="network") from e
        if not res.ok:
            raise ApiError(f"Download failed ({res.status_code})", status_code=res.status_code)
        return res.content

    @staticmethod
    def _decode(res) -> Any:
        try:
            return res.json()
        except ValueError:
            return None


def list_params(page: int = 1, limit: int = 10, search: str = "", status: Optional[str] = None) -> Dict[str, Any]:
    params: Dict[str, Any] = {"page": page, "limit": limit, "search": search or ""}
    if status is not None:
        params["status"] = status
    return params
