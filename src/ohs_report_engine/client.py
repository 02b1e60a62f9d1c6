"""REST client for fetching audit documents from the inspection application.

Wraps the OHS inspection JSON API with retry on transient connection failures
and maps HTTP errors onto the report-engine exception hierarchy.
"""

from __future__ import annotations

import logging
import time

import requests
from pydantic import ValidationError

from ohs_report_engine.config import ReportConfig
from ohs_report_engine.exceptions import (
    ReportAPIError,
    ReportAuthError,
    ReportConnectionError,
    ReportNotFoundError,
    ReportPermissionError,
)
from ohs_report_engine.models import AuditDocument

logger = logging.getLogger(__name__)

AUDITS_PATH = "/ohs-inspection/api/audits"


class InspectionClient:
    """REST client for the OHS inspection audit API."""

    def __init__(self, config: ReportConfig) -> None:
        self.config = config
        self.base_url = config.inspection_api_url.rstrip("/")
        self.session = requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "Content-Type": "application/json",
        })
        if config.inspection_api_token:
            self.session.headers["Authorization"] = f"Bearer {config.inspection_api_token}"
        self.timeout = config.inspection_api_timeout
        self.max_retries = config.inspection_api_max_retries

    def _request(self, method: str, url: str, **kwargs: object) -> requests.Response:
        """Execute an HTTP request, retrying connection failures with exponential backoff.

        The initial attempt plus up to ``max_retries`` retries are made.
        """
        last_exception: Exception | None = None
        attempts = self.max_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                response = self.session.request(
                    method,
                    url,
                    timeout=self.timeout,
                    **kwargs,  # type: ignore[arg-type]
                )
            except (requests.ConnectionError, requests.Timeout) as exc:
                last_exception = ReportConnectionError(
                    f"Connection failed: {exc}",
                    details={"url": url, "attempt": attempt},
                )
                if attempt < attempts:
                    wait = 2 ** (attempt - 1)
                    logger.warning("Connection error, retrying in %ds (attempt %d/%d)", wait, attempt, attempts)
                    time.sleep(wait)
                continue
            self._raise_for_status(response)
            return response
        raise last_exception  # type: ignore[misc]

    def _raise_for_status(self, response: requests.Response) -> None:
        """Map HTTP status codes to typed report exceptions."""
        if response.ok:
            return
        status = response.status_code
        try:
            body = response.json()
        except ValueError:
            body = {"raw": response.text[:500]}

        if status == 401:
            raise ReportAuthError("Authentication failed", details=body)
        if status == 403:
            raise ReportPermissionError("Permission denied", details=body)
        if status == 404:
            raise ReportNotFoundError("Audit not found", details=body)
        raise ReportAPIError(
            f"API error: HTTP {status}",
            status_code=status,
            details=body,
        )

    def _payload(self, response: requests.Response) -> dict:
        """Unwrap the application's ``{"success": ..., "data": ...}`` envelope."""
        try:
            body = response.json()
        except ValueError as exc:
            raise ReportAPIError("Response is not valid JSON", status_code=response.status_code) from exc
        if not isinstance(body, dict):
            raise ReportAPIError("Unexpected response shape", status_code=response.status_code)
        if body.get("success") is False:
            raise ReportAPIError(
                body.get("error") or "Request was not successful",
                status_code=response.status_code,
                details=body,
            )
        return body

    def get_audit(self, audit_id: str | int) -> AuditDocument:
        """Fetch a fully materialized audit document.

        Args:
            audit_id: Identifier of the inspection in the application.

        Returns:
            The parsed AuditDocument.

        Raises:
            ReportNotFoundError: If the audit does not exist.
            ReportAPIError: If the payload is missing or malformed.
        """
        url = f"{self.base_url}{AUDITS_PATH}/{audit_id}"
        body = self._payload(self._request("GET", url))
        data = body.get("data")
        if not isinstance(data, dict):
            raise ReportAPIError("Audit payload is missing", details={"audit_id": str(audit_id)})
        try:
            return AuditDocument.model_validate(data)
        except ValidationError as exc:
            raise ReportAPIError(
                f"Malformed audit document: {exc.error_count()} validation error(s)",
                details={"audit_id": str(audit_id), "errors": exc.errors(include_url=False, include_context=False)},
            ) from exc

    def ping(self) -> bool:
        """Check that the audit API answers a lightweight list request."""
        self._request("GET", f"{self.base_url}{AUDITS_PATH}/list")
        return True
