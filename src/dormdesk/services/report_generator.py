"""
Narrative report client.

Formats the dashboard figures into a prompt and sends it to the Gemini
generateContent REST endpoint. Every failure surfaces as
ExternalServiceFailure; there are no retries.
"""

from typing import Any, Dict, Optional, Sequence

import httpx

from ..config import ReportConfig
from ..domain.errors import ExternalServiceFailure
from ..domain.models import MaintenanceRequest, Tenant
from ..domain.reporting import build_report_prompt
from ..utils.logging_config import get_logger, log_exception

logger = get_logger(__name__)


class ReportGenerator:
    """Client for the external text-generation service."""

    def __init__(
        self,
        api_key: str = "",
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

        if self.api_key:
            logger.info(f"Report generator initialized (model={self.model})")
        else:
            logger.warning("Report API key not configured - report generation will fail")

    @classmethod
    def from_config(cls, report: ReportConfig) -> "ReportGenerator":
        return cls(
            api_key=report.api_key,
            model=report.model,
            base_url=report.base_url,
            timeout=report.timeout_seconds,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def generate_report(
        self,
        tenants: Sequence[Tenant],
        requests: Sequence[MaintenanceRequest],
        total_rooms: int,
        max_tenants_per_room: int,
    ) -> str:
        """
        Generate the monthly summary report.

        Args:
            tenants: Every tenant across all rooms
            requests: Every maintenance request
            total_rooms: Configured number of rooms
            max_tenants_per_room: Configured room capacity

        Returns:
            The generated report text

        Raises:
            ExternalServiceFailure: If the service cannot produce a report
        """
        prompt = build_report_prompt(tenants, requests, total_rooms, max_tenants_per_room)
        return await self.generate_text(prompt)

    async def generate_text(self, prompt: str) -> str:
        """Send a prompt and return the first candidate's text."""
        if not self.api_key:
            raise ExternalServiceFailure()

        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        headers = {"x-goog-api-key": self.api_key, "Content-Type": "application/json"}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.endpoint, json=payload, headers=headers)
                response.raise_for_status()
                return self._extract_text(response.json())
        except ExternalServiceFailure:
            raise
        except (httpx.HTTPError, ValueError) as e:
            log_exception("reports", e, {"model": self.model})
            raise ExternalServiceFailure(original=e) from e

    @staticmethod
    def _extract_text(data: Dict[str, Any]) -> str:
        try:
            parts = data["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            logger.error(f"Unexpected report response shape: {e}")
            raise ExternalServiceFailure(original=e) from e

        if not text.strip():
            raise ExternalServiceFailure("Report service returned an empty response.")
        return text
