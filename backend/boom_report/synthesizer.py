# Boom Deployment Planner - Report Synthesizer
# SPDX-License-Identifier: Apache-2.0

"""
Drafts the deployment report with the Gemini generateContent API.
"""

import logging
import time
from enum import Enum
from typing import Callable, Optional

import requests

from boom_report.backoff import (
    DEFAULT_BASE_DELAY,
    DEFAULT_MAX_ATTEMPTS,
    RetryPolicy,
    call_with_backoff,
)
from boom_report.errors import GenerationError
from boom_report.models import DeploymentReportRequest
from boom_report.prompt import (
    DEFAULT_LOCATION,
    DEFAULT_SPILL_TYPE,
    SYSTEM_INSTRUCTION,
    build_prompt,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "Google AI"

FALLBACK_REPORT_TEXT = (
    "An automated report could not be generated for this deployment. "
    "Review the calculated boom length, tension and anchor plan directly."
)


class EmptyTextPolicy(str, Enum):
    """What to do when the generation service returns no text"""
    RAISE = "raise"
    FALLBACK = "fallback"


def extract_text(result: dict) -> Optional[str]:
    """Text of the first candidate, with its parts joined, or None."""
    candidates = result.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return None
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return None
    parts = content.get("parts")
    if not isinstance(parts, list):
        return None
    text = "".join(
        part["text"] for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    ).strip()
    return text or None


class ReportSynthesizer:
    """Builds the prompt and asks the text-generation service for a report."""

    def __init__(
        self,
        api_key: str,
        url: str,
        session: Optional[requests.Session] = None,
        *,
        search_grounding: bool = True,
        empty_text_policy: EmptyTextPolicy = EmptyTextPolicy.RAISE,
        spill_type: str = DEFAULT_SPILL_TYPE,
        location: str = DEFAULT_LOCATION,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        base_delay: float = DEFAULT_BASE_DELAY,
        retry_policy: RetryPolicy = RetryPolicy.STRICT,
        timeout: float = 30.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.api_key = api_key
        self.url = url
        self.session = session or requests.Session()
        self.search_grounding = search_grounding
        self.empty_text_policy = empty_text_policy
        self.spill_type = spill_type
        self.location = location
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.retry_policy = retry_policy
        self.timeout = timeout
        self.sleep = sleep

    @classmethod
    def from_settings(cls, settings, session: Optional[requests.Session] = None, **kwargs) -> "ReportSynthesizer":
        return cls(
            api_key=settings.google_api_key,
            url=settings.generate_url,
            session=session,
            search_grounding=settings.search_grounding,
            empty_text_policy=settings.empty_text_policy,
            spill_type=settings.spill_type,
            location=settings.location,
            max_attempts=settings.max_attempts,
            base_delay=settings.base_delay,
            retry_policy=settings.retry_policy,
            timeout=settings.request_timeout,
            **kwargs,
        )

    def build_payload(self, request: DeploymentReportRequest) -> dict:
        payload = {
            "contents": [{"parts": [{"text": build_prompt(request, self.spill_type, self.location)}]}],
            "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
        }
        if self.search_grounding:
            payload["tools"] = [{"google_search": {}}]
        return payload

    def synthesize(self, request: DeploymentReportRequest) -> str:
        """
        Generate the report body for a deployment.

        Returns:
            Report text (or FALLBACK_REPORT_TEXT under EmptyTextPolicy.FALLBACK)

        Raises:
            UpstreamError: The service stayed unreachable or rejected the call
            GenerationError: The response held no usable text (RAISE policy)
        """
        payload = self.build_payload(request)

        response = call_with_backoff(
            lambda: self.session.post(
                self.url,
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout,
            ),
            service=SERVICE_NAME,
            max_attempts=self.max_attempts,
            base_delay=self.base_delay,
            policy=self.retry_policy,
            sleep=self.sleep,
        )

        try:
            result = response.json()
        except ValueError:
            result = None

        text = extract_text(result) if isinstance(result, dict) else None
        if text:
            logger.info(f"Generated report text ({len(text)} chars)")
            return text

        if self.empty_text_policy == EmptyTextPolicy.FALLBACK:
            logger.warning("No report text in generation response; using fallback text")
            return FALLBACK_REPORT_TEXT

        raise GenerationError("Failed to generate report text from Google AI.")
