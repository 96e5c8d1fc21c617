# Boom Deployment Planner - Record Persister
# SPDX-License-Identifier: Apache-2.0

"""
Saves each generated report, with its inputs, as an Airtable record.
"""

import logging
import time
from typing import Callable, Optional

import requests

from boom_report.backoff import (
    DEFAULT_BASE_DELAY,
    DEFAULT_MAX_ATTEMPTS,
    RetryPolicy,
    call_with_backoff,
)
from boom_report.coercion import parse_interval, segment_length, to_float, to_int, to_text
from boom_report.errors import PersistenceError, UpstreamError, UpstreamHTTPError
from boom_report.models import DeploymentReportRequest

logger = logging.getLogger(__name__)

SERVICE_NAME = "Airtable"


def build_fields(request: DeploymentReportRequest, report_text: str) -> dict:
    """Map a request and its report onto the deployment table's columns."""
    boom_length = to_float(request.calculated_boom_length)
    segments = to_int(request.segments) if request.is_cascade else 1

    return {
        "Report": report_text,
        "Current": to_float(request.current),
        "Angle": to_float(request.angle),
        "River Width": to_float(request.river_width),
        "River Mile": to_text(request.river_mile),
        "Boom Length": boom_length,
        "Seg Length": segment_length(boom_length, segments, request.is_cascade),
        "Anchor Interval": parse_interval(request.interval),
        "Drift Time": to_float(request.drift_time),
        "Segments": segments,
        "Anchors": to_int(request.anchors),
    }


def build_payload(request: DeploymentReportRequest, report_text: str) -> dict:
    return {"records": [{"fields": build_fields(request, report_text)}]}


class RecordPersister:
    """Writes deployment records through the Airtable REST API."""

    def __init__(
        self,
        api_key: str,
        url: str,
        session: Optional[requests.Session] = None,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        base_delay: float = DEFAULT_BASE_DELAY,
        retry_policy: RetryPolicy = RetryPolicy.STRICT,
        timeout: float = 30.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.api_key = api_key
        self.url = url
        self.session = session or requests.Session()
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.retry_policy = retry_policy
        self.timeout = timeout
        self.sleep = sleep

    @classmethod
    def from_settings(cls, settings, session: Optional[requests.Session] = None, **kwargs) -> "RecordPersister":
        return cls(
            api_key=settings.airtable_api_key,
            url=settings.airtable_url,
            session=session,
            max_attempts=settings.max_attempts,
            base_delay=settings.base_delay,
            retry_policy=settings.retry_policy,
            timeout=settings.request_timeout,
            **kwargs,
        )

    def persist(self, request: DeploymentReportRequest, report_text: str) -> Optional[str]:
        """
        Save one deployment record.

        Returns:
            The created record id, when Airtable reports one

        Raises:
            PersistenceError: The record was not saved
        """
        payload = build_payload(request, report_text)
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = call_with_backoff(
                lambda: self.session.post(self.url, headers=headers, json=payload, timeout=self.timeout),
                service=SERVICE_NAME,
                max_attempts=self.max_attempts,
                base_delay=self.base_delay,
                policy=self.retry_policy,
                sleep=self.sleep,
            )
        except UpstreamError as e:
            status = e.status_code if isinstance(e, UpstreamHTTPError) else None
            raise PersistenceError(f"Failed to save report to Airtable: {e}", status_code=status) from e

        try:
            records = response.json().get("records")
        except (ValueError, AttributeError):
            records = None
        if not isinstance(records, list):
            records = []
        record_id = records[0].get("id") if records and isinstance(records[0], dict) else None

        logger.info(f"Saved deployment record {record_id or '(no id returned)'}")
        return record_id
