# Boom Deployment Planner - Report Request Handler
# SPDX-License-Identifier: Apache-2.0

"""
Framework-independent handling of a report request.

Sequence for a valid POST:
1. Draft the report text (ReportSynthesizer)
2. Save inputs and report as one record (RecordPersister)
3. Return the report text

A failure in either step fails the whole request; the caller never sees
success for a report whose record was not saved.
"""

import logging
import time
from typing import Any, Callable, Optional

import requests
from pydantic import ValidationError

from boom_report.config import ReportSettings
from boom_report.errors import ConfigurationError, ReportServiceError
from boom_report.models import DeploymentReportRequest
from boom_report.persister import RecordPersister
from boom_report.synthesizer import ReportSynthesizer

logger = logging.getLogger(__name__)

METHOD_NOT_ALLOWED = {"message": "Method Not Allowed"}
SUCCESS_MESSAGE = "Report generated and saved."


def error_body(message: str, error: Optional[str] = None) -> dict:
    body = {"message": message}
    if error:
        body["error"] = error
    return body


def _describe_validation_error(e: ValidationError) -> str:
    problems = []
    for err in e.errors():
        location = ".".join(str(part) for part in err.get("loc", ())) or "body"
        problems.append(f"{location}: {err.get('msg')}")
    return "; ".join(problems)


class ReportRequestHandler:
    """
    Handles report requests for one process.

    Built once from ReportSettings; the synthesizer and persister share the
    settings' retry budget and policy.
    """

    def __init__(
        self,
        settings: ReportSettings,
        synthesizer: Optional[ReportSynthesizer] = None,
        persister: Optional[RecordPersister] = None,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings
        session = session or requests.Session()
        self.synthesizer = synthesizer or ReportSynthesizer.from_settings(settings, session, sleep=sleep)
        self.persister = persister or RecordPersister.from_settings(settings, session, sleep=sleep)

    @classmethod
    def from_env(cls) -> "ReportRequestHandler":
        return cls(ReportSettings.from_env())

    def check_configuration(self) -> None:
        """Raise ConfigurationError if any service credential is missing."""
        missing = self.settings.missing_secrets()
        if missing:
            raise ConfigurationError(missing)

    def handle(self, method: str, body: Any) -> tuple[dict, int]:
        """
        Handle one request.

        Args:
            method: HTTP method of the incoming request
            body: Decoded JSON body (None if the body was not valid JSON)

        Returns:
            Tuple of (response_dict, http_status)
        """
        if (method or "").upper() != "POST":
            return dict(METHOD_NOT_ALLOWED), 405

        try:
            self.check_configuration()
        except ConfigurationError as e:
            logger.error(f"Report service is not configured: {e}")
            return error_body("Server configuration error.", str(e)), 500

        if not isinstance(body, dict):
            logger.warning("Rejected report request: body is not a JSON object")
            return error_body("Invalid request body.", "Expected a JSON object"), 400

        try:
            request = DeploymentReportRequest.model_validate(body)
        except ValidationError as e:
            logger.warning(f"Rejected report request: {e.error_count()} invalid field(s)")
            return error_body("Invalid request body.", _describe_validation_error(e)), 400

        try:
            report_text = self.synthesizer.synthesize(request)
            record_id = self.persister.persist(request, report_text)
        except ReportServiceError as e:
            logger.error(f"Report request failed: {e}")
            return error_body("An unexpected error occurred.", str(e)), 500
        except Exception as e:
            logger.exception(f"Internal error: {e}")
            return error_body("An unexpected error occurred.", str(e)), 500

        logger.info(f"Report generated for river mile {request.river_mile or 'unspecified'}")
        return {"reportText": report_text, "message": SUCCESS_MESSAGE, "recordId": record_id}, 200
