# Boom Deployment Planner - Shared Test Fixtures
# SPDX-License-Identifier: Apache-2.0

import json
from collections import defaultdict, deque
from unittest.mock import MagicMock

import pytest
import requests

from boom_report.config import ReportSettings
from boom_report.handler import ReportRequestHandler

GENERATE_HOST = "generativelanguage.googleapis.com"
AIRTABLE_HOST = "api.airtable.com"

EXAMPLE_BODY = {
    "current": "2.5",
    "angle": "30",
    "riverWidth": "300",
    "riverMile": "45",
    "calculatedBoomLength": "350",
    "tension": "1200",
    "interval": "150+",
    "driftTime": "40",
    "isCascade": True,
    "segments": "2",
    "anchors": "5",
    "anchorDetailsText": "Anchor every 150 ft along each segment.",
}

REPORT_TEXT = "Dear Response Team, a two-segment cascade boom of 350 ft is recommended at river mile 45."


def make_response(status_code: int = 200, body=None, reason: str = "") -> requests.Response:
    """Build a real requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason or ("OK" if status_code < 400 else "Error")
    response.encoding = "utf-8"
    if isinstance(body, (dict, list)):
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = (body or "").encode("utf-8")
    return response


def generation_result(text: str = REPORT_TEXT) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


def airtable_result(record_id: str = "recTEST123") -> dict:
    return {"records": [{"id": record_id, "fields": {}}]}


class ScriptedSession:
    """
    Session double that answers POSTs from per-host queues.

    Each queued outcome is either a Response or an exception to raise.
    """

    def __init__(self):
        self.queues = defaultdict(deque)
        self.mock = MagicMock(spec=requests.Session)
        self.mock.post.side_effect = self._post

    def queue(self, host: str, *outcomes):
        self.queues[host].extend(outcomes)
        return self

    def _post(self, url, **kwargs):
        host = url.split("/")[2]
        if not self.queues[host]:
            raise AssertionError(f"Unexpected POST to {url}")
        outcome = self.queues[host].popleft()
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def calls_to(self, host: str) -> list:
        return [c for c in self.mock.post.call_args_list if c.args[0].split("/")[2] == host]

    @property
    def total_calls(self) -> int:
        return self.mock.post.call_count


@pytest.fixture
def settings():
    return ReportSettings(
        google_api_key="test-google-key",
        airtable_api_key="test-airtable-key",
        airtable_base_id="appTEST",
        airtable_table_id="tblTEST",
        base_delay=0.5,
    )


@pytest.fixture
def session():
    return ScriptedSession()


@pytest.fixture
def sleeps():
    """Records backoff delays instead of sleeping."""
    return []


@pytest.fixture
def make_handler(session, sleeps):
    def factory(settings):
        return ReportRequestHandler(settings, session=session.mock, sleep=sleeps.append)
    return factory


@pytest.fixture
def example_body():
    return dict(EXAMPLE_BODY)
