# Boom Deployment Planner - Record Persister Tests
# SPDX-License-Identifier: Apache-2.0

import pytest
import requests

from boom_report.errors import PersistenceError, UpstreamHTTPError
from boom_report.models import DeploymentReportRequest
from boom_report.persister import RecordPersister, build_fields, build_payload

from conftest import AIRTABLE_HOST, EXAMPLE_BODY, airtable_result, make_response

AIRTABLE_URL = f"https://{AIRTABLE_HOST}/v0/appTEST/tblTEST"


def request_from(**overrides) -> DeploymentReportRequest:
    return DeploymentReportRequest.model_validate({**EXAMPLE_BODY, **overrides})


class TestBuildFields:
    """Calculator values mapped onto the deployment table"""

    def test_example_deployment(self):
        fields = build_fields(request_from(), "Report body")

        assert fields == {
            "Report": "Report body",
            "Current": 2.5,
            "Angle": 30.0,
            "River Width": 300.0,
            "River Mile": "45",
            "Boom Length": 350.0,
            "Seg Length": 175.0,
            "Anchor Interval": 150,
            "Drift Time": 40.0,
            "Segments": 2,
            "Anchors": 5,
        }

    def test_single_boom_has_one_segment(self):
        fields = build_fields(request_from(isCascade=False, segments="4"), "text")

        assert fields["Segments"] == 1
        assert fields["Seg Length"] == 350.0

    @pytest.mark.parametrize("interval, expected", [
        ("200+", 200),
        ("1 per 100 ft", 1),
        ("150", 150),
        (90, 90),
    ])
    def test_interval_forms(self, interval, expected):
        assert build_fields(request_from(interval=interval), "text")["Anchor Interval"] == expected

    def test_bad_values_become_null(self):
        fields = build_fields(
            request_from(current="fast", driftTime="", segments="many", anchors=None),
            "text",
        )

        assert fields["Current"] is None
        assert fields["Drift Time"] is None
        assert fields["Segments"] is None
        assert fields["Seg Length"] is None
        assert fields["Anchors"] is None
        # Unaffected fields still carry values
        assert fields["Boom Length"] == 350.0

    def test_payload_shape(self):
        payload = build_payload(request_from(), "text")

        assert list(payload) == ["records"]
        assert len(payload["records"]) == 1
        assert payload["records"][0]["fields"]["Report"] == "text"


class TestRecordPersister:

    def make(self, session, sleeps, **kwargs):
        return RecordPersister(
            api_key="pat-test",
            url=AIRTABLE_URL,
            session=session.mock,
            sleep=sleeps.append,
            **kwargs,
        )

    def test_posts_record_with_bearer_token(self, session, sleeps):
        session.queue(AIRTABLE_HOST, make_response(200, airtable_result("recABC")))

        record_id = self.make(session, sleeps).persist(request_from(), "Report body")

        assert record_id == "recABC"
        call = session.calls_to(AIRTABLE_HOST)[0]
        assert call.args[0] == AIRTABLE_URL
        assert call.kwargs["headers"]["Authorization"] == "Bearer pat-test"
        assert call.kwargs["json"]["records"][0]["fields"]["Segments"] == 2

    def test_missing_record_id(self, session, sleeps):
        session.queue(AIRTABLE_HOST, make_response(200, "{}"))
        assert self.make(session, sleeps).persist(request_from(), "text") is None

    @pytest.mark.parametrize("body", [
        {"records": {"0": {"id": "recX"}}},
        {"records": "recX"},
        {"records": [["recX"]]},
    ])
    def test_unexpected_records_shape(self, session, sleeps, body):
        session.queue(AIRTABLE_HOST, make_response(200, body))
        assert self.make(session, sleeps).persist(request_from(), "text") is None

    def test_rate_limit_then_success(self, session, sleeps):
        session.queue(
            AIRTABLE_HOST,
            make_response(429, {"errors": [{"error": "RATE_LIMIT_REACHED"}]}),
            make_response(200, airtable_result()),
        )

        assert self.make(session, sleeps, base_delay=1.0).persist(request_from(), "text") == "recTEST123"
        assert sleeps == [1.0]

    def test_exhausted_retries_raise_persistence_error(self, session, sleeps):
        session.queue(AIRTABLE_HOST, *[requests.ConnectionError("offline")] * 3)

        with pytest.raises(PersistenceError) as excinfo:
            self.make(session, sleeps, max_attempts=3).persist(request_from(), "text")

        assert "Failed to save report to Airtable" in str(excinfo.value)
        assert excinfo.value.status_code is None
        assert session.total_calls == 3

    def test_rejected_record(self, session, sleeps):
        session.queue(AIRTABLE_HOST, make_response(422, {"error": {"type": "INVALID_VALUE_FOR_COLUMN"}}))

        with pytest.raises(PersistenceError) as excinfo:
            self.make(session, sleeps).persist(request_from(), "text")

        assert excinfo.value.status_code == 422
        assert isinstance(excinfo.value.__cause__, UpstreamHTTPError)
        assert "INVALID_VALUE_FOR_COLUMN" in str(excinfo.value)
        assert session.total_calls == 1
