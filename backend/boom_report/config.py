# Boom Deployment Planner - Service Configuration
# SPDX-License-Identifier: Apache-2.0

"""
Process-wide settings for the report service.

Settings are read once from the environment and handed to the request
handler, so tests can build their own instance with fake credentials.

Environment Variables:
- GOOGLE_API_KEY: Google AI (Gemini) API key
- AIRTABLE_API_KEY: Airtable personal access token
- AIRTABLE_BASE_ID: Airtable base holding the deployment table
- AIRTABLE_TABLE_ID: Airtable table receiving one record per report
- BOOM_REPORT_MODEL: Gemini model name
- BOOM_REPORT_MAX_ATTEMPTS: Attempts per outbound call (default: 5)
- BOOM_REPORT_BASE_DELAY: First backoff delay in seconds (default: 1.0)
- BOOM_REPORT_TIMEOUT: Per-request timeout in seconds (default: 30)
- BOOM_REPORT_RETRY_POLICY: strict or lenient (default: strict)
- BOOM_REPORT_EMPTY_TEXT: raise or fallback (default: raise)
- BOOM_REPORT_SEARCH_GROUNDING: Send the google_search tool (default: true)
- BOOM_REPORT_SPILL_TYPE / BOOM_REPORT_LOCATION: Fixed report context
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from boom_report.backoff import DEFAULT_BASE_DELAY, DEFAULT_MAX_ATTEMPTS, RetryPolicy
from boom_report.prompt import DEFAULT_LOCATION, DEFAULT_SPILL_TYPE
from boom_report.synthesizer import EmptyTextPolicy

GOOGLE_AI_API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"
AIRTABLE_API_BASE = "https://api.airtable.com/v0"
DEFAULT_MODEL = "gemini-2.5-flash-preview-05-20"

# Secret setting -> environment variable
SECRET_ENV_VARS = {
    "google_api_key": "GOOGLE_API_KEY",
    "airtable_api_key": "AIRTABLE_API_KEY",
    "airtable_base_id": "AIRTABLE_BASE_ID",
    "airtable_table_id": "AIRTABLE_TABLE_ID",
}

# Tuning setting -> environment variable
TUNING_ENV_VARS = {
    "model": "BOOM_REPORT_MODEL",
    "max_attempts": "BOOM_REPORT_MAX_ATTEMPTS",
    "base_delay": "BOOM_REPORT_BASE_DELAY",
    "request_timeout": "BOOM_REPORT_TIMEOUT",
    "retry_policy": "BOOM_REPORT_RETRY_POLICY",
    "empty_text_policy": "BOOM_REPORT_EMPTY_TEXT",
    "search_grounding": "BOOM_REPORT_SEARCH_GROUNDING",
    "spill_type": "BOOM_REPORT_SPILL_TYPE",
    "location": "BOOM_REPORT_LOCATION",
}


class ReportSettings(BaseModel):
    """Credentials and tuning for the report service"""

    model_config = ConfigDict(frozen=True)

    # Secrets (validated per request, not at startup)
    google_api_key: Optional[str] = Field(None, repr=False)
    airtable_api_key: Optional[str] = Field(None, repr=False)
    airtable_base_id: Optional[str] = None
    airtable_table_id: Optional[str] = None

    # Text generation
    model: str = Field(DEFAULT_MODEL, min_length=1, description="Gemini model name")
    search_grounding: bool = Field(True, description="Attach the google_search tool")
    empty_text_policy: EmptyTextPolicy = EmptyTextPolicy.RAISE
    spill_type: str = DEFAULT_SPILL_TYPE
    location: str = DEFAULT_LOCATION

    # Outbound calls
    max_attempts: int = Field(DEFAULT_MAX_ATTEMPTS, ge=1, le=10)
    base_delay: float = Field(DEFAULT_BASE_DELAY, ge=0, le=30)
    request_timeout: float = Field(30.0, gt=0, le=300)
    retry_policy: RetryPolicy = RetryPolicy.STRICT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ReportSettings":
        """Build settings from environment variables; unset or blank ones use defaults."""
        environ = os.environ if environ is None else environ
        values = {}
        for field_name, var in {**SECRET_ENV_VARS, **TUNING_ENV_VARS}.items():
            raw = environ.get(var)
            if raw is not None and raw.strip():
                values[field_name] = raw.strip()
        return cls(**values)

    def missing_secrets(self) -> list[str]:
        """Environment variable names of the credentials that are not set."""
        return [var for field_name, var in SECRET_ENV_VARS.items() if not getattr(self, field_name)]

    @property
    def generate_url(self) -> str:
        return f"{GOOGLE_AI_API_BASE}/{self.model}:generateContent"

    @property
    def airtable_url(self) -> str:
        return f"{AIRTABLE_API_BASE}/{self.airtable_base_id}/{self.airtable_table_id}"
