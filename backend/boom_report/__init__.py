# Boom Deployment Planner - Report Service
# SPDX-License-Identifier: Apache-2.0

"""
Report service for the oil-spill boom deployment calculator.

Turns the calculator's outputs into a written deployment report and a
database record.

Core operations:
1. Report Synthesis: Gemini drafts a one-paragraph deployment report
2. Record Persistence: Inputs, derived values and report saved to Airtable
3. Backoff: Outbound calls retried with exponential backoff on transient errors
"""

from boom_report.backoff import RetryPolicy, call_with_backoff
from boom_report.config import ReportSettings
from boom_report.handler import ReportRequestHandler
from boom_report.models import DeploymentReportRequest
from boom_report.persister import RecordPersister
from boom_report.synthesizer import EmptyTextPolicy, ReportSynthesizer

__version__ = "0.1.0"

__all__ = [
    "RetryPolicy",
    "call_with_backoff",
    "ReportSettings",
    "ReportRequestHandler",
    "DeploymentReportRequest",
    "RecordPersister",
    "EmptyTextPolicy",
    "ReportSynthesizer",
]
