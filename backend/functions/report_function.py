#!/usr/bin/env python3
# Boom Deployment Planner - Report Cloud Function
# SPDX-License-Identifier: Apache-2.0

"""
Cloud Function that drafts and files a boom deployment report.

The browser calculator POSTs its outputs as JSON; the function asks Gemini for
a one-paragraph report, saves the record to Airtable and returns the text.

Deployment targets:
- Google Cloud Functions (Gen 2), entry point: report_http
- Self-hosted (FastAPI/uvicorn), app: functions.report_function:app

Environment Variables:
- GOOGLE_API_KEY, AIRTABLE_API_KEY, AIRTABLE_BASE_ID, AIRTABLE_TABLE_ID (required)
- BOOM_REPORT_* tuning options (see boom_report.config)
"""

import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Optional

import functions_framework
from flask import jsonify, make_response

from boom_report.handler import METHOD_NOT_ALLOWED, ReportRequestHandler

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

REPORT_ROUTE = "/api/generate-report"
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


@lru_cache(maxsize=1)
def get_default_handler() -> ReportRequestHandler:
    """Handler built from the environment, once per process."""
    return ReportRequestHandler.from_env()


# =============================================================================
# Cloud Function Entry Point
# =============================================================================

@functions_framework.http
def report_http(request):
    """
    Google Cloud Function HTTP entry point.

    Accepts POST requests with the calculator outputs as a JSON body.
    Returns {"reportText": ...} on success or an error envelope.
    """
    # Handle CORS preflight
    if request.method == "OPTIONS":
        response = make_response("", 204)
        response.headers.update(CORS_HEADERS)
        return response

    body = request.get_json(silent=True) if request.method == "POST" else None
    response_data, status = get_default_handler().handle(request.method, body)

    response = jsonify(response_data)
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response, status


# =============================================================================
# FastAPI App (for local dev and alternative deployments)
# =============================================================================

def create_app(handler: Optional[ReportRequestHandler] = None):
    """Create FastAPI application; the handler defaults to the environment one."""
    from fastapi import FastAPI, Request
    from fastapi.exception_handlers import http_exception_handler
    from fastapi.middleware.cors import CORSMiddleware
    from fastapi.responses import JSONResponse
    from starlette.concurrency import run_in_threadpool
    from starlette.exceptions import HTTPException as StarletteHTTPException

    app = FastAPI(
        title="Boom Deployment Planner - Report API",
        description="Draft and file oil-spill boom deployment reports",
        version="0.1.0",
        license_info={"name": "Apache 2.0", "identifier": "Apache-2.0"},
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["POST", "GET"],
        allow_headers=["*"],
    )

    def current_handler() -> ReportRequestHandler:
        return handler or get_default_handler()

    @app.exception_handler(StarletteHTTPException)
    async def report_route_errors(request: Request, exc: StarletteHTTPException):
        # Methods the router rejects on the report route get the same 405 body as the handler
        if exc.status_code == 405 and request.url.path == REPORT_ROUTE:
            return JSONResponse(dict(METHOD_NOT_ALLOWED), status_code=405)
        return await http_exception_handler(request, exc)

    @app.get("/health")
    async def health():
        """Health check endpoint"""
        return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.api_route(REPORT_ROUTE, methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
    async def generate_report(request: Request):
        """Generate and save a deployment report"""
        body = None
        if request.method == "POST":
            try:
                body = await request.json()
            except ValueError:
                logger.warning("Report request body is not valid JSON")

        # Outbound calls and backoff sleeps block; keep them off the event loop
        response_data, status = await run_in_threadpool(current_handler().handle, request.method, body)
        return JSONResponse(response_data, status_code=status)

    return app


# Create app instance for uvicorn
app = create_app()


# =============================================================================
# CLI for local testing
# =============================================================================

if __name__ == "__main__":
    from boom_report.cli import main

    main()
