# Boom Deployment Planner - Report Service Errors
# SPDX-License-Identifier: Apache-2.0

"""
Exception hierarchy for the report service.

Everything raised on purpose derives from ReportServiceError so the request
handler can turn it into an error response with a readable message.
"""

from typing import Optional


class ReportServiceError(Exception):
    """Base class for report service failures"""


class ConfigurationError(ReportServiceError):
    """Required service credentials are missing"""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required configuration: {', '.join(self.missing)}")


class UpstreamError(ReportServiceError):
    """An outbound call to a third-party service failed"""

    retryable = False

    def __init__(self, service: str, message: str):
        self.service = service
        super().__init__(f"{service}: {message}")


class UpstreamUnavailableError(UpstreamError):
    """Network-level failure (connection refused, DNS, timeout)"""

    retryable = True


class UpstreamHTTPError(UpstreamError):
    """Upstream answered with a non-success status"""

    def __init__(self, service: str, status_code: int, reason: str = "", body: str = ""):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        detail = f"{status_code} {reason}".strip()
        if body:
            detail = f"{detail} - {body[:500]}"
        super().__init__(service, detail)

    @property
    def rate_limited(self) -> bool:
        return self.status_code == 429

    @property
    def retryable(self) -> bool:
        return self.rate_limited or self.status_code >= 500


class GenerationError(ReportServiceError):
    """The text-generation service returned no usable report text"""


class PersistenceError(ReportServiceError):
    """The deployment record could not be saved"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
