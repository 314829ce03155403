"""
Custom exception classes for the application.

Every failure on the scrape path is a PortResolutionError; the pipeline
catches those at its boundary and records them instead of raising.
"""

from typing import Optional, Any
from datetime import datetime, timezone


# Longest upstream response body kept in error details
MAX_BODY_CHARS = 2000


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "EMPTY_DATASET")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


def _truncate(body: Optional[str]) -> Optional[str]:
    if body is None:
        return None
    return body[:MAX_BODY_CHARS]


# ===================
# PORT RESOLUTION ERRORS
# ===================

class PortResolutionError(AppError):
    """Base for failures while resolving ports from the scrape service."""
    pass


class MissingCredentialsError(PortResolutionError):
    """Apify token or task ID not configured."""

    def __init__(self, missing: list[str]):
        super().__init__(
            code="MISSING_CREDENTIALS",
            message=f"Missing Apify configuration: {', '.join(missing)}",
            status_code=500,
            details={"missing": missing}
        )


class ScrapeRunFailedError(PortResolutionError):
    """Apify task run did not complete or returned no dataset (503)."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None
    ):
        super().__init__(
            code="SCRAPE_RUN_FAILED",
            message=message,
            status_code=503,
            details={
                "service": "apify",
                "status_code": status_code,
                "body": _truncate(body)
            }
        )


class DatasetFetchFailedError(PortResolutionError):
    """Apify dataset items could not be fetched (503)."""

    def __init__(
        self,
        dataset_id: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None
    ):
        super().__init__(
            code="DATASET_FETCH_FAILED",
            message=f"Failed to fetch dataset {dataset_id}",
            status_code=503,
            details={
                "service": "apify",
                "dataset_id": dataset_id,
                "status_code": status_code,
                "body": _truncate(body)
            }
        )


class EmptyDatasetError(PortResolutionError):
    """Apify dataset was empty or not a JSON array."""

    def __init__(self, dataset_id: str):
        super().__init__(
            code="EMPTY_DATASET",
            message="Apify dataset contained no sailing records",
            status_code=502,
            details={"dataset_id": dataset_id}
        )


class NoSailingRecordsError(PortResolutionError):
    """No records to match a sailing against."""

    def __init__(self):
        super().__init__(
            code="NO_SAILING_RECORDS",
            message="No sailing records to match",
            status_code=502
        )


class NoPortsExtractedError(PortResolutionError):
    """Matched sailing record has no usable stop fields."""

    def __init__(self, record_keys: list[str]):
        super().__init__(
            code="NO_PORTS_EXTRACTED",
            message="No ports found in sailing record",
            status_code=502,
            details={"record_keys": record_keys}
        )
