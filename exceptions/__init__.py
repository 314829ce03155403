"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,

    # Port resolution
    PortResolutionError,
    MissingCredentialsError,
    ScrapeRunFailedError,
    DatasetFetchFailedError,
    EmptyDatasetError,
    NoSailingRecordsError,
    NoPortsExtractedError,
)

__all__ = [
    # Base
    "AppError",

    # Port resolution
    "PortResolutionError",
    "MissingCredentialsError",
    "ScrapeRunFailedError",
    "DatasetFetchFailedError",
    "EmptyDatasetError",
    "NoSailingRecordsError",
    "NoPortsExtractedError",
]
