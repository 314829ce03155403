"""
External service integrations.
"""

from integrations.apify import ApifyClient, ScrapeResult, build_task_input

__all__ = [
    "ApifyClient",
    "ScrapeResult",
    "build_task_input",
]
