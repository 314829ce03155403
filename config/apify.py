"""
Apify client configuration.

Built once at startup from Settings and injected into the scrape client.
"""

from dataclasses import dataclass
from typing import Optional

from config.settings import Settings


@dataclass(frozen=True)
class ApifyConfig:
    """Credentials and limits for the Apify actor-task API."""
    token: Optional[str]
    task_id: Optional[str]
    base_url: str = "https://api.apify.com/v2"
    wait_for_finish_seconds: int = 120
    timeout_seconds: float = 150.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "ApifyConfig":
        return cls(
            token=settings.apify_token,
            task_id=settings.apify_task_id,
            base_url=settings.apify_base_url.rstrip("/"),
            wait_for_finish_seconds=settings.apify_wait_for_finish_seconds,
            timeout_seconds=settings.apify_http_timeout_seconds,
        )

    @property
    def missing(self) -> list[str]:
        """Names of required values that are absent."""
        missing = []
        if not self.token:
            missing.append("apify_token")
        if not self.task_id:
            missing.append("apify_task_id")
        return missing
