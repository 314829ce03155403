"""
Apify integration for scraping cruise itineraries.

Runs the configured actor task for one ship and sail date, waits for it
to finish, and fetches the resulting dataset of sailing records.

API:
    POST {base}/actor-tasks/{task_id}/runs?waitForFinish=120
    GET  {base}/datasets/{dataset_id}/items?clean=true&format=json
"""

from dataclasses import dataclass, field
from typing import Any, Optional
import httpx
import structlog

from config.apify import ApifyConfig
from exceptions import (
    MissingCredentialsError,
    ScrapeRunFailedError,
    DatasetFetchFailedError,
    EmptyDatasetError,
)

logger = structlog.get_logger(__name__)


@dataclass
class ScrapeResult:
    """Dataset produced by one task run."""
    dataset: list[dict[str, Any]] = field(default_factory=list)
    dataset_id: Optional[str] = None
    run_id: Optional[str] = None


def build_task_input(
    cruise_line: Optional[str],
    ship_name: Optional[str],
    iso_sail_date: Optional[str]
) -> dict[str, Any]:
    """
    Task input for a single sailing.

    Start and end date are both the sail date; unused filters are left
    at the actor's "any" values.
    """
    return {
        "cruise_line": cruise_line or "",
        "start_date": iso_sail_date or "",
        "end_date": iso_sail_date or "",
        "ship_name": ship_name or "",
        "max_number_of_pages": 1,
        "cruise_length": "0",
        "departure_port": "",
        "destination": "0",
        "ship_type": "0",
        "port_of_call": "",
    }


class ApifyClient:
    """
    Apify actor-task client.

    Pass an httpx.AsyncClient to share a connection pool (or to fake
    the API in tests); otherwise one is opened per run.
    """

    def __init__(
        self,
        config: ApifyConfig,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        if config.missing:
            raise MissingCredentialsError(config.missing)
        self.config = config
        self._http_client = http_client

    async def run(
        self,
        cruise_line: Optional[str],
        ship_name: Optional[str],
        iso_sail_date: Optional[str]
    ) -> ScrapeResult:
        """
        Scrape the itinerary dataset for one sailing.

        Args:
            cruise_line: Cruise line name from the order
            ship_name: Ship name from the order
            iso_sail_date: Sail date as YYYY-MM-DD

        Returns:
            ScrapeResult with a non-empty dataset

        Raises:
            ScrapeRunFailedError: Run request failed or returned no dataset ID
            DatasetFetchFailedError: Dataset request failed
            EmptyDatasetError: Dataset was empty or not a list
        """
        task_input = build_task_input(cruise_line, ship_name, iso_sail_date)

        if self._http_client is not None:
            return await self._run(self._http_client, task_input)

        async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
            return await self._run(client, task_input)

    async def _run(
        self,
        client: httpx.AsyncClient,
        task_input: dict[str, Any]
    ) -> ScrapeResult:
        run_id, dataset_id = await self._start_task(client, task_input)
        dataset = await self._fetch_dataset(client, dataset_id)
        return ScrapeResult(dataset=dataset, dataset_id=dataset_id, run_id=run_id)

    async def _start_task(
        self,
        client: httpx.AsyncClient,
        task_input: dict[str, Any]
    ) -> tuple[Optional[str], str]:
        """Start the task and block until it finishes (server-side wait)."""
        url = f"{self.config.base_url}/actor-tasks/{self.config.task_id}/runs"
        params = {
            "token": self.config.token,
            "waitForFinish": self.config.wait_for_finish_seconds,
        }

        logger.info(
            "apify_run_started",
            task_id=self.config.task_id,
            ship_name=task_input["ship_name"],
            start_date=task_input["start_date"]
        )

        try:
            response = await client.post(url, params=params, json=task_input)
        except httpx.HTTPError as e:
            logger.error("apify_run_request_failed", error=str(e))
            raise ScrapeRunFailedError(f"Apify run request failed: {e}")

        if not response.is_success:
            logger.error(
                "apify_run_failed",
                status_code=response.status_code,
                body=response.text[:500]
            )
            raise ScrapeRunFailedError(
                "Apify run failed",
                status_code=response.status_code,
                body=response.text
            )

        try:
            payload = response.json()
        except ValueError:
            payload = None

        run = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(run, dict):
            run = {}

        dataset_id = run.get("defaultDatasetId")
        if not dataset_id:
            raise ScrapeRunFailedError(
                "Apify run returned no dataset ID",
                status_code=response.status_code,
                body=response.text
            )

        logger.info(
            "apify_run_finished",
            run_id=run.get("id"),
            status=run.get("status"),
            dataset_id=dataset_id
        )
        return run.get("id"), dataset_id

    async def _fetch_dataset(
        self,
        client: httpx.AsyncClient,
        dataset_id: str
    ) -> list[dict[str, Any]]:
        url = f"{self.config.base_url}/datasets/{dataset_id}/items"
        params = {
            "token": self.config.token,
            "clean": "true",
            "format": "json",
        }

        try:
            response = await client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error("apify_dataset_request_failed", dataset_id=dataset_id, error=str(e))
            raise DatasetFetchFailedError(dataset_id, body=str(e))

        if not response.is_success:
            logger.error(
                "apify_dataset_fetch_failed",
                dataset_id=dataset_id,
                status_code=response.status_code
            )
            raise DatasetFetchFailedError(
                dataset_id,
                status_code=response.status_code,
                body=response.text
            )

        try:
            items = response.json()
        except ValueError:
            items = None

        if not isinstance(items, list) or not items:
            raise EmptyDatasetError(dataset_id)

        logger.info("apify_dataset_fetched", dataset_id=dataset_id, records=len(items))
        return items
