"""ArticProvider: pages of artworks from the Art Institute of Chicago API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import BrowserConfig
from ..core.record import Record, RecordSet
from .base import DataProvider, FetchFailure, check_page_args

logger = logging.getLogger(__name__)


class ArticProvider(DataProvider):
    """Async client for ``GET /artworks?page=&limit=&fields=``.

    The response carries the page in ``data`` and the dataset size in
    ``pagination.total``. Missing keys degrade to an empty page and a
    total of 0, matching what the public API returns past its last page.

    Parameters
    ----------
    config : BrowserConfig, optional
    client : httpx.AsyncClient, optional
        Injected client. When omitted one is created and owned (closed by
        ``aclose``).
    """

    def __init__(
        self,
        config: BrowserConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or BrowserConfig()
        self.columns = self.config.display_fields
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.timeout_seconds),
            headers={
                "Accept": "application/json",
                "User-Agent": self.config.user_agent,
            },
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch_page(self, page: int, page_size: int) -> RecordSet:
        check_page_args(page, page_size)
        params = {
            "page": page,
            "limit": page_size,
            "fields": ",".join(self.config.fields),
        }
        try:
            response = await self._client.get(self.config.api_url, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning("Page %d fetch returned HTTP %d", page, e.response.status_code)
            raise FetchFailure(
                f"Server answered {e.response.status_code} for page {page}.", page=page,
            ) from e
        except httpx.HTTPError as e:
            logger.warning("Page %d fetch failed: %s", page, e)
            raise FetchFailure(f"Request for page {page} failed: {e}", page=page) from e
        except ValueError as e:
            logger.warning("Page %d returned malformed JSON", page)
            raise FetchFailure(f"Malformed response for page {page}.", page=page) from e

        record_set = self._parse(payload, page, page_size)
        logger.info(
            "Fetched page %d (%d records of %d)", page, len(record_set), record_set.total_count,
        )
        return record_set

    def _parse(self, payload: Any, page: int, page_size: int) -> RecordSet:
        if not isinstance(payload, dict):
            raise FetchFailure(f"Unexpected response shape for page {page}.", page=page)

        items = payload.get("data") or []
        pagination = payload.get("pagination") or {}
        try:
            total = int(pagination.get("total") or 0)
        except (TypeError, ValueError):
            raise FetchFailure(f"Invalid total count for page {page}.", page=page) from None

        records = []
        for item in items:
            if not isinstance(item, dict) or item.get("id") is None:
                raise FetchFailure(f"Record without id on page {page}.", page=page)
            records.append(Record(
                id=item["id"],
                attributes={f: item.get(f) for f in self.columns},
            ))
        try:
            return RecordSet(
                records=tuple(records), total_count=total, page=page, page_size=page_size,
            )
        except ValueError as e:
            raise FetchFailure(f"Invalid page {page}: {e}", page=page) from e
