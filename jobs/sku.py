"""
SKU index notification job.

When a book is created its title is pushed to an external SKU index. Without
a configured index URL the job only records the notification in the log.
"""

from typing import Optional

import httpx
import structlog

logger = structlog.get_logger(__name__)

UPDATE_SKU_JOB = "update_sku"


class SkuIndexNotifier:
    """Pushes new book titles to the SKU index service."""

    def __init__(self, index_url: Optional[str] = None, timeout: float = 10.0):
        self.index_url = index_url
        self.timeout = httpx.Timeout(timeout, connect=min(timeout, 5.0))

    async def update_sku(self, title: str) -> None:
        """
        Notify the SKU index about a book title.

        Raises:
            httpx.HTTPError: If the index cannot be reached or rejects the update
        """
        if not self.index_url:
            logger.info("SKU index not configured, skipping update", title=title)
            return

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(self.index_url, json={"title": title})
            response.raise_for_status()

        logger.info("SKU index updated", title=title, status_code=response.status_code)


def register_sku_job(dispatcher, notifier: SkuIndexNotifier) -> None:
    """Register the update_sku job on a dispatcher."""
    dispatcher.register(UPDATE_SKU_JOB, notifier.update_sku)
