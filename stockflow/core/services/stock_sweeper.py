"""
Periodic stock sweep.

Re-evaluates every product on a timer, independent of recorded movements.
Catches threshold breaches introduced by other paths and any event-driven
alert that was missed.
"""

import asyncio
from dataclasses import dataclass

from stockflow.config import get_logger
from stockflow.core.interfaces.product_store import IProductStore
from stockflow.core.services.stock_alert_service import StockAlertService

logger = get_logger(__name__)


@dataclass
class SweepResult:
    """Outcome of one sweep pass."""

    checked: int = 0
    alerts: int = 0
    completed: bool = True


class StockSweeper:
    """Runs ``evaluate_and_alert`` over all products at a fixed interval."""

    def __init__(
        self,
        product_store: IProductStore,
        alert_service: StockAlertService,
        interval_minutes: float = 5,
        page_size: int = 200,
    ) -> None:
        if interval_minutes <= 0:
            raise ValueError("interval_minutes must be positive")
        self._product_store = product_store
        self._alert_service = alert_service
        self._interval_seconds = interval_minutes * 60
        self._page_size = page_size
        self._task: asyncio.Task | None = None

    @property
    def interval_seconds(self) -> float:
        return self._interval_seconds

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> SweepResult:
        """Evaluate every product once."""
        result = SweepResult()
        offset = 0

        while True:
            try:
                products = await self._product_store.list_products(
                    limit=self._page_size, offset=offset
                )
            except Exception as e:
                logger.error("stock_sweep_listing_failed", offset=offset, error=str(e))
                result.completed = False
                break

            for product in products:
                if product.id is None:
                    continue
                result.checked += 1
                if await self._alert_service.evaluate_and_alert(product.id) is not None:
                    result.alerts += 1

            if len(products) < self._page_size:
                break
            offset += self._page_size

        logger.info(
            "stock_sweep_complete",
            checked=result.checked,
            alerts=result.alerts,
            completed=result.completed,
        )
        return result

    def start(self) -> None:
        """Start the periodic sweep on the running event loop."""
        if self.running:
            return
        logger.info("stock_sweep_scheduled", interval_seconds=self._interval_seconds)
        self._task = asyncio.get_running_loop().create_task(
            self._run_forever(), name="stock_sweep"
        )

    async def stop(self) -> None:
        """Cancel the periodic sweep and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("stock_sweep_stopped")

    async def _run_forever(self) -> None:
        while True:
            await asyncio.sleep(self._interval_seconds)
            try:
                await self.run_once()
            except Exception as e:
                logger.error("stock_sweep_failed", error=str(e))
