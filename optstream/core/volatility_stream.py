# optstream/core/volatility_stream.py
import math
from typing import Optional

import numpy as np

from optstream import config
from optstream.core.quote import PriceLike, price_of
from optstream.core.stream import PriceDrivenStream
from optstream.utils import setup_logger

logger = setup_logger(__name__)


class VolatilityStream(PriceDrivenStream):
    """
    Realized volatility over a trailing window of prices.

    Emits the population standard deviation of the last `window` prices
    once that many have been seen. Prices live in a fixed numpy ring
    buffer; the oldest is overwritten when a new one arrives at capacity.
    """

    def __init__(self, source=None, window: Optional[int] = None):
        super().__init__(source)
        if window is None:
            window = config.DEFAULT_VOLATILITY_WINDOW
        if window < 1:
            raise ValueError(f"Volatility window must be at least 1, got {window}")
        self.window = int(window)
        self._prices = np.zeros(self.window, dtype=np.float64)
        self._scratch = np.empty_like(self._prices)
        self._head = 0  # next slot to write
        self._count = 0

    def __len__(self) -> int:
        return self._count

    @property
    def is_ready(self) -> bool:
        return self._count == self.window

    def _push(self, price: float) -> None:
        self._prices[self._head] = price
        self._head = (self._head + 1) % self.window
        if self._count < self.window:
            self._count += 1

    def try_handle_price(self, price: float) -> Optional[float]:
        """Adds one price; returns the volatility once the window is full."""
        if math.isnan(price) or math.isinf(price):
            logger.debug(f"Dropping non-finite price {price}")
            return None

        self._push(price)
        if self._count < self.window:
            return None

        # Order within the ring does not matter for mean and deviation.
        mean = self._prices.sum() / self.window
        np.subtract(self._prices, mean, out=self._scratch)
        np.square(self._scratch, out=self._scratch)
        return float(math.sqrt(self._scratch.sum() / self.window))

    def handle(self, item: PriceLike) -> Optional[float]:
        return self.try_handle_price(price_of(item))
