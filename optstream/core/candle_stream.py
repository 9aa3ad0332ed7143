# optstream/core/candle_stream.py
import math
from dataclasses import replace
from datetime import timedelta
from typing import Optional, Tuple, Union

from optstream import config
from optstream.core.quote import Candle, Quote
from optstream.core.stream import PriceDrivenStream
from optstream.errors import OutOfOrderQuoteError
from optstream.utils import setup_logger

logger = setup_logger(__name__)

CandleAndStart = Tuple[Candle, float]


class CandleStream(PriceDrivenStream):
    """
    OHLCV candles over fixed-length time buckets.

    Buckets sit on a grid of `bucket_duration` steps counted from `origin`
    (the Unix epoch by default), so their edges are not aligned to round
    wall-clock points such as the full minute unless the duration happens
    to divide them. A candle is emitted, together with its bucket start,
    when the first quote of a later bucket arrives. Empty buckets in a gap
    are skipped, never emitted.
    """

    def __init__(self, source=None, bucket_duration: Union[float, timedelta, None] = None,
                 origin: Optional[float] = None):
        super().__init__(source)
        if bucket_duration is None:
            bucket_duration = config.CANDLE_DURATION_SECONDS
        if isinstance(bucket_duration, timedelta):
            bucket_duration = bucket_duration.total_seconds()
        if not bucket_duration > 0:
            raise ValueError(
                f"Cannot create a candle stream with a non-positive bucket duration ({bucket_duration})"
            )
        self.bucket_duration = float(bucket_duration)
        self.origin = float(config.CANDLE_ORIGIN if origin is None else origin)
        self.bucket_index = 0  # whole buckets since origin
        self.candle = Candle()
        self.last_quote: Optional[Quote] = None

    def _start_of(self, index: int) -> float:
        return self.origin + index * self.bucket_duration

    @property
    def bucket_start(self) -> float:
        return self._start_of(self.bucket_index)

    def _index_of(self, timestamp: float) -> int:
        index = int(math.floor((timestamp - self.origin) / self.bucket_duration))
        # The division can land one bucket off right at an edge.
        if self._start_of(index + 1) <= timestamp:
            index += 1
        elif self._start_of(index) > timestamp:
            index -= 1
        return index

    def try_handle_quote(self, quote: Quote) -> Optional[CandleAndStart]:
        """
        Folds one quote into the open candle.

        Returns:
            (candle, bucket_start) of the bucket just closed, or None

        Raises:
            OutOfOrderQuoteError: if the quote is older than the previous one
        """
        last = self.last_quote
        if last is None:
            self.candle = quote.new_candle()
            self.bucket_index = self._index_of(quote.timestamp)
            self.last_quote = quote
            logger.debug(f"First quote at {quote.timestamp}, bucket starts at {self.bucket_start}")
            return None

        if quote.timestamp < last.timestamp:
            raise OutOfOrderQuoteError(last.timestamp, quote.timestamp)

        finished = None
        if self._start_of(self.bucket_index + 1) <= quote.timestamp:
            last.close_candle(self.candle)
            finished = (self.candle, self.bucket_start)

            self.candle = quote.new_candle()
            skipped = max(self._index_of(quote.timestamp) - self.bucket_index, 1)
            self.bucket_index += skipped
            logger.debug(f"Closed candle at {finished[1]}, skipped {skipped - 1} empty buckets")
        else:
            quote.update_candle(self.candle)

        self.last_quote = quote
        return finished

    def flush(self) -> Optional[CandleAndStart]:
        """The still-open candle, closed at the last quote, without ending it."""
        if self.last_quote is None:
            return None
        pending = replace(self.candle, close=self.last_quote.price)
        return pending, self.bucket_start

    def handle(self, item: Quote) -> Optional[CandleAndStart]:
        return self.try_handle_quote(item)
