# optstream/series.py
"""
Plain-data exports for the plotting side: lists of (x, y) pairs and
pandas frames. Nothing here renders anything.
"""
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

import pandas as pd

from optstream import config
from optstream.core.candle_stream import CandleAndStart
from optstream.core.volatility_stream import VolatilityStream
from optstream.utils import setup_logger

logger = setup_logger(__name__)

Point = Tuple[float, float]


def into_data(xs: Iterable[float], ys: Iterable[float], every: Optional[int] = None) -> List[Point]:
    """Pairs xs with ys, keeping every `every`-th pair."""
    if every is None:
        every = config.SERIES_SAMPLE_EVERY
    if every < 1:
        raise ValueError(f"Sampling step must be at least 1, got {every}")
    pairs = zip(xs, ys)
    return [(float(x), float(y)) for i, (x, y) in enumerate(pairs) if i % every == 0]


def series_max(data: Sequence[Point]) -> Optional[float]:
    if not data:
        return None
    return max(y for _, y in data)


def candles_to_frame(candles: Iterable[CandleAndStart]) -> pd.DataFrame:
    """One row per emitted candle, indexed by bucket start."""
    rows = [
        {
            "bucket_start": start,
            "open": candle.open,
            "high": candle.high,
            "low": candle.low,
            "close": candle.close,
            "volume": candle.volume,
        }
        for candle, start in candles
    ]
    frame = pd.DataFrame(rows, columns=["bucket_start", "open", "high", "low", "close", "volume"])
    return frame.set_index("bucket_start")


def volatility_report(history: Iterable[Tuple[float, float]], windows: Optional[Sequence[int]] = None,
                      every: Optional[int] = None) -> Dict[Union[str, int], List[Point]]:
    """
    Price and realized-volatility series from one (timestamp, price) history.

    Each window gets its own VolatilityStream fed from the same ticks; an
    estimate is plotted at the timestamp of the tick that produced it.
    """
    if windows is None:
        windows = config.VOLATILITY_WINDOWS
    estimators = {window: VolatilityStream(window=window) for window in windows}

    timestamps: List[float] = []
    prices: List[float] = []
    estimates: Dict[int, Tuple[List[float], List[float]]] = {window: ([], []) for window in windows}

    for timestamp, price in history:
        timestamps.append(timestamp)
        prices.append(price)
        for window, estimator in estimators.items():
            value = estimator.try_handle_price(price)
            if value is not None:
                estimates[window][0].append(timestamp)
                estimates[window][1].append(value)

    logger.info(f"{len(timestamps)} prices processed for windows {list(windows)}")

    report: Dict[Union[str, int], List[Point]] = {"price": into_data(timestamps, prices, every)}
    for window, (xs, ys) in estimates.items():
        report[window] = into_data(xs, ys, every)
    return report
