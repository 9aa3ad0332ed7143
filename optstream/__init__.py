"""Streaming option pricing, realized volatility and OHLCV candles."""
from optstream.errors import NonConvergenceError, OptstreamError, OutOfOrderQuoteError
from optstream.pricing import (
    PriceAndGreeks,
    call,
    call_discount,
    call_iv,
    compute_all,
    put,
    put_discount,
    put_iv,
)
from optstream.core import (
    Candle,
    CandleStream,
    OptionPriceStream,
    Quote,
    StreamResult,
    StreamStatus,
    VolatilityStream,
)
