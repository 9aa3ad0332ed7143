from optstream.core.quote import Candle, Priced, Quote, price_of
from optstream.core.stream import PriceDrivenStream, StreamResult, StreamStatus
from optstream.core.volatility_stream import VolatilityStream
from optstream.core.candle_stream import CandleStream
from optstream.core.option_price_stream import OptionPriceStream
