# optstream/core/option_price_stream.py
from typing import Optional

from optstream.core.quote import PriceLike, price_of
from optstream.core.stream import PriceDrivenStream
from optstream.core.volatility_stream import VolatilityStream
from optstream.pricing.black_scholes import call_discount
from optstream.utils import setup_logger

logger = setup_logger(__name__)


class OptionPriceStream(PriceDrivenStream):
    """
    Running call price driven by realized volatility.

    Every price goes through an owned VolatilityStream. Once it emits, the
    estimate is used as sigma*sqrt(T) in call_discount together with the
    current price, the fixed strike and the fixed discount factor.
    Nothing is emitted until the volatility window has filled.
    """

    def __init__(self, source=None, *, strike: float, discount: float = 1.0,
                 window: Optional[int] = None):
        super().__init__(source)
        self.volatility = VolatilityStream(window=window)
        self.strike = strike
        self.discount = discount

    def try_handle_price(self, price: float) -> Optional[float]:
        volatility = self.volatility.try_handle_price(price)
        if volatility is None:
            return None
        option_price = call_discount(price, self.strike, self.discount, volatility)
        logger.debug(f"S={price:.4f} K={self.strike:.4f} vol={volatility:.6f} => call {option_price:.6f}")
        return option_price

    def handle(self, item: PriceLike) -> Optional[float]:
        return self.try_handle_price(price_of(item))
