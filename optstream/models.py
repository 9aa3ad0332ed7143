# optstream/models.py
import math

from pydantic import BaseModel, Field

from optstream.pricing.black_scholes import PriceAndGreeks, call, compute_all, put
from optstream.pricing.implied_vol import call_iv, put_iv


class OptionInputs(BaseModel):
    spot: float = Field(..., gt=0)
    strike: float = Field(..., gt=0)
    rate: float = 0.0
    volatility: float = Field(..., ge=0)
    maturity: float = Field(..., ge=0)  # years

    @property
    def discount(self) -> float:
        return math.exp(-self.rate * self.maturity)

    @property
    def sqrt_maturity_sigma(self) -> float:
        return math.sqrt(self.maturity) * self.volatility

    def price(self, option_type: str = "call") -> float:
        if option_type.lower() == "call":
            return call(self.spot, self.strike, self.rate, self.volatility, self.maturity)
        if option_type.lower() == "put":
            return put(self.spot, self.strike, self.rate, self.volatility, self.maturity)
        raise ValueError("option_type must be 'call' or 'put'")

    def price_and_greeks(self) -> PriceAndGreeks:
        return compute_all(self.spot, self.strike, self.rate, self.volatility, self.maturity)


class ImpliedVolRequest(BaseModel):
    price: float = Field(..., ge=0)
    spot: float = Field(..., gt=0)
    strike: float = Field(..., gt=0)
    rate: float = 0.0
    maturity: float = Field(..., gt=0)
    option_type: str = Field("call", pattern="^(call|put)$")

    def solve(self) -> float:
        """Implied volatility; raises NonConvergenceError on failure."""
        solver = call_iv if self.option_type == "call" else put_iv
        return solver(self.price, self.spot, self.strike, self.rate, self.maturity)
