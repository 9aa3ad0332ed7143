# optstream/pricing/black_scholes.py
import math
from dataclasses import dataclass, asdict
from typing import Dict

from optstream.pricing.normal import cumulative_normal, normal_density

@dataclass(frozen=True)
class PriceAndGreeks:
    call_price: float
    call_delta: float
    call_gamma: float
    call_theta: float
    call_vega: float
    call_rho: float
    put_price: float
    put_delta: float
    put_gamma: float
    put_theta: float
    put_vega: float
    put_rho: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)

def _d1(spot: float, strike: float, discount: float, sqrt_maturity_sigma: float) -> float:
    forward_strike = strike * discount
    if spot > 0 and forward_strike > 0:
        log_moneyness = math.log(spot / forward_strike)
    elif spot <= 0:
        # worthless underlying
        log_moneyness = -math.inf
    else:
        log_moneyness = math.inf
    return log_moneyness / sqrt_maturity_sigma + 0.5 * sqrt_maturity_sigma

def _gamma(spot: float, pdf_d1: float, sqrt_maturity_sigma: float) -> float:
    if spot <= 0:
        return 0.0
    return pdf_d1 / (spot * sqrt_maturity_sigma)

def call_discount(spot: float, strike: float, discount: float, sqrt_maturity_sigma: float) -> float:
    """
    Black-Scholes call price with the discount factor and sigma*sqrt(T)
    already computed.

    Args:
        spot: Current asset price
        strike: Option strike price
        discount: Discount factor exp(-r * T)
        sqrt_maturity_sigma: Volatility times the square root of maturity

    Returns:
        Call premium; the intrinsic value max(S - K, 0) when
        sqrt_maturity_sigma is not positive
    """
    if sqrt_maturity_sigma > 0.0:
        d1 = _d1(spot, strike, discount, sqrt_maturity_sigma)
        return spot * cumulative_normal(d1) - strike * discount * cumulative_normal(d1 - sqrt_maturity_sigma)
    return max(spot - strike, 0.0)

def put_discount(spot: float, strike: float, discount: float, sqrt_maturity_sigma: float) -> float:
    """Put counterpart of call_discount; max(K - S, 0) in the degenerate case."""
    if sqrt_maturity_sigma > 0.0:
        d1 = _d1(spot, strike, discount, sqrt_maturity_sigma)
        return strike * discount * cumulative_normal(sqrt_maturity_sigma - d1) - spot * cumulative_normal(-d1)
    return max(strike - spot, 0.0)

def call(spot: float, strike: float, rate: float, sigma: float, maturity: float) -> float:
    """
    Standard Black-Scholes call price.

    Args:
        spot: Current asset price
        strike: Option strike price
        rate: Continuously compounded risk-free rate
        sigma: Annualized volatility (as decimal, e.g., 0.3 for 30%)
        maturity: Time to expiry in years

    Returns:
        Call premium
    """
    return call_discount(spot, strike, math.exp(-rate * maturity), math.sqrt(maturity) * sigma)

def put(spot: float, strike: float, rate: float, sigma: float, maturity: float) -> float:
    """Standard Black-Scholes put price. Arguments as for call()."""
    return put_discount(spot, strike, math.exp(-rate * maturity), math.sqrt(maturity) * sigma)

def call_delta(spot: float, strike: float, rate: float, sigma: float, maturity: float) -> float:
    sqrt_maturity_sigma = math.sqrt(maturity) * sigma
    if sqrt_maturity_sigma > 0.0:
        d1 = _d1(spot, strike, math.exp(-rate * maturity), sqrt_maturity_sigma)
        return cumulative_normal(d1)
    return 1.0 if spot > strike else 0.0

def put_delta(spot: float, strike: float, rate: float, sigma: float, maturity: float) -> float:
    sqrt_maturity_sigma = math.sqrt(maturity) * sigma
    if sqrt_maturity_sigma > 0.0:
        d1 = _d1(spot, strike, math.exp(-rate * maturity), sqrt_maturity_sigma)
        return cumulative_normal(d1) - 1.0
    return -1.0 if strike > spot else 0.0

def call_gamma(spot: float, strike: float, rate: float, sigma: float, maturity: float) -> float:
    sqrt_maturity_sigma = math.sqrt(maturity) * sigma
    if sqrt_maturity_sigma > 0.0:
        d1 = _d1(spot, strike, math.exp(-rate * maturity), sqrt_maturity_sigma)
        return _gamma(spot, normal_density(d1), sqrt_maturity_sigma)
    return 0.0

def put_gamma(spot: float, strike: float, rate: float, sigma: float, maturity: float) -> float:
    return call_gamma(spot, strike, rate, sigma, maturity)  # same as call

def call_vega(spot: float, strike: float, rate: float, sigma: float, maturity: float) -> float:
    """Price change per unit (not per 1%) change in volatility."""
    sqrt_t = math.sqrt(maturity)
    sqrt_maturity_sigma = sqrt_t * sigma
    if sqrt_maturity_sigma > 0.0:
        d1 = _d1(spot, strike, math.exp(-rate * maturity), sqrt_maturity_sigma)
        return spot * normal_density(d1) * sqrt_t
    return 0.0

def put_vega(spot: float, strike: float, rate: float, sigma: float, maturity: float) -> float:
    return call_vega(spot, strike, rate, sigma, maturity)  # same as call

def call_theta(spot: float, strike: float, rate: float, sigma: float, maturity: float) -> float:
    """Annualized theta (per year, not per day)."""
    sqrt_t = math.sqrt(maturity)
    sqrt_maturity_sigma = sqrt_t * sigma
    if sqrt_maturity_sigma > 0.0:
        discount = math.exp(-rate * maturity)
        d1 = _d1(spot, strike, discount, sqrt_maturity_sigma)
        return (-spot * normal_density(d1) * sigma / (2.0 * sqrt_t)
                - rate * strike * discount * cumulative_normal(d1 - sqrt_maturity_sigma))
    return 0.0

def put_theta(spot: float, strike: float, rate: float, sigma: float, maturity: float) -> float:
    """Annualized theta (per year, not per day)."""
    sqrt_t = math.sqrt(maturity)
    sqrt_maturity_sigma = sqrt_t * sigma
    if sqrt_maturity_sigma > 0.0:
        discount = math.exp(-rate * maturity)
        d1 = _d1(spot, strike, discount, sqrt_maturity_sigma)
        return (-spot * normal_density(d1) * sigma / (2.0 * sqrt_t)
                + rate * strike * discount * cumulative_normal(sqrt_maturity_sigma - d1))
    return 0.0

def call_rho(spot: float, strike: float, rate: float, sigma: float, maturity: float) -> float:
    sqrt_maturity_sigma = math.sqrt(maturity) * sigma
    if sqrt_maturity_sigma > 0.0:
        discount = math.exp(-rate * maturity)
        d1 = _d1(spot, strike, discount, sqrt_maturity_sigma)
        return strike * discount * maturity * cumulative_normal(d1 - sqrt_maturity_sigma)
    return 0.0

def put_rho(spot: float, strike: float, rate: float, sigma: float, maturity: float) -> float:
    sqrt_maturity_sigma = math.sqrt(maturity) * sigma
    if sqrt_maturity_sigma > 0.0:
        discount = math.exp(-rate * maturity)
        d1 = _d1(spot, strike, discount, sqrt_maturity_sigma)
        return -strike * discount * maturity * cumulative_normal(sqrt_maturity_sigma - d1)
    return 0.0

def compute_all(spot: float, strike: float, rate: float, sigma: float, maturity: float) -> PriceAndGreeks:
    """
    Call and put prices and Greeks for one set of market inputs.

    N(d1), N(d2) and n(d1) are evaluated once and shared by every
    quantity, so this is cheaper than calling the individual functions
    when all of them are needed.

    Returns:
        PriceAndGreeks; theta is annualized and vega is per unit of volatility
    """
    discount = math.exp(-rate * maturity)
    sqrt_maturity = math.sqrt(maturity)
    sqrt_maturity_sigma = sqrt_maturity * sigma
    k_discount = strike * discount

    if sqrt_maturity_sigma <= 0.0:
        return PriceAndGreeks(
            call_price=max(spot - strike, 0.0),
            call_delta=1.0 if spot > strike else 0.0,
            call_gamma=0.0,
            call_theta=0.0,
            call_vega=0.0,
            call_rho=0.0,
            put_price=max(strike - spot, 0.0),
            put_delta=-1.0 if strike > spot else 0.0,
            put_gamma=0.0,
            put_theta=0.0,
            put_vega=0.0,
            put_rho=0.0,
        )

    d1 = _d1(spot, strike, discount, sqrt_maturity_sigma)
    d2 = d1 - sqrt_maturity_sigma
    cdf_d1 = cumulative_normal(d1)
    cdf_d2 = cumulative_normal(d2)
    pdf_d1 = normal_density(d1)

    call_price = spot * cdf_d1 - k_discount * cdf_d2
    gamma = _gamma(spot, pdf_d1, sqrt_maturity_sigma)
    vega = spot * pdf_d1 * sqrt_maturity
    theta_decay = -spot * pdf_d1 * sigma / (2.0 * sqrt_maturity)

    return PriceAndGreeks(
        call_price=call_price,
        call_delta=cdf_d1,
        call_gamma=gamma,
        call_theta=theta_decay - rate * k_discount * cdf_d2,
        call_vega=vega,
        call_rho=k_discount * maturity * cdf_d2,
        put_price=call_price + k_discount - spot,
        put_delta=cdf_d1 - 1.0,
        put_gamma=gamma,
        put_theta=theta_decay + rate * k_discount * (1.0 - cdf_d2),
        put_vega=vega,
        put_rho=-k_discount * maturity * (1.0 - cdf_d2),
    )
