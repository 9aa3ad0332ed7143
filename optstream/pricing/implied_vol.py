# optstream/pricing/implied_vol.py
import math
from dataclasses import dataclass
from typing import Callable, Optional

from optstream import config
from optstream.errors import NonConvergenceError
from optstream.pricing.black_scholes import call, call_vega, put, put_vega
from optstream.utils import setup_logger

logger = setup_logger(__name__)

SQRT_TWO_PI = math.sqrt(2.0 * math.pi)

@dataclass(frozen=True)
class RootResult:
    value: float
    converged: bool
    iterations: int
    residual: float

def approximate_vol(price: float, spot: float, strike: float, rate: float, maturity: float) -> float:
    """
    Corrado and Miller (1996) closed-form estimate of implied volatility
    from a call price.

    The discriminant is clamped at zero before taking its square root, so
    prices far from the money can legitimately produce a guess of 0.
    """
    k_discount = strike * math.exp(-rate * maturity)
    moneyness_gap = spot - k_discount
    centered = price - 0.5 * moneyness_gap
    discriminant = centered ** 2 - moneyness_gap ** 2 / math.pi
    bridge = math.sqrt(discriminant) if discriminant > 0.0 else 0.0
    return SQRT_TWO_PI / (spot + k_discount) * (centered + bridge) / math.sqrt(maturity)

def find_root(f: Callable[[float], float], df: Callable[[float], float], x0: float,
              tolerance: Optional[float] = None, max_iterations: Optional[int] = None) -> RootResult:
    """
    Newton-Raphson search for f(x) == 0.

    Stops when |f(x)| < tolerance. A zero or non-finite derivative, or a
    non-finite iterate, ends the search early as non-converged; the last
    finite iterate is reported either way.
    """
    if tolerance is None:
        tolerance = config.IV_TOLERANCE
    if max_iterations is None:
        max_iterations = config.IV_MAX_ITERATIONS

    x = x0
    fx = f(x)
    for iteration in range(max_iterations):
        if abs(fx) < tolerance:
            return RootResult(value=x, converged=True, iterations=iteration, residual=fx)

        slope = df(x)
        if slope == 0.0 or not math.isfinite(slope):
            logger.debug(f"Newton-Raphson stopped on flat derivative at x={x} (iteration {iteration})")
            return RootResult(value=x, converged=False, iterations=iteration, residual=fx)

        next_x = x - fx / slope
        if not math.isfinite(next_x):
            return RootResult(value=x, converged=False, iterations=iteration + 1, residual=fx)

        x = next_x
        fx = f(x)

    converged = abs(fx) < tolerance
    return RootResult(value=x, converged=converged, iterations=max_iterations, residual=fx)

def _solve(objective, derivative, initial_guess, tolerance, max_iterations, label) -> float:
    result = find_root(objective, derivative, initial_guess, tolerance, max_iterations)
    if not result.converged:
        logger.warning(f"{label} implied volatility did not converge: guess={initial_guess:.6f} "
                       f"last={result.value:.6f} residual={result.residual:.3e} after {result.iterations} iterations")
        raise NonConvergenceError(result.value, result.iterations, result.residual)
    return result.value

def call_iv_guess(price: float, spot: float, strike: float, rate: float, maturity: float,
                  initial_guess: float, tolerance: Optional[float] = None,
                  max_iterations: Optional[int] = None) -> float:
    """
    Implied volatility of a call starting from an explicit guess.

    Raises:
        NonConvergenceError: carrying the last iterate when the solver fails
    """
    return _solve(
        lambda sigma: call(spot, strike, rate, sigma, maturity) - price,
        lambda sigma: call_vega(spot, strike, rate, sigma, maturity),
        initial_guess, tolerance, max_iterations, "Call",
    )

def put_iv_guess(price: float, spot: float, strike: float, rate: float, maturity: float,
                 initial_guess: float, tolerance: Optional[float] = None,
                 max_iterations: Optional[int] = None) -> float:
    """Put counterpart of call_iv_guess."""
    return _solve(
        lambda sigma: put(spot, strike, rate, sigma, maturity) - price,
        lambda sigma: put_vega(spot, strike, rate, sigma, maturity),
        initial_guess, tolerance, max_iterations, "Put",
    )

def call_iv(price: float, spot: float, strike: float, rate: float, maturity: float,
            tolerance: Optional[float] = None, max_iterations: Optional[int] = None) -> float:
    """
    Implied volatility of a call price.

    Args:
        price: Observed call premium
        spot: Current asset price
        strike: Option strike price
        rate: Continuously compounded risk-free rate
        maturity: Time to expiry in years

    Returns:
        Annualized volatility reproducing the observed price

    Raises:
        NonConvergenceError: when Newton-Raphson does not reach the tolerance
    """
    initial_guess = approximate_vol(price, spot, strike, rate, maturity)
    return call_iv_guess(price, spot, strike, rate, maturity, initial_guess, tolerance, max_iterations)

def put_iv(price: float, spot: float, strike: float, rate: float, maturity: float,
           tolerance: Optional[float] = None, max_iterations: Optional[int] = None) -> float:
    """
    Implied volatility of a put price.

    The put price is converted to the parity-equivalent call price
    (put + S - K * exp(-rT)) and solved as a call; both share one vol.
    """
    call_price = price + spot - strike * math.exp(-rate * maturity)
    return call_iv(call_price, spot, strike, rate, maturity, tolerance, max_iterations)
