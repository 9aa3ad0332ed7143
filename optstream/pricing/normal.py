# optstream/pricing/normal.py
import math
from scipy.special import erf

SQRT_2 = math.sqrt(2.0)
SQRT_2PI = math.sqrt(2.0 * math.pi)

def cumulative_normal(x: float) -> float:
    """Standard normal CDF, 0.5 + 0.5 * erf(x / sqrt(2))."""
    return 0.5 + 0.5 * float(erf(x / SQRT_2))

def normal_density(x: float) -> float:
    """Standard normal PDF."""
    return math.exp(-0.5 * x * x) / SQRT_2PI
