from optstream.pricing.normal import cumulative_normal, normal_density
from optstream.pricing.black_scholes import (
    PriceAndGreeks,
    call,
    call_delta,
    call_discount,
    call_gamma,
    call_rho,
    call_theta,
    call_vega,
    compute_all,
    put,
    put_delta,
    put_discount,
    put_gamma,
    put_rho,
    put_theta,
    put_vega,
)
from optstream.pricing.implied_vol import (
    RootResult,
    approximate_vol,
    call_iv,
    call_iv_guess,
    find_root,
    put_iv,
    put_iv_guess,
)
