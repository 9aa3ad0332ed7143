import math
import unittest

from optstream.pricing.black_scholes import (
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
from optstream.pricing.normal import cumulative_normal, normal_density


class TestNormalKernel(unittest.TestCase):
    def test_known_values(self):
        self.assertAlmostEqual(cumulative_normal(0.0), 0.5, places=15)
        self.assertAlmostEqual(cumulative_normal(1.96), 0.9750021048517795, places=12)
        self.assertAlmostEqual(normal_density(0.0), 1.0 / math.sqrt(2.0 * math.pi), places=15)

    def test_symmetry(self):
        for x in [-3.0, -1.2, 0.4, 2.5]:
            self.assertAlmostEqual(cumulative_normal(x) + cumulative_normal(-x), 1.0, places=14)
            self.assertAlmostEqual(normal_density(x), normal_density(-x), places=15)

    def test_tails_stay_finite(self):
        self.assertEqual(cumulative_normal(-40.0), 0.0)
        self.assertEqual(cumulative_normal(40.0), 1.0)
        self.assertEqual(normal_density(60.0), 0.0)


class TestBlackScholesPrices(unittest.TestCase):
    def setUp(self):
        self.stock = 5.0
        self.strike = 4.5
        self.rate = 0.05
        self.sigma = 0.3
        self.maturity = 1.0

    def test_reference_prices(self):
        self.assertAlmostEqual(call(self.stock, self.strike, self.rate, self.sigma, self.maturity),
                               0.9848721043419868, places=12)
        self.assertAlmostEqual(put(self.stock, self.strike, self.rate, self.sigma, self.maturity),
                               0.2654045145951993, places=12)

    def test_discount_variants_match(self):
        discount = math.exp(-self.rate * self.maturity)
        sqrt_maturity_sigma = self.sigma * math.sqrt(self.maturity)
        self.assertEqual(call_discount(self.stock, self.strike, discount, sqrt_maturity_sigma),
                         call(self.stock, self.strike, self.rate, self.sigma, self.maturity))
        self.assertEqual(put_discount(self.stock, self.strike, discount, sqrt_maturity_sigma),
                         put(self.stock, self.strike, self.rate, self.sigma, self.maturity))

    def test_atm_symmetry_without_rates(self):
        for sigma in [0.05, 0.3, 1.2]:
            for maturity in [0.1, 1.0, 3.0]:
                self.assertAlmostEqual(call(100.0, 100.0, 0.0, sigma, maturity),
                                       put(100.0, 100.0, 0.0, sigma, maturity), places=10)

    def test_put_call_parity(self):
        for spot in [50.0, 95.0, 100.0, 140.0]:
            for rate in [-0.01, 0.0, 0.05]:
                for sigma in [0.1, 0.4, 1.5]:
                    for maturity in [0.25, 1.0, 2.0]:
                        parity = spot - 100.0 * math.exp(-rate * maturity)
                        difference = call(spot, 100.0, rate, sigma, maturity) - put(spot, 100.0, rate, sigma, maturity)
                        self.assertLess(abs(difference - parity), 1e-9)

    def test_intrinsic_limits(self):
        for spot in [80.0, 100.0, 120.0]:
            # zero volatility or zero maturity
            self.assertEqual(call(spot, 100.0, 0.05, 0.0, 1.0), max(spot - 100.0, 0.0))
            self.assertEqual(put(spot, 100.0, 0.05, 0.0, 1.0), max(100.0 - spot, 0.0))
            self.assertEqual(call(spot, 100.0, 0.05, 0.3, 0.0), max(spot - 100.0, 0.0))
            self.assertEqual(put(spot, 100.0, 0.05, 0.3, 0.0), max(100.0 - spot, 0.0))
            # converging from above
            self.assertAlmostEqual(call(spot, 100.0, 0.0, 1e-9, 1.0), max(spot - 100.0, 0.0), places=6)
            self.assertAlmostEqual(put(spot, 100.0, 0.0, 1e-9, 1.0), max(100.0 - spot, 0.0), places=6)
            self.assertAlmostEqual(call(spot, 100.0, 0.05, 0.3, 1e-16), max(spot - 100.0, 0.0), places=5)

    def test_worthless_underlying_does_not_raise(self):
        self.assertEqual(call_discount(0.0, 4.5, 0.95, 0.3), 0.0)
        self.assertAlmostEqual(put_discount(0.0, 4.5, 0.95, 0.3), 4.5 * 0.95, places=12)


class TestGreeks(unittest.TestCase):
    def setUp(self):
        self.args = (5.0, 4.5, 0.05, 0.3, 1.0)

    def test_against_finite_differences(self):
        spot, strike, rate, sigma, maturity = self.args
        h = 1e-5
        delta_fd = (call(spot + h, strike, rate, sigma, maturity) - call(spot - h, strike, rate, sigma, maturity)) / (2 * h)
        vega_fd = (call(spot, strike, rate, sigma + h, maturity) - call(spot, strike, rate, sigma - h, maturity)) / (2 * h)
        rho_fd = (call(spot, strike, rate + h, sigma, maturity) - call(spot, strike, rate - h, sigma, maturity)) / (2 * h)
        theta_fd = -(call(spot, strike, rate, sigma, maturity + h) - call(spot, strike, rate, sigma, maturity - h)) / (2 * h)
        put_theta_fd = -(put(spot, strike, rate, sigma, maturity + h) - put(spot, strike, rate, sigma, maturity - h)) / (2 * h)
        put_rho_fd = (put(spot, strike, rate + h, sigma, maturity) - put(spot, strike, rate - h, sigma, maturity)) / (2 * h)

        self.assertAlmostEqual(call_delta(*self.args), delta_fd, places=6)
        self.assertAlmostEqual(call_vega(*self.args), vega_fd, places=5)
        self.assertAlmostEqual(call_rho(*self.args), rho_fd, places=5)
        self.assertAlmostEqual(call_theta(*self.args), theta_fd, places=5)
        self.assertAlmostEqual(put_theta(*self.args), put_theta_fd, places=5)
        self.assertAlmostEqual(put_rho(*self.args), put_rho_fd, places=5)

        gamma_fd = (call_delta(spot + h, strike, rate, sigma, maturity)
                    - call_delta(spot - h, strike, rate, sigma, maturity)) / (2 * h)
        self.assertAlmostEqual(call_gamma(*self.args), gamma_fd, places=5)

    def test_call_put_relations(self):
        self.assertAlmostEqual(call_delta(*self.args) - put_delta(*self.args), 1.0, places=14)
        self.assertEqual(call_gamma(*self.args), put_gamma(*self.args))
        self.assertEqual(call_vega(*self.args), put_vega(*self.args))

    def test_degenerate_greeks(self):
        self.assertEqual(call_delta(110.0, 100.0, 0.05, 0.0, 1.0), 1.0)
        self.assertEqual(call_delta(90.0, 100.0, 0.05, 0.0, 1.0), 0.0)
        self.assertEqual(put_delta(90.0, 100.0, 0.05, 0.0, 1.0), -1.0)
        self.assertEqual(put_delta(110.0, 100.0, 0.05, 0.0, 1.0), 0.0)
        for greek in (call_gamma, call_vega, call_theta, call_rho, put_gamma, put_vega, put_theta, put_rho):
            self.assertEqual(greek(100.0, 100.0, 0.05, 0.3, 0.0), 0.0)


class TestComputeAll(unittest.TestCase):
    def test_matches_individual_functions(self):
        for args in [(5.0, 4.5, 0.05, 0.3, 1.0), (100.0, 120.0, 0.02, 0.8, 0.5), (42.0, 40.0, 0.0, 0.15, 2.0)]:
            result = compute_all(*args)
            self.assertAlmostEqual(result.call_price, call(*args), places=12)
            self.assertAlmostEqual(result.call_delta, call_delta(*args), places=12)
            self.assertAlmostEqual(result.call_gamma, call_gamma(*args), places=12)
            self.assertAlmostEqual(result.call_theta, call_theta(*args), places=12)
            self.assertAlmostEqual(result.call_vega, call_vega(*args), places=12)
            self.assertAlmostEqual(result.call_rho, call_rho(*args), places=12)
            self.assertAlmostEqual(result.put_price, put(*args), places=12)
            self.assertAlmostEqual(result.put_delta, put_delta(*args), places=12)
            self.assertAlmostEqual(result.put_gamma, put_gamma(*args), places=12)
            self.assertAlmostEqual(result.put_theta, put_theta(*args), places=12)
            self.assertAlmostEqual(result.put_vega, put_vega(*args), places=12)
            self.assertAlmostEqual(result.put_rho, put_rho(*args), places=12)

    def test_degenerate_branch(self):
        result = compute_all(110.0, 100.0, 0.05, 0.0, 1.0)
        self.assertEqual(result.call_price, 10.0)
        self.assertEqual(result.put_price, 0.0)
        self.assertEqual(result.call_delta, 1.0)
        self.assertEqual(result.put_delta, 0.0)
        self.assertEqual(result.call_gamma, 0.0)
        self.assertEqual(result.put_rho, 0.0)

    def test_as_dict(self):
        values = compute_all(5.0, 4.5, 0.05, 0.3, 1.0).as_dict()
        self.assertEqual(len(values), 12)
        self.assertIn("put_theta", values)


if __name__ == '__main__':
    unittest.main()
