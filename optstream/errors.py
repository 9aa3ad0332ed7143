# optstream/errors.py


class OptstreamError(Exception):
    """Base class for errors raised by optstream components."""


class OutOfOrderQuoteError(OptstreamError, ValueError):
    """A quote arrived with a timestamp earlier than the previous quote."""

    def __init__(self, last_timestamp: float, timestamp: float):
        self.last_timestamp = last_timestamp
        self.timestamp = timestamp
        super().__init__(
            f"received old quote: latest timestamp {last_timestamp}, new timestamp {timestamp}"
        )


class NonConvergenceError(OptstreamError, ArithmeticError):
    """Newton-Raphson ran out of iterations or hit a flat derivative.

    ``last_iterate`` is the best volatility found, so callers can retry
    with another initial guess or report it.
    """

    def __init__(self, last_iterate: float, iterations: int, residual: float):
        self.last_iterate = last_iterate
        self.iterations = iterations
        self.residual = residual
        super().__init__(
            f"implied volatility did not converge after {iterations} iterations "
            f"(last iterate {last_iterate}, residual {residual})"
        )
