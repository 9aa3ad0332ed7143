# optstream/config.py

import logging
import os

# === CORE SETTINGS ===
PACKAGE_NAME = "optstream"
VERSION = "0.3"

# === LOGGING ===
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# === REALIZED VOLATILITY ===
DEFAULT_VOLATILITY_WINDOW = 50  # prices per estimate
VOLATILITY_WINDOWS = [50, 500, 5000]  # windows used by the volatility report

# === CANDLES ===
CANDLE_DURATION_SECONDS = 60.0
CANDLE_ORIGIN = 0.0  # bucket grid origin, seconds since the Unix epoch

# === IMPLIED VOLATILITY SOLVER ===
IV_TOLERANCE = 1e-6  # on |price(sigma) - observed|
IV_MAX_ITERATIONS = 10000

# === SERIES EXPORT ===
SERIES_SAMPLE_EVERY = 10  # keep every n-th point for plotting

# === ENVIRONMENT-BASED OVERRIDES ===
ENV_PREFIX = "OPTSTREAM_"


def _parse_env_value(raw: str, current):
    if isinstance(current, bool):
        return raw.lower() in ('true', '1', 'yes', 'on')
    if isinstance(current, list):
        # window lists are comma separated integers
        return [int(item) for item in raw.split(',') if item.strip()]
    return type(current)(raw)


def _apply_env_overrides(namespace):
    for key, current in list(namespace.items()):
        if not key.isupper() or key == "ENV_PREFIX":
            continue
        if not isinstance(current, (str, int, float, bool, list)):
            continue
        raw = os.environ.get(ENV_PREFIX + key)
        if raw is None:
            continue
        try:
            namespace[key] = _parse_env_value(raw, current)
        except ValueError as e:
            logging.getLogger(__name__).warning(
                f"Ignoring {ENV_PREFIX}{key}={raw!r}: expected {type(current).__name__} ({e})"
            )


_apply_env_overrides(globals())
