"""c1fem.config
Runtime knobs read from the environment.
"""
import logging
import os

from c1fem.errors import ConfigurationError

ELEVATED_DPS_ENV = "C1FEM_ELEVATED_DPS"
DEBUG_ENV = "C1FEM_DEBUG"
DEFAULT_ELEVATED_DPS = 50


def elevated_dps() -> int:
    """Decimal digits used for the elevated-precision pass of the stiffness maps."""
    raw = os.getenv(ELEVATED_DPS_ENV, "").strip()
    if not raw:
        return DEFAULT_ELEVATED_DPS
    try:
        dps = int(raw)
    except ValueError:
        raise ConfigurationError(f"{ELEVATED_DPS_ENV} must be an integer, got {raw!r}") from None
    if dps < 1:
        raise ConfigurationError(f"{ELEVATED_DPS_ENV} must be positive, got {dps}")
    return dps


def debug_enabled() -> bool:
    return os.getenv(DEBUG_ENV, "").lower() in {"1", "true", "yes"}


def configure_logging(level=None) -> logging.Logger:
    """
    Attach a stream handler to the package logger. Library code never calls
    this; scripts and notebooks may.
    """
    logger = logging.getLogger("c1fem")
    if level is None:
        level = logging.DEBUG if debug_enabled() else logging.INFO
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s: %(message)s"))
        logger.addHandler(handler)
    return logger
