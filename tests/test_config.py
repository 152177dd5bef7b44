import logging

import mpmath
import numpy as np
import pytest

from c1fem.config import (
    DEBUG_ENV, DEFAULT_ELEVATED_DPS, ELEVATED_DPS_ENV, configure_logging, debug_enabled, elevated_dps,
)
from c1fem.errors import C1FemError, ConfigurationError
from c1fem.utils.precision import (
    MultiPrecision, WorkingPrecision, infer_precision, resolve_precision,
)


def test_elevated_dps_default_and_override(monkeypatch):
    assert elevated_dps() == DEFAULT_ELEVATED_DPS
    monkeypatch.setenv(ELEVATED_DPS_ENV, " 80 ")
    assert elevated_dps() == 80


@pytest.mark.parametrize("raw", ["0", "-3", "1.5", "lots"])
def test_elevated_dps_rejects_bad_values(monkeypatch, raw):
    monkeypatch.setenv(ELEVATED_DPS_ENV, raw)
    with pytest.raises(ConfigurationError):
        elevated_dps()


@pytest.mark.parametrize("raw, expected", [("1", True), ("TRUE", True), ("yes", True), ("0", False), ("", False)])
def test_debug_switch(monkeypatch, raw, expected):
    monkeypatch.setenv(DEBUG_ENV, raw)
    assert debug_enabled() is expected


def test_configure_logging(monkeypatch):
    logger = logging.getLogger("c1fem")
    saved = (logger.level, list(logger.handlers))
    try:
        monkeypatch.setenv(DEBUG_ENV, "1")
        assert configure_logging() is logger
        assert logger.level == logging.DEBUG
        n_handlers = len(logger.handlers)
        configure_logging(logging.WARNING)
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == n_handlers
    finally:
        logger.setLevel(saved[0])
        logger.handlers[:] = saved[1]


def test_error_hierarchy():
    assert issubclass(ConfigurationError, C1FemError)
    assert issubclass(ConfigurationError, ValueError)


def test_resolve_precision():
    assert resolve_precision(np.float32) == WorkingPrecision(np.dtype(np.float32))
    assert resolve_precision("longdouble").dtype == np.dtype(np.longdouble)
    mp = MultiPrecision(40)
    assert resolve_precision(mp) is mp
    with mpmath.workdps(35):
        assert resolve_precision(mpmath.mpf) == MultiPrecision(35)


def test_infer_precision():
    assert infer_precision(1, 2) == WorkingPrecision(np.dtype(np.float64))
    assert infer_precision(np.float32(1.0), np.float32(2.0)).dtype == np.float32
    assert isinstance(infer_precision(mpmath.mpf(1), 0.5), MultiPrecision)


@pytest.mark.parametrize("dps", [0, -5, 2.5, "50", True])
def test_multiprecision_validates_digits(dps):
    with pytest.raises(ConfigurationError):
        MultiPrecision(dps)


def test_rounding_from_multiprecision():
    mp = MultiPrecision(40)
    with mp.context():
        third = mp.asarray([mpmath.mpf(1) / 3])
    f64 = resolve_precision(np.float64).round(third)
    assert f64.dtype == np.float64 and f64[0] == 1.0 / 3.0
    ld = resolve_precision(np.longdouble).round(third)
    assert ld[0] == np.longdouble(1) / np.longdouble(3)
