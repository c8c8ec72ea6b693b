import math

import pytest

from gccolumn.errors import IntegrationFailure
from gccolumn.quadrature import integrate


def test_integrate_smooth_function():
    assert integrate(math.sin, 0.0, math.pi) == pytest.approx(2.0, rel=1e-3)


def test_integrate_empty_interval_is_exactly_zero():
    calls = []

    def f(y):
        calls.append(y)
        return 1.0

    assert integrate(f, 3.0, 3.0) == 0.0
    assert calls == []


def test_integrate_reports_non_convergence():
    def near_singular(y):
        return 1.0 / abs(y - 0.3) ** 0.999

    with pytest.raises(IntegrationFailure) as exc:
        integrate(near_singular, 0.0, 1.0, rtol=1e-10, atol=1e-12, limit=5)
    err = exc.value
    assert err.rtol == 1e-10
    assert err.atol == 1e-12
    assert math.isfinite(err.estimate) and err.estimate > 0.0
    assert err.abserr > 0.0
    assert "rtol=1e-10" in str(err)


def test_integrate_failure_is_runtime_error():
    with pytest.raises(RuntimeError):
        integrate(lambda y: 1.0 / abs(y - 0.3) ** 0.999, 0.0, 1.0, 1e-10, 1e-12, 5)
