from __future__ import annotations

import logging
import math
from collections.abc import Callable

from scipy.integrate import quad

from .constants import QUAD_ATOL, QUAD_RTOL
from .errors import IntegrationFailure

log = logging.getLogger(__name__)


def integrate(
    f: Callable[[float], float],
    a: float,
    b: float,
    rtol: float = QUAD_RTOL,
    atol: float = QUAD_ATOL,
    limit: int = 100,
) -> float:
    """Adaptive Gauss-Kronrod quadrature of f over [a, b].

    Raises IntegrationFailure instead of returning an unconverged estimate.
    Holds no state between calls, so nested and concurrent use is safe.
    """
    if a == b:
        return 0.0
    out = quad(f, a, b, epsabs=atol, epsrel=rtol, limit=limit, full_output=1)
    value, abserr = float(out[0]), float(out[1])
    # quad appends a message to the output tuple when it gives up
    if len(out) > 3:
        log.debug("quadrature over [%g, %g] failed: %s", a, b, out[3])
        raise IntegrationFailure(str(out[3]).strip(), rtol, atol, value, abserr)
    if not math.isfinite(value):
        raise IntegrationFailure("non-finite estimate", rtol, atol, value, abserr)
    return value
