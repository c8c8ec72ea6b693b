from __future__ import annotations


class GCModelError(Exception):
    """Base class for errors raised by the column model."""


class UnsupportedGas(GCModelError, ValueError):
    pass


class UnsupportedModel(GCModelError, ValueError):
    pass


class UnsupportedViscosityModel(UnsupportedModel):
    pass


class DomainError(GCModelError, ArithmeticError):
    """Numeric precondition violated (negative radicand, zero denominator, overflow)."""


class MissingChemicalData(GCModelError, LookupError):
    pass


class IntegrationFailure(GCModelError, RuntimeError):
    def __init__(
        self,
        message: str,
        rtol: float,
        atol: float,
        estimate: float,
        abserr: float,
    ) -> None:
        super().__init__(
            f"{message} (rtol={rtol:g}, atol={atol:g}, "
            f"estimate={estimate:g}, abserr={abserr:g})"
        )
        self.rtol = rtol
        self.atol = atol
        self.estimate = estimate
        self.abserr = abserr
