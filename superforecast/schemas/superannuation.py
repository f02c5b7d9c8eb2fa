"""Data contracts for superannuation accumulation and drawdown projections.

The core models carry no range checks: the projectors trust their caller, so
ages, balances and rates are used exactly as given. The ``*Request`` models
are what the HTTP layer accepts and they do the sanitising.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AccumulationInput(BaseModel):
    """Pre-retirement assumptions. Rates are percentages (7 means 7%)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    currentAge: int
    retirementAge: int
    currentBalance: float
    annualSalary: float
    voluntaryConcessionalContribution: float = 0.0
    voluntaryNonConcessionalContribution: float = 0.0
    expectedReturnRate: float
    salaryGrowthRate: float = 0.0


class AccumulationYearRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    year: int
    age: int
    startingBalance: float
    sgContributions: float
    voluntaryConcessional: float
    # amount actually contributed after the effective cap
    voluntaryNonConcessional: float
    totalConcessional: float
    investmentReturns: float
    taxOnEarnings: float
    endingBalance: float
    concessionalCapExceededBy: Optional[float] = None
    nonConcessionalCapExceededBy: Optional[float] = None


class SharedRates(BaseModel):
    """Rates carried from the accumulation phase into retirement (percent)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    returnRate: float
    inflationRate: float


class PostRetirementInput(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    annualLivingExpenses: float
    otherInvestmentIncome: float = 0.0


class DrawdownYearRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    year: int
    age: int
    startingBalance: float
    investmentReturns: float
    drawdown: float
    otherIncome: float
    totalIncome: float
    shortfall: Optional[float] = None
    endingBalance: float


class RetirementProjection(BaseModel):
    """Accumulation and drawdown runs plus the headline outcome."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    accumulation: List[AccumulationYearRecord]
    drawdown: List[DrawdownYearRecord]
    estimatedRetirementBalance: float
    # age at which the fund is exhausted, None when it outlives the horizon
    depletionAge: Optional[int] = None
    lastsBeyondAge: Optional[int] = None
    totalShortfall: float = 0.0


# -----------------------------
# HTTP request models
# -----------------------------


class AccumulationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    currentAge: int = Field(ge=10, le=100)
    retirementAge: int = Field(ge=20, le=110)
    currentBalance: float = Field(ge=0)
    annualSalary: float = Field(ge=0)
    voluntaryConcessionalContribution: float = Field(default=0.0, ge=0)
    voluntaryNonConcessionalContribution: float = Field(default=0.0, ge=0)
    expectedReturnRate: float = Field(ge=-100, le=100)
    salaryGrowthRate: float = Field(default=0.0, ge=-100, le=100)

    @model_validator(mode="after")
    def ensure_validity(self) -> "AccumulationRequest":
        if self.retirementAge <= self.currentAge:
            raise ValueError("retirementAge must be greater than currentAge")
        return self

    def to_input(self) -> AccumulationInput:
        return AccumulationInput(**self.model_dump())


class PostRetirementRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    annualLivingExpenses: float = Field(ge=0)
    otherInvestmentIncome: float = Field(default=0.0, ge=0)

    def to_input(self) -> PostRetirementInput:
        return PostRetirementInput(**self.model_dump())


class DrawdownRequest(BaseModel):
    """A standalone drawdown run from a known starting balance."""

    model_config = ConfigDict(extra="forbid")

    startingBalance: float = Field(ge=0)
    retirementAge: int = Field(ge=20, le=110)
    returnRate: float = Field(ge=-100, le=100)
    inflationRate: float = Field(default=0.0, ge=-100, le=100)
    annualLivingExpenses: float = Field(ge=0)
    otherInvestmentIncome: float = Field(default=0.0, ge=0)
    maxYears: Optional[int] = Field(default=None, ge=1, le=100)

    def shared_rates(self) -> SharedRates:
        return SharedRates(returnRate=self.returnRate, inflationRate=self.inflationRate)

    def post_retirement(self) -> PostRetirementInput:
        return PostRetirementInput(
            annualLivingExpenses=self.annualLivingExpenses,
            otherInvestmentIncome=self.otherInvestmentIncome,
        )


class RetirementRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    superannuation: AccumulationRequest
    inflationRate: float = Field(default=0.0, ge=-100, le=100)
    postRetirement: PostRetirementRequest
    maxYears: Optional[int] = Field(default=None, ge=1, le=100)


__all__ = [
    "AccumulationInput",
    "AccumulationYearRecord",
    "SharedRates",
    "PostRetirementInput",
    "DrawdownYearRecord",
    "RetirementProjection",
    "AccumulationRequest",
    "PostRetirementRequest",
    "DrawdownRequest",
    "RetirementRequest",
]
