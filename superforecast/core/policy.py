"""Superannuation policy values and the threshold rules built on them."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

# FY2024-25 values (AUD)
FINANCIAL_YEAR = "2024-25"
SUPER_GUARANTEE_RATE = 0.115
CONCESSIONAL_CONTRIBUTION_CAP = 27500.0
NON_CONCESSIONAL_CONTRIBUTION_CAP = 110000.0
# Non-concessional cap drops to $0 at or above this total super balance.
TOTAL_SUPER_BALANCE_LIMIT = 1900000.0
SUPER_EARNINGS_TAX_RATE = 0.15

# Shown to users but not applied: projections use simplified annual caps.
DIVISION_293_THRESHOLD = 250000.0
CARRY_FORWARD_CONCESSIONAL_TSB_THRESHOLD = 500000.0
BRING_FORWARD_TSB_THRESHOLD_3X = 1680000.0
BRING_FORWARD_TSB_THRESHOLD_2X = 1790000.0


class SuperPolicy(BaseModel):
    """Fixed policy inputs for one projection run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    financialYear: str = FINANCIAL_YEAR
    superGuaranteeRate: float = SUPER_GUARANTEE_RATE
    concessionalCap: float = CONCESSIONAL_CONTRIBUTION_CAP
    nonConcessionalCap: float = NON_CONCESSIONAL_CONTRIBUTION_CAP
    totalSuperBalanceLimit: float = TOTAL_SUPER_BALANCE_LIMIT
    earningsTaxRate: float = SUPER_EARNINGS_TAX_RATE

    division293Threshold: float = DIVISION_293_THRESHOLD
    carryForwardConcessionalTsbThreshold: float = CARRY_FORWARD_CONCESSIONAL_TSB_THRESHOLD
    bringForwardTsbThreshold3x: float = BRING_FORWARD_TSB_THRESHOLD_3X
    bringForwardTsbThreshold2x: float = BRING_FORWARD_TSB_THRESHOLD_2X


def effective_non_concessional_cap(balance: float, policy: SuperPolicy) -> float:
    """
    Non-concessional cap for a year, judged on the start-of-year balance.

    A balance at or above the total super balance limit leaves no room for
    after-tax contributions.
    """
    if balance >= policy.totalSuperBalanceLimit:
        return 0.0
    return policy.nonConcessionalCap


def amount_over(amount: float, cap: float) -> Optional[float]:
    """Excess of amount above cap, or None when within the cap."""
    if amount > cap:
        return amount - cap
    return None


def earnings_tax(returns: float, policy: SuperPolicy) -> float:
    # negative returns earn no offset
    if returns > 0:
        return returns * policy.earningsTaxRate
    return 0.0
