"""Chain an accumulation run into a drawdown run and summarise the outcome."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from superforecast.config import get_policy
from superforecast.core.accumulation import project_accumulation
from superforecast.core.drawdown import DEFAULT_MAX_YEARS, project_drawdown
from superforecast.core.policy import SuperPolicy
from superforecast.schemas.superannuation import (
    AccumulationInput,
    DrawdownYearRecord,
    PostRetirementInput,
    RetirementProjection,
    SharedRates,
)


def depletion_age(rows: List[DrawdownYearRecord]) -> Optional[int]:
    """Age at which the fund runs out, or None if it outlives the rows."""
    if rows and rows[-1].endingBalance <= 0:
        return rows[-1].age
    return None


def project_retirement(
    super_inputs: AccumulationInput,
    post_retirement: PostRetirementInput,
    inflation_rate: float,
    max_years: int = DEFAULT_MAX_YEARS,
    policy: Optional[SuperPolicy] = None,
    current_year: Optional[int] = None,
) -> RetirementProjection:
    """
    Run accumulation, then draw down its final balance from retirementAge.

    The expected return rate is shared by both phases. Drawdown is skipped
    when accumulation produced no rows (already at or past retirement age).
    """
    policy = policy or get_policy()
    year0 = current_year if current_year is not None else datetime.now().year

    accumulation = project_accumulation(super_inputs, policy=policy, current_year=year0)
    if not accumulation:
        return RetirementProjection(
            accumulation=[],
            drawdown=[],
            estimatedRetirementBalance=super_inputs.currentBalance,
        )

    retirement_balance = accumulation[-1].endingBalance
    drawdown = project_drawdown(
        starting_balance=retirement_balance,
        retirement_age=super_inputs.retirementAge,
        shared_rates=SharedRates(
            returnRate=super_inputs.expectedReturnRate,
            inflationRate=inflation_rate,
        ),
        post_retirement=post_retirement,
        max_years=max_years,
        current_year=year0,
        current_age=super_inputs.currentAge,
    )

    depleted_at = depletion_age(drawdown)
    return RetirementProjection(
        accumulation=accumulation,
        drawdown=drawdown,
        estimatedRetirementBalance=retirement_balance,
        depletionAge=depleted_at,
        lastsBeyondAge=drawdown[-1].age if drawdown and depleted_at is None else None,
        totalShortfall=sum(row.shortfall or 0.0 for row in drawdown),
    )


__all__ = ["depletion_age", "project_retirement"]
