"""Post-retirement drawdown of a superannuation balance."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

import structlog

from superforecast.schemas.superannuation import (
    DrawdownYearRecord,
    PostRetirementInput,
    SharedRates,
)

logger = structlog.get_logger(__name__)

DEFAULT_MAX_YEARS = 35


def project_drawdown(
    starting_balance: float,
    retirement_age: int,
    shared_rates: SharedRates,
    post_retirement: PostRetirementInput,
    max_years: int = DEFAULT_MAX_YEARS,
    current_year: Optional[int] = None,
    current_age: Optional[int] = None,
) -> List[DrawdownYearRecord]:
    """
    Deplete a retirement balance year by year, for at most max_years rows.

    Conventions:
      - Returns accrue on the opening balance and are untaxed (pension phase).
      - Drawdown = living expenses - other income, never below zero and never
        more than the balance after returns.
      - Living expenses inflate each year; other income stays flat.
      - The run stops after the first year whose ending balance hits zero,
        so a final endingBalance of 0 marks the depletion age.

    current_year/current_age anchor calendar years so they line up with an
    accumulation run that started at current_age; both default to "now" and
    retirement_age.
    """
    year0 = current_year if current_year is not None else datetime.now().year
    anchor_age = retirement_age if current_age is None else current_age

    balance = float(starting_balance)
    expenses = float(post_retirement.annualLivingExpenses)
    other_income = float(post_retirement.otherInvestmentIncome)

    rows: List[DrawdownYearRecord] = []
    for i in range(max_years):
        age = retirement_age + i
        if i > 0 and balance <= 0:
            break

        returns = balance * (shared_rates.returnRate / 100)
        after_returns = balance + returns

        desired = max(expenses - other_income, 0.0)
        drawdown = max(min(desired, after_returns), 0.0)

        ending = after_returns - drawdown
        total_income = drawdown + other_income
        shortfall = expenses - total_income if expenses > total_income else None

        rows.append(
            DrawdownYearRecord(
                year=year0 + (age - anchor_age),
                age=age,
                startingBalance=balance,
                investmentReturns=returns,
                drawdown=drawdown,
                otherIncome=other_income,
                totalIncome=total_income,
                shortfall=shortfall,
                endingBalance=max(0.0, ending),
            )
        )

        if ending <= 0:
            logger.debug("super_depleted", age=age, shortfall=shortfall)
            break

        balance = ending
        expenses *= 1 + shared_rates.inflationRate / 100

    logger.info(
        "drawdown_projected",
        years=len(rows),
        depleted=bool(rows) and rows[-1].endingBalance <= 0,
    )
    return rows


__all__ = ["DEFAULT_MAX_YEARS", "project_drawdown"]
