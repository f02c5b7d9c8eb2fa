"""Pre-retirement superannuation accumulation."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

import structlog

from superforecast.config import get_policy
from superforecast.core.policy import (
    SuperPolicy,
    amount_over,
    earnings_tax,
    effective_non_concessional_cap,
)
from superforecast.schemas.superannuation import (
    AccumulationInput,
    AccumulationYearRecord,
)

logger = structlog.get_logger(__name__)


def project_accumulation(
    inputs: AccumulationInput,
    policy: Optional[SuperPolicy] = None,
    current_year: Optional[int] = None,
) -> List[AccumulationYearRecord]:
    """
    Build a year-by-year table for ages currentAge..retirementAge-1.

    Order of operations (per year):
      1) SG contribution from the salary at the START of the year.
      2) Concessional total = SG + voluntary concessional (flat, not indexed).
         A cap breach is recorded but the full amount still goes in.
      3) Non-concessional contribution is limited to the year's effective cap,
         which is $0 once the opening balance reaches the TSB limit.
      4) Returns on opening balance + contributions; earnings tax on positive returns only.
      5) Salary grows for next year.

    Inputs are not validated: retirementAge <= currentAge gives an empty list
    and negative amounts flow through the arithmetic unchanged.
    """
    policy = policy or get_policy()
    year0 = current_year if current_year is not None else datetime.now().year

    balance = float(inputs.currentBalance)
    salary = float(inputs.annualSalary)

    rows: List[AccumulationYearRecord] = []
    for age in range(inputs.currentAge, inputs.retirementAge):
        starting = balance

        # 1) concessional (before-tax)
        sg = salary * policy.superGuaranteeRate
        voluntary_cc = inputs.voluntaryConcessionalContribution
        total_cc = sg + voluntary_cc
        cc_excess = amount_over(total_cc, policy.concessionalCap)

        # 2) non-concessional (after-tax), capped on the opening balance
        ncc_cap = effective_non_concessional_cap(starting, policy)
        ncc = min(inputs.voluntaryNonConcessionalContribution, ncc_cap)
        ncc_excess = amount_over(inputs.voluntaryNonConcessionalContribution, ncc_cap)

        if cc_excess is not None or ncc_excess is not None:
            logger.debug(
                "contribution_cap_exceeded",
                age=age,
                concessional_excess=cc_excess,
                non_concessional_excess=ncc_excess,
            )

        # 3) returns on the balance after contributions
        before_returns = starting + total_cc + ncc
        returns = before_returns * (inputs.expectedReturnRate / 100)
        tax = earnings_tax(returns, policy)
        balance = before_returns + returns - tax

        rows.append(
            AccumulationYearRecord(
                year=year0 + (age - inputs.currentAge),
                age=age,
                startingBalance=starting,
                sgContributions=sg,
                voluntaryConcessional=voluntary_cc,
                voluntaryNonConcessional=ncc,
                totalConcessional=total_cc,
                investmentReturns=returns,
                taxOnEarnings=tax,
                endingBalance=balance,
                concessionalCapExceededBy=cc_excess,
                nonConcessionalCapExceededBy=ncc_excess,
            )
        )

        # 4) next year's salary
        salary *= 1 + inputs.salaryGrowthRate / 100

    logger.info(
        "accumulation_projected",
        years=len(rows),
        financial_year=policy.financialYear,
        final_balance=rows[-1].endingBalance if rows else balance,
    )
    return rows


__all__ = ["project_accumulation"]
