"""Household budget: transaction summaries, annualisation and growth forecast."""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence

import structlog

from superforecast.schemas.budget import (
    AnnualizedBaseline,
    BudgetForecastInput,
    BudgetSummary,
    MonthlyTotals,
    ProjectedBudgetYear,
    TimeFilter,
    Transaction,
    TransactionType,
)

logger = structlog.get_logger(__name__)

DAYS_PER_YEAR = 365.25
FINANCIAL_YEAR_START_MONTH = 7  # July
FINANCIAL_YEAR_START_DAY = 1


class BudgetForecastError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def financial_year_start(today: date) -> date:
    """First day of the Australian financial year containing today."""
    start_year = today.year if today.month >= FINANCIAL_YEAR_START_MONTH else today.year - 1
    return date(start_year, FINANCIAL_YEAR_START_MONTH, FINANCIAL_YEAR_START_DAY)


def filter_transactions(
    transactions: Sequence[Transaction],
    period: TimeFilter,
    today: Optional[date] = None,
) -> List[Transaction]:
    today = today or date.today()

    if period == TimeFilter.CURRENT_MONTH:
        return [
            t for t in transactions
            if t.date.year == today.year and t.date.month == today.month
        ]
    if period == TimeFilter.FYTD:
        start = financial_year_start(today)
        return [t for t in transactions if start <= t.date <= today]
    return list(transactions)


def _total(transactions: Sequence[Transaction], kind: TransactionType) -> float:
    return sum(t.amount for t in transactions if t.type == kind)


def summarize_transactions(transactions: Sequence[Transaction]) -> BudgetSummary:
    """Totals, expenses per category and month-by-month income/expenses."""
    by_category: Dict[str, float] = defaultdict(float)
    by_month: Dict[str, Dict[str, float]] = defaultdict(lambda: {"income": 0.0, "expenses": 0.0})

    for t in transactions:
        month = t.date.strftime("%Y-%m")
        if t.type == TransactionType.INCOME:
            by_month[month]["income"] += t.amount
        else:
            by_month[month]["expenses"] += t.amount
            by_category[t.category] += t.amount

    total_income = _total(transactions, TransactionType.INCOME)
    total_expenses = _total(transactions, TransactionType.EXPENSE)
    return BudgetSummary(
        totalIncome=total_income,
        totalExpenses=total_expenses,
        netBalance=total_income - total_expenses,
        expensesByCategory=dict(by_category),
        monthly=[
            MonthlyTotals(month=month, **totals)
            for month, totals in sorted(by_month.items())
        ],
    )


def annualize_transactions(transactions: Sequence[Transaction]) -> AnnualizedBaseline:
    """
    Scale tracked income and expenses up to a yearly figure.

    The observed span is inclusive of both the first and last transaction
    date, so a single day of data counts as one day.
    """
    if not transactions:
        return AnnualizedBaseline(
            message="No transactions available to calculate annualized figures.",
        )

    dates = [t.date for t in transactions]
    days = (max(dates) - min(dates)).days + 1

    income = _total(transactions, TransactionType.INCOME) / days * DAYS_PER_YEAR
    expenses = _total(transactions, TransactionType.EXPENSE) / days * DAYS_PER_YEAR

    if days < 7:
        message = (
            f"Annualized figures based on {days} day(s) of transaction data. "
            "Projections may be less accurate."
        )
    else:
        message = f"Annualized figures based on approx. {days} days of transaction data."

    return AnnualizedBaseline(
        annualIncome=income,
        annualExpenses=expenses,
        daysInRange=days,
        message=message,
    )


def project_budget(
    forecast: BudgetForecastInput,
    transactions: Sequence[Transaction] = (),
    current_year: Optional[int] = None,
) -> List[ProjectedBudgetYear]:
    """
    Compound baseline income and expenses forward.

    Year 1 is the baseline itself; every later year grows by its own rate.
    A "transactions" baseline needs at least one transaction.
    """
    if forecast.baselineSource == "transactions":
        baseline = annualize_transactions(transactions)
        if baseline.annualIncome is None or baseline.annualExpenses is None:
            raise BudgetForecastError(
                ["cannot use annualized transactions: no transactions recorded"]
            )
        income, expenses = baseline.annualIncome, baseline.annualExpenses
    else:
        income = forecast.baselineAnnualIncome
        expenses = forecast.baselineAnnualExpenses

    year0 = current_year if current_year is not None else datetime.now().year

    rows: List[ProjectedBudgetYear] = []
    for step in range(forecast.forecastYears):
        if step > 0:
            income *= 1 + forecast.incomeGrowthRate / 100
            expenses *= 1 + forecast.expenseGrowthRate / 100

        rows.append(
            ProjectedBudgetYear(
                year=step + 1,
                actualYear=year0 + step,
                projectedIncome=income,
                projectedExpenses=expenses,
                projectedNetBalance=income - expenses,
            )
        )

    logger.info(
        "budget_projected",
        years=len(rows),
        baseline_source=forecast.baselineSource,
    )
    return rows


__all__ = [
    "BudgetForecastError",
    "financial_year_start",
    "filter_transactions",
    "summarize_transactions",
    "annualize_transactions",
    "project_budget",
]
