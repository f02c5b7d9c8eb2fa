"""Data contracts for household budgeting and the budget forecast."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_INCOME_CATEGORIES = ["Salary", "Bonus", "Investment", "Rental", "Freelance", "Other"]
DEFAULT_EXPENSE_CATEGORIES = [
    "Housing",
    "Utilities",
    "Groceries",
    "Transport",
    "Healthcare",
    "Entertainment",
    "Education",
    "Debt Repayment",
    "Savings/Investments",
    "Personal Care",
    "Other",
]


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class RecurrenceFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class TimeFilter(str, Enum):
    CURRENT_MONTH = "current_month"
    FYTD = "fytd"
    ALL_TIME = "all_time"


class Transaction(BaseModel):
    """A single income or expense entry. Recurrence is recorded, not expanded."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    type: TransactionType
    category: str
    amount: float = Field(ge=0)
    date: dt.date
    description: str = ""
    isRecurring: bool = False
    recurrenceFrequency: Optional[RecurrenceFrequency] = None
    recurrenceEndDate: Optional[dt.date] = None


class AnnualizedBaseline(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    annualIncome: Optional[float] = None
    annualExpenses: Optional[float] = None
    daysInRange: int = 0
    message: str


class MonthlyTotals(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    month: str  # YYYY-MM
    income: float
    expenses: float


class BudgetSummary(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    totalIncome: float
    totalExpenses: float
    netBalance: float
    expensesByCategory: Dict[str, float]
    monthly: List[MonthlyTotals]


class BudgetForecastInput(BaseModel):
    """Forecast assumptions. Growth rates are percentages."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    baselineSource: Literal["manual", "transactions"] = "manual"
    baselineAnnualIncome: float = Field(default=0.0, ge=0)
    baselineAnnualExpenses: float = Field(default=0.0, ge=0)
    forecastYears: int = Field(default=5, ge=0, le=100)
    incomeGrowthRate: float = 0.0
    expenseGrowthRate: float = 0.0


class ProjectedBudgetYear(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    year: int  # 1-based forecast year
    actualYear: int
    projectedIncome: float
    projectedExpenses: float
    projectedNetBalance: float


# -----------------------------
# HTTP request models
# -----------------------------


class TransactionsRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    transactions: List[Transaction] = Field(default_factory=list)
    period: TimeFilter = TimeFilter.ALL_TIME
    today: Optional[dt.date] = None


class BudgetForecastRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    forecast: BudgetForecastInput
    transactions: List[Transaction] = Field(default_factory=list)


__all__ = [
    "DEFAULT_INCOME_CATEGORIES",
    "DEFAULT_EXPENSE_CATEGORIES",
    "TransactionType",
    "RecurrenceFrequency",
    "TimeFilter",
    "Transaction",
    "AnnualizedBaseline",
    "MonthlyTotals",
    "BudgetSummary",
    "BudgetForecastInput",
    "ProjectedBudgetYear",
    "TransactionsRequest",
    "BudgetForecastRequest",
]
