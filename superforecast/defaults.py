"""Starting values for the input forms."""

from superforecast.schemas.budget import BudgetForecastInput
from superforecast.schemas.superannuation import AccumulationInput, PostRetirementInput

DEFAULT_SUPER_INPUTS = AccumulationInput(
    currentAge=30,
    retirementAge=67,
    currentBalance=50000,
    annualSalary=80000,
    voluntaryConcessionalContribution=0,
    voluntaryNonConcessionalContribution=0,
    expectedReturnRate=7,
    salaryGrowthRate=3,
)
DEFAULT_INFLATION_RATE = 2.5

DEFAULT_POST_RETIREMENT_INPUTS = PostRetirementInput(
    annualLivingExpenses=60000,
    otherInvestmentIncome=0,
)

DEFAULT_BUDGET_FORECAST = BudgetForecastInput(
    baselineSource="manual",
    baselineAnnualIncome=60000,
    baselineAnnualExpenses=40000,
    forecastYears=5,
    incomeGrowthRate=2,
    expenseGrowthRate=3,
)
