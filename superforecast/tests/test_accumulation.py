from __future__ import annotations

from math import isclose

import pytest

from superforecast.core.accumulation import project_accumulation
from superforecast.core.policy import (
    CONCESSIONAL_CONTRIBUTION_CAP,
    NON_CONCESSIONAL_CONTRIBUTION_CAP,
    TOTAL_SUPER_BALANCE_LIMIT,
    SuperPolicy,
)
from superforecast.schemas.superannuation import AccumulationInput

POLICY = SuperPolicy()


def make_input(**overrides) -> AccumulationInput:
    values = dict(
        currentAge=30,
        retirementAge=31,
        currentBalance=0.0,
        annualSalary=80000.0,
        voluntaryConcessionalContribution=0.0,
        voluntaryNonConcessionalContribution=0.0,
        expectedReturnRate=0.0,
        salaryGrowthRate=0.0,
    )
    values.update(overrides)
    return AccumulationInput(**values)


def test_single_year_guarantee_only():
    rows = project_accumulation(make_input(), policy=POLICY, current_year=2025)

    assert len(rows) == 1
    row = rows[0]
    assert row.year == 2025
    assert row.age == 30
    assert isclose(row.sgContributions, 9200.0)
    assert isclose(row.totalConcessional, 9200.0)
    assert row.investmentReturns == 0.0
    assert row.taxOnEarnings == 0.0
    assert isclose(row.endingBalance, 9200.0)
    assert row.concessionalCapExceededBy is None
    assert row.nonConcessionalCapExceededBy is None


def test_returns_taxed_at_earnings_rate():
    rows = project_accumulation(
        make_input(currentBalance=100000.0, annualSalary=0.0, expectedReturnRate=7),
        policy=POLICY,
    )

    row = rows[0]
    assert isclose(row.investmentReturns, 7000.0)
    assert isclose(row.taxOnEarnings, 0.15 * 7000.0)
    assert isclose(row.endingBalance, 100000.0 * 1.0595)


def test_negative_returns_are_not_taxed():
    rows = project_accumulation(
        make_input(currentBalance=100000.0, annualSalary=0.0, expectedReturnRate=-10),
        policy=POLICY,
    )

    row = rows[0]
    assert isclose(row.investmentReturns, -10000.0)
    assert row.taxOnEarnings == 0.0
    assert isclose(row.endingBalance, 90000.0)


@pytest.mark.parametrize("current_age, retirement_age", [(40, 40), (50, 45)])
def test_no_rows_when_already_retired(current_age, retirement_age):
    rows = project_accumulation(
        make_input(currentAge=current_age, retirementAge=retirement_age),
        policy=POLICY,
    )
    assert rows == []


def test_one_row_per_working_year_with_contiguous_ages():
    rows = project_accumulation(
        make_input(currentAge=30, retirementAge=67, currentBalance=50000, expectedReturnRate=7, salaryGrowthRate=3),
        policy=POLICY,
        current_year=2025,
    )

    assert len(rows) == 37
    assert [row.age for row in rows] == list(range(30, 67))
    assert [row.year for row in rows] == list(range(2025, 2062))


def test_balance_identity_holds_every_year():
    rows = project_accumulation(
        make_input(
            currentAge=40,
            retirementAge=60,
            currentBalance=1500000,
            annualSalary=250000,
            voluntaryConcessionalContribution=5000,
            voluntaryNonConcessionalContribution=150000,
            expectedReturnRate=6,
            salaryGrowthRate=4,
        ),
        policy=POLICY,
    )

    previous_end = 1500000.0
    for row in rows:
        assert isclose(row.startingBalance, previous_end)
        expected = (
            row.startingBalance
            + row.totalConcessional
            + row.voluntaryNonConcessional
            + row.investmentReturns
            - row.taxOnEarnings
        )
        assert isclose(row.endingBalance, expected, rel_tol=1e-12)
        previous_end = row.endingBalance


def test_concessional_cap_breach_is_reported_but_fully_contributed():
    rows = project_accumulation(make_input(annualSalary=300000.0), policy=POLICY)

    row = rows[0]
    assert isclose(row.totalConcessional, 34500.0)
    assert isclose(row.concessionalCapExceededBy, 34500.0 - CONCESSIONAL_CONTRIBUTION_CAP)
    assert isclose(row.endingBalance, 34500.0)


def test_concessional_cap_exactly_met_is_not_a_breach():
    rows = project_accumulation(
        make_input(annualSalary=0.0, voluntaryConcessionalContribution=CONCESSIONAL_CONTRIBUTION_CAP),
        policy=POLICY,
    )
    assert isclose(rows[0].totalConcessional, CONCESSIONAL_CONTRIBUTION_CAP)
    assert rows[0].concessionalCapExceededBy is None


def test_voluntary_concessional_is_not_indexed():
    rows = project_accumulation(
        make_input(retirementAge=35, voluntaryConcessionalContribution=3000.0, salaryGrowthRate=5),
        policy=POLICY,
    )
    assert all(row.voluntaryConcessional == 3000.0 for row in rows)


def test_non_concessional_capped_at_standard_cap():
    rows = project_accumulation(
        make_input(
            currentBalance=100000.0,
            annualSalary=0.0,
            voluntaryNonConcessionalContribution=150000.0,
        ),
        policy=POLICY,
    )

    row = rows[0]
    assert row.voluntaryNonConcessional == NON_CONCESSIONAL_CONTRIBUTION_CAP
    assert isclose(row.nonConcessionalCapExceededBy, 40000.0)
    assert isclose(row.endingBalance, 210000.0)


def test_non_concessional_cap_is_zero_at_tsb_limit():
    rows = project_accumulation(
        make_input(
            currentBalance=TOTAL_SUPER_BALANCE_LIMIT,
            annualSalary=0.0,
            voluntaryNonConcessionalContribution=50000.0,
        ),
        policy=POLICY,
    )

    row = rows[0]
    assert row.voluntaryNonConcessional == 0.0
    assert isclose(row.nonConcessionalCapExceededBy, 50000.0)
    assert isclose(row.endingBalance, TOTAL_SUPER_BALANCE_LIMIT)


def test_tsb_limit_judged_on_opening_balance_each_year():
    rows = project_accumulation(
        make_input(
            currentAge=60,
            retirementAge=62,
            currentBalance=1850000.0,
            annualSalary=0.0,
            voluntaryNonConcessionalContribution=10000.0,
            expectedReturnRate=7,
        ),
        policy=POLICY,
    )

    first, second = rows
    assert first.voluntaryNonConcessional == 10000.0
    assert first.nonConcessionalCapExceededBy is None
    assert second.startingBalance >= TOTAL_SUPER_BALANCE_LIMIT
    assert second.voluntaryNonConcessional == 0.0
    assert isclose(second.nonConcessionalCapExceededBy, 10000.0)


def test_salary_growth_applies_after_each_contribution():
    rows = project_accumulation(
        make_input(retirementAge=33, annualSalary=100000.0, salaryGrowthRate=10),
        policy=POLICY,
    )

    expected_sg = [11500.0, 12650.0, 13915.0]
    for row, expected in zip(rows, expected_sg):
        assert isclose(row.sgContributions, expected, rel_tol=1e-9)


def test_custom_policy_values_are_used():
    policy = SuperPolicy(superGuaranteeRate=0.12, concessionalCap=5000.0)
    rows = project_accumulation(make_input(), policy=policy)

    assert isclose(rows[0].sgContributions, 9600.0)
    assert isclose(rows[0].concessionalCapExceededBy, 4600.0)


def test_negative_balance_flows_through_unclamped():
    rows = project_accumulation(
        make_input(currentBalance=-10000.0, annualSalary=0.0, expectedReturnRate=10),
        policy=POLICY,
    )

    row = rows[0]
    assert row.startingBalance == -10000.0
    assert isclose(row.investmentReturns, -1000.0)
    assert row.taxOnEarnings == 0.0
    assert isclose(row.endingBalance, -11000.0)


def test_negative_salary_growth_shrinks_contributions():
    rows = project_accumulation(
        make_input(retirementAge=32, annualSalary=100000.0, salaryGrowthRate=-10),
        policy=POLICY,
    )

    assert isclose(rows[0].sgContributions, 11500.0)
    assert isclose(rows[1].sgContributions, 10350.0)


def test_explicit_year_zero_is_respected():
    rows = project_accumulation(make_input(retirementAge=32), policy=POLICY, current_year=0)
    assert [row.year for row in rows] == [0, 1]
