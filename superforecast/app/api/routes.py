"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict

import structlog
from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from superforecast.config import AppSettings
from superforecast.core.accumulation import project_accumulation
from superforecast.core.budget import (
    BudgetForecastError,
    annualize_transactions,
    filter_transactions,
    project_budget,
    summarize_transactions,
)
from superforecast.core.drawdown import project_drawdown
from superforecast.core.retirement import project_retirement
from superforecast.defaults import (
    DEFAULT_BUDGET_FORECAST,
    DEFAULT_INFLATION_RATE,
    DEFAULT_POST_RETIREMENT_INPUTS,
    DEFAULT_SUPER_INPUTS,
)
from superforecast.schemas.budget import (
    DEFAULT_EXPENSE_CATEGORIES,
    DEFAULT_INCOME_CATEGORIES,
    BudgetForecastRequest,
    TransactionsRequest,
)
from superforecast.schemas.superannuation import (
    AccumulationRequest,
    DrawdownRequest,
    RetirementRequest,
)

api_bp = Blueprint("api", __name__)
logger = structlog.get_logger(__name__)


def _settings() -> AppSettings:
    return current_app.config["SETTINGS"]


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.info("request_rejected", path=request.path, errors=exc.error_count())
    detail = exc.errors(include_url=False, include_context=False)
    return jsonify({"detail": detail}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(BudgetForecastError)
def _handle_forecast_error(exc: BudgetForecastError):
    logger.info("budget_forecast_rejected", errors=exc.errors)
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    return jsonify(
        {"message": "pong", "financialYear": _settings().policy.financial_year}
    )


@api_bp.get("/super/policy")
def super_policy() -> Any:
    """Policy values every projection on this server runs with."""
    return jsonify(_settings().policy.to_policy().model_dump())


@api_bp.get("/super/defaults")
def defaults() -> Any:
    """Initial form values for the super and budget screens."""
    return jsonify(
        {
            "superannuation": DEFAULT_SUPER_INPUTS.model_dump(),
            "inflationRate": DEFAULT_INFLATION_RATE,
            "postRetirement": DEFAULT_POST_RETIREMENT_INPUTS.model_dump(),
            "budgetForecast": DEFAULT_BUDGET_FORECAST.model_dump(),
            "incomeCategories": DEFAULT_INCOME_CATEGORIES,
            "expenseCategories": DEFAULT_EXPENSE_CATEGORIES,
        }
    )


@api_bp.post("/super/accumulation")
def accumulation() -> Any:
    payload = AccumulationRequest.model_validate(_payload())
    rows = project_accumulation(
        payload.to_input(), policy=_settings().policy.to_policy()
    )
    return jsonify([row.model_dump() for row in rows])


@api_bp.post("/super/drawdown")
def drawdown() -> Any:
    payload = DrawdownRequest.model_validate(_payload())
    max_years = payload.maxYears or _settings().default_drawdown_years
    rows = project_drawdown(
        starting_balance=payload.startingBalance,
        retirement_age=payload.retirementAge,
        shared_rates=payload.shared_rates(),
        post_retirement=payload.post_retirement(),
        max_years=max_years,
    )
    return jsonify([row.model_dump() for row in rows])


@api_bp.post("/super/projection")
def projection() -> Any:
    """Accumulation followed by drawdown, with the depletion outcome."""
    payload = RetirementRequest.model_validate(_payload())
    result = project_retirement(
        super_inputs=payload.superannuation.to_input(),
        post_retirement=payload.postRetirement.to_input(),
        inflation_rate=payload.inflationRate,
        max_years=payload.maxYears or _settings().default_drawdown_years,
        policy=_settings().policy.to_policy(),
    )
    return jsonify(result.model_dump())


@api_bp.post("/budget/summary")
def budget_summary() -> Any:
    payload = TransactionsRequest.model_validate(_payload())
    selected = filter_transactions(payload.transactions, payload.period, payload.today)
    return jsonify(summarize_transactions(selected).model_dump())


@api_bp.post("/budget/annualize")
def budget_annualize() -> Any:
    payload = TransactionsRequest.model_validate(_payload())
    return jsonify(annualize_transactions(payload.transactions).model_dump())


@api_bp.post("/budget/forecast")
def budget_forecast() -> Any:
    payload = BudgetForecastRequest.model_validate(_payload())
    rows = project_budget(payload.forecast, payload.transactions)
    return jsonify([row.model_dump() for row in rows])
