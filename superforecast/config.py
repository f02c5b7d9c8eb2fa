"""
Configuration for superforecast.

Uses pydantic-settings so superannuation policy values can be swapped per
financial year through environment variables (or a .env file) without code
changes. Every projection run reads one fixed snapshot of these values.
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from superforecast.core import policy as defaults
from superforecast.core.policy import SuperPolicy


class PolicySettings(BaseSettings):
    """Superannuation policy values for a single financial year (AUD)."""

    model_config = SettingsConfigDict(
        env_prefix="SUPER_POLICY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    financial_year: str = Field(
        default=defaults.FINANCIAL_YEAR,
        description="Financial year the values below apply to",
    )
    super_guarantee_rate: float = Field(
        default=defaults.SUPER_GUARANTEE_RATE,
        ge=0.0,
        le=1.0,
        description="Employer guarantee contribution as a fraction of salary",
    )
    concessional_contribution_cap: float = Field(
        default=defaults.CONCESSIONAL_CONTRIBUTION_CAP,
        ge=0,
        description="Annual cap on before-tax contributions",
    )
    non_concessional_contribution_cap: float = Field(
        default=defaults.NON_CONCESSIONAL_CONTRIBUTION_CAP,
        ge=0,
        description="Annual cap on after-tax contributions",
    )
    total_super_balance_limit: float = Field(
        default=defaults.TOTAL_SUPER_BALANCE_LIMIT,
        ge=0,
        description="Balance at or above which the non-concessional cap is $0",
    )
    super_earnings_tax_rate: float = Field(
        default=defaults.SUPER_EARNINGS_TAX_RATE,
        ge=0.0,
        le=1.0,
        description="Tax on positive earnings during accumulation",
    )
    division_293_threshold: float = Field(
        default=defaults.DIVISION_293_THRESHOLD, ge=0
    )
    carry_forward_concessional_tsb_threshold: float = Field(
        default=defaults.CARRY_FORWARD_CONCESSIONAL_TSB_THRESHOLD, ge=0
    )
    bring_forward_tsb_threshold_3x: float = Field(
        default=defaults.BRING_FORWARD_TSB_THRESHOLD_3X, ge=0
    )
    bring_forward_tsb_threshold_2x: float = Field(
        default=defaults.BRING_FORWARD_TSB_THRESHOLD_2X, ge=0
    )

    def to_policy(self) -> SuperPolicy:
        return SuperPolicy(
            financialYear=self.financial_year,
            superGuaranteeRate=self.super_guarantee_rate,
            concessionalCap=self.concessional_contribution_cap,
            nonConcessionalCap=self.non_concessional_contribution_cap,
            totalSuperBalanceLimit=self.total_super_balance_limit,
            earningsTaxRate=self.super_earnings_tax_rate,
            division293Threshold=self.division_293_threshold,
            carryForwardConcessionalTsbThreshold=self.carry_forward_concessional_tsb_threshold,
            bringForwardTsbThreshold3x=self.bring_forward_tsb_threshold_3x,
            bringForwardTsbThreshold2x=self.bring_forward_tsb_threshold_2x,
        )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_environment: str = Field(
        default="development",
        description="Environment: development, staging, production",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(
        default=False,
        description="Render logs as JSON instead of console output",
    )
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ],
        description="Origins allowed to call /api/*",
    )
    default_drawdown_years: int = Field(
        default=35,
        ge=1,
        le=100,
        description="Post-retirement horizon used when a request omits maxYears",
    )

    policy: PolicySettings = Field(default_factory=PolicySettings)

    @property
    def is_production(self) -> bool:
        return self.app_environment.lower() == "production"


@lru_cache
def get_settings() -> AppSettings:
    """
    Get cached application settings.

    Call get_settings.cache_clear() after changing the environment to reload.
    """
    return AppSettings()


def get_policy() -> SuperPolicy:
    """Policy built from the active settings snapshot."""
    return get_settings().policy.to_policy()
