"""Pydantic models used for Clean and Gold validation.

These models define the expected schema for cleaned loan application records
and the Gold tables read by the mortgage disparity dashboard.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, ConfigDict


class MortgageApplication(BaseModel):
    """Schema for a cleaned HMDA loan application record.

    Attributes:
        race_ethnicity: Combined race/ethnicity label of the applicant.
        denied: 1 when the application was denied, else 0.
        income_1000s: Gross annual income in thousands of dollars.
        income_bracket: Derived income bracket label.
        activity_year: HMDA reporting year, when known.
        county_code: 5-digit county FIPS code, when known.
    """
    model_config = ConfigDict(extra="forbid")
    race_ethnicity: str | None
    denied: int = Field(..., ge=0, le=1)
    income_1000s: float | None = None
    income_bracket: str | None = None
    activity_year: int | None = Field(default=None, ge=2007, le=2100)
    county_code: str | None = None


class DenialRateRow(BaseModel):
    """Gold row: denial summary for one race/ethnicity group."""
    model_config = ConfigDict(extra="forbid")
    race_ethnicity: str | None
    total: int = Field(..., ge=0)
    denied: float = Field(..., ge=0)
    denial_rate: float | None = Field(default=None, ge=0, le=1)


class DenialRateByIncomeRow(DenialRateRow):
    """Gold row: denial summary for one race/ethnicity and income bracket."""
    income_bracket: str | None


class RiskRatioRow(BaseModel):
    """Gold row: a group's denial rate relative to the reference group."""
    model_config = ConfigDict(extra="forbid")
    race_ethnicity: str | None
    reference_group: str
    denial_rate: float | None
    risk_ratio: str
