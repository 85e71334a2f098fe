"""Raw form values → sanitized RetirementInputs."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.schema import RetirementInputs

NUMERIC_FIELDS = (
    "current_age",
    "retirement_age",
    "lifespan",
    "current_savings",
    "annual_contributions",
    "annual_return",
    "annual_inflation",
    "retirement_spending",
)


class RetirementForm(BaseModel):
    """
    Planner form as typed by the user.

    Missing, blank, non-numeric or non-finite entries become 0 so the engine
    only ever sees finite numbers. Accepts both snake_case names and the
    camelCase keys older saved profiles use.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    current_age: float = Field(42, alias="currentAge", description="Current age (years)")
    retirement_age: float = Field(65, alias="retirementAge", description="Target retirement age")
    lifespan: float = Field(90, description="Lifespan assumption (years)")
    current_savings: float = Field(1_200_000, alias="currentSavings", description="Current savings balance")
    annual_contributions: float = Field(12_000, alias="annualContributions", description="Contributions per year")
    annual_return: float = Field(15.0, alias="annualReturn", description="Annual return assumption (%)")
    annual_inflation: float = Field(2.5, alias="annualInflation", description="Annual inflation assumption (%)")
    retirement_spending: float = Field(
        180_000, alias="retirementSpending", description="Annual spending in today's dollars"
    )
    flexible_spending: bool = Field(False, alias="flexibleSpending",
                                    description="Cut withdrawals 25% in down months")

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def sanitize_number(cls, v):
        """Blank/NaN/inf/unparseable → 0."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return 0.0
        if isinstance(v, str):
            try:
                v = float(v.replace(",", "").strip())
            except ValueError:
                return 0.0
        if isinstance(v, float) and not math.isfinite(v):
            return 0.0
        return v

    @field_validator("flexible_spending", mode="before")
    @classmethod
    def sanitize_flag(cls, v):
        if v is None or v == "":
            return False
        return v

    def to_inputs(self) -> RetirementInputs:
        return RetirementInputs(
            current_age=self.current_age,
            retirement_age=self.retirement_age,
            lifespan=self.lifespan,
            current_savings=self.current_savings,
            annual_contributions=self.annual_contributions,
            annual_return=self.annual_return,
            annual_inflation=self.annual_inflation,
            retirement_spending=self.retirement_spending,
            flexible_spending=self.flexible_spending,
        )

    @classmethod
    def from_inputs(cls, inputs: RetirementInputs) -> "RetirementForm":
        return cls(**inputs.to_dict())
