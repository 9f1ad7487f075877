"""
Pydantic models for retirement projection scenarios.

This module defines the immutable input records consumed by the ledger
simulator and the contribution solver. Field names are snake_case in Python
and camelCase on the wire, matching the payloads produced by the planner UI.
Either spelling is accepted on input.

The models deliberately carry no range constraints: deciding whether a
scenario is usable is the job of ``retiresmart.models.validation``, which
reports problems per field instead of rejecting the payload outright.
"""

import math
from typing import List

from pydantic import BaseModel, ConfigDict, Field

_RECORD_CONFIG = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


def inflate(amount: float, rate: float, years: int) -> float:
    """Compound ``amount`` at ``rate`` percent for ``years`` years.

    Growth past the float range saturates to infinity instead of raising.
    """
    if amount == 0:
        return 0.0
    try:
        factor = (1 + rate / 100) ** years
    except OverflowError:
        factor = math.inf
    return amount * factor


class GlobalSettings(BaseModel):
    """Age profile and post-retirement market assumptions."""

    model_config = _RECORD_CONFIG

    current_age: int = Field(..., alias="currentAge", description="Age today")
    retirement_age: int = Field(
        ..., alias="retirementAge", description="Age at which contributions stop"
    )
    life_expectancy: int = Field(
        ..., alias="lifeExpectancy", description="Last simulated age (inclusive)"
    )
    post_retirement_roi: float = Field(
        ..., alias="postRetirementROI", description="Annual return after retirement (%)"
    )
    inflation: float = Field(
        default=0.0,
        alias="inflation",
        description="Headline inflation (%), used only for sanity warnings",
    )


class InvestmentProfile(BaseModel):
    """Current savings and the planned monthly contribution (SIP)."""

    model_config = _RECORD_CONFIG

    current_corpus: float = Field(
        ..., alias="currentCorpus", description="Invested savings in today's money"
    )
    pre_retirement_roi: float = Field(
        ..., alias="preRetirementROI", description="Annual return before retirement (%)"
    )
    planned_sip: float = Field(
        ..., alias="plannedSIP", description="Planned monthly contribution"
    )
    sip_step_up: float = Field(
        default=0.0,
        alias="sipStepUp",
        description="Annual growth of the monthly contribution (%)",
    )


class ExpenseBucket(BaseModel):
    """Recurring monthly expense drawn from the corpus after retirement."""

    model_config = _RECORD_CONFIG

    id: str = Field(..., description="Stable identifier")
    name: str = Field(default="", description="Display label")
    current_monthly_cost: float = Field(
        ..., alias="currentMonthlyCost", description="Monthly cost in today's money"
    )
    inflation_rate: float = Field(
        ..., alias="inflationRate", description="Annual cost inflation (%)"
    )
    end_age: int = Field(
        ..., alias="endAge", description="Last age at which the expense applies"
    )

    def annual_cost(self, year_index: int, age: int) -> float:
        """Inflated annual cost for the given year, zero once past ``end_age``."""
        if age > self.end_age:
            return 0.0
        return inflate(self.current_monthly_cost, self.inflation_rate, year_index) * 12


class Milestone(BaseModel):
    """One-time expense incurred ``year_offset`` years from now."""

    model_config = _RECORD_CONFIG

    id: str = Field(..., description="Stable identifier")
    name: str = Field(default="", description="Display label")
    current_cost: float = Field(
        ..., alias="currentCost", description="Cost in today's money"
    )
    inflation_rate: float = Field(
        ..., alias="inflationRate", description="Annual cost inflation (%)"
    )
    year_offset: int = Field(
        ..., alias="yearOffset", description="Years from now at which the cost falls due"
    )

    def cost_in_year(self, year_index: int) -> float:
        """Inflated cost if the milestone falls in ``year_index``, else zero."""
        if self.year_offset != year_index:
            return 0.0
        return inflate(self.current_cost, self.inflation_rate, year_index)


class Scenario(BaseModel):
    """Complete planning scenario as submitted by a caller."""

    model_config = _RECORD_CONFIG

    settings: GlobalSettings = Field(..., description="Ages and post-retirement return")
    profile: InvestmentProfile = Field(..., description="Savings and contribution plan")
    expenses: List[ExpenseBucket] = Field(
        default_factory=list, description="Recurring post-retirement expenses"
    )
    milestones: List[Milestone] = Field(
        default_factory=list, description="One-time future expenses"
    )

    def with_zero_growth(self) -> "Scenario":
        """Return a copy with every growth and inflation rate set to zero.

        This is the "raw money" what-if view: the absolute sum needed in
        today's terms without any market forces.
        """
        return self.model_copy(
            update={
                "settings": self.settings.model_copy(
                    update={"post_retirement_roi": 0.0, "inflation": 0.0}
                ),
                "profile": self.profile.model_copy(
                    update={"pre_retirement_roi": 0.0, "sip_step_up": 0.0}
                ),
                "expenses": [
                    e.model_copy(update={"inflation_rate": 0.0}) for e in self.expenses
                ],
                "milestones": [
                    m.model_copy(update={"inflation_rate": 0.0}) for m in self.milestones
                ],
            }
        )
