"""
Scenario validation.

Checks whether a scenario is usable before it reaches the simulator. Problems
are reported per field, keyed by the camelCase field name for global inputs
and by ``<prefix>_<id>`` for individual expense buckets and milestones, so a
form can highlight the offending row. Only errors on the global inputs are
critical; a critical error means the projection must not be computed.
"""

from typing import Dict, List

from pydantic import BaseModel, Field

from .scenario import Scenario

CRITICAL_FIELDS = frozenset(
    {"currentAge", "retirementAge", "lifeExpectancy", "postRetirementROI"}
)

MIN_AGE = 18
MAX_AGE = 100
MAX_LIFE_EXPECTANCY = MAX_AGE + 20
MAX_REALISTIC_ROI = 30.0


class ValidationReport(BaseModel):
    """Outcome of validating a scenario."""

    errors: Dict[str, str] = Field(
        default_factory=dict, description="Error message per field or row key"
    )
    warnings: List[str] = Field(
        default_factory=list, description="Non-blocking plan sanity warnings"
    )

    @property
    def has_critical_errors(self) -> bool:
        """True when any global input is invalid."""
        return any(key in CRITICAL_FIELDS for key in self.errors)

    def to_payload(self) -> Dict[str, object]:
        """JSON-ready representation."""
        return {
            "errors": dict(self.errors),
            "warnings": list(self.warnings),
            "hasCriticalErrors": self.has_critical_errors,
        }


def validate_scenario(scenario: Scenario, zero_mode: bool = False) -> ValidationReport:
    """
    Validate a scenario.

    Args:
        scenario: Scenario to check, after any what-if transform
        zero_mode: Whether the zero-growth view is active; the ROI range
            check and the real-return warning are skipped in that view

    Returns:
        ValidationReport with per-field errors and plan warnings
    """
    settings = scenario.settings
    errors: Dict[str, str] = {}

    if not MIN_AGE <= settings.current_age <= MAX_AGE:
        errors["currentAge"] = f"Age must be between {MIN_AGE} and {MAX_AGE}"
    if settings.retirement_age < settings.current_age:
        errors["retirementAge"] = "Must be greater than or equal to Current Age"
    if settings.life_expectancy <= settings.retirement_age:
        errors["lifeExpectancy"] = "Must be greater than Retirement Age"
    elif settings.life_expectancy > MAX_LIFE_EXPECTANCY:
        errors["lifeExpectancy"] = f"Must be at most {MAX_LIFE_EXPECTANCY}"

    if not zero_mode and not 0 <= settings.post_retirement_roi <= MAX_REALISTIC_ROI:
        errors["postRetirementROI"] = f"Realistic ROI is 0-{MAX_REALISTIC_ROI:.0f}%"

    max_expense_age = 0
    for bucket in scenario.expenses:
        max_expense_age = max(max_expense_age, bucket.end_age)
        if bucket.end_age > settings.life_expectancy:
            errors[f"exp_end_{bucket.id}"] = (
                f"Exceeds Life Expectancy ({settings.life_expectancy})"
            )
        if bucket.current_monthly_cost < 0:
            errors[f"exp_cost_{bucket.id}"] = "Must be positive"

    if max_expense_age > settings.life_expectancy:
        errors["lifeExpectancy"] = f"Must cover all expenses (max: {max_expense_age})"

    for milestone in scenario.milestones:
        if settings.current_age + milestone.year_offset > settings.life_expectancy:
            errors[f"ms_year_{milestone.id}"] = "Exceeds Life Expectancy"
        if milestone.current_cost < 0:
            errors[f"ms_cost_{milestone.id}"] = "Must be positive"

    warnings: List[str] = []
    if not zero_mode and settings.inflation > settings.post_retirement_roi:
        warnings.append(
            f"Post-retirement return ({settings.post_retirement_roi:g}%) is lower than "
            f"inflation ({settings.inflation:g}%): the corpus loses purchasing power "
            "every year."
        )

    return ValidationReport(errors=errors, warnings=warnings)
