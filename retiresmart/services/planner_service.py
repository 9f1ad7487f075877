"""
Planner service.

Sits between the HTTP layer and the projection engine: applies the optional
zero-growth what-if view, validates the scenario, short-circuits to a zeroed
result when the scenario is unusable, and otherwise runs the solver.
"""

import logging
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from retiresmart.config import Settings
from retiresmart.models.formatting import CurrencyFormatter
from retiresmart.models.ledger import LedgerRow, simulate
from retiresmart.models.ledger import depletion_age as find_depletion_age
from retiresmart.models.scenario import InvestmentProfile, Scenario
from retiresmart.models.solver import (
    CalculationResult,
    SolverConfig,
    empty_result,
    solve,
)
from retiresmart.models.validation import ValidationReport, validate_scenario

logger = logging.getLogger(__name__)

PlanStatus = Literal["on_track", "shortfall", "cap_reached"]


def plan_status(result: CalculationResult) -> PlanStatus:
    """Classify a result for the headline status badge.

    A search that stopped at its bound, for either the contribution or the
    lump sum, reports ``cap_reached`` rather than a figure it cannot vouch for.
    """
    if not result.is_solvable or not result.is_today_shortfall_exact:
        return "cap_reached"
    if result.today_shortfall > 0:
        return "shortfall"
    return "on_track"


def auto_fill_sip(profile: InvestmentProfile, required_sip: float) -> InvestmentProfile:
    """Return the profile with its planned contribution set to the solved one."""
    logger.debug(f"Auto-filling planned SIP {profile.planned_sip} -> {round(required_sip)}")
    return profile.model_copy(update={"planned_sip": float(round(required_sip))})


class PlanOutcome(BaseModel):
    """Everything the planner screen needs for one scenario."""

    model_config = ConfigDict(frozen=True)

    validation: ValidationReport = Field(..., description="Validation report")
    result: CalculationResult = Field(..., description="Solver result")
    zero_mode: bool = Field(default=False, description="Zero-growth view applied")
    computed: bool = Field(
        default=True, description="False when validation blocked the projection"
    )

    @property
    def status(self) -> PlanStatus:
        return plan_status(self.result)

    @property
    def depletion_age(self) -> Optional[int]:
        return find_depletion_age(self.result.ledger)

    def to_payload(self, formatter: Optional[CurrencyFormatter] = None) -> Dict[str, Any]:
        """JSON-ready representation with camelCase keys."""
        formatter = formatter or CurrencyFormatter()
        result = self.result
        return {
            "validation": self.validation.to_payload(),
            "result": result.model_dump(by_alias=True),
            "computed": self.computed,
            "zeroMode": self.zero_mode,
            "status": self.status if self.computed else None,
            "depletionAge": self.depletion_age,
            "headline": {
                "requiredSIP": formatter.format_full(result.required_sip),
                "requiredCorpus": formatter.format_compact(result.required_corpus),
                "todayShortfall": formatter.format_compact(result.today_shortfall),
                "shortfall": formatter.format_compact(result.shortfall),
            },
            "canAutoFillSIP": self.computed and result.is_solvable,
        }


class PlannerService:
    """Service for projecting and solving retirement scenarios."""

    def __init__(self, solver_config: Optional[SolverConfig] = None) -> None:
        """Initialize the planner service.

        Args:
            solver_config: Search bounds for the contribution solver
        """
        self.solver_config = solver_config or SolverConfig()
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PlannerService":
        """Build a service using the solver knobs from application settings."""
        return cls(
            SolverConfig(
                sip_cap=settings.solver_sip_cap,
                tolerance=settings.solver_tolerance,
                max_iterations=settings.solver_max_iterations,
            )
        )

    def simulate(
        self, scenario: Scenario, contribution_override: Optional[float] = None
    ) -> List[LedgerRow]:
        """Project the ledger for an explicit (or the planned) contribution."""
        return simulate(
            scenario.settings,
            scenario.profile,
            scenario.expenses,
            scenario.milestones,
            contribution_override,
        )

    def project(
        self,
        scenario: Scenario,
        contribution_override: Optional[float] = None,
        zero_mode: bool = False,
    ) -> Tuple[ValidationReport, List[LedgerRow]]:
        """
        Validate a scenario and project its ledger.

        Args:
            scenario: Scenario as entered by the user
            contribution_override: Monthly contribution for year 0
            zero_mode: Apply the zero-growth what-if view first

        Returns:
            Tuple of (validation report, ledger); the ledger is empty when
            validation reports critical errors
        """
        effective = scenario.with_zero_growth() if zero_mode else scenario
        report = validate_scenario(effective, zero_mode=zero_mode)
        if report.has_critical_errors:
            self.logger.info(
                f"Skipping projection: invalid inputs {sorted(report.errors)}"
            )
            return report, []
        return report, self.simulate(effective, contribution_override)

    def plan(self, scenario: Scenario, zero_mode: bool = False) -> PlanOutcome:
        """
        Validate and solve a scenario.

        Args:
            scenario: Scenario as entered by the user
            zero_mode: Apply the zero-growth what-if view before solving

        Returns:
            PlanOutcome; when validation reports critical errors the result
            is zeroed and ``computed`` is False
        """
        effective = scenario.with_zero_growth() if zero_mode else scenario
        report = validate_scenario(effective, zero_mode=zero_mode)

        if report.has_critical_errors:
            self.logger.info(
                f"Skipping projection: invalid inputs {sorted(report.errors)}"
            )
            return PlanOutcome(
                validation=report,
                result=empty_result(),
                zero_mode=zero_mode,
                computed=False,
            )

        result = solve(
            effective.settings,
            effective.profile,
            effective.expenses,
            effective.milestones,
            self.solver_config,
        )

        if not result.is_solvable:
            self.logger.warning(
                f"Contribution search hit its bound; reporting {result.required_sip:.2f}"
            )
        self.logger.info(
            f"Solved plan: {len(result.ledger)} years, required SIP "
            f"{result.required_sip:.2f}, feasible={result.is_feasible}"
        )
        return PlanOutcome(validation=report, result=result, zero_mode=zero_mode)
