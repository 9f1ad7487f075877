"""
Contribution solver.

Inverts the ledger simulator: finds the monthly contribution that brings the
balance at life expectancy to (approximately) zero, and derives the summary
figures shown next to the projected ledger.

The search is a bounded bisection. It relies on the terminal balance being
monotonically non-decreasing in both the monthly contribution and the
starting corpus, which holds for the mid-year growth model in
``retiresmart.models.ledger`` as long as returns are above -200%.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .ledger import LedgerRow, find_row_by_age, simulate, terminal_balance
from .scenario import ExpenseBucket, GlobalSettings, InvestmentProfile, Milestone

logger = logging.getLogger(__name__)

DEFAULT_SIP_CAP = 1_000_000_000.0
DEFAULT_LUMP_SUM_CAP = 1_000_000_000_000.0
DEFAULT_TOLERANCE = 10_000.0
DEFAULT_MAX_ITERATIONS = 100


class SolverConfig(BaseModel):
    """Bounds and termination criteria for the bisection searches."""

    model_config = ConfigDict(frozen=True)

    sip_cap: float = Field(
        default=DEFAULT_SIP_CAP, gt=0, description="Upper bound of the monthly contribution search"
    )
    lump_sum_cap: float = Field(
        default=DEFAULT_LUMP_SUM_CAP, gt=0, description="Upper bound of the lump-sum search"
    )
    tolerance: float = Field(
        default=DEFAULT_TOLERANCE,
        gt=0,
        description="Terminal balance accepted as zero (absolute currency amount)",
    )
    max_iterations: int = Field(
        default=DEFAULT_MAX_ITERATIONS, ge=1, description="Bisection iteration budget"
    )


class CalculationResult(BaseModel):
    """Planned-contribution ledger plus the solved summary figures."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ledger: List[LedgerRow] = Field(
        default_factory=list, description="Ledger under the planned contribution"
    )
    required_sip: float = Field(
        default=0.0, alias="requiredSIP", description="Monthly contribution that sustains the plan"
    )
    required_corpus: float = Field(
        default=0.0,
        alias="requiredCorpus",
        description="Balance needed at the start of retirement",
    )
    today_shortfall: float = Field(
        default=0.0,
        alias="todayShortfall",
        description="Lump sum needed today to make the planned contribution sufficient",
    )
    is_feasible: bool = Field(
        default=False,
        alias="isFeasible",
        description="Planned contribution keeps the balance non-negative to life expectancy",
    )
    is_solvable: bool = Field(
        default=False,
        alias="isSolvable",
        description="required_sip converged within the search bound",
    )
    is_today_shortfall_exact: bool = Field(
        default=True,
        alias="isTodayShortfallExact",
        description="today_shortfall converged; False when it is the search upper bound",
    )
    shortfall: float = Field(
        default=0.0,
        description="Legacy gap between required and planned balance at retirement",
    )


def empty_result() -> CalculationResult:
    """Zeroed result returned when the scenario is not usable."""
    return CalculationResult()


def bisect_terminal_balance(
    terminal_at: Callable[[float], float],
    upper: float,
    tolerance: float,
    max_iterations: int,
) -> Tuple[float, bool, int]:
    """
    Find an input in ``[0, upper]`` whose terminal balance is within tolerance of zero.

    Args:
        terminal_at: Maps a candidate input to the resulting terminal balance;
            must be non-decreasing
        upper: Upper bound of the search interval
        tolerance: Absolute terminal balance accepted as zero
        max_iterations: Iteration budget

    Returns:
        Tuple of (estimate, converged, iterations). When the search does not
        converge the estimate is the current upper bound.
    """
    low, high = 0.0, upper
    for attempt in range(1, max_iterations + 1):
        mid = (low + high) / 2
        final = terminal_at(mid)
        if abs(final) < tolerance:
            return mid, True, attempt
        if final < 0:
            low = mid
        else:
            high = mid
    return high, False, max_iterations


def solve(
    settings: GlobalSettings,
    profile: InvestmentProfile,
    expenses: Sequence[ExpenseBucket],
    milestones: Sequence[Milestone],
    config: Optional[SolverConfig] = None,
) -> CalculationResult:
    """
    Solve for the monthly contribution that sustains the plan.

    Args:
        settings: Ages and post-retirement return
        profile: Current corpus and planned contribution
        expenses: Recurring expense buckets
        milestones: One-time expenses
        config: Search bounds; defaults to ``SolverConfig()``

    Returns:
        CalculationResult holding the planned-contribution ledger
    """
    config = config or SolverConfig()

    user_ledger = simulate(settings, profile, expenses, milestones)
    final_user = terminal_balance(user_ledger)

    def terminal_for_sip(sip: float) -> float:
        return terminal_balance(simulate(settings, profile, expenses, milestones, sip))

    required_sip = 0.0
    solved = False
    if final_user >= 0 and terminal_for_sip(0.0) >= 0:
        solved = True
        logger.debug("Plan is funded without contributions; skipping search")
    else:
        required_sip, solved, iterations = bisect_terminal_balance(
            terminal_for_sip, config.sip_cap, config.tolerance, config.max_iterations
        )
        logger.debug(
            f"Contribution search finished after {iterations} iterations "
            f"(converged={solved}, sip={required_sip:.2f})"
        )

    optimal_ledger = simulate(settings, profile, expenses, milestones, required_sip)
    optimal_row = find_row_by_age(optimal_ledger, settings.retirement_age)
    required_corpus = optimal_row.opening_balance if optimal_row else 0.0

    user_row = find_row_by_age(user_ledger, settings.retirement_age)
    planned_corpus = user_row.opening_balance if user_row else 0.0

    today_shortfall, shortfall_exact = _today_shortfall(
        settings, profile, expenses, milestones, final_user, config
    )

    return CalculationResult(
        ledger=user_ledger,
        required_sip=required_sip,
        required_corpus=required_corpus,
        today_shortfall=today_shortfall,
        is_feasible=final_user >= 0,
        is_solvable=solved,
        is_today_shortfall_exact=shortfall_exact,
        shortfall=max(0.0, required_corpus - planned_corpus),
    )


def _today_shortfall(
    settings: GlobalSettings,
    profile: InvestmentProfile,
    expenses: Sequence[ExpenseBucket],
    milestones: Sequence[Milestone],
    final_user: float,
    config: SolverConfig,
) -> Tuple[float, bool]:
    """Lump sum to add to today's corpus so the planned contribution suffices.

    Returns:
        Tuple of (lump sum, converged)
    """
    if final_user >= 0:
        return 0.0, True

    def terminal_for_lump_sum(extra: float) -> float:
        boosted = profile.model_copy(
            update={"current_corpus": profile.current_corpus + extra}
        )
        return terminal_balance(simulate(settings, boosted, expenses, milestones))

    lump_sum, converged, iterations = bisect_terminal_balance(
        terminal_for_lump_sum, config.lump_sum_cap, config.tolerance, config.max_iterations
    )
    if not converged:
        logger.warning(
            f"Lump-sum search did not converge after {iterations} iterations; "
            f"reporting upper bound {lump_sum:.2f}"
        )
    return lump_sum, converged
