"""Data models and the projection engine for retirement planning."""

from .scenario import (
    ExpenseBucket,
    GlobalSettings,
    InvestmentProfile,
    Milestone,
    Scenario,
)
from .ledger import (
    LedgerRow,
    closing_balances,
    depletion_age,
    find_row_by_age,
    simulate,
    terminal_balance,
)
from .solver import (
    CalculationResult,
    SolverConfig,
    bisect_terminal_balance,
    empty_result,
    solve,
)
from .validation import ValidationReport, validate_scenario
from .defaults import default_scenario

__all__ = [
    "GlobalSettings",
    "InvestmentProfile",
    "ExpenseBucket",
    "Milestone",
    "Scenario",
    "LedgerRow",
    "simulate",
    "terminal_balance",
    "find_row_by_age",
    "closing_balances",
    "depletion_age",
    "CalculationResult",
    "SolverConfig",
    "bisect_terminal_balance",
    "empty_result",
    "solve",
    "ValidationReport",
    "validate_scenario",
    "default_scenario",
]
