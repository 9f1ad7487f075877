"""
Year-by-year ledger simulator.

The simulator walks from the current age to life expectancy (inclusive) and
books one ``LedgerRow`` per year. Years before the retirement age are the
accumulation phase: the monthly contribution flows in and grows at the
pre-retirement return, stepping up once per elapsed accumulation year. From
the retirement age onwards the contribution stops, expense buckets are drawn
down and the balance grows at the post-retirement return. Milestones fire in
whichever phase their year falls.

Growth uses the mid-year convention: the annual rate is applied to the
opening balance plus half of the year's net flow. Negative balances grow
(more negative) at the same rate; there is no separate borrowing rate.
"""

from typing import List, Optional, Sequence

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field

from .scenario import ExpenseBucket, GlobalSettings, InvestmentProfile, Milestone


class LedgerRow(BaseModel):
    """One simulated year of the account."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    year: int = Field(..., description="Years elapsed since today (0-based)")
    age: int = Field(..., description="Age during this year")
    opening_balance: float = Field(..., alias="openingBalance")
    investments: float = Field(..., description="Contributions paid in this year")
    expenses: float = Field(..., description="Recurring expenses drawn this year")
    milestones: float = Field(..., description="One-time expenses drawn this year")
    growth: float = Field(..., description="Investment return earned this year")
    closing_balance: float = Field(..., alias="closingBalance")
    is_retirement: bool = Field(
        ..., alias="isRetirement", description="True in the first retired year"
    )

    @property
    def net_flow(self) -> float:
        """Contributions less all outflows for the year."""
        return self.investments - self.expenses - self.milestones


def simulate(
    settings: GlobalSettings,
    profile: InvestmentProfile,
    expenses: Sequence[ExpenseBucket],
    milestones: Sequence[Milestone],
    contribution_override: Optional[float] = None,
) -> List[LedgerRow]:
    """
    Project the account year by year from today to life expectancy.

    Args:
        settings: Ages and post-retirement return
        profile: Current corpus, pre-retirement return and contribution plan
        expenses: Recurring expense buckets (drawn only after retirement)
        milestones: One-time expenses
        contribution_override: Monthly contribution for year 0 in place of
            ``profile.planned_sip``

    Returns:
        One row per year, ``life_expectancy - current_age + 1`` rows, never
        fewer than one
    """
    balance = profile.current_corpus
    sip = profile.planned_sip if contribution_override is None else contribution_override

    if settings.life_expectancy <= settings.current_age:
        return [_degenerate_row(settings, profile)]

    years = settings.life_expectancy - settings.current_age
    ledger: List[LedgerRow] = []

    for i in range(years + 1):
        age = settings.current_age + i
        accumulating = age < settings.retirement_age

        invested = sip * 12 if accumulating else 0.0
        spent = 0.0
        if not accumulating:
            spent = sum(bucket.annual_cost(i, age) for bucket in expenses)
        lumps = sum(ms.cost_in_year(i) for ms in milestones)

        net_flow = invested - spent - lumps
        rate = profile.pre_retirement_roi if accumulating else settings.post_retirement_roi
        growth = (balance + net_flow / 2) * (rate / 100)
        closing = balance + net_flow + growth

        ledger.append(
            LedgerRow(
                year=i,
                age=age,
                opening_balance=balance,
                investments=invested,
                expenses=spent,
                milestones=lumps,
                growth=growth,
                closing_balance=closing,
                is_retirement=age == settings.retirement_age,
            )
        )

        balance = closing
        if accumulating:
            sip *= 1 + profile.sip_step_up / 100

    return ledger


def _degenerate_row(settings: GlobalSettings, profile: InvestmentProfile) -> LedgerRow:
    """Single flowless row for a horizon that ends at (or before) today."""
    age = settings.current_age
    rate = (
        profile.pre_retirement_roi
        if age < settings.retirement_age
        else settings.post_retirement_roi
    )
    growth = profile.current_corpus * (rate / 100)
    return LedgerRow(
        year=0,
        age=age,
        opening_balance=profile.current_corpus,
        investments=0.0,
        expenses=0.0,
        milestones=0.0,
        growth=growth,
        closing_balance=profile.current_corpus + growth,
        is_retirement=age == settings.retirement_age,
    )


def terminal_balance(ledger: Sequence[LedgerRow]) -> float:
    """Closing balance of the last simulated year (0.0 for an empty ledger)."""
    if not ledger:
        return 0.0
    return ledger[-1].closing_balance


def find_row_by_age(ledger: Sequence[LedgerRow], age: int) -> Optional[LedgerRow]:
    """Return the row simulated at ``age``, if the horizon covers it."""
    for row in ledger:
        if row.age == age:
            return row
    return None


def closing_balances(ledger: Sequence[LedgerRow]) -> NDArray[np.float64]:
    """Closing balances as an array in year order."""
    return np.array([row.closing_balance for row in ledger], dtype=np.float64)


def depletion_age(ledger: Sequence[LedgerRow]) -> Optional[int]:
    """Age of the first year that closes below zero, or None if none does."""
    negative = np.flatnonzero(closing_balances(ledger) < 0)
    if negative.size == 0:
        return None
    return ledger[int(negative[0])].age
