"""Default scenario shown to a first-time user."""

from .scenario import ExpenseBucket, GlobalSettings, InvestmentProfile, Milestone, Scenario

DEFAULT_SETTINGS = GlobalSettings(
    current_age=41,
    retirement_age=42,
    life_expectancy=75,
    post_retirement_roi=8.0,
    inflation=6.0,
)

DEFAULT_PROFILE = InvestmentProfile(
    current_corpus=20_000_000,  # 2 crore
    pre_retirement_roi=8.0,
    planned_sip=150_000,  # 1.5 lakh
    sip_step_up=1.0,
)

DEFAULT_EXPENSES = (
    ExpenseBucket(
        id="1",
        name="Living Expenses",
        current_monthly_cost=150_000,
        inflation_rate=6.0,
        end_age=75,
    ),
    ExpenseBucket(
        id="2",
        name="HealthCare",
        current_monthly_cost=25_000,
        inflation_rate=10.0,
        end_age=55,
    ),
    ExpenseBucket(
        id="3",
        name="Education (Monthly)",
        current_monthly_cost=50_000,
        inflation_rate=8.0,
        end_age=52,
    ),
)

DEFAULT_MILESTONES = (
    Milestone(
        id="m1",
        name="Child 1 Higher Education",
        current_cost=2_000_000,
        inflation_rate=8.0,
        year_offset=5,
    ),
    Milestone(
        id="m2",
        name="Child 2 Higher Education",
        current_cost=2_000_000,
        inflation_rate=8.0,
        year_offset=8,
    ),
    Milestone(
        id="m3",
        name="Child 1 Wedding",
        current_cost=2_500_000,
        inflation_rate=7.0,
        year_offset=12,
    ),
    Milestone(
        id="m4",
        name="Child 2 Wedding",
        current_cost=2_500_000,
        inflation_rate=7.0,
        year_offset=15,
    ),
)


def default_scenario() -> Scenario:
    """Build a fresh scenario from the defaults."""
    return Scenario(
        settings=DEFAULT_SETTINGS,
        profile=DEFAULT_PROFILE,
        expenses=list(DEFAULT_EXPENSES),
        milestones=list(DEFAULT_MILESTONES),
    )
