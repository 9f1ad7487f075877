"""
Tests for the scenario Pydantic models.

This module tests parsing of camelCase and snake_case payloads,
immutability, the per-year cost helpers and the zero-growth transform.
"""

import math

import pytest
from pydantic import ValidationError

from retiresmart.models.defaults import default_scenario as build_default_scenario
from retiresmart.models.scenario import (
    ExpenseBucket,
    GlobalSettings,
    InvestmentProfile,
    Milestone,
    Scenario,
    inflate,
)
from retiresmart.models.schema_generator import SCHEMA_ID, generate_scenario_schema


class TestScenarioModels:
    """Test suite for scenario model parsing."""

    def test_scenario_model_creation(self, default_scenario):
        """Test that the Scenario model can be created from the fixture."""
        assert isinstance(default_scenario, Scenario)
        assert default_scenario.settings.current_age == 41
        assert default_scenario.settings.retirement_age == 42
        assert default_scenario.profile.planned_sip == 150_000
        assert len(default_scenario.expenses) == 3
        assert len(default_scenario.milestones) == 4

    def test_fixture_matches_defaults(self, default_scenario):
        assert default_scenario == build_default_scenario()

    def test_snake_case_input(self):
        settings = GlobalSettings(
            current_age=30, retirement_age=60, life_expectancy=85, post_retirement_roi=7.0
        )

        assert settings.life_expectancy == 85
        assert settings.inflation == 0.0

    def test_camel_case_input(self):
        profile = InvestmentProfile.model_validate(
            {"currentCorpus": 1000, "preRetirementROI": 9, "plannedSIP": 500}
        )

        assert profile.current_corpus == 1000.0
        assert profile.pre_retirement_roi == 9.0
        assert profile.sip_step_up == 0.0

    def test_serialization_uses_camel_case(self, default_scenario):
        dumped = default_scenario.model_dump(by_alias=True)

        assert dumped["settings"]["postRetirementROI"] == 8.0
        assert dumped["profile"]["plannedSIP"] == 150_000
        assert dumped["expenses"][0]["endAge"] == 75
        assert Scenario.model_validate(dumped) == default_scenario

    def test_unknown_fields_are_ignored(self):
        milestone = Milestone.model_validate(
            {
                "id": "m1",
                "currentCost": 100,
                "inflationRate": 5,
                "yearOffset": 2,
                "colour": "red",
            }
        )

        assert milestone.year_offset == 2
        assert not hasattr(milestone, "colour")

    def test_missing_required_field(self):
        with pytest.raises(ValidationError):
            ExpenseBucket.model_validate({"id": "1", "currentMonthlyCost": 100})

    def test_models_are_frozen(self, default_scenario):
        with pytest.raises(ValidationError):
            default_scenario.settings.current_age = 50

    def test_expense_and_milestone_lists_default_empty(self):
        scenario = Scenario(
            settings=GlobalSettings(
                current_age=30, retirement_age=60, life_expectancy=85, post_retirement_roi=7.0
            ),
            profile=InvestmentProfile(
                current_corpus=0, pre_retirement_roi=8.0, planned_sip=0
            ),
        )

        assert scenario.expenses == []
        assert scenario.milestones == []


class TestCostHelpers:
    """Per-year cost of expense buckets and milestones."""

    def test_annual_cost_inflates_from_year_zero(self):
        bucket = ExpenseBucket(
            id="1", current_monthly_cost=1000.0, inflation_rate=10.0, end_age=70
        )

        assert bucket.annual_cost(0, 60) == pytest.approx(12_000.0)
        assert bucket.annual_cost(2, 62) == pytest.approx(14_520.0)

    def test_annual_cost_inclusive_end_age(self):
        bucket = ExpenseBucket(
            id="1", current_monthly_cost=1000.0, inflation_rate=0.0, end_age=70
        )

        assert bucket.annual_cost(10, 70) == 12_000.0
        assert bucket.annual_cost(11, 71) == 0.0

    def test_milestone_fires_only_in_its_year(self):
        milestone = Milestone(
            id="m", current_cost=1000.0, inflation_rate=10.0, year_offset=2
        )

        assert milestone.cost_in_year(1) == 0.0
        assert milestone.cost_in_year(2) == pytest.approx(1210.0)
        assert milestone.cost_in_year(3) == 0.0


class TestInflate:
    """Compounding helper shared by expenses and milestones."""

    def test_compounds(self):
        assert inflate(100.0, 10.0, 2) == pytest.approx(121.0)

    def test_overflow_saturates_to_infinity(self):
        assert inflate(1.0, 10.0, 12_000) == math.inf
        assert inflate(-1.0, 10.0, 12_000) == -math.inf

    def test_zero_amount_stays_zero(self):
        assert inflate(0.0, 10.0, 12_000) == 0.0

    def test_annual_cost_on_long_horizon(self):
        bucket = ExpenseBucket(
            id="1", current_monthly_cost=1000.0, inflation_rate=10.0, end_age=13_000
        )

        assert bucket.annual_cost(12_000, 12_040) == math.inf


class TestZeroGrowth:
    """The zero-growth what-if transform."""

    def test_all_rates_zeroed(self, default_scenario):
        zero = default_scenario.with_zero_growth()

        assert zero.settings.post_retirement_roi == 0.0
        assert zero.settings.inflation == 0.0
        assert zero.profile.pre_retirement_roi == 0.0
        assert zero.profile.sip_step_up == 0.0
        assert all(e.inflation_rate == 0.0 for e in zero.expenses)
        assert all(m.inflation_rate == 0.0 for m in zero.milestones)

    def test_amounts_and_ages_kept(self, default_scenario):
        zero = default_scenario.with_zero_growth()

        assert zero.settings.current_age == default_scenario.settings.current_age
        assert zero.profile.current_corpus == default_scenario.profile.current_corpus
        assert zero.profile.planned_sip == default_scenario.profile.planned_sip
        assert [e.current_monthly_cost for e in zero.expenses] == [
            e.current_monthly_cost for e in default_scenario.expenses
        ]
        assert [m.year_offset for m in zero.milestones] == [
            m.year_offset for m in default_scenario.milestones
        ]

    def test_source_scenario_untouched(self, default_scenario):
        default_scenario.with_zero_growth()

        assert default_scenario == build_default_scenario()


class TestScenarioSchema:
    """JSON schema served to API clients."""

    def test_schema_metadata(self):
        schema = generate_scenario_schema()

        assert schema["$id"] == SCHEMA_ID
        assert schema["$schema"].startswith("https://json-schema.org/")
        assert schema["title"] == "RetireSmart Scenario v1"

    def test_schema_uses_wire_names(self):
        schema = generate_scenario_schema()
        defs = schema["$defs"]

        assert set(schema["required"]) == {"settings", "profile"}
        assert "postRetirementROI" in defs["GlobalSettings"]["properties"]
        assert "plannedSIP" in defs["InvestmentProfile"]["properties"]
        assert "endAge" in defs["ExpenseBucket"]["properties"]
        assert "yearOffset" in defs["Milestone"]["properties"]
