"""
JSON Schema generator for the scenario payload.

The schema is served by the API so that other clients can build and check
payloads without importing the Pydantic models.
"""

from typing import Any, Dict

from .scenario import Scenario

SCHEMA_ID = "https://retiresmart.app/schema/scenario_v1.json"


def generate_scenario_schema() -> Dict[str, Any]:
    """Generate the JSON schema for the Scenario payload (camelCase field names)."""
    schema = Scenario.model_json_schema(by_alias=True)
    schema.update(
        {
            "$schema": "https://json-schema.org/draft/2020-12/schema",
            "$id": SCHEMA_ID,
            "title": "RetireSmart Scenario v1",
            "description": "Ages, savings, contribution plan, recurring expenses and one-time milestones",
        }
    )
    return schema
