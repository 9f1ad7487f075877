"""
Planner blueprint.

This module provides the JSON API for projecting and solving retirement
scenarios. Every endpoint is stateless: the client posts the full scenario
and receives freshly computed results.
"""

from typing import Any, Dict, Tuple

from flask import Blueprint, Response, current_app, jsonify, request
from pydantic import ValidationError

from retiresmart.config import get_global_settings
from retiresmart.models.defaults import default_scenario
from retiresmart.models.scenario import Scenario
from retiresmart.models.schema_generator import generate_scenario_schema
from retiresmart.models.validation import validate_scenario
from retiresmart.services.ledger_export import ledger_to_csv
from retiresmart.services.planner_service import PlannerService, auto_fill_sip

planner_bp = Blueprint("planner", __name__, url_prefix="/api")


class InvalidRequest(Exception):
    """Raised when a request body cannot be turned into a scenario."""

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


def _get_service() -> PlannerService:
    return PlannerService.from_settings(get_global_settings())


def _read_scenario() -> Tuple[Scenario, Dict[str, Any]]:
    """Parse the scenario from the request body.

    The body is either the scenario itself or ``{"scenario": {...}, ...}``
    with extra request options alongside.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidRequest("Request body must be a JSON object")

    payload = data.get("scenario", data)
    try:
        scenario = Scenario.model_validate(payload)
    except ValidationError as e:
        raise InvalidRequest(
            "Invalid scenario", e.errors(include_url=False, include_context=False)
        )
    return scenario, data


def _read_flag(data: Dict[str, Any], key: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise InvalidRequest(f"{key} must be a boolean")
    return value


@planner_bp.errorhandler(InvalidRequest)
def handle_invalid_request(e: InvalidRequest) -> Any:
    body: Dict[str, Any] = {"error": e.message}
    if e.details is not None:
        body["details"] = e.details
    return jsonify(body), 400


@planner_bp.errorhandler(Exception)
def handle_unexpected(e: Exception) -> Any:
    current_app.logger.error(f"Error handling {request.path}: {str(e)}")
    return jsonify({"error": "Internal server error"}), 500


@planner_bp.route("/defaults", methods=["GET"])
def get_defaults() -> Any:
    """Return the default scenario.

    Returns:
        JSON scenario with camelCase keys
    """
    return jsonify(default_scenario().model_dump(by_alias=True)), 200


@planner_bp.route("/schema", methods=["GET"])
def get_schema() -> Any:
    """Return the JSON schema of the scenario payload."""
    return jsonify(generate_scenario_schema()), 200


@planner_bp.route("/validate", methods=["POST"])
def validate() -> Any:
    """Validate a scenario without solving it.

    Returns:
        JSON validation report
    """
    scenario, data = _read_scenario()
    zero_mode = _read_flag(data, "zeroMode")
    effective = scenario.with_zero_growth() if zero_mode else scenario
    report = validate_scenario(effective, zero_mode=zero_mode)
    return jsonify(report.to_payload()), 200


@planner_bp.route("/simulate", methods=["POST"])
def simulate_ledger() -> Any:
    """Project the ledger for the planned or an explicit monthly contribution.

    Returns:
        JSON response with the ledger rows, or 422 when validation reports
        critical errors
    """
    scenario, data = _read_scenario()
    override = data.get("contributionOverride")
    if override is not None and (
        isinstance(override, bool) or not isinstance(override, (int, float))
    ):
        raise InvalidRequest("contributionOverride must be a number")

    report, ledger = _get_service().project(
        scenario, override, zero_mode=_read_flag(data, "zeroMode")
    )
    if report.has_critical_errors:
        return (
            jsonify(
                {
                    "error": "Scenario has blocking input errors",
                    "validation": report.to_payload(),
                }
            ),
            422,
        )
    return jsonify({"ledger": [row.model_dump(by_alias=True) for row in ledger]}), 200


@planner_bp.route("/plan", methods=["POST"])
def plan() -> Any:
    """Validate and solve a scenario.

    Returns:
        JSON response with validation, result, status and headline figures
    """
    scenario, data = _read_scenario()
    outcome = _get_service().plan(scenario, zero_mode=_read_flag(data, "zeroMode"))
    return jsonify(outcome.to_payload()), 200


@planner_bp.route("/plan/autofill", methods=["POST"])
def autofill() -> Any:
    """Return the scenario with the planned SIP replaced by the solved one.

    The contribution is solved in the same view as /plan, so ``zeroMode``
    fills in the zero-growth figure.

    Returns:
        JSON scenario, or 409 when the solved contribution is not reliable
    """
    scenario, data = _read_scenario()
    outcome = _get_service().plan(scenario, zero_mode=_read_flag(data, "zeroMode"))
    if not outcome.computed or not outcome.result.is_solvable:
        return jsonify({"error": "Required SIP is not available for this scenario"}), 409

    updated = scenario.model_copy(
        update={"profile": auto_fill_sip(scenario.profile, outcome.result.required_sip)}
    )
    return jsonify(updated.model_dump(by_alias=True)), 200


@planner_bp.route("/ledger.csv", methods=["POST"])
def export_ledger() -> Any:
    """Download the planned-contribution ledger as CSV."""
    scenario, data = _read_scenario()
    outcome = _get_service().plan(scenario, zero_mode=_read_flag(data, "zeroMode"))
    if not outcome.computed:
        return jsonify({"error": "Scenario has blocking input errors"}), 422

    return Response(
        ledger_to_csv(outcome.result.ledger),
        mimetype="text/csv",
        headers={"Content-Disposition": "attachment; filename=ledger.csv"},
    )
