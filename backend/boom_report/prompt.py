# Boom Deployment Planner - Report Prompt
# SPDX-License-Identifier: Apache-2.0

"""
Prompt text sent to the text-generation service.
"""

from typing import Any

from boom_report.models import DeploymentReportRequest

SYSTEM_INSTRUCTION = (
    "Act as an expert environmental response consultant. "
    "Provide a concise, single-paragraph report based on the provided data."
)

DEFAULT_SPILL_TYPE = "Diesel Fuel"
DEFAULT_LOCATION = "Tennessee Valley Authority waterway"


def _show(value: Any, missing: str = "Not specified") -> str:
    if value is None:
        return missing
    text = str(value).strip()
    return text or missing


def build_prompt(
    request: DeploymentReportRequest,
    spill_type: str = DEFAULT_SPILL_TYPE,
    location: str = DEFAULT_LOCATION,
) -> str:
    """
    Build the report prompt for one deployment.

    The booming-system recommendation and segment count are only mentioned
    when a cascade system is required.
    """
    if request.is_cascade:
        recommendation = (
            "- A clear recommendation that a cascade booming system is required, "
            "and how many segments it uses."
        )
    else:
        recommendation = "- A clear recommendation that a single continuous boom is sufficient."

    lines = [
        "You are a subject matter expert on boom deployment for environmental response.",
        "Your task is to generate a professional, concise, and easy-to-read report",
        f"on a geographic response strategy for a {spill_type.lower()} spill.",
        "",
        "The report should be a single, well-structured paragraph that includes the following information:",
        "- A professional salutation.",
        "- A summary of the deployment conditions (river mile, current, river width, "
        "boom angle, drift time if available).",
        "- The calculated boom length required and the estimated tension.",
        "- The recommended anchor interval and total number of anchors.",
        recommendation,
        "- A professional closing.",
        "",
        "Here are the details for the report:",
        f"- River Mile: {_show(request.river_mile)}",
        f"- River Current: {_show(request.current)} knots",
        f"- River Width: {_show(request.river_width)} ft",
        f"- Boom Angle: {_show(request.angle)} degrees",
        f"- Calculated Boom Length: {_show(request.calculated_boom_length)} ft",
        f"- Estimated Tension: {_show(request.tension)} lbs",
        f"- Recommended Anchor Interval: {_show(request.interval)}",
        f"- Drift Time (for 100ft): {_show(request.drift_time, 'Not measured')} seconds",
        "- Booming System: " + ("Cascade" if request.is_cascade else "Single boom"),
    ]
    if request.is_cascade:
        lines.append(f"- Total Cascade Segments: {_show(request.segments)}")
    lines += [
        f"- Total anchors required: {_show(request.anchors)}",
        f"- Anchor details: {_show(request.anchor_details_text)}",
        f"- Spill Type: {spill_type}",
        f"- Location: {location}",
    ]
    return "\n".join(lines)
