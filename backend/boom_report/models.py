# Boom Deployment Planner - Request Models
# SPDX-License-Identifier: Apache-2.0

"""
Wire model for the calculator's report request.

Field names follow the browser calculator's JSON (camelCase). Measurements
are kept as posted; conversion to numbers happens when the record is built.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Values may arrive as JSON numbers or as the text of a form input
FieldValue = Optional[Union[int, float, str]]


class DeploymentReportRequest(BaseModel):
    """Calculator outputs for one boom deployment"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    current: FieldValue = Field(None, description="River current (knots)")
    angle: FieldValue = Field(None, description="Boom angle (degrees)")
    river_width: FieldValue = Field(None, alias="riverWidth", description="River width (ft)")
    river_mile: FieldValue = Field(None, alias="riverMile", description="River mile marker")
    calculated_boom_length: FieldValue = Field(
        None, alias="calculatedBoomLength", description="Required boom length (ft)"
    )
    tension: FieldValue = Field(None, description="Estimated boom tension (lbs)")
    interval: FieldValue = Field(
        None, description='Anchor interval, e.g. 150, "200+" or "1 per 100 ft"'
    )
    drift_time: FieldValue = Field(None, alias="driftTime", description="Drift time over 100 ft (s)")
    is_cascade: bool = Field(False, alias="isCascade", description="Cascade booming system required")
    segments: FieldValue = Field(None, description="Number of cascade segments")
    anchors: FieldValue = Field(None, description="Total anchors required")
    anchor_details_text: Optional[str] = Field(
        None, alias="anchorDetailsText", description="Free-text anchor placement detail"
    )

    @field_validator(
        "current", "angle", "river_width", "river_mile", "calculated_boom_length",
        "tension", "interval", "drift_time", "segments", "anchors",
        mode="before",
    )
    @classmethod
    def drop_unusable_measurement(cls, v):
        # Lists, objects and booleans carry no measurement; stored as null
        if isinstance(v, bool) or not isinstance(v, (int, float, str)):
            return None
        return v

    @field_validator("is_cascade", mode="before")
    @classmethod
    def parse_cascade_flag(cls, v):
        if v is None or v == "":
            return False
        return v

    @field_validator("anchor_details_text", mode="before")
    @classmethod
    def stringify_details(cls, v):
        if v is None or isinstance(v, str):
            return v
        return str(v)
