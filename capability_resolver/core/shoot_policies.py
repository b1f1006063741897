"""Project and shoot level policies derived from operator configuration."""

import json
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from ..model.config import DashboardConfig
from ..model.shoot import Project, Shoot
from ..utils.logger import get_logger

logger = get_logger(__name__)

SHOOT_CUSTOM_FIELDS_ANNOTATION = "dashboard.gardener.cloud/shootCustomFields"
NO_HIBERNATION_SCHEDULE_ANNOTATION = "dashboard.garden.sapcloud.io/no-hibernation-schedule"


class ShootCustomField(BaseModel):
    """Project defined column showing a value from the shoot resource."""

    key: str
    name: str
    path: str
    show_column: bool = Field(default=True, alias="showColumn")
    column_selected_by_default: bool = Field(default=True, alias="columnSelectedByDefault")
    show_details: bool = Field(default=True, alias="showDetails")
    sortable: bool = True
    searchable: bool = True

    class Config:
        populate_by_name = True
        extra = "allow"


class CostObjectSettings(BaseModel):
    title: str = ""
    description: str = ""
    regex: Optional[str] = None
    error_message: Optional[str] = None


def shoot_custom_fields(project: Optional[Project]) -> Optional[Dict[str, ShootCustomField]]:
    """Parse the custom field annotation of a project.

    Returns ``None`` when the annotation is missing or malformed. Entries
    that are empty, contain nested objects or lack name/path are dropped.
    Keys are prefixed with ``Z_`` so they sort after built-in columns.
    """
    if project is None:
        return None

    raw = project.metadata.annotations.get(SHOOT_CUSTOM_FIELDS_ANNOTATION)
    if not raw:
        return None

    try:
        custom_fields = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error(f"could not parse custom fields: {e}")
        return None

    if not isinstance(custom_fields, dict):
        logger.error("could not parse custom fields: expected a JSON object")
        return None

    result = {}
    for key, custom_field in custom_fields.items():
        if not custom_field or not isinstance(custom_field, dict):
            continue
        if any(isinstance(value, (dict, list)) for value in custom_field.values()):
            continue
        if not custom_field.get("name") or not custom_field.get("path"):
            continue

        prefixed_key = f"Z_{key}"
        try:
            result[prefixed_key] = ShootCustomField(**{**custom_field, "key": prefixed_key})
        except ValidationError as e:
            logger.warning(f"Skipped custom field {key}: {e}")
    return result


def shoot_custom_field_list(project: Optional[Project]) -> List[ShootCustomField]:
    return list((shoot_custom_fields(project) or {}).values())


def cost_object_settings(config: DashboardConfig) -> Optional[CostObjectSettings]:
    cost_object = config.cost_object
    if cost_object is None:
        return None

    return CostObjectSettings(
        title=cost_object.title or "",
        description=cost_object.description or "",
        regex=cost_object.regex,
        error_message=cost_object.error_message,
    )


def purpose_requires_hibernation_schedule(config: DashboardConfig, purpose: Optional[str]) -> bool:
    """Shoots need a schedule if defaults exist for their purpose (or no purpose is set)."""
    default_schedules = config.default_hibernation_schedule
    if not default_schedules:
        return False
    if not purpose:
        return True
    return bool(default_schedules.get(purpose))


def has_no_hibernation_schedule_warning(config: DashboardConfig, shoot: Shoot) -> bool:
    if not purpose_requires_hibernation_schedule(config, shoot.spec.purpose):
        return False

    has_no_schedule_flag = bool(shoot.annotations.get(NO_HIBERNATION_SCHEDULE_ANNOTATION))
    schedules = shoot.spec.hibernation.schedules if shoot.spec.hibernation else []
    return not has_no_schedule_flag and not schedules
