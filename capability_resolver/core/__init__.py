"""Core resolution logic."""

from .access_restrictions import AccessRestrictionResolver
from .engine import ResolutionEngine, ResolutionView
from .error_codes import (
    ErrorCode,
    LastError,
    error_codes_from_array,
    is_infra_account_error,
    is_temporary_error,
    is_user_error,
    objects_from_error_codes,
)
from .graph import CapabilityGraph, vendor_name_from_image_name
from .shoot_policies import (
    CostObjectSettings,
    ShootCustomField,
    cost_object_settings,
    has_no_hibernation_schedule_warning,
    purpose_requires_hibernation_schedule,
    shoot_custom_field_list,
    shoot_custom_fields,
)
from .terminal_shortcuts import TerminalAccess, TerminalTarget
from .workers import WorkerGenerator

__all__ = [
    "AccessRestrictionResolver",
    "ResolutionEngine",
    "ResolutionView",
    "ErrorCode",
    "LastError",
    "error_codes_from_array",
    "is_infra_account_error",
    "is_temporary_error",
    "is_user_error",
    "objects_from_error_codes",
    "CapabilityGraph",
    "vendor_name_from_image_name",
    "CostObjectSettings",
    "ShootCustomField",
    "cost_object_settings",
    "has_no_hibernation_schedule_warning",
    "purpose_requires_hibernation_schedule",
    "shoot_custom_field_list",
    "shoot_custom_fields",
    "TerminalAccess",
    "TerminalTarget",
    "WorkerGenerator",
]
