"""Operator configuration consumed by the resolution engine."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .access_restriction import AccessRestrictionDefinition
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_NO_ITEMS_TEXT = "No access restriction options available for region ${region}"


class VendorHint(BaseModel):
    """Operator hint (e.g. a warning icon) attached to a machine image vendor."""

    type: Optional[str] = None
    message: Optional[str] = None
    match_names: List[str] = Field(default_factory=list, alias="matchNames")

    class Config:
        populate_by_name = True


class AccessRestrictionConfig(BaseModel):
    no_items_text: str = Field(default=DEFAULT_NO_ITEMS_TEXT, alias="noItemsText")
    items: List[AccessRestrictionDefinition] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class CostObjectConfig(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    regex: Optional[str] = None
    error_message: Optional[str] = Field(default=None, alias="errorMessage")

    class Config:
        populate_by_name = True


class FeatureFlags(BaseModel):
    terminal_enabled: bool = Field(default=False, alias="terminalEnabled")
    project_terminal_shortcuts_enabled: bool = Field(default=False, alias="projectTerminalShortcutsEnabled")

    class Config:
        populate_by_name = True


class TerminalConfig(BaseModel):
    shortcuts: List[Dict[str, Any]] = Field(default_factory=list)


class DashboardConfig(BaseModel):
    """Operator supplied settings."""

    vendor_hints: List[VendorHint] = Field(default_factory=list, alias="vendorHints")
    access_restriction: Optional[AccessRestrictionConfig] = Field(default=None, alias="accessRestriction")
    default_hibernation_schedule: Optional[Dict[str, List[Dict[str, Any]]]] = Field(
        default=None, alias="defaultHibernationSchedule"
    )
    cost_object: Optional[CostObjectConfig] = Field(default=None, alias="costObject")
    features: FeatureFlags = Field(default_factory=FeatureFlags)
    terminal: TerminalConfig = Field(default_factory=TerminalConfig)

    class Config:
        populate_by_name = True

    def vendor_hint(self, vendor_name: Optional[str]) -> Optional[VendorHint]:
        """Find the hint whose match names contain the vendor."""
        if vendor_name is None:
            return None
        for hint in self.vendor_hints:
            if vendor_name in hint.match_names:
                return hint
        return None


def load_config(config_path: Optional[Path] = None) -> DashboardConfig:
    """Load configuration from a YAML or JSON file.

    Missing or unreadable files yield the default configuration.
    """
    if config_path is None or not config_path.exists():
        return DashboardConfig()

    try:
        with open(config_path, "r") as f:
            if config_path.suffix == ".yaml" or config_path.suffix == ".yml":
                data = yaml.safe_load(f)
            else:
                data = json.load(f)

        config = DashboardConfig(**(data or {}))
        logger.info(f"Loaded dashboard config from {config_path}")
        return config
    except (OSError, yaml.YAMLError, json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Failed to load dashboard config: {e}")
        return DashboardConfig()
