"""Mapping between shoot labels/annotations and typed access restrictions."""

from string import Template
from typing import Dict, List, Mapping, Optional

from ..model.access_restriction import (
    AccessRestrictionDefinition,
    AccessRestrictionSelection,
    DisplayedAccessRestriction,
    DisplayedOption,
    OptionDefinition,
    OptionSelection,
)
from ..model.config import DEFAULT_NO_ITEMS_TEXT, DashboardConfig
from ..model.shoot import Shoot
from ..utils.logger import get_logger
from .graph import CapabilityGraph

logger = get_logger(__name__)

IS_SELECTED_BY_DEFAULT = False


def _decode_flag(definition: OptionDefinition, raw_values: Mapping[str, str]) -> bool:
    """Read a boolean flag, honouring inverted inputs.

    Absent flags decode to "not selected".
    """
    inverted = definition.input.inverted
    default_value = not IS_SELECTED_BY_DEFAULT if inverted else IS_SELECTED_BY_DEFAULT
    raw_value = raw_values.get(definition.key, str(default_value).lower()) == "true"
    return not raw_value if inverted else raw_value


def decode_access_restriction(
    definition: AccessRestrictionDefinition, shoot: Shoot
) -> Optional[AccessRestrictionSelection]:
    """Decode one restriction from seed selector labels and its options from annotations."""
    if not definition.key:
        return None

    options = {
        option.key: OptionSelection(value=_decode_flag(option, shoot.annotations))
        for option in definition.options
        if option.key
    }
    return AccessRestrictionSelection(
        value=_decode_flag(definition, shoot.seed_selector_labels),
        options=options,
    )


def _display_option(
    option_definition: OptionDefinition, option: Optional[OptionSelection]
) -> Optional[DisplayedOption]:
    if option is None or option_definition.display.visible_if != option.value:
        return None

    display = option_definition.display
    return DisplayedOption(
        key=option_definition.key,
        title=display.title or option_definition.key,
        description=display.description,
    )


def display_access_restriction(
    definition: AccessRestrictionDefinition, selection: Optional[AccessRestrictionSelection]
) -> Optional[DisplayedAccessRestriction]:
    """List a restriction only if its value matches ``display.visibleIf``."""
    if selection is None or definition.display.visible_if != selection.value:
        return None

    options = []
    for option_definition in definition.options:
        option = _display_option(option_definition, selection.options.get(option_definition.key))
        if option is not None:
            options.append(option)

    return DisplayedAccessRestriction(
        key=definition.key,
        title=definition.display.title or definition.key,
        description=definition.display.description,
        options=options,
    )


class AccessRestrictionResolver:
    """Resolves access restrictions available in a region and selected on a shoot."""

    def __init__(self, graph: CapabilityGraph, config: Optional[DashboardConfig] = None):
        self.graph = graph
        self.config = config or graph.config

    @property
    def _items(self) -> List[AccessRestrictionDefinition]:
        if self.config.access_restriction is None:
            return []
        return self.config.access_restriction.items

    def definitions(
        self, cloud_profile_name: Optional[str], region: Optional[str]
    ) -> Optional[List[AccessRestrictionDefinition]]:
        """Definitions enabled by a ``<key>: "true"`` label on the region."""
        if not cloud_profile_name or not region:
            return None

        labels = self.graph.region_labels(cloud_profile_name, region)
        if not labels:
            logger.debug(f"No access restrictions for region {region} of cloud profile {cloud_profile_name}")
            return None

        return [item for item in self._items if item.key and labels.get(item.key) == "true"]

    def selections_for_shoot(
        self, shoot: Shoot, cloud_profile_name: Optional[str], region: Optional[str]
    ) -> Dict[str, AccessRestrictionSelection]:
        """Decoded selection of every restriction available to the shoot."""
        selections = {}
        for definition in self.definitions(cloud_profile_name, region) or []:
            selection = decode_access_restriction(definition, shoot)
            if selection is not None:
                selections[definition.key] = selection
        return selections

    def selected_for_display(
        self, shoot: Shoot, cloud_profile_name: Optional[str], region: Optional[str]
    ) -> List[DisplayedAccessRestriction]:
        """Restrictions to list for the shoot, in definition order."""
        selections = self.selections_for_shoot(shoot, cloud_profile_name, region)

        displayed = []
        for definition in self.definitions(cloud_profile_name, region) or []:
            item = display_access_restriction(definition, selections.get(definition.key))
            if item is not None:
                displayed.append(item)
        return displayed

    def no_items_text(self, cloud_profile_name: Optional[str], region: Optional[str]) -> str:
        """Message shown when a region offers no access restrictions."""
        text = DEFAULT_NO_ITEMS_TEXT
        if self.config.access_restriction is not None:
            text = self.config.access_restriction.no_items_text

        return Template(text).safe_substitute(region=region or "", cloudProfile=cloud_profile_name or "")
