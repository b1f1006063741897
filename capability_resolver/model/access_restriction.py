"""Access restriction definitions and decoded selections."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class RestrictionDisplay(BaseModel):
    """Display metadata of a definition or option."""

    visible_if: bool = Field(default=False, alias="visibleIf")
    title: Optional[str] = None
    description: Optional[str] = None

    class Config:
        populate_by_name = True


class RestrictionInput(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    inverted: bool = False


class OptionDefinition(BaseModel):
    """Nested option of an access restriction, stored as a shoot annotation."""

    key: Optional[str] = None
    display: RestrictionDisplay = Field(default_factory=RestrictionDisplay)
    input: RestrictionInput = Field(default_factory=RestrictionInput)


class AccessRestrictionDefinition(OptionDefinition):
    """Access restriction, stored as a seed selector label."""

    options: List[OptionDefinition] = Field(default_factory=list)


class OptionSelection(BaseModel):
    value: bool = False


class AccessRestrictionSelection(BaseModel):
    """Decoded state of one access restriction on a shoot."""

    value: bool = False
    options: Dict[str, OptionSelection] = Field(default_factory=dict)


class DisplayedOption(BaseModel):
    key: str
    title: str
    description: Optional[str] = None


class DisplayedAccessRestriction(BaseModel):
    """Access restriction as listed for the user."""

    key: str
    title: str
    description: Optional[str] = None
    options: List[DisplayedOption] = Field(default_factory=list)
