"""Terminal shortcut filtering by target and access rights."""

import hashlib
import json
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError

from ..model.config import DashboardConfig
from ..utils.logger import get_logger

logger = get_logger(__name__)

# (verb, api group, resource kind, resource name) -> allowed
AuthorizationPredicate = Callable[[str, str, str, Optional[str]], bool]


class TerminalTarget(str, Enum):
    SHOOT = "shoot"
    CONTROL_PLANE = "cp"
    GARDEN = "garden"


ALL_TARGETS = [TerminalTarget.SHOOT, TerminalTarget.CONTROL_PLANE, TerminalTarget.GARDEN]


class ShortcutContainer(BaseModel):
    image: Optional[str] = None
    command: List[str] = Field(default_factory=list)
    args: List[str] = Field(default_factory=list)


class TerminalShortcut(BaseModel):
    """Terminal shortcut; ``id`` is derived from its content."""

    id: str
    title: str
    description: Optional[str] = None
    target: TerminalTarget
    container: Optional[ShortcutContainer] = None
    unverified: bool = True


def shortcut_id(shortcut: Dict[str, Any]) -> str:
    payload = json.dumps(shortcut, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def parse_shortcuts(raw_shortcuts: Iterable[Dict[str, Any]], unverified: bool) -> List[TerminalShortcut]:
    """Build shortcuts from configuration, skipping malformed and duplicate ones."""
    shortcuts = []
    seen = set()
    for raw in raw_shortcuts:
        identifier = shortcut_id(raw)
        if identifier in seen:
            continue
        try:
            shortcut = TerminalShortcut(**{**raw, "id": identifier, "unverified": unverified})
        except ValidationError as e:
            logger.error(f"Skipped invalid terminal shortcut: {e}")
            continue
        seen.add(identifier)
        shortcuts.append(shortcut)
    return shortcuts


class TerminalAccess:
    """Terminal permissions derived from feature flags and the authorization predicate."""

    def __init__(self, config: DashboardConfig, can_perform: AuthorizationPredicate, is_admin: bool = False):
        self.config = config
        self.can_perform = can_perform
        self.is_admin = is_admin

    @property
    def is_terminal_enabled(self) -> bool:
        return self.config.features.terminal_enabled

    @property
    def can_create_terminals(self) -> bool:
        return self.can_perform("create", "dashboard.gardener.cloud", "terminals", None)

    @property
    def has_garden_terminal_access(self) -> bool:
        return self.is_terminal_enabled and self.can_create_terminals

    @property
    def has_control_plane_terminal_access(self) -> bool:
        return self.is_terminal_enabled and self.can_create_terminals and self.is_admin

    @property
    def has_shoot_terminal_access(self) -> bool:
        return self.is_terminal_enabled and self.can_create_terminals

    @property
    def can_use_project_terminal_shortcuts(self) -> bool:
        return (
            self.config.features.project_terminal_shortcuts_enabled
            and self.can_perform("list", "", "secrets", None)
            and self.can_create_terminals
        )

    def has_access(self, target: TerminalTarget) -> bool:
        if target == TerminalTarget.CONTROL_PLANE:
            return self.has_control_plane_terminal_access
        if target == TerminalTarget.GARDEN:
            return self.has_garden_terminal_access
        return self.has_shoot_terminal_access

    def filter_shortcuts(
        self, shortcuts: Sequence[TerminalShortcut], targets: Sequence[TerminalTarget] = ALL_TARGETS
    ) -> List[TerminalShortcut]:
        return [
            shortcut
            for shortcut in shortcuts
            if self.has_access(shortcut.target) and shortcut.target in targets
        ]

    def configured_shortcuts(self, targets: Sequence[TerminalTarget] = ALL_TARGETS) -> List[TerminalShortcut]:
        """Operator configured shortcuts usable by the current user."""
        shortcuts = parse_shortcuts(self.config.terminal.shortcuts, unverified=False)
        return self.filter_shortcuts(shortcuts, targets)

    def project_shortcuts(
        self, raw_shortcuts: Iterable[Dict[str, Any]], targets: Sequence[TerminalTarget] = ALL_TARGETS
    ) -> List[TerminalShortcut]:
        """Project defined shortcuts; these are marked unverified."""
        shortcuts = parse_shortcuts(raw_shortcuts, unverified=True)
        return self.filter_shortcuts(shortcuts, targets)
