"""Per-request render context: editing mode, capabilities and session key."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet

from edtech_format.course.domain import EDITING_CAPABILITIES


@dataclass(frozen=True)
class RenderContext:
    """Viewer state for one render pass (implements CapabilityCheckerProtocol).

    Parameters:
        editing: Whether the viewer has editing mode switched on.
        capabilities: Capabilities the viewer holds in the course.
        session_key: Token that state-changing links must carry.
    """

    editing: bool = False
    capabilities: FrozenSet[str] = field(default_factory=frozenset)
    session_key: str = ""

    def has_capability(self, capability: str) -> bool:
        return capability in self.capabilities

    def user_is_editing(self) -> bool:
        return self.editing

    def sesskey(self) -> str:
        return self.session_key

    def user_allowed_editing(self) -> bool:
        return bool(self.capabilities & EDITING_CAPABILITIES)


__all__ = ["RenderContext"]
