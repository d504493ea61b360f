from typing import Dict, Any, Mapping, Optional
from dataclasses import dataclass, field
from enum import Enum


class StyleRole(str, Enum):
    WATER = "water"
    LAND = "land"
    ROADS = "roads"
    BUILDINGS = "buildings"
    LABELS = "labels"


# Iteration order used everywhere roles are walked
ROLE_ORDER = (
    StyleRole.WATER,
    StyleRole.LAND,
    StyleRole.ROADS,
    StyleRole.BUILDINGS,
    StyleRole.LABELS,
)


@dataclass(frozen=True)
class StyleObject:
    """Role colors for one apply action plus an optional display name.

    Instances are never mutated; build a new one for every style change.
    A role left as None is skipped when the style is applied.
    """
    water: Optional[str] = None
    land: Optional[str] = None
    roads: Optional[str] = None
    buildings: Optional[str] = None
    labels: Optional[str] = None
    name: Optional[str] = None

    def get(self, role: StyleRole) -> Optional[str]:
        return getattr(self, StyleRole(role).value)

    def colors(self) -> Dict[StyleRole, str]:
        """Return the roles that carry a color, in iteration order."""
        return {role: self.get(role) for role in ROLE_ORDER if self.get(role)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'StyleObject':
        """Create a StyleObject from a dictionary, ignoring unknown keys."""
        data = data or {}
        values = {role.value: data.get(role.value) for role in ROLE_ORDER}
        return cls(name=data.get('name'), **values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary for JSON serialization."""
        result: Dict[str, Any] = {}
        if self.name is not None:
            result['name'] = self.name
        for role in ROLE_ORDER:
            result[role.value] = self.get(role)
        return result


@dataclass
class ApplyReport:
    """What an apply pass touched: matched layer ids and failures per role."""
    style_name: Optional[str] = None
    matched: Dict[str, list] = field(default_factory=dict)
    failed: Dict[str, list] = field(default_factory=dict)
    skipped: list = field(default_factory=list)

    @property
    def unmatched(self) -> list:
        return [role for role, ids in self.matched.items() if not ids]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'style_name': self.style_name,
            'matched': self.matched,
            'failed': self.failed,
            'skipped': self.skipped,
            'unmatched': self.unmatched,
        }
