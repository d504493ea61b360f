"""Schema definitions for the role keyword table."""
from dataclasses import dataclass, field
from typing import Dict, List, Any, Tuple

from .style_schema import ROLE_ORDER, StyleRole

# Default keywords matched against layer ids and source-layer names
DEFAULT_ROLE_KEYWORDS: Dict[str, List[str]] = {
    'water': ['water', 'ocean', 'lake', 'river'],
    'land': ['land', 'background', 'landcover', 'grass', 'park'],
    'roads': ['road', 'highway', 'street', 'motorway'],
    'buildings': ['building', 'structure'],
    'labels': ['label', 'place', 'poi', 'admin'],
}


@dataclass
class RoleKeywords:
    """Keyword sets for every style role.

    Matching is case-insensitive, so keywords are stored lower-cased.
    """
    keywords: Dict[StyleRole, Tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self):
        normalized = {}
        for role in ROLE_ORDER:
            words = self.keywords.get(role, ())
            normalized[role] = tuple(str(w).strip().lower() for w in words if str(w).strip())
        self.keywords = normalized

    def for_role(self, role: StyleRole) -> Tuple[str, ...]:
        return self.keywords.get(StyleRole(role), ())

    @classmethod
    def default(cls) -> 'RoleKeywords':
        return cls.from_dict(DEFAULT_ROLE_KEYWORDS)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RoleKeywords':
        """Create a RoleKeywords from a dictionary.

        Unknown roles are ignored and roles missing from ``data`` keep
        their default keywords.
        """
        keywords = {}
        for role in ROLE_ORDER:
            words = (data or {}).get(role.value)
            if isinstance(words, str):
                words = [words]
            if not isinstance(words, list):
                words = DEFAULT_ROLE_KEYWORDS[role.value]
            keywords[role] = tuple(words)
        return cls(keywords=keywords)

    def to_dict(self) -> Dict[str, List[str]]:
        """Convert to a dictionary for JSON serialization."""
        return {role.value: list(words) for role, words in self.keywords.items()}
