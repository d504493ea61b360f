from .role_keywords import DEFAULT_ROLE_KEYWORDS, RoleKeywords
from .style_schema import ROLE_ORDER, ApplyReport, StyleObject, StyleRole

__all__ = [
    "StyleRole",
    "ROLE_ORDER",
    "StyleObject",
    "ApplyReport",
    "RoleKeywords",
    "DEFAULT_ROLE_KEYWORDS",
]
