import json
import logging
from typing import Optional

from .loader import ConfigLoader
from .schemas.role_keywords import RoleKeywords

logger = logging.getLogger(__name__)

ROLES_FILE = "roles.json"


class ConfigManager:
    """Manages loading of the role keyword table."""

    def __init__(self, config_dir: Optional[str] = None):
        """Initialize the configuration manager.

        Args:
            config_dir: Directory containing configuration files. If None, uses default.
        """
        self.loader = ConfigLoader(config_dir)
        self._role_keywords: Optional[RoleKeywords] = None

    def get_role_keywords(self) -> RoleKeywords:
        """Get the keyword table used to classify layers into roles.

        Falls back to the built-in table if ``roles.json`` is missing or invalid.
        """
        if self._role_keywords is None:
            try:
                data = self.loader.load_config(ROLES_FILE)
                self._role_keywords = RoleKeywords.from_dict(data)
            except FileNotFoundError:
                logger.debug("No %s found; using default role keywords", ROLES_FILE)
                self._role_keywords = RoleKeywords.default()
            except (json.JSONDecodeError, AttributeError) as e:
                logger.warning(f"Invalid role keyword file: {e}; using defaults")
                self._role_keywords = RoleKeywords.default()
        return self._role_keywords

    def update_role_keywords(self, keywords: RoleKeywords) -> None:
        self._role_keywords = keywords

    def save_role_keywords(self) -> None:
        """Save the current keyword table to ``roles.json``."""
        if self._role_keywords is None:
            raise ValueError("No role keywords loaded")
        self.loader.save_config(self._role_keywords.to_dict(), ROLES_FILE)
