import json
from pathlib import Path
from typing import Dict, Any, Optional


class ConfigLoader:
    def __init__(self, config_dir: Optional[str] = None):
        """Initialize the configuration loader.

        Args:
            config_dir: Directory containing JSON configuration files. Defaults to
                      the directory holding this module.
        """
        if config_dir is None:
            self.config_dir = Path(__file__).parent
        else:
            self.config_dir = Path(config_dir)

        self._config_cache: Dict[str, Any] = {}

    def _resolve(self, filename: str) -> str:
        if not filename.endswith('.json'):
            filename += '.json'
        return filename

    def load_config(self, filename: str) -> Dict[str, Any]:
        """Load a JSON configuration file.

        Args:
            filename: Name of the configuration file (with or without .json extension).

        Returns:
            A copy of the parsed configuration, so callers cannot alter the cache.

        Raises:
            FileNotFoundError: If the configuration file doesn't exist
            json.JSONDecodeError: If the file contains invalid JSON
        """
        filename = self._resolve(filename)

        if filename in self._config_cache:
            return dict(self._config_cache[filename])

        config_path = self.config_dir / filename
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)

        self._config_cache[filename] = config
        return dict(config)

    def save_config(self, config: Dict[str, Any], filename: str) -> None:
        """Save a configuration to a JSON file, creating parent directories."""
        filename = self._resolve(filename)
        config_path = self.config_dir / filename
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, 'w', encoding='utf-8') as f:
            json.dump(config, f, indent=2)

        self._config_cache[filename] = config
