"""
ChainLog Configuration System

Manages configuration for ChainLog: inference limits and logging settings.
Supports both YAML and JSON formats.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field, asdict

import yaml


DEFAULT_MAX_ITERATIONS = 100


@dataclass
class InferenceConfig:
    """Forward-chaining configuration"""
    max_iterations: int = DEFAULT_MAX_ITERATIONS  # Hard cap on inference passes

    def __post_init__(self):
        if (not isinstance(self.max_iterations, int) or isinstance(self.max_iterations, bool)
                or self.max_iterations < 1):
            raise ValueError(f"max_iterations must be a positive integer, got {self.max_iterations!r}")


@dataclass
class ChainLogConfig:
    """Main ChainLog configuration"""
    inference: InferenceConfig = field(default_factory=InferenceConfig)

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None
    structured_logging: bool = False

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "ChainLogConfig":
        """
        Load configuration from file.

        Args:
            path: Path to config file. If None, searches for:
                  1. ~/.chainlog/config.yaml (or .yml)
                  2. ~/.chainlog/config.json
                  3. ./chainlog_config.yaml (or .yml)
                  4. ./chainlog_config.json

        Returns:
            ChainLogConfig instance
        """
        if path:
            return cls._load_from_file(Path(path))

        search_paths = [
            Path.home() / ".chainlog" / "config.yaml",
            Path.home() / ".chainlog" / "config.yml",
            Path.home() / ".chainlog" / "config.json",
            Path("chainlog_config.yaml"),
            Path("chainlog_config.yml"),
            Path("chainlog_config.json"),
        ]

        for config_path in search_paths:
            if config_path.exists():
                return cls._load_from_file(config_path)

        # Return default config if no file found
        return cls()

    @classmethod
    def _load_from_file(cls, path: Path) -> "ChainLogConfig":
        """Load config from specific file"""
        with open(path, 'r') as f:
            if path.suffix in ['.yaml', '.yml']:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChainLogConfig":
        """Create config from dictionary"""
        config = cls()

        if 'inference' in data:
            config.inference = InferenceConfig(**data['inference'])

        for key in ['log_level', 'log_file', 'structured_logging']:
            if key in data:
                setattr(config, key, data[key])

        return config

    def save(self, path: Union[str, Path]) -> None:
        """
        Save configuration to file.

        Args:
            path: Path to save config (extension determines format)
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self.to_dict()

        with open(path, 'w') as f:
            if path.suffix in ['.yaml', '.yml']:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)
            else:
                json.dump(data, f, indent=2)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary"""
        return {
            'inference': asdict(self.inference),
            'log_level': self.log_level,
            'log_file': self.log_file,
            'structured_logging': self.structured_logging,
        }


# Global config instance
_config: Optional[ChainLogConfig] = None


def get_config() -> ChainLogConfig:
    """Get the global config instance"""
    global _config
    if _config is None:
        _config = ChainLogConfig.load()
    return _config


def set_config(config: ChainLogConfig) -> None:
    """Set the global config instance"""
    global _config
    _config = config


def reset_config() -> None:
    """Reset to default config"""
    global _config
    _config = ChainLogConfig()
