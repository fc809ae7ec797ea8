"""Configuration management with YAML files and environment overrides."""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, field
import logging

logger = logging.getLogger(__name__)


def _is_int(value: Any) -> bool:
    """True for ints, excluding bools."""
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class MazeConfig:
    """Maze generation configuration."""
    seed: Optional[int] = None  # None draws from an unseeded stream
    verify: bool = True  # Re-check the spanning tree after generation
    show_progress: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_enabled: bool = False
    file_path: str = "./logs/mazebuilder.log"
    file_max_size: int = 10 * 1024 * 1024  # 10MB
    file_backup_count: int = 5


@dataclass
class AppConfig:
    """Main application configuration."""
    maze: MazeConfig = field(default_factory=MazeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AppConfig':
        """Create config from dictionary."""
        config = cls()
        
        for section_name, section_data in data.items():
            if hasattr(config, section_name) and isinstance(section_data, dict):
                section = getattr(config, section_name)
                for key, value in section_data.items():
                    if hasattr(section, key):
                        setattr(section, key, value)
                    else:
                        logger.warning(f"Unknown config key: {section_name}.{key}")
            else:
                logger.warning(f"Unknown config section: {section_name}")
        
        return config
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        result = {}
        
        for field_name in self.__dataclass_fields__:
            field_value = getattr(self, field_name)
            if hasattr(field_value, '__dataclass_fields__'):
                result[field_name] = {
                    sub_field: getattr(field_value, sub_field)
                    for sub_field in field_value.__dataclass_fields__
                }
            else:
                result[field_name] = field_value
        
        return result
    
    def validate(self) -> bool:
        """Validate configuration."""
        errors = []
        
        seed = self.maze.seed
        if seed is not None and not _is_int(seed):
            errors.append("maze.seed must be an integer or null")
        
        if not isinstance(logging.getLevelName(str(self.logging.level).upper()), int):
            errors.append(f"logging.level is not a known level: {self.logging.level}")
        
        for name in ("verify", "show_progress"):
            if not isinstance(getattr(self.maze, name), bool):
                errors.append(f"maze.{name} must be true or false")
        
        if not isinstance(self.logging.file_enabled, bool):
            errors.append("logging.file_enabled must be true or false")
        
        for name in ("level", "format", "file_path"):
            if not isinstance(getattr(self.logging, name), str):
                errors.append(f"logging.{name} must be a string")
        
        max_size = self.logging.file_max_size
        if not _is_int(max_size):
            errors.append(f"logging.file_max_size must be an integer number of bytes, got {max_size!r}")
        elif max_size <= 0:
            errors.append("logging.file_max_size must be positive")
        
        backup_count = self.logging.file_backup_count
        if not _is_int(backup_count):
            errors.append(f"logging.file_backup_count must be an integer, got {backup_count!r}")
        elif backup_count < 0:
            errors.append("logging.file_backup_count must not be negative")
        
        if errors:
            for error in errors:
                logger.error(f"Config validation error: {error}")
            return False
        
        return True


class ConfigManager:
    """Configuration manager with environment support."""
    
    def __init__(self, config_path: Optional[str] = None):
        """Initialize config manager."""
        self._explicit_path = config_path is not None
        self.config_path = config_path or self._find_config_file()
        self.config: Optional[AppConfig] = None
    
    def _find_config_file(self) -> Optional[str]:
        """Find configuration file in standard locations."""
        search_paths = [
            "./mazebuilder.yaml",
            "./config.yaml",
            os.path.expanduser("~/.mazebuilder/config.yaml"),
        ]
        
        for path in search_paths:
            if Path(path).exists():
                logger.info(f"Found config file: {path}")
                return path
        
        logger.info("No config file found, using defaults")
        return None
    
    def load_config(self, config_file_path: Optional[str] = None) -> AppConfig:
        """Load configuration from file and environment.
        
        Raises:
            ValueError: If the file cannot be parsed or the result fails validation
        """
        config_path_to_use = config_file_path or self.config_path
        config_data: Dict[str, Any] = {}
        
        if config_path_to_use and Path(config_path_to_use).exists():
            try:
                with open(config_path_to_use, 'r') as f:
                    file_config = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                logger.error(f"Failed to load config file {config_path_to_use}: {e}")
                raise ValueError(f"Cannot read config file {config_path_to_use}: {e}") from e
            
            if file_config:
                if not isinstance(file_config, dict):
                    raise ValueError(f"Config file {config_path_to_use} must contain a mapping")
                config_data.update(file_config)
                logger.info(f"Loaded config from {config_path_to_use}")
        elif config_path_to_use and (config_file_path or self._explicit_path):
            raise ValueError(f"Config file does not exist: {config_path_to_use}")
        
        env_overrides = self._load_env_overrides()
        for section, values in env_overrides.items():
            config_data.setdefault(section, {})
            if isinstance(config_data[section], dict):
                config_data[section].update(values)
        if env_overrides:
            logger.info(f"Applied {len(env_overrides)} environment overrides")
        
        self.config = AppConfig.from_dict(config_data)
        
        if not self.config.validate():
            raise ValueError("Configuration validation failed")
        
        return self.config
    
    def _load_env_overrides(self) -> Dict[str, Any]:
        """Load configuration overrides from environment variables."""
        overrides: Dict[str, Dict[str, Any]] = {}
        prefix = "MAZEBUILDER_"
        
        env_mappings = {
            f"{prefix}SEED": ("maze", "seed", int),
            f"{prefix}VERIFY": ("maze", "verify", bool),
            f"{prefix}SHOW_PROGRESS": ("maze", "show_progress", bool),
            f"{prefix}LOG_LEVEL": ("logging", "level", str),
        }
        
        for env_var, (section, key, type_func) in env_mappings.items():
            value = os.getenv(env_var)
            if value is not None:
                try:
                    if type_func is bool:
                        value = value.lower() in ('true', '1', 'yes', 'on')
                    else:
                        value = type_func(value)
                    
                    if section not in overrides:
                        overrides[section] = {}
                    overrides[section][key] = value
                    
                except (ValueError, TypeError) as e:
                    logger.warning(f"Invalid environment variable {env_var}={value}: {e}")
        
        return overrides
    
    def save_config(self, config: AppConfig, path: Optional[str] = None):
        """Save configuration to file."""
        save_path = path or self.config_path or "./mazebuilder.yaml"
        
        try:
            with open(save_path, 'w') as f:
                yaml.dump(config.to_dict(), f, default_flow_style=False, indent=2)
            
            logger.info(f"Configuration saved to {save_path}")
            
        except OSError as e:
            logger.error(f"Failed to save config to {save_path}: {e}")
            raise
    
    def get_config(self) -> AppConfig:
        """Get current configuration."""
        if self.config is None:
            self.config = self.load_config()
        return self.config
    
    def reload_config(self) -> AppConfig:
        """Reload configuration from file."""
        self.config = None
        return self.load_config()


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Simple config loader function."""
    return ConfigManager(config_path).load_config()
