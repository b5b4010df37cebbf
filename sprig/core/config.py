"""Configuration management for Sprig.

This module provides a clean interface for reading and writing
both repository-local and global configuration files.
"""

import os
import configparser
from pathlib import Path
from typing import Optional


DEFAULTS = {
    ('init', 'defaultbranch'): 'master',
    ('init', 'message'): 'initial commit',
    ('log', 'utc'): 'false',
}


class Config:
    """
    Manages Sprig configuration files.

    Configuration is stored in INI format:
    - Global config: ~/.sprigconfig
    - Repository config: .sprig/config

    Repository config takes precedence over global config.
    Environment variables take highest precedence.
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.sprigconfig'

    def __init__(self, repo_config_path: Optional[Path] = None):
        """
        Args:
            repo_config_path: Path to repository config file, if in a repo
        """
        self.repo_config_path = repo_config_path
        self._global_config = None
        self._repo_config = None

    @property
    def global_config(self) -> configparser.ConfigParser:
        """Load and return global configuration."""
        if self._global_config is None:
            self._global_config = configparser.ConfigParser()
            if self.GLOBAL_CONFIG_PATH.exists():
                self._global_config.read(self.GLOBAL_CONFIG_PATH)
        return self._global_config

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        """Load and return repository configuration."""
        if self._repo_config is None and self.repo_config_path:
            self._repo_config = configparser.ConfigParser()
            if self.repo_config_path.exists():
                self._repo_config.read(self.repo_config_path)
        return self._repo_config

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Priority order (highest to lowest):
        1. Environment variables (SPRIG_<SECTION>_<KEY>)
        2. Repository config
        3. Global config
        4. Fallback value, then the built-in default

        Args:
            section: Config section (e.g., 'init', 'log')
            key: Config key (e.g., 'defaultbranch')
            fallback: Default value if not found

        Returns:
            Configuration value or fallback
        """
        env_value = os.environ.get(f"SPRIG_{section.upper()}_{key.upper()}")
        if env_value is not None:
            return env_value

        if self.repo_config and self.repo_config.has_option(section, key):
            return self.repo_config.get(section, key)

        if self.global_config.has_option(section, key):
            return self.global_config.get(section, key)

        if fallback is not None:
            return fallback
        return DEFAULTS.get((section, key))

    def get_bool(self, section: str, key: str) -> bool:
        value = self.get(section, key) or ''
        return value.strip().lower() in ('1', 'true', 'yes', 'on')

    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """
        Set a configuration value.

        Args:
            section: Config section
            key: Config key
            value: Value to set
            global_config: If True, write to global config; otherwise repo config
        """
        if global_config:
            config = self.global_config
            config_path = self.GLOBAL_CONFIG_PATH
        else:
            if not self.repo_config_path:
                raise ValueError("No repository config path available")
            config = self.repo_config
            config_path = self.repo_config_path

        if not config.has_section(section):
            config.add_section(section)

        config.set(section, key, value)

        with open(config_path, 'w') as f:
            config.write(f)

    @property
    def default_branch(self) -> str:
        return self.get('init', 'defaultbranch')

    @property
    def initial_message(self) -> str:
        return self.get('init', 'message')

    @property
    def log_utc(self) -> bool:
        return self.get_bool('log', 'utc')


def get_config(ctx=None) -> Config:
    """
    Get a Config instance.

    Args:
        ctx: RepositoryContext, or None for global-only config

    Returns:
        Config instance
    """
    if ctx is not None:
        return Config(ctx.config_file)
    return Config()
