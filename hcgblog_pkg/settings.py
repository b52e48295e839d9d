#!/usr/bin/env python3
"""
Settings loader for HcgBlog.
Supports configuration from config.yml, config.yaml, or config.json files.
"""

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from .exceptions import ConfigurationError

PATH_KEYS = ('source', 'output', 'posts', 'pages', 'drafts', 'layouts', 'includes', 'assets')

# camelCase keys accepted from config.json files
KEY_ALIASES = {
    'baseUrl': 'base_url',
    'perPage': 'per_page',
    'blogPathPrefix': 'blog_path_prefix',
    'frontMatterDefaults': 'front_matter_defaults',
}


@dataclass(frozen=True)
class SitePaths:
    """Resolved absolute directory paths of a site."""
    source: str
    output: str
    posts: str
    pages: str
    drafts: str
    layouts: str
    includes: str
    assets: str

    def __post_init__(self):
        for key in PATH_KEYS:
            value = getattr(self, key)
            if not value or not isinstance(value, str):
                raise ConfigurationError(f"Configuration Error: path '{key}' is missing.")
            if not os.path.isabs(value):
                raise ConfigurationError(f"Configuration Error: path '{key}' must be absolute, got '{value}'.")

    @property
    def pages_dir_name(self):
        return os.path.basename(os.path.normpath(self.pages))


@dataclass(frozen=True)
class SiteConfig:
    """Fully merged, validated and resolved site configuration."""
    title: str
    base_url: str
    paths: SitePaths
    description: Optional[str] = None
    author: Optional[Dict[str, Any]] = None
    pagination: Optional[Dict[str, Any]] = None
    front_matter_defaults: List[Dict[str, Any]] = field(default_factory=list)


def _normalize_keys(value):
    """Rename camelCase keys at the top level and inside ``pagination``."""
    if not isinstance(value, dict):
        return value
    normalized = {KEY_ALIASES.get(k, k): v for k, v in value.items()}
    if isinstance(normalized.get('pagination'), dict):
        normalized['pagination'] = {KEY_ALIASES.get(k, k): v for k, v in normalized['pagination'].items()}
    return normalized


def merge_configs(user_config: Dict[str, Any], default_config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge a user configuration over the defaults and validate the result.

    Top-level keys are replaced; ``paths`` and ``pagination`` are merged key
    by key.

    Raises:
        ConfigurationError: if the merged configuration is incomplete.
    """
    user_config = _normalize_keys(user_config or {})
    default_config = _normalize_keys(default_config or {})
    if not isinstance(user_config, dict):
        raise ConfigurationError("Configuration Error: the configuration must be a mapping.")

    merged = copy.deepcopy(default_config)
    merged.update(copy.deepcopy(user_config))

    if not isinstance(default_config.get('paths'), dict):
        raise ConfigurationError("Critical Error: Default paths configuration is missing.")
    user_paths = user_config.get('paths')
    if user_paths is not None and not isinstance(user_paths, dict):
        raise ConfigurationError("Configuration Error: 'paths' must be a mapping.")
    merged['paths'] = {**default_config['paths'], **(user_paths or {})}

    user_pagination = user_config.get('pagination')
    if user_pagination:
        if not isinstance(user_pagination, dict):
            raise ConfigurationError("Configuration Error: 'pagination' must be a mapping.")
        merged['pagination'] = {**(default_config.get('pagination') or {}), **user_pagination}
    elif default_config.get('pagination'):
        merged['pagination'] = dict(default_config['pagination'])
    else:
        merged['pagination'] = None

    if not merged.get('title') or not isinstance(merged['title'], str):
        raise ConfigurationError("Configuration Error: 'title' is missing or not a string.")
    if not merged.get('base_url') or not isinstance(merged['base_url'], str):
        raise ConfigurationError("Configuration Error: 'base_url' is missing or not a string.")
    missing = [key for key in PATH_KEYS
               if not merged['paths'].get(key) or not isinstance(merged['paths'][key], str)]
    if missing:
        raise ConfigurationError(
            f"Configuration Error: 'paths' object is incomplete or invalid after merge (missing: {', '.join(missing)})."
        )

    defaults = merged.get('front_matter_defaults') or []
    if not isinstance(defaults, list) or not all(isinstance(entry, dict) for entry in defaults):
        raise ConfigurationError("Configuration Error: 'front_matter_defaults' must be a list of mappings.")
    merged['front_matter_defaults'] = defaults

    return merged


def resolve_paths(paths: Dict[str, str], base_dir: str) -> SitePaths:
    """
    Resolve configured paths to absolute paths.

    ``source`` and ``output`` are relative to ``base_dir``; every other path
    is relative to the resolved source directory.
    """
    source_dir = os.path.abspath(os.path.join(base_dir, os.path.expanduser(paths['source'])))
    resolved = {'source': source_dir}
    for key in PATH_KEYS:
        if key == 'source':
            continue
        anchor = base_dir if key == 'output' else source_dir
        resolved[key] = os.path.abspath(os.path.join(anchor, os.path.expanduser(paths[key])))
    return SitePaths(**resolved)


class SiteSettings:
    """Load and manage HcgBlog configuration settings."""

    # Default configuration
    DEFAULT_SETTINGS = {
        'title': 'My Awesome HcgBlog',
        'base_url': '/',
        'description': None,
        'author': None,
        'paths': {
            'source': '.',
            'output': 'output',
            'posts': 'posts',
            'pages': 'pages',
            'drafts': 'drafts',
            'layouts': 'layouts',
            'includes': 'includes',
            'assets': 'assets',
        },
        'pagination': {
            'per_page': 10,
            'blog_path_prefix': '/blog/page',
        },
        'front_matter_defaults': [],
    }

    # Config file names to look for (in order of preference)
    CONFIG_FILES = ['config.yml', 'config.yaml', 'config.json']

    def __init__(self, config_dir: str = None):
        """
        Initialize settings loader.

        Args:
            config_dir: Directory to look for config files. Defaults to current directory.
        """
        self.config_dir = os.path.abspath(config_dir or os.getcwd())
        self.settings = copy.deepcopy(self.DEFAULT_SETTINGS)
        self.config_file_path = None
        self.logger = logging.getLogger('SiteSettings')

    def load_settings(self, config_file: str = None) -> Dict[str, Any]:
        """
        Load settings from a configuration file, falling back to the defaults
        when no file exists.

        Args:
            config_file: Explicit file name, relative to the config directory.

        Returns:
            Dictionary of merged and validated configuration settings

        Raises:
            ConfigurationError: if the file cannot be read or parsed, or the
                merged settings are invalid.
        """
        if config_file:
            config_path = os.path.join(self.config_dir, config_file)
            if not os.path.exists(config_path):
                self.logger.warning(f"Configuration file not found at {config_path}. Using default configuration.")
                config_path = None
        else:
            config_path = self._find_config_file()
            if not config_path:
                self.logger.warning(f"No configuration file found in {self.config_dir}. Using default configuration.")

        loaded_settings = {}
        if config_path:
            self.config_file_path = config_path
            loaded_settings = self._load_config_file(config_path)
            self.logger.info(f"Loaded configuration from: {os.path.relpath(config_path)}")

        try:
            self.settings = merge_configs(loaded_settings, self.DEFAULT_SETTINGS)
        except ConfigurationError as e:
            if config_path:
                raise ConfigurationError(f"Configuration validation failed: {e}") from e
            raise ConfigurationError(f"Failed to create configuration from defaults: {e}") from e

        return copy.deepcopy(self.settings)

    def load_config(self, config_file: str = None) -> SiteConfig:
        """Load settings and resolve them into a SiteConfig."""
        settings = self.load_settings(config_file)
        paths = resolve_paths(settings['paths'], self.config_dir)
        config = SiteConfig(
            title=settings['title'],
            base_url=settings['base_url'],
            paths=paths,
            description=settings.get('description'),
            author=settings.get('author'),
            pagination=settings.get('pagination'),
            front_matter_defaults=settings['front_matter_defaults'],
        )
        self.logger.debug(f"Resolved configuration: {config}")
        return config

    def _find_config_file(self) -> Optional[str]:
        """
        Find the first available configuration file.

        Returns:
            Path to config file or None if not found
        """
        for filename in self.CONFIG_FILES:
            config_path = os.path.join(self.config_dir, filename)
            if os.path.exists(config_path):
                return config_path
        return None

    def _load_config_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from a file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Dictionary of configuration settings
        """
        file_ext = os.path.splitext(config_path)[1].lower()
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if file_ext in ['.yml', '.yaml']:
                    data = yaml.safe_load(f)
                elif file_ext == '.json':
                    data = json.load(f)
                else:
                    raise ConfigurationError(f"Unsupported config file format: {file_ext}")
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse configuration file at {config_path} as YAML: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Failed to parse configuration file at {config_path} as JSON: {e}") from e
        except (IOError, OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Failed to read configuration file at {config_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {config_path} must contain a mapping.")
        return data

    def create_sample_config(self, file_format: str = 'yml') -> str:
        """
        Create a sample configuration file.

        Args:
            file_format: Format for config file ('yml', 'yaml', or 'json')

        Returns:
            Path to created sample config file
        """
        sample_config = {
            'title': 'My HcgBlog Site',
            'base_url': 'https://example.com',
            'description': 'Built with HcgBlog',
            'paths': dict(self.DEFAULT_SETTINGS['paths']),
            'pagination': dict(self.DEFAULT_SETTINGS['pagination']),
            'front_matter_defaults': [
                {'scope': {'type': 'posts'}, 'values': {'layout': 'post'}},
            ],
        }

        filename = f'config.{file_format}'
        config_path = os.path.join(self.config_dir, filename)

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                if file_format in ['yml', 'yaml']:
                    f.write("# HcgBlog Configuration File\n")
                    f.write("# Paths are relative to this directory (source, output)\n")
                    f.write("# or to the source directory (everything else).\n\n")
                    yaml.safe_dump(sample_config, f, sort_keys=False, default_flow_style=False)
                elif file_format == 'json':
                    json.dump(sample_config, f, indent=2)
                else:
                    raise ValueError(f"Unsupported config file format: {file_format}")
        except PermissionError:
            raise PermissionError(f"Permission denied creating configuration file: {config_path}")
        except (IOError, OSError) as e:
            raise IOError(f"Error writing configuration file {config_path}: {e}")

        return config_path


def load_config(config_dir: str = None, config_file: str = None) -> SiteConfig:
    """Shortcut for ``SiteSettings(config_dir).load_config(config_file)``."""
    return SiteSettings(config_dir).load_config(config_file)
