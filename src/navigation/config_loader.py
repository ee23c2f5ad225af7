"""YAML configuration loading and validation.

This module handles loading and saving the sidebar configuration. The
configuration names the GitHub repository that stores the content and the
layout of that repository (content root, order document, trash directory).
"""

import os
from typing import Any, Dict, List

import yaml

from .errors import ConfigError, FilesystemError
from .models import NavConfig
from .slugs import is_valid_path, is_valid_slug


class ConfigLoader:
    """Handles configuration file loading, validation, and saving.

    Configuration file structure:
        repository:
          owner: "acme"
          repo: "design-docs"
          branch: "main"
        content_root: "content"
        order_file: "sidebar-config.json"
        trash_dir: "trash"
        placeholder_file: ".gitkeep"
        preferred_root_order: ["foundations", "components"]
        max_retries: 3
        request_timeout: 30

    The repository owner and name may be left out and supplied through the
    GITHUB_OWNER and GITHUB_REPO environment variables instead.
    """

    # Required fields of the repository section
    REQUIRED_REPOSITORY_FIELDS = {'owner', 'repo'}

    # Default values for optional fields
    DEFAULTS = {
        'branch': 'main',
        'content_root': 'content',
        'order_file': 'sidebar-config.json',
        'trash_dir': 'trash',
        'placeholder_file': '.gitkeep',
        'max_retries': 3,
        'request_timeout': 30,
    }

    @classmethod
    def load(cls, config_path: str) -> NavConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            NavConfig object with parsed configuration

        Raises:
            FilesystemError: If file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise FilesystemError(
                config_path,
                'read',
                'Configuration file not found'
            )
        except PermissionError:
            raise FilesystemError(
                config_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'read',
                str(e)
            )

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        if config_dict is None:
            raise ConfigError("Configuration file is empty")

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def save(cls, config_path: str, nav_config: NavConfig) -> None:
        """Save configuration to a YAML file.

        Args:
            config_path: Path to the YAML configuration file
            nav_config: NavConfig object to save

        Raises:
            FilesystemError: If file cannot be written
        """
        config_dict: Dict[str, Any] = {
            'repository': {
                'owner': nav_config.owner,
                'repo': nav_config.repo,
                'branch': nav_config.branch,
            },
            'content_root': nav_config.content_root,
            'order_file': nav_config.order_file,
            'trash_dir': nav_config.trash_dir,
            'placeholder_file': nav_config.placeholder_file,
        }
        # Only include the preference list when one is set
        if nav_config.preferred_root_order:
            config_dict['preferred_root_order'] = list(nav_config.preferred_root_order)
        config_dict['max_retries'] = nav_config.max_retries
        config_dict['request_timeout'] = nav_config.request_timeout

        yaml_str = yaml.safe_dump(
            config_dict,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        config_dir = os.path.dirname(config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except OSError as e:
                raise FilesystemError(
                    config_dir,
                    'create_directory',
                    str(e)
                )

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise FilesystemError(
                config_path,
                'write',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'write',
                str(e)
            )

    @classmethod
    def parse(cls, config_dict: Dict[str, Any]) -> NavConfig:
        """Validate an in-memory configuration dictionary (same shape as the file)."""
        return cls._parse_config(config_dict)

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> NavConfig:
        """Parse and validate configuration dictionary.

        Args:
            config_dict: Raw configuration dictionary from YAML

        Returns:
            Validated NavConfig object

        Raises:
            ConfigError: If configuration is invalid
        """
        repository = config_dict.get('repository') or {}
        if not isinstance(repository, dict):
            raise ConfigError(
                "Field 'repository' must be a dictionary",
                'repository'
            )

        # Environment fills in what the file leaves out
        repository = dict(repository)
        repository.setdefault('owner', os.getenv('GITHUB_OWNER'))
        repository.setdefault('repo', os.getenv('GITHUB_REPO'))

        missing_fields = {
            name for name in cls.REQUIRED_REPOSITORY_FIELDS
            if not repository.get(name)
        }
        if missing_fields:
            raise ConfigError(
                f"Missing required fields: {', '.join(sorted(missing_fields))}",
                'repository'
            )

        owner = str(repository['owner']).strip()
        repo = str(repository['repo']).strip()
        branch = str(repository.get('branch') or cls.DEFAULTS['branch']).strip()
        if not branch:
            raise ConfigError("Field 'branch' cannot be empty", 'repository.branch')

        content_root = cls._read_repo_path(config_dict, 'content_root')
        order_file = cls._read_repo_path(config_dict, 'order_file')
        placeholder_file = str(config_dict.get('placeholder_file', cls.DEFAULTS['placeholder_file'])).strip()
        if not placeholder_file or '/' in placeholder_file:
            raise ConfigError(
                "Field 'placeholder_file' must be a plain file name",
                'placeholder_file'
            )

        trash_dir = str(config_dict.get('trash_dir', cls.DEFAULTS['trash_dir'])).strip()
        if not is_valid_slug(trash_dir):
            raise ConfigError(
                f"Field 'trash_dir' must be a single slug, got '{trash_dir}'",
                'trash_dir'
            )

        preferred_root_order = cls._read_preferred_root_order(config_dict)

        try:
            max_retries = int(config_dict.get('max_retries', cls.DEFAULTS['max_retries']))
            request_timeout = int(config_dict.get('request_timeout', cls.DEFAULTS['request_timeout']))
        except (ValueError, TypeError) as e:
            raise ConfigError(
                f"Invalid field type for optional field: {str(e)}"
            )

        if max_retries < 0:
            raise ConfigError(
                f"Field 'max_retries' cannot be negative, got {max_retries}",
                'max_retries'
            )
        if request_timeout < 1:
            raise ConfigError(
                f"Field 'request_timeout' must be at least 1, got {request_timeout}",
                'request_timeout'
            )

        return NavConfig(
            owner=owner,
            repo=repo,
            branch=branch,
            content_root=content_root,
            order_file=order_file,
            trash_dir=trash_dir,
            placeholder_file=placeholder_file,
            preferred_root_order=preferred_root_order,
            max_retries=max_retries,
            request_timeout=request_timeout
        )

    @classmethod
    def _read_repo_path(cls, config_dict: Dict[str, Any], name: str) -> str:
        value = str(config_dict.get(name, cls.DEFAULTS[name])).strip().strip('/')
        segments = value.split('/')
        if not value or any(segment in ('', '.', '..') for segment in segments):
            raise ConfigError(
                f"Field '{name}' must be a relative repository path, got '{value}'",
                name
            )
        return value

    @classmethod
    def _read_preferred_root_order(cls, config_dict: Dict[str, Any]) -> List[str]:
        raw = config_dict.get('preferred_root_order')
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise ConfigError(
                "Field 'preferred_root_order' must be a list",
                'preferred_root_order'
            )
        names = [str(name).strip() for name in raw]
        for i, name in enumerate(names):
            if not is_valid_path(name) or '/' in name:
                raise ConfigError(
                    f"Entry {i} of 'preferred_root_order' must be a root folder slug, got '{name}'",
                    f'preferred_root_order[{i}]'
                )
        return names
