"""
Configuration management for the strict-equality engine.

This module provides configuration loading with sensible defaults for
enabled rules, severities and per-rule settings.
"""

import copy
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import yaml

from .policies import DEFAULT_POLICY_NAME, list_policies

logger = logging.getLogger(__name__)

CONFIG_NAMES = [".stricteq.yml", ".stricteq.yaml", "stricteq.yml", "stricteq.yaml"]

_DEFAULTS: Dict[str, Any] = {
    "enabled_rules": ["*"],
    "max_findings_per_file": 200,
    "rule_severities": {
        "lang.strict_equality": "warn",
    },
    "rule_configs": {
        "lang.strict_equality": {
            # Types read from annotations/docblocks are not trusted for rewrites
            "allow_annotated_types": False,
            "alter_code": True,
            "policy": "lattice",
        },
    },
}


@dataclass
class EngineConfig:
    """Configuration for the strict-equality engine."""

    # Rule selection (fnmatch patterns over rule ids)
    enabled_rules: List[str] = None
    max_findings_per_file: int = 200

    # Rule severity overrides (rule_id -> severity)
    rule_severities: Dict[str, str] = None

    # Rule-specific configuration
    rule_configs: Dict[str, Dict[str, Any]] = None

    def __post_init__(self):
        if self.enabled_rules is None:
            self.enabled_rules = ["*"]
        if self.rule_severities is None:
            self.rule_severities = {}
        if self.rule_configs is None:
            self.rule_configs = {}


def _merge(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if key == "rule_severities" and isinstance(value, dict):
            merged[key].update(value)
        elif key == "rule_configs" and isinstance(value, dict):
            for rule_id, rule_config in value.items():
                merged[key].setdefault(rule_id, {}).update(rule_config or {})
        else:
            merged[key] = value
    return merged


def _validate(merged: Dict[str, Any], config_path: str) -> Dict[str, Any]:
    """Replace invalid values with their defaults, logging each replacement."""
    limit = merged["max_findings_per_file"]
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        logger.warning("Invalid max_findings_per_file %r in %s; using %d",
                       limit, config_path, _DEFAULTS["max_findings_per_file"])
        merged["max_findings_per_file"] = _DEFAULTS["max_findings_per_file"]

    for key in ("rule_severities", "rule_configs"):
        if not isinstance(merged[key], dict):
            raise ValueError(f"{key} must be a mapping")

    for rule_id, rule_config in merged["rule_configs"].items():
        if not isinstance(rule_config, dict):
            raise ValueError(f"rule_configs.{rule_id} must be a mapping")
        name = rule_config.get("policy")
        if name is not None and name not in list_policies():
            logger.warning("Unknown policy %r for %s in %s; using '%s'",
                           name, rule_id, config_path, DEFAULT_POLICY_NAME)
            rule_config["policy"] = DEFAULT_POLICY_NAME

    return merged


def load_config(config_path: Optional[str] = None) -> EngineConfig:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Path to config file (YAML). If None, uses defaults.

    Returns:
        EngineConfig instance
    """
    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                file_config = yaml.safe_load(f) or {}
            if not isinstance(file_config, dict):
                raise ValueError("top-level YAML value must be a mapping")

            unknown = set(file_config) - set(_DEFAULTS)
            if unknown:
                logger.warning("Ignoring unknown config keys in %s: %s",
                               config_path, ", ".join(sorted(unknown)))
                file_config = {k: v for k, v in file_config.items() if k in _DEFAULTS}

            return EngineConfig(**_validate(_merge(_DEFAULTS, file_config), config_path))

        except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
            logger.warning("Failed to load config from %s: %s; using default configuration",
                           config_path, e)

    return EngineConfig(**copy.deepcopy(_DEFAULTS))


def get_default_config() -> EngineConfig:
    """Get default configuration without loading from file."""
    return load_config(None)


def save_config(config: EngineConfig, config_path: str) -> None:
    """
    Save configuration to file.

    Args:
        config: EngineConfig to save
        config_path: Path where to save the config
    """
    config_dict = {
        "enabled_rules": config.enabled_rules,
        "max_findings_per_file": config.max_findings_per_file,
        "rule_severities": config.rule_severities,
        "rule_configs": config.rule_configs,
    }

    directory = os.path.dirname(config_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(config_path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(config_dict, f, default_flow_style=False, indent=2)


def find_config_file(start_path: str = ".") -> Optional[str]:
    """
    Find configuration file by walking up the directory tree.

    Looks for the names in CONFIG_NAMES, in order, in each directory.

    Args:
        start_path: Directory to start searching from

    Returns:
        Path to config file or None if not found
    """
    current_path = os.path.abspath(start_path)

    while True:
        for config_name in CONFIG_NAMES:
            config_path = os.path.join(current_path, config_name)
            if os.path.exists(config_path):
                return config_path

        parent_path = os.path.dirname(current_path)
        if parent_path == current_path:
            # Reached the root directory
            break
        current_path = parent_path

    return None


def get_rule_severity(rule_id: str, config: EngineConfig, default_severity: str = "warn") -> str:
    """Get the configured severity for a rule, falling back to default."""
    if config.rule_severities and rule_id in config.rule_severities:
        return config.rule_severities[rule_id]
    return default_severity


def get_rule_config(rule_id: str, config: EngineConfig) -> Dict[str, Any]:
    """Get a copy of the settings configured for one rule."""
    return dict(config.rule_configs.get(rule_id, {}))
