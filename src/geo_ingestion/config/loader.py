"""
Configuration Loader - YAML Rule Sets and Pipeline Settings.

Reads the ingestion configuration from YAML, overlays an optional profile
from the ``profiles/`` directory beside the config file, and validates the
result into a frozen IngestionConfig. Rule entries are parsed into their
tagged variants here, once, at startup.

Problems inside a rule list are reported against the rule id rather than
its list index, e.g.
``policy.required_validations[RV-004].thresholds.accuracy: ...``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import pydantic
import yaml

from geo_ingestion.config.models import IngestionConfig

logger = logging.getLogger(__name__)

PROFILE_DIR = "profiles"

RULE_SECTIONS: Tuple[Tuple[str, str], ...] = (
    ("validation", "business_rules"),
    ("policy", "forbidden_actions"),
    ("policy", "required_validations"),
    ("policy", "compliance_rules"),
)


class ConfigError(ValueError):
    """A configuration source could not be turned into an IngestionConfig."""

    def __init__(self, source: str, problems: Sequence[str]) -> None:
        self.source = source
        self.problems = list(problems)
        super().__init__(f"Invalid configuration {source}: " + "; ".join(self.problems))


def merge_profile(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> Dict[str, Any]:
    """Overlay a profile; nested mappings merge, rule lists are replaced wholesale."""
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_profile(current, value)
        else:
            merged[key] = value
    return merged


def _rule_entries(config_dict: Mapping[str, Any], group: str, section: str) -> List[Any]:
    group_dict = config_dict.get(group)
    if not isinstance(group_dict, Mapping):
        return []
    entries = group_dict.get(section)
    return list(entries) if isinstance(entries, list) else []


def duplicate_rule_ids(config_dict: Mapping[str, Any]) -> List[str]:
    """
    Rule ids that appear more than once across all rule sections.

    Violations and audit events are keyed by rule id, so ids must be
    unique over business rules and the whole policy.
    """
    problems: List[str] = []
    first_seen: Dict[str, str] = {}
    for group, section in RULE_SECTIONS:
        for entry in _rule_entries(config_dict, group, section):
            if not isinstance(entry, Mapping) or entry.get("id") is None:
                continue
            rule_id = str(entry["id"])
            where = f"{group}.{section}"
            if rule_id in first_seen:
                problems.append(
                    f"{where}[{rule_id}]: duplicate rule id (first defined in {first_seen[rule_id]})"
                )
            else:
                first_seen[rule_id] = where
    return problems


def describe_location(loc: Tuple[Any, ...], config_dict: Mapping[str, Any]) -> str:
    """Render a pydantic error location, naming rules by id."""
    if len(loc) >= 3 and tuple(loc[:2]) in RULE_SECTIONS and isinstance(loc[2], int):
        group, section, index = loc[0], loc[1], loc[2]
        entries = _rule_entries(config_dict, group, section)
        entry = entries[index] if index < len(entries) else None
        entry = entry if isinstance(entry, Mapping) else {}
        label = entry.get("id", index)
        rest = list(loc[3:])
        # Discriminated-union errors carry the rule kind as an extra step.
        if rest and rest[0] == entry.get("kind"):
            rest = rest[1:]
        return ".".join([f"{group}.{section}[{label}]"] + [str(part) for part in rest])
    return ".".join(str(part) for part in loc) or "root"


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(str(path), [f"malformed YAML: {e}"]) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(str(path), ["top level must be a mapping"])
    return data


class ConfigLoader:
    """Loads and validates ingestion configuration from YAML files."""

    def __init__(self, base_path: Optional[Path] = None) -> None:
        """
        Initialize config loader.

        Args:
            base_path: Base path for relative config paths
        """
        self._base_path = base_path or Path(".")

    def load(
        self,
        config_path: Union[str, Path],
        profile: Optional[str] = None,
    ) -> IngestionConfig:
        """
        Load configuration from a YAML file.

        Args:
            config_path: YAML file, relative to the base path unless absolute
            profile: Name of a YAML file in ``profiles/`` beside the config file

        Returns:
            Validated, frozen IngestionConfig object

        Raises:
            FileNotFoundError: If the config or profile file doesn't exist
            ConfigError: If the YAML is malformed or fails validation
        """
        path = Path(config_path)
        if not path.is_absolute():
            path = self._base_path / path
        config_dict = _read_yaml(path)

        if profile:
            profile_path = path.parent / PROFILE_DIR / f"{profile}.yaml"
            if not profile_path.exists():
                raise FileNotFoundError(f"Profile not found: {profile} ({profile_path})")
            config_dict = merge_profile(config_dict, _read_yaml(profile_path))

        config = self.load_from_dict(config_dict, source=str(path))
        logger.info(
            f"Loaded config {path.name} (profile={profile or 'none'}): "
            f"{len(config.validation.business_rules)} business rules, "
            f"{len(config.policy.rule_ids)} policy rules"
        )
        return config

    def load_from_dict(
        self,
        config_dict: Mapping[str, Any],
        source: str = "<dict>",
    ) -> IngestionConfig:
        """
        Validate an already-parsed configuration mapping.

        Raises:
            ConfigError: Listing every problem, rules named by id
        """
        if not isinstance(config_dict, Mapping):
            raise ConfigError(source, ["top level must be a mapping"])

        problems = duplicate_rule_ids(config_dict)
        if problems:
            raise ConfigError(source, problems)

        try:
            return IngestionConfig.model_validate(config_dict)
        except pydantic.ValidationError as e:
            raise ConfigError(
                source,
                [
                    f"{describe_location(tuple(err['loc']), config_dict)}: {err['msg']}"
                    for err in e.errors()
                ],
            ) from e


def load_config(
    config_path: Union[str, Path],
    profile: Optional[str] = None,
    base_path: Optional[Path] = None,
) -> IngestionConfig:
    """Load and validate a configuration file (see ConfigLoader.load)."""
    return ConfigLoader(base_path=base_path).load(config_path, profile)
