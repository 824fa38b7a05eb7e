"""Load custom community labels from YAML and build a seeded registry."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from communities import CommunityRegistry
from models import CommunitiesConfig

logger = logging.getLogger(__name__)


class CommunityConfigError(ValueError):
    """A community label file could not be parsed or validated."""


def load_communities_config(path: str | Path) -> CommunitiesConfig:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise CommunityConfigError(f"{path}: not valid UTF-8: {exc}") from exc

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise CommunityConfigError(f"{path}: invalid YAML: {exc}") from exc

    if not raw:
        return CommunitiesConfig()
    if not isinstance(raw, dict):
        raise CommunityConfigError(f"{path}: top level must be a mapping")

    try:
        config = CommunitiesConfig.model_validate(raw)
    except ValidationError as exc:
        raise CommunityConfigError(f"{path}: {exc}") from exc

    logger.info("Loaded %d community labels from %s", len(config.flat_entries()), path)
    return config


def build_registry(config: CommunitiesConfig) -> CommunityRegistry:
    """Seed with the well-known table (unless disabled), then apply custom labels."""
    registry = CommunityRegistry.well_known() if config.include_well_known else CommunityRegistry()
    for entry in config.flat_entries():
        registry.set(entry.community, entry.label)
    return registry


def load_registry(path: str | Path) -> CommunityRegistry:
    return build_registry(load_communities_config(path))
