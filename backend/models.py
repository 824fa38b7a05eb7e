"""
Data models for community label configuration.

Custom labels are declared either flat, keyed by the full community path:

    communities:
      "64512:*": private use

or nested, one mapping level per path segment:

    communities:
      "6695":
        "*": DE-CIX route server
"""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, Field, field_validator

from communities import DELIMITER

# Segment → label, or segment → nested tree
CommunityTree = dict[str, Union[str, dict]]


class CommunityLabel(BaseModel):
    community: str
    label: str


def _check_tree(tree: dict, prefix: str = "") -> None:
    for key, value in tree.items():
        if not isinstance(key, str):
            # PyYAML reads an unquoted 64512:10 as a base-60 integer
            raise ValueError(
                f"community key {prefix}{key!r} is not a string; quote it in the YAML file"
            )
        if isinstance(value, dict):
            _check_tree(value, f"{prefix}{key}{DELIMITER}")
        elif not isinstance(value, str) or not value.strip():
            raise ValueError(f"label for {prefix}{key} must be a non-empty string")


class CommunitiesConfig(BaseModel):
    include_well_known: bool = True
    communities: CommunityTree = Field(default_factory=dict)

    @field_validator("communities", mode="before")
    @classmethod
    def _validate_tree(cls, value):
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError("communities must be a mapping")
        _check_tree(value)
        return value

    def flat_entries(self) -> list[CommunityLabel]:
        """Flatten nested declarations into (community, label) entries."""
        entries: list[CommunityLabel] = []

        def walk(tree: dict, prefix: str) -> None:
            for key, value in tree.items():
                path = f"{prefix}{key}"
                if isinstance(value, dict):
                    walk(value, f"{path}{DELIMITER}")
                else:
                    entries.append(CommunityLabel(community=path, label=value))

        walk(self.communities, "")
        return entries
