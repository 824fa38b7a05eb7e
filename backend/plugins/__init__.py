"""Plugins — label sources consulted when decoding a route's communities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional


class CommunityDecoderPlugin(ABC):
    """Turns a route's communities into community → label pairs."""

    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def decode(self, communities: list[str]) -> dict[str, str]:
        """Labels for the communities this plugin recognizes; the rest are left out."""
        ...

    def describe(self, community: str) -> Optional[str]:
        return self.decode([community]).get(community)
