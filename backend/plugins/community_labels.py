"""
Community Label Plugin — Labels route communities from a CommunityRegistry.

Defaults to the IANA well-known table; pass a registry built from a
community config file to add operator-specific labels.
"""

from __future__ import annotations

from typing import Optional

from communities import CommunityRegistry
from community_decoder import decode_communities
from plugins import CommunityDecoderPlugin


class CommunityLabelDecoder(CommunityDecoderPlugin):
    """Map each resolvable community to its registry label."""

    def __init__(self, registry: Optional[CommunityRegistry] = None):
        self.registry = registry if registry is not None else CommunityRegistry.well_known()

    def name(self) -> str:
        return "community-labels"

    def decode(self, communities: list[str]) -> dict[str, str]:
        return decode_communities(communities, self.registry).labels
