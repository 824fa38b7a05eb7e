"""
Community Decoder — Attach registry labels to the communities on a route.

Standard ("ASN:VALUE") and large ("ASN:DATA1:DATA2") communities resolve
through the same registry; anything it cannot resolve is kept as unknown.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from communities import CommunityNotFoundError, CommunityRegistry
from plugins import CommunityDecoderPlugin

logger = logging.getLogger(__name__)


@dataclass
class DecodedCommunities:
    """Result of labelling the BGP communities on a route."""
    raw_communities: list[str] = field(default_factory=list)
    labels: dict[str, str] = field(default_factory=dict)   # community → label, input order
    unknown: list[str] = field(default_factory=list)


def decode_communities(communities: list[str], registry: CommunityRegistry) -> DecodedCommunities:
    result = DecodedCommunities(raw_communities=list(communities))

    for comm in communities:
        try:
            result.labels[comm] = registry.lookup(comm)
        except CommunityNotFoundError:
            logger.debug("No label for community %s", comm)
            result.unknown.append(comm)

    return result


def run_plugins(
    plugins: list[CommunityDecoderPlugin],
    communities: list[str],
) -> dict[str, dict[str, str]]:
    """Run every plugin over a route's communities, keyed by plugin name."""
    plugin_labels: dict[str, dict[str, str]] = {}
    for plugin in plugins:
        try:
            labels = plugin.decode(communities)
            if labels:
                plugin_labels[plugin.name()] = labels
        except Exception as e:
            logger.warning("Plugin %s failed: %s", plugin.name(), e)
    return plugin_labels
