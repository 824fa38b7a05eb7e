"""
Community Registry — Resolve BGP communities to human-readable labels.

Two registries over the same data:
- BgpCommunities: flat mapping, "ASN:VALUE" → label. Merging never mutates.
- CommunityRegistry: tree keyed one path segment per level. Leaves are
  labels, interior nodes are nested registries. A "*" key at any level
  matches a segment that has no exact key there.

Paths are split on ":" and segments are opaque strings, so large
communities ("ASN:x:y") and non-numeric segments work the same way.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, Optional

from well_known import WELL_KNOWN_ASN, WELL_KNOWN_COMMUNITIES

logger = logging.getLogger(__name__)

DELIMITER = ":"
WILDCARD = "*"


class CommunityNotFoundError(LookupError):
    """No label is reachable for a community path."""

    def __init__(self, community: str):
        self.community = community
        super().__init__(f"community not found: {community}")


def split_community(community: str) -> list[str]:
    return community.split(DELIMITER)


# --- Flat registry ---

class BgpCommunities(dict):
    """Flat community → label mapping."""

    @classmethod
    def well_known(cls) -> BgpCommunities:
        return cls({
            f"{WELL_KNOWN_ASN}{DELIMITER}{value}": label
            for value, label in WELL_KNOWN_COMMUNITIES.items()
        })

    def merge(self, other: dict[str, str]) -> BgpCommunities:
        """Return a new registry with `other` layered over this one."""
        merged = type(self)(self)
        merged.update(other)
        return merged


# --- Hierarchical registry ---

class NodeKind(str, Enum):
    LABEL = "label"
    REGISTRY = "registry"


@dataclass
class RegistryNode:
    """A tree node: either a label leaf or a nested registry, never both."""
    kind: NodeKind
    label: Optional[str] = None
    registry: Optional["CommunityRegistry"] = None

    def __post_init__(self):
        if self.kind is NodeKind.LABEL:
            valid = self.label is not None and self.registry is None
        else:
            valid = self.registry is not None and self.label is None
        if not valid:
            raise ValueError(f"{self.kind.value} node must hold only a {self.kind.value}")

    @classmethod
    def leaf(cls, label: str) -> RegistryNode:
        return cls(kind=NodeKind.LABEL, label=label)

    @classmethod
    def branch(cls, registry: CommunityRegistry) -> RegistryNode:
        return cls(kind=NodeKind.REGISTRY, registry=registry)

    @property
    def is_leaf(self) -> bool:
        return self.kind is NodeKind.LABEL


# One traversal step: given the registry at the current level and a segment,
# return the node to continue from, or None to stop.
StepFn = Callable[["CommunityRegistry", str], Optional[RegistryNode]]


class CommunityRegistry:
    """
    Tree-shaped community registry.

    Not synchronized. Callers sharing one instance across threads must
    serialize `set` themselves, or build a new registry with `merge` and
    swap it in.
    """

    def __init__(self, nodes: dict[str, RegistryNode] | None = None):
        self._nodes: dict[str, RegistryNode] = nodes if nodes is not None else {}

    @classmethod
    def well_known(cls) -> CommunityRegistry:
        values = cls({value: RegistryNode.leaf(label) for value, label in WELL_KNOWN_COMMUNITIES.items()})
        return cls({WELL_KNOWN_ASN: RegistryNode.branch(values)})

    @classmethod
    def from_dict(cls, data: dict) -> CommunityRegistry:
        """Build from nested dicts: str values are labels, dict values are sub-registries."""
        nodes: dict[str, RegistryNode] = {}
        for key, value in data.items():
            key = str(key)
            if DELIMITER in key:
                raise ValueError(f"segment {key!r} contains {DELIMITER!r} and could never be looked up")
            if isinstance(value, dict):
                nodes[key] = RegistryNode.branch(cls.from_dict(value))
            else:
                nodes[key] = RegistryNode.leaf(str(value))
        return cls(nodes)

    @classmethod
    def from_flat(cls, communities: dict[str, str]) -> CommunityRegistry:
        registry = cls()
        for community, label in communities.items():
            registry.set(community, label)
        return registry

    def to_dict(self) -> dict:
        return {
            key: node.label if node.is_leaf else node.registry.to_dict()
            for key, node in self._nodes.items()
        }

    # Traversal

    def _walk(self, segments: list[str], step: StepFn) -> RegistryNode:
        """
        Walk segments from the root, one level per segment.

        Stops early when the held node is a leaf or `step` gives up, and
        returns the last node reached. No backtracking.
        """
        node = RegistryNode.branch(self)
        for segment in segments:
            if node.is_leaf:
                break
            nxt = step(node.registry, segment)
            if nxt is None:
                break
            node = nxt
        return node

    @staticmethod
    def _resolve(registry: CommunityRegistry, segment: str) -> Optional[RegistryNode]:
        # Exact key first, wildcard only when the exact key is absent
        node = registry._nodes.get(segment)
        if node is None:
            node = registry._nodes.get(WILDCARD)
        return node

    @staticmethod
    def _descend_or_create(registry: CommunityRegistry, segment: str) -> RegistryNode:
        node = registry._nodes.get(segment)
        if node is None or node.is_leaf:
            node = RegistryNode.branch(CommunityRegistry())
            registry._nodes[segment] = node
        return node

    # Queries

    def lookup(self, community: str) -> str:
        node = self._walk(split_community(community), self._resolve)
        if not node.is_leaf:
            raise CommunityNotFoundError(community)
        return node.label

    def get(self, community: str, default: Optional[str] = None) -> Optional[str]:
        try:
            return self.lookup(community)
        except CommunityNotFoundError:
            return default

    def __contains__(self, community: object) -> bool:
        if not isinstance(community, str):
            return False
        return self._walk(split_community(community), self._resolve).is_leaf

    def items(self) -> Iterator[tuple[str, str]]:
        """Yield (community, label) for every leaf, depth first."""
        for key, node in self._nodes.items():
            if node.is_leaf:
                yield key, node.label
            else:
                for sub_path, label in node.registry.items():
                    yield f"{key}{DELIMITER}{sub_path}", label

    def __len__(self) -> int:
        return sum(1 for _ in self.items())

    def __repr__(self) -> str:
        return f"CommunityRegistry({self.to_dict()!r})"

    # Mutation

    def set(self, community: str, label: str) -> None:
        """Place `label` at `community`, creating interior levels as needed."""
        segments = split_community(community)
        parent = self._walk(segments[:-1], self._descend_or_create)
        parent.registry._nodes[segments[-1]] = RegistryNode.leaf(label)
        logger.debug("Registered community %s → %s", community, label)

    def copy(self) -> CommunityRegistry:
        return type(self)({
            key: RegistryNode.leaf(node.label) if node.is_leaf else RegistryNode.branch(node.registry.copy())
            for key, node in self._nodes.items()
        })

    def _overlay(self, other: CommunityRegistry) -> None:
        for key, node in other._nodes.items():
            mine = self._nodes.get(key)
            if node.is_leaf:
                self._nodes[key] = RegistryNode.leaf(node.label)
            elif mine is not None and not mine.is_leaf:
                mine.registry._overlay(node.registry)
            else:
                self._nodes[key] = RegistryNode.branch(node.registry.copy())

    def merge(self, other: CommunityRegistry) -> CommunityRegistry:
        """
        Return a new registry with `other` overlaid on a copy of this one.

        Where both sides hold a sub-registry for a key the two are merged
        level by level; anywhere else the node from `other` wins.
        """
        merged = self.copy()
        merged._overlay(other)
        return merged
