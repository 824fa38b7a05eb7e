"""Tests for community decoding and the label plugin."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from communities import CommunityRegistry
from community_decoder import decode_communities, run_plugins
from plugins import CommunityDecoderPlugin
from plugins.community_labels import CommunityLabelDecoder


class TestDecode:
    def setup_method(self):
        self.reg = CommunityRegistry.well_known()
        self.reg.set("64512:*", "private use")

    def test_labels_resolved(self):
        result = decode_communities(["65535:666", "65535:1048321"], self.reg)
        assert result.labels == {"65535:666": "blackhole", "65535:1048321": "no export"}
        assert result.unknown == []

    def test_unknown_collected(self):
        result = decode_communities(["7018:2500", "65535:666", "65535:9999"], self.reg)
        assert result.unknown == ["7018:2500", "65535:9999"]
        assert list(result.labels) == ["65535:666"]

    def test_wildcard_labels(self):
        result = decode_communities(["64512:10", "64512:20"], self.reg)
        assert result.labels == {"64512:10": "private use", "64512:20": "private use"}

    def test_large_community(self):
        self.reg.set("9033:65666:1", "do not announce to AMS-IX")
        result = decode_communities(["9033:65666:1"], self.reg)
        assert result.labels["9033:65666:1"] == "do not announce to AMS-IX"

    def test_raw_communities_preserved(self):
        comms = ["65535:0", "1:1"]
        result = decode_communities(comms, self.reg)
        assert result.raw_communities == comms
        assert result.raw_communities is not comms

    def test_empty(self):
        result = decode_communities([], self.reg)
        assert result.labels == {}
        assert result.unknown == []


class BrokenPlugin(CommunityDecoderPlugin):
    def name(self) -> str:
        return "broken"

    def decode(self, communities) -> dict:
        raise RuntimeError("boom")


class TestLabelPlugin:
    def test_name(self):
        assert CommunityLabelDecoder().name() == "community-labels"

    def test_defaults_to_well_known(self):
        labels = CommunityLabelDecoder().decode(["65535:65281", "65535:0", "7018:1"])
        assert labels == {"65535:0": "graceful shutdown"}

    def test_custom_registry(self):
        reg = CommunityRegistry.from_dict({"7018": {"*": "AT&T"}})
        assert CommunityLabelDecoder(reg).decode(["7018:2500"]) == {"7018:2500": "AT&T"}

    def test_run_plugins(self):
        labels = run_plugins([CommunityLabelDecoder()], ["65535:666"])
        assert labels == {"community-labels": {"65535:666": "blackhole"}}

    def test_run_plugins_skips_empty(self):
        assert run_plugins([CommunityLabelDecoder()], ["1:1"]) == {}

    def test_failing_plugin_isolated(self):
        labels = run_plugins([BrokenPlugin(), CommunityLabelDecoder()], ["65535:666"])
        assert labels == {"community-labels": {"65535:666": "blackhole"}}

    def test_describe_single_community(self):
        plugin = CommunityLabelDecoder()
        assert plugin.describe("65535:1048322") == "no advertise"
        assert plugin.describe("7018:1") is None
