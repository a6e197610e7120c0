"""Unit tests for fusionagent.channels (registry and authority table)."""

from dataclasses import FrozenInstanceError

import pytest

from fusionagent.channels.authority import DEFAULT_AUTHORITY_WEIGHTS, AuthorityTable
from fusionagent.channels.registry import (
    ChannelRegistry,
    build_default_registry,
    encode_query,
    search_url,
    wiki_url,
)
from fusionagent.core.models import ChannelDescriptor


@pytest.fixture
def registry():
    return build_default_registry()


def _urls(registry, domain, query):
    return {ch.id: ch.build_url(query) for ch in registry.channels_for(domain)}


@pytest.mark.unit
class TestChannelRegistry:
    """Tests for domain -> channel resolution."""

    def test_known_domains(self, registry):
        assert registry.domains() == [
            "general",
            "flights",
            "deals",
            "sports",
            "research",
            "finance",
        ]
        assert registry.default_domain == "general"

    def test_general_channels_in_order(self, registry):
        ids = [ch.id for ch in registry.channels_for("general")]

        assert ids == ["duckduckgo", "bing", "brave", "wikipedia"]

    @pytest.mark.parametrize(
        "domain,expected",
        [
            ("flights", ["duckduckgo", "google_preview", "skyscanner"]),
            ("deals", ["google_shopping", "slickdeals", "ebay"]),
            ("sports", ["espn", "bbc_sport", "duckduckgo"]),
            ("research", ["arxiv", "semantic", "pubmed"]),
            ("finance", ["yahoo_finance", "marketwatch", "investing"]),
        ],
    )
    def test_domain_channel_ids(self, registry, domain, expected):
        assert [ch.id for ch in registry.channels_for(domain)] == expected

    def test_unknown_domain_falls_back_to_general(self, registry):
        unknown = registry.channels_for("unknown_domain_xyz")
        general = registry.channels_for("general")

        assert [ch.id for ch in unknown] == [ch.id for ch in general]
        assert _urls(registry, "unknown_domain_xyz", "test") == _urls(
            registry, "general", "test"
        )

    def test_contains(self, registry):
        assert "research" in registry
        assert "unknown_domain_xyz" not in registry

    def test_returned_list_does_not_mutate_registry(self, registry):
        channels = registry.channels_for("general")
        channels.clear()

        assert len(registry.channels_for("general")) == 4

    def test_requires_default_domain(self):
        with pytest.raises(ValueError, match="Default domain"):
            ChannelRegistry({"other": []}, default_domain="general")

    def test_custom_registry(self):
        custom = ChannelRegistry(
            {"docs": [ChannelDescriptor("site", search_url("https://d.test/?q={q}"))]},
            default_domain="docs",
        )

        assert [ch.id for ch in custom.channels_for("anything")] == ["site"]

    def test_descriptor_is_frozen(self, registry):
        channel = registry.channels_for("general")[0]

        with pytest.raises(FrozenInstanceError):
            channel.id = "other"


@pytest.mark.unit
class TestUrlBuilders:
    """Tests for channel URL construction."""

    def test_general_urls(self, registry):
        urls = _urls(registry, "general", "rust lang")

        assert urls["duckduckgo"] == "https://html.duckduckgo.com/html/?q=rust%20lang"
        assert urls["bing"] == "https://www.bing.com/search?q=rust%20lang"
        assert urls["brave"] == "https://search.brave.com/search?q=rust%20lang"
        assert urls["wikipedia"] == "https://en.wikipedia.org/wiki/rust_lang"

    def test_wikipedia_collapses_whitespace_runs(self):
        build = wiki_url("https://en.wikipedia.org/wiki/{q}")

        assert build("Alan   Turing") == "https://en.wikipedia.org/wiki/Alan_Turing"

    def test_flights_augmentation(self, registry):
        urls = _urls(registry, "flights", "paris")

        assert urls["duckduckgo"].endswith("?q=paris%20flights")
        assert urls["google_preview"].endswith("?q=paris%20flights")
        assert urls["skyscanner"].endswith("?keywords=paris")

    def test_deals_augmentation(self, registry):
        urls = _urls(registry, "deals", "tv")

        assert urls["google_shopping"].endswith("?q=tv%20best%20price")
        assert urls["ebay"] == "https://www.ebay.com/sch/i.html?_nkw=tv"

    def test_sports_augmentation(self, registry):
        urls = _urls(registry, "sports", "nba")

        assert urls["duckduckgo"].endswith("?q=nba%20sports")

    def test_research_url_keeps_trailing_params(self, registry):
        urls = _urls(registry, "research", "graph neural networks")

        assert urls["arxiv"] == (
            "https://arxiv.org/search/?query=graph%20neural%20networks&searchtype=all"
        )

    def test_encode_query_reserved_characters(self):
        assert encode_query("c++ & rust/go?") == "c%2B%2B%20%26%20rust%2Fgo%3F"

    def test_encode_query_keeps_uri_component_safe_set(self):
        assert encode_query("it's (ok)!*~-_.") == "it's%20(ok)!*~-_."

    def test_encode_query_unicode(self):
        assert encode_query("café") == "caf%C3%A9"

    def test_builders_are_pure(self, registry):
        channel = registry.channels_for("general")[0]

        assert channel.build_url("x") == channel.build_url("x")


@pytest.mark.unit
class TestAuthorityTable:
    """Tests for channel trust weights."""

    @pytest.mark.parametrize(
        "channel_id,expected",
        [
            ("arxiv", 0.95),
            ("pubmed", 0.95),
            ("semantic", 0.9),
            ("wikipedia", 0.9),
            ("yahoo_finance", 0.8),
        ],
    )
    def test_known_weights(self, channel_id, expected):
        assert AuthorityTable().authority_of(channel_id) == expected

    @pytest.mark.parametrize("channel_id", ["duckduckgo", "bing", "brave", "nope"])
    def test_default_weight(self, channel_id):
        assert AuthorityTable().authority_of(channel_id) == 0.5

    def test_with_overrides(self):
        table = AuthorityTable.with_overrides({"bing": 0.7, "arxiv": 0.5})

        assert table.authority_of("bing") == 0.7
        assert table.authority_of("arxiv") == 0.5
        assert table.authority_of("pubmed") == 0.95

    def test_overrides_do_not_touch_defaults(self):
        AuthorityTable.with_overrides({"bing": 0.7})

        assert "bing" not in DEFAULT_AUTHORITY_WEIGHTS
        assert AuthorityTable().authority_of("bing") == 0.5

    def test_custom_default(self):
        assert AuthorityTable({}, default=0.1).authority_of("arxiv") == 0.1

    @pytest.mark.parametrize("bad", [-0.1, 1.5])
    def test_rejects_out_of_range_weight(self, bad):
        with pytest.raises(ValueError, match=r"\[0, 1\]"):
            AuthorityTable({"x": bad})

    def test_rejects_out_of_range_default(self):
        with pytest.raises(ValueError):
            AuthorityTable(default=2.0)

    def test_as_dict_is_a_copy(self):
        table = AuthorityTable()
        weights = table.as_dict()
        weights["arxiv"] = 0.0

        assert table.authority_of("arxiv") == 0.95
