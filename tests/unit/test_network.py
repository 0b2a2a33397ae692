"""Tests for network to base URL resolution."""

import httpx
import pytest

from koios_client.errors import InvalidBasePathError
from koios_client.network import BASE_URLS, Network, parse_base_path, resolve_base_url

EXPECTED_URLS = {
    Network.MAINNET: "https://api.koios.rest/api/v1",
    Network.GUILD: "https://guild.koios.rest/api/v1",
    Network.PREVIEW: "https://preview.koios.rest/api/v1",
    Network.PREPROD: "https://preprod.koios.rest/api/v1",
    Network.SANCHO: "https://sancho.koios.rest/api/v1",
}


class TestResolveBaseUrl:
    """Test the network table."""

    @pytest.mark.unit
    @pytest.mark.parametrize("network", list(Network))
    def test_every_network_has_its_documented_url(self, network):
        url = resolve_base_url(network)

        assert isinstance(url, httpx.URL)
        assert str(url) == EXPECTED_URLS[network]

    @pytest.mark.unit
    def test_table_covers_every_network(self):
        assert set(BASE_URLS) == set(Network)

    @pytest.mark.unit
    def test_urls_are_distinct(self):
        assert len(set(BASE_URLS.values())) == len(Network)

    @pytest.mark.unit
    def test_accepts_string_value(self):
        assert str(resolve_base_url("preview")) == "https://preview.koios.rest/api/v1"

    @pytest.mark.unit
    def test_network_url_method(self):
        assert Network.GUILD.url() == resolve_base_url(Network.GUILD)

    @pytest.mark.unit
    def test_unknown_network_raises(self):
        with pytest.raises(InvalidBasePathError) as exc_info:
            resolve_base_url("testnet")

        assert "testnet" in str(exc_info.value)

    @pytest.mark.unit
    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            BASE_URLS[Network.MAINNET] = "https://example.com"  # type: ignore[index]

    @pytest.mark.unit
    def test_str_is_value(self):
        assert str(Network.PREPROD) == "preprod"


class TestParseBasePath:
    """Test base path override parsing."""

    @pytest.mark.unit
    def test_absolute_url_is_kept_exactly(self):
        url = parse_base_path("https://custom.example/api/v1")

        assert str(url) == "https://custom.example/api/v1"

    @pytest.mark.unit
    def test_http_is_allowed(self):
        assert parse_base_path("http://localhost:8053/api/v1").port == 8053

    @pytest.mark.unit
    def test_accepts_parsed_url(self):
        url = httpx.URL("https://custom.example/api/v1")

        assert parse_base_path(url) == url

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value",
        ["not a url", "", "/api/v1", "api.koios.rest/api/v1", "ftp://api.koios.rest/api/v1", "https://"],
    )
    def test_rejects_non_absolute_urls(self, value):
        with pytest.raises(InvalidBasePathError) as exc_info:
            parse_base_path(value)

        assert "Invalid base path" in str(exc_info.value)

    @pytest.mark.unit
    def test_rejects_non_string(self):
        with pytest.raises(InvalidBasePathError):
            parse_base_path(42)  # type: ignore[arg-type]
