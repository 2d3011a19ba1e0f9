"""
Tests for endpoint and address helpers.
"""

from delegatehub.normalize import adjust_url, is_address, normalize_address


class TestAdjustUrl:
    def test_rewrites_hosted_service_url(self):
        url = "https://thegraph.com/hosted-service/subgraph/ianlapham/governance-tracking"
        assert adjust_url(url) == "https://api.thegraph.com/subgraphs/name/ianlapham/governance-tracking"

    def test_keeps_other_urls(self):
        urls = [
            "https://api.thegraph.com/subgraphs/name/ianlapham/governance-tracking",
            "https://gateway.thegraph.com/api/key/subgraphs/id/abc123",
            "http://localhost:8000/subgraphs/name/local/gov",
        ]
        for url in urls:
            assert adjust_url(url) == url


class TestAddresses:
    def test_is_address(self):
        assert is_address("0x1f9840a85d5aF5bf1D1762F925BDADdC4201F984")
        assert not is_address("0x1f9840a85d5aF5bf1D1762F925BDADdC4201F98")
        assert not is_address("vitalik.eth")
        assert not is_address(None)

    def test_normalize_address(self):
        assert normalize_address(" 0xABCDEF ") == "0xabcdef"
