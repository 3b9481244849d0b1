"""Tests for proxy parsing and round-robin selection."""

import unittest

from cursor_scraper.errors import ConfigurationError
from cursor_scraper.proxies import parse_proxy_list, select_proxy, validate_proxy


class TestSelectProxy(unittest.TestCase):
    """Verify the per-cycle proxy choice."""

    def test_no_proxies_means_direct(self):
        for cycle_index in range(5):
            self.assertIsNone(select_proxy((), cycle_index))

    def test_round_robin(self):
        """Cycle i should use proxies[i mod N]."""
        proxies = ("http://a:1", "http://b:2", "http://c:3")
        chosen = [select_proxy(proxies, i) for i in range(7)]
        self.assertEqual(
            chosen,
            ["http://a:1", "http://b:2", "http://c:3", "http://a:1", "http://b:2", "http://c:3", "http://a:1"],
        )

    def test_single_proxy_always_chosen(self):
        self.assertEqual(select_proxy(["socks5://x:1080"], 42), "socks5://x:1080")


class TestParseProxyList(unittest.TestCase):
    """Verify parsing of the comma-delimited CLI value."""

    def test_empty_values(self):
        self.assertEqual(parse_proxy_list(None), ())
        self.assertEqual(parse_proxy_list(""), ())

    def test_splits_and_strips(self):
        raw = "http://a:1, http://user:pw@b:2 ,,socks5://c:1080"
        self.assertEqual(
            parse_proxy_list(raw),
            ("http://a:1", "http://user:pw@b:2", "socks5://c:1080"),
        )

    def test_invalid_entry_raises(self):
        with self.assertRaises(ConfigurationError):
            parse_proxy_list("http://a:1,not-a-proxy")


class TestValidateProxy(unittest.TestCase):
    """Verify rejection of malformed proxy URLs."""

    def test_rejects_bad_urls(self):
        for url in ("a:1", "ftp://host:21", "http://", "http://host:notaport", "http://host:0"):
            with self.subTest(url=url):
                with self.assertRaises(ConfigurationError):
                    validate_proxy(url)

    def test_accepts_proxy_without_port(self):
        self.assertEqual(validate_proxy("http://proxy.local"), "http://proxy.local")


if __name__ == "__main__":
    unittest.main()
