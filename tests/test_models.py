"""Tests for configuration and outcome data models."""

import unittest

from cursor_scraper.errors import ConfigurationError, HttpStatusError
from cursor_scraper.models import CycleOutcome, ScraperConfig


class TestScraperConfig(unittest.TestCase):
    """Verify ScraperConfig defaults, validation and immutability."""

    def test_defaults(self):
        """Only access_key is required; the rest mirror the CLI defaults."""
        config = ScraperConfig(access_key="key")
        self.assertEqual(config.url, "https://api.unsplash.com/photos/")
        self.assertEqual(config.hosts, "http://localhost:8000")
        self.assertEqual(config.per_page, 30)
        self.assertEqual(config.scrape_count, 100)
        self.assertEqual(config.proxies, ())
        self.assertFalse(config.insecure_tls)
        self.assertFalse(config.require_writeback_ok)
        self.assertIsNone(config.max_interval_ms)
        self.assertEqual(config.timeout_secs, 15.0)

    def test_config_is_immutable(self):
        """Frozen dataclass should raise on attribute assignment."""
        config = ScraperConfig(access_key="key")
        with self.assertRaises(AttributeError):
            config.per_page = 10

    def test_auth_header(self):
        config = ScraperConfig(access_key="abc123")
        self.assertEqual(config.auth_header, "Client-ID abc123")

    def test_trailing_slash_stripped_from_hosts(self):
        config = ScraperConfig(access_key="key", hosts="http://coord:8000/")
        self.assertEqual(config.hosts, "http://coord:8000")

    def test_proxy_list_normalised_to_tuple(self):
        config = ScraperConfig(access_key="key", proxies=["http://p1:8080", " http://p2:8080 "])
        self.assertEqual(config.proxies, ("http://p1:8080", "http://p2:8080"))

    def test_invalid_values_raise(self):
        """Each out-of-range field should raise ConfigurationError."""
        bad = [
            dict(access_key=""),
            dict(access_key="key", per_page=0),
            dict(access_key="key", scrape_count=-1),
            dict(access_key="key", interval_ms=-5),
            dict(access_key="key", backoff_step_ms=-1),
            dict(access_key="key", interval_ms=5000, max_interval_ms=1000),
            dict(access_key="key", timeout_secs=0),
            dict(access_key="key", proxies=("ftp://p1:21",)),
            dict(access_key="key", hosts="localhost:8000"),
            dict(access_key="key", hosts="http://"),
            dict(access_key="key", url="api.unsplash.com/photos/"),
            dict(access_key="key", url="ftp://photos.test/"),
        ]
        for kwargs in bad:
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(ConfigurationError):
                    ScraperConfig(**kwargs)

    def test_base_urls_need_scheme_and_host(self):
        """Hosts without a scheme are rejected up front, not per request."""
        with self.assertRaises(ConfigurationError) as ctx:
            ScraperConfig(access_key="key", hosts="localhost:8000")
        self.assertIn("hosts", str(ctx.exception))
        config = ScraperConfig(access_key="key", url="HTTPS://photos.test/x", hosts="http://127.0.0.1:9000")
        self.assertEqual(config.hosts, "http://127.0.0.1:9000")

    def test_zero_scrape_count_allowed(self):
        config = ScraperConfig(access_key="key", scrape_count=0)
        self.assertEqual(config.scrape_count, 0)


class TestCycleOutcome(unittest.TestCase):
    """Verify CycleOutcome exposes the error class name."""

    def test_success_has_no_error_type(self):
        outcome = CycleOutcome(cycle_index=0, success=True, page=3)
        self.assertIsNone(outcome.error_type)

    def test_failure_reports_error_class(self):
        outcome = CycleOutcome(cycle_index=1, success=False, stage="fetch", error=HttpStatusError(500))
        self.assertEqual(outcome.error_type, "HttpStatusError")
        self.assertEqual(outcome.error.code, 500)


if __name__ == "__main__":
    unittest.main()
