"""Tests for http_client module."""

import unittest

from vsm_publisher.http_client import REQUEST_TIMEOUT, USER_AGENT, get_default_headers


class TestUserAgent(unittest.TestCase):
    """Tests for USER_AGENT constant."""

    def test_user_agent_format(self):
        """Test USER_AGENT has expected format."""
        parts = USER_AGENT.split("/")
        self.assertEqual(len(parts), 2)
        self.assertEqual(parts[0], "vsm-publisher")
        self.assertTrue(len(parts[1]) > 0)


class TestGetDefaultHeaders(unittest.TestCase):
    """Tests for get_default_headers function."""

    def test_default_headers_minimal(self):
        """Test get_default_headers with no arguments."""
        headers = get_default_headers()
        self.assertEqual(headers, {"User-Agent": USER_AGENT})

    def test_bearer_token(self):
        """Test get_default_headers with a bearer token."""
        headers = get_default_headers(token="test-token-123")
        self.assertEqual(headers["Authorization"], "Bearer test-token-123")

    def test_basic_credential(self):
        """Test get_default_headers with a Basic credential."""
        headers = get_default_headers(basic_credential="YXBpdG9rZW46eA==")
        self.assertEqual(headers["Authorization"], "Basic YXBpdG9rZW46eA==")

    def test_bearer_wins_over_basic(self):
        """Test a bearer token takes precedence over a Basic credential."""
        headers = get_default_headers(token="t", basic_credential="c")
        self.assertEqual(headers["Authorization"], "Bearer t")

    def test_content_type(self):
        """Test get_default_headers with content_type."""
        headers = get_default_headers(content_type="application/x-www-form-urlencoded")
        self.assertEqual(headers["Content-Type"], "application/x-www-form-urlencoded")

    def test_request_timeout(self):
        """Test a finite request timeout is defined."""
        self.assertGreater(REQUEST_TIMEOUT, 0)
