"""Tests for http_client module."""

import re
import unittest

from image_versions.http_client import GITHUB_API_ACCEPT, USER_AGENT, create_session, get_default_headers


class TestUserAgent(unittest.TestCase):
    """Tests for USER_AGENT constant."""

    def test_user_agent_has_version(self):
        """Test USER_AGENT includes a version."""
        # Format: image-versions-action/X.Y.Z
        name, version_part = USER_AGENT.split("/")
        self.assertEqual(name, "image-versions-action")
        version_pattern = r"^\d+\.\d+(\.\d+)?(-[\w.]+)?$"
        is_valid_version = re.match(version_pattern, version_part) is not None
        self.assertTrue(
            is_valid_version or version_part == "unknown",
            f"Version '{version_part}' is neither a valid version pattern nor 'unknown'",
        )


class TestGetDefaultHeaders(unittest.TestCase):
    """Tests for get_default_headers function."""

    def test_default_headers_minimal(self):
        headers = get_default_headers()
        self.assertEqual(headers, {"User-Agent": USER_AGENT})

    def test_default_headers_with_token(self):
        headers = get_default_headers(token="test-token-123")
        self.assertEqual(headers["Authorization"], "Bearer test-token-123")

    def test_default_headers_with_accept(self):
        headers = get_default_headers(accept=GITHUB_API_ACCEPT)
        self.assertEqual(headers["Accept"], "application/vnd.github+json")


class TestCreateSession(unittest.TestCase):
    def test_session_sends_user_agent_without_token(self):
        session = create_session()
        self.assertEqual(session.headers["User-Agent"], USER_AGENT)
        self.assertNotIn("Authorization", session.headers)
