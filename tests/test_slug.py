"""
Tests for the slug generator.
"""

import re

import pytest

from blog_backend.util.slug import slugify


class TestSlugify:
    """Titles become lowercase, dash-separated, URL-safe keys."""

    def test_basic_title(self):
        assert slugify("test title") == "test-title"

    def test_punctuation_runs_collapse(self):
        assert slugify("Hello,   World!!  It's me") == "hello-world-it-s-me"

    def test_edges_trimmed(self):
        assert slugify("  --Leading and trailing--  ") == "leading-and-trailing"

    def test_accents_folded(self):
        assert slugify("Crème Brûlée") == "creme-brulee"

    def test_empty_and_none(self):
        assert slugify("") == ""
        assert slugify(None) == ""
        assert slugify("!!!") == ""

    @pytest.mark.parametrize(
        "title",
        [
            "New Title",
            "A/B testing: 10 lessons",
            "  spaces everywhere  ",
            "ÜBER cool_post #2",
            "already-a-slug",
        ],
    )
    def test_charset_and_idempotent(self, title):
        """
        Output contains only [a-z0-9-], never starts/ends with a dash, and
        slugifying a slug changes nothing.
        """
        s = slugify(title)
        assert re.fullmatch(r"[a-z0-9]+(-[a-z0-9]+)*", s)
        assert slugify(s) == s
        assert slugify(title) == s
