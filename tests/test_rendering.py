"""Tests for plan markdown rendering."""
from __future__ import annotations

from markupsafe import Markup

from fitness_planner.rendering import render_markdown


def test_headings_lists_and_emphasis_render():
    html = render_markdown("# Plan\n\n## Diet\n- **Protein:** 1.6 g/kg\n- Water")

    assert isinstance(html, Markup)
    assert "<h1>Plan</h1>" in html
    assert "<h2>Diet</h2>" in html
    assert "<li><strong>Protein:</strong> 1.6 g/kg</li>" in html


def test_raw_html_is_stripped():
    html = render_markdown('Warm up\n\n<img src="x" onerror="alert(1)">\n\n<script>steal()</script>')

    assert "Warm up" in html
    assert "onerror" not in html
    assert "<script>" not in html
    assert "steal()" not in html


def test_links_keep_http_targets_only():
    html = render_markdown("[Video](https://youtube.com/watch?v=abc) [bad](javascript:steal)")

    assert 'href="https://youtube.com/watch?v=abc"' in html
    assert "javascript:" not in html


def test_empty_plan_renders_nothing():
    assert render_markdown("") == Markup("")
    assert render_markdown(None) == Markup("")
