"""Shared fixtures for readpull tests."""

import logging

import pytest
from readpull import Preset, PresetEngine


@pytest.fixture(autouse=True)
def reset_readpull_logger():
    """Undo CLI logging setup so caplog sees records and no handler outlives its stream."""
    yield
    logger = logging.getLogger("readpull")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def engine():
    """Engine with default configuration."""
    return PresetEngine()


@pytest.fixture
def article_html():
    """Small page with navigation, an article body, an ad and a footer."""
    return """<!DOCTYPE html>
<html>
<head>
  <title>CR-SQLite</title>
  <script src="/app.js"></script>
  <link rel="stylesheet" href="/style.css">
</head>
<body>
  <div class="main">
    <div id="s">
      <a href="https://example.com/main">Main</a>
      <a href="/about">About</a>
    </div>
    <div id="p" class="article css-1x2y3z4">
      <p id="cr-sqlite">CR-SQLite is a run-time loadable extension for SQLite and libSQL.</p>
      <span class="sponsored">Buy a VPN today.</span>
      <p id="cr-sqlite-features">CR-SQLite comes with a set of features.</p>
    </div>
    <div id="f">cr-sqlite (c) 2025</div>
  </div>
</body>
</html>"""


@pytest.fixture
def article_preset():
    """Preset matching ``article_html``."""
    return Preset(
        preset_match_detectors=[".main", "#s", "#f"],
        main_content_selectors=["#p"],
        main_content_filters=[".sponsored"],
    )
