"""Shared fixtures for the xmlplus test-suite.

Trees are built with ``make_node`` so that core tests do not need the lxml
parse boundary; parser tests live in ``tests/core/test_io.py``.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from xmlplus.config import ConfigManager
from xmlplus.core.location import Location
from xmlplus.core.models import make_node


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point user config overrides at an empty temp dir and reset the singleton."""
    config_dir = tmp_path / "user_config"
    monkeypatch.setenv("XMLPLUS_CONFIG_DIR", str(config_dir))
    ConfigManager.reset()
    yield config_dir
    ConfigManager.reset()


@pytest.fixture
def doc_tree():
    """A small topic-like document with mixed content.

    <doc>
        <title>T</title>
        <body>
            <p>Intro</p>
            <section id="s1"><title>S1</title><p>P1</p></section>
            <ul><li>A</li><li>B</li></ul>
            <section id="s2"><title>S2</title><p>Hello <b>world</b></p></section>
            <br/>
        </body>
    </doc>
    """
    s1 = make_node("section", {"id": "s1"}, [make_node("title", {}, "S1"), make_node("p", {}, "P1")])
    ul = make_node("ul", {}, [make_node("li", {}, "A"), make_node("li", {}, "B")])
    s2 = make_node("section", {"id": "s2"}, [
        make_node("title", {}, "S2"),
        make_node("p", {}, ["Hello ", make_node("b", {}, "world")]),
    ])
    body = make_node("body", {}, [make_node("p", {}, "Intro"), s1, ul, s2, make_node("br", {}, None)])
    return make_node("doc", {}, [make_node("title", {}, "T"), body])


@pytest.fixture
def doc(doc_tree):
    return Location(doc_tree)


@pytest.fixture
def ab_tree():
    """<a><b>1</b><b>2</b></a>"""
    return make_node("a", {}, [make_node("b", {}, "1"), make_node("b", {}, "2")])
