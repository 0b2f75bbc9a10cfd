import pysubs2

from ssi_core.tags.position import Point
from ssi_core.tags.segmenter import segment
from ssi_core.tags.state import default_state, parse_overrides, resolve_states


def _defaults():
    return default_state(pysubs2.SSAStyle(), Point(960, 1070), Point(960, 1070))


def test_default_state_from_style():
    style = pysubs2.SSAStyle()
    style.fontsize = 20
    style.primarycolor = pysubs2.Color(255, 128, 0, 0)
    state = default_state(style, Point(1, 2))
    assert state["fs"] == 20
    assert state["c"] == "&H0080FF&"
    assert state["1c"] == state["c"]
    assert state["1a"] == "&H00&"
    assert state["alpha"] == "&H00&"
    assert state["frx"] == 0 and state["blur"] == 0
    assert state["pos"] == "(1,2)"
    assert "org" not in state

def test_parse_overrides_branches():
    markup = "{\\fs40\\fnComic Sans\\rAlt\\bord2.5\\c&H0000FF&}"
    assert parse_overrides(markup) == [
        ("fs", 40),
        ("fn", "Comic Sans"),
        ("r", "Alt"),
        ("bord", 2.5),
        ("c", "&H0000FF&"),
    ]

def test_parse_overrides_inside_transition():
    markup = "{\\t(\\fscx120)\\clip(0,0,5,5)}"
    assert parse_overrides(markup) == [("fscx", 120), ("clip", "(0,0,5,5)")]

def test_later_section_inherits():
    states = resolve_states({"fs": 20}, segment("{\\fs40}a{\\bord2}b"))
    assert states[0]["fs"] == 40
    assert states[1]["fs"] == 40
    assert states[1]["bord"] == 2

def test_last_tag_in_block_wins():
    states = resolve_states({"fs": 20}, segment("{\\fs10\\fs30}a"))
    assert states[0]["fs"] == 30

def test_snapshots_are_independent():
    states = resolve_states(_defaults(), segment("a{\\b1}b"))
    states[0]["fs"] = 99
    assert states[1]["fs"] == 20

def test_reset_returns_to_defaults():
    states = resolve_states(_defaults(), segment("{\\fs40\\bord5}a{\\r\\shad1}b"))
    assert states[1]["fs"] == 20
    assert states[1]["shad"] == 1
    assert states[1]["r"] == ""

def test_reset_to_named_style():
    def reset_defaults(name):
        return {"fs": 99 if name == "Alt" else 20}
    states = resolve_states({"fs": 20}, segment("{\\fs40}a{\\rAlt}b"), reset_defaults)
    assert states[1]["fs"] == 99
    assert states[1]["r"] == "Alt"

def test_primary_color_keeps_long_alias_in_sync():
    states = resolve_states(_defaults(), segment("{\\1c&H0000FF&}x"))
    assert states[0]["c"] == "&H0000FF&"
    assert states[0]["1c"] == "&H0000FF&"
