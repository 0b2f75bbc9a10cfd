import pytest

from ssi_core.tags.segmenter import Section, reassemble, segment


def test_three_sections():
    sections = segment("Never gonna {\\fs200}give {\\alpha&H55&}you up")
    assert sections == [
        Section("{}", "Never gonna "),
        Section("{\\fs200}", "give "),
        Section("{\\alpha&H55&}", "you up"),
    ]

def test_leading_block_is_kept():
    assert segment("{\\an8\\bord2}Top") == [Section("{\\an8\\bord2}", "Top")]

def test_empty_line_has_one_section():
    assert segment("") == [Section("{}", "")]

def test_stray_braces_stay_in_text():
    assert segment("a } b {c") == [Section("{}", "a } b {c")]
    assert segment("{\\b1}x {y") == [Section("{\\b1}", "x {y")]

def test_long_primary_color_is_normalized():
    assert segment("{\\1c&HFF&\\1a&H00&}x")[0].markup == "{\\c&HFF&\\1a&H00&}"

@pytest.mark.parametrize("text", [
    "plain text",
    "Never gonna {\\fs200}give {\\alpha&H55&}you up",
    "{\\pos(100,200)\\t(0,500,\\fscx120)}Sign{\\r} text",
    "{\\fnComic Sans MS}a\\Nb{\\i1}",
    "a{}b",
    "{}x",
])
def test_round_trip(text):
    assert reassemble(segment(text)) == text

def test_reassemble_drops_emptied_blocks():
    sections = segment("{\\bord2}a{\\shad1}b")
    sections[1].markup = "{}"
    assert reassemble(sections) == "{\\bord2}ab"

def test_literal_empty_block_survives_edits():
    sections = segment("a{}b{\\i1}c")
    sections[0].text = "A"
    sections[2].markup = "{}"
    assert reassemble(sections) == "A{}bc"
