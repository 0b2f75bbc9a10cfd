# tests/conftest.py
import json
from pathlib import Path

import pysubs2
import pytest

SAMPLE_ASS = r"""[Script Info]
ScriptType: v4.00+
PlayResX: 1920
PlayResY: 1080

[V4+ Styles]
Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, OutlineColour, BackColour, Bold, Italic, Underline, StrikeOut, ScaleX, ScaleY, Spacing, Angle, BorderStyle, Outline, Shadow, Alignment, MarginL, MarginR, MarginV, Encoding
Style: Default,Arial,20,&H00FFFFFF,&H000000FF,&H00000000,&H64000000,0,0,0,0,100,100,0,0,1,2,0,2,10,20,30,1
Style: Sign,Comic Sans MS,48,&H000000FF,&H000000FF,&H00000000,&H00000000,-1,0,0,0,100,100,0,0,1,3,0,8,0,0,0,1

[Events]
Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text
Dialogue: 0,0:00:01.00,0:00:03.00,Default,,0,0,0,,Never gonna {\fs40}give {\alpha&H55&}you up
Dialogue: 0,0:00:04.00,0:00:06.00,Sign,Bob,0,0,0,,{\pos(100,200)}Sign text
Dialogue: 1,0:00:07.00,0:00:09.00,Default,,5,0,0,,{\an7\c&H00FF00&}Top left
"""


@pytest.fixture
def capture_log():
    lines = []
    def cb(msg: str):
        lines.append(msg)
    return lines, cb

@pytest.fixture
def sample_subs():
    return pysubs2.SSAFile.from_string(SAMPLE_ASS)

@pytest.fixture
def sample_ass(tmp_path: Path):
    path = tmp_path / "sample.ass"
    path.write_text(SAMPLE_ASS, encoding="utf-8")
    return path

@pytest.fixture
def document(sample_subs, capture_log):
    from ssi_core.subtitles import SubtitleDocument
    _, cb = capture_log
    return SubtitleDocument(sample_subs, {}, log_callback=cb)

@pytest.fixture
def settings_file(tmp_path: Path):
    """Settings JSON pointing logs into the temp dir."""
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({
        'logs_folder': str(tmp_path / "logs"),
        'archive_logs': False,
    }), encoding="utf-8")
    return path

@pytest.fixture
def make_host():
    from tests.fakes import FakeHost
    def _make(*texts, **kwargs):
        return FakeHost(list(texts), **kwargs)
    return _make
