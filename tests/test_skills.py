"""
tests/test_skills.py — Tests for the thin skill wrappers
"""

from pathlib import Path

import pytest

from skills.parse_slides import parse_file, parse_text
from skills.render_pptx import render
from skills.serialize_slides import serialize
from slidegen.slidetext.parser import NoContentError

SAMPLE_PATH = Path(__file__).parent.parent / "docs" / "examples" / "sample_reply.txt"


def test_parse_file_and_text_agree():
    deck = parse_file(str(SAMPLE_PATH))
    assert deck == parse_text(SAMPLE_PATH.read_text(encoding="utf-8"))


def test_parse_text_empty():
    with pytest.raises(NoContentError):
        parse_text("")


def test_serialize_then_parse():
    deck = parse_file(str(SAMPLE_PATH))
    assert parse_text(serialize(deck)) == deck


def test_render_to_dir(tmp_path):
    deck = parse_file(str(SAMPLE_PATH))
    path = render(deck, str(tmp_path), filename="skill")
    assert path == tmp_path / "skill.pptx"
    assert path.exists()
