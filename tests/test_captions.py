import logging

import pytest

from captionkit.captions import (
    NOT_AVAILABLE,
    CaptionDisplay,
    build_caption_index,
    load_caption_index,
    lookup,
    parse_transcript,
    parse_transcript_line,
)
from captionkit.errors import TranscriptFormatError
from captionkit.models import CaptionIndex, TranscriptEntry


def test_parse_transcript_line():
    entry = parse_transcript_line("1.25::3.5::Hello there\n")
    assert entry == TranscriptEntry(start=1.25, end=3.5, text="Hello there")


def test_parse_transcript_line_keeps_empty_text():
    entry = parse_transcript_line("0::1::")
    assert entry.text == ""


def test_parse_transcript_line_wrong_field_count():
    with pytest.raises(TranscriptFormatError):
        parse_transcript_line("1.00::2.00")
    with pytest.raises(TranscriptFormatError):
        parse_transcript_line("1.00::2.00::a::b")


def test_parse_transcript_line_bad_number():
    with pytest.raises(ValueError):
        parse_transcript_line("one::2.00::text")
    with pytest.raises(TranscriptFormatError):
        parse_transcript_line("nan::2.00::text")


def test_interval_expansion():
    index = build_caption_index(["0.00::2.00::A", "2.00::5.00::B"])
    assert [lookup(index, s) for s in range(5)] == ["A", "A", "B", "B", "B"]
    assert lookup(index, 5) is None


def test_first_writer_wins_on_overlap():
    index = build_caption_index(["0.00::5.00::A", "2.00::4.00::B"])
    assert index.lookup(2) == "A"
    assert index.lookup(3) == "A"
    assert len(index) == 5


def test_later_entry_fills_uncovered_seconds():
    index = build_caption_index(["0.00::2.00::A", "1.00::4.00::B"])
    assert [index.lookup(s) for s in range(4)] == ["A", "A", "B", "B"]


def test_zero_length_interval_adds_nothing():
    index = build_caption_index(["3.00::3.00::X"])
    assert len(index) == 0
    assert index.lookup(3) is None


def test_fractional_times_use_whole_seconds():
    index = build_caption_index(["1.9::3.1::X"])
    assert sorted(index) == [1, 2]


def test_any_decimal_precision_accepted():
    index = build_caption_index(["0.123456::2::X", "2::3.0::Y"])
    assert index.lookup(1) == "X"
    assert index.lookup(2) == "Y"


def test_malformed_line_skipped_with_warning(caplog):
    lines = ["0.00::2.00::A", "2.00::3.00", "3.00::4.00::C"]
    with caplog.at_level(logging.WARNING, logger="captionkit.captions"):
        index = build_caption_index(lines)

    assert index.lookup(0) == "A"
    assert index.lookup(1) == "A"
    assert index.lookup(2) is None
    assert index.lookup(3) == "C"
    assert len(index.warnings) == 1
    assert index.warnings[0][0] == 2
    assert "line 2" in caplog.text


def test_parse_transcript_ignores_blank_lines():
    entries, warnings = parse_transcript(["0::1::A", "", "   ", "1::2::B"])
    assert [e.text for e in entries] == ["A", "B"]
    assert warnings == []


def test_caption_index_is_rebuilt_not_mutated():
    first = build_caption_index(["0::1::A"])
    second = build_caption_index(["0::1::B"])
    assert first.lookup(0) == "A"
    assert second.lookup(0) == "B"


def test_load_caption_index(tmp_path):
    path = tmp_path / "clip.txt"
    path.write_text("0.00::2.00::Hola\n2.00::3.00::Mundo\n", encoding="utf-8")
    index = load_caption_index(str(path))
    assert index is not None
    assert index.lookup(1) == "Hola"
    assert index.lookup(2) == "Mundo"


def test_load_caption_index_missing_file(tmp_path):
    assert load_caption_index(str(tmp_path / "missing.txt")) is None


def test_display_distinguishes_absent_from_no_index():
    display = CaptionDisplay()
    assert display.update(0) == NOT_AVAILABLE

    display.set_caption_map(build_caption_index(["0::2::A"]))
    assert display.update(1) == "A"
    assert display.update(7) == ""
    assert display.text == ""


def test_display_empty_index_is_not_available():
    display = CaptionDisplay(CaptionIndex())
    assert display.text_for(0) == NOT_AVAILABLE


def test_load_caption_index_skips_undecodable_line(tmp_path, caplog):
    path = tmp_path / "clip.txt"
    path.write_bytes(b"0.00::2.00::Hello\n2.00::4.00::caf\xe9\n4.00::5.00::Bye\n")

    with caplog.at_level(logging.WARNING, logger="captionkit.captions"):
        index = load_caption_index(str(path))

    assert index.lookup(1) == "Hello"
    assert index.lookup(2) is None
    assert index.lookup(4) == "Bye"
    assert [line for line, _ in index.warnings] == [2]
    assert "line 2" in caplog.text


def test_load_caption_index_ignores_byte_order_mark(tmp_path):
    path = tmp_path / "clip.txt"
    path.write_text("0.00::2.00::Hello\n", encoding="utf-8-sig")

    index = load_caption_index(str(path))

    assert index.lookup(0) == "Hello"
    assert index.warnings == ()


def test_load_caption_index_handles_crlf(tmp_path):
    path = tmp_path / "clip.txt"
    path.write_bytes(b"0.00::1.00::A\r\n1.00::2.00::B\r\n")
    index = load_caption_index(str(path))
    assert [index.lookup(0), index.lookup(1)] == ["A", "B"]


def test_caption_index_cannot_be_mutated():
    source = {0: "A"}
    index = CaptionIndex(captions=source)
    source[1] = "B"

    assert index.lookup(1) is None
    with pytest.raises(TypeError):
        index.captions[2] = "C"

    built = build_caption_index(["0::1::A"])
    with pytest.raises(TypeError):
        built.captions[0] = "changed"
