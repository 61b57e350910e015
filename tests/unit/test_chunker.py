"""Test transcript chunking"""

import pytest

from transcript_search.search.chunker import TranscriptChunker


@pytest.fixture
def chunker():
    return TranscriptChunker(
        chunk_size=500,
        overlap=100,
        boundary_ratio=0.8,
        seconds_per_chunk=30,
        chars_per_second=10
    )


def test_empty_text_yields_no_chunks(chunker):
    assert chunker.chunk_transcript("") == []


def test_short_text_yields_single_trimmed_chunk(chunker):
    text = "  Hooks let function components keep state.  "
    windows = chunker.chunk_transcript(text)

    assert len(windows) == 1
    assert windows[0].text == text.strip()
    assert windows[0].start_seconds == 0
    assert windows[0].end_seconds == len(text) // 10


def test_text_of_exactly_chunk_size_is_one_chunk(chunker):
    text = "x" * 500
    windows = chunker.chunk_transcript(text)

    assert len(windows) == 1
    assert windows[0].text == text


def test_1200_characters_yield_three_chunks(chunker):
    windows = chunker.chunk_transcript("a" * 1200)

    assert [len(w.text) for w in windows] == [500, 500, 400]
    assert [w.start_seconds for w in windows] == [0, 30, 60]
    assert [w.end_seconds for w in windows] == [50, 80, 100]


def test_backs_off_to_last_space_near_window_end(chunker):
    text = "a" * 495 + " " + "b" * 300
    windows = chunker.chunk_transcript(text)

    assert windows[0].text == "a" * 495


def test_keeps_full_window_when_last_space_is_too_early(chunker):
    text = "a" * 300 + " " + "b" * 899
    windows = chunker.chunk_transcript(text)

    assert len(windows[0].text) == 500
    assert windows[0].text.endswith("b")


def test_timecodes_supply_start_times(chunker):
    timecodes = [{"start_seconds": 12}, {"start_seconds": 0}]
    windows = chunker.chunk_transcript("a" * 1200, timecodes)

    # A zero start falls back to the estimate, missing entries too
    assert [w.start_seconds for w in windows] == [12, 30, 60]
    assert windows[0].end_seconds == 12 + 50


def test_windows_cover_text_without_gaps(chunker):
    text = " ".join(f"word{i}" for i in range(400))
    windows = chunker.chunk_transcript(text)

    step = 500 - 100
    for i, window in enumerate(windows):
        offset = i * step
        while text[offset] == " ":
            offset += 1
        assert text.startswith(window.text, offset)

        if i + 1 < len(windows):
            assert offset + len(window.text) >= (i + 1) * step

    last = windows[-1]
    assert text.endswith(last.text)


def test_start_seconds_never_decrease(chunker):
    text = " ".join(f"word{i}" for i in range(1000))
    windows = chunker.chunk_transcript(text)

    starts = [w.start_seconds for w in windows]
    assert starts == sorted(starts)
    assert all(w.start_seconds <= w.end_seconds for w in windows)


def test_whitespace_only_text_yields_no_chunks(chunker):
    assert chunker.chunk_transcript("     ") == []


def test_overlap_must_be_smaller_than_chunk_size():
    with pytest.raises(ValueError):
        TranscriptChunker(chunk_size=100, overlap=100)
