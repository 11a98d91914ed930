import pytest
from vidcast.features.captions.service.api import shift_captions, count_cues, to_webvtt
from vidcast.features.captions.domain.models import parse_timestamp_ms, format_timestamp

TRACK = """1
00:00:01,000 --> 00:00:03,500
Can everyone hear me?

2
00:00:03,500 --> 00:00:06,000
Let's give people a minute.

3
00:00:04,000 --> 00:00:09,000
Okay, first point.

4
00:01:00,000 --> 00:01:02,250
Second point.
"""


def test_timestamp_parse_and_format():
    assert parse_timestamp_ms("00:01:02,250") == 62250
    assert parse_timestamp_ms("01:00:00.001") == 3600001
    assert format_timestamp(62250) == "00:01:02,250"
    assert format_timestamp(62250, ".") == "00:01:02.250"


def test_zero_offset_returns_input_unchanged():
    assert shift_captions(TRACK, 0) == TRACK


@pytest.mark.parametrize("offset", [0, 1000, 3500, 5000, 61000, 120000])
def test_shift_then_zero_equals_shift(offset):
    shifted = shift_captions(TRACK, offset)
    assert shift_captions(shifted, 0) == shifted


def test_cues_ending_at_or_before_offset_are_dropped_with_their_lines():
    """
    Offset 6000ms:
    - Cue 1 ends at 3.5s  -> dropped
    - Cue 2 ends at 6.0s  -> adjusted end is exactly 0 -> dropped
    - Cue 3 straddles     -> kept, start clamped to 0
    - Cue 4               -> shifted by 6s
    """
    result = shift_captions(TRACK, 6000)

    assert "Can everyone hear me?" not in result
    assert "Let's give people a minute." not in result
    assert "\n1\n" not in f"\n{result}" and "\n2\n" not in f"\n{result}"

    assert "00:00:00,000 --> 00:00:03,000\nOkay, first point." in result
    assert "00:00:54,000 --> 00:00:56,250\nSecond point." in result
    assert count_cues(result) == 2


@pytest.mark.parametrize("offset", [0, 500, 3500, 4000, 6000, 9000, 62250, 99999])
def test_cue_count_never_increases(offset):
    assert count_cues(shift_captions(TRACK, offset)) <= count_cues(TRACK)


@pytest.mark.parametrize("offset", [500, 3500, 6000, 9000])
def test_no_cue_ends_at_or_before_zero(offset):
    from vidcast.features.captions.domain.models import parse_timing_line

    for line in shift_captions(TRACK, offset).splitlines():
        timing = parse_timing_line(line)
        if timing is not None:
            assert timing.end_ms > 0
            assert timing.start_ms >= 0


def test_order_is_preserved():
    result = shift_captions(TRACK, 2000)
    positions = [result.index(t) for t in ("Let's give", "first point", "Second point")]
    assert positions == sorted(positions)


def test_dot_separator_is_preserved():
    vtt = "WEBVTT\n\n00:00:05.000 --> 00:00:07.000 align:start\nHello\n"
    result = shift_captions(vtt, 2000)
    assert result.startswith("WEBVTT\n\n")
    assert "00:00:03.000 --> 00:00:05.000 align:start" in result


def test_plain_text_passes_through():
    text = "This transcript has no timing at all."
    assert shift_captions(text, 5000) == text
    assert count_cues(text) == 0


def test_negative_offset_is_rejected():
    with pytest.raises(ValueError):
        shift_captions(TRACK, -1)


def test_to_webvtt_converts_separator_and_adds_header():
    vtt = to_webvtt(shift_captions(TRACK, 6000))
    assert vtt.startswith("WEBVTT\n")
    assert "00:00:00.000 --> 00:00:03.000" in vtt
    assert "00:00:00,000" not in vtt
