import logging
from dataclasses import replace
from typing import List, Tuple

from ..domain.models import parse_timing_line

logger = logging.getLogger(__name__)


def _split_blocks(lines: List[str]) -> List[Tuple[List[str], List[str]]]:
    """
    Groups lines into (block, trailing_blank_lines) pairs.
    Leading blank lines form a block of their own with no content.
    """
    blocks = []
    current: List[str] = []
    blanks: List[str] = []
    for line in lines:
        if line.strip() == "":
            blanks.append(line)
            continue
        if blanks or not current:
            if current or blanks:
                blocks.append((current, blanks))
            current, blanks = [], []
        current.append(line)
    if current or blanks:
        blocks.append((current, blanks))
    return blocks


def shift_captions(captions: str, offset_ms: int) -> str:
    """
    Rewrites a subtitle track so it lines up with a video trimmed at `offset_ms`.

    Every cue moves earlier by the offset. A cue that ends at or before the new
    zero is removed together with its number and text lines; a cue straddling
    the cut keeps its text and starts at zero. Cue order is never changed and
    blocks without a timing line (headers, notes) pass through untouched.

    Args:
        captions: Track text in `HH:MM:SS,mmm --> HH:MM:SS,mmm` cue format.
        offset_ms: Trim start in milliseconds. Must not be negative.

    Returns:
        The shifted track. An offset of 0 returns the input unchanged.
    """
    if offset_ms < 0:
        raise ValueError(f"Caption offset cannot be negative: {offset_ms}")
    if offset_ms == 0 or not captions:
        return captions

    newline = "\r\n" if "\r\n" in captions else "\n"
    trailing_newline = captions.endswith(("\n", "\r"))
    lines = captions.splitlines()

    kept: List[str] = []
    dropped = 0
    for block, blanks in _split_blocks(lines):
        timing_index = None
        timing = None
        for i, line in enumerate(block):
            timing = parse_timing_line(line)
            if timing is not None:
                timing_index = i
                break

        if timing is None:
            kept.extend(block)
            kept.extend(blanks)
            continue

        shifted = timing.shifted(offset_ms)
        if shifted.end_ms <= 0:
            dropped += 1
            continue

        rewritten = list(block)
        rewritten[timing_index] = shifted.render()
        kept.extend(rewritten)
        kept.extend(blanks)

    if dropped:
        logger.debug(f"Dropped {dropped} cue(s) ending before trim offset {offset_ms}ms")

    result = newline.join(kept)
    if trailing_newline and result and not result.endswith(newline):
        result += newline
    return result


def count_cues(captions: str) -> int:
    if not captions:
        return 0
    return sum(1 for line in captions.splitlines() if parse_timing_line(line) is not None)


def to_webvtt(captions: str) -> str:
    """
    Converts an SRT-style track to WebVTT for upload as `captions.vtt`.
    Tracks that already carry the WEBVTT header are returned as-is.
    """
    if captions.lstrip().startswith("WEBVTT"):
        return captions

    out = ["WEBVTT", ""]
    for line in captions.splitlines():
        timing = parse_timing_line(line)
        if timing is None:
            out.append(line)
            continue
        out.append(replace(timing, separator=".").render())
    return "\n".join(out) + "\n"
