import re
from dataclasses import dataclass

# HH:MM:SS,mmm --> HH:MM:SS,mmm (hours optional, "." accepted for WebVTT)
TIMESTAMP_PATTERN = r"(?:(\d+):)?(\d{1,2}):(\d{2})([,.])(\d{3})"
CUE_TIMING_RE = re.compile(
    rf"^(?P<indent>\s*){TIMESTAMP_PATTERN}(?P<arrow>\s*-->\s*){TIMESTAMP_PATTERN}(?P<rest>.*)$"
)


@dataclass(frozen=True)
class CueTiming:
    """Parsed timing line of a single cue."""
    start_ms: int
    end_ms: int
    separator: str = ","
    arrow: str = " --> "
    indent: str = ""
    settings: str = ""

    def shifted(self, offset_ms: int) -> "CueTiming":
        return CueTiming(
            start_ms=max(0, self.start_ms - offset_ms),
            end_ms=self.end_ms - offset_ms,
            separator=self.separator,
            arrow=self.arrow,
            indent=self.indent,
            settings=self.settings,
        )

    def render(self) -> str:
        start = format_timestamp(self.start_ms, self.separator)
        end = format_timestamp(self.end_ms, self.separator)
        return f"{self.indent}{start}{self.arrow}{end}{self.settings}"


def _to_ms(hours, minutes, seconds, millis) -> int:
    return ((int(hours or 0) * 60 + int(minutes)) * 60 + int(seconds)) * 1000 + int(millis)


def parse_timestamp_ms(value: str) -> int:
    match = re.fullmatch(TIMESTAMP_PATTERN, value.strip())
    if not match:
        raise ValueError(f"Not a caption timestamp: {value!r}")
    hours, minutes, seconds, _, millis = match.groups()
    return _to_ms(hours, minutes, seconds, millis)


def format_timestamp(ms: int, separator: str = ",") -> str:
    ms = max(0, int(ms))
    hours, rem = divmod(ms, 3_600_000)
    minutes, rem = divmod(rem, 60_000)
    seconds, millis = divmod(rem, 1000)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}{separator}{millis:03d}"


def parse_timing_line(line: str):
    """Returns a CueTiming for a timing line, or None for any other line."""
    match = CUE_TIMING_RE.match(line)
    if not match:
        return None
    g = match.groups()
    # groups: indent, h1, m1, s1, sep1, ms1, arrow, h2, m2, s2, sep2, ms2, rest
    return CueTiming(
        start_ms=_to_ms(g[1], g[2], g[3], g[5]),
        end_ms=_to_ms(g[7], g[8], g[9], g[11]),
        separator=g[4],
        arrow=match.group("arrow"),
        indent=match.group("indent"),
        settings=match.group("rest"),
    )
