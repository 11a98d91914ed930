from dataclasses import dataclass

TITLE_MAX = 200
DESCRIPTION_MAX = 2000
HASHTAGS_MAX = 500
THUMBNAIL_PROMPT_MAX = 500


@dataclass(frozen=True)
class ClipSpec:
    """
    A user-authored excerpt of a parent video.
    Offsets are seconds on the parent's published timeline.
    """
    start_sec: float
    end_sec: float
    title: str = ""
    description: str = ""
    hashtags: str = ""
    thumbnail_prompt: str = ""

    def __post_init__(self):
        for value in (self.start_sec, self.end_sec):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError("Start and end times are required")
        if self.start_sec < 0:
            raise ValueError(f"Start time cannot be negative: {self.start_sec}")
        if self.end_sec <= self.start_sec:
            raise ValueError("End time must be after start time")

    def sanitized(self) -> dict:
        def clip(value, limit):
            return value[:limit] if isinstance(value, str) else ""

        return {
            "title": clip(self.title, TITLE_MAX),
            "description": clip(self.description, DESCRIPTION_MAX),
            "hashtags": clip(self.hashtags, HASHTAGS_MAX),
            "thumbnail_prompt": clip(self.thumbnail_prompt, THUMBNAIL_PROMPT_MAX),
        }
