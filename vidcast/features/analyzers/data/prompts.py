# Prompt builders for the transcript analyzers.
# Each analyzer only ever sees a bounded slice of the transcript.

METADATA_PREFIX_CHARS = 5000
CONTENT_START_PREFIX_CHARS = 12000
CONTENT_END_SUFFIX_CHARS = 15000
CONFIDENTIALITY_PREFIX_CHARS = 20000
CLIPS_PREFIX_CHARS = 15000
CLIP_GUIDANCE_MAX_CHARS = 500

METADATA_SYSTEM = "You write metadata for video hosting platforms. Base it only on the transcript provided. Reply with JSON."

CONTENT_START_SYSTEM = """You analyze recorded talks and webinars to find where the substantive content begins.
Ignore setup chatter (audio checks, screen sharing), waiting for attendees, small talk,
speaker and company introductions, welcomes and agenda recitals.
Content begins at the first real lesson, data point or argument.

Reply with JSON:
- suggestedStartMs: millisecond offset where the substantive content begins
- reason: what is being skipped and why this point was chosen
- confidence: low, medium or high"""

CONTENT_END_SYSTEM = """You analyze recorded talks and webinars to find where the substantive content ends.
Content that can be cut: sales pitches and pricing, calls to action, closing pleasantries,
housekeeping (slides, recording availability). Useful Q&A is kept.

Reply with JSON:
- suggestedEndMs: millisecond offset to cut at
- reason: what would be cut
- confidence: low, medium or high
- shouldTrim: true if there is closing material worth cutting, otherwise false"""


def metadata_prompt(transcript: str) -> str:
    return f"""Transcript: {transcript[:METADATA_PREFIX_CHARS]}...

Generate JSON with:
- title (under 60 characters, catchy)
- description (under 1000 characters, SEO friendly)
- tags (comma separated string)
- thumbnail_prompt (a prompt for an image generator)"""


def content_start_prompt(transcript: str) -> str:
    return (
        "Find where the substantive content starts in this transcript opening:\n\n"
        f"{transcript[:CONTENT_START_PREFIX_CHARS]}"
    )


def content_end_prompt(transcript: str) -> str:
    tail = transcript[max(0, len(transcript) - CONTENT_END_SUFFIX_CHARS):]
    return f"Find where the substantive content ends in this transcript closing:\n\n{tail}"


def confidentiality_prompt(transcript: str) -> str:
    return f"""You are a compliance reviewer checking a video transcript before it is published publicly.
Flag anything confidential, proprietary or sensitive:
1. proprietary: trade secrets, internal processes or strategy
2. financial: revenue, margins, budgets, salaries, investment details
3. personal_health: private individuals' names, contact details, medical or personal situations
4. company_secret: client or partner names, undisclosed relationships, internal codenames, confidential agreements

For each flagged segment give startTime and endTime (HH:MM:SS), category (proprietary, financial,
personal_health, company_secret or other), severity (low, medium, high), reason and confidence (0.0-1.0).
Return an empty segments array if the transcript is safe to publish.

TRANSCRIPT:
{transcript[:CONFIDENTIALITY_PREFIX_CHARS]}

Reply with JSON only:
{{"status": "clear" or "flagged", "summary": "...", "segments": [{{"startTime": "HH:MM:SS", "endTime": "HH:MM:SS", "category": "...", "severity": "low|medium|high", "reason": "...", "confidence": 0.0}}]}}"""


def clip_suggestions_prompt(transcript: str, trim_offset_sec: int = 0, guidance: str = "") -> str:
    offset_note = ""
    if trim_offset_sec > 0:
        offset_note = (
            f"\nThe transcript timestamps come from the original recording, but the published video "
            f"starts {trim_offset_sec} seconds into it. Give startSec and endSec relative to the PUBLISHED "
            f"video (subtract {trim_offset_sec} seconds) and never suggest a negative start.\n"
        )

    guidance_note = ""
    if guidance and guidance.strip():
        guidance_note = f"\nUSER GUIDANCE: {guidance.strip()[:CLIP_GUIDANCE_MAX_CHARS]}\n"

    return f"""You pick short-form clips from long videos. Find the 3-5 strongest excerpts of 30 to 90 seconds.
{offset_note}{guidance_note}
For each clip give: startSec, endSec, title (under 60 characters), description (under 200 characters),
hashtags (3-5, comma separated, include #shorts), sentiment, priority (1-10) and reason.

TRANSCRIPT:
{transcript[:CLIPS_PREFIX_CHARS]}

Reply with a JSON object: {{"clips": [...]}}"""
