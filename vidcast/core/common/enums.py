# File: vidcast/core/common/enums.py

from enum import Enum, unique
from typing import Dict, FrozenSet

from .errors import InvalidStatusTransition


@unique
class VideoStatus(str, Enum):
    UPLOADING = "uploading"
    TRANSCRIBING = "transcribing"
    GENERATING_METADATA = "generating_metadata"
    READY_TO_EDIT = "ready_to_edit"
    PUBLISHING = "publishing"
    PUBLISHED = "published"
    FAILED = "failed"


@unique
class IngestStatus(str, Enum):
    QUEUED = "queued"
    DOWNLOADING = "downloading"
    PROCESSING = "processing"
    TRANSCRIBING = "transcribing"
    READY = "ready"
    FAILED = "failed"
    CANCELLED = "cancelled"


@unique
class CloudProvider(str, Enum):
    DROPBOX = "dropbox"
    GOOGLE_DRIVE = "google_drive"
    ONEDRIVE = "onedrive"
    S3 = "s3"
    GCS = "gcs"
    AZURE_BLOB = "azure_blob"


@unique
class PrivacyStatus(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    UNLISTED = "unlisted"


@unique
class ConfidentialityStatus(str, Enum):
    PENDING = "pending"
    CHECKING = "checking"
    CLEAR = "clear"
    FLAGGED = "flagged"
    ERROR = "error"


@unique
class CheckStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    ERROR = "error"


# --- Transition Tables ---
# Every status must appear as a key. Terminal states map to an empty set.

VIDEO_TRANSITIONS: Dict[VideoStatus, FrozenSet[VideoStatus]] = {
    VideoStatus.UPLOADING: frozenset({VideoStatus.TRANSCRIBING, VideoStatus.FAILED}),
    VideoStatus.TRANSCRIBING: frozenset({VideoStatus.READY_TO_EDIT, VideoStatus.FAILED}),
    VideoStatus.READY_TO_EDIT: frozenset({VideoStatus.GENERATING_METADATA, VideoStatus.PUBLISHING}),
    VideoStatus.GENERATING_METADATA: frozenset({VideoStatus.READY_TO_EDIT}),
    VideoStatus.PUBLISHING: frozenset({VideoStatus.PUBLISHED, VideoStatus.FAILED}),
    VideoStatus.PUBLISHED: frozenset(),
    # Manual reset only
    VideoStatus.FAILED: frozenset({VideoStatus.READY_TO_EDIT}),
}

INGEST_TRANSITIONS: Dict[IngestStatus, FrozenSet[IngestStatus]] = {
    IngestStatus.QUEUED: frozenset({IngestStatus.DOWNLOADING, IngestStatus.FAILED, IngestStatus.CANCELLED}),
    IngestStatus.DOWNLOADING: frozenset({IngestStatus.PROCESSING, IngestStatus.FAILED}),
    IngestStatus.PROCESSING: frozenset({IngestStatus.TRANSCRIBING, IngestStatus.FAILED}),
    IngestStatus.TRANSCRIBING: frozenset({IngestStatus.READY, IngestStatus.FAILED}),
    IngestStatus.READY: frozenset(),
    IngestStatus.FAILED: frozenset(),
    IngestStatus.CANCELLED: frozenset(),
}


def ensure_transition(table: dict, current: Enum, target: Enum) -> None:
    """
    Validates a status change against a closed transition table.

    Raises:
        InvalidStatusTransition: If `target` is not reachable from `current`.
    """
    allowed = table.get(current)
    if allowed is None or target not in allowed:
        raise InvalidStatusTransition(current, target)


def is_terminal(status: IngestStatus) -> bool:
    return not INGEST_TRANSITIONS[status]
