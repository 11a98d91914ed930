import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID
from typing import Iterable, List, Optional

from sqlalchemy import update

from vidcast.core.database.connection import SessionLocal
from vidcast.core.common.enums import IngestStatus, INGEST_TRANSITIONS, ensure_transition
from vidcast.core.common.errors import InvalidStatusTransition, RecordNotFound, VidcastError
from .sql_models import ImportRequestModel
from ..domain.models import CloudFile

logger = logging.getLogger(__name__)


class SqlImportRequestRepo:
    """
    Queue store for cloud imports.
    Rows are never deleted; they only move toward a terminal status.
    """

    def enqueue_many(self, user_id: str, provider: str, files: Iterable[CloudFile]) -> List[ImportRequestModel]:
        # Selection order is queue order; stamps must not tie within a batch
        now = datetime.now(timezone.utc)
        with SessionLocal() as db:
            created = []
            for idx, f in enumerate(files):
                row = ImportRequestModel(
                    user_id=user_id,
                    provider=provider,
                    source_path=f.path,
                    source_file_name=f.name,
                    source_size=f.size,
                    status=IngestStatus.QUEUED,
                    progress={},
                    created_at=now + timedelta(microseconds=idx),
                )
                db.add(row)
                created.append(row)
            db.commit()
            for row in created:
                db.refresh(row)
            logger.info(f"Queued {len(created)} import(s) for user {user_id} from {provider}")
            return created

    def get(self, request_id: UUID) -> Optional[ImportRequestModel]:
        with SessionLocal() as db:
            return db.get(ImportRequestModel, request_id)

    def require(self, request_id: UUID) -> ImportRequestModel:
        row = self.get(request_id)
        if row is None:
            raise RecordNotFound("ImportRequest", request_id)
        return row

    def list_for_user(self, user_id: str) -> List[ImportRequestModel]:
        with SessionLocal() as db:
            return (
                db.query(ImportRequestModel)
                .filter(ImportRequestModel.user_id == user_id)
                .order_by(ImportRequestModel.created_at.desc())
                .all()
            )

    def next_queued(self) -> Optional[ImportRequestModel]:
        """Oldest queued row (FIFO by creation time)."""
        with SessionLocal() as db:
            return (
                db.query(ImportRequestModel)
                .filter(ImportRequestModel.status == IngestStatus.QUEUED)
                .order_by(ImportRequestModel.created_at.asc(), ImportRequestModel.id.asc())
                .first()
            )

    def claim(self, request_id: UUID) -> bool:
        """
        queued -> downloading as one conditional UPDATE.
        Returns False if the row was no longer queued (cancelled or claimed elsewhere).
        """
        now = datetime.now(timezone.utc)
        with SessionLocal() as db:
            result = db.execute(
                update(ImportRequestModel)
                .where(ImportRequestModel.id == request_id)
                .where(ImportRequestModel.status == IngestStatus.QUEUED)
                .values(status=IngestStatus.DOWNLOADING, started_at=now, updated_at=now)
            )
            db.commit()
            return result.rowcount == 1

    def claim_next(self) -> Optional[ImportRequestModel]:
        while True:
            candidate = self.next_queued()
            if candidate is None:
                return None
            if self.claim(candidate.id):
                return self.get(candidate.id)
            logger.debug(f"Import {candidate.id} left the queue before it could be claimed")

    def update(self, request_id: UUID, **fields) -> ImportRequestModel:
        with SessionLocal() as db:
            row = db.get(ImportRequestModel, request_id)
            if row is None:
                raise RecordNotFound("ImportRequest", request_id)
            for key, value in fields.items():
                setattr(row, key, value)
            db.commit()
            db.refresh(row)
            return row

    def transition(self, request_id: UUID, target: IngestStatus, **fields) -> ImportRequestModel:
        with SessionLocal() as db:
            row = db.get(ImportRequestModel, request_id)
            if row is None:
                raise RecordNotFound("ImportRequest", request_id)

            previous = row.status
            ensure_transition(INGEST_TRANSITIONS, previous, target)

            # Conditional on the status just validated, as in claim()
            result = db.execute(
                update(ImportRequestModel)
                .where(ImportRequestModel.id == request_id)
                .where(ImportRequestModel.status == previous)
                .values(status=target, **fields)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                db.rollback()
                db.refresh(row)
                raise InvalidStatusTransition(row.status, target)

            db.commit()
            db.refresh(row)
            logger.info(f"Import {request_id}: {previous.value} -> {target.value}")
            return row

    def attach_video(self, request_id: UUID, video_id: UUID) -> ImportRequestModel:
        with SessionLocal() as db:
            row = db.get(ImportRequestModel, request_id)
            if row is None:
                raise RecordNotFound("ImportRequest", request_id)
            if row.video_id is not None and row.video_id != video_id:
                raise VidcastError(f"Import {request_id} already produced video {row.video_id}")
            row.video_id = video_id
            db.commit()
            db.refresh(row)
            return row

    def cancel(self, request_id: UUID) -> ImportRequestModel:
        """
        Only a queued request can be cancelled. Loses to a concurrent claim:
        raises InvalidStatusTransition once the worker has taken the row.
        """
        return self.transition(
            request_id,
            IngestStatus.CANCELLED,
            completed_at=datetime.now(timezone.utc)
        )
