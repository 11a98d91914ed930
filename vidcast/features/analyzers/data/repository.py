from uuid import UUID
from typing import Optional

from vidcast.core.database.connection import SessionLocal
from vidcast.core.common.errors import RecordNotFound
from .sql_models import ConfidentialityCheckModel


class SqlConfidentialityRepo:
    def create(self, **fields) -> ConfidentialityCheckModel:
        with SessionLocal() as db:
            check = ConfidentialityCheckModel(**fields)
            db.add(check)
            db.commit()
            db.refresh(check)
            return check

    def get(self, check_id: UUID) -> Optional[ConfidentialityCheckModel]:
        with SessionLocal() as db:
            return db.get(ConfidentialityCheckModel, check_id)

    def update(self, check_id: UUID, **fields) -> ConfidentialityCheckModel:
        with SessionLocal() as db:
            check = db.get(ConfidentialityCheckModel, check_id)
            if check is None:
                raise RecordNotFound("ConfidentialityCheck", check_id)
            for key, value in fields.items():
                setattr(check, key, value)
            db.commit()
            db.refresh(check)
            return check

    def latest_for_video(self, video_id: UUID) -> Optional[ConfidentialityCheckModel]:
        with SessionLocal() as db:
            return (
                db.query(ConfidentialityCheckModel)
                .filter(ConfidentialityCheckModel.video_id == video_id)
                .order_by(ConfidentialityCheckModel.created_at.desc())
                .first()
            )
