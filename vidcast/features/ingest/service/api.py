from typing import Iterable, List, Optional
from uuid import UUID

from vidcast.core.common.enums import CloudProvider
from vidcast.core.common.errors import CloudStorageError
from ..data.dropbox_client import DropboxClient
from ..data.repository import SqlImportRequestRepo
from ..data.sql_models import ImportRequestModel
from ..domain.models import CloudFile

_repo = SqlImportRequestRepo()


def enqueue_imports(
    user_id: str, files: Iterable[CloudFile], provider: str = CloudProvider.DROPBOX.value
) -> List[ImportRequestModel]:
    """
    Public Service API: bulk "select files" action.
    Creates one queued ImportRequest per file; the worker picks them up in order.
    """
    provider = CloudProvider(provider).value
    selected = list(files)
    if not selected:
        raise ValueError("No files selected for import")
    return _repo.enqueue_many(user_id, provider, selected)


def cancel_import(request_id: UUID, user_id: Optional[str] = None) -> ImportRequestModel:
    """
    Cancels a request that is still queued.

    Raises:
        InvalidStatusTransition: If the worker already started on it.
    """
    row = _repo.require(request_id)
    if user_id is not None and row.user_id != user_id:
        raise PermissionError(f"User {user_id} does not own import {request_id}")
    return _repo.cancel(request_id)


def get_import(request_id: UUID) -> ImportRequestModel:
    return _repo.require(request_id)


def list_imports(user_id: str) -> List[ImportRequestModel]:
    return _repo.list_for_user(user_id)


def browse_cloud_videos(provider: str = CloudProvider.DROPBOX.value, base_path: str = "", access_token: Optional[str] = None) -> List[CloudFile]:
    if CloudProvider(provider) != CloudProvider.DROPBOX:
        raise CloudStorageError(f"Unsupported provider: {provider}")
    return DropboxClient(access_token=access_token).search_videos(base_path)
