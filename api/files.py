import mimetypes
import posixpath

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from api.deps import get_session
from services.errors import PermissionDenied
from services.session import SessionContext
from services.storage import BlobStore, client_prefix, get_blob_store

router = APIRouter(prefix="/files", tags=["files"])


@router.get("/{path:path}")
async def get_file(
    path: str,
    session: SessionContext = Depends(get_session),
    store: BlobStore = Depends(get_blob_store),
):
    """Stored object by path; clients only see objects under their own prefix."""
    path = posixpath.normpath(path)
    if not session.is_admin and not path.startswith(client_prefix(session.uid)):
        raise PermissionDenied("You do not have access to this file.")
    data = await store.read(path)
    media_type = mimetypes.guess_type(path)[0] or "application/octet-stream"
    return Response(content=data, media_type=media_type)
