# app/api/uploads/main.py
from fastapi import APIRouter, Depends, File, Request, UploadFile

from ...core.audit import log_action
from ...core.config import get_settings
from ...core.users import require_admin
from ...models.user import User
from ...services.upload_service import UploadService

router = APIRouter()


def get_upload_service() -> UploadService:
    return UploadService(get_settings())


@router.post("/upload/image")
async def api_upload_image(
    image: UploadFile | None = File(None),
    service: UploadService = Depends(get_upload_service),
    current_user: User = Depends(require_admin),
):
    """Store a project image (max 5MB, image/* only) and return its public path."""
    return await service.save_image(image)


@router.delete("/upload/image/{filename}")
def api_delete_image(
    filename: str,
    request: Request,
    service: UploadService = Depends(get_upload_service),
    current_user: User = Depends(require_admin),
):
    service.delete_image(filename)
    log_action("DELETE", "image", filename, user=current_user, request=request)
    return {"message": "Imagem deletada com sucesso"}
