# FILE: ./vpnportal/api/endpoints/uploads.py

from fastapi import APIRouter, Depends, File, UploadFile
import logging

from vpnportal.api.deps import get_image_storage, require_admin
from vpnportal.core.uploads import ImageStorage, file_url
from vpnportal.schemas import portal as schemas


router = APIRouter(prefix="/upload", dependencies=[Depends(require_admin)])
logger = logging.getLogger(__name__)


@router.post("/image", response_model=schemas.UploadedImage, status_code=201)
def upload_image(image: UploadFile = File(...), storage: ImageStorage = Depends(get_image_storage)):
    """یک تصویر از فیلد image دریافت می‌کند و آدرس عمومی آن را برمی‌گرداند."""
    try:
        filename = storage.save(image.file, image.filename, image.content_type)
    finally:
        image.file.close()
    return schemas.UploadedImage(url=file_url(filename), filename=filename)

@router.delete("/image/{filename}", response_model=schemas.DeletedImage)
def delete_image(filename: str, storage: ImageStorage = Depends(get_image_storage)):
    return schemas.DeletedImage(deleted=storage.delete(filename))
