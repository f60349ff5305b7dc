from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from storefront.core.dependencies import get_image_store
from storefront.core.errors import (
    NotFoundError,
    StoreError,
    UnexpectedError,
    ValidationError,
)
from storefront.services.image_store import ImageStore

router = APIRouter(prefix="/upload", tags=["images"])


@router.post("", summary="Upload a product image")
async def upload_image(
    image: Optional[UploadFile] = File(None),
    store: ImageStore = Depends(get_image_store),
):
    if image is None:
        raise ValidationError("No image file provided")
    try:
        # One byte past the limit is enough to reject oversize uploads
        data = await image.read(store.max_bytes + 1)
        stored = store.save(image.filename, image.content_type, data)
    except StoreError:
        raise
    except Exception as e:
        raise UnexpectedError("Failed to upload image") from e
    finally:
        await image.close()
    return {"success": True, "imageUrl": stored.url, "filename": stored.filename}


@router.delete("/{filename}", summary="Delete an uploaded image")
async def delete_image(
    filename: str,
    store: ImageStore = Depends(get_image_store),
):
    try:
        removed = store.delete(filename)
    except StoreError:
        raise
    except Exception as e:
        raise UnexpectedError("Failed to delete image") from e
    if not removed:
        raise NotFoundError("Image not found")
    return {"success": True, "message": "Image deleted successfully"}
