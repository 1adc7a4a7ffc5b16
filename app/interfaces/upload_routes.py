import logging
import os
import time

from fastapi import APIRouter, Request
from starlette.datastructures import UploadFile

from app.core.errors import ValidationError

router = APIRouter(prefix="/api", tags=["Upload"])
logger = logging.getLogger(__name__)


@router.post("/upload")
async def upload_image(request: Request):
    """
    Accepts either a multipart file in field "image" or a base64 data URL
    ("data:image/...") in the same field, as JSON or form data.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        body = await request.json()
        image = body.get("image") if isinstance(body, dict) else None
    else:
        form = await request.form()
        image = form.get("image")

    if isinstance(image, UploadFile) and image.filename:
        filename = f"{int(time.time() * 1000)}-{os.path.basename(image.filename)}"
        upload_dir = request.app.state.upload_dir
        contents = await image.read()
        with open(os.path.join(upload_dir, filename), "wb") as f:
            f.write(contents)
        logger.info(f"🖼️ Stored upload {filename} ({len(contents)} bytes)")
        return {"imageUrl": f"/uploads/{filename}"}

    if isinstance(image, str) and image.startswith("data:image/"):
        return {"imageUrl": image}

    raise ValidationError("No file or valid base64 provided")
