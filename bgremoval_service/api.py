"""
FastAPI layer exposing background removal.

Endpoints:
 - GET /health
 - POST /api/remove-background
"""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from starlette.datastructures import FormData, UploadFile

from . import config
from .pipeline import RemovalFailure, remove_background_to_data_url
from .remover import BackgroundRemover, get_remover

settings = config.get_settings()
logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)

app = FastAPI(title="Background Removal Service", version="0.1.0")

_FORM_CONTENT_TYPES = {"multipart/form-data", "application/x-www-form-urlencoded"}


class FormParseError(ValueError):
    pass


def _multipart_boundary(content_type: str) -> bytes:
    for param in content_type.split(";")[1:]:
        name, _, value = param.partition("=")
        if name.strip().lower() == "boundary" and value.strip():
            return value.strip().strip("\"").encode("latin-1")
    raise FormParseError("Multipart body has no boundary")


async def _parse_form(request: Request) -> FormData:
    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type not in _FORM_CONTENT_TYPES:
        raise FormParseError(f"Unsupported content type for form data: {content_type!r}")
    if media_type == "multipart/form-data":
        # Starlette silently drops an unterminated last part.
        boundary = _multipart_boundary(content_type)
        body = await request.body()
        if b"--" + boundary + b"--" not in body:
            raise FormParseError("Multipart body is missing its closing boundary")
    return await request.form()


def _failure_response(exc: BaseException) -> JSONResponse:
    logger.error("Error removing background: %s", exc, exc_info=exc)
    return JSONResponse({"message": "Failed to remove background"}, status_code=500)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/api/remove-background")
async def remove_background(request: Request, remover: BackgroundRemover = Depends(get_remover)):
    try:
        form = await _parse_form(request)
    except Exception as exc:  # noqa: BLE001
        return _failure_response(exc)

    try:
        image = form.get("image")
        if not isinstance(image, UploadFile):
            return JSONResponse({"error": "No valid file uploaded"}, status_code=400)

        try:
            image_bytes = await image.read()
        except Exception as exc:  # noqa: BLE001
            return _failure_response(exc)

        outcome = await run_in_threadpool(remove_background_to_data_url, image_bytes, remover)
    finally:
        await form.close()

    if isinstance(outcome, RemovalFailure):
        return _failure_response(outcome.error)

    return JSONResponse(
        {
            "success": True,
            "message": "Background removed successfully",
            "result": outcome.data_url,
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
