"""Background remover interface and the rembg-backed implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from io import BytesIO
import logging
from threading import Lock
from typing import Optional

from PIL import Image
from rembg import remove as rembg_remove

from . import config
from .model_loader import get_rembg_session

logger = logging.getLogger(__name__)

_PIL_FORMATS = {
    "image/png": "PNG",
    "image/webp": "WEBP",
    "image/jpeg": "JPEG",
}


@dataclass(frozen=True)
class RemovalResult:
    data: bytes
    mime_type: str


class BackgroundRemover(ABC):
    @abstractmethod
    def remove_background(self, image_bytes: bytes) -> RemovalResult:
        """Return the output image bytes and their MIME type."""


def _encode(png_bytes: bytes, mime_type: str, quality: int) -> bytes:
    """Re-encode rembg's PNG output into the requested format."""
    if mime_type == "image/png":
        return png_bytes

    image = Image.open(BytesIO(png_bytes))
    if mime_type == "image/jpeg":
        # JPEG has no alpha channel.
        image = image.convert("RGB")
    buf = BytesIO()
    image.save(buf, format=_PIL_FORMATS[mime_type], quality=quality)
    return buf.getvalue()


class RembgBackgroundRemover(BackgroundRemover):
    """
    Remove backgrounds with rembg.

    rembg infers the input format from the bytes and always returns PNG;
    other output formats are produced by re-encoding with Pillow.
    """

    def __init__(self, settings: Optional[config.Settings] = None) -> None:
        self._settings = settings or config.get_settings()

    def remove_background(self, image_bytes: bytes) -> RemovalResult:
        if not image_bytes:
            raise ValueError("Empty image data")

        settings = self._settings
        session = get_rembg_session(settings.rembg_model)
        png_bytes = rembg_remove(
            image_bytes,
            session=session,
            only_mask=settings.output_type == "mask",
        )
        data = _encode(
            png_bytes,
            settings.output_format,
            config.quality_to_encoder_quality(settings),
        )
        logger.debug(
            "rembg: %d bytes in, %d bytes out (%s)",
            len(image_bytes),
            len(data),
            settings.output_format,
        )
        return RemovalResult(data=data, mime_type=settings.output_format)


_REMOVER: Optional[BackgroundRemover] = None
_LOCK = Lock()


def get_remover() -> BackgroundRemover:
    """Return the process-wide remover; overridden in tests."""
    global _REMOVER
    if _REMOVER is not None:
        return _REMOVER

    with _LOCK:
        if _REMOVER is None:
            _REMOVER = RembgBackgroundRemover()
    return _REMOVER


def reset_remover() -> None:
    """Drop the process-wide remover so the next call rebuilds it."""
    global _REMOVER
    with _LOCK:
        _REMOVER = None
