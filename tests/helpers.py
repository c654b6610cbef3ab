from __future__ import annotations

from io import BytesIO
from typing import List, Optional

from PIL import Image

from bgremoval_service.remover import BackgroundRemover, RemovalResult


def make_png(size=(10, 10), color=(255, 0, 0, 255)) -> bytes:
    buf = BytesIO()
    Image.new("RGBA", size, color).save(buf, format="PNG")
    return buf.getvalue()


class FakeRemover(BackgroundRemover):
    def __init__(self, output: bytes = b"", mime_type: str = "image/png", error: Optional[Exception] = None):
        self.output = output
        self.mime_type = mime_type
        self.error = error
        self.calls: List[bytes] = []

    def remove_background(self, image_bytes: bytes) -> RemovalResult:
        self.calls.append(image_bytes)
        if self.error is not None:
            raise self.error
        return RemovalResult(data=self.output, mime_type=self.mime_type)
