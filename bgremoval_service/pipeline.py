"""
High-level removal pipeline.

`remove_background_to_data_url` is the main entry point used by the HTTP API:
bytes in -> remover -> base64 data URL out. Failures are returned as a
`RemovalFailure` value instead of being raised, so the caller decides how
to report them.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Union

from .remover import BackgroundRemover, RemovalResult


@dataclass(frozen=True)
class RemovalSuccess:
    result: RemovalResult
    data_url: str


@dataclass(frozen=True)
class RemovalFailure:
    error: Exception


RemovalOutcome = Union[RemovalSuccess, RemovalFailure]


def build_data_url(data: bytes, mime_type: str) -> str:
    """Encode bytes as `data:<mime>;base64,<payload>` (no line wrapping)."""
    if not mime_type:
        raise ValueError("MIME type is required for a data URL")
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def remove_background_to_data_url(image_bytes: bytes, remover: BackgroundRemover) -> RemovalOutcome:
    try:
        result = remover.remove_background(image_bytes)
        data_url = build_data_url(bytes(result.data), result.mime_type)
    except Exception as exc:  # noqa: BLE001
        return RemovalFailure(error=exc)
    return RemovalSuccess(result=result, data_url=data_url)
