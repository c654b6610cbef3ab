"""
Session loading utilities for rembg.

The loader:
 - creates the rembg inference session for a model name,
 - keeps one shared instance per model for the whole process,
 - exposes `get_rembg_session()` for inference callers.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Dict, Optional

from rembg import new_session

from . import config

logger = logging.getLogger(__name__)

_SESSIONS: Dict[str, object] = {}
_LOCK = Lock()


def get_rembg_session(model_name: Optional[str] = None):
    """
    Return the singleton rembg session for `model_name`.

    The session is created on first access; model download and ONNX runtime
    start-up happen here, so the first request pays that cost.
    """
    model_name = model_name or config.get_settings().rembg_model
    session = _SESSIONS.get(model_name)
    if session is not None:
        return session

    with _LOCK:
        session = _SESSIONS.get(model_name)
        if session is None:
            logger.info("Loading rembg model %s", model_name)
            session = new_session(model_name)
            _SESSIONS[model_name] = session
            logger.info("rembg model %s loaded", model_name)
    return session


def reset_rembg_session() -> None:
    """Drop cached sessions so the next call reloads them."""
    with _LOCK:
        _SESSIONS.clear()
