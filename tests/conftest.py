from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from bgremoval_service.api import app
from bgremoval_service.remover import get_remover

from .helpers import FakeRemover, make_png


@pytest.fixture
def input_png() -> bytes:
    return make_png()


@pytest.fixture
def output_png() -> bytes:
    return make_png(color=(0, 0, 0, 0))


@pytest.fixture
def fake_remover(output_png) -> FakeRemover:
    return FakeRemover(output=output_png)


@pytest.fixture
def client(fake_remover):
    app.dependency_overrides[get_remover] = lambda: fake_remover
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()
