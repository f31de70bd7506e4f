import io
import random

import pytest
from PIL import Image

from map_symbols.categories import build_registry
from map_symbols.engine import EngineHandle, IconEngine


class RecordingDownloader:
    """Downloader double that keeps every container it is handed."""

    def __init__(self):
        self.calls = []

    def trigger(self, data, filename):
        self.calls.append((data, filename))


def decode_png(data):
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


@pytest.fixture
def registry():
    return build_registry()


@pytest.fixture
def engine(registry):
    return IconEngine(registry, rng=random.Random(1234))


@pytest.fixture
def handle(engine):
    return EngineHandle(lambda: engine)


@pytest.fixture
def downloader():
    return RecordingDownloader()
