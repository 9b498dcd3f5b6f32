"""Pytest configuration and fixtures."""

import base64
import io

import pytest
from PIL import Image

from thermalprint.adapters import ESCBematechCommandAdapter, ESCPOSCommandAdapter
from thermalprint.generator import CommandGenerator
from thermalprint.traverser import TreeTraverser

INIT = b"\x1b@"


def png_bytes(image: Image.Image) -> bytes:
    """Encode a PIL image as PNG."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def png_data_uri(image: Image.Image) -> str:
    """Encode a PIL image as a PNG data URI."""
    return "data:image/png;base64," + base64.b64encode(png_bytes(image)).decode("ascii")


@pytest.fixture
def escpos():
    """Create an ESC/POS adapter."""
    return ESCPOSCommandAdapter()


@pytest.fixture
def bematech():
    """Create an ESC/Bematech adapter."""
    return ESCBematechCommandAdapter()


@pytest.fixture
def generator(escpos):
    """Create a 48 column ESC/POS generator."""
    return CommandGenerator(paper_width=48, encoding="cp860", adapter=escpos)


@pytest.fixture
def traverser(generator):
    """Create a traverser on the 48 column generator."""
    return TreeTraverser(generator)


@pytest.fixture
def black_square_uri():
    """16x16 black square as a PNG data URI."""
    return png_data_uri(Image.new("L", (16, 16), color=0))
