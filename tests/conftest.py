"""
Shared fixtures for collage renderer tests.

Provides synthetic Pillow images, encoded image bytes and sessions.
"""
import sys
import os
from io import BytesIO

import pytest
from PIL import Image

# Ensure the project root is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from content.collage import CollageConfiguration
from content.images import DecodedImage
from interaction.mapper import Bounds
from session import CollageSession

RED = (255, 0, 0, 255)
WHITE = (255, 255, 255, 255)
PINK = (254, 205, 211, 255)


def encode(img, fmt="PNG"):
    buf = BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def portrait():
    """200x300 solid red portrait."""
    return DecodedImage(Image.new("RGBA", (200, 300), RED), "portrait")


@pytest.fixture
def black_pattern():
    return DecodedImage(Image.new("RGBA", (100, 100), (0, 0, 0, 255)), "pattern")


@pytest.fixture
def portrait_png():
    return encode(Image.new("RGB", (200, 300), (255, 0, 0)))


@pytest.fixture
def wide_png():
    return encode(Image.new("RGB", (400, 100), (0, 0, 255)))


@pytest.fixture
def blank_config():
    """White background, pink band, no text."""
    return CollageConfiguration(name="", furigana="", bg_color1="#ffffff", bg_color2="#fecdd3")


@pytest.fixture
def full_bounds():
    return Bounds(left=0, top=0, width=900, height=1200)


@pytest.fixture
def half_bounds():
    return Bounds(left=0, top=0, width=450, height=600)


@pytest.fixture
def session():
    return CollageSession()


@pytest.fixture
def mounted_session(half_bounds):
    s = CollageSession()
    s.mount(half_bounds)
    return s
