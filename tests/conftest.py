import io
import os

import pytest
from PIL import Image

from scribe_table.extraction import InferenceBackend


def make_image_bytes(size=(160, 120), mode="RGB", fmt="PNG") -> bytes:
    """Random-noise image; noise keeps PNG large and JPEG sizes quality dependent."""
    width, height = size
    channels = len(mode)
    img = Image.frombytes(mode, size, os.urandom(width * height * channels))
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


class ScriptedBackend(InferenceBackend):
    """Backend replaying a fixed list of fragments and recording each call."""

    def __init__(self, fragments=None, error=None):
        self.fragments = list(fragments or [])
        self.error = error
        self.calls = []

    def stream_table(self, payload, instructions, system_instruction):
        self.calls.append((payload, instructions, system_instruction))
        if self.error is not None:
            raise self.error
        for fragment in self.fragments:
            yield fragment


@pytest.fixture
def png_bytes():
    return make_image_bytes()


@pytest.fixture
def scripted_backend():
    return ScriptedBackend
