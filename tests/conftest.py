import io

import pytest
from PIL import Image


@pytest.fixture
def png_bytes():
    """A real 5x5 red PNG as written by Pillow."""
    image = Image.new('RGB', (5, 5), color='red')
    buffer = io.BytesIO()
    image.save(buffer, format='PNG')

    return buffer.getvalue()


@pytest.fixture
def png_path(tmp_path, png_bytes):
    path = tmp_path / 'red.png'
    path.write_bytes(png_bytes)

    return path
