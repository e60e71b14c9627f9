import sys

import pytest

from .repo_root import REPO_ROOT

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from .pngmeta.png_factory import build_png, pillow_png  # noqa: E402


@pytest.fixture
def make_png():
    """Build PNG bytes from raw (type, payload) chunk tuples."""
    return build_png


@pytest.fixture
def make_pillow_png():
    """Build a real PNG with Pillow carrying the given text entries."""
    return pillow_png
