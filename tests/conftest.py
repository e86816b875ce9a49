"""Pytest configuration for dataknobs_shapes tests."""

import sys
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dataknobs_shapes import Shape  # noqa: E402


class AsyncShape(Shape):
    """Shape that is async but otherwise accepts any value."""

    def _is_async_shape(self) -> bool:
        return True

    async def _apply_async(self, input, options):
        return self._apply(input, options)


@pytest.fixture
def async_shape():
    """Create an async shape that accepts any value."""
    return AsyncShape()
