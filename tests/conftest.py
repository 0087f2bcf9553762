import os
from datetime import datetime

import pytest
from PIL import Image

# EXIF IFD0 'DateTime'
DATETIME_TAG = 0x0132


class FakeTag:
    """Stands in for exifread's IfdTag: only .values is read."""
    def __init__(self, values):
        self.values = values

    def __str__(self):
        return str(self.values)


@pytest.fixture
def make_jpeg():
    """Returns a factory writing a small JPEG, optionally with an IFD0 DateTime."""
    def _make(path, exif_datetime=None):
        with Image.new("RGB", (8, 8), color="red") as im:
            if exif_datetime:
                exif = Image.Exif()
                exif[DATETIME_TAG] = exif_datetime
                im.save(path, exif=exif.tobytes())
            else:
                im.save(path)
        return path
    return _make


@pytest.fixture
def set_mtime():
    """Returns a helper that sets a file's mtime from a naive local datetime."""
    def _set(path, dt: datetime):
        ts = dt.timestamp()
        os.utime(path, (ts, ts))
        return path
    return _set


@pytest.fixture
def fake_tag():
    return FakeTag
