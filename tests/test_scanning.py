import os
import pytest
from pathlib import Path
from media_dater.scanning.filesystem import MediaScanner, classify_extension, IGNORE, SKIP_SUBTREE
from media_dater.exceptions import ScanError
from media_dater.models import CandidateFile
from media_dater import config


@pytest.mark.parametrize(
    "name,expected",
    [
        ("photo.jpg", "image"),
        ("photo.JPEG", "image"),
        ("scan.tiff", "image"),
        ("shot.dng", "image"),
        ("screen.png", "image"),
        ("clip.MP4", "video"),
        ("clip.mov", "video"),
        ("logo.svg", "ignored"),
        ("favicon.ico", "ignored"),
        ("documents.pdf", "ignored"),
        ("._photo.jpg", "ignored"),
        (".DS_Store", "ignored"),
        ("noext", "ignored"),
    ],
)
def test_classify_extension(name, expected):
    assert classify_extension(Path(name)) == expected


def test_exif_and_plain_images_do_not_overlap():
    assert not (config.EXIF_EXTS & config.PLAIN_IMAGE_EXTS)
    assert not (config.IMAGE_EXTS & config.VIDEO_EXTS)


def test_scan_filters_and_orders(tmp_path):
    for name in ["b.JPG", "a.jpg", "C.mp4", "logo.svg", "favicon.ico", "._a.jpg", "notes.txt"]:
        (tmp_path / name).write_bytes(b"x")

    results = list(MediaScanner().scan(tmp_path))

    assert [c.name for c in results] == ["C.mp4", "a.jpg", "b.JPG"]
    assert all(isinstance(c, CandidateFile) for c in results)
    assert results[2].ext == ".jpg"
    assert results[0].kind == "video"


def test_scan_does_not_descend_into_subdirs(tmp_path):
    sub = tmp_path / "nested"
    sub.mkdir()
    (sub / "deep.jpg").write_bytes(b"x")
    (tmp_path / "top.jpg").write_bytes(b"x")

    results = list(MediaScanner().scan(tmp_path))

    assert [c.path for c in results] == [tmp_path / "top.jpg"]


def test_scan_is_one_shot(tmp_path):
    (tmp_path / "a.jpg").write_bytes(b"x")
    it = MediaScanner().scan(tmp_path)
    assert len(list(it)) == 1
    assert list(it) == []


def test_scan_missing_root_raises(tmp_path):
    with pytest.raises(ScanError):
        list(MediaScanner().scan(tmp_path / "missing"))


class BrokenEntry:
    name = "broken.jpg"
    path = "/nowhere/broken.jpg"

    def is_dir(self, follow_symlinks=True):
        raise PermissionError("denied")

    def is_file(self, follow_symlinks=True):
        raise PermissionError("denied")


def test_visit_entry_error_is_ignored_not_raised():
    verdict, candidate = MediaScanner()._visit(BrokenEntry())
    assert verdict == IGNORE
    assert candidate is None


def test_visit_reports_skip_subtree_for_dirs(tmp_path):
    (tmp_path / "sub").mkdir()
    with os.scandir(tmp_path) as it:
        entry = next(it)
    assert MediaScanner()._visit(entry) == (SKIP_SUBTREE, None)


def test_scan_uses_byte_order_not_case_folded(tmp_path):
    (tmp_path / "x.jpg").write_bytes(b"x")
    (tmp_path / "Y.jpg").write_bytes(b"x")
    (tmp_path / "IMG_0002.JPG").write_bytes(b"x")
    (tmp_path / "img_0001.jpg").write_bytes(b"x")

    names = [c.name for c in MediaScanner().scan(tmp_path)]

    assert names == ["IMG_0002.JPG", "Y.jpg", "img_0001.jpg", "x.jpg"]
