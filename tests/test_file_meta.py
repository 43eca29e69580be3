import pytest

from import_engine.errors import UploadError
from import_engine.file_meta import read_file_metadata, resolve_upload_path


def test_reads_size_and_mime(uploads_dir):
    meta = read_file_metadata("hero.png", uploads_dir)
    assert meta.path == (uploads_dir / "hero.png").resolve()
    assert meta.path.is_absolute()
    assert meta.name == "hero.png"
    assert meta.size == (uploads_dir / "hero.png").stat().st_size
    assert meta.mime == "image/png"


def test_unknown_extension_has_empty_mime(uploads_dir):
    (uploads_dir / "blob.zzzunknown").write_bytes(b"xyz")
    meta = read_file_metadata("blob.zzzunknown", uploads_dir)
    assert meta.mime == ""
    assert meta.size == 3


def test_missing_file_raises(uploads_dir):
    with pytest.raises(FileNotFoundError):
        read_file_metadata("missing.png", uploads_dir)


def test_path_traversal_rejected(uploads_dir):
    with pytest.raises(UploadError):
        resolve_upload_path("../outside.png", uploads_dir)
