import io
import re

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from backend import uploads
from backend.core import config
from backend.core.errors import UploadRejected


def _upload(data: bytes, filename: str = 'me.jpg', content_type: str = 'image/jpeg') -> UploadFile:
    return UploadFile(file=io.BytesIO(data), filename=filename, headers=Headers({'content-type': content_type}))


@pytest.fixture
def upload_dir(tmp_path, monkeypatch: pytest.MonkeyPatch):
    target = tmp_path / 'uploads'
    monkeypatch.setattr(config, 'UPLOAD_DIR', str(target))
    return target


def test_build_stored_filename_randomizes_and_keeps_extension() -> None:
    first = uploads.build_stored_filename('holiday portrait.jpeg')
    second = uploads.build_stored_filename('holiday portrait.jpeg')

    assert re.fullmatch(r'photo-\d+-\d+\.jpeg', first)
    assert 'holiday' not in first
    assert first != second


def test_build_stored_filename_without_extension() -> None:
    assert re.fullmatch(r'photo-\d+-\d+', uploads.build_stored_filename('portrait'))


def test_photo_url_points_at_static_mount(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'PUBLIC_BASE_URL', 'http://localhost:8000')

    assert uploads.photo_url('photo-1-2.jpg') == 'http://localhost:8000/img/photo-1-2.jpg'


@pytest.mark.parametrize('content_type', ['image/jpg', 'image/jpeg'])
def test_validate_photo_type_accepts_jpeg(content_type: str) -> None:
    uploads.validate_photo_type(content_type)


@pytest.mark.parametrize('content_type', ['image/png', 'image/gif', 'application/octet-stream', None])
def test_validate_photo_type_rejects_everything_else(content_type) -> None:
    with pytest.raises(UploadRejected) as exception_info:
        uploads.validate_photo_type(content_type)

    assert exception_info.value.status_code == 400
    assert exception_info.value.message == 'Photo extension only can .jpg and .jpeg'


def test_save_photo_writes_file_under_random_name(upload_dir) -> None:
    stored = uploads.save_photo(_upload(b'jpeg-bytes'))

    assert (upload_dir / stored).read_bytes() == b'jpeg-bytes'
    assert stored.endswith('.jpg')


def test_save_photo_accepts_file_at_size_limit(upload_dir, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'MAX_PHOTO_BYTES', 16)

    stored = uploads.save_photo(_upload(b'x' * 16))

    assert (upload_dir / stored).stat().st_size == 16


def test_save_photo_rejects_file_over_size_limit(upload_dir, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'MAX_PHOTO_BYTES', 16)

    with pytest.raises(UploadRejected) as exception_info:
        uploads.save_photo(_upload(b'x' * 17))

    assert exception_info.value.status_code == 413
    assert not upload_dir.exists() or not any(upload_dir.iterdir())


def test_save_photo_rejects_png_without_writing(upload_dir) -> None:
    with pytest.raises(UploadRejected):
        uploads.save_photo(_upload(b'png', filename='me.png', content_type='image/png'))

    assert not upload_dir.exists()


def test_accepted_photo_ignores_missing_file() -> None:
    assert uploads.accepted_photo(None) is None
