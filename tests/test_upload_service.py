# File: tests/test_upload_service.py

import io

import pytest
from starlette.datastructures import UploadFile

from cms_backend.core.errors import BadRequestError, PayloadTooLargeError
from cms_backend.services.upload_service import (
    BASE_IMAGE_EXTENSIONS,
    WEB_IMAGE_EXTENSIONS,
    ImageStore,
    StagedUpload,
    UploadPolicy,
    check_field_sizes,
    generate_filename,
    stage_uploads,
)

POLICY = UploadPolicy(
    field="images",
    allowed_extensions=BASE_IMAGE_EXTENSIONS,
    max_file_size=10,
    max_files=2,
    max_field_size=5,
)


def upload(name, data=b"img"):
    return UploadFile(file=io.BytesIO(data), filename=name)


def test_generate_filename_prefixes_timestamp_and_sanitizes():
    assert generate_filename("my photo (1).PNG", now_ms=1700000000000) == "1700000000000-my-photo--1-.PNG"
    assert generate_filename("plan_v2 final.jpeg", now_ms=1) == "1-plan-v2-final.jpeg"


def test_generate_filename_drops_directories():
    assert generate_filename("../../etc/passwd.png", now_ms=5) == "5-passwd.png"


def test_stage_accepts_allowed_extensions_case_insensitively():
    staged = stage_uploads([upload("a.JPG"), upload("b.gif")], POLICY)
    assert [s.original_name for s in staged] == ["a.JPG", "b.gif"]
    assert staged[0].data == b"img"


def test_stage_skips_empty_parts():
    assert stage_uploads([upload("")], POLICY) == []
    assert stage_uploads(None, POLICY) == []


@pytest.mark.parametrize("name", ["photo.exe", "photo", "photo.png.exe", "photo.webp"])
def test_stage_rejects_other_extensions(name):
    with pytest.raises(BadRequestError):
        stage_uploads([upload(name)], POLICY)


def test_webp_allowed_by_web_policy():
    policy = UploadPolicy(field="image", allowed_extensions=WEB_IMAGE_EXTENSIONS, max_file_size=10)
    assert len(stage_uploads([upload("x.webp")], policy)) == 1


def test_stage_enforces_count_and_size():
    with pytest.raises(BadRequestError):
        stage_uploads([upload("a.png"), upload("b.png"), upload("c.png")], POLICY)
    with pytest.raises(PayloadTooLargeError):
        stage_uploads([upload("a.png", b"x" * 11)], POLICY)
    assert len(stage_uploads([upload("a.png", b"x" * 10)], POLICY)) == 1


def test_field_size_limit():
    check_field_sizes(POLICY, name="abcde", detail=None)
    with pytest.raises(PayloadTooLargeError):
        check_field_sizes(POLICY, name="abcdef")


def test_store_save_and_delete(tmp_path):
    store = ImageStore(tmp_path / "up")
    store.ensure_directory()
    name = store.save(StagedUpload(original_name="a b.png", data=b"data"))
    assert name.endswith("-a-b.png")
    assert store.path_for(name).read_bytes() == b"data"

    assert store.delete(name) is True
    assert not store.path_for(name).exists()
    assert store.delete(name) is False
    assert store.delete(None) is False


def test_store_never_overwrites_on_same_millisecond(tmp_path):
    store = ImageStore(tmp_path, clock=lambda: 1700000000.0)
    first = store.save(StagedUpload(original_name="a.png", data=b"one"))
    second = store.save(StagedUpload(original_name="a.png", data=b"two"))
    third = store.save(StagedUpload(original_name="a.png", data=b"three"))

    assert first == "1700000000000-a.png"
    assert second == "1700000000000-1-a.png"
    assert third == "1700000000000-2-a.png"
    assert store.path_for(first).read_bytes() == b"one"
    assert store.path_for(second).read_bytes() == b"two"
    assert store.path_for(third).read_bytes() == b"three"


def test_generate_filename_sequence():
    assert generate_filename("a.png", now_ms=7, seq=0) == "7-a.png"
    assert generate_filename("a.png", now_ms=7, seq=3) == "7-3-a.png"
