# File: cms_backend/services/upload_service.py

"""
Image upload handling shared by all resource routers.

Uploads are validated and read into memory first (``stage_uploads``), so a
rejected request never touches the database or the upload directory. Only
then are they written to disk by ``ImageStore``.
"""

import itertools
import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from starlette.datastructures import UploadFile

from cms_backend.core.errors import BadRequestError, PayloadTooLargeError

logger = logging.getLogger(__name__)

BASE_IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "gif")
WEB_IMAGE_EXTENSIONS = BASE_IMAGE_EXTENSIONS + ("webp",)

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.]")


@dataclass(frozen=True)
class UploadPolicy:
    field: str
    allowed_extensions: tuple[str, ...]
    max_file_size: int
    max_files: int = 1
    max_field_size: Optional[int] = None


@dataclass(frozen=True)
class StagedUpload:
    original_name: str
    data: bytes


def has_file(upload: Optional[UploadFile]) -> bool:
    # Browsers send an empty part with filename="" when no file is picked
    return upload is not None and bool(upload.filename)


def extension_of(filename: str) -> str:
    suffix = Path(filename).suffix
    return suffix[1:].lower() if suffix else ""


def generate_filename(original_name: str, now_ms: Optional[int] = None, seq: int = 0) -> str:
    """
    Build the stored name: ``<epoch millis>-<sanitized original name>``.

    Every character other than ASCII letters, digits and ``.`` becomes ``-``.
    A non-zero ``seq`` is inserted after the timestamp (``<millis>-<seq>-<name>``)
    to step around a name that is already taken.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    safe_name = _UNSAFE_CHARS.sub("-", Path(original_name).name)
    if seq:
        return f"{now_ms}-{seq}-{safe_name}"
    return f"{now_ms}-{safe_name}"


def check_field_sizes(policy: UploadPolicy, **fields: Optional[str]) -> None:
    if policy.max_field_size is None:
        return
    for name, value in fields.items():
        if value is not None and len(value.encode("utf-8")) > policy.max_field_size:
            raise PayloadTooLargeError(f"Field '{name}' is too large")


def stage_uploads(
    uploads: Optional[Iterable[Optional[UploadFile]]],
    policy: UploadPolicy,
) -> List[StagedUpload]:
    """
    Validate uploads against ``policy`` and read them into memory.

    Raises:
        BadRequestError: too many files or a disallowed extension.
        PayloadTooLargeError: a file over ``policy.max_file_size``.
    """
    files = [u for u in (uploads or []) if has_file(u)]
    if len(files) > policy.max_files:
        raise BadRequestError(
            f"Too many files for '{policy.field}' (max {policy.max_files})"
        )

    staged: List[StagedUpload] = []
    for upload in files:
        if extension_of(upload.filename) not in policy.allowed_extensions:
            raise BadRequestError("Only image files are allowed!")

        data = upload.file.read(policy.max_file_size + 1)
        if len(data) > policy.max_file_size:
            raise PayloadTooLargeError(
                f"File too large: {upload.filename} (max {policy.max_file_size} bytes)"
            )
        staged.append(StagedUpload(original_name=upload.filename, data=data))
    return staged


class ImageStore:
    """
    Flat directory of uploaded images, shared by every entity type.
    """

    def __init__(self, directory: str | Path, clock: Callable[[], float] = time.time):
        self.directory = Path(directory)
        self.clock = clock

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, filename: str) -> Path:
        return self.directory / filename

    def save(self, staged: StagedUpload) -> str:
        """
        Write ``staged`` under a fresh name. Existing files are never overwritten.
        """
        now_ms = int(self.clock() * 1000)
        for seq in itertools.count():
            filename = generate_filename(staged.original_name, now_ms, seq)
            try:
                with self.path_for(filename).open("xb") as fh:
                    fh.write(staged.data)
            except FileExistsError:
                continue
            break
        logger.debug("Saved upload %s (%d bytes)", filename, len(staged.data))
        return filename

    def save_all(self, staged: Iterable[StagedUpload]) -> List[str]:
        return [self.save(item) for item in staged]

    def delete(self, filename: Optional[str]) -> bool:
        """
        Remove ``filename`` if it exists. Failures are logged, never raised.
        """
        if not filename:
            return False
        path = self.path_for(filename)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as exc:
            logger.warning("Could not delete upload %s: %s", path, exc)
            return False
        return True

    def delete_all(self, filenames: Iterable[str]) -> None:
        for filename in filenames:
            self.delete(filename)
