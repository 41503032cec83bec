# File: cms_backend/api/forms.py

"""
Form body parsing for the create/update endpoints.

FastAPI's ``Form``/``File`` parameters parse multipart bodies with
Starlette's default 1 MiB per-field cap. Routes take the parsed body from
``get_form`` instead, so ``Settings.max_field_size`` is the cap that applies.
"""

from collections.abc import AsyncGenerator
from typing import List, Optional

from fastapi import Depends, Request
from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException

from cms_backend.api.deps import get_app_settings
from cms_backend.core.config import Settings
from cms_backend.core.errors import BadRequestError, PayloadTooLargeError


async def get_form(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[FormData, None]:
    """
    FastAPI dependency yielding the parsed form; uploads are closed afterwards.

    Starlette reports parser limits as a 400; an oversized part becomes 413
    here to match ``check_field_sizes``.
    """
    try:
        form = await request.form(max_part_size=settings.max_field_size)
    except StarletteHTTPException as exc:
        if "maximum size" in str(exc.detail):
            raise PayloadTooLargeError(str(exc.detail))
        raise BadRequestError(str(exc.detail))
    try:
        yield form
    finally:
        await form.close()


def form_text(form: FormData, name: str) -> Optional[str]:
    value = form.get(name)
    return value if isinstance(value, str) else None


def form_files(form: FormData, name: str) -> List[UploadFile]:
    return [value for value in form.getlist(name) if isinstance(value, UploadFile)]
