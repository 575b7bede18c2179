"""
Where: webforms/forms/core/parser.py
What: Build a RequestData from a request body and its url query parameters.
Why: Handlers read multipart, urlencoded and json fields through one API.

Body values are added first, then query values. get() returns the first
value for a key, so a body value takes precedence over a query value with
the same name; the query value stays reachable in data.values[key].
"""

import logging
import re
from typing import List, Tuple
from urllib.parse import parse_qsl

from fastapi import Request
from starlette.datastructures import UploadFile
from starlette.formparsers import MultiPartException, MultiPartParser
from starlette.requests import ClientDisconnect

from ..config import config
from ..exceptions import DecodeError, TransportReadError
from .data import RequestData
from .json_flatten import parse_json_body

logger = logging.getLogger("forms.parser")

MULTIPART_CONTENT_TYPE = "multipart/form-data"
URLENCODED_CONTENT_TYPE = "form-urlencoded"
JSON_CONTENT_TYPE = "application/json"

# "%" not followed by two hex digits.
_BAD_ESCAPE_PATTERN = re.compile(r"%(?![0-9A-Fa-f]{2})")


def parse_urlencoded(body: bytes) -> List[Tuple[str, str]]:
    """
    Decode an application/x-www-form-urlencoded body into ordered pairs.

    Raises:
        DecodeError: invalid percent escapes or non UTF-8 content
    """
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Urlencoded body is not valid UTF-8: {e}") from e

    bad_escape = _BAD_ESCAPE_PATTERN.search(text)
    if bad_escape:
        snippet = text[bad_escape.start() : bad_escape.start() + 3]
        raise DecodeError(f"Invalid percent escape in urlencoded body: {snippet!r}")

    try:
        return parse_qsl(text, keep_blank_values=True, encoding="utf-8", errors="strict")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Urlencoded body does not decode to UTF-8: {e}") from e


async def _read_body(request: Request) -> bytes:
    try:
        return await request.body()
    except (ClientDisconnect, OSError) as e:
        raise TransportReadError(e) from e


async def _parse_multipart(request: Request, data: RequestData) -> None:
    parser = MultiPartParser(
        request.headers,
        request.stream(),
        max_files=config.MULTIPART_MAX_FILES,
        max_fields=config.MULTIPART_MAX_FIELDS,
    )
    # Parts larger than this spill from memory to a temporary file.
    parser.spool_max_size = config.MULTIPART_SPOOL_MAX_SIZE

    try:
        form = await parser.parse()
    except (ClientDisconnect, OSError) as e:
        raise TransportReadError(e) from e
    except (MultiPartException, ValueError) as e:
        raise DecodeError(f"Malformed multipart body: {e}") from e

    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            # Only the first file per field name is kept.
            if data.file_exists(key):
                logger.debug(
                    f"Dropping additional file for {key}",
                    extra={"key": key, "filename": value.filename},
                )
                value.file.close()
                continue
            data.add_file(key, value)
        else:
            data.add(key, value)


async def parse(request: Request) -> RequestData:
    """
    Parse the request body and url query parameters into a RequestData.

    Args:
        request: incoming Starlette/FastAPI request

    Returns:
        RequestData holding body values first, then query values.

    Raises:
        TransportReadError: the body could not be read
        DecodeError: the body is malformed for its content type
    """
    data = RequestData()
    content_type = request.headers.get("content-type", "")

    try:
        if MULTIPART_CONTENT_TYPE in content_type:
            await _parse_multipart(request, data)
        elif URLENCODED_CONTENT_TYPE in content_type:
            body = await _read_body(request)
            for key, value in parse_urlencoded(body):
                data.add(key, value)
        elif JSON_CONTENT_TYPE in content_type:
            body = await _read_body(request)
            data.set_json_body(body)
            parse_json_body(data, body)
    except (TransportReadError, DecodeError) as e:
        data.close()
        logger.warning(
            f"Failed to parse request body: {e}",
            extra={
                "content_type": content_type,
                "error_type": type(e).__name__,
                "path": request.url.path,
            },
        )
        raise

    for key, value in request.query_params.multi_items():
        data.add(key, value)

    logger.debug(
        f"Parsed request data for {request.url.path}",
        extra={
            "content_type": content_type,
            "field_count": len(data.values),
            "file_count": len(data.files),
        },
    )
    return data
