"""
Where: webforms/forms/tests/helpers.py
What: Builders for uploaded files, raw requests and multipart bodies.
Why: Exercise the parser without a running server.
"""

import io
from typing import List, Optional, Tuple

from starlette.datastructures import UploadFile
from starlette.requests import Request


def make_upload(filename: str, content: bytes) -> UploadFile:
    """Build an in-memory uploaded file."""
    return UploadFile(io.BytesIO(content), filename=filename, size=len(content))


def make_request(
    body: bytes = b"",
    content_type: Optional[str] = None,
    query: str = "",
    disconnect: bool = False,
) -> Request:
    """Build a Starlette request whose body is delivered in a single message."""
    headers: List[Tuple[bytes, bytes]] = []
    if content_type is not None:
        headers.append((b"content-type", content_type.encode("latin-1")))
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/",
        "root_path": "",
        "query_string": query.encode("latin-1"),
        "headers": headers,
    }

    async def receive():
        if disconnect:
            return {"type": "http.disconnect"}
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


def multipart_body(
    fields: List[Tuple[str, str]],
    files: List[Tuple[str, str, bytes]] = (),
    boundary: str = "testboundary",
) -> bytes:
    """Encode fields and (name, filename, content) files as multipart/form-data."""
    parts = []
    for name, value in fields:
        parts.append(
            f'--{boundary}\r\nContent-Disposition: form-data; name="{name}"\r\n\r\n'.encode()
            + value.encode("utf-8")
            + b"\r\n"
        )
    for name, filename, content in files:
        parts.append(
            (
                f"--{boundary}\r\n"
                f'Content-Disposition: form-data; name="{name}"; filename="{filename}"\r\n'
                "Content-Type: application/octet-stream\r\n\r\n"
            ).encode()
            + content
            + b"\r\n"
        )
    parts.append(f"--{boundary}--\r\n".encode())
    return b"".join(parts)
