"""
Dependency Injection for request data.

Expose parsed request data and validators to FastAPI handlers via Depends.
"""

from typing import Annotated, AsyncIterator

from fastapi import Depends, Request

from webforms.common.core.request_context import (
    clear_request_id,
    generate_request_id,
    get_request_id,
)

from ..core.data import RequestData
from ..core.parser import parse
from ..core.validator import Validator


async def get_request_data(request: Request) -> AsyncIterator[RequestData]:
    """
    Parse the request into RequestData and release its files after the response.

    A Request ID is generated for log correlation when none is set yet.
    """
    owns_request_id = get_request_id() is None
    if owns_request_id:
        generate_request_id()

    try:
        data = await parse(request)
        try:
            yield data
        finally:
            data.close()
    finally:
        if owns_request_id:
            clear_request_id()


RequestDataDep = Annotated[RequestData, Depends(get_request_data)]


def get_validator(data: RequestDataDep) -> Validator:
    return data.validator()


ValidatorDep = Annotated[Validator, Depends(get_validator)]
