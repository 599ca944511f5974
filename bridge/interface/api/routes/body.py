"""Request body helpers."""

from typing import Any

from fastapi import Request

from bridge.interface.error import MalformedBodyError


async def read_json_body(request: Request) -> Any:
    """Read the request body as JSON.

    An empty body reads as None.

    Raises:
        MalformedBodyError: If the body is not valid JSON
    """
    if not (await request.body()).strip():
        return None
    try:
        return await request.json()
    except (UnicodeDecodeError, ValueError) as e:
        raise MalformedBodyError(str(e)) from e
