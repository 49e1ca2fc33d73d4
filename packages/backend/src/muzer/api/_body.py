"""Request body parsing for routes that must authenticate first.

FastAPI parses declared body models before dependencies run, so a
malformed body would be rejected ahead of the session check. Routes
that need "401 regardless of body" read the body themselves, after
auth, through parse_body().
"""

import json
from typing import TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from muzer.errors import BadRequest

ModelT = TypeVar("ModelT", bound=BaseModel)


async def read_json_object(request: Request) -> dict:
    """Return the JSON object body, or {} if absent or not an object."""
    raw = await request.body()
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


async def parse_body(request: Request, model: type[ModelT]) -> ModelT:
    """Validate the JSON body against model. Raises BadRequest on bad fields."""
    payload = await read_json_object(request)
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first["loc"])
        raise BadRequest(f"{field}: {first['msg']}")
