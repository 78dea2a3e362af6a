"""FastAPI dependencies of the items API.

- **require_json_content_type**: Router-level Content-Type guard
- **read_json_body**: Strict UTF-8 + JSON decoding of the request body
- **get_item_store** / **get_item_service**: Service wiring per request
"""

import json
from typing import Annotated, Any

import orjson
from fastapi import Depends, Request

from src.api.content_type import ContentTypeValidator, default_content_type_validator
from src.core.exceptions import ContentTypeError
from src.core.types import JsonObject
from src.domain.items.ports import ItemStore
from src.domain.items.service import ItemService
from src.infrastructure.database.dependencies import DatabaseSession
from src.infrastructure.database.item_repository import ItemRepository


def get_content_type_validator(request: Request) -> ContentTypeValidator:
    """Return the validator the application was built with.

    Args:
        request: The current request.

    Returns:
        ContentTypeValidator: ``app.state.content_type_validator`` if set,
            otherwise the default JSON validator.
    """
    return getattr(
        request.app.state, "content_type_validator", default_content_type_validator
    )


async def require_json_content_type(
    request: Request,
    validator: Annotated[ContentTypeValidator, Depends(get_content_type_validator)],
) -> None:
    """Reject the request if its Content-Type is unacceptable.

    Args:
        request: The current request.
        validator: The application's Content-Type validator.

    Raises:
        ContentTypeError: If the validator rejects the request.
    """
    detail = validator.validate(
        request.method, request.headers.getlist("content-type") or None
    )
    if detail is not None:
        raise ContentTypeError(
            detail.message,
            context={"content_type": request.headers.get("content-type")},
        )


async def read_json_body(request: Request) -> JsonObject:
    """Decode the request body as strict UTF-8 JSON.

    An empty body is an empty object. The top-level value must be an object
    or an array; an array carries no item fields and yields an empty object.

    Args:
        request: The current request.

    Returns:
        JsonObject: The decoded object.

    Raises:
        UnicodeDecodeError: If the body is not valid UTF-8.
        json.JSONDecodeError: If the body is not valid JSON, or its top-level
            value is neither an object nor an array.
    """
    raw = await request.body()
    if not raw:
        return {}

    text = raw.decode("utf-8")
    document: Any = orjson.loads(text)

    if isinstance(document, dict):
        return document
    if isinstance(document, list):
        return {}
    msg = "Top-level JSON value must be an object or array"
    raise json.JSONDecodeError(msg, text, 0)


def get_item_store(session: DatabaseSession) -> ItemStore[Any]:
    """Provide the SQLAlchemy item store bound to the request session."""
    return ItemRepository(session)


def get_item_service(
    store: Annotated[ItemStore[Any], Depends(get_item_store)],
) -> ItemService[Any]:
    """Provide the item service for the current request."""
    return ItemService(store)


JsonBody = Annotated[dict[str, Any], Depends(read_json_body)]
ItemServiceDep = Annotated[ItemService[Any], Depends(get_item_service)]
