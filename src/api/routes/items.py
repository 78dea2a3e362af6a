"""Item endpoints.

Handlers only delegate to the item service and pick the status code;
validation lives in the guards and the domain layer.
"""

from typing import Any

from fastapi import APIRouter, Depends, status

from src.api.dependencies import ItemServiceDep, JsonBody, require_json_content_type
from src.api.schemas.errors import ErrorResponse
from src.api.schemas.items import ItemPayload, ItemResponse

# The body is decoded by read_json_body, so document it explicitly
JSON_BODY_DOC: dict[str, Any] = {
    "requestBody": {
        "content": {"application/json": {"schema": ItemPayload.model_json_schema()}}
    }
}

NOT_FOUND_RESPONSES: dict[int | str, dict[str, Any]] = {
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
}

router = APIRouter(
    prefix="/items",
    tags=["items"],
    dependencies=[Depends(require_json_content_type)],
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)


@router.post("", status_code=status.HTTP_201_CREATED, openapi_extra=JSON_BODY_DOC)
async def create_item(body: JsonBody, service: ItemServiceDep) -> ItemResponse:
    """Create an item."""
    payload = ItemPayload.model_validate(body).supplied()
    item = await service.create(payload)
    return ItemResponse.model_validate(item)


@router.get("")
async def list_items(service: ItemServiceDep) -> list[ItemResponse]:
    """List all items, oldest first."""
    items = await service.find_all()
    return [ItemResponse.model_validate(item) for item in items]


@router.get("/{item_id}", responses=NOT_FOUND_RESPONSES)
async def get_item(item_id: str, service: ItemServiceDep) -> ItemResponse:
    """Get one item."""
    item = await service.find_one(item_id)
    return ItemResponse.model_validate(item)


@router.patch("/{item_id}", responses=NOT_FOUND_RESPONSES, openapi_extra=JSON_BODY_DOC)
async def update_item(
    item_id: str, body: JsonBody, service: ItemServiceDep
) -> ItemResponse:
    """Apply a partial update to an item."""
    payload = ItemPayload.model_validate(body).supplied()
    item = await service.update(item_id, payload)
    return ItemResponse.model_validate(item)


@router.delete("/{item_id}", responses=NOT_FOUND_RESPONSES)
async def delete_item(item_id: str, service: ItemServiceDep) -> ItemResponse:
    """Delete an item and return its last state."""
    item = await service.remove(item_id)
    return ItemResponse.model_validate(item)
