"""Request models for the bundle stock server."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class BundleStockRequest(BaseModel):
    """Request model for /api/check-bundle-stock.

    Supports both line-item property formats:
    - object: {"Max Comfort Insoles: Size": "M", ...}
    - list: [{"name": "Max Comfort Insoles: Size", "value": "M"}, ...]
    """

    properties: dict[str, Any] | list[dict[str, Any]] = Field(
        validation_alias=AliasChoices("properties", "lineItemProperties", "line_item_properties"),
    )
    quantity: int = Field(
        default=1,
        ge=1,
        validation_alias=AliasChoices("quantity", "qty"),
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("properties")
    @classmethod
    def properties_not_empty(cls, value: dict[str, Any] | list[dict[str, Any]]):
        if not value:
            raise ValueError("properties must not be empty")
        return value
