"""
models.py - Data models for the receipt points service.

    POST /receipts/process  ->  Receipt  ->  ReceiptIdResponse
    GET  /receipts/{id}/points           ->  PointsResponse

Field names on the wire are camelCase; Python attributes are snake_case and
the models accept either on input. Amounts stay strings exactly as submitted;
points.py parses them when scoring.

A JSON null anywhere in a receipt decodes to the empty value for that field
(an empty receipt for a null body), so only undecodable JSON or a value of
the wrong type is rejected.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Item(BaseModel):
    """A single purchased line on a receipt."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    short_description: str = Field(
        default="",
        alias="shortDescription",
        description="Short product description as printed on the receipt.",
    )
    price: str = Field(
        default="",
        description="Line price as a decimal string, e.g. '6.49'.",
    )

    @model_validator(mode="before")
    @classmethod
    def _null_item_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("short_description", "price", mode="before")
    @classmethod
    def _null_text_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class Receipt(BaseModel):
    """A submitted purchase receipt.

    Missing fields decode to empty values and unknown fields are ignored, so
    a partial receipt is still accepted and scored. A field with the wrong
    JSON type (a number where a string is expected) fails validation.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    retailer: str = Field(default="", description="Retailer or store name.")
    purchase_date: str = Field(
        default="",
        alias="purchaseDate",
        description="Purchase date, YYYY-MM-DD.",
    )
    purchase_time: str = Field(
        default="",
        alias="purchaseTime",
        description="Purchase time, 24-hour HH:MM.",
    )
    items: tuple[Item, ...] = Field(
        default=(),
        description="Purchased items in receipt order.",
    )
    total: str = Field(default="", description="Receipt total as a decimal string.")

    @model_validator(mode="before")
    @classmethod
    def _null_receipt_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("retailer", "purchase_date", "purchase_time", "total", mode="before")
    @classmethod
    def _null_text_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("items", mode="before")
    @classmethod
    def _null_items_are_empty(cls, value: Any) -> Any:
        return () if value is None else value


class ReceiptIdResponse(BaseModel):
    id: str


class PointsResponse(BaseModel):
    points: int = Field(ge=0)
