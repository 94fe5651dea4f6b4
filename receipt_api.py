"""
receipt_api.py - FastAPI HTTP layer for the receipt points service.

Endpoints:
  - POST /receipts/process       store a receipt, return its id
  - GET  /receipts/{id}/points   score a stored receipt

No scoring logic is implemented here; see points.py.
"""

from __future__ import annotations

import os

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from logging_config import get_logger, setup_logging_from_env
from models import PointsResponse, Receipt, ReceiptIdResponse
from points import calculate_points
from receipt_store import InMemoryReceiptStore, ReceiptStorage

logger = get_logger("receipt-api")

DEFAULT_PORT = 8080
RECEIPTS_PREFIX = "/receipts/"
POINTS_SUFFIX = "/points"
RECEIPT_NOT_FOUND = "Receipt not found"

app = FastAPI(
    title="Receipt Points API",
    version="1.0.0",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

receipt_store: ReceiptStorage = InMemoryReceiptStore()


def receipt_id_from_path(path: str) -> str:
    """Strip the fixed /receipts/ prefix and /points suffix from a request path."""
    return path.removeprefix(RECEIPTS_PREFIX).removesuffix(POINTS_SUFFIX)


def decode_receipt(body: bytes) -> Receipt:
    """Decode a JSON request body into a Receipt.

    Raises:
        ValidationError: body is not valid JSON or a field has the wrong type.
    """
    return Receipt.model_validate_json(body)


@app.post("/receipts/process", response_model=ReceiptIdResponse)
async def process_receipt(request: Request):
    """Store a submitted receipt and return its generated id."""
    logger.info("process_receipt | received")
    body = await request.body()

    try:
        receipt = decode_receipt(body)
    except ValidationError as exc:
        logger.info("process_receipt | decode_error | error=%s", exc)
        return PlainTextResponse(str(exc), status_code=400)

    receipt_id = receipt_store.put(receipt)
    logger.info("process_receipt | stored | receipt_id=%s", receipt_id)
    return ReceiptIdResponse(id=receipt_id)


@app.get("/receipts/{receipt_path:path}", response_model=PointsResponse)
def get_receipt_points(request: Request):
    """Score the receipt addressed by /receipts/{id}/points."""
    receipt_id = receipt_id_from_path(request.url.path)
    logger.info("get_points | receipt_id=%s", receipt_id)

    receipt = receipt_store.get(receipt_id)
    if receipt is None:
        logger.info("get_points | not_found | receipt_id=%s", receipt_id)
        return PlainTextResponse(RECEIPT_NOT_FOUND, status_code=404)

    points = calculate_points(receipt)
    logger.info("get_points | receipt_id=%s | points=%d", receipt_id, points)
    return PointsResponse(points=points)


def serve() -> None:
    """Run the API server; exits if the port cannot be bound."""
    load_dotenv()
    setup_logging_from_env()
    port = int(os.getenv("PORT", str(DEFAULT_PORT)))
    logger.info("server_start | port=%d", port)
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    serve()
