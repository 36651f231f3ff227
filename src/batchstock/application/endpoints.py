"""Request/response boundary for both services.

Each method takes already-decoded request data and returns a
``(status_code, payload)`` pair using the camelCase wire format. Any
web framework can mount these directly; the CLI and the HTTP gateway's
tests use them as-is.
"""

from __future__ import annotations

import logging
from typing import Any

from batchstock.application.dto import InventoryDTO, OrderDTO, ReservationDTO
from batchstock.application.place_order import PlaceOrderHandler
from batchstock.application.reserve_inventory import ReserveInventoryHandler
from batchstock.application.show_inventory import ShowInventoryHandler
from batchstock.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    InsufficientInventoryError,
    InvalidRequestError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)

Response = tuple[int, dict[str, Any]]

GENERIC_ERROR_MESSAGE = "An error occurred while processing your order"


def status_for(exc: Exception) -> int:
    """Map an error kind to its response status."""
    if isinstance(exc, EntityNotFoundError):
        return 404
    if isinstance(exc, (InvalidRequestError, InsufficientInventoryError)):
        return 400
    if isinstance(exc, UpstreamUnavailableError):
        return 503
    return 500


def _coerce_id(raw: Any, field: str) -> int:
    """Path parameters arrive as text; bodies carry ints."""
    if isinstance(raw, str) and raw.strip().isdigit():
        return int(raw)
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if raw is None:
        raise InvalidRequestError(f"{field} cannot be null")
    raise InvalidRequestError(f"{field} must be an integer, got {raw!r}")


def _require_body(body: Any) -> dict[str, Any]:
    if not isinstance(body, dict):
        raise InvalidRequestError("Request body must be a JSON object")
    return body


# --- Serialization ------------------------------------------------------------


def inventory_payload(dto: InventoryDTO) -> dict[str, Any]:
    return {
        "productId": dto.product_id,
        "productName": dto.product_name,
        "batches": [
            {"batchId": b.batch_id, "quantity": b.quantity, "expiryDate": b.expiry_date}
            for b in dto.batches
        ],
    }


def reservation_payload(dto: ReservationDTO) -> dict[str, Any]:
    return {
        "success": dto.success,
        "message": dto.message,
        "updatedQuantity": dto.updated_quantity,
        "reservedBatches": [
            {"batchId": a.batch_id, "quantityTaken": a.quantity_taken}
            for a in dto.allocations
        ],
    }


def order_payload(dto: OrderDTO) -> dict[str, Any]:
    return {
        "orderId": dto.id,
        "productId": dto.product_id,
        "productName": dto.product_name,
        "quantity": dto.quantity,
        "status": dto.status,
        "reservedFromBatchIds": list(dto.reserved_batch_ids),
        "message": dto.message,
    }


# --- Inventory service --------------------------------------------------------


class InventoryEndpoints:

    def __init__(
        self,
        show_handler: ShowInventoryHandler,
        reserve_handler: ReserveInventoryHandler,
    ) -> None:
        self._show = show_handler
        self._reserve = reserve_handler

    def get_inventory(self, product_id: Any) -> Response:
        """``GET /inventory/{productId}``"""
        try:
            dto = self._show.handle(_coerce_id(product_id, "Product ID"))
        except DomainException as exc:
            logger.error("Error retrieving inventory for product ID %s: %s", product_id, exc)
            return status_for(exc), {"message": str(exc)}
        return 200, inventory_payload(dto)

    def reserve(self, body: Any) -> Response:
        """``POST /inventory/update`` with ``{productId, quantity, batchIds?}``"""
        try:
            data = _require_body(body)
            hint = data.get("batchIds")
            dto = self._reserve.handle(
                product_id=_coerce_id(data.get("productId"), "Product ID"),
                quantity=data.get("quantity"),
                batch_hint=list(hint) if isinstance(hint, list) else None,
            )
        except InsufficientInventoryError as exc:
            logger.error("Error updating inventory: %s", exc)
            return 400, {
                "success": False,
                "message": str(exc),
                "updatedQuantity": 0,
                "available": exc.available,
                "requested": exc.requested,
            }
        except DomainException as exc:
            logger.error("Error updating inventory: %s", exc)
            return status_for(exc), {
                "success": False,
                "message": str(exc),
                "updatedQuantity": 0,
            }
        return 200, reservation_payload(dto)


# --- Order service ------------------------------------------------------------


class OrderEndpoints:

    def __init__(self, place_handler: PlaceOrderHandler) -> None:
        self._place = place_handler

    def place_order(self, body: Any) -> Response:
        """``POST /order`` with ``{productId, quantity}``"""
        try:
            data = _require_body(body)
            dto = self._place.handle(
                product_id=data.get("productId"),
                quantity=data.get("quantity"),
            )
        except DomainException as exc:
            logger.error("Error while placing order: %s", exc)
            return status_for(exc), {"message": str(exc)}
        except Exception:
            logger.exception("Unexpected error while placing order")
            return 500, {"message": GENERIC_ERROR_MESSAGE}
        return 201, order_payload(dto)
