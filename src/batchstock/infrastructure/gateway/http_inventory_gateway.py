"""HTTP implementation of InventoryGateway.

Talks to a remote inventory service exposing:

    GET  {base_url}/inventory/{productId}
    POST {base_url}/inventory/update

Each call is a single round trip with a timeout; there is no retry.
Transport failures and response shapes we cannot read surface as
UpstreamUnavailableError and are never mistaken for a stock shortage.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import requests

from batchstock.domain.exceptions import (
    InsufficientInventoryError,
    InvalidRequestError,
    ProductNotFoundError,
    UpstreamUnavailableError,
)
from batchstock.domain.gateway.inventory_gateway import InventoryGateway
from batchstock.domain.model.batch import Batch, InventorySnapshot
from batchstock.domain.model.reservation import BatchAllocation, ReservationReceipt

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


class HttpInventoryGateway(InventoryGateway):

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def get_inventory(self, product_id: int) -> InventorySnapshot:
        url = f"{self._base_url}/inventory/{product_id}"
        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.exceptions.RequestException as e:
            logger.error("Inventory service unreachable at %s: %s", url, e)
            raise UpstreamUnavailableError(
                f"Inventory service is unavailable: {e}"
            ) from e

        if response.status_code == 404:
            raise ProductNotFoundError(product_id)
        if response.status_code == 400:
            raise InvalidRequestError(self._message(response))
        if response.status_code != 200:
            raise UpstreamUnavailableError(
                f"Inventory service returned {response.status_code}: {response.text}"
            )

        data = self._json(response)
        try:
            pid = int(data["productId"])
            name = str(data["productName"])
            batches = tuple(
                Batch(
                    batch_id=int(b["batchId"]),
                    product_id=pid,
                    product_name=name,
                    remaining_quantity=int(b["quantity"]),
                    expiry_date=date.fromisoformat(b["expiryDate"]),
                )
                for b in data["batches"]
            )
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamUnavailableError(
                f"Unexpected inventory response shape: {e!r}"
            ) from e
        return InventorySnapshot(product_id=pid, product_name=name, batches=batches)

    def reserve(
        self,
        product_id: int,
        quantity: int,
        batch_hint: list[int] | None = None,
    ) -> ReservationReceipt:
        url = f"{self._base_url}/inventory/update"
        payload: dict[str, Any] = {"productId": product_id, "quantity": quantity}
        if batch_hint is not None:
            payload["batchIds"] = list(batch_hint)

        try:
            response = self._session.post(url, json=payload, timeout=self._timeout)
        except requests.exceptions.RequestException as e:
            logger.error("Inventory service unreachable at %s: %s", url, e)
            raise UpstreamUnavailableError(
                f"Inventory service is unavailable: {e}"
            ) from e

        if response.status_code == 404:
            raise ProductNotFoundError(product_id)
        if response.status_code == 400:
            data = self._json(response)
            message = str(data.get("message") or "Inventory update rejected")
            if "available" not in data or "requested" not in data:
                raise InvalidRequestError(message)
            try:
                available = int(data["available"])
                requested = int(data["requested"])
            except (TypeError, ValueError) as e:
                raise UpstreamUnavailableError(
                    f"Unexpected rejection response shape: {e!r}"
                ) from e
            raise InsufficientInventoryError(available, requested, message=message)
        if response.status_code != 200:
            raise UpstreamUnavailableError(
                f"Inventory service returned {response.status_code}: {response.text}"
            )

        data = self._json(response)
        try:
            if data["success"] is not True:
                raise ValueError(f"success={data['success']!r}")
            allocations = tuple(
                BatchAllocation(int(a["batchId"]), int(a["quantityTaken"]))
                for a in data["reservedBatches"]
            )
            updated = int(data.get("updatedQuantity", quantity))
            if not allocations:
                raise ValueError("no reserved batches")
            taken = sum(a.quantity_taken for a in allocations)
            if taken != quantity or updated != quantity:
                raise ValueError(
                    f"reserved {taken} (updatedQuantity={updated}), requested {quantity}"
                )
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamUnavailableError(
                f"Unexpected reservation response shape: {e!r}"
            ) from e

        return ReservationReceipt(
            product_id=product_id,
            product_name="",
            quantity=updated,
            allocations=allocations,
        )

    # --- Response helpers -----------------------------------------------------

    @staticmethod
    def _json(response: requests.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamUnavailableError(
                f"Inventory service returned invalid JSON: {e}"
            ) from e
        if not isinstance(data, dict):
            raise UpstreamUnavailableError("Inventory service returned a non-object body")
        return data

    @classmethod
    def _message(cls, response: requests.Response) -> str:
        return str(cls._json(response).get("message") or response.text)
