from __future__ import annotations

import json
from typing import Any, Callable, Dict

from returns.result import Result, Success

from tailor_store.bootstrap import UseCases
from tailor_store.core.domain.model.family import NOT_ORDERING
from tailor_store.core.ports.inbound.browse_catalog import BrowseMode, BrowseRequest
from tailor_store.core.ports.inbound.place_order import PlaceOrderCommand


def run_cli(usecases: UseCases, command: str, raw: str) -> int:
    """
    command: "browse" or "place-order"; raw: JSON string.
    Examples:
      browse      {"mode":"F-S","father":"XXL","sons":["4-5"]}
      place-order {"design_id":"1","father":"XXL","sons":["4-5"],
                   "customer_name":"Asha","customer_phone":"98450 00000",
                   "customer_address":"12 MG Road"}
    """
    handler = _COMMANDS.get(command)
    if handler is None:
        print(f"unknown command: {command} (expected one of: {', '.join(_COMMANDS)})")
        return 2

    try:
        payload = json.loads(raw)
        if not isinstance(payload, dict):
            raise ValueError("payload must be a JSON object")
        run = handler(usecases, payload)
    except Exception as e:  # noqa: BLE001
        print(f"invalid_input: {e}")
        return 2

    return _report(run())


def _report(result: Result[Any, Exception]) -> int:
    if isinstance(result, Success):
        print("[ok]", result.unwrap())
        return 0

    err = result.failure()
    print("[ng]", str(err))
    return 1


def _browse(usecases: UseCases, payload: Dict[str, Any]) -> Callable[[], Result]:
    request = BrowseRequest(
        mode=BrowseMode(payload.get("mode", BrowseMode.ALL.value)),
        father=str(payload.get("father", NOT_ORDERING)),
        mother=str(payload.get("mother", NOT_ORDERING)),
        sons=tuple(str(s) for s in payload.get("sons", [])),
        daughters=tuple(str(s) for s in payload.get("daughters", [])),
        search=str(payload.get("search", "")),
    )

    def run() -> Result:
        return usecases.browse.browse(request).map(
            lambda designs: [
                {"id": d.id, "name": d.name, "units": d.stock.total_units()}
                for d in designs
            ]
        )

    return run


def _place_order(usecases: UseCases, payload: Dict[str, Any]) -> Callable[[], Result]:
    cmd = PlaceOrderCommand(
        design_id=str(payload["design_id"]),
        customer_name=str(payload.get("customer_name", "")),
        customer_phone=str(payload.get("customer_phone", "")),
        customer_address=str(payload.get("customer_address", "")),
        father=str(payload.get("father", NOT_ORDERING)),
        mother=str(payload.get("mother", NOT_ORDERING)),
        sons=tuple(str(s) for s in payload.get("sons", [])),
        daughters=tuple(str(s) for s in payload.get("daughters", [])),
        customer_email=str(payload.get("customer_email", "")),
        country_code=str(payload.get("country_code", "+91")),
    )

    def run() -> Result:
        return usecases.place_order.place_order(cmd).map(
            lambda receipt: {
                "order_id": receipt.order_id,
                "design_id": receipt.design_id,
                "combo_type": receipt.combo_type.value,
                "selected_sizes": dict(receipt.selected_sizes),
                "status": receipt.status.value,
            }
        )

    return run


_COMMANDS: Dict[str, Callable[[UseCases, Dict[str, Any]], Callable[[], Result]]] = {
    "browse": _browse,
    "place-order": _place_order,
}
