from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from returns.result import Result, Success

from tailor_store.bootstrap import UseCases
from tailor_store.core.domain.model.design import DEFAULT_LABEL, Design
from tailor_store.core.domain.model.errors import (
    AlreadyProcessed,
    DesignNotFound,
    OrderNotFound,
    PersistenceError,
    PublishError,
    StoreError,
    ValidationError,
)
from tailor_store.core.domain.model.family import NOT_ORDERING
from tailor_store.core.domain.model.order import Order
from tailor_store.core.domain.service.reconcile import Deducted
from tailor_store.core.ports.inbound.browse_catalog import BrowseMode, BrowseRequest
from tailor_store.core.ports.inbound.list_orders import ListOrdersQuery, OrderView
from tailor_store.core.ports.inbound.manage_designs import (
    AdjustStockCommand,
    RegisterDesignCommand,
    SetStockCommand,
    UpdateDesignCommand,
)
from tailor_store.core.ports.inbound.place_order import PlaceOrderCommand
from tailor_store.core.ports.inbound.review_orders import AcceptanceReport
from tailor_store.shared.logger import get_logger

logger = get_logger("web")

# ---- HTTP DTOs (adapter layer) ---------------------------------------------


class DesignIn(BaseModel):
    name: str = Field(min_length=1, examples=["Garden Leaf Print"])
    color: str = Field("", examples=["White / Green"])
    fabric: str = Field("", examples=["Organza"])
    image_url: str = Field(min_length=1)
    child_type: str = Field("none", examples=["unisex"])
    label: Optional[str] = DEFAULT_LABEL
    stock: Optional[Dict[str, Dict[str, int]]] = None


class DesignPatch(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None
    fabric: Optional[str] = None
    image_url: Optional[str] = None
    child_type: Optional[str] = None
    label: Optional[str] = None
    stock: Optional[Dict[str, Dict[str, int]]] = None


class StockCountIn(BaseModel):
    count: int


class StockDeltaIn(BaseModel):
    delta: int = Field(examples=[-1])


class DesignOut(BaseModel):
    id: str
    name: str
    color: str
    fabric: str
    image_url: str
    child_type: str
    label: Optional[str]
    created_at: int
    stock: Dict[str, Dict[str, int]]
    total_units: int


class PlaceOrderRequest(BaseModel):
    design_id: str = Field(min_length=1)
    father: str = Field(NOT_ORDERING, examples=["XL"])
    mother: str = Field(NOT_ORDERING, examples=["L"])
    sons: List[str] = Field(default_factory=list, examples=[["4-5"]])
    daughters: List[str] = Field(default_factory=list)
    customer_name: str = Field(min_length=1)
    customer_phone: str = Field(min_length=1)
    customer_address: str = Field(min_length=1)
    customer_email: str = ""
    country_code: str = "+91"


class OrderOut(BaseModel):
    id: str
    design_id: str
    design_name: Optional[str] = None
    combo_type: str
    selected_sizes: Dict[str, str]
    status: str
    created_at: int
    customer_name: str
    customer_phone: str


class OutcomeOut(BaseModel):
    role: str
    category: str
    size: str
    result: str  # deducted | skipped
    reason: Optional[str] = None


class AcceptanceOut(BaseModel):
    order: OrderOut
    stock_written: bool
    outcomes: List[OutcomeOut]


class ErrorResponse(BaseModel):
    type: str
    message: str
    details: Optional[List[Dict[str, Any]]] = None


# ---- mapping helpers -------------------------------------------------------


def _design_out(d: Design) -> DesignOut:
    return DesignOut(
        id=d.id,
        name=d.name,
        color=d.color,
        fabric=d.fabric,
        image_url=d.image_url,
        child_type=d.child_type.value,
        label=d.label,
        created_at=d.created_at,
        stock=d.stock.to_dict(),
        total_units=d.stock.total_units(),
    )


def _order_out(o: Order, design_name: Optional[str] = None) -> OrderOut:
    return OrderOut(
        id=o.id,
        design_id=o.design_id,
        design_name=design_name,
        combo_type=o.combo_type.value,
        selected_sizes=dict(o.selected_sizes),
        status=o.status.value,
        created_at=o.created_at,
        customer_name=o.customer.name,
        customer_phone=o.customer.phone,
    )


def _view_out(v: OrderView) -> OrderOut:
    return _order_out(v.order, v.design_name)


def _acceptance_out(r: AcceptanceReport) -> AcceptanceOut:
    return AcceptanceOut(
        order=_order_out(r.order),
        stock_written=r.stock_written,
        outcomes=[
            OutcomeOut(
                role=o.role,
                category=o.category.value,
                size=o.size,
                result="deducted" if isinstance(o, Deducted) else "skipped",
                reason=None if isinstance(o, Deducted) else o.reason.value,
            )
            for o in r.outcomes
        ],
    )


def _map_error_to_http(err: StoreError) -> tuple[int, ErrorResponse]:
    if isinstance(err, ValidationError):
        return 400, ErrorResponse(type=type(err).__name__, message=str(err))

    if isinstance(err, (DesignNotFound, OrderNotFound)):
        return 404, ErrorResponse(type=type(err).__name__, message=str(err))

    if isinstance(err, AlreadyProcessed):
        return 409, ErrorResponse(type=type(err).__name__, message=str(err))

    if isinstance(err, PublishError):
        return 503, ErrorResponse(type=type(err).__name__, message=str(err))

    if isinstance(err, PersistenceError):
        return 500, ErrorResponse(type=type(err).__name__, message=str(err))

    return 500, ErrorResponse(type=type(err).__name__, message=str(err))


def _error(result: Result) -> JSONResponse:
    err: StoreError = result.failure()
    status, body = _map_error_to_http(err)
    if status >= 500:
        logger.error("request failed: %s", err)
    return JSONResponse(status_code=status, content=body.model_dump())


_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def create_app(usecases: UseCases) -> FastAPI:
    app = FastAPI(title="tailor_store")

    # --- exception handlers -------------------------------------------------

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        body = ErrorResponse(
            type="RequestValidationError",
            message="invalid request",
            details=[{k: v for k, v in e.items() if k != "ctx"} for e in exc.errors()],
        )
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(Exception)
    async def handle_unexpected(_: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled error")
        body = ErrorResponse(type=type(exc).__name__, message="internal server error")
        return JSONResponse(status_code=500, content=body.model_dump())

    # --- routes --------------------------------------------------------------

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/catalog", response_model=List[DesignOut], responses=_ERRORS)
    def browse_catalog(
        mode: BrowseMode = Query(BrowseMode.ALL),
        father: str = Query(NOT_ORDERING),
        mother: str = Query(NOT_ORDERING),
        sons: List[str] = Query([]),
        daughters: List[str] = Query([]),
        search: str = Query(""),
    ) -> Any:
        result = usecases.browse.browse(
            BrowseRequest(
                mode=mode,
                father=father,
                mother=mother,
                sons=tuple(sons),
                daughters=tuple(daughters),
                search=search,
            )
        )
        if isinstance(result, Success):
            return [_design_out(d) for d in result.unwrap()]
        return _error(result)

    @app.get("/designs", response_model=List[DesignOut], responses=_ERRORS)
    def list_designs(search: str = Query("")) -> Any:
        result = usecases.designs.list_designs(search)
        if isinstance(result, Success):
            return [_design_out(d) for d in result.unwrap()]
        return _error(result)

    @app.post("/designs", response_model=DesignOut, status_code=201, responses=_ERRORS)
    def register_design(req: DesignIn, response: Response) -> Any:
        result = usecases.designs.register(
            RegisterDesignCommand(
                name=req.name,
                color=req.color,
                fabric=req.fabric,
                image_url=req.image_url,
                child_type=req.child_type,
                label=req.label,
                stock=req.stock,
            )
        )
        if isinstance(result, Success):
            design = result.unwrap()
            response.headers["Location"] = f"/designs/{design.id}"
            return _design_out(design)
        return _error(result)

    @app.patch("/designs/{design_id}", response_model=DesignOut, responses=_ERRORS)
    def update_design(design_id: str, req: DesignPatch) -> Any:
        result = usecases.designs.update_details(
            UpdateDesignCommand(design_id=design_id, **req.model_dump())
        )
        if isinstance(result, Success):
            return _design_out(result.unwrap())
        return _error(result)

    @app.put(
        "/designs/{design_id}/stock/{category}/{size}",
        response_model=DesignOut,
        responses=_ERRORS,
    )
    def set_stock(design_id: str, category: str, size: str, req: StockCountIn) -> Any:
        result = usecases.designs.set_stock(
            SetStockCommand(design_id=design_id, category=category, size=size, count=req.count)
        )
        if isinstance(result, Success):
            return _design_out(result.unwrap())
        return _error(result)

    @app.post(
        "/designs/{design_id}/stock/{category}/{size}/adjust",
        response_model=DesignOut,
        responses=_ERRORS,
    )
    def adjust_stock(design_id: str, category: str, size: str, req: StockDeltaIn) -> Any:
        result = usecases.designs.adjust_stock(
            AdjustStockCommand(design_id=design_id, category=category, size=size, delta=req.delta)
        )
        if isinstance(result, Success):
            return _design_out(result.unwrap())
        return _error(result)

    @app.delete("/designs/{design_id}", status_code=204, responses=_ERRORS)
    def delete_design(design_id: str) -> Response:
        result = usecases.designs.delete(design_id)
        if isinstance(result, Success):
            return Response(status_code=204)
        return _error(result)

    @app.get("/orders", response_model=List[OrderOut], responses=_ERRORS)
    def list_orders(status: Optional[str] = Query(None)) -> Any:
        result = usecases.list_orders.list_orders(ListOrdersQuery(status=status))
        if isinstance(result, Success):
            return [_view_out(v) for v in result.unwrap()]
        return _error(result)

    @app.post("/orders", status_code=201, responses={**_ERRORS, 503: {"model": ErrorResponse}})
    def place_order(req: PlaceOrderRequest, response: Response) -> Any:
        result = usecases.place_order.place_order(
            PlaceOrderCommand(
                design_id=req.design_id,
                father=req.father,
                mother=req.mother,
                sons=tuple(req.sons),
                daughters=tuple(req.daughters),
                customer_name=req.customer_name,
                customer_phone=req.customer_phone,
                customer_address=req.customer_address,
                customer_email=req.customer_email,
                country_code=req.country_code,
            )
        )
        if isinstance(result, Success):
            receipt = result.unwrap()
            response.headers["Location"] = f"/orders/{receipt.order_id}"
            return {
                "order_id": receipt.order_id,
                "design_id": receipt.design_id,
                "combo_type": receipt.combo_type.value,
                "selected_sizes": dict(receipt.selected_sizes),
                "status": receipt.status.value,
            }
        return _error(result)

    @app.post(
        "/orders/{order_id}/accept",
        response_model=AcceptanceOut,
        responses={**_ERRORS, 409: {"model": ErrorResponse}},
    )
    def accept_order(order_id: str) -> Any:
        result = usecases.review_orders.accept(order_id)
        if isinstance(result, Success):
            return _acceptance_out(result.unwrap())
        return _error(result)

    @app.post(
        "/orders/{order_id}/reject",
        response_model=OrderOut,
        responses={**_ERRORS, 409: {"model": ErrorResponse}},
    )
    def reject_order(order_id: str) -> Any:
        result = usecases.review_orders.reject(order_id)
        if isinstance(result, Success):
            return _order_out(result.unwrap())
        return _error(result)

    return app
