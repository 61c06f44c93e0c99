from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Tuple

from returns.result import Failure, Result

from tailor_store.adapters.outbound.in_memory_designs import InMemoryDesignRepository
from tailor_store.adapters.outbound.in_memory_orders import InMemoryOrderRepository
from tailor_store.adapters.outbound.json_file_store import (
    JsonDesignRepository,
    JsonOrderRepository,
)
from tailor_store.adapters.outbound.listeners import StoreChangeFeed
from tailor_store.adapters.outbound.logging_events import LoggingEventPublisher
from tailor_store.config import Settings
from tailor_store.core.domain.model.design import Design, now_millis
from tailor_store.core.domain.model.errors import StoreError
from tailor_store.core.domain.model.stock import Category, StockMatrix
from tailor_store.core.domain.service.catalog_query_service import (
    CatalogQueryDeps,
    CatalogQueryService,
    DesignSource,
)
from tailor_store.core.domain.service.list_orders_service import (
    ListOrdersDeps,
    ListOrdersService,
)
from tailor_store.core.domain.service.live_view import LiveCollection
from tailor_store.core.domain.service.manage_designs_service import (
    ManageDesignsDeps,
    ManageDesignsService,
)
from tailor_store.core.domain.service.place_order_service import (
    PlaceOrderDeps,
    PlaceOrderService,
)
from tailor_store.core.domain.service.review_orders_service import (
    ReviewOrdersDeps,
    ReviewOrdersService,
)
from tailor_store.core.ports.outbound.designs import DesignRepository
from tailor_store.core.ports.outbound.orders import OrderRepository
from tailor_store.shared.logger import get_logger

logger = get_logger("bootstrap")


@dataclass(frozen=True)
class UseCases:
    browse: CatalogQueryService
    designs: ManageDesignsService
    place_order: PlaceOrderService
    review_orders: ReviewOrdersService
    list_orders: ListOrdersService


def demo_design() -> Design:
    stock = StockMatrix(
        {
            Category.MEN: {"XXL": 9, "3XL": 3},
            Category.BOYS: {
                "0-1": 20, "1-2": 3, "4-5": 2, "5-6": 6,
                "6-7": 3, "7-8": 1, "9-10": 3, "13-14": 3,
            },
            Category.GIRLS: {
                "0-1": 2, "2-3": 5, "3-4": 6, "5-6": 4,
                "6-7": 2, "9-10": 3, "11-12": 2,
            },
        }
    )  # fmt: skip
    return Design(
        id="1",
        name="Garden Leaf Print",
        color="White / Green",
        fabric="Organza",
        image_url="https://images.unsplash.com/photo-1594938298603-c8148c4dae35?auto=format&fit=crop&q=80&w=400",
        stock=stock,
        created_at=now_millis(),
    )


def build_stores(settings: Settings) -> Tuple[DesignRepository, OrderRepository]:
    if settings.store == "json":
        root = Path(settings.data_dir)
        logger.info("using JSON file store in %s", root.resolve())
        return (
            JsonDesignRepository(root / "designs.json"),
            JsonOrderRepository(root / "orders.json"),
        )
    if settings.store != "memory":
        raise ValueError(f"unknown store backend: {settings.store!r}")
    return InMemoryDesignRepository(), InMemoryOrderRepository()


def _seed(designs: DesignRepository) -> None:
    loaded = designs.load_designs()
    if isinstance(loaded, Failure) or loaded.unwrap():
        return
    designs.save_design(demo_design())
    logger.info("empty catalog seeded with the demo design")


@dataclass(frozen=True)
class LiveDesigns:
    """Serves catalog reads from a live in-memory copy of the design store."""

    collection: LiveCollection[Design]

    def load_designs(self) -> Result[Sequence[Design], StoreError]:
        return self.collection.snapshot()


def catalog_source(
    settings: Settings, designs: DesignRepository, feed: StoreChangeFeed
) -> DesignSource:
    # JSON files can be written by other processes, so they are read directly
    if settings.store == "json":
        return designs

    collection = LiveCollection(
        designs.load_designs,
        key=lambda d: d.id,
        newest_first=lambda d: d.created_at,
    ).follow(feed.on_design_changed)
    return LiveDesigns(collection)


def build_usecases(settings: Settings | None = None) -> UseCases:
    settings = settings or Settings()
    designs, orders = build_stores(settings)
    events = LoggingEventPublisher()

    if settings.seed_demo:
        _seed(designs)

    feed = StoreChangeFeed(designs=designs, orders=orders)  # type: ignore[arg-type]

    return UseCases(
        browse=CatalogQueryService(
            CatalogQueryDeps(designs=catalog_source(settings, designs, feed))
        ),
        designs=ManageDesignsService(ManageDesignsDeps(designs=designs)),
        place_order=PlaceOrderService(
            PlaceOrderDeps(designs=designs, orders=orders, events=events)
        ),
        review_orders=ReviewOrdersService(
            ReviewOrdersDeps(designs=designs, orders=orders, events=events)
        ),
        list_orders=ListOrdersService(ListOrdersDeps(orders=orders, designs=designs)),
    )
