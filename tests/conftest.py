# tests/conftest.py
from typing import Dict, Mapping

import pytest

from tailor_store.adapters.outbound.in_memory_designs import InMemoryDesignRepository
from tailor_store.adapters.outbound.in_memory_orders import InMemoryOrderRepository
from tailor_store.adapters.outbound.logging_events import LoggingEventPublisher
from tailor_store.core.domain.model.design import ChildType, Design
from tailor_store.core.domain.model.stock import StockMatrix


def make_design(
    design_id: str = "d-1",
    stock: Mapping[str, Mapping[str, int]] | None = None,
    *,
    name: str = "Garden Leaf Print",
    color: str = "White / Green",
    fabric: str = "Organza",
    child_type: ChildType = ChildType.NONE,
    created_at: int = 1_000,
) -> Design:
    return Design(
        id=design_id,
        name=name,
        color=color,
        fabric=fabric,
        image_url=f"https://img.example/{design_id}.jpg",
        stock=StockMatrix.from_dict(stock or {}),
        child_type=child_type,
        created_at=created_at,
    )


@pytest.fixture()
def designs() -> InMemoryDesignRepository:
    return InMemoryDesignRepository()


@pytest.fixture()
def orders() -> InMemoryOrderRepository:
    return InMemoryOrderRepository()


@pytest.fixture()
def events() -> LoggingEventPublisher:
    return LoggingEventPublisher()


@pytest.fixture()
def stocked(designs: InMemoryDesignRepository):
    """Save designs into the in-memory repository and return them by id."""

    def _save(*items: Design) -> Dict[str, Design]:
        for d in items:
            designs.save_design(d)
        return {d.id: d for d in items}

    return _save
