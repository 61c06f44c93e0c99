from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Sequence

from returns.pipeline import flow
from returns.pointfree import bind
from returns.result import Failure, Result, Success

from tailor_store.core.domain.model.design import (
    ChildType,
    Design,
    new_id,
    now_millis,
)
from tailor_store.core.domain.model.errors import (
    InvalidConstraint,
    StoreError,
    ValidationError,
)
from tailor_store.core.domain.model.stock import Category, StockMatrix
from tailor_store.core.ports.inbound.manage_designs import (
    AdjustStockCommand,
    ManageDesignsUseCase,
    RegisterDesignCommand,
    SetStockCommand,
    UpdateDesignCommand,
)
from tailor_store.core.ports.outbound.designs import DesignRepository
from tailor_store.shared.logger import get_logger

logger = get_logger("designs")


@dataclass(frozen=True)
class ManageDesignsDeps:
    designs: DesignRepository


@dataclass(frozen=True)
class ManageDesignsService(ManageDesignsUseCase):
    deps: ManageDesignsDeps

    def register(self, command: RegisterDesignCommand) -> Result[Design, StoreError]:
        return flow(
            command,
            _validate_register,
            bind(_build_design),
            bind(self._save),
        )

    def update_details(self, command: UpdateDesignCommand) -> Result[Design, StoreError]:
        return self.deps.designs.get_design(command.design_id).bind(
            lambda current: _apply_update(current, command)
        ).bind(self._save)

    def set_stock(self, command: SetStockCommand) -> Result[Design, StoreError]:
        def edit(stock: StockMatrix) -> None:
            stock.set(Category.parse(command.category), command.size, command.count)

        return self._edit_stock(command.design_id, edit)

    def adjust_stock(self, command: AdjustStockCommand) -> Result[Design, StoreError]:
        def edit(stock: StockMatrix) -> None:
            stock.adjust(Category.parse(command.category), command.size, command.delta)

        return self._edit_stock(command.design_id, edit)

    def delete(self, design_id: str) -> Result[None, StoreError]:
        # orders keep their design_id and show up as "Unknown Design"
        result = self.deps.designs.delete_design(design_id)
        if isinstance(result, Success):
            logger.info("design deleted id=%s", design_id)
        return result

    def list_designs(self, search: str = "") -> Result[Sequence[Design], StoreError]:
        return self.deps.designs.load_designs().map(
            lambda designs: tuple(
                d for d in designs if d.matches_text(search, fields=("name", "fabric"))
            )
        )

    # ---- side effects ------------------------------------------------------

    def _edit_stock(
        self, design_id: str, edit: Callable[[StockMatrix], None]
    ) -> Result[Design, StoreError]:
        got = self.deps.designs.get_design(design_id)
        if isinstance(got, Failure):
            return got
        design = got.unwrap()

        stock = design.stock.copy()
        try:
            edit(stock)
        except InvalidConstraint as exc:
            return Failure(exc)
        return self._save(design.with_stock(stock))

    def _save(self, design: Design) -> Result[Design, StoreError]:
        result = self.deps.designs.save_design(design)
        if isinstance(result, Success):
            logger.info(
                "design saved id=%s name=%r units=%d",
                design.id,
                design.name,
                design.stock.total_units(),
            )
        return result


# ---- pure helpers ----------------------------------------------------------


def _validate_register(
    cmd: RegisterDesignCommand,
) -> Result[RegisterDesignCommand, StoreError]:
    if not cmd.name.strip():
        return Failure(ValidationError("name is required"))
    if not cmd.image_url.strip():
        return Failure(ValidationError("image_url is required"))
    return Success(cmd)


def _parse_child_type(raw: str) -> Result[ChildType, StoreError]:
    try:
        return Success(ChildType((raw or "none").strip().lower()))
    except ValueError:
        return Failure(InvalidConstraint("unknown child category", value=raw))


def _parse_stock(raw) -> Result[StockMatrix, StoreError]:
    try:
        return Success(StockMatrix.from_dict(raw))
    except InvalidConstraint as exc:
        return Failure(exc)
    except (TypeError, ValueError):
        return Failure(ValidationError("stock counts must be integers"))


def _build_design(cmd: RegisterDesignCommand) -> Result[Design, StoreError]:
    return _parse_child_type(cmd.child_type).bind(
        lambda child_type: _parse_stock(cmd.stock).map(
            lambda stock: Design(
                id=new_id(),
                name=cmd.name.strip(),
                color=cmd.color.strip(),
                fabric=cmd.fabric.strip(),
                image_url=cmd.image_url.strip(),
                stock=stock,
                child_type=child_type,
                label=cmd.label,
                created_at=now_millis(),
            )
        )
    )


def _apply_update(current: Design, cmd: UpdateDesignCommand) -> Result[Design, StoreError]:
    if cmd.name is not None and not cmd.name.strip():
        return Failure(ValidationError("name must be non-empty when provided"))
    if cmd.image_url is not None and not cmd.image_url.strip():
        return Failure(ValidationError("image_url must be non-empty when provided"))

    changes = {
        k: v.strip()
        for k, v in (
            ("name", cmd.name),
            ("color", cmd.color),
            ("fabric", cmd.fabric),
            ("image_url", cmd.image_url),
        )
        if v is not None
    }
    if cmd.label is not None:
        changes["label"] = cmd.label

    updated = replace(current, **changes)

    if cmd.child_type is not None:
        parsed = _parse_child_type(cmd.child_type)
        if isinstance(parsed, Failure):
            return parsed
        updated = replace(updated, child_type=parsed.unwrap())

    if cmd.stock is not None:
        stock = _parse_stock(cmd.stock)
        if isinstance(stock, Failure):
            return stock
        updated = updated.with_stock(stock.unwrap())

    return Success(updated)
