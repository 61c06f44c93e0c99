from __future__ import annotations

from dataclasses import asdict, dataclass

from returns.result import Failure, Result, Success

from tailor_store.core.domain.model.errors import PublishError, StoreError
from tailor_store.core.ports.outbound.events import EventPublisher, StoreEvent
from tailor_store.shared.logger import get_logger

logger = get_logger("events")


@dataclass
class LoggingEventPublisher(EventPublisher):
    fail: bool = False

    def publish(self, event: StoreEvent) -> Result[None, StoreError]:
        if self.fail:
            return Failure(PublishError(message="publisher is down"))
        logger.info("[event] %s", type(event).__name__, extra={"event": asdict(event)})
        return Success(None)
