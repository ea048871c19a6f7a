"""BaseService: abstract foundation for iconctl services.

Every service receives an :class:`IconEngine` at construction time and
converts the engine's typed errors into failed ServiceResults.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from iconctl.services.result import ServiceResult

if TYPE_CHECKING:
    from iconctl.domain.errors import IconError
    from iconctl.infrastructure.engine import IconEngine

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class IconService(BaseService):
            def find(self, reference: str) -> ServiceResult:
                try:
                    handle = self._engine.resolve(reference)
                except IconError as exc:
                    return self._failure("find", exc)
                ...
    """

    def __init__(self, engine: IconEngine) -> None:
        self._engine = engine

    @staticmethod
    def _failure(
        op: str,
        exc: IconError,
        *,
        meta: dict[str, Any] | None = None,
    ) -> ServiceResult:
        """Build a failed result from a typed engine error."""
        logger.debug("%s failed: %s", op, exc)
        return ServiceResult.failure(op, exc.code, str(exc), detail=exc.context, meta=meta)
