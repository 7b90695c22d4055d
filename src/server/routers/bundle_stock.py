"""Bundle stock check router.

Called by the storefront before checkout to confirm both bundle items
can be fulfilled.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends

from src.core.logging import log_event
from src.integrations.shopify import InventoryClientError, InventoryErrorType
from src.server.dependencies import get_stock_checker
from src.server.exceptions import ExternalServiceError, ServiceNotConfiguredError, ValidationError
from src.server.models.requests import BundleStockRequest
from src.services.bundle import BundleStockChecker
from src.services.exceptions import BundlePropertiesError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["bundle"])


@router.post("/check-bundle-stock")
async def check_bundle_stock(
    payload: BundleStockRequest,
    checker: Annotated[BundleStockChecker, Depends(get_stock_checker)],
) -> dict[str, Any]:
    """Check whether every item of the bundle is in stock."""
    log_event(logger, event="bundle_request_received", quantity=payload.quantity)

    try:
        result = await checker.check_bundle(payload.properties, quantity=payload.quantity)
    except BundlePropertiesError as e:
        log_event(logger, event="bundle_request_rejected", level="warning", products=e.products)
        raise ValidationError(e.reason, detail=str(e)) from e
    except InventoryClientError as e:
        log_event(
            logger,
            event="bundle_platform_error",
            level="error",
            status_code=e.status_code,
        )
        if e.error_type is InventoryErrorType.CONFIGURATION:
            raise ServiceNotConfiguredError("shopify", e.message) from e
        raise ExternalServiceError("shopify", e.error_type.value) from e

    return result.model_dump(mode="json")
