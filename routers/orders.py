from fastapi import APIRouter, HTTPException, Body
from dto.request_dto.common import StatusUpdateRequest
from dto.request_dto.order import OrderCreateRequest, OrderTotalsRequest
from dto.response_dto.financials import ItemsTotalsResponse
from services.orders import OrderService
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.get("", summary="List Orders")
async def list_orders():
    try:
        return OrderService().list_orders()
    except Exception as e:
        logger.error(f"Error reading orders: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to fetch orders: {str(e)}")


@router.post("", status_code=201, summary="Create Order")
async def create_order(request: OrderCreateRequest = Body(...)):
    """Create an order. Quantities below 1 count as 1; totals are computed here."""
    try:
        return OrderService().create_order(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error creating order: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to create order: {str(e)}")


@router.post("/totals", response_model=ItemsTotalsResponse, summary="Preview Order Totals")
async def preview_order_totals(request: OrderTotalsRequest = Body(...)):
    return OrderService().preview_totals(request.items)


@router.get("/{order_id}", summary="Get Order")
async def get_order(order_id: str):
    try:
        order = OrderService().get_order(order_id)
        if not order:
            raise HTTPException(status_code=404, detail="Order not found")
        return order
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching order: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to fetch order: {str(e)}")


@router.patch("/{order_id}/status", summary="Update Order Status")
async def update_order_status(order_id: str, request: StatusUpdateRequest = Body(...)):
    try:
        order = OrderService().update_status(order_id, request.status)
        if not order:
            raise HTTPException(status_code=404, detail="Order not found")
        return order
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating order status: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to update order status: {str(e)}")
