from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from shared.config.database import get_db
from shared.errors import server_error
from .schemas import OrderCreate, OrderPlacedResponse, OrderResponse
from .service import OrderService

router = APIRouter(tags=["Orders"])

@router.post("/orders", response_model=OrderPlacedResponse)
async def create_order(order: OrderCreate, db: AsyncSession = Depends(get_db)):
    try:
        created = await OrderService.create_order(db, order)
    except Exception as e:
        raise server_error("Failed to place order", e)
    return OrderPlacedResponse(message="Order placed successfully!", order=OrderResponse.model_validate(created))
