# backend/modules/customers/routers/customer_router.py

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List
import logging

from core.database import get_db
from core.error_handling import handle_api_errors, NotFoundError
from modules.loyalty.schemas.loyalty_schemas import PointsTransactionResponse
from ..schemas.customer_schemas import (
    Customer as CustomerSchema,
    CustomerCreate,
    CustomerListResponse,
)
from ..services.customer_service import CustomerService


logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/v1/restaurants/{restaurant_id}/customers", tags=["Customers"]
)


@router.post("", response_model=CustomerSchema, status_code=status.HTTP_201_CREATED)
@handle_api_errors
async def create_customer(
    restaurant_id: int,
    customer_data: CustomerCreate,
    db: Session = Depends(get_db),
):
    """
    Sign up a new loyalty member.

    Raises:
        404: Restaurant not found
        409: Email already registered at this restaurant
    """
    return CustomerService(db).create_customer(restaurant_id, customer_data)


@router.get("", response_model=CustomerListResponse)
@handle_api_errors
async def list_customers(
    restaurant_id: int,
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
):
    customers, total = CustomerService(db).list_customers(restaurant_id, page, page_size)
    return CustomerListResponse(
        customers=customers, total=total, page=page, page_size=page_size
    )


@router.get("/lookup", response_model=CustomerSchema)
@handle_api_errors
async def lookup_customer(
    restaurant_id: int,
    email: str = Query(..., min_length=3),
    db: Session = Depends(get_db),
):
    """Find a member by email; onboarding uses this to pick login vs. signup."""
    customer = CustomerService(db).get_customer_by_email(restaurant_id, email)
    if not customer:
        raise NotFoundError("Customer", email)
    return customer


@router.get("/{customer_id}", response_model=CustomerSchema)
@handle_api_errors
async def get_customer(
    restaurant_id: int, customer_id: int, db: Session = Depends(get_db)
):
    return CustomerService(db).get_customer(restaurant_id, customer_id)


@router.get(
    "/{customer_id}/transactions", response_model=List[PointsTransactionResponse]
)
@handle_api_errors
async def get_customer_transactions(
    restaurant_id: int,
    customer_id: int,
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
):
    return CustomerService(db).get_customer_transactions(
        restaurant_id, customer_id, limit
    )
