"""Customer router - FastAPI endpoints for customer operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import SessionClaims, require_permission
from ...database import get_db, require_database
from .schemas import CustomerCreate, CustomerResponse, CustomerUpdate
from .service import CustomerService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/customers",
    tags=["Customers"],
    dependencies=[Depends(require_database)],
)


def get_customer_service(db: Session = Depends(get_db)) -> CustomerService:
    """Dependency injection for CustomerService"""
    return CustomerService(db)


@router.get("", response_model=list[CustomerResponse])
async def get_customers(
    search: Optional[str] = Query(None),
    session: SessionClaims = Depends(require_permission("viewAllClients", "viewOwnClients")),
    service: CustomerService = Depends(get_customer_service),
):
    """List customers visible to the caller"""
    return service.get_customers(session, search)


@router.get("/export")
async def export_customers_csv(
    search: Optional[str] = Query(None),
    session: SessionClaims = Depends(require_permission("viewAllClients", "viewOwnClients")),
    service: CustomerService = Depends(get_customer_service),
):
    """Export customers as CSV with an optional search filter"""
    return service.export_customers_csv(session, search)


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: int,
    session: SessionClaims = Depends(require_permission("viewAllClients", "viewOwnClients")),
    service: CustomerService = Depends(get_customer_service),
):
    customer = service.get_customer(customer_id, session)
    return service.to_response(customer, len(customer.jobs))


@router.post("", response_model=CustomerResponse, status_code=201)
async def create_customer(
    data: CustomerCreate,
    session: SessionClaims = Depends(require_permission("createClients")),
    service: CustomerService = Depends(get_customer_service),
):
    customer = service.create_customer(data, session)
    return service.to_response(customer)


@router.patch("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: int,
    data: CustomerUpdate,
    session: SessionClaims = Depends(require_permission("editClients")),
    service: CustomerService = Depends(get_customer_service),
):
    customer = service.update_customer(customer_id, data, session)
    return service.to_response(customer, len(customer.jobs))
