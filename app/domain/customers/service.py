"""Customer service - Business logic for customer operations"""

import csv
import logging
from datetime import datetime
from io import StringIO
from typing import Optional

from fastapi import HTTPException
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from ...auth import SessionClaims
from ...models import Customer
from .repository import CustomerRepository
from .schemas import CustomerCreate, CustomerResponse, CustomerUpdate

logger = logging.getLogger(__name__)


class CustomerService:
    """Service layer for customer business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CustomerRepository()

    def _visible_to(self, session: SessionClaims) -> Optional[str]:
        """Staff id to scope by, None when the caller may see every customer"""
        if session.can("viewAllClients"):
            return None
        if session.can("viewOwnClients"):
            return session.user_id
        raise HTTPException(status_code=403, detail="You do not have permission to view customers")

    def get_customers(self, session: SessionClaims, search: Optional[str] = None) -> list[CustomerResponse]:
        customers = self.repo.get_customers(self.db, self._visible_to(session), search)
        counts = self.repo.job_counts(self.db, [c.id for c in customers])
        return [self.to_response(c, counts.get(c.id, 0)) for c in customers]

    def get_customer(self, customer_id: int, session: SessionClaims) -> Customer:
        """Get a specific customer"""
        customer = self.repo.get_customer_by_id(self.db, customer_id)
        if not customer:
            raise HTTPException(status_code=404, detail="Customer not found")

        staff_id = self._visible_to(session)
        if staff_id and not self.repo.has_job_for_staff(self.db, customer_id, staff_id):
            # Hidden customers look missing
            raise HTTPException(status_code=404, detail="Customer not found")
        return customer

    def create_customer(self, data: CustomerCreate, session: SessionClaims) -> Customer:
        logger.info(f"📥 Creating customer '{data.name}' for {session.email}")
        return self.repo.create_customer(
            self.db,
            name=data.name,
            contact_name=data.contactName,
            email=data.email,
            phone=data.phone,
            address=data.address,
            notes=data.notes,
        )

    def update_customer(self, customer_id: int, data: CustomerUpdate, session: SessionClaims) -> Customer:
        customer = self.get_customer(customer_id, session)

        updates = {
            "name": data.name,
            "contact_name": data.contactName,
            "email": data.email,
            "phone": data.phone,
            "address": data.address,
            "notes": data.notes,
        }
        return self.repo.update_customer(self.db, customer, **updates)

    def export_customers_csv(self, session: SessionClaims, search: Optional[str] = None) -> StreamingResponse:
        """Export customers as CSV"""
        logger.info(f"📊 CSV Export requested by {session.email}")

        customers = self.repo.get_customers(self.db, self._visible_to(session), search)

        output = StringIO()
        writer = csv.writer(output)
        writer.writerow(["ID", "Name", "Contact Name", "Email", "Phone", "Address", "Notes", "Created At"])
        for customer in customers:
            writer.writerow(
                [
                    customer.id,
                    customer.name or "",
                    customer.contact_name or "",
                    customer.email or "",
                    customer.phone or "",
                    customer.address or "",
                    customer.notes or "",
                    (
                        customer.created_at.strftime("%Y-%m-%d %H:%M:%S")
                        if customer.created_at
                        else ""
                    ),
                ]
            )

        output.seek(0)
        filename = f"customers_export_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"
        logger.info(f"✅ CSV export successful: {filename} ({len(customers)} customers)")

        return StreamingResponse(
            iter([output.getvalue()]),
            media_type="text/csv",
            headers={
                "Content-Disposition": f"attachment; filename={filename}",
                "Cache-Control": "no-cache",
            },
        )

    @staticmethod
    def to_response(customer: Customer, job_count: int = 0) -> CustomerResponse:
        return CustomerResponse(
            id=customer.id,
            name=customer.name,
            contactName=customer.contact_name,
            email=customer.email,
            phone=customer.phone,
            address=customer.address,
            notes=customer.notes,
            jobCount=job_count,
            created_at=customer.created_at,
        )
