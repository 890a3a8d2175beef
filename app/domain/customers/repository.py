"""Customer repository - Database operations for customers"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Customer, Job


class CustomerRepository:
    """Repository for customer database operations"""

    @staticmethod
    def get_customers(db: Session, staff_id: Optional[str] = None, search: Optional[str] = None) -> list[Customer]:
        """
        Get customers, optionally only those with a job assigned to `staff_id`
        and/or matching a search term.
        """
        query = db.query(Customer)

        if staff_id:
            query = query.filter(
                Customer.id.in_(db.query(Job.customer_id).filter(Job.staff_id == staff_id))
            )

        if search:
            search_term = f"%{search.lower()}%"
            query = query.filter(
                (Customer.name.ilike(search_term))
                | (Customer.contact_name.ilike(search_term))
                | (Customer.email.ilike(search_term))
                | (Customer.address.ilike(search_term))
            )

        return query.order_by(Customer.name.asc()).all()

    @staticmethod
    def get_customer_by_id(db: Session, customer_id: int) -> Optional[Customer]:
        return db.query(Customer).filter(Customer.id == customer_id).first()

    @staticmethod
    def has_job_for_staff(db: Session, customer_id: int, staff_id: str) -> bool:
        return (
            db.query(Job.id)
            .filter(Job.customer_id == customer_id, Job.staff_id == staff_id)
            .first()
            is not None
        )

    @staticmethod
    def job_counts(db: Session, customer_ids: list[int]) -> dict[int, int]:
        """Number of jobs per customer id"""
        if not customer_ids:
            return {}
        rows = (
            db.query(Job.customer_id, func.count(Job.id))
            .filter(Job.customer_id.in_(customer_ids))
            .group_by(Job.customer_id)
            .all()
        )
        return dict(rows)

    @staticmethod
    def count_customers(db: Session) -> int:
        return db.query(func.count(Customer.id)).scalar() or 0

    @staticmethod
    def create_customer(db: Session, **customer_data) -> Customer:
        customer = Customer(**customer_data)
        db.add(customer)
        db.commit()
        db.refresh(customer)
        return customer

    @staticmethod
    def update_customer(db: Session, customer: Customer, **updates) -> Customer:
        """Update a customer with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(customer, key):
                setattr(customer, key, value)

        db.commit()
        db.refresh(customer)
        return customer
