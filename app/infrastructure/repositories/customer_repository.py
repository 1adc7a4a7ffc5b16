import logging
from typing import Optional

from app.interfaces.ICustomerRepository import ICustomerRepository
from app.domain.models import Customer, Order
from app.infrastructure.database import SessionLocal

logger = logging.getLogger(__name__)


class SqlCustomerRepository(ICustomerRepository):

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def get(self, customer_id: str) -> Optional[Customer]:
        if not customer_id:
            return None
        session = self.session_factory()
        try:
            return session.get(Customer, customer_id)
        finally:
            session.close()

    def get_or_create_by_phone(self, phone: str) -> Customer:
        session = self.session_factory()
        try:
            customer = session.query(Customer).filter(Customer.phone == phone).first()
            if customer is None:
                customer = Customer(phone=phone)
                session.add(customer)
                session.commit()
                session.refresh(customer)
                logger.info(f"✅ New customer profile {customer.id}")
            return customer
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def change_phone(self, customer_id: str, new_phone: str) -> Optional[Customer]:
        """
        Reassign the duplicate's orders, delete the duplicate, then take its phone.
        All three steps commit together; re-running after a failure is a no-op
        past whatever already committed.
        """
        session = self.session_factory()
        try:
            customer = session.get(Customer, customer_id)
            if customer is None:
                return None

            duplicate = (
                session.query(Customer)
                .filter(Customer.phone == new_phone, Customer.id != customer.id)
                .first()
            )
            if duplicate is not None:
                moved = (
                    session.query(Order)
                    .filter(Order.customer_id == duplicate.id)
                    .update({Order.customer_id: customer.id}, synchronize_session=False)
                )
                session.delete(duplicate)
                # Unique constraint on phone: the delete must hit the DB before the update
                session.flush()
                logger.info(f"🔀 Merged customer {duplicate.id} into {customer.id} ({moved} orders moved)")

            customer.phone = new_phone
            session.commit()
            session.refresh(customer)
            return customer
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
