import logging
from typing import Any, Dict, List, Optional, Type

from sqlalchemy import asc, desc

from app.infrastructure.database import Base, SessionLocal

logger = logging.getLogger(__name__)


class CrudRepository:
    """
    Plain create/read/update/delete over one table.
    Backs the catalog (products, categories, banners) and enquiries.
    """

    def __init__(self, model: Type[Base], session_factory=SessionLocal,
                 order_by: str = "created_at", descending: bool = True):
        self.model = model
        self.session_factory = session_factory
        self.order_by = order_by
        self.descending = descending

    def list(self) -> List[Base]:
        session = self.session_factory()
        try:
            column = getattr(self.model, self.order_by)
            ordering = desc(column) if self.descending else asc(column)
            return session.query(self.model).order_by(ordering).all()
        finally:
            session.close()

    def get(self, record_id: str) -> Optional[Base]:
        if not record_id:
            return None
        session = self.session_factory()
        try:
            return session.get(self.model, record_id)
        finally:
            session.close()

    def create(self, fields: Dict[str, Any]) -> Base:
        session = self.session_factory()
        try:
            record = self.model(**fields)
            session.add(record)
            session.commit()
            session.refresh(record)
            return record
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def update(self, record_id: str, fields: Dict[str, Any]) -> Optional[Base]:
        session = self.session_factory()
        try:
            record = session.get(self.model, record_id)
            if record is None:
                return None
            for name, value in fields.items():
                setattr(record, name, value)
            session.commit()
            session.refresh(record)
            return record
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def delete(self, record_id: str) -> bool:
        session = self.session_factory()
        try:
            record = session.get(self.model, record_id)
            if record is None:
                return False
            session.delete(record)
            session.commit()
            return True
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def replace_all(self, rows: List[Dict[str, Any]]) -> List[Base]:
        """Wipe the table and insert rows in one transaction (used by seeding)."""
        session = self.session_factory()
        try:
            session.query(self.model).delete()
            records = [self.model(**row) for row in rows]
            session.add_all(records)
            session.commit()
            logger.info(f"✅ Replaced {self.model.__tablename__} with {len(records)} rows")
            return records
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
