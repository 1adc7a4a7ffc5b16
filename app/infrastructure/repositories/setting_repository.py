from typing import Optional

from app.interfaces.ISettingsProvider import ISettingsProvider
from app.domain.models import Setting
from app.infrastructure.database import SessionLocal


class SqlSettingsProvider(ISettingsProvider):
    """Key/value settings table. Read on every call, never cached."""

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        session = self.session_factory()
        try:
            setting = session.query(Setting).filter(Setting.key == key).first()
            return setting.value if setting else None
        finally:
            session.close()

    def set(self, key: str, value: str) -> None:
        session = self.session_factory()
        try:
            setting = session.query(Setting).filter(Setting.key == key).first()
            if setting is None:
                session.add(Setting(key=key, value=value))
            else:
                setting.value = value
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
