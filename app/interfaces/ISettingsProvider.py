from abc import ABC, abstractmethod
from typing import Optional

# Runtime-editable keys (admin panel -> WhatsApp Settings)
NEXTSMS_TOKEN_KEY = "nextsms_token"
OWNER_PHONE_KEY = "owner_phone"

class ISettingsProvider(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass
