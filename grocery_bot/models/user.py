"""
User data model.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from bson import ObjectId


@dataclass
class User:
    """Model for a bot user, identified by Telegram chat ID."""
    chat_id: int
    id: Optional[ObjectId] = None
    last_command_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_document(self) -> Dict[str, Any]:
        """Convert to a MongoDB document (without ``_id``)."""
        return {
            "chat_id": self.chat_id,
            "last_command_at": self.last_command_at,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "User":
        return cls(
            id=doc.get("_id"),
            chat_id=doc["chat_id"],
            last_command_at=doc.get("last_command_at"),
            created_at=doc.get("created_at"),
            updated_at=doc.get("updated_at"),
        )
