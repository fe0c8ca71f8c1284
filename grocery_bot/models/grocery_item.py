"""
Grocery item data models.

This module contains the grocery item model together with its pending
purchase and purchase history records.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId


class GroceryItemUnit(str, Enum):
    """Measurement unit of a grocery item."""
    PIECES = "pieces"
    KG = "kg"
    G = "g"
    ML = "ml"
    L = "l"
    PACKS = "packs"

    @classmethod
    def values(cls) -> List[str]:
        return [unit.value for unit in cls]


# Prices of small units are shown per 100 (e.g. $/100g instead of $/g)
UNIT_DENOMINATORS: Dict[str, int] = {
    GroceryItemUnit.G.value: 100,
    GroceryItemUnit.ML.value: 100,
}


def get_unit_denominator(unit: str) -> int:
    """Get the display denominator for a unit."""
    return UNIT_DENOMINATORS.get(GroceryItemUnit(unit).value, 1)


@dataclass
class PendingPurchase:
    """Model for an item that is wanted but not bought yet."""
    requested_at: datetime
    quantity: Optional[float] = None

    def to_document(self) -> Dict[str, Any]:
        return {"requested_at": self.requested_at, "quantity": self.quantity}

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "PendingPurchase":
        return cls(requested_at=doc["requested_at"], quantity=doc.get("quantity"))


@dataclass(frozen=True)
class PurchaseRecord:
    """Model for a completed purchase. Records are never modified once stored."""
    purchased_at: datetime
    quantity: float
    price: float

    def to_document(self) -> Dict[str, Any]:
        return {
            "purchased_at": self.purchased_at,
            "quantity": self.quantity,
            "price": self.price,
        }

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "PurchaseRecord":
        return cls(
            purchased_at=doc["purchased_at"],
            quantity=float(doc["quantity"]),
            price=float(doc["price"]),
        )


@dataclass
class GroceryItem:
    """Model for a grocery item owned by a user."""
    user_id: ObjectId
    name: str
    unit: str
    id: Optional[ObjectId] = None
    pending_purchase: Optional[PendingPurchase] = None
    purchases: List[PurchaseRecord] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_pending_for_purchase(self) -> bool:
        """Check whether the item is on the grocery list."""
        return self.pending_purchase is not None

    @staticmethod
    def calculate_avg_price(price: float, quantity: float, unit: str) -> Tuple[float, int]:
        """
        Calculate the average price of a unit.

        Args:
            price: Total price paid
            quantity: Total quantity bought
            unit: Unit of the quantity

        Returns:
            Tuple of (average price per denominator, denominator)

        Examples:
            >>> GroceryItem.calculate_avg_price(3.0, 500, "g")
            (0.6, 100)
        """
        denominator = get_unit_denominator(unit)
        if quantity <= 0:
            return 0.0, denominator
        return price * denominator / quantity, denominator

    def get_price_summary(self) -> Tuple[float, int]:
        """
        Get the average price over all purchase records.

        Returns:
            Tuple of (average price per denominator, denominator)
        """
        total_price = sum(record.price for record in self.purchases)
        total_quantity = sum(record.quantity for record in self.purchases)
        return self.calculate_avg_price(total_price, total_quantity, self.unit)

    def to_document(self) -> Dict[str, Any]:
        """Convert to a MongoDB document (without ``_id``)."""
        return {
            "user": self.user_id,
            "name": self.name,
            "unit": self.unit,
            "pending_purchase": self.pending_purchase.to_document() if self.pending_purchase else None,
            "purchases": [record.to_document() for record in self.purchases],
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "GroceryItem":
        pending = doc.get("pending_purchase")
        return cls(
            id=doc.get("_id"),
            user_id=doc["user"],
            name=doc["name"],
            unit=doc["unit"],
            pending_purchase=PendingPurchase.from_document(pending) if pending else None,
            purchases=[PurchaseRecord.from_document(record) for record in doc.get("purchases") or []],
            created_at=doc.get("created_at"),
            updated_at=doc.get("updated_at"),
        )
