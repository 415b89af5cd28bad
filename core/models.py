"""
Domain model for product-sale records.

SaleRecord is the single source of truth for the record shape used by the
seed loader, the store and the API layer.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict

from core.exceptions import SeedDataError

REQUIRED_FIELDS = ("id", "title", "price", "description", "category", "image", "sold", "dateOfSale")


def parse_timestamp(value: Any) -> datetime:
    """
    Parse an ISO-8601 timestamp into a naive UTC datetime.

    Offsets (``+05:30``, ``Z``) are normalized to UTC; values without an
    offset are taken to already be UTC.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    else:
        raise TypeError(f"Unsupported timestamp type: {type(value)!r}")

    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def format_timestamp(value: datetime) -> str:
    """Render a naive UTC datetime the way the seed dataset does (``...Z``)."""
    return value.isoformat(timespec="milliseconds") + "Z"


@dataclass(frozen=True)
class SaleRecord:
    """One product sale from the seed dataset."""
    id: int
    title: str
    price: float
    description: str
    category: str
    image: str
    sold: bool
    date_of_sale: datetime

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "SaleRecord":
        """
        Create SaleRecord from one element of the seed JSON array.

        Raises:
            SeedDataError: If the element is not an object, a field is
                missing/null, or a value cannot be coerced
        """
        if not isinstance(data, dict):
            raise SeedDataError(
                "Invalid record type",
                expected="object",
                got=type(data).__name__,
            )

        missing = [name for name in REQUIRED_FIELDS if data.get(name) is None]
        if missing:
            raise SeedDataError(
                "Record is missing required fields",
                details=", ".join(missing),
            )

        sold = data["sold"]
        if not isinstance(sold, bool):
            raise SeedDataError("Invalid 'sold' flag", expected="bool", got=type(sold).__name__)

        try:
            return cls(
                id=int(data["id"]),
                title=str(data["title"]),
                price=float(data["price"]),
                description=str(data["description"]),
                category=str(data["category"]),
                image=str(data["image"]),
                sold=sold,
                date_of_sale=parse_timestamp(data["dateOfSale"]),
            )
        except (TypeError, ValueError) as e:
            raise SeedDataError(f"Invalid record {data.get('id')!r}", str(e)) from e

    @classmethod
    def from_row(cls, row: tuple) -> "SaleRecord":
        """Create SaleRecord from a store row in RECORD_COLUMNS order."""
        id_, title, price, description, category, image, sold, date_of_sale = row
        return cls(
            id=int(id_),
            title=title,
            price=float(price),
            description=description,
            category=category,
            image=image,
            sold=bool(sold),
            date_of_sale=date_of_sale,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase wire form."""
        return {
            "id": self.id,
            "title": self.title,
            "price": self.price,
            "description": self.description,
            "category": self.category,
            "image": self.image,
            "sold": self.sold,
            "dateOfSale": format_timestamp(self.date_of_sale),
        }


# Column order used by inserts and selects
RECORD_COLUMNS = ("id", "title", "price", "description", "category", "image", "sold", "date_of_sale")
