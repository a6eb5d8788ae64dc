"""
Catalog Models - customers and products.

Both are plain table records keyed by RowKey inside a fixed partition.
JSON payloads from the API are matched case-insensitively, so "rowkey",
"RowKey" and "rowKey" are all accepted.

Exports:
    CustomerRecord: Customer row
    ProductRecord: Product row
"""

from typing import Any, ClassVar, Dict, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from exceptions import ValidationError
from core.utils import canonicalize_keys


def _required_text(payload: Dict[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


class CustomerRecord(BaseModel):
    """
    Customer row in the customers table (partition CUSTOMER).
    """

    model_config = ConfigDict(populate_by_name=True)

    row_key: str = Field(..., alias="rowKey", description="Customer id (RowKey)")
    full_name: str = Field(..., alias="fullName", description="Display name")
    email: str = Field(default="", description="Contact email")
    phone: str = Field(default="", description="Contact phone")

    WIRE_FIELDS: ClassVar[Tuple[str, ...]] = ("rowKey", "fullName", "email", "phone")

    @classmethod
    def from_payload(cls, payload: Any) -> 'CustomerRecord':
        """
        Build a customer from an API JSON body.

        Raises:
            ValidationError: body is not an object, or rowKey/fullName blank
        """
        if not isinstance(payload, dict):
            raise ValidationError("Invalid customer payload")
        fields = canonicalize_keys(payload, cls.WIRE_FIELDS)
        row_key = _required_text(fields, "rowKey")
        full_name = _required_text(fields, "fullName")
        if row_key is None or full_name is None:
            raise ValidationError("Invalid customer payload")
        return cls(
            row_key=row_key,
            full_name=full_name,
            email=str(fields.get("email") or ""),
            phone=str(fields.get("phone") or ""),
        )

    @classmethod
    def not_found(cls) -> 'CustomerRecord':
        """Placeholder shown on order details when the customer row is gone."""
        return cls(row_key="", full_name="Customer not found")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ProductRecord(BaseModel):
    """
    Product row in the products table (partition PRODUCT).

    image_url points at a blob in the product image container, or is empty.
    """

    model_config = ConfigDict(populate_by_name=True)

    row_key: str = Field(..., alias="rowKey", description="Product id (RowKey)")
    name: str = Field(..., description="Product name")
    description: str = Field(default="", description="Free text description")
    price: float = Field(..., ge=0, description="Unit price")
    image_url: str = Field(default="", alias="imageUrl", description="Blob URL of the product image")

    WIRE_FIELDS: ClassVar[Tuple[str, ...]] = ("rowKey", "name", "description", "price", "imageUrl")

    @classmethod
    def from_payload(cls, payload: Any) -> 'ProductRecord':
        """
        Build a product from an API JSON body.

        Raises:
            ValidationError: rowKey/name blank, or price missing, non-numeric or negative
        """
        if not isinstance(payload, dict):
            raise ValidationError("Invalid product payload")
        fields = canonicalize_keys(payload, cls.WIRE_FIELDS)
        row_key = _required_text(fields, "rowKey")
        name = _required_text(fields, "name")
        if row_key is None or name is None:
            raise ValidationError("Invalid product payload")

        price = fields.get("price")
        if price is None or isinstance(price, bool):
            raise ValidationError("Invalid product payload: price is required")
        try:
            return cls(
                row_key=row_key,
                name=name,
                description=str(fields.get("description") or ""),
                price=price,
                image_url=str(fields.get("imageUrl") or ""),
            )
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid product payload: {e.errors()[0]['msg']}") from e

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
