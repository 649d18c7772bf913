"""
Request schemas for the commerce API.

Pydantic models for user, product and order payloads plus query and path
parameters. Wire names are camelCase; unknown fields are dropped.

``error_messages`` on each schema maps ``"<field path>.<error type>"`` (or a
bare error type) to the message reported to clients. List indices are left
out of the lookup key, so ``items.quantity.greater_than_equal`` matches
every order item.
"""

from datetime import date
from enum import Enum
from typing import Annotated, ClassVar, Literal
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from commerce_validation.core.validators.regex_validator import EMAIL_PATTERN

OBJECT_ID_PATTERN = r"^[0-9a-fA-F]{24}$"
SKU_PATTERN = r"^[A-Z0-9-_]+$"
ZIP_CODE_PATTERN = r"^\d{5}(-\d{4})?$"
USERNAME_PATTERN = r"^[A-Za-z0-9]+$"

ObjectId = Annotated[str, StringConstraints(pattern=OBJECT_ID_PATTERN)]
Tag = Annotated[str, StringConstraints(strip_whitespace=True, max_length=30)]


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"
    MODERATOR = "moderator"


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class RequestSchema(BaseModel):
    """Base for request payloads: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    error_messages: ClassVar[dict[str, str]] = {}


class UpdateSchema(RequestSchema):
    """Partial update payload; at least one field must be present."""

    @model_validator(mode="after")
    def require_one_field(self):
        if not self.model_fields_set:
            raise PydanticCustomError("object_min", "At least one field must be provided for update")
        return self


def normalize_email(value):
    if not isinstance(value, str):
        return value
    value = value.strip().lower()
    if not EMAIL_PATTERN.search(value):
        raise PydanticCustomError("email_invalid", "Please provide a valid email address")
    return value


def check_password_complexity(value: str) -> str:
    if not (
        any(c.islower() for c in value)
        and any(c.isupper() for c in value)
        and any(c.isdigit() for c in value)
    ):
        raise PydanticCustomError(
            "password_complexity",
            "Password must contain at least one uppercase letter, one lowercase letter, and one number",
        )
    return value


PASSWORD_MESSAGES = {
    "password.string_too_short": "Password must be at least 8 characters long",
    "password.missing": "Password is required",
}


# =======================
# USER SCHEMAS
# =======================

class UserRegister(RequestSchema):
    username: str = Field(..., min_length=3, max_length=30, pattern=USERNAME_PATTERN)
    email: str
    password: str = Field(..., min_length=8)
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    role: UserRole = UserRole.USER

    error_messages: ClassVar[dict[str, str]] = {
        **PASSWORD_MESSAGES,
        "username.string_pattern_mismatch": "Username must only contain alphanumeric characters",
        "username.string_too_short": "Username must be at least 3 characters long",
        "username.string_too_long": "Username cannot exceed 30 characters",
        "email.missing": "Email is required",
        "missing": "This field is required",
        "enum": "Role must be one of: admin, user, moderator",
    }

    normalize_email_field = field_validator("email", mode="before")(normalize_email)
    check_password_field = field_validator("password")(check_password_complexity)

    @field_validator("username", "first_name", "last_name", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class UserLogin(RequestSchema):
    email: str
    password: str = Field(..., min_length=1)

    error_messages: ClassVar[dict[str, str]] = {
        "email.missing": "Email is required",
        "password.missing": "Password is required",
        "password.string_too_short": "Password is required",
    }

    normalize_email_field = field_validator("email", mode="before")(normalize_email)


class UserUpdateProfile(UpdateSchema):
    first_name: str | None = Field(None, min_length=1, max_length=50)
    last_name: str | None = Field(None, min_length=1, max_length=50)
    email: str | None = None

    normalize_email_field = field_validator("email", mode="before")(normalize_email)


class ChangePassword(RequestSchema):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8)

    error_messages: ClassVar[dict[str, str]] = {
        "currentPassword.missing": "Current password is required",
        "newPassword.missing": "New password is required",
        "newPassword.string_too_short": "New password must be at least 8 characters long",
    }

    check_new_password_field = field_validator("new_password")(check_password_complexity)


# =======================
# PRODUCT SCHEMAS
# =======================

class ProductFields(RequestSchema):
    """Field validators shared by product create and update."""

    @field_validator("name", "description", "category", mode="before", check_fields=False)
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("sku", mode="before", check_fields=False)
    @classmethod
    def upper_sku(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("price", check_fields=False)
    @classmethod
    def round_price(cls, v):
        return round(v, 2) if v is not None else v

    @field_validator("images", check_fields=False)
    @classmethod
    def check_image_uris(cls, v):
        for uri in v or []:
            parsed = urlparse(uri)
            if not (parsed.scheme and (parsed.netloc or parsed.path)):
                raise PydanticCustomError("uri", "Each image must be a valid URL")
        return v


class ProductCreate(ProductFields):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=1000)
    price: float = Field(..., gt=0)
    category: str = Field(..., min_length=1, max_length=50)
    stock: int = Field(..., ge=0)
    sku: str = Field(..., pattern=SKU_PATTERN)
    images: list[str] = Field(default_factory=list, max_length=10)
    tags: list[Tag] = Field(default_factory=list, max_length=20)
    is_active: bool = True

    error_messages: ClassVar[dict[str, str]] = {
        "name.string_too_short": "Product name cannot be empty",
        "name.string_too_long": "Product name cannot exceed 100 characters",
        "name.missing": "Product name is required",
        "description.string_too_long": "Description cannot exceed 1000 characters",
        "price.greater_than": "Price must be a positive number",
        "price.missing": "Price is required",
        "stock.greater_than_equal": "Stock cannot be negative",
        "sku.string_pattern_mismatch": "SKU can only contain uppercase letters, numbers, hyphens, and underscores",
        "images.too_long": "Cannot have more than 10 images",
        "tags.too_long": "Cannot have more than 20 tags",
        "tags.string_too_long": "Each tag cannot exceed 30 characters",
    }


class ProductUpdate(ProductFields, UpdateSchema):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, min_length=1, max_length=1000)
    price: float | None = Field(None, gt=0)
    category: str | None = Field(None, min_length=1, max_length=50)
    stock: int | None = Field(None, ge=0)
    sku: str | None = Field(None, pattern=SKU_PATTERN)
    images: list[str] | None = Field(None, max_length=10)
    tags: list[Tag] | None = Field(None, max_length=20)
    is_active: bool | None = None

    error_messages: ClassVar[dict[str, str]] = ProductCreate.error_messages


# =======================
# ORDER SCHEMAS
# =======================

class OrderItem(RequestSchema):
    product_id: ObjectId
    quantity: int = Field(..., ge=1)
    price: float = Field(..., gt=0)


class Address(RequestSchema):
    street: str = Field(..., min_length=1, max_length=200)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    zip_code: str = Field(..., pattern=ZIP_CODE_PATTERN)
    country: str = Field(..., min_length=1, max_length=100)


ADDRESS_MESSAGES = {
    f"{address}.zipCode.string_pattern_mismatch": "Please provide a valid ZIP code"
    for address in ("shippingAddress", "billingAddress")
}


class OrderCreate(RequestSchema):
    items: list[OrderItem] = Field(..., min_length=1)
    shipping_address: Address
    billing_address: Address | None = None
    payment_method: str = Field(..., min_length=1, max_length=50)
    notes: str | None = Field(None, max_length=500)

    error_messages: ClassVar[dict[str, str]] = {
        **ADDRESS_MESSAGES,
        "items.too_short": "Order must contain at least one item",
        "items.productId.string_pattern_mismatch": "Invalid product ID format",
        "items.quantity.greater_than_equal": "Quantity must be at least 1",
        "items.price.greater_than": "Price must be a positive number",
    }


class OrderStatusUpdate(RequestSchema):
    status: OrderStatus
    notes: str | None = Field(None, max_length=500)

    error_messages: ClassVar[dict[str, str]] = {
        "status.enum": "Status must be one of: pending, confirmed, processing, shipped, delivered, cancelled",
        "status.missing": "Status is required",
    }


# =======================
# QUERY SCHEMAS
# =======================

class Pagination(RequestSchema):
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)
    sort: str = "createdAt"
    order: Literal["asc", "desc"] = "desc"

    error_messages: ClassVar[dict[str, str]] = {
        "page.greater_than_equal": "Page must be at least 1",
        "limit.greater_than_equal": "Limit must be at least 1",
        "limit.less_than_equal": "Limit cannot exceed 100",
        "order.literal_error": "Order must be either asc or desc",
    }


class ProductSearch(Pagination):
    q: str | None = Field(None, max_length=100)
    search: str | None = Field(None, max_length=100)
    category: str | None = Field(None, max_length=50)
    min_price: float | None = Field(None, ge=0)
    max_price: float | None = Field(None, ge=0)
    in_stock: bool | None = None
    is_active: bool | None = None

    @field_validator("q", "search", "category", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @model_validator(mode="after")
    def check_price_bounds(self):
        if self.min_price is not None and self.max_price is not None and self.max_price < self.min_price:
            raise PydanticCustomError("price_bounds", "maxPrice must be greater than or equal to minPrice")
        return self


class OrderFilter(Pagination):
    status: OrderStatus | None = None
    user_id: ObjectId | None = None
    start_date: date | None = None
    end_date: date | None = None

    @model_validator(mode="after")
    def check_date_bounds(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise PydanticCustomError("date_bounds", "endDate must be on or after startDate")
        return self


# =======================
# PATH PARAMETERS
# =======================

ID_MESSAGES = {
    "string_pattern_mismatch": "Invalid ID format",
    "missing": "ID is required",
}


class IdParams(RequestSchema):
    id: ObjectId

    error_messages: ClassVar[dict[str, str]] = ID_MESSAGES


class UserIdParams(RequestSchema):
    user_id: ObjectId

    error_messages: ClassVar[dict[str, str]] = ID_MESSAGES


class ProductIdParams(RequestSchema):
    product_id: ObjectId

    error_messages: ClassVar[dict[str, str]] = ID_MESSAGES


class OrderIdParams(RequestSchema):
    order_id: ObjectId

    error_messages: ClassVar[dict[str, str]] = ID_MESSAGES


SCHEMAS: dict[str, type[RequestSchema]] = {
    "user.register": UserRegister,
    "user.login": UserLogin,
    "user.update_profile": UserUpdateProfile,
    "user.change_password": ChangePassword,
    "product.create": ProductCreate,
    "product.update": ProductUpdate,
    "product.search": ProductSearch,
    "order.create": OrderCreate,
    "order.update_status": OrderStatusUpdate,
    "order.filter": OrderFilter,
    "query.pagination": Pagination,
    "params.id": IdParams,
    "params.user_id": UserIdParams,
    "params.product_id": ProductIdParams,
    "params.order_id": OrderIdParams,
}
