"""
Admin console data models: staff accounts, catalog rows and carousel slides.
"""
from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import Field

from .base import CamelModel

AdminRole = Literal["super_admin", "product_manager", "order_manager", "marketing", "support"]


class AdminUser(CamelModel):
    """Back-office staff account."""
    id: str
    email: str
    full_name: str
    role: AdminRole
    permissions: List[str] = Field(default_factory=list, description="Permission strings, or '*' for all")
    status: Literal["active", "inactive"] = "active"
    last_login: Optional[datetime] = None
    created_at: datetime


class AuthPayload(CamelModel):
    """Claims carried by an admin bearer token."""
    user_id: str
    email: str
    role: AdminRole


class ProductDocument(CamelModel):
    """Catalog row as shown in the admin console."""
    id: int
    name: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., allow_inf_nan=False, gt=0)
    category: str
    in_stock: bool = True
    featured: bool = False
    sold: int = Field(default=0, ge=0)


class CarouselItem(CamelModel):
    """Homepage promotional carousel slide."""
    id: str
    type: Literal["product", "banner", "category"]
    title: str = Field(..., min_length=1)
    image_url: str
    link_url: Optional[str] = None
    linked_product_id: Optional[Union[int, str]] = None
    position: int = Field(..., ge=0)
    is_active: bool = True
    created_at: datetime
