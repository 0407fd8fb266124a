"""
Admin catalog repository: products and the homepage carousel.
Seeded with representative rows so the admin console has something to show.
"""
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ..models.admin import CarouselItem, ProductDocument


def _seed_products() -> List[ProductDocument]:
    return [
        ProductDocument(id=1, name="Wireless Earbuds", price=15000, category="Electronics", in_stock=True, sold=245),
        ProductDocument(id=2, name="Smart Watch", price=45000, category="Electronics", in_stock=True, sold=132),
        ProductDocument(id=3, name="Leather Backpack", price=22000, category="Fashion", in_stock=False, sold=87),
        ProductDocument(id=4, name="Ceramic Cookware Set", price=38000, category="Home & Kitchen", in_stock=True, sold=54),
    ]


def _seed_carousel() -> List[CarouselItem]:
    return [
        CarouselItem(
            id="carousel-1",
            type="product",
            title="Featured Product",
            image_url="/images/carousel-1.jpg",
            linked_product_id=1,
            position=0,
            is_active=True,
            created_at=datetime.now(timezone.utc),
        ),
    ]


class CatalogRepository(ABC):

    @abstractmethod
    async def list_products(self) -> List[ProductDocument]:
        ...

    @abstractmethod
    async def get_product(self, product_id: int) -> Optional[ProductDocument]:
        ...

    @abstractmethod
    async def save_product(self, product: ProductDocument) -> ProductDocument:
        ...

    @abstractmethod
    async def get_carousel(self) -> List[CarouselItem]:
        ...

    @abstractmethod
    async def replace_carousel(self, items: List[CarouselItem]) -> List[CarouselItem]:
        ...


class InMemoryCatalogRepository(CatalogRepository):

    def __init__(self, seed: bool = True):
        self._products: Dict[int, ProductDocument] = {}
        self._carousel: List[CarouselItem] = []
        if seed:
            self._products = {p.id: p for p in _seed_products()}
            self._carousel = _seed_carousel()

    async def list_products(self) -> List[ProductDocument]:
        return sorted(self._products.values(), key=lambda p: p.id)

    async def get_product(self, product_id: int) -> Optional[ProductDocument]:
        return self._products.get(product_id)

    async def save_product(self, product: ProductDocument) -> ProductDocument:
        self._products[product.id] = product
        return product

    async def get_carousel(self) -> List[CarouselItem]:
        return sorted(self._carousel, key=lambda item: item.position)

    async def replace_carousel(self, items: List[CarouselItem]) -> List[CarouselItem]:
        self._carousel = list(items)
        return await self.get_carousel()
