from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from marketplace.application.use_cases.products.browse_products import ProductQuery
from marketplace.domain.products.entities import Product
from marketplace.domain.products.listing import ALL_CATEGORIES, SortOption
from marketplace.utils.formatting import format_cents


class ProductQueryDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    category: str = ALL_CATEGORIES
    q: str = Field(default="", max_length=200)
    sort: SortOption = SortOption.DEFAULT
    page: int = Field(default=1, ge=1)
    per_page: int | None = Field(default=None, ge=1, le=100)

    @field_validator("category", mode="before")
    @classmethod
    def blank_category_means_all(cls, value: str | None) -> str:
        if value is None or not str(value).strip():
            return ALL_CATEGORIES
        return str(value).strip()

    def to_query(self, default_per_page: int) -> ProductQuery:
        return ProductQuery(
            category_id=self.category,
            query=self.q,
            sort=self.sort,
            page=self.page,
            per_page=self.per_page or default_per_page,
        )


def product_payload(product: Product) -> dict[str, object]:
    payload = product.to_dict()
    payload["formattedPrice"] = format_cents(product.price, product.currency)
    return payload
