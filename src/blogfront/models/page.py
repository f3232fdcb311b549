"""Paginated response envelope."""

from dataclasses import dataclass, field
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


@dataclass
class PageResult(Generic[T]):
    """One page of a resource collection.

    Mirrors the backend envelope {data, total, page, limit, lastPage}.
    """

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10
    last_page: int = 1

    @classmethod
    def from_dict(cls, data: dict, item_factory: Callable[[dict], T]) -> "PageResult[T]":
        """Build a page, converting each entry of data['data'] with item_factory."""
        raw_items = data.get("data") or []
        items = [item_factory(item) for item in raw_items if isinstance(item, dict)]
        total = int(data.get("total", len(items)))
        limit = int(data.get("limit", len(items) or 1))
        return cls(
            items=items,
            total=max(total, 0),
            page=int(data.get("page", 1)),
            limit=limit,
            last_page=int(data.get("lastPage", 1)),
        )
