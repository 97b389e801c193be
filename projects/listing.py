"""
Project listing: search / tag filtering and pagination.

    GET /api/projects/?search=ai&tags=AI,Mobile&page=2&limit=10

search  case-insensitive substring match on title OR description, taken as sent
tags    comma-separated; a project matches if it carries ANY of them
both    combined with AND
"""
import math
from dataclasses import dataclass

from django.conf import settings
from django.db.models import Q

from .store import ProjectStore


def _positive_int(value, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def split_tags(raw) -> tuple[str, ...]:
    """ " AI, ,Mobile " -> ("AI", "Mobile") """
    if not raw:
        return ()
    return tuple(tag.strip() for tag in str(raw).split(",") if tag.strip())


@dataclass(frozen=True)
class ListingQuery:
    search: str = ""
    tags: tuple[str, ...] = ()
    page: int = 1
    limit: int = 10

    @classmethod
    def from_params(cls, params) -> "ListingQuery":
        """
        Build a query from request query params.
        Bad page/limit values fall back to defaults instead of failing.
        """
        default_limit = settings.PROJECTS_PAGE_SIZE
        max_limit = settings.PROJECTS_MAX_PAGE_SIZE

        limit = min(_positive_int(params.get("limit"), default_limit), max_limit)

        return cls(
            search=params.get("search") or "",
            tags=split_tags(params.get("tags")),
            page=_positive_int(params.get("page"), 1),
            limit=limit,
        )

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    def build_filter(self) -> Q:
        criteria = Q()

        if self.search:
            criteria &= Q(title__icontains=self.search) | Q(description__icontains=self.search)

        if self.tags:
            criteria &= Q(tags__name__in=self.tags)

        return criteria

    def execute(self) -> dict:
        projects, total = ProjectStore.find_many(
            filter=self.build_filter(),
            skip=self.skip,
            limit=self.limit,
        )
        return {
            "projects": projects,
            "total": total,
            "page": self.page,
            "totalPages": math.ceil(total / self.limit),
        }
