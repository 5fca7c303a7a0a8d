"""Page-number pagination with a `limit` query parameter."""

from __future__ import annotations

import math

from django.core.paginator import EmptyPage, InvalidPage, Page  # type: ignore
from rest_framework.exceptions import NotFound  # type: ignore
from rest_framework.pagination import PageNumberPagination  # type: ignore
from rest_framework.response import Response  # type: ignore


class PagePagination(PageNumberPagination):
    """`?page=2&limit=10` -> ``{"results": [...], "pagination": {...}}``."""

    page_size = 10
    page_size_query_param = "limit"
    max_page_size = 100

    def paginate_queryset(self, queryset, request, view=None):  # type: ignore
        """
        Same as DRF, except a page past the end is an empty page

        `?page=9` on a three-page listing answers 200 with no results and
        the real totals; non-numeric or non-positive pages are still 404.
        """
        self.request = request
        page_size = self.get_page_size(request)
        if not page_size:
            return None

        paginator = self.django_paginator_class(queryset, page_size)
        page_number = self.get_page_number(request, paginator)
        try:
            self.page = paginator.page(page_number)
        except EmptyPage as exc:
            number = int(page_number)
            if number < 1:
                raise NotFound(self.invalid_page_message.format(page_number=page_number, message=str(exc)))
            self.page = Page([], number, paginator)
        except InvalidPage as exc:
            raise NotFound(self.invalid_page_message.format(page_number=page_number, message=str(exc)))
        return list(self.page)

    def get_paginated_response(self, data):  # type: ignore
        total = self.page.paginator.count
        limit = self.page.paginator.per_page
        return Response(
            {
                "results": data,
                "pagination": {
                    "page": self.page.number,
                    "limit": limit,
                    "total": total,
                    "pages": math.ceil(total / limit) if limit else 0,
                },
            }
        )

    def get_paginated_response_schema(self, schema):  # type: ignore
        return {
            "type": "object",
            "properties": {
                "results": schema,
                "pagination": {
                    "type": "object",
                    "properties": {
                        "page": {"type": "integer"},
                        "limit": {"type": "integer"},
                        "total": {"type": "integer"},
                        "pages": {"type": "integer"},
                    },
                },
            },
        }


class CarPagination(PagePagination):
    page_size = 12
