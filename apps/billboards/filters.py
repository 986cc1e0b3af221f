"""FilterSet definitions for the billboard marketplace."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Billboard


class BillboardFilterSet(django_filters.FilterSet):
    """Region and price filters. The date window is applied by the engine."""

    region = django_filters.CharFilter(method="filter_region")
    min_price = django_filters.NumberFilter(field_name="price_per_day", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price_per_day", lookup_expr="lte")
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Billboard
        fields = ["region"]

    def filter_region(self, queryset, name, value):  # type: ignore
        # "All Regions" is what the marketplace picker sends for no filter
        if not value or value.strip().lower() == "all regions":
            return queryset
        return queryset.filter(region__iexact=value.strip())

    def filter_search(self, queryset, name, value):  # type: ignore
        if not value:
            return queryset
        return queryset.filter(name__icontains=value) | queryset.filter(location__icontains=value)
