"""Pure query primitives over record collections: filter, sort, group, aggregate.

Nothing here modifies its inputs; every primitive returns a new collection.
"""

from .aggregates import (
    ABSENT_KEY,
    ABSENT_LABEL,
    AggregateOp,
    CatalogStatistics,
    Page,
    Range,
    aggregate_by_field,
    average_field,
    catalog_statistics,
    count_by_field,
    count_by_list_field,
    count_by_status,
    count_label,
    date_range,
    most_common,
    numeric_range,
    paginate,
    sum_field,
    unique_values,
)
from .filters import (
    Clause,
    FilterOp,
    apply_filters,
    clause_predicate,
    compound_predicate,
    exclude_where,
    filter_by_status,
    filter_compound,
    filter_date_range,
    filter_equals,
    filter_includes,
    filter_range,
    filter_text,
    filter_where,
    has_value,
    negate,
)
from .grouping import (
    flatten_groups,
    group_by_custom,
    group_by_field,
    group_by_list_field,
    group_by_month,
    group_by_status,
    group_by_year,
    group_keys,
)
from .sorting import SortSpec, comparison_key, parse_sort_spec, sort_by_field, sort_by_multiple

__all__ = [
    "ABSENT_KEY",
    "ABSENT_LABEL",
    "AggregateOp",
    "CatalogStatistics",
    "Clause",
    "FilterOp",
    "Page",
    "Range",
    "SortSpec",
    "aggregate_by_field",
    "apply_filters",
    "average_field",
    "catalog_statistics",
    "clause_predicate",
    "comparison_key",
    "compound_predicate",
    "count_by_field",
    "count_by_list_field",
    "count_by_status",
    "count_label",
    "date_range",
    "exclude_where",
    "filter_by_status",
    "filter_compound",
    "filter_date_range",
    "filter_equals",
    "filter_includes",
    "filter_range",
    "filter_text",
    "filter_where",
    "flatten_groups",
    "group_by_custom",
    "group_by_field",
    "group_by_list_field",
    "group_by_month",
    "group_by_status",
    "group_by_year",
    "group_keys",
    "has_value",
    "most_common",
    "negate",
    "numeric_range",
    "paginate",
    "parse_sort_spec",
    "sort_by_field",
    "sort_by_multiple",
    "sum_field",
    "unique_values",
]
