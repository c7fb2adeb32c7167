"""Stop scheduling and grouping engine.

Pure functions shared by the editor, the public share view and the PDF
export so all three show stops in the same order.
"""

from .time_buckets import (
    STOP_PLACE_TYPES,
    TIME_BUCKETS,
    UNSCHEDULED_LABEL,
    BucketDisplay,
    bucket_label,
    bucket_sort_key,
    classify_by_clock_time,
    derive_stored_sort_key,
    place_type_info,
    resolve_display_bucket,
)
from .ordering import compare_stops, effective_sort_key, move_stop, sort_stops, stop_sort_key
from .grouping import (
    UNSCHEDULED,
    DaySection,
    day_sections,
    group_by_day,
    group_by_time_segment,
    number_days,
    sorted_date_keys,
)
from .validation import validate_date_range, validate_stop, validate_stop_date

__all__ = [
    'STOP_PLACE_TYPES', 'TIME_BUCKETS', 'UNSCHEDULED_LABEL', 'BucketDisplay',
    'bucket_label', 'bucket_sort_key', 'classify_by_clock_time', 'derive_stored_sort_key',
    'place_type_info', 'resolve_display_bucket',
    'compare_stops', 'effective_sort_key', 'move_stop', 'sort_stops', 'stop_sort_key',
    'UNSCHEDULED', 'DaySection', 'day_sections', 'group_by_day', 'group_by_time_segment',
    'number_days', 'sorted_date_keys',
    'validate_date_range', 'validate_stop', 'validate_stop_date',
]
