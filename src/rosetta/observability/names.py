# src/rosetta/observability/names.py

"""Standard metric names for rosetta observability.

Use these constants instead of hardcoded strings so every pass reports
under the same names.

Note: All duration metrics are in milliseconds by convention.
"""

# ============================================================================
# Sequencer Metrics
# ============================================================================

# Duration
SEQUENCE_DURATION = "sequence_duration"

# Counters
SEQUENCE_ELEMENTS_CREATED = "sequence_elements_created"


# ============================================================================
# Grouping Metrics
# ============================================================================

# Duration
GROUPING_DURATION = "grouping_duration"

# Counters
GROUPING_GROUPS_CREATED = "grouping_groups_created"


# ============================================================================
# Type Index Metrics
# ============================================================================

# Duration
INDEXING_DURATION = "indexing_duration"


# ============================================================================
# Validation Metrics
# ============================================================================

# Duration
VALIDATION_DURATION = "validation_duration"

# Counters (labelled by severity)
VALIDATION_DIAGNOSTICS_TOTAL = "validation_diagnostics_total"
