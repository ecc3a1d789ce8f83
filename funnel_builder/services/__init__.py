from funnel_builder.services.rules import DEFAULT_RULES, RuleReport, RuleViolation, lint
from funnel_builder.services.store import FunnelStore, FunnelStoreRegistry, get_funnel_store
from funnel_builder.services.validation import (
    FunnelValidationError,
    ValidationIssue,
    ValidationResult,
    is_funnel,
    new_block,
    parse_or_fail,
    validate,
    validate_block,
    validate_safe,
)

__all__ = [
    "DEFAULT_RULES",
    "FunnelStore",
    "FunnelStoreRegistry",
    "FunnelValidationError",
    "RuleReport",
    "RuleViolation",
    "ValidationIssue",
    "ValidationResult",
    "get_funnel_store",
    "is_funnel",
    "lint",
    "new_block",
    "parse_or_fail",
    "validate",
    "validate_block",
    "validate_safe",
]
