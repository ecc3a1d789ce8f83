from funnel_builder.renderer import FunnelRenderer, RenderedNode, render_funnel, render_page
from funnel_builder.schemas import BLOCK_CATALOG, BLOCK_TAGS, Block, FunnelDocument, FunnelMetadata, Product
from funnel_builder.services import (
    FunnelStore,
    FunnelStoreRegistry,
    FunnelValidationError,
    RuleReport,
    ValidationIssue,
    ValidationResult,
    get_funnel_store,
    is_funnel,
    lint,
    new_block,
    parse_or_fail,
    validate,
    validate_block,
    validate_safe,
)

__version__ = "0.1.0"

__all__ = [
    "BLOCK_CATALOG",
    "BLOCK_TAGS",
    "Block",
    "FunnelDocument",
    "FunnelMetadata",
    "FunnelRenderer",
    "FunnelStore",
    "FunnelStoreRegistry",
    "FunnelValidationError",
    "Product",
    "RenderedNode",
    "RuleReport",
    "ValidationIssue",
    "ValidationResult",
    "get_funnel_store",
    "is_funnel",
    "lint",
    "new_block",
    "parse_or_fail",
    "render_funnel",
    "render_page",
    "validate",
    "validate_block",
    "validate_safe",
]
