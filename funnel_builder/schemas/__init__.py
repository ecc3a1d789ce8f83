from funnel_builder.schemas.blocks import (
    BLOCK_CATALOG,
    BLOCK_TAGS,
    Block,
    BlockBase,
    BlockTag,
    block_id_of,
    block_tag_of,
    is_block_tag,
)
from funnel_builder.schemas.funnels import (
    FunnelDocument,
    FunnelMetadata,
    FunnelRecord,
    FunnelStatusEnum,
    Product,
)

__all__ = [
    "BLOCK_CATALOG",
    "BLOCK_TAGS",
    "Block",
    "BlockBase",
    "BlockTag",
    "FunnelDocument",
    "FunnelMetadata",
    "FunnelRecord",
    "FunnelStatusEnum",
    "Product",
    "block_id_of",
    "block_tag_of",
    "is_block_tag",
]
