from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from funnel_builder.config import settings
from funnel_builder.schemas.blocks import Block, PositiveNumber, block_id_of

_UUID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


class Product(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: PositiveNumber
    currency: str = Field(default_factory=lambda: settings.FUNNEL_DEFAULT_CURRENCY)


class FunnelDocument(BaseModel):
    id: str
    name: str = Field(min_length=1)
    product: Product
    blocks: list[Block] = Field(min_length=1)

    @field_validator("id")
    @classmethod
    def validate_id(cls, value: str) -> str:
        if not _UUID_PATTERN.fullmatch(value):
            raise ValueError("Must be valid UUID")
        return value

    def get_block(self, block_id: str) -> Optional[Block]:
        for block in self.blocks:
            if block_id_of(block) == block_id:
                return block
        return None

    def block_index(self, block_id: str) -> int:
        for index, block in enumerate(self.blocks):
            if block_id_of(block) == block_id:
                return index
        return -1


class FunnelMetadata(BaseModel):
    createdAt: Optional[datetime] = None
    lastModified: Optional[datetime] = None
    iterations: int = Field(default=0, ge=0)


class FunnelStatusEnum(str, Enum):
    draft = "draft"
    published = "published"
    archived = "archived"


class FunnelRecord(BaseModel):
    """Row shape used by the persistence layer; funnel_data holds the serialized document."""

    id: str
    name: str = Field(min_length=1)
    funnel_data: dict[str, Any]
    status: FunnelStatusEnum = FunnelStatusEnum.draft
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
