from __future__ import annotations

import json
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union

from funnel_builder.config import settings
from funnel_builder.schemas.funnels import (
    FunnelDocument,
    FunnelMetadata,
    FunnelRecord,
    FunnelStatusEnum,
)
from funnel_builder.services.validation import (
    FunnelValidationError,
    ValidationIssue,
    ValidationResult,
    parse_or_fail,
    validate,
)

_WHITESPACE = re.compile(r"\s+")


def dump_funnel(document: FunnelDocument) -> dict[str, Any]:
    """JSON-compatible value accepted back by `validate`."""
    return document.model_dump(mode="json", exclude_none=True, warnings=False)


def dumps_funnel(document: FunnelDocument, *, indent: Optional[int] = 2) -> str:
    return json.dumps(dump_funnel(document), indent=indent, ensure_ascii=False)


def loads_funnel(text: Union[str, bytes]) -> ValidationResult[FunnelDocument]:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        return ValidationResult(issues=[ValidationIssue(path="", message=f"Invalid JSON: {exc.msg}")])
    return validate(raw)


def export_filename(document: FunnelDocument) -> str:
    return f"{_WHITESPACE.sub('-', document.name.lower())}-funnel.json"


def write_funnel(document: FunnelDocument, directory: Union[str, Path, None] = None) -> Path:
    target_dir = Path(directory if directory is not None else settings.FUNNEL_EXPORT_DIR)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / export_filename(document)
    path.write_text(dumps_funnel(document), encoding="utf-8")
    return path


def read_funnel(path: Union[str, Path]) -> FunnelDocument:
    result = loads_funnel(Path(path).read_text(encoding="utf-8"))
    if not result.success:
        raise FunnelValidationError(result.issues)
    return result.value  # type: ignore[return-value]


def funnel_to_record(
    document: FunnelDocument,
    *,
    status: FunnelStatusEnum = FunnelStatusEnum.draft,
    metadata: Optional[FunnelMetadata] = None,
) -> FunnelRecord:
    created_at: Optional[datetime] = metadata.createdAt if metadata else None
    updated_at: Optional[datetime] = metadata.lastModified if metadata else None
    return FunnelRecord(
        id=document.id,
        name=document.name,
        funnel_data=dump_funnel(document),
        status=status,
        created_at=created_at,
        updated_at=updated_at,
    )


def funnel_from_record(record: FunnelRecord) -> FunnelDocument:
    return parse_or_fail(record.funnel_data)
