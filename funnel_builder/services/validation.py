from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, Sequence, TypeVar, Union
from uuid import uuid4

from pydantic import BaseModel, TypeAdapter, ValidationError

from funnel_builder.schemas.blocks import BLOCK_CATALOG, Block
from funnel_builder.schemas.funnels import FunnelDocument

logger = logging.getLogger(__name__)

T = TypeVar("T")

_BLOCK_ADAPTER: TypeAdapter[Block] = TypeAdapter(Block)


class ValidationIssue(BaseModel):
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}" if self.path else self.message


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    value: Optional[T] = None
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.value is not None and not self.issues

    def messages(self) -> list[str]:
        return [str(issue) for issue in self.issues]


class FunnelValidationError(ValueError):
    def __init__(self, issues: Sequence[ValidationIssue]):
        self.issues = list(issues)
        first = str(self.issues[0]) if self.issues else "unknown error"
        super().__init__(f"Invalid funnel structure: {first}")


def format_path(loc: Sequence[Union[str, int]]) -> str:
    """Render a pydantic error location as `blocks[0].props.items[1].stars`.

    Discriminated unions insert the matched tag into the location; those
    segments are dropped so paths follow the input shape.
    """
    parts: list[str] = []
    previous: Union[str, int, None] = None
    for index, segment in enumerate(loc):
        is_tag_segment = (
            isinstance(segment, str)
            and segment in BLOCK_CATALOG
            and (index == 0 or isinstance(previous, int))
        )
        previous = segment
        if is_tag_segment:
            continue
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
        elif parts:
            parts.append(f".{segment}")
        else:
            parts.append(str(segment))
    return "".join(parts)


def _issue_message(error: dict[str, Any]) -> str:
    error_type = error.get("type")
    ctx = error.get("ctx") or {}
    if error_type == "union_tag_invalid":
        return f"Unknown block type '{ctx.get('tag')}'"
    if error_type == "union_tag_not_found":
        return "Block tag is required"
    message = str(error.get("msg") or "Invalid value")
    if error_type == "value_error" and message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return message


def issues_from_error(exc: ValidationError) -> list[ValidationIssue]:
    return [
        ValidationIssue(path=format_path(error.get("loc", ())), message=_issue_message(error))
        for error in exc.errors(include_url=False)
    ]


def validate(raw: Any) -> ValidationResult[FunnelDocument]:
    """Structurally validate an untrusted value against the funnel shape.

    Never raises for malformed input; every problem is reported as a
    ValidationIssue so producer-facing callers can discard the value.
    """
    try:
        document = FunnelDocument.model_validate(raw)
    except ValidationError as exc:
        issues = issues_from_error(exc)
        logger.warning("funnel_validation.failed", extra={"issueCount": len(issues)})
        return ValidationResult(issues=issues)
    return ValidationResult(value=document)


def validate_safe(raw: Any) -> ValidationResult[FunnelDocument]:
    """Producer-facing entry point for AI or import output.

    Same result as `validate`; kept as a separate name so producer call sites
    read as the untrusted boundary and can be found by search.
    """
    return validate(raw)


def parse_or_fail(raw: Any) -> FunnelDocument:
    result = validate(raw)
    if not result.success:
        raise FunnelValidationError(result.issues)
    return result.value  # type: ignore[return-value]


def is_funnel(raw: Any) -> bool:
    return validate(raw).success


def validate_block(raw: Any) -> ValidationResult[Block]:
    try:
        block = _BLOCK_ADAPTER.validate_python(raw)
    except ValidationError as exc:
        return ValidationResult(issues=issues_from_error(exc))
    return ValidationResult(value=block)


def new_block(tag: str, props: dict[str, Any], *, block_id: Optional[str] = None) -> Block:
    """Build a catalog block for editor insertion, generating an id when none is given."""
    if tag not in BLOCK_CATALOG:
        raise FunnelValidationError([ValidationIssue(path="tag", message=f"Unknown block type '{tag}'")])
    resolved_id = block_id or f"{tag.lower()}-{uuid4().hex[:8]}"
    result = validate_block({"id": resolved_id, "tag": tag, "props": props})
    if not result.success:
        raise FunnelValidationError(result.issues)
    return result.value  # type: ignore[return-value]
