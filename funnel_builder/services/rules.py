from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Literal, Optional, Sequence

from pydantic import BaseModel, Field

from funnel_builder.schemas.blocks import block_id_of, block_tag_of
from funnel_builder.schemas.funnels import FunnelDocument

CTA_TAG = "AddToCartButton"
OPENING_TAGS: tuple[str, ...] = ("Callout", "Banner", "ProductImageCarousel")

MISSING_CTA_MESSAGE = "Funnel must include at least one AddToCartButton"
CTA_COUNT_MESSAGE = "Best practice: Include 2-3 AddToCartButton blocks throughout funnel"
REVIEWS_ORDER_MESSAGE = "Best practice: Place Reviews block before final CTA"
FAQ_PLACEMENT_MESSAGE = "Best practice: Place Accordions (FAQ) in bottom half of funnel"


@dataclass(frozen=True)
class RuleViolation:
    severity: Literal["error", "warning"]
    message: str


class RuleReport(BaseModel):
    valid: bool
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


Rule = Callable[[FunnelDocument], Iterable[RuleViolation]]


def _tags(document: FunnelDocument) -> list[Optional[str]]:
    return [block_tag_of(block) for block in document.blocks]


def _first_index(tags: Sequence[Optional[str]], tag: str) -> int:
    return tags.index(tag) if tag in tags else -1


def cta_presence(document: FunnelDocument) -> Iterable[RuleViolation]:
    if CTA_TAG not in _tags(document):
        yield RuleViolation("error", MISSING_CTA_MESSAGE)


def cta_redundancy(document: FunnelDocument) -> Iterable[RuleViolation]:
    if _tags(document).count(CTA_TAG) < 2:
        yield RuleViolation("warning", CTA_COUNT_MESSAGE)


def opening_block(document: FunnelDocument) -> Iterable[RuleViolation]:
    if not document.blocks:
        return
    first_tag = block_tag_of(document.blocks[0])
    if first_tag not in OPENING_TAGS:
        yield RuleViolation(
            "warning",
            f"First block should be one of: {', '.join(OPENING_TAGS)}. Found: {first_tag}",
        )


def social_proof_order(document: FunnelDocument) -> Iterable[RuleViolation]:
    tags = _tags(document)
    reviews_index = _first_index(tags, "Reviews")
    cta_indexes = [index for index, tag in enumerate(tags) if tag == CTA_TAG]
    if reviews_index != -1 and cta_indexes and reviews_index > cta_indexes[-1]:
        yield RuleViolation("warning", REVIEWS_ORDER_MESSAGE)


def faq_placement(document: FunnelDocument) -> Iterable[RuleViolation]:
    tags = _tags(document)
    accordions_index = _first_index(tags, "Accordions")
    if accordions_index != -1 and accordions_index < len(tags) // 2:
        yield RuleViolation("warning", FAQ_PLACEMENT_MESSAGE)


def unique_block_ids(document: FunnelDocument) -> Iterable[RuleViolation]:
    seen: set[str] = set()
    duplicates: list[str] = []
    for block in document.blocks:
        block_id = block_id_of(block)
        if block_id is None:
            continue
        if block_id in seen and block_id not in duplicates:
            duplicates.append(block_id)
        seen.add(block_id)
    if duplicates:
        yield RuleViolation("error", f"Duplicate block IDs found: {', '.join(duplicates)}")


DEFAULT_RULES: tuple[Rule, ...] = (
    cta_presence,
    cta_redundancy,
    opening_block,
    social_proof_order,
    faq_placement,
    unique_block_ids,
)


def lint(document: FunnelDocument, rules: Sequence[Rule] = DEFAULT_RULES) -> RuleReport:
    """Run advisory best-practice checks over a structurally valid funnel.

    Errors are blocking only by caller policy; warnings never affect `valid`.
    """
    warnings: list[str] = []
    errors: list[str] = []
    for rule in rules:
        for violation in rule(document):
            if violation.severity == "error":
                errors.append(violation.message)
            else:
                warnings.append(violation.message)
    return RuleReport(valid=not errors, warnings=warnings, errors=errors)
