from __future__ import annotations

from funnel_builder.examples import example_funnel
from funnel_builder.services.rules import (
    CTA_COUNT_MESSAGE,
    DEFAULT_RULES,
    FAQ_PLACEMENT_MESSAGE,
    MISSING_CTA_MESSAGE,
    REVIEWS_ORDER_MESSAGE,
    RuleViolation,
    lint,
)
from funnel_builder.services.validation import parse_or_fail


def _block(block_id: str, tag: str) -> dict:
    props = {
        "Callout": {"title": "Welcome", "subtitle": "Sub"},
        "Banner": {"content": "Sale", "background": "#000", "textColor": "#fff"},
        "Text": {"content": "Body"},
        "AddToCartButton": {"text": "Buy", "link": "#"},
        "Reviews": {"items": [{"name": "Ana", "quote": "Great", "stars": 5}]},
        "Accordions": {"sections": [{"title": "Q", "content": "A"}]},
    }[tag]
    return {"id": block_id, "tag": tag, "props": props}


def _funnel(*blocks: tuple[str, str]):
    return parse_or_fail(
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "name": "Rules",
            "product": {"title": "T", "description": "D", "price": 10},
            "blocks": [_block(block_id, tag) for block_id, tag in blocks],
        }
    )


def test_missing_cta_is_an_error(valid_funnel):
    funnel = valid_funnel.model_copy(update={"blocks": valid_funnel.blocks[:1]})

    report = lint(funnel)

    assert report.valid is False
    assert MISSING_CTA_MESSAGE in report.errors


def test_single_cta_warns_but_stays_valid(valid_funnel):
    report = lint(valid_funnel)

    assert report.valid is True
    assert report.errors == []
    assert CTA_COUNT_MESSAGE in report.warnings


def test_scenario_warns_about_cta_count_and_opening_block():
    funnel = _funnel(("b1", "AddToCartButton"))

    report = lint(funnel)

    assert report.valid is True
    assert CTA_COUNT_MESSAGE in report.warnings
    assert (
        "First block should be one of: Callout, Banner, ProductImageCarousel. Found: AddToCartButton"
        in report.warnings
    )


def test_opening_block_accepts_allowed_tags():
    for tag in ("Callout", "Banner"):
        report = lint(_funnel(("first", tag), ("cta-1", "AddToCartButton"), ("cta-2", "AddToCartButton")))
        assert report.warnings == []


def test_reviews_after_final_cta_warns():
    funnel = _funnel(
        ("c", "Callout"),
        ("cta-1", "AddToCartButton"),
        ("cta-2", "AddToCartButton"),
        ("r", "Reviews"),
    )

    assert REVIEWS_ORDER_MESSAGE in lint(funnel).warnings


def test_reviews_before_final_cta_is_fine():
    funnel = _funnel(
        ("c", "Callout"),
        ("cta-1", "AddToCartButton"),
        ("r", "Reviews"),
        ("cta-2", "AddToCartButton"),
    )

    assert REVIEWS_ORDER_MESSAGE not in lint(funnel).warnings


def test_faq_in_top_half_warns():
    funnel = _funnel(
        ("c", "Callout"),
        ("faq", "Accordions"),
        ("t1", "Text"),
        ("cta-1", "AddToCartButton"),
        ("cta-2", "AddToCartButton"),
    )

    assert FAQ_PLACEMENT_MESSAGE in lint(funnel).warnings


def test_faq_at_midpoint_is_bottom_half():
    funnel = _funnel(
        ("c", "Callout"),
        ("cta-1", "AddToCartButton"),
        ("faq", "Accordions"),
        ("cta-2", "AddToCartButton"),
    )

    assert FAQ_PLACEMENT_MESSAGE not in lint(funnel).warnings


def test_duplicate_ids_are_an_error_listing_each_id_once():
    funnel = _funnel(
        ("dup", "Callout"),
        ("dup", "AddToCartButton"),
        ("dup", "AddToCartButton"),
        ("other", "Text"),
        ("other", "Text"),
    )

    report = lint(funnel)

    assert report.valid is False
    assert report.errors == ["Duplicate block IDs found: dup, other"]


def test_rules_read_raw_mapping_blocks():
    funnel = _funnel(("callout-1", "Callout"), ("cta-1", "AddToCartButton"))
    blocks = [*funnel.blocks, {"id": "cta-1", "tag": "AddToCartButton", "props": {"text": "Buy", "link": "#"}}]

    report = lint(funnel.model_copy(update={"blocks": blocks}))

    assert report.errors == ["Duplicate block IDs found: cta-1"]
    assert CTA_COUNT_MESSAGE not in report.warnings


def test_example_funnel_passes_all_rules():
    report = lint(example_funnel())

    assert report.valid is True
    assert report.warnings == []
    assert report.errors == []


def test_warnings_never_affect_validity():
    funnel = _funnel(("t", "Text"), ("faq", "Accordions"), ("cta", "AddToCartButton"), ("r", "Reviews"))

    report = lint(funnel)

    assert len(report.warnings) == 4
    assert report.valid is True


def test_rule_order_does_not_change_findings(valid_funnel):
    forward = lint(valid_funnel)
    backward = lint(valid_funnel, rules=tuple(reversed(DEFAULT_RULES)))

    assert sorted(forward.warnings) == sorted(backward.warnings)
    assert sorted(forward.errors) == sorted(backward.errors)


def test_custom_rules_extend_the_engine(valid_funnel):
    def no_text_blocks(document):
        for block in document.blocks:
            if block.tag == "Text":
                yield RuleViolation("warning", f"Text block {block.id} found")

    report = lint(valid_funnel, rules=(*DEFAULT_RULES, no_text_blocks))

    assert "Text block text-1 found" in report.warnings


def test_lint_tolerates_a_document_emptied_by_edits(valid_funnel):
    emptied = valid_funnel.model_copy(update={"blocks": []})

    report = lint(emptied)

    assert report.errors == [MISSING_CTA_MESSAGE]
    assert report.warnings == [CTA_COUNT_MESSAGE]
