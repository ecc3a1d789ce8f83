from __future__ import annotations

from copy import deepcopy
from typing import Any

from funnel_builder.schemas.funnels import FunnelDocument
from funnel_builder.services.validation import parse_or_fail

_EXAMPLE_FUNNEL: dict[str, Any] = {
    "id": "550e8400-e29b-41d4-a716-446655440000",
    "name": "Mood Gummies Funnel",
    "product": {
        "title": "Chili-Peach Mood Gummies",
        "description": "Natural mood-boosting gummies with organic ingredients",
        "price": 29.99,
        "currency": "USD",
    },
    "blocks": [
        {
            "id": "banner-1",
            "tag": "Banner",
            "props": {
                "content": "Limited Drop: Only 500 Tins Available",
                "background": "#FF6B6B",
                "textColor": "#FFFFFF",
            },
        },
        {
            "id": "callout-1",
            "tag": "Callout",
            "props": {
                "title": "Feel the Spark",
                "subtitle": "Mood-boosting gummies that actually taste amazing",
                "align": "center",
            },
        },
        {
            "id": "productimages-1",
            "tag": "ProductImageCarousel",
            "props": {
                "images": [
                    {
                        "src": "https://placehold.co/600x600/6366F1/FFFFFF/png?text=Product",
                        "alt": "Product Front",
                    }
                ],
                "zoomEnabled": False,
            },
        },
        {
            "id": "text-1",
            "tag": "Text",
            "props": {
                "content": (
                    "Our gummies combine organic peach with chili extract to spark warmth "
                    "and elevate your mood, with no jitters and no crash."
                ),
                "align": "left",
                "size": "base",
            },
        },
        {
            "id": "icons-1",
            "tag": "IconGroup",
            "props": {
                "icons": [
                    {"label": "Organic", "src": "leaf"},
                    {"label": "Vegan", "src": "sprout"},
                    {"label": "Non-GMO", "src": "check"},
                ],
                "layout": "horizontal",
            },
        },
        {
            "id": "cta-1",
            "tag": "AddToCartButton",
            "props": {
                "text": "Try It Risk-Free - $29.99",
                "link": "#",
                "variant": "primary",
                "size": "lg",
                "subtext": "Free shipping on orders over $50",
            },
        },
        {
            "id": "reviews-1",
            "tag": "Reviews",
            "props": {
                "items": [
                    {
                        "name": "Sarah M.",
                        "quote": "These gummies are a vibe. I feel energized without the coffee crash.",
                        "stars": 5,
                        "verified": True,
                    }
                ],
                "layout": "stacked",
            },
        },
        {
            "id": "accordions-1",
            "tag": "Accordions",
            "props": {
                "sections": [
                    {
                        "title": "What makes these different?",
                        "content": "We use real chili extract paired with organic peach.",
                    }
                ]
            },
        },
        {
            "id": "cta-2",
            "tag": "AddToCartButton",
            "props": {
                "text": "Start Feeling Better Today",
                "link": "#",
                "variant": "primary",
                "size": "lg",
            },
        },
    ],
}


def example_funnel_payload() -> dict[str, Any]:
    return deepcopy(_EXAMPLE_FUNNEL)


def example_funnel() -> FunnelDocument:
    return parse_or_fail(example_funnel_payload())
