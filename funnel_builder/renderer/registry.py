from __future__ import annotations

from typing import Any, Callable, Mapping

from funnel_builder.renderer import blocks

BlockRenderer = Callable[[Mapping[str, Any]], str]

# Keys must match BLOCK_CATALOG exactly.
BLOCK_RENDERERS: dict[str, BlockRenderer] = {
    "Banner": blocks.render_banner,
    "Callout": blocks.render_callout,
    "Text": blocks.render_text,
    "Reviews": blocks.render_reviews,
    "IconGroup": blocks.render_icon_group,
    "Media": blocks.render_media,
    "MediaCarousel": blocks.render_media_carousel,
    "Accordions": blocks.render_accordions,
    "ProductGrid": blocks.render_product_grid,
    "VariantSelector": blocks.render_variant_selector,
    "ProductImageCarousel": blocks.render_product_image_carousel,
    "AddToCartButton": blocks.render_add_to_cart_button,
    "UpsellCarousel": blocks.render_upsell_carousel,
}
