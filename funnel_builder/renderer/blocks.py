from __future__ import annotations

from html import escape
from typing import Any, Mapping


def _attr(value: Any) -> str:
    return escape(str(value), quote=True)


def _text(value: Any) -> str:
    return escape(str(value), quote=False)


def _price(value: Any) -> str:
    return f"${float(value):.2f}"


def _media_tag(item: Mapping[str, Any], *, controls: bool = True) -> str:
    src = _attr(item["src"])
    if item.get("type") == "video":
        return f'<video src="{src}"{" controls" if controls else ""} playsinline></video>'
    return f'<img src="{src}" alt="{_attr(item.get("alt") or "")}" loading="lazy">'


def _product_card(product: Mapping[str, Any]) -> str:
    badge = product.get("badge")
    badge_html = f'<span class="product-badge">{_text(badge)}</span>' if badge else ""
    return (
        f'<a class="product-card" href="{_attr(product["url"])}">'
        f'<div class="product-image"><img src="{_attr(product["image"])}" alt="{_attr(product["title"])}">'
        f"{badge_html}</div>"
        f'<h3 class="product-title">{_text(product["title"])}</h3>'
        f'<p class="product-price">{_price(product["price"])}</p>'
        "</a>"
    )


def render_banner(props: Mapping[str, Any]) -> str:
    style = f'background-color: {_attr(props["background"])}; color: {_attr(props["textColor"])}'
    dismiss = (
        '<button class="banner-dismiss" aria-label="Dismiss banner">&#10005;</button>'
        if props.get("dismissible")
        else ""
    )
    return f'<div class="block-banner" style="{style}">{_text(props["content"])}{dismiss}</div>'


def render_callout(props: Mapping[str, Any]) -> str:
    align = props.get("align") or "center"
    icon = props.get("icon")
    icon_html = f'<div class="callout-icon">{_text(icon)}</div>' if icon else ""
    return (
        f'<section class="block-callout align-{_attr(align)}">{icon_html}'
        f'<h1 class="callout-title">{_text(props["title"])}</h1>'
        f'<p class="callout-subtitle">{_text(props["subtitle"])}</p>'
        "</section>"
    )


def render_text(props: Mapping[str, Any]) -> str:
    align = props.get("align") or "left"
    size = props.get("size") or "base"
    return (
        f'<div class="block-text align-{_attr(align)} size-{_attr(size)}">'
        f"<p>{_text(props['content'])}</p></div>"
    )


def render_reviews(props: Mapping[str, Any]) -> str:
    layout = props.get("layout") or "stacked"
    cards = []
    for review in props["items"]:
        # Half stars round up; the markup only draws whole stars.
        stars = min(5, max(0, int(float(review["stars"]) + 0.5)))
        verified = '<span class="review-verified">&#10003; Verified</span>' if review.get("verified") else ""
        cards.append(
            '<div class="review-card">'
            f'<div class="review-stars">{"&#9733;" * stars}{"&#9734;" * (5 - stars)}</div>{verified}'
            f'<p class="review-quote">&ldquo;{_text(review["quote"])}&rdquo;</p>'
            f'<p class="review-name">&mdash; {_text(review["name"])}</p>'
            "</div>"
        )
    return (
        f'<section class="block-reviews layout-{_attr(layout)}">'
        '<h2 class="reviews-heading">What Customers Say</h2>'
        f'<div class="reviews-list">{"".join(cards)}</div>'
        "</section>"
    )


def render_icon_group(props: Mapping[str, Any]) -> str:
    layout = props.get("layout") or "horizontal"
    icons = "".join(
        f'<div class="icon-item"><span class="icon-src">{_text(icon["src"])}</span>'
        f'<span class="icon-label">{_text(icon["label"])}</span></div>'
        for icon in props["icons"]
    )
    return f'<div class="block-icon-group layout-{_attr(layout)}">{icons}</div>'


def render_media(props: Mapping[str, Any]) -> str:
    caption = props.get("caption")
    caption_html = f"<figcaption>{_text(caption)}</figcaption>" if caption else ""
    return f'<figure class="block-media">{_media_tag(props)}{caption_html}</figure>'


def render_media_carousel(props: Mapping[str, Any]) -> str:
    autoplay = "true" if props.get("autoplay") else "false"
    slides = "".join(
        f'<div class="carousel-slide">{_media_tag(item, controls=False)}</div>' for item in props["media"]
    )
    return f'<div class="block-media-carousel" data-autoplay="{autoplay}">{slides}</div>'


def render_accordions(props: Mapping[str, Any]) -> str:
    sections = "".join(
        f'<details class="accordion-section"><summary>{_text(section["title"])}</summary>'
        f"<div>{_text(section['content'])}</div></details>"
        for section in props["sections"]
    )
    return f'<section class="block-accordions">{sections}</section>'


def render_product_grid(props: Mapping[str, Any]) -> str:
    columns = props.get("columns") or 2
    cards = "".join(_product_card(product) for product in props["products"])
    return f'<div class="block-product-grid columns-{_attr(columns)}">{cards}</div>'


def render_variant_selector(props: Mapping[str, Any]) -> str:
    options = props["options"]
    selected = props.get("defaultValue") or options[0]["value"]
    buttons = []
    for option in options:
        is_selected = option["value"] == selected
        price_diff = option.get("priceDiff")
        diff_html = ""
        if price_diff:
            sign = "+" if price_diff > 0 else "-"
            diff_html = f'<span class="variant-price-diff">{sign}{_price(abs(price_diff))}</span>'
        badge = option.get("badge")
        badge_html = f'<span class="variant-badge">{_text(badge)}</span>' if badge else ""
        buttons.append(
            f'<button class="variant-option{" selected" if is_selected else ""}" '
            f'data-value="{_attr(option["value"])}" aria-pressed="{"true" if is_selected else "false"}">'
            f'<span class="variant-label">{_text(option["label"])}</span>{diff_html}{badge_html}</button>'
        )
    return (
        '<div class="block-variant-selector">'
        f'<label class="variant-selector-label">{_text(props["label"])}</label>'
        f'<div class="variant-options">{"".join(buttons)}</div>'
        "</div>"
    )


def render_product_image_carousel(props: Mapping[str, Any]) -> str:
    zoom = "true" if props.get("zoomEnabled") else "false"
    images = "".join(
        f'<img class="product-carousel-image" src="{_attr(image["src"])}" alt="{_attr(image["alt"])}">'
        for image in props["images"]
    )
    return f'<div class="block-product-image-carousel" data-zoom="{zoom}">{images}</div>'


def render_add_to_cart_button(props: Mapping[str, Any]) -> str:
    variant = props.get("variant") or "primary"
    size = props.get("size") or "lg"
    subtext = props.get("subtext")
    subtext_html = f'<p class="cta-subtext">{_text(subtext)}</p>' if subtext else ""
    return (
        '<div class="block-add-to-cart">'
        f'<a class="cta-button variant-{_attr(variant)} size-{_attr(size)}" href="{_attr(props["link"])}">'
        f"{_text(props['text'])}</a>{subtext_html}</div>"
    )


def render_upsell_carousel(props: Mapping[str, Any]) -> str:
    title = props.get("title") or "You May Also Like"
    cards = "".join(_product_card(product) for product in props["products"])
    return (
        '<section class="block-upsell-carousel">'
        f'<h2 class="upsell-title">{_text(title)}</h2>'
        f'<div class="upsell-track">{cards}</div>'
        "</section>"
    )
