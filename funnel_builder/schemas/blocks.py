from __future__ import annotations

from typing import Annotated, Any, Literal, Mapping, Optional, Union, get_args

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    StrictBool,
    Tag,
    TypeAdapter,
    ValidationError,
    model_validator,
)

BlockTag = Literal[
    "Banner",
    "Callout",
    "Text",
    "Reviews",
    "IconGroup",
    "Media",
    "MediaCarousel",
    "Accordions",
    "ProductGrid",
    "VariantSelector",
    "ProductImageCarousel",
    "AddToCartButton",
    "UpsellCarousel",
]

_URL_ADAPTER = TypeAdapter(AnyUrl)


def _check_url(value: str) -> str:
    # Validate with pydantic but keep the producer's exact string.
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError:
        raise ValueError("Must be valid URL") from None
    return value


NonEmptyStr = Annotated[str, Field(min_length=1)]
# Numbers must arrive as JSON numbers: no numeric strings, no booleans, no inf/nan.
StrictNumber = Annotated[float, Field(strict=True, allow_inf_nan=False)]
PositiveNumber = Annotated[float, Field(strict=True, gt=0, allow_inf_nan=False)]
StarRating = Annotated[float, Field(strict=True, ge=1, le=5, allow_inf_nan=False)]
UrlStr = Annotated[str, AfterValidator(_check_url)]
Alignment = Literal["left", "center", "right"]
MediaType = Literal["image", "video"]


class CatalogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


# ============================================
# Block props
# ============================================


class BannerProps(CatalogModel):
    content: NonEmptyStr
    background: NonEmptyStr
    textColor: NonEmptyStr
    dismissible: Optional[StrictBool] = None


class CalloutProps(CatalogModel):
    title: NonEmptyStr
    subtitle: NonEmptyStr
    icon: Optional[str] = None
    align: Alignment = "center"


class TextProps(CatalogModel):
    content: NonEmptyStr
    align: Alignment = "left"
    size: Literal["sm", "base", "lg"] = "base"


class ReviewItem(CatalogModel):
    name: NonEmptyStr
    quote: NonEmptyStr
    stars: StarRating
    verified: Optional[StrictBool] = None


class ReviewsProps(CatalogModel):
    items: list[ReviewItem] = Field(min_length=1)
    layout: Literal["stacked", "carousel"] = "stacked"


class IconItem(CatalogModel):
    label: NonEmptyStr
    src: NonEmptyStr


class IconGroupProps(CatalogModel):
    icons: list[IconItem] = Field(min_length=1)
    layout: Literal["horizontal", "grid"] = "horizontal"


class MediaProps(CatalogModel):
    src: UrlStr
    alt: Optional[str] = None
    caption: Optional[str] = None
    type: MediaType


class MediaCarouselItem(CatalogModel):
    type: MediaType
    src: UrlStr
    alt: Optional[str] = None


class MediaCarouselProps(CatalogModel):
    media: list[MediaCarouselItem] = Field(min_length=1)
    autoplay: StrictBool = False


class AccordionSection(CatalogModel):
    title: NonEmptyStr
    content: NonEmptyStr


class AccordionsProps(CatalogModel):
    sections: list[AccordionSection] = Field(min_length=1)


class ProductItem(CatalogModel):
    title: NonEmptyStr
    image: UrlStr
    price: PositiveNumber
    url: NonEmptyStr
    badge: Optional[str] = None


class ProductGridProps(CatalogModel):
    products: list[ProductItem] = Field(min_length=1)
    columns: Literal[2, 3, 4] = 2


class VariantOption(CatalogModel):
    label: NonEmptyStr
    value: NonEmptyStr
    priceDiff: Optional[StrictNumber] = None
    badge: Optional[str] = None


class VariantSelectorProps(CatalogModel):
    label: NonEmptyStr
    options: list[VariantOption] = Field(min_length=1)
    defaultValue: Optional[str] = None


class ProductImage(CatalogModel):
    src: UrlStr
    alt: NonEmptyStr


class ProductImageCarouselProps(CatalogModel):
    images: list[ProductImage] = Field(min_length=1)
    zoomEnabled: StrictBool = False


class AddToCartButtonProps(CatalogModel):
    text: NonEmptyStr
    link: NonEmptyStr
    variant: Literal["primary", "secondary"] = "primary"
    size: Literal["sm", "md", "lg"] = "lg"
    subtext: Optional[str] = None


class UpsellCarouselProps(CatalogModel):
    title: Optional[str] = None
    products: list[ProductItem] = Field(min_length=1)


# ============================================
# Block variants
# ============================================


class BlockBase(CatalogModel):
    id: NonEmptyStr

    @model_validator(mode="before")
    @classmethod
    def accept_type_key(cls, data: Any) -> Any:
        # Producers following the prompt contract send `type` instead of `tag`.
        if isinstance(data, dict) and "tag" not in data and "type" in data:
            data = dict(data)
            data["tag"] = data.pop("type")
        return data


class BannerBlock(BlockBase):
    tag: Literal["Banner"]
    props: BannerProps


class CalloutBlock(BlockBase):
    tag: Literal["Callout"]
    props: CalloutProps


class TextBlock(BlockBase):
    tag: Literal["Text"]
    props: TextProps


class ReviewsBlock(BlockBase):
    tag: Literal["Reviews"]
    props: ReviewsProps


class IconGroupBlock(BlockBase):
    tag: Literal["IconGroup"]
    props: IconGroupProps


class MediaBlock(BlockBase):
    tag: Literal["Media"]
    props: MediaProps


class MediaCarouselBlock(BlockBase):
    tag: Literal["MediaCarousel"]
    props: MediaCarouselProps


class AccordionsBlock(BlockBase):
    tag: Literal["Accordions"]
    props: AccordionsProps


class ProductGridBlock(BlockBase):
    tag: Literal["ProductGrid"]
    props: ProductGridProps


class VariantSelectorBlock(BlockBase):
    tag: Literal["VariantSelector"]
    props: VariantSelectorProps


class ProductImageCarouselBlock(BlockBase):
    tag: Literal["ProductImageCarousel"]
    props: ProductImageCarouselProps


class AddToCartButtonBlock(BlockBase):
    tag: Literal["AddToCartButton"]
    props: AddToCartButtonProps


class UpsellCarouselBlock(BlockBase):
    tag: Literal["UpsellCarousel"]
    props: UpsellCarouselProps


def block_tag_of(value: Any) -> Optional[str]:
    if isinstance(value, Mapping):
        tag = value.get("tag", value.get("type"))
        return tag if isinstance(tag, str) else None
    tag = getattr(value, "tag", None)
    return tag if isinstance(tag, str) else None


def block_id_of(value: Any) -> Optional[str]:
    """Id of a catalog block or of a raw mapping block inserted by an editor."""
    if isinstance(value, Mapping):
        block_id = value.get("id")
    else:
        block_id = getattr(value, "id", None)
    return block_id if isinstance(block_id, str) else None


Block = Annotated[
    Union[
        Annotated[BannerBlock, Tag("Banner")],
        Annotated[CalloutBlock, Tag("Callout")],
        Annotated[TextBlock, Tag("Text")],
        Annotated[ReviewsBlock, Tag("Reviews")],
        Annotated[IconGroupBlock, Tag("IconGroup")],
        Annotated[MediaBlock, Tag("Media")],
        Annotated[MediaCarouselBlock, Tag("MediaCarousel")],
        Annotated[AccordionsBlock, Tag("Accordions")],
        Annotated[ProductGridBlock, Tag("ProductGrid")],
        Annotated[VariantSelectorBlock, Tag("VariantSelector")],
        Annotated[ProductImageCarouselBlock, Tag("ProductImageCarousel")],
        Annotated[AddToCartButtonBlock, Tag("AddToCartButton")],
        Annotated[UpsellCarouselBlock, Tag("UpsellCarousel")],
    ],
    Discriminator(block_tag_of),
]


# Single source of truth for which tags exist and what each one carries.
BLOCK_CATALOG: dict[str, tuple[type[BlockBase], type[CatalogModel]]] = {
    "Banner": (BannerBlock, BannerProps),
    "Callout": (CalloutBlock, CalloutProps),
    "Text": (TextBlock, TextProps),
    "Reviews": (ReviewsBlock, ReviewsProps),
    "IconGroup": (IconGroupBlock, IconGroupProps),
    "Media": (MediaBlock, MediaProps),
    "MediaCarousel": (MediaCarouselBlock, MediaCarouselProps),
    "Accordions": (AccordionsBlock, AccordionsProps),
    "ProductGrid": (ProductGridBlock, ProductGridProps),
    "VariantSelector": (VariantSelectorBlock, VariantSelectorProps),
    "ProductImageCarousel": (ProductImageCarouselBlock, ProductImageCarouselProps),
    "AddToCartButton": (AddToCartButtonBlock, AddToCartButtonProps),
    "UpsellCarousel": (UpsellCarouselBlock, UpsellCarouselProps),
}

BLOCK_TAGS: tuple[str, ...] = get_args(BlockTag)

if set(BLOCK_CATALOG) != set(BLOCK_TAGS):
    raise RuntimeError("BLOCK_CATALOG and BlockTag are out of sync")


def is_block_tag(value: Any) -> bool:
    return isinstance(value, str) and value in BLOCK_CATALOG
