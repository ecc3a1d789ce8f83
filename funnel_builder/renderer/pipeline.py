from __future__ import annotations

import logging
from dataclasses import dataclass
from html import escape
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel

from funnel_builder.renderer.registry import BLOCK_RENDERERS, BlockRenderer
from funnel_builder.schemas.funnels import FunnelDocument

logger = logging.getLogger(__name__)

RenderableFunnel = Union[FunnelDocument, Mapping[str, Any]]


@dataclass(frozen=True)
class RenderedNode:
    block_id: str
    tag: str
    html: str
    placeholder: bool = False

    def wrapped(self) -> str:
        """Node markup carrying the attributes editors use to map a region back to its block."""
        return (
            f'<div data-block-id="{escape(self.block_id, quote=True)}" '
            f'data-block-type="{escape(self.tag, quote=True)}">{self.html}</div>'
        )


def _block_fields(block: Any) -> tuple[str, str, Mapping[str, Any]]:
    if isinstance(block, BaseModel):
        props = block.props.model_dump(mode="json", exclude_none=True, warnings=False)
        return str(block.id), str(block.tag), props
    if isinstance(block, Mapping):
        tag = block.get("tag", block.get("type"))
        props = block.get("props")
        return str(block.get("id", "")), str(tag), props if isinstance(props, Mapping) else {}
    raise TypeError(f"Unsupported block value: {type(block).__name__}")


def _placeholder(block_id: str, tag: str) -> str:
    return (
        '<div class="block-unknown" role="note">'
        f'<p class="unknown-title">Unknown block type: {escape(tag)}</p>'
        f'<p class="unknown-id">Block ID: {escape(block_id)}</p>'
        "</div>"
    )


class FunnelRenderer:
    """Turns a funnel into one rendered node per block, in document order."""

    def __init__(self, registry: Optional[Mapping[str, BlockRenderer]] = None) -> None:
        self._registry = dict(BLOCK_RENDERERS if registry is None else registry)

    @property
    def tags(self) -> frozenset[str]:
        return frozenset(self._registry)

    def render(self, document: RenderableFunnel) -> list[RenderedNode]:
        raw_blocks = document.blocks if isinstance(document, FunnelDocument) else document.get("blocks") or []
        nodes: list[RenderedNode] = []
        for block in raw_blocks:
            block_id, tag, props = _block_fields(block)
            renderer = self._registry.get(tag)
            if renderer is None:
                logger.warning("funnel_renderer.unknown_block", extra={"blockId": block_id, "tag": tag})
                nodes.append(
                    RenderedNode(block_id=block_id, tag=tag, html=_placeholder(block_id, tag), placeholder=True)
                )
                continue
            nodes.append(RenderedNode(block_id=block_id, tag=tag, html=renderer(props)))
        return nodes

    def render_page(self, document: RenderableFunnel) -> str:
        if isinstance(document, FunnelDocument):
            funnel_id = document.id
        else:
            funnel_id = str(document.get("id", ""))
        body = "".join(node.wrapped() for node in self.render(document))
        return f'<div class="funnel" data-funnel-id="{escape(funnel_id, quote=True)}">{body}</div>'


_default_renderer = FunnelRenderer()


def render_funnel(document: RenderableFunnel) -> list[RenderedNode]:
    return _default_renderer.render(document)


def render_page(document: RenderableFunnel) -> str:
    return _default_renderer.render_page(document)
