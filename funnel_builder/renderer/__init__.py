from funnel_builder.renderer.pipeline import FunnelRenderer, RenderedNode, render_funnel, render_page
from funnel_builder.renderer.registry import BLOCK_RENDERERS, BlockRenderer

__all__ = [
    "BLOCK_RENDERERS",
    "BlockRenderer",
    "FunnelRenderer",
    "RenderedNode",
    "render_funnel",
    "render_page",
]
