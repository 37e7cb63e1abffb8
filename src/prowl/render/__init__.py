"""Render layer — context construction, Kida rendering, assets, minification."""

from prowl.render.assets import AssetBundle, explicit_bundle, load_asset_bundle
from prowl.render.minify import make_minifier
from prowl.render.renderer import KidaRenderer, Renderer, build_context

__all__ = [
    "AssetBundle",
    "KidaRenderer",
    "Renderer",
    "build_context",
    "explicit_bundle",
    "load_asset_bundle",
    "make_minifier",
]
