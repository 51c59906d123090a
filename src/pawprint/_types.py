"""Shared type definitions for pawprint."""

from typing import Literal

# Kind of a registered resource record
type AssetKind = Literal["image", "video", "asset", "svg", "script-link"]

# Key into the resolved per-kind prefixes
type PrefixKind = Literal["image", "video", "asset", "svg", "css", "js"]

# Site-relative URL written into rendered HTML (e.g. "images/hero_ab12.jpg")
type PublicUrl = str

# Entity identifier (e.g. "base/elements/e-image")
type EntityId = str
