from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Brand:
    """Static letterhead and footer content printed on every invoice."""

    name: str
    short_name: str
    initials: str
    tagline: str
    city: str
    telephone: str
    copyright_year: str
    currency: str = "LKR"

    @classmethod
    def from_dict(cls, d: dict) -> Brand:
        """Create a Brand from brand.yaml, falling back to the default letterhead."""
        merged = {**DEFAULT_BRAND_DICT, **{k: v for k, v in d.items() if v is not None}}
        return cls(
            name=str(merged["name"]),
            short_name=str(merged["short_name"]),
            initials=str(merged["initials"]),
            tagline=str(merged["tagline"]),
            city=str(merged["city"]),
            telephone=str(merged["telephone"]),
            copyright_year=str(merged["copyright_year"]),
            currency=str(merged["currency"]),
        )


DEFAULT_BRAND_DICT = {
    "name": "Zyentra Apparel Store",
    "short_name": "Zyentra",
    "initials": "ZY",
    "tagline": "Defining Style — Redefining You",
    "city": "Matara",
    "telephone": "0789822147",
    "copyright_year": "2025",
    "currency": "LKR",
}

DEFAULT_BRAND = Brand(**DEFAULT_BRAND_DICT)
