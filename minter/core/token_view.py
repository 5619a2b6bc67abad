"""Token View: presentation fields pulled out of arbitrarily nested NFT metadata."""

from typing import Any

from minter.core.property_locator import locate

UNNAMED_TOKEN = "Unnamed token"


def _first_of(names: tuple[str, ...], metadata: Any) -> Any | None:
    for name in names:
        value = locate(name, metadata)
        if value is not None:
            return value
    return None


def describe_token(metadata: Any) -> dict:
    """Build a flat token view. Missing fields fall back to defaults."""
    name = _first_of(("name", "title"), metadata)
    image = _first_of(("image", "image_url", "imageUrl"), metadata)
    attributes = locate("attributes", metadata)
    if not isinstance(attributes, list):
        attributes = []
    return {
        "name": str(name) if name is not None else UNNAMED_TOKEN,
        "description": locate("description", metadata) or "",
        "image": image,
        "attributes": attributes,
    }
