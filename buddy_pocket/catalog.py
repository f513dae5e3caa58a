"""Catalog: the static registry of cosmetics and appearance options.

Content lives in presets/catalog.json, not in code. The file has four
top-level keys:

    bodies       ← AppearanceOption records; secret bodies carry unlock_level
    colors       ← AppearanceOption records; premium ones carry a gem price
    eyes         ← same shape as colors
    item_groups  ← [{category, gender, premium, items: [...]}, ...]

Each item group supplies defaults (category, gender, premium) that are
merged into every item of the group before validation, so the JSON stays
free of repetition. A Catalog is immutable once loaded.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from buddy_pocket.models import (
    AppearanceKind,
    AppearanceOption,
    CatalogItem,
    Gender,
    ItemCategory,
)

logger = logging.getLogger(__name__)

PRESETS_DIR = Path(__file__).parent / "presets"
DEFAULT_CATALOG_PATH = PRESETS_DIR / "catalog.json"

_GROUP_DEFAULTS = ("category", "gender", "premium")


class Catalog:
    def __init__(
        self,
        items: list[CatalogItem],
        bodies: list[AppearanceOption],
        colors: list[AppearanceOption],
        eyes: list[AppearanceOption],
    ) -> None:
        self._items: dict[str, CatalogItem] = {}
        for item in items:
            if item.id in self._items:
                raise ValueError(f"Duplicate catalog item id: {item.id}")
            self._items[item.id] = item
        self._appearance: dict[str, dict[str, AppearanceOption]] = {
            "body": {o.id: o for o in bodies},
            "color": {o.id: o for o in colors},
            "eye": {o.id: o for o in eyes},
        }

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Catalog:
        items: list[CatalogItem] = []
        for group in data.get("item_groups", []):
            defaults = {k: group[k] for k in _GROUP_DEFAULTS if k in group}
            for raw in group.get("items", []):
                items.append(CatalogItem.model_validate({**defaults, **raw}))
        return cls(
            items=items,
            bodies=[AppearanceOption.model_validate(b) for b in data.get("bodies", [])],
            colors=[AppearanceOption.model_validate(c) for c in data.get("colors", [])],
            eyes=[AppearanceOption.model_validate(e) for e in data.get("eyes", [])],
        )

    @classmethod
    def from_file(cls, path: Path) -> Catalog:
        catalog = cls.from_dict(json.loads(path.read_text(encoding="utf-8")))
        logger.debug(
            "catalog loaded path=%s items=%d bodies=%d",
            path, len(catalog._items), len(catalog._appearance["body"]),
        )
        return catalog

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def item(self, item_id: str) -> CatalogItem | None:
        return self._items.get(item_id)

    def all_items(self) -> list[CatalogItem]:
        return list(self._items.values())

    def items(
        self,
        category: ItemCategory | None = None,
        gender: Gender | None = None,
    ) -> list[CatalogItem]:
        """Items in catalog order, optionally filtered.

        A gender filter keeps unisex items alongside the gender's own line.
        """
        result = []
        for item in self._items.values():
            if category is not None and item.category != category:
                continue
            if gender is not None and not (item.unisex or item.gender == gender):
                continue
            result.append(item)
        return result

    def premium_pool(self, gender: Gender) -> list[CatalogItem]:
        """Every premium item the shop may offer a pet of this gender."""
        return [i for i in self.items(gender=gender) if i.premium]

    # ------------------------------------------------------------------
    # Appearance options
    # ------------------------------------------------------------------

    def appearance(self, kind: AppearanceKind, option_id: str) -> AppearanceOption | None:
        return self._appearance[kind].get(option_id)

    def appearance_options(self, kind: AppearanceKind) -> list[AppearanceOption]:
        return list(self._appearance[kind].values())

    @property
    def bodies(self) -> list[AppearanceOption]:
        return self.appearance_options("body")

    @property
    def colors(self) -> list[AppearanceOption]:
        return self.appearance_options("color")

    @property
    def eyes(self) -> list[AppearanceOption]:
        return self.appearance_options("eye")

    def secret_bodies(self) -> list[AppearanceOption]:
        return [b for b in self.bodies if b.secret]

    def basic_options(self, kind: AppearanceKind) -> list[AppearanceOption]:
        """Options every pet owns from the start (not premium, not secret)."""
        return [
            o for o in self._appearance[kind].values()
            if not o.premium and not o.secret
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "bodies": [o.model_dump() for o in self.bodies],
            "colors": [o.model_dump() for o in self.colors],
            "eyes": [o.model_dump() for o in self.eyes],
            "items": [i.model_dump() for i in self._items.values()],
        }


@lru_cache(maxsize=1)
def default_catalog() -> Catalog:
    """The bundled catalog, loaded once per process."""
    return Catalog.from_file(DEFAULT_CATALOG_PATH)
