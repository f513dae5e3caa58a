"""JSON file storage.

Each persisted entity is one JSON blob under a configurable base
directory. There is no database; reads validate through the pydantic
models and writes dump them back.

Directory layout:

    {base}/
      pet.json              ← PetState
      daily_caps.json       ← DailyCapsState
      shop.json             ← ShopState (weekly slate, recent purchases, flash sale)
      battle_pass.json      ← BattlePassState
      missions.json         ← MissionBoard
      achievements.json     ← list of Achievement
      high_scores.json      ← list of HighScore
    {shared}/
      widget.json           ← WidgetSnapshot, read by the widget process

A blob that is missing, unreadable or fails validation reads as None and
the caller falls back to that entity's default. One bad blob never stops
the others from loading. A failed write is logged and reported as False
so the caller can keep the state dirty and retry.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from buddy_pocket.models import (
    Achievement,
    BattlePassState,
    DailyCapsState,
    HighScore,
    MissionBoard,
    PetState,
    ShopState,
    WidgetSnapshot,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_achievements_adapter = TypeAdapter(list[Achievement])
_high_scores_adapter = TypeAdapter(list[HighScore])


class Storage:
    def __init__(self, base_path: Path, shared_path: Path | None = None) -> None:
        self._base = base_path
        self._shared = shared_path or base_path / "shared"
        self._base.mkdir(parents=True, exist_ok=True)
        self._shared.mkdir(parents=True, exist_ok=True)

    @property
    def base_path(self) -> Path:
        return self._base

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _read(self, path: Path, adapter: TypeAdapter[T]) -> T | None:
        if not path.exists():
            return None
        try:
            return adapter.validate_json(path.read_bytes())
        except (OSError, ValidationError) as e:
            logger.warning("discarding unreadable blob %s: %s", path.name, e)
            return None

    def _write(self, path: Path, data: bytes) -> bool:
        tmp = path.with_suffix(".tmp")
        try:
            tmp.write_bytes(data)
            tmp.replace(path)
        except OSError as e:
            logger.warning("could not write blob %s: %s", path.name, e)
            return False
        return True

    def _read_model(self, name: str, model: type[BaseModel]):
        return self._read(self._base / name, TypeAdapter(model))

    def _write_model(self, name: str, value: BaseModel) -> bool:
        return self._write(self._base / name, value.model_dump_json(indent=2).encode())

    # ------------------------------------------------------------------
    # Pet
    # ------------------------------------------------------------------

    def get_pet(self) -> PetState | None:
        return self._read_model("pet.json", PetState)

    def save_pet(self, pet: PetState) -> bool:
        return self._write_model("pet.json", pet)

    # ------------------------------------------------------------------
    # Satellite trackers
    # ------------------------------------------------------------------

    def get_daily_caps(self) -> DailyCapsState | None:
        return self._read_model("daily_caps.json", DailyCapsState)

    def save_daily_caps(self, caps: DailyCapsState) -> bool:
        return self._write_model("daily_caps.json", caps)

    def get_shop(self) -> ShopState | None:
        return self._read_model("shop.json", ShopState)

    def save_shop(self, shop: ShopState) -> bool:
        return self._write_model("shop.json", shop)

    def get_battle_pass(self) -> BattlePassState | None:
        return self._read_model("battle_pass.json", BattlePassState)

    def save_battle_pass(self, bp: BattlePassState) -> bool:
        return self._write_model("battle_pass.json", bp)

    def get_missions(self) -> MissionBoard | None:
        return self._read_model("missions.json", MissionBoard)

    def save_missions(self, board: MissionBoard) -> bool:
        return self._write_model("missions.json", board)

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def get_achievements(self) -> list[Achievement] | None:
        return self._read(self._base / "achievements.json", _achievements_adapter)

    def save_achievements(self, achievements: list[Achievement]) -> bool:
        return self._write(
            self._base / "achievements.json",
            _achievements_adapter.dump_json(achievements, indent=2),
        )

    def get_high_scores(self) -> list[HighScore] | None:
        return self._read(self._base / "high_scores.json", _high_scores_adapter)

    def save_high_scores(self, scores: list[HighScore]) -> bool:
        return self._write(
            self._base / "high_scores.json",
            _high_scores_adapter.dump_json(scores, indent=2),
        )

    # ------------------------------------------------------------------
    # Widget projection (shared location)
    # ------------------------------------------------------------------

    def get_widget(self) -> WidgetSnapshot | None:
        return self._read(self._shared / "widget.json", TypeAdapter(WidgetSnapshot))

    def save_widget(self, snapshot: WidgetSnapshot) -> bool:
        return self._write(self._shared / "widget.json", snapshot.model_dump_json(indent=2).encode())
