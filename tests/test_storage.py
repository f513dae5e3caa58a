from datetime import date, datetime
from pathlib import Path

from buddy_pocket.models import (
    Achievement,
    DailyCapsState,
    HighScore,
    PetState,
    WidgetSnapshot,
)
from buddy_pocket.progression import default_achievements
from buddy_pocket.storage import Storage


# ── Layout ───────────────────────────────────────────────────


def test_creates_directories(tmp_path):
    Storage(tmp_path / "data")
    assert (tmp_path / "data").is_dir()
    assert (tmp_path / "data" / "shared").is_dir()


def test_custom_shared_dir(tmp_path):
    storage = Storage(tmp_path / "data", shared_path=tmp_path / "group")
    storage.save_widget(WidgetSnapshot(
        name="Zeta", hunger=1, happiness=1, energy=1, hygiene=1,
        level=1, streak=0, body_type="blob", body_color="violet",
        eye_type="normal", mood="😊",
    ))
    assert (tmp_path / "group" / "widget.json").is_file()


# ── Missing blobs ────────────────────────────────────────────


def test_missing_blobs_read_as_none(storage):
    assert storage.get_pet() is None
    assert storage.get_daily_caps() is None
    assert storage.get_shop() is None
    assert storage.get_battle_pass() is None
    assert storage.get_missions() is None
    assert storage.get_achievements() is None
    assert storage.get_high_scores() is None
    assert storage.get_widget() is None


# ── Round trips ──────────────────────────────────────────────


def test_pet_persists(storage):
    pet = PetState(name="Zeta", gems=42)
    pet.unlocked.decor.append("decor_disco")
    storage.save_pet(pet)
    assert storage.get_pet() == pet


def test_lists_persist(storage):
    achs = default_achievements()
    achs[0].unlocked = True
    storage.save_achievements(achs)
    assert storage.get_achievements() == achs

    scores = [HighScore(game="quiz", score=12, achieved_at=datetime(2026, 3, 4, 10, 0))]
    storage.save_high_scores(scores)
    assert storage.get_high_scores() == scores


def test_no_tmp_file_left(storage, data_dir):
    storage.save_daily_caps(DailyCapsState(day=date(2026, 3, 4)))
    assert not list(data_dir.glob("*.tmp"))


# ── Corruption ───────────────────────────────────────────────


def test_corrupt_blob_reads_as_none(storage, data_dir, caplog):
    (data_dir / "pet.json").write_text("{ this is not json")
    assert storage.get_pet() is None
    assert "discarding unreadable blob pet.json" in caplog.text


def test_invalid_blob_reads_as_none(storage, data_dir):
    (data_dir / "daily_caps.json").write_text('{"day": "yesterday"}')
    assert storage.get_daily_caps() is None


def test_one_bad_blob_does_not_affect_others(storage, data_dir):
    storage.save_achievements([Achievement(id="a", name="A", description="d")])
    (data_dir / "pet.json").write_text("[]")
    assert storage.get_pet() is None
    assert storage.get_achievements()[0].id == "a"


# ── Write failures ───────────────────────────────────────────


def test_failed_write_is_logged_and_reported(storage, data_dir, monkeypatch, caplog):
    storage.save_pet(PetState(name="Zeta"))

    def disk_full(self, data):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(Path, "write_bytes", disk_full)
    assert storage.save_pet(PetState(name="Other")) is False
    assert "could not write blob pet.json" in caplog.text
    monkeypatch.undo()
    assert storage.get_pet().name == "Zeta"


def test_successful_write_reports_true(storage):
    assert storage.save_daily_caps(DailyCapsState(day=date(2026, 3, 4))) is True
