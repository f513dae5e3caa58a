"""Tests for unlocks, purchases, equip rules and decor placement."""

import pytest

from buddy_pocket import wardrobe
from buddy_pocket.errors import (
    AlreadyOwned,
    InsufficientFunds,
    InvalidStateTransition,
    ItemNotUnlocked,
    UnknownItem,
)
from buddy_pocket.models import PetState


@pytest.fixture
def item(catalog):
    return catalog.item


# ── is_unlocked ─────────────────────────────────────────────


class TestIsUnlocked:
    def test_basic_item_gated_by_level(self, item):
        lamp = item("decor_lamp")
        assert not wardrobe.is_unlocked(PetState(level=1), lamp)
        assert wardrobe.is_unlocked(PetState(level=2), lamp)

    def test_premium_needs_ownership_not_level(self, item):
        batman = item("bcostp_batman")
        assert not wardrobe.is_unlocked(PetState(level=50), batman)
        pet = PetState()
        pet.unlocked.costumes.append("bcostp_batman")
        assert wardrobe.is_unlocked(pet, batman)

    def test_dev_mode_owns_everything(self, item):
        assert wardrobe.is_unlocked(PetState(dev_mode=True), item("bcostp_batman"))

    def test_secret_body_by_level(self, catalog):
        wolf = catalog.appearance("body", "loup_garou")
        assert not wardrobe.is_appearance_unlocked(PetState(level=29), "body", wolf)
        assert wardrobe.is_appearance_unlocked(PetState(level=30), "body", wolf)

    def test_basic_and_premium_colors(self, catalog):
        assert wardrobe.is_appearance_unlocked(PetState(), "color", catalog.appearance("color", "violet"))
        assert not wardrobe.is_appearance_unlocked(PetState(), "color", catalog.appearance("color", "galaxie"))


# ── purchase ────────────────────────────────────────────────


class TestPurchase:
    def test_exact_balance_succeeds(self, item):
        viking = item("pacc_viking")
        pet = PetState(gems=viking.price)
        assert wardrobe.purchase(pet, viking) == viking.price
        assert pet.gems == 0
        assert "pacc_viking" in pet.unlocked.head_accessories

    def test_one_short_fails_without_change(self, item):
        viking = item("pacc_viking")
        pet = PetState(gems=viking.price - 1)
        with pytest.raises(InsufficientFunds) as exc:
            wardrobe.purchase(pet, viking)
        assert exc.value.price == viking.price
        assert pet.gems == viking.price - 1
        assert pet.unlocked.head_accessories == []

    def test_custom_price(self, item):
        pet = PetState(gems=100)
        assert wardrobe.purchase(pet, item("bcostp_batman"), price=0) == 0
        assert pet.gems == 100

    def test_already_owned(self, item):
        pet = PetState(gems=500)
        wardrobe.purchase(pet, item("decor_disco"))
        with pytest.raises(AlreadyOwned):
            wardrobe.purchase(pet, item("decor_disco"))
        assert pet.gems == 475

    def test_basic_items_are_not_sold(self, item):
        with pytest.raises(InvalidStateTransition):
            wardrobe.purchase(PetState(gems=500), item("btop_white"))

    def test_dev_mode_purchase_rejected(self, item):
        pet = PetState(gems=500, dev_mode=True)
        with pytest.raises(AlreadyOwned):
            wardrobe.purchase(pet, item("decor_disco"))
        assert pet.gems == 500

    def test_streak_shield_is_consumable(self, item):
        shield = item(wardrobe.STREAK_SHIELD_ID)
        pet = PetState(gems=100)
        wardrobe.purchase(pet, shield)
        assert pet.has_streak_shield
        assert pet.gems == 100 - shield.price
        with pytest.raises(AlreadyOwned):
            wardrobe.purchase(pet, shield)
        pet.has_streak_shield = False
        wardrobe.purchase(pet, shield)
        assert pet.gems == 100 - 2 * shield.price

    def test_unlock_is_free(self, item):
        pet = PetState()
        assert wardrobe.unlock(pet, item("theme_aquarium"))
        assert not wardrobe.unlock(pet, item("theme_aquarium"))
        assert pet.gems == 10


# ── equip ───────────────────────────────────────────────────


class TestEquip:
    def test_costume_excludes_top_and_bottom(self, item):
        pet = PetState(level=5)
        wardrobe.equip(pet, item("btop_white"))
        wardrobe.equip(pet, item("bbot_jeanblue"))
        assert (pet.top, pet.bottom) == ("btop_white", "bbot_jeanblue")

        wardrobe.equip(pet, item("bcost_astronaut"))
        assert pet.costume == "bcost_astronaut"
        assert pet.top is None and pet.bottom is None

        wardrobe.equip(pet, item("btop_white"))
        assert pet.top == "btop_white"
        assert pet.costume is None

    def test_locked_item_rejected(self, item):
        pet = PetState()
        with pytest.raises(ItemNotUnlocked):
            wardrobe.equip(pet, item("bcostp_batman"))
        assert pet.costume is None

    def test_decor_is_not_equipped(self, item):
        with pytest.raises(InvalidStateTransition):
            wardrobe.equip(PetState(), item("decor_plant"))

    def test_room_theme(self, item):
        pet = PetState()
        wardrobe.equip(pet, item("theme_plage"))
        assert pet.room_theme == "theme_plage"
        wardrobe.unequip(pet, "room_theme")
        assert pet.room_theme == wardrobe.DEFAULT_ROOM_THEME

    def test_unequip_clears_slot(self, item):
        pet = PetState()
        wardrobe.equip(pet, item("hat_cap"))
        wardrobe.unequip(pet, "head_accessory")
        assert pet.head_accessory is None


# ── appearance ──────────────────────────────────────────────


class TestAppearance:
    def test_set_basic(self, catalog):
        pet = PetState()
        wardrobe.set_appearance(pet, "eye", catalog.appearance("eye", "normal"))
        wardrobe.set_appearance(pet, "body", catalog.appearance("body", "fantome"))
        assert pet.body_type == "fantome"

    def test_premium_color_must_be_bought(self, catalog):
        galaxy = catalog.appearance("color", "galaxie")
        pet = PetState(gems=25)
        with pytest.raises(ItemNotUnlocked):
            wardrobe.set_appearance(pet, "color", galaxy)
        assert wardrobe.purchase_appearance(pet, "color", galaxy) == 25
        wardrobe.set_appearance(pet, "color", galaxy)
        assert pet.body_color == "galaxie"
        assert pet.gems == 0

    def test_basic_option_not_sold(self, catalog):
        with pytest.raises(InvalidStateTransition):
            wardrobe.purchase_appearance(PetState(gems=100), "color", catalog.appearance("color", "violet"))


# ── decor ───────────────────────────────────────────────────


class TestDecor:
    def test_place_move_remove(self, item):
        pet = PetState()
        placement = wardrobe.place_decor(pet, item("decor_plant"), 0.25, 0.5, is_wall=False)
        assert pet.decor_items == [placement]

        wardrobe.move_decor(pet, placement.id, 0.75, 0.1)
        assert (pet.decor_items[0].x, pet.decor_items[0].y) == (0.75, 0.1)

        wardrobe.remove_decor(pet, placement.id)
        assert pet.decor_items == []

    def test_same_decor_placed_twice(self, item):
        pet = PetState()
        a = wardrobe.place_decor(pet, item("decor_plant"), 0, 0, is_wall=False)
        b = wardrobe.place_decor(pet, item("decor_plant"), 1, 1, is_wall=True)
        assert a.id != b.id
        assert len(pet.decor_items) == 2

    def test_locked_decor(self, item):
        with pytest.raises(ItemNotUnlocked):
            wardrobe.place_decor(PetState(), item("decor_rocket"), 0, 0, is_wall=True)

    def test_non_decor_item(self, item):
        with pytest.raises(InvalidStateTransition):
            wardrobe.place_decor(PetState(), item("hat_cap"), 0, 0, is_wall=True)

    def test_unknown_placement(self):
        with pytest.raises(UnknownItem):
            wardrobe.move_decor(PetState(), "missing", 0, 0)
        with pytest.raises(UnknownItem):
            wardrobe.remove_decor(PetState(), "missing")
