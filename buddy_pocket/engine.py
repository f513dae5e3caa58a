"""BuddyEngine: the one object that owns a player's state.

Construct it once per process and pass it to every caller. It holds the
pet aggregate and its satellite trackers (daily caps, shop, battle pass,
missions, achievements, high scores), applies every inbound action, and
publishes outbound events.

Action flow:

  1. Roll over stale trackers (day → caps, missions, streak; ISO week →
     shop; season end → battle pass; expired flash sale).
  2. Run the action against in-memory state. Leaf modules raise an
     EconomyError before mutating anything when they reject.
  3. Re-evaluate achievements, refresh the widget projection, mark the
     state dirty and write it once the debounce window has passed.

Rejections come back as ActionResult(ok=False, error=<code>); no expected
rejection raises out of an action method. Time and randomness are
injected (Clock, random.Random) so tests can pin both.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta
from typing import Callable

from buddy_pocket import battle_pass, caps, missions, needs, progression, shop, streak, wardrobe
from buddy_pocket.battles import Battle, simulate_battle
from buddy_pocket.catalog import Catalog, default_catalog
from buddy_pocket.clock import Clock, SystemClock
from buddy_pocket.config import Settings
from buddy_pocket.errors import (
    EconomyError,
    InsufficientFunds,
    InvalidStateTransition,
    UnknownItem,
)
from buddy_pocket.events import (
    AchievementUnlocked,
    BattlePassLevelUp,
    CriticalNeedCrossed,
    EventBus,
    LevelUp,
    ShopRotated,
    StreakRewardGranted,
    Subscriber,
)
from buddy_pocket.models import (
    Achievement,
    ActionResult,
    AppearanceKind,
    AppearanceOption,
    BattlePassState,
    CareAction,
    CatalogItem,
    DailyCapsState,
    Gender,
    HighScore,
    ItemCategory,
    MissionBoard,
    PetState,
    ProfileSnapshot,
    ShopState,
    WidgetSnapshot,
)
from buddy_pocket.seasonal import SeasonalEvent, active_events
from buddy_pocket.storage import Storage

logger = logging.getLogger(__name__)

GAME_GEMS = (5, 10)
GAME_COINS = 15
GAME_XP = 20

BATTLE_WIN_GEMS = 3
BATTLE_WIN_XP = 30
BATTLE_WIN_COINS = 20
BATTLE_LOSS_XP = 10
BATTLE_LOSS_COINS = 5

CLAN_PRICE = 50

# product id → gems granted; "premium" also unlocks the premium pass
IAP_PRODUCTS: dict[str, int] = {
    "gems100": 100,
    "gems500": 500,
    "gems1200": 1200,
    "premium": 200,
}

DEV_BALANCE = 1_000_000_000
DEV_OUTFIT = {
    "body_type": "fantome",
    "head_accessory": "pacc_spiderman",
    "costume": "bcostp_psgplayer",
    "top": None,
    "bottom": None,
}


class BuddyEngine:
    def __init__(
        self,
        storage: Storage,
        settings: Settings | None = None,
        catalog: Catalog | None = None,
        clock: Clock | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._storage = storage
        self._settings = settings or Settings(data_dir=storage.base_path)
        self._catalog = catalog or default_catalog()
        self._clock = clock or SystemClock()
        self._rng = rng or random.Random()
        self._bus = EventBus()

        now = self._clock.now()
        self._pet = storage.get_pet() or self._new_pet(now)
        self._caps = storage.get_daily_caps() or DailyCapsState(day=now.date())
        self._shop = storage.get_shop() or ShopState()
        self._battle_pass = storage.get_battle_pass() or battle_pass.new_season(1, now)
        self._missions = storage.get_missions() or missions.roll_over(None, now.date())
        self._achievements = self._merge_achievements(storage.get_achievements())
        self._high_scores: list[HighScore] = storage.get_high_scores() or []

        self._dirty_since: datetime | None = None
        self._xp_granted = 0
        self._levels_gained = 0

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> BuddyEngine:
        storage = Storage(settings.data_dir, settings.resolved_shared_dir)
        return cls(storage, settings=settings, **kwargs)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _new_pet(now: datetime) -> PetState:
        return PetState(needs_updated_at=now)

    @staticmethod
    def _merge_achievements(stored: list[Achievement] | None) -> list[Achievement]:
        """Current achievement table, keeping unlocked flags from storage."""
        unlocked = {a.id for a in stored or [] if a.unlocked}
        table = progression.default_achievements()
        for ach in table:
            ach.unlocked = ach.id in unlocked
        return table

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        return self._bus.subscribe(subscriber)

    # ------------------------------------------------------------------
    # Read access (each read rolls stale trackers over first)
    # ------------------------------------------------------------------

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def settings(self) -> Settings:
        return self._settings

    def get_pet(self) -> PetState:
        self._refresh()
        return self._pet

    def get_daily_caps(self) -> DailyCapsState:
        self._refresh()
        return self._caps

    def get_shop(self) -> ShopState:
        self._refresh()
        return self._shop

    def get_battle_pass(self) -> BattlePassState:
        self._refresh()
        return self._battle_pass

    def get_missions(self) -> MissionBoard:
        self._refresh()
        return self._missions

    def get_achievements(self) -> list[Achievement]:
        return self._achievements

    def get_high_scores(self) -> list[HighScore]:
        return self._high_scores

    def active_events(self) -> list[SeasonalEvent]:
        return active_events(self._clock.now().date())

    def is_unlocked(self, item_id: str) -> bool:
        return wardrobe.is_unlocked(self._pet, self._require_item(item_id))

    def widget_snapshot(self) -> WidgetSnapshot:
        pet = self._pet
        return WidgetSnapshot(
            name=pet.name,
            hunger=pet.needs.hunger,
            happiness=pet.needs.happiness,
            energy=pet.needs.energy,
            hygiene=pet.needs.hygiene,
            level=pet.level,
            streak=pet.streak_days,
            body_type=pet.body_type,
            body_color=pet.body_color,
            eye_type=pet.eye_type,
            mood=needs.mood_emoji(pet.needs),
        )

    def profile_snapshot(self) -> ProfileSnapshot:
        pet = self._pet
        return ProfileSnapshot(
            id=pet.id,
            name=pet.name,
            level=pet.level,
            body_type=pet.body_type,
            body_color=pet.body_color,
            eye_type=pet.eye_type,
        )

    # ------------------------------------------------------------------
    # Needs & care
    # ------------------------------------------------------------------

    def advance_needs(self, elapsed_minutes: float) -> ActionResult:
        """Decay needs by an externally measured elapsed time.

        The decay mark moves forward by the same span, so a later tick()
        only covers wall time past what was already applied.
        """
        def run() -> None:
            pet = self._pet
            pet.needs = needs.advance_needs(
                pet.needs, elapsed_minutes, self._settings.decay_rate_per_minute,
            )
            if elapsed_minutes > 0:
                mark = pet.needs_updated_at or self._clock.now()
                pet.needs_updated_at = mark + timedelta(minutes=elapsed_minutes)
            self._signal_critical()
        return self._act("advance_needs", run)

    def tick(self) -> ActionResult:
        """Decay needs by the wall time elapsed since the last tick."""
        def run() -> None:
            now = self._clock.now()
            last = self._pet.needs_updated_at or now
            elapsed = (now - last).total_seconds() / 60
            self._pet.needs = needs.advance_needs(
                self._pet.needs, elapsed, self._settings.decay_rate_per_minute,
            )
            self._pet.needs_updated_at = max(now, last)
            self._signal_critical()
        return self._act("tick", run)

    def care(self, action: CareAction) -> ActionResult:
        def run() -> None:
            if action not in needs.CARE_EFFECTS:
                raise InvalidStateTransition(f"Unknown care action {action}")
            self._pet.needs = needs.apply_care(self._pet.needs, action)
            self._signal_critical()
            self._pet.coins += needs.CARE_COINS
            self._grant_xp(needs.CARE_XP)
            if action == "feed":
                self._pet.stats.feeds += 1
                self._advance_mission(missions.FEED_MISSION)
        return self._act(f"care:{action}", run)

    # ------------------------------------------------------------------
    # Mini-games & battles
    # ------------------------------------------------------------------

    def finish_game(self, game: str, score: int) -> ActionResult:
        def run() -> None:
            if game not in progression.MINI_GAMES:
                raise UnknownItem(f"Unknown mini-game {game}")
            limits = self._settings.cap_limits
            requested = self._rng.randint(*GAME_GEMS) if caps.can_earn_gems(self._caps, limits) else 0
            self._pet.gems += caps.record_game(self._caps, requested, limits)
            self._pet.coins += GAME_COINS
            self._grant_xp(GAME_XP)
            if game not in self._pet.stats.games_played:
                self._pet.stats.games_played.append(game)
            self._advance_mission(missions.GAME_MISSION)
            self._record_high_score(game, score)
        return self._act(f"game:{game}", run)

    def finish_battle(self, won: bool) -> ActionResult:
        def run() -> None:
            limits = self._settings.cap_limits
            if won:
                self._pet.gems += caps.record_battle(self._caps, BATTLE_WIN_GEMS, limits)
                self._pet.coins += BATTLE_WIN_COINS
                self._pet.stats.battles_won += 1
                self._grant_xp(BATTLE_WIN_XP)
            else:
                caps.record_battle(self._caps, 0, limits)
                self._pet.coins += BATTLE_LOSS_COINS
                self._grant_xp(BATTLE_LOSS_XP)
        return self._act("battle", run)

    def play_battle(self, opponent_id: str) -> tuple[Battle, ActionResult]:
        battle = simulate_battle(self._pet.id, opponent_id, self._rng)
        logger.debug("battle simulated opponent=%s score=%d-%d",
                     opponent_id, battle.player_score, battle.opponent_score)
        return battle, self.finish_battle(battle.won)

    # ------------------------------------------------------------------
    # Catalog, wardrobe & appearance
    # ------------------------------------------------------------------

    def purchase_item(self, item_id: str) -> ActionResult:
        def run() -> None:
            item = self._require_item(item_id)
            wardrobe.purchase(self._pet, item)
        return self._act(f"purchase:{item_id}", run)

    def equip(self, item_id: str) -> ActionResult:
        def run() -> None:
            wardrobe.equip(self._pet, self._require_item(item_id))
        return self._act(f"equip:{item_id}", run)

    def unequip(self, category: ItemCategory) -> ActionResult:
        def run() -> None:
            wardrobe.unequip(self._pet, category)
        return self._act(f"unequip:{category}", run)

    def set_appearance(self, kind: AppearanceKind, option_id: str) -> ActionResult:
        def run() -> None:
            wardrobe.set_appearance(self._pet, kind, self._require_option(kind, option_id))
        return self._act(f"appearance:{kind}", run)

    def purchase_appearance(self, kind: AppearanceKind, option_id: str) -> ActionResult:
        def run() -> None:
            wardrobe.purchase_appearance(self._pet, kind, self._require_option(kind, option_id))
        return self._act(f"purchase_appearance:{kind}", run)

    def place_decor(self, decor_id: str, x: float, y: float, is_wall: bool) -> ActionResult:
        def run() -> str:
            placement = wardrobe.place_decor(self._pet, self._require_item(decor_id), x, y, is_wall)
            return placement.id
        return self._act(f"decor_place:{decor_id}", run)

    def move_decor(self, placement_id: str, x: float, y: float) -> ActionResult:
        def run() -> None:
            wardrobe.move_decor(self._pet, placement_id, x, y)
        return self._act("decor_move", run)

    def remove_decor(self, placement_id: str) -> ActionResult:
        def run() -> None:
            wardrobe.remove_decor(self._pet, placement_id)
        return self._act("decor_remove", run)

    def setup_pet(self, name: str, gender: Gender) -> ActionResult:
        """Onboarding: name the pet and pick the clothing line.

        The current week's slate is kept; the new line shows up at the
        next weekly rotation.
        """
        def run() -> None:
            if not name.strip():
                raise InvalidStateTransition("Pet name must not be empty")
            self._pet.name = name.strip()
            self._pet.gender = gender
        return self._act("setup", run)

    # ------------------------------------------------------------------
    # Shop
    # ------------------------------------------------------------------

    def purchase_shop_slot(self, item_id: str) -> ActionResult:
        def run() -> None:
            shop.purchase_slot(self._shop, item_id, self._pet)
        return self._act(f"shop:{item_id}", run)

    def purchase_flash_sale(self) -> ActionResult:
        def run() -> None:
            shop.purchase_flash_sale(self._shop, self._pet, self._clock.now())
        return self._act("flash_sale", run)

    # ------------------------------------------------------------------
    # Battle pass
    # ------------------------------------------------------------------

    def claim_battle_pass_reward(self, level: int) -> ActionResult:
        def run() -> str:
            return battle_pass.claim_reward(self._battle_pass, level, self._pet).id
        return self._act(f"bp_claim:{level}", run)

    def upgrade_battle_pass(self) -> ActionResult:
        def run() -> None:
            if self._battle_pass.premium:
                raise InvalidStateTransition("Battle pass is already premium")
            self._battle_pass.premium = True
        return self._act("bp_premium", run)

    # ------------------------------------------------------------------
    # Social hooks
    # ------------------------------------------------------------------

    def record_message_sent(self) -> ActionResult:
        def run() -> None:
            self._advance_mission(missions.SOCIAL_MISSION)
        return self._act("message_sent", run)

    def record_social(self, friends: int, in_clan: bool) -> ActionResult:
        def run() -> None:
            self._pet.stats.friends = max(0, friends)
            if in_clan:
                self._pet.stats.clans_joined = max(1, self._pet.stats.clans_joined)
        return self._act("social", run)

    def create_clan(self) -> ActionResult:
        def run() -> None:
            if self._pet.gems < CLAN_PRICE:
                raise InsufficientFunds(CLAN_PRICE, self._pet.gems)
            self._pet.gems -= CLAN_PRICE
            self._pet.stats.clans_joined += 1
        return self._act("create_clan", run)

    # ------------------------------------------------------------------
    # Purchases made outside the engine
    # ------------------------------------------------------------------

    def grant_currency(self, gems: int) -> ActionResult:
        """Credit gems after an externally verified purchase."""
        def run() -> None:
            if gems <= 0:
                raise InvalidStateTransition("Granted gems must be positive")
            self._pet.gems += gems
        return self._act("grant_currency", run)

    def grant_product(self, product_id: str) -> ActionResult:
        def run() -> None:
            if product_id not in IAP_PRODUCTS:
                raise UnknownItem(f"Unknown product {product_id}")
            self._pet.gems += IAP_PRODUCTS[product_id]
            if product_id == "premium":
                self._battle_pass.premium = True
        return self._act(f"product:{product_id}", run)

    # ------------------------------------------------------------------
    # Debug
    # ------------------------------------------------------------------

    def activate_dev_mode(self, code: str) -> ActionResult:
        def run() -> None:
            if code != self._settings.dev_code:
                raise InvalidStateTransition("Invalid dev code")
            pet = self._pet
            pet.dev_mode = True
            pet.level = progression.MAX_LEVEL
            pet.xp = 0
            pet.coins = DEV_BALANCE
            pet.gems = DEV_BALANCE
            for field, value in DEV_OUTFIT.items():
                setattr(pet, field, value)
            logger.info("dev mode activated pet=%s", pet.id)
        return self._act("dev_mode", run)

    def reset_pet(self) -> ActionResult:
        """Start over with a default pet.

        Achievements, high scores and battle-pass progress go with the old
        pet. The season window and a bought premium pass stay, and so do
        today's caps, mission board and the weekly slate.
        """
        logger.info("pet reset pet=%s", self._pet.id)
        self._pet = self._new_pet(self._clock.now())
        self._achievements = progression.default_achievements()
        self._high_scores = []
        bp = self._battle_pass
        self._battle_pass = bp.model_copy(update={
            "level": 0,
            "xp": 0,
            "rewards": battle_pass.season_rewards(battle_pass.season_number(bp)),
        })
        self._refresh()
        self._mark_dirty()
        return ActionResult()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def flush(self) -> None:
        """Write every entity now, whatever the debounce window says."""
        if self._dirty_since is None:
            return
        written = [
            self._storage.save_pet(self._pet),
            self._storage.save_daily_caps(self._caps),
            self._storage.save_shop(self._shop),
            self._storage.save_battle_pass(self._battle_pass),
            self._storage.save_missions(self._missions),
            self._storage.save_achievements(self._achievements),
            self._storage.save_high_scores(self._high_scores),
        ]
        if not all(written):
            # stays dirty; the next due flush retries every blob
            logger.warning("state flush incomplete, will retry")
            return
        self._dirty_since = None
        logger.debug("state flushed")

    def flush_if_due(self) -> bool:
        if self._dirty_since is None:
            return False
        waited = (self._clock.now() - self._dirty_since).total_seconds()
        if waited < self._settings.save_debounce_seconds:
            return False
        self.flush()
        return True

    def close(self) -> None:
        self.flush()

    @property
    def dirty(self) -> bool:
        return self._dirty_since is not None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _act(self, name: str, run: Callable[[], str | None]) -> ActionResult:
        self._refresh()
        gems_before, coins_before = self._pet.gems, self._pet.coins
        self._xp_granted = 0
        self._levels_gained = 0
        try:
            ref = run()
        except EconomyError as e:
            logger.warning("action rejected action=%s code=%s: %s", name, e.code, e)
            return ActionResult(ok=False, error=e.code, message=str(e))
        self._evaluate_achievements()
        self._mark_dirty()
        logger.debug("action applied action=%s gems=%d coins=%d", name, self._pet.gems, self._pet.coins)
        return ActionResult(
            gems=self._pet.gems - gems_before,
            coins=self._pet.coins - coins_before,
            xp=self._xp_granted,
            levels_gained=self._levels_gained,
            ref=ref,
        )

    def _refresh(self) -> None:
        now = self._clock.now()
        today = now.date()
        changed = False

        if self._caps.day != today:
            self._caps = caps.roll_over(self._caps, today)
            changed = True
        if self._missions.day != today:
            self._missions = missions.roll_over(self._missions, today)
            changed = True

        outcome = streak.check_streak(self._pet, today)
        if outcome is not None:
            self._bus.publish(StreakRewardGranted(
                day=outcome.day, gems=outcome.gems, shield_used=outcome.shield_used,
            ))
            self._evaluate_achievements()
            changed = True

        pool = self._catalog.premium_pool(self._pet.gender)
        if shop.ensure_weekly_shop(self._shop, pool, self._rng, now):
            self._bus.publish(ShopRotated(week_id=self._shop.weekly.week_id))
            changed = True
        if shop.ensure_flash_sale(self._shop, pool, self._rng, now):
            changed = True

        self._battle_pass, rolled = battle_pass.ensure_current_season(self._battle_pass, now)
        changed = changed or rolled

        if changed:
            self._mark_dirty()
        else:
            self.flush_if_due()

    def _mark_dirty(self) -> None:
        if self._dirty_since is None:
            self._dirty_since = self._clock.now()
        self._storage.save_widget(self.widget_snapshot())
        self.flush_if_due()

    def _grant_xp(self, amount: int) -> None:
        gained = progression.add_xp(self._pet, amount)
        self._xp_granted += amount
        if gained:
            self._levels_gained += gained
            bodies = progression.unlock_secret_bodies(self._pet, self._catalog)
            logger.info("level up level=%d gained=%d", self._pet.level, gained)
            self._bus.publish(LevelUp(level=self._pet.level, levels_gained=gained, unlocked_bodies=bodies))

        bp_gained = battle_pass.add_xp(self._battle_pass, amount)
        if bp_gained:
            self._bus.publish(BattlePassLevelUp(
                season_id=self._battle_pass.season_id, level=self._battle_pass.level,
            ))

    def _evaluate_achievements(self) -> None:
        for ach in progression.evaluate_achievements(self._pet, self._achievements):
            self._bus.publish(AchievementUnlocked(achievement_id=ach.id, reward_gems=ach.reward_gems))

    def _signal_critical(self) -> None:
        crossings, self._pet.critical_signaled = needs.track_critical(
            self._pet.needs, self._pet.critical_signaled,
        )
        for need in crossings:
            logger.debug("need critical need=%s", need)
            self._bus.publish(CriticalNeedCrossed(need=need))

    def _advance_mission(self, mission_id: str) -> None:
        missions.increment_progress(self._missions, mission_id, self._pet)

    def _record_high_score(self, game: str, score: int) -> None:
        existing = next((h for h in self._high_scores if h.game == game), None)
        if existing is not None and existing.score >= score:
            return
        if existing is not None:
            self._high_scores.remove(existing)
        self._high_scores.append(HighScore(game=game, score=score, achieved_at=self._clock.now()))

    def _require_item(self, item_id: str) -> CatalogItem:
        item = self._catalog.item(item_id)
        if item is None:
            raise UnknownItem(f"Unknown catalog item {item_id}")
        return item

    def _require_option(self, kind: AppearanceKind, option_id: str) -> AppearanceOption:
        option = self._catalog.appearance(kind, option_id)
        if option is None:
            raise UnknownItem(f"Unknown {kind} {option_id}")
        return option
