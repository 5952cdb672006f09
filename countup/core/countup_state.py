import math
from dataclasses import dataclass
from enum import Enum
from countup.common.logger import log
from countup.core.dates import days_since
from countup.core.render_model import render_diff, render_split
from countup.util.misc import utc_now


class DisplayMode(Enum):
    SPLIT = "split"
    DIFF = "diff"


class Phase(Enum):
    ANIMATING = "animating"
    IDLE = "idle"


# Tunables for the controller. seconds_per_year is how long the count-up animation runs per started year of
# elapsed time (with a floor of one year's worth).
@dataclass(frozen=True)
class CountupConfig:
    seconds_per_year: float = 1.0
    idle_check_interval: float = 60.0
    quit_key: str = "escape"
    toggle_key: str = "space"


# Seconds of animation spent on each displayed day, so that 0 -> total_days takes a roughly constant time.
def pacing_rate(total_days, seconds_per_year=1.0):
    if total_days <= 0:
        return 0.0
    years = math.ceil(total_days / 365)
    return max(years * seconds_per_year, seconds_per_year) / total_days


# This object is the whole widget, minus the window. The host calls update() on a fixed tick, render_model() once
# per frame, and on_key() with whatever keys were pressed.
class CountState:

    def __init__(self, total_days, start_label, start_instant, config=None, clock=None):
        self.config = config or CountupConfig()
        self.clock = clock or utc_now
        self.total_days = max(0, int(total_days))
        self.start_label = start_label
        self.start_instant = start_instant
        self.displayed_days = 0
        self.accumulator = 0.0
        self.increment_rate = pacing_rate(self.total_days, self.config.seconds_per_year)
        self.display_mode = DisplayMode.SPLIT
        self.exit_requested = False
        # Seconds of tick time left before the next idle rollover check. 0 means check on the next idle tick.
        self._idle_wait = 0.0

        log.debug(f"Initialized countup from {start_label} with {self.total_days} days at rate {self.increment_rate}")

    @classmethod
    def new(cls, total_days, start_label, start_instant, config=None, clock=None):
        return cls(total_days, start_label, start_instant, config=config, clock=clock)

    @classmethod
    def from_resolved(cls, resolved, config=None, clock=None):
        return cls(resolved.total_days, resolved.label, resolved.start_instant, config=config, clock=clock)

    @property
    def phase(self):
        return Phase.ANIMATING if self.displayed_days < self.total_days else Phase.IDLE

    @property
    def is_idle(self):
        return self.phase is Phase.IDLE

    # Advances the state by one fixed tick. While animating, the accumulator is a time budget: every time it dips
    # below zero one day is shown and increment_rate seconds are paid back, so days only ever move in whole steps.
    def update(self, fixed_tick):
        if self.displayed_days < self.total_days:
            while self.accumulator < 0.0 and self.displayed_days < self.total_days:
                self.displayed_days += 1
                self.accumulator += self.increment_rate
            self.accumulator -= fixed_tick
            if self.displayed_days == self.total_days:
                self._idle_wait = 0.0
                log.debug(f"Animation caught up at {self.total_days} days")
        else:
            self._check_rollover(fixed_tick)

    # Idle only. Nothing visible changes until the next calendar day, so the recount is backed off.
    def _check_rollover(self, fixed_tick):
        self._idle_wait -= fixed_tick
        if self._idle_wait > 0.0:
            return
        self._idle_wait = self.config.idle_check_interval

        day_count = days_since(self.start_instant, self.clock())
        if day_count != self.total_days:
            log.info(f"Day rollover, elapsed days {self.total_days} -> {day_count}")
            self.total_days = day_count
            self.displayed_days = day_count
            self.increment_rate = pacing_rate(day_count, self.config.seconds_per_year)

    def on_key(self, keys):
        keys = set(keys)
        if self.config.quit_key in keys:
            self.exit_requested = True
            log.info("Quit key pressed")
        elif self.config.toggle_key in keys:
            self.displayed_days = 0
            self.accumulator = 0.0
            self.display_mode = DisplayMode.DIFF if self.display_mode is DisplayMode.SPLIT else DisplayMode.SPLIT
            log.debug(f"Restarting animation in {self.display_mode.value} mode")

    def should_exit(self):
        return self.exit_requested

    def render_model(self, layout=None):
        if self.display_mode is DisplayMode.DIFF:
            return render_diff(self.displayed_days, self.start_label, layout)
        return render_split(self.displayed_days, self.start_label, layout)
