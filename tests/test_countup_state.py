"""Tests for the countup controller and the render model it produces.

Covers: countup.core.countup_state, countup.core.render_model
"""

import math
import unittest
from datetime import datetime, timedelta, timezone


START = datetime(2022, 11, 25, tzinfo=timezone.utc)
TICK = 1.0 / 60.0


class _Clock:
    """Settable stand-in for utc_now()."""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


def _state_for(total_days, **config_kwargs):
    from countup.core.countup_state import CountState, CountupConfig
    clock = _Clock(START + timedelta(days=total_days, hours=6))
    state = CountState.new(total_days, "25/11/2022", START,
                           config=CountupConfig(**config_kwargs), clock=clock)
    return state, clock


def _run_until_idle(state, max_ticks=100_000):
    seen = [state.displayed_days]
    for _ in range(max_ticks):
        if state.is_idle:
            break
        state.update(TICK)
        seen.append(state.displayed_days)
    return seen


# ──────────────────────────────────────────────────────────────────────────
# Pacing
# ──────────────────────────────────────────────────────────────────────────

class TestPacing(unittest.TestCase):

    def test_rate_for_exactly_one_year(self):
        from countup.core.countup_state import pacing_rate
        self.assertAlmostEqual(pacing_rate(365), 1.0 / 365)

    def test_rate_rounds_up_started_years(self):
        from countup.core.countup_state import pacing_rate
        self.assertAlmostEqual(pacing_rate(366), 2.0 / 366)
        self.assertAlmostEqual(pacing_rate(400, seconds_per_year=2.0), 4.0 / 400)

    def test_rate_floor_is_one_year(self):
        from countup.core.countup_state import pacing_rate
        self.assertAlmostEqual(pacing_rate(10), 1.0 / 10)

    def test_rate_is_zero_for_zero_days(self):
        from countup.core.countup_state import pacing_rate
        self.assertEqual(pacing_rate(0), 0.0)

    def test_rate_positive_whenever_days_positive(self):
        from countup.core.countup_state import pacing_rate
        for days in (1, 2, 364, 365, 366, 5000, 40000):
            self.assertGreater(pacing_rate(days), 0.0)

    def test_animation_duration_is_bounded(self):
        """Full count takes roughly K per started year, whatever the size."""
        for days in (1, 30, 365, 1000, 3650):
            state, _ = _state_for(days)
            ticks = len(_run_until_idle(state)) - 1
            expected = max(math.ceil(days / 365), 1) * 1.0
            # The last day shows as soon as its slot opens, so one day's worth of time is never waited out
            self.assertLessEqual(ticks * TICK, expected + 3 * TICK, msg=f"days={days}")
            self.assertGreaterEqual(ticks * TICK, expected - state.increment_rate - 3 * TICK, msg=f"days={days}")


# ──────────────────────────────────────────────────────────────────────────
# Update / state machine
# ──────────────────────────────────────────────────────────────────────────

class TestUpdate(unittest.TestCase):

    def test_converges_exactly_and_monotonically(self):
        for days in (1, 7, 365, 400, 1500, 10000):
            state, _ = _state_for(days)
            seen = _run_until_idle(state)
            self.assertEqual(state.displayed_days, days)
            self.assertEqual(seen[-1], days)
            self.assertTrue(all(b >= a for a, b in zip(seen, seen[1:])))
            self.assertTrue(all(v <= days for v in seen))

    def test_day_steps_are_whole_and_small(self):
        """Every displayed day is visited once; no tick jumps past the pace."""
        state, _ = _state_for(365)
        seen = _run_until_idle(state)
        jumps = [b - a for a, b in zip(seen, seen[1:])]
        # 1/365 s per day at 1/60 s per tick -> at most ceil(365/60) days per tick
        self.assertLessEqual(max(jumps), math.ceil(365 / 60))

    def test_starts_animating_from_zero(self):
        from countup.core.countup_state import Phase
        state, _ = _state_for(100)
        self.assertEqual(state.displayed_days, 0)
        self.assertIs(state.phase, Phase.ANIMATING)
        self.assertFalse(state.is_idle)

    def test_zero_days_is_idle_immediately(self):
        from countup.core.countup_state import CountState, Phase
        clock = _Clock(START + timedelta(hours=3))
        state = CountState.new(0, "25/11/2022", START, clock=clock)
        self.assertIs(state.phase, Phase.IDLE)
        for _ in range(200):
            state.update(TICK)
        self.assertEqual(state.displayed_days, 0)
        self.assertEqual(state.total_days, 0)

    def test_stays_idle_after_catching_up(self):
        state, _ = _state_for(50)
        _run_until_idle(state)
        for _ in range(500):
            state.update(TICK)
        self.assertTrue(state.is_idle)
        self.assertEqual(state.displayed_days, 50)

    def test_rollover_snaps_both_counts(self):
        state, clock = _state_for(50, idle_check_interval=0.0)
        _run_until_idle(state)
        clock.advance(days=1)
        state.update(TICK)
        self.assertEqual(state.total_days, 51)
        self.assertEqual(state.displayed_days, 51)
        self.assertTrue(state.is_idle)

    def test_rollover_check_is_backed_off(self):
        state, clock = _state_for(50, idle_check_interval=60.0)
        _run_until_idle(state)
        state.update(TICK)  # first idle tick checks right away
        clock.advance(days=1)
        state.update(TICK)
        self.assertEqual(state.total_days, 50)
        state.update(60.0)
        self.assertEqual(state.total_days, 51)
        self.assertEqual(state.displayed_days, 51)

    def test_no_rollover_while_animating(self):
        state, clock = _state_for(365, idle_check_interval=0.0)
        state.update(TICK)
        state.update(TICK)
        clock.advance(days=3)
        state.update(TICK)
        self.assertEqual(state.total_days, 365)

    def test_from_resolved(self):
        from countup.core.countup_state import CountState
        from countup.core.dates import ResolvedStart
        resolved = ResolvedStart(start_instant=START, total_days=12, label="25/11/2022")
        state = CountState.from_resolved(resolved)
        self.assertEqual(state.total_days, 12)
        self.assertEqual(state.start_label, "25/11/2022")
        self.assertEqual(state.start_instant, START)


# ──────────────────────────────────────────────────────────────────────────
# Keys
# ──────────────────────────────────────────────────────────────────────────

class TestKeys(unittest.TestCase):

    def test_quit_key_requests_exit(self):
        state, _ = _state_for(10)
        self.assertFalse(state.should_exit())
        state.on_key(["escape"])
        self.assertTrue(state.should_exit())

    def test_unknown_keys_do_nothing(self):
        from countup.core.countup_state import DisplayMode
        state, _ = _state_for(10)
        _run_until_idle(state)
        state.on_key(["a", "enter"])
        self.assertFalse(state.should_exit())
        self.assertIs(state.display_mode, DisplayMode.SPLIT)
        self.assertEqual(state.displayed_days, 10)

    def test_toggle_restarts_and_flips_mode(self):
        from countup.core.countup_state import DisplayMode, Phase
        state, _ = _state_for(200)
        _run_until_idle(state)
        state.on_key(["space"])
        self.assertEqual(state.displayed_days, 0)
        self.assertIs(state.display_mode, DisplayMode.DIFF)
        self.assertIs(state.phase, Phase.ANIMATING)

        _run_until_idle(state)
        self.assertEqual(state.displayed_days, 200)
        state.on_key(["space"])
        self.assertEqual(state.displayed_days, 0)
        self.assertIs(state.display_mode, DisplayMode.SPLIT)

    def test_quit_wins_over_toggle(self):
        from countup.core.countup_state import DisplayMode
        state, _ = _state_for(20)
        _run_until_idle(state)
        state.on_key({"escape", "space"})
        self.assertTrue(state.should_exit())
        self.assertIs(state.display_mode, DisplayMode.SPLIT)
        self.assertEqual(state.displayed_days, 20)

    def test_custom_keys(self):
        from countup.core.countup_state import CountState, CountupConfig
        cfg = CountupConfig(quit_key="q", toggle_key="t")
        state = CountState.new(5, "x", START, config=cfg, clock=_Clock(START + timedelta(days=5)))
        state.on_key(["escape"])
        self.assertFalse(state.should_exit())
        state.on_key(["q"])
        self.assertTrue(state.should_exit())


# ──────────────────────────────────────────────────────────────────────────
# Render model
# ──────────────────────────────────────────────────────────────────────────

class TestRenderModel(unittest.TestCase):

    def test_split_example(self):
        from countup.core.render_model import split_days
        self.assertEqual(split_days(400), (1, 1, 7))

    def test_split_recombines(self):
        from countup.core.render_model import split_days
        for d in range(0, 3000, 7):
            years, months, days = split_days(d)
            self.assertEqual(years * 365 + months * 28 + days, d)
            self.assertTrue(0 <= months < 14)
            self.assertTrue(0 <= days < 28)

    def test_diff_example(self):
        from countup.core.render_model import diff_units
        self.assertEqual(diff_units(400), (400, 57, 14, 1))

    def test_split_rows(self):
        from countup.core.render_model import render_split
        model = render_split(400, "25/11/2022")
        self.assertEqual(model.texts, [
            "Since 25/11/2022 it's been",
            "1", "YEARS", "1", "MONTHS", "7", "DAYS",
        ])
        values = [i for i in model.items if i.style.color == "value"]
        self.assertTrue(all(i.style.anchor == "right_top" and i.x == 120 for i in values))
        self.assertEqual([i.y for i in values], [24, 40, 56])

    def test_diff_rows(self):
        from countup.core.render_model import render_diff
        model = render_diff(400, "25/11/2022")
        self.assertEqual(model.texts[0], "Since 25/11/2022 it's been")
        self.assertEqual(
            [t for t in model.texts[1:] if t != "or"],
            ["400", "DAYS", "57", "WEEKS", "14", "MONTHS", "1", "YEARS"],
        )
        ors = [i for i in model.items if i.text == "or"]
        self.assertEqual([(i.x, i.y) for i in ors], [(170, 29), (180, 45), (190, 61)])
        self.assertTrue(all(i.style.size == "small" for i in ors))

    def test_render_model_is_idempotent(self):
        state, _ = _state_for(900)
        for _ in range(5):
            state.update(TICK)
        self.assertEqual(state.render_model(), state.render_model())
        state.on_key(["space"])
        self.assertEqual(state.render_model(), state.render_model())

    def test_render_model_follows_mode(self):
        state, _ = _state_for(400)
        _run_until_idle(state)
        self.assertIn("YEARS", state.render_model().texts)
        self.assertNotIn("WEEKS", state.render_model().texts)
        state.on_key(["space"])
        _run_until_idle(state)
        self.assertIn("WEEKS", state.render_model().texts)
        self.assertIn("400", state.render_model().texts)

    def test_render_model_does_not_mutate(self):
        state, _ = _state_for(30)
        state.update(TICK)
        state.update(TICK)
        before = (state.displayed_days, state.accumulator, state.display_mode)
        state.render_model()
        self.assertEqual(before, (state.displayed_days, state.accumulator, state.display_mode))

    def test_custom_layout(self):
        from countup.core.render_model import Layout, render_split
        model = render_split(1, "x", Layout(col_num=200, first_row_y=10, row_height=20))
        values = [i for i in model.items if i.style.color == "value"]
        self.assertEqual([(i.x, i.y) for i in values], [(200, 10), (200, 30), (200, 50)])


if __name__ == "__main__":
    unittest.main()
