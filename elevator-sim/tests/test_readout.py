import pytest

from liftcore.hints import HintContext, get_formative_hints
from liftcore.models import Direction, Elevator, ForceRelation, Phase, Sensation
from liftcore.profile import build_ride_profile
from liftcore.readout import accel_direction, arrow_heights, build_readout
from liftcore.sampler import sample_state_at_time


def _ride(start, end):
    elevator = Elevator()
    config = elevator.make_config(start, end)
    return elevator, config, build_ride_profile(config)


def test_readout_while_accelerating_up():
    elevator, config, profile = _ride(1, 20)
    st = sample_state_at_time(profile, 0.0, config)
    ro = build_readout(st, config, elevator)

    assert ro.floor == 1
    assert ro.status_text == "Accelerating upward at 4.0 m/s/s."
    assert ro.bubble_text == "Whoa! I feel heavier than normal."
    assert ro.relation is ForceRelation.GT
    assert ro.compare_text == "F_N > F_g"
    assert ro.fn_label == "F_norm = 1105 N"
    assert ro.fg_label == "F_grav = 785 N"
    assert ro.accel_label == "a = 4.0 m/s^2 (upward)"
    assert ro.sensation_label == "Sensation: heavier"
    assert ro.fn_arrow_px == 180
    assert ro.fg_arrow_px == pytest.approx(784.8 / 1104.8 * 180)


def test_readout_while_cruising_down():
    elevator, config, profile = _ride(20, 1)
    cruise = profile.segments[1]
    st = sample_state_at_time(profile, cruise.t_start + 1.0, config)
    ro = build_readout(st, config, elevator)

    assert ro.status_text == "Moving downward at constant speed."
    assert ro.bubble_text == "I feel normal."
    assert ro.compare_text == "F_N = F_g"
    assert (ro.fn_arrow_px, ro.fg_arrow_px) == (140, 140)
    assert 1 < ro.floor < 20


def test_readout_braking_on_the_way_down():
    elevator, config, profile = _ride(10, 1)
    dec = profile.segments[2]
    st = sample_state_at_time(profile, dec.t_start + 0.2, config)
    ro = build_readout(st, config, elevator)

    # 하강 중 감속 = 상향 가속
    assert ro.status_text == "Accelerating upward at 4.0 m/s/s."
    assert ro.bubble_text == "Whoa! I feel heavier than normal."


def test_readout_at_rest_after_arrival():
    elevator, config, profile = _ride(1, 20)
    st = sample_state_at_time(profile, profile.total_time, config)
    ro = build_readout(st, config, elevator)

    assert ro.floor == 20
    assert ro.exact_floor == pytest.approx(20.0)
    assert ro.status_text == "At rest on floor 20."
    assert ro.bubble_text == "Push a button and let's get started!"
    assert ro.accel_label == "a = 0.0 m/s^2 (none)"


def test_readout_floor_stays_in_building():
    elevator = Elevator(max_floor=5)
    config = elevator.make_config(1, 9)
    profile = build_ride_profile(config)
    st = sample_state_at_time(profile, profile.total_time, config)

    assert build_readout(st, config, elevator).floor == 5


def test_arrow_heights_keep_a_visible_gap():
    assert arrow_heights(110.0, 100.0, ForceRelation.GT) == (180, 156)
    assert arrow_heights(100.0, 110.0, ForceRelation.LT) == (156, 180)
    # 매우 작은 힘은 최소 높이
    assert arrow_heights(0.0, 785.0, ForceRelation.LT) == (70, 180)


def test_accel_direction_deadband():
    assert accel_direction(0.5) == "upward"
    assert accel_direction(-0.5) == "downward"
    assert accel_direction(0.01) == "none"


def test_hints_for_cruising():
    ctx = HintContext(
        direction=Direction.UP,
        prediction_initial=None,
        phase=Phase.CRUISING,
        velocity=4.0,
        acceleration=0.0,
        sensation=Sensation.NORMAL,
    )
    hints = get_formative_hints(ctx)

    assert len(hints) == 2
    assert hints[0].startswith("At constant speed")
    assert "Body mass stays the same" in hints[1]


def test_hints_for_upward_braking():
    ctx = HintContext(
        direction=Direction.UP,
        prediction_initial=Sensation.HEAVIER,
        phase=Phase.DECELERATING,
        velocity=2.0,
        acceleration=-4.0,
        sensation=Sensation.LIGHTER,
    )
    hints = get_formative_hints(ctx)

    assert hints[0].startswith("Moving upward does not always feel heavier")
    # 예측 피드백은 가속 구간에서만
    assert not any("Initial speeding up" in h for h in hints)


def test_hints_for_downward_braking():
    ctx = HintContext(
        direction=Direction.DOWN,
        prediction_initial=None,
        phase=Phase.DECELERATING,
        velocity=-2.0,
        acceleration=4.0,
        sensation=Sensation.HEAVIER,
    )
    hints = get_formative_hints(ctx)

    assert hints[0].startswith("Moving downward can still feel heavier")


def test_hints_for_wrong_initial_prediction():
    ctx = HintContext(
        direction=Direction.DOWN,
        prediction_initial=Sensation.HEAVIER,
        phase=Phase.ACCELERATING,
        velocity=-0.5,
        acceleration=-4.0,
        sensation=Sensation.LIGHTER,
    )
    hints = get_formative_hints(ctx)

    assert any("should feel lighter" in h for h in hints)
    assert len(hints) <= 3


def test_correct_prediction_gets_no_correction():
    ctx = HintContext(
        direction=Direction.UP,
        prediction_initial=Sensation.HEAVIER,
        phase=Phase.ACCELERATING,
        velocity=0.5,
        acceleration=4.0,
        sensation=Sensation.HEAVIER,
    )
    hints = get_formative_hints(ctx)

    assert len(hints) == 1
    assert "Body mass stays the same" in hints[0]


def test_no_hints_at_rest():
    ctx = HintContext(
        direction=Direction.UP,
        prediction_initial=Sensation.LIGHTER,
        phase=Phase.STOPPED,
        velocity=0.0,
        acceleration=0.0,
        sensation=Sensation.NORMAL,
    )
    assert get_formative_hints(ctx) == []
