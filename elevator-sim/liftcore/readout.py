from dataclasses import dataclass, asdict
from typing import Tuple

from liftcore.forces import clamp, get_force_relation
from liftcore.models import (
    Elevator,
    ForceRelation,
    Phase,
    Sensation,
    SimulationConfig,
    SimulationState,
)

# 자유물체도 화살표 높이 (px)
ARROW_MAX_PX = 180
ARROW_MIN_PX = 70
ARROW_EQUAL_PX = 140
ARROW_MIN_GAP_PX = 24

ACCEL_DEADBAND = 0.02


@dataclass(frozen=True)
class Readout:
    floor: int
    exact_floor: float
    status_text: str
    bubble_text: str
    fn_label: str
    fg_label: str
    accel_label: str
    sensation_label: str
    relation: ForceRelation
    compare_text: str
    fn_arrow_px: float
    fg_arrow_px: float

    def to_dict(self) -> dict:
        d = asdict(self)
        d["relation"] = self.relation.value
        return d


def accel_direction(a: float) -> str:
    if a > ACCEL_DEADBAND:
        return "upward"
    if a < -ACCEL_DEADBAND:
        return "downward"
    return "none"


def compare_text(relation: ForceRelation) -> str:
    if relation is ForceRelation.GT:
        return "F_N > F_g"
    if relation is ForceRelation.LT:
        return "F_N < F_g"
    if relation is ForceRelation.EQ:
        return "F_N = F_g"
    raise ValueError(f"Unknown force relation: {relation}")


def status_text(phase: Phase, a: float, v: float, floor: int) -> str:
    if phase is Phase.STOPPED:
        return f"At rest on floor {floor}."

    accel_word = f"{abs(a):.1f}"
    accel_dir = "upward" if a > 0 else "downward" if a < 0 else "none"

    if phase in (Phase.ACCELERATING, Phase.DECELERATING):
        # 감속도 가속도 방향으로 표현 (교육 목적)
        return f"Accelerating {accel_dir} at {accel_word} m/s/s."
    if phase is Phase.CRUISING:
        move_dir = "upward" if v > 0 else "downward"
        return f"Moving {move_dir} at constant speed."
    raise ValueError(f"Unknown phase: {phase}")


def bubble_text(phase: Phase, sensation: Sensation) -> str:
    if phase is Phase.STOPPED:
        return "Push a button and let's get started!"
    if sensation is Sensation.HEAVIER:
        return "Whoa! I feel heavier than normal."
    if sensation is Sensation.LIGHTER:
        return "Whoa! I feel lighter than normal."
    if sensation is Sensation.NORMAL:
        return "I feel normal."
    raise ValueError(f"Unknown sensation: {sensation}")


def arrow_heights(fn: float, fg: float, relation: ForceRelation) -> Tuple[float, float]:
    """(F_N 화살표, F_g 화살표) 높이. 큰 힘이 항상 ARROW_MIN_GAP_PX 이상 길다."""
    if relation is ForceRelation.EQ:
        return ARROW_EQUAL_PX, ARROW_EQUAL_PX

    if relation is ForceRelation.GT:
        larger, smaller = fn, fg
    elif relation is ForceRelation.LT:
        larger, smaller = fg, fn
    else:
        raise ValueError(f"Unknown force relation: {relation}")

    larger_px = ARROW_MAX_PX
    smaller_px = clamp(smaller / larger * ARROW_MAX_PX, ARROW_MIN_PX, ARROW_MAX_PX - 22)
    if larger_px - smaller_px < ARROW_MIN_GAP_PX:
        smaller_px = larger_px - ARROW_MIN_GAP_PX

    if relation is ForceRelation.GT:
        return larger_px, smaller_px
    return smaller_px, larger_px


def build_readout(state: SimulationState, config: SimulationConfig, elevator: Elevator) -> Readout:
    exact_floor = clamp(
        config.start_floor + state.y / config.floor_height_m,
        elevator.min_floor,
        elevator.max_floor,
    )
    floor = int(clamp(round(exact_floor), elevator.min_floor, elevator.max_floor))

    relation = get_force_relation(state.fn, state.fg)
    fn_px, fg_px = arrow_heights(state.fn, state.fg, relation)

    return Readout(
        floor=floor,
        exact_floor=exact_floor,
        status_text=status_text(state.phase, state.a, state.v, floor),
        bubble_text=bubble_text(state.phase, state.sensation),
        fn_label=f"F_norm = {round(state.fn)} N",
        fg_label=f"F_grav = {round(state.fg)} N",
        accel_label=f"a = {state.a:.1f} m/s^2 ({accel_direction(state.a)})",
        sensation_label=f"Sensation: {state.sensation.value}",
        relation=relation,
        compare_text=compare_text(relation),
        fn_arrow_px=fn_px,
        fg_arrow_px=fg_px,
    )
