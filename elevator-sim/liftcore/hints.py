from dataclasses import dataclass
from typing import List, Optional

from liftcore.models import Direction, Phase, Sensation

MAX_HINTS = 3


@dataclass(frozen=True)
class HintContext:
    direction: Direction
    prediction_initial: Optional[Sensation]  # 학생의 출발 전 예측 (없으면 None)
    phase: Phase
    velocity: float
    acceleration: float
    sensation: Sensation


def _expected_initial(direction: Direction) -> Sensation:
    if direction is Direction.UP:
        return Sensation.HEAVIER
    if direction is Direction.DOWN:
        return Sensation.LIGHTER
    raise ValueError(f"Unknown direction: {direction}")


def get_formative_hints(ctx: HintContext) -> List[str]:
    """현재 상태와 학생 예측에 따른 짧은 피드백 문장 (최대 3개)"""
    hints = []

    if ctx.phase is Phase.CRUISING and abs(ctx.velocity) > 0.25:
        hints.append(
            "At constant speed, acceleration is zero, so the forces are balanced "
            "and sensation should be normal."
        )

    if ctx.velocity > 0.2 and ctx.acceleration < -0.1 and ctx.sensation is Sensation.LIGHTER:
        hints.append(
            "Moving upward does not always feel heavier. If acceleration points downward, "
            "normal force drops and you feel lighter."
        )

    if ctx.velocity < -0.2 and ctx.acceleration > 0.1 and ctx.sensation is Sensation.HEAVIER:
        hints.append(
            "Moving downward can still feel heavier when acceleration points upward during braking."
        )

    if ctx.prediction_initial is not None and ctx.phase is Phase.ACCELERATING:
        expected = _expected_initial(ctx.direction)
        if ctx.prediction_initial is not expected:
            hints.append(
                f"Initial speeding up in this ride should feel {expected.value} because "
                "acceleration sets the force imbalance, not direction alone."
            )

    if ctx.phase is not Phase.STOPPED:
        hints.append(
            "Sensation changes come from normal force changes. Body mass stays the same "
            "throughout the ride."
        )

    # 순서 유지 중복 제거
    unique = list(dict.fromkeys(hints))
    return unique[:MAX_HINTS]
