# liftcore/sampler.py

import numpy as np

from liftcore.forces import clamp, derive_sensation, normal_force
from liftcore.models import Phase, RideProfile, SimulationConfig, SimulationState
from liftcore.profile import time_grid


def _find_segment(profile: RideProfile, t: float):
    # 구간은 항상 3개 → 선형 탐색
    for seg in profile.segments:
        if t < seg.t_end:
            return seg
    # 부동소수점 경계 오차 시 마지막 구간
    return profile.segments[-1]


def sample_state_at_time(
    profile: RideProfile, t: float, config: SimulationConfig
) -> SimulationState:
    """
    profile: RideProfile (segments, total_time, total_displacement)
    t: 조회 시각 (s), [0, total_time] 으로 클램프
    config: SimulationConfig (mass_kg, g_mps2)

    Returns: SimulationState (t, y, v, a, phase, fn, fg, sensation)
    """
    t = clamp(t, 0.0, profile.total_time)
    fg = config.mass_kg * config.g_mps2

    if t >= profile.total_time:
        # 도착: 정지 상태
        y = profile.total_displacement
        v = 0.0
        a = 0.0
        phase = Phase.STOPPED
    else:
        seg = _find_segment(profile, t)
        dt = t - seg.t_start
        y = seg.y0 + seg.v0 * dt + 0.5 * seg.a * dt * dt
        v = seg.v0 + seg.a * dt
        a = seg.a
        phase = seg.phase

    # 자유낙하보다 큰 하향 가속 시 음수 항력 방지
    fn = max(0.0, normal_force(config.mass_kg, config.g_mps2, a))

    return SimulationState(
        t=t,
        y=y,
        v=v,
        a=a,
        phase=phase,
        fn=fn,
        fg=fg,
        sensation=derive_sensation(fn, fg),
    )


def run_ride(profile: RideProfile, config: SimulationConfig, dt=0.01):
    """
    전체 운행을 균일 시간 격자로 샘플링

    Returns: dict trace with numpy arrays t, y, v, a, fn, fg and list phase
    """
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}")

    trace = {"t": [], "y": [], "v": [], "a": [], "fn": [], "fg": [], "phase": []}

    for t in time_grid(profile.total_time, dt):
        st = sample_state_at_time(profile, float(t), config)
        trace["t"].append(st.t)
        trace["y"].append(st.y)
        trace["v"].append(st.v)
        trace["a"].append(st.a)
        trace["fn"].append(st.fn)
        trace["fg"].append(st.fg)
        trace["phase"].append(st.phase.value)

    for key in ("t", "y", "v", "a", "fn", "fg"):
        trace[key] = np.array(trace[key])

    return trace
