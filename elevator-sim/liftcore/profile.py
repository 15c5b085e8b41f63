import math

import numpy as np

from liftcore.models import (
    Direction,
    Phase,
    ProfileType,
    RideProfile,
    RideSegment,
    SimulationConfig,
)

# 0 나눗셈 방지용 하한
MIN_ACCEL_MPS2 = 0.05
MIN_SPEED_MPS = 0.1


def _direction_sign(displacement: float, direction: Direction) -> int:
    if displacement > 0:
        return 1
    if displacement < 0:
        return -1
    # 같은 층: config.direction 으로 대체 ("up" 문자열도 허용)
    direction = Direction(direction)
    if direction is Direction.UP:
        return 1
    if direction is Direction.DOWN:
        return -1
    raise ValueError(f"Unknown direction: {direction}")


def build_ride_profile(config: SimulationConfig) -> RideProfile:
    """
    엘리베이터 운행 프로파일 생성 - 사다리꼴 / 삼각형 속도 곡선 (해석해)

    Args:
        config (SimulationConfig): 출발/도착 층, 층고, 최대 속도, 가속도

    Returns:
        RideProfile: 가속 / 등속 / 감속 3개 구간 + 총 시간, 변위, 최고 속도
    """
    displacement = (config.end_floor - config.start_floor) * config.floor_height_m
    sign = _direction_sign(displacement, config.direction)
    distance = abs(displacement)
    a_mag = max(config.accel_mag_mps2, MIN_ACCEL_MPS2)
    v_max = max(config.max_speed_mps, MIN_SPEED_MPS)

    t_to_vmax = v_max / a_mag
    d_accel_to_vmax = 0.5 * a_mag * t_to_vmax**2

    if 2 * d_accel_to_vmax <= distance:
        # 최대 속도 도달 → 등속 구간 존재
        profile_type = ProfileType.TRAPEZOIDAL
        t_accel = t_to_vmax
        d_accel = d_accel_to_vmax
        d_cruise = distance - 2 * d_accel
        t_cruise = d_cruise / v_max
        v_peak = v_max
    else:
        # 최대 속도 미도달 → 가속 직후 감속
        profile_type = ProfileType.TRIANGULAR
        t_accel = math.sqrt(distance / a_mag)
        d_accel = 0.5 * a_mag * t_accel**2
        d_cruise = 0.0
        t_cruise = 0.0
        v_peak = a_mag * t_accel

    segments = (
        RideSegment(
            phase=Phase.ACCELERATING,
            t_start=0.0,
            duration=t_accel,
            y0=0.0,
            v0=0.0,
            a=sign * a_mag,
        ),
        RideSegment(
            phase=Phase.CRUISING,
            t_start=t_accel,
            duration=t_cruise,
            y0=sign * d_accel,
            v0=sign * v_peak,
            a=0.0,
        ),
        RideSegment(
            phase=Phase.DECELERATING,
            t_start=t_accel + t_cruise,
            duration=t_accel,
            y0=sign * (d_accel + d_cruise),
            v0=sign * v_peak,
            a=-sign * a_mag,
        ),
    )

    return RideProfile(
        segments=segments,
        total_time=2 * t_accel + t_cruise,
        total_displacement=displacement,
        v_peak=v_peak,
        profile_type=profile_type,
    )


def build_velocity_curve(profile: RideProfile, dt=0.01):
    """
    프로파일의 속도-시간 곡선 (그래프 표시용)

    Args:
        profile (RideProfile): build_ride_profile 결과
        dt (float): 타임스텝 (s)

    Returns:
        Tuple of np.ndarray: t (시간), v (속도)
    """
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}")

    t = time_grid(profile.total_time, dt)
    v = np.zeros(len(t))
    for seg in profile.segments:
        mask = (t >= seg.t_start) & (t <= seg.t_end)
        v[mask] = seg.v0 + seg.a * (t[mask] - seg.t_start)
    # 도착 시점은 항상 정지
    v[-1] = 0.0
    return t, v


def time_grid(total_time, dt):
    """0, dt, 2dt, ... 에 total_time 을 마지막 샘플로 항상 포함"""
    n = int(math.floor(total_time / dt))
    t = np.arange(n + 1) * dt
    t = t[t < total_time]
    return np.append(t, total_time)
