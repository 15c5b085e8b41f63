# liftcore/driver.py

from enum import Enum

from liftcore.forces import clamp
from liftcore.models import Elevator
from liftcore.profile import build_ride_profile
from liftcore.readout import build_readout
from liftcore.sampler import sample_state_at_time


class DriverState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    ARRIVED = "arrived"


class RideDriver:
    """
    버튼 입력과 프레임 틱으로 시뮬레이션 시계를 진행시키는 상태 머신

    idle --request_ride--> running --tick(도착)--> arrived
    running <--toggle_pause--> paused
    running/paused/arrived --reset--> idle
    """

    def __init__(self, elevator: Elevator, current_floor=None):
        self.elevator = elevator
        if current_floor is None:
            current_floor = elevator.min_floor
        self.current_floor = current_floor
        self.target_floor = current_floor
        self.state = DriverState.IDLE
        self.sim_time = 0.0
        self.last_wall = None
        self._load_ride(current_floor, current_floor)

    def _load_ride(self, from_floor, to_floor):
        self.config = self.elevator.make_config(from_floor, to_floor)
        self.profile = build_ride_profile(self.config)

    @property
    def ride_in_progress(self) -> bool:
        return self.state in (DriverState.RUNNING, DriverState.PAUSED)

    def can_request(self, floor: int) -> bool:
        return (
            not self.ride_in_progress
            and floor != self.current_floor
            and self.elevator.has_floor(floor)
        )

    @property
    def can_pause(self) -> bool:
        return self.ride_in_progress

    @property
    def can_reset(self) -> bool:
        return self.ride_in_progress or self.sim_time != 0.0

    # ----------------- Transitions -----------------

    def request_ride(self, floor: int, now: float) -> bool:
        # 같은 층 요청은 무시 (0초 운행을 시작하지 않음)
        if not self.can_request(floor):
            return False

        self.target_floor = floor
        self._load_ride(self.current_floor, floor)
        self.sim_time = 0.0
        self.last_wall = now
        self.state = DriverState.RUNNING
        return True

    def toggle_pause(self, now: float) -> bool:
        if self.state is DriverState.RUNNING:
            self.state = DriverState.PAUSED
            return True
        if self.state is DriverState.PAUSED:
            # 재개 시 벽시계 기준점 재설정
            self.last_wall = now
            self.state = DriverState.RUNNING
            return True
        if self.state in (DriverState.IDLE, DriverState.ARRIVED):
            return False
        raise ValueError(f"Unknown driver state: {self.state}")

    def reset(self) -> bool:
        if not self.can_reset:
            return False

        self.state = DriverState.IDLE
        self.last_wall = None
        self.target_floor = self.current_floor
        self.sim_time = 0.0
        self._load_ride(self.current_floor, self.current_floor)
        return True

    def tick(self, now: float):
        if self.state is not DriverState.RUNNING:
            return self.current_state()

        step = clamp(now - self.last_wall, 0.0, self.elevator.max_frame_step_s)
        self.last_wall = now
        self.sim_time = clamp(self.sim_time + step, 0.0, self.profile.total_time)

        if self.sim_time >= self.profile.total_time:
            self.state = DriverState.ARRIVED
            self.current_floor = self.target_floor
            return sample_state_at_time(self.profile, self.profile.total_time, self.config)

        return self.current_state()

    # ----------------- Output -----------------

    def current_state(self):
        return sample_state_at_time(self.profile, self.sim_time, self.config)

    def snapshot(self):
        st = self.current_state()
        return {
            "driver_state": self.state.value,
            "current_floor": self.current_floor,
            "target_floor": self.target_floor,
            "sim_time": round(self.sim_time, 3),
            "total_time": self.profile.total_time,
            "profile_type": self.profile.profile_type.value,
            "direction": self.config.direction.value,
            "can_pause": self.can_pause,
            "can_reset": self.can_reset,
            "state": st.to_dict(),
            "readout": build_readout(st, self.config, self.elevator).to_dict(),
        }
