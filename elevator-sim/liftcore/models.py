import json
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import List, Tuple


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"


class Phase(str, Enum):
    ACCELERATING = "accelerating"
    CRUISING = "cruising"
    DECELERATING = "decelerating"
    STOPPED = "stopped"


class ProfileType(str, Enum):
    TRAPEZOIDAL = "trapezoidal"
    TRIANGULAR = "triangular"


class Sensation(str, Enum):
    LIGHTER = "lighter"
    NORMAL = "normal"
    HEAVIER = "heavier"


class ForceRelation(str, Enum):
    GT = "gt"
    LT = "lt"
    EQ = "eq"


@dataclass(frozen=True)
class SimulationConfig:
    direction: Direction
    start_floor: int
    end_floor: int
    floor_height_m: float
    mass_kg: float
    max_speed_mps: float
    accel_mag_mps2: float
    g_mps2: float


@dataclass(frozen=True)
class RideSegment:
    phase: Phase
    t_start: float
    duration: float
    y0: float  # m, signed along the ride
    v0: float  # m/s
    a: float  # m/s², 0 while cruising

    @property
    def t_end(self) -> float:
        return self.t_start + self.duration

    def to_dict(self) -> dict:
        d = asdict(self)
        d["phase"] = self.phase.value
        return d


@dataclass(frozen=True)
class RideProfile:
    segments: Tuple[RideSegment, RideSegment, RideSegment]
    total_time: float
    total_displacement: float
    v_peak: float
    profile_type: ProfileType

    def to_dict(self) -> dict:
        return {
            "segments": [seg.to_dict() for seg in self.segments],
            "total_time": self.total_time,
            "total_displacement": self.total_displacement,
            "v_peak": self.v_peak,
            "profile_type": self.profile_type.value,
        }


@dataclass(frozen=True)
class SimulationState:
    t: float
    y: float
    v: float
    a: float
    phase: Phase
    fn: float  # N, contact force from the floor
    fg: float  # N
    sensation: Sensation

    def to_dict(self) -> dict:
        d = asdict(self)
        d["phase"] = self.phase.value
        d["sensation"] = self.sensation.value
        return d


@dataclass
class Elevator:
    name: str = "Classroom lift"
    floor_height_m: float = 3.0
    mass_kg: float = 80.0
    max_speed_mps: float = 4.0
    accel_mps2: float = 4.0
    g_mps2: float = 9.81
    min_floor: int = 1
    max_floor: int = 20
    preset_floors: List[int] = field(default_factory=lambda: [1, 10, 20])
    max_frame_step_s: float = 0.05  # 스톨 후 큰 점프 방지

    @classmethod
    def from_json(cls, filepath):
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls(
            name=data.get("name", "Classroom lift"),
            floor_height_m=data.get("floor_height_m", 3.0),
            mass_kg=data.get("mass_kg", 80.0),
            max_speed_mps=data.get("max_speed_mps", 4.0),
            accel_mps2=data.get("accel_mps2", 4.0),
            g_mps2=data.get("g_mps2", 9.81),
            min_floor=data.get("min_floor", 1),
            max_floor=data.get("max_floor", 20),
            preset_floors=data.get("preset_floors", [1, 10, 20]),
            max_frame_step_s=data.get("max_frame_step_s", 0.05),
        )

    def has_floor(self, floor: int) -> bool:
        return self.min_floor <= floor <= self.max_floor

    def make_config(self, from_floor: int, to_floor: int) -> SimulationConfig:
        return SimulationConfig(
            direction=Direction.UP if to_floor > from_floor else Direction.DOWN,
            start_floor=from_floor,
            end_floor=to_floor,
            floor_height_m=self.floor_height_m,
            mass_kg=self.mass_kg,
            max_speed_mps=self.max_speed_mps,
            accel_mag_mps2=self.accel_mps2,
            g_mps2=self.g_mps2,
        )
