import asyncio
import dataclasses
import json
import os
import time
from typing import List, Optional

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from liftcore.driver import RideDriver
from liftcore.hints import HintContext, get_formative_hints
from liftcore.models import Direction, Elevator, Phase, Sensation
from liftcore.profile import build_ride_profile
from liftcore.readout import build_readout
from liftcore.sampler import run_ride, sample_state_at_time

DEBUG = False

MIN_TRACE_DT_S = 0.001
MAX_TRACE_SAMPLES = 20000

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
ELEVATOR_JSON_PATH = os.path.join(BASE_DIR, "data", "elevator.json")

elevator = Elevator.from_json(ELEVATOR_JSON_PATH)

app = FastAPI()

# ✅ CORS 설정: 프론트엔드에서 호출 가능하도록
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ✅ 요청 데이터 모델 정의
class RideInput(BaseModel):
    start_floor: int
    end_floor: int
    # 아래 값이 없으면 elevator.json 값 사용
    floor_height_m: Optional[float] = Field(None, gt=0)
    mass_kg: Optional[float] = Field(None, gt=0)
    max_speed_mps: Optional[float] = Field(None, ge=0)
    accel_mps2: Optional[float] = Field(None, ge=0)
    g_mps2: Optional[float] = Field(None, gt=0)


class SampleInput(RideInput):
    t: float


class TraceInput(RideInput):
    # 샘플 수 상한: MAX_TRACE_SAMPLES
    dt: float = Field(0.05, ge=MIN_TRACE_DT_S)


class HintInput(BaseModel):
    direction: Direction
    prediction_initial: Optional[Sensation] = None
    phase: Phase
    velocity: float
    acceleration: float
    sensation: Sensation


def _ride(data: RideInput):
    for floor in (data.start_floor, data.end_floor):
        if not elevator.has_floor(floor):
            raise HTTPException(
                status_code=400,
                detail=f"floor {floor} outside {elevator.min_floor}..{elevator.max_floor}",
            )

    overrides = {
        k: v
        for k, v in {
            "floor_height_m": data.floor_height_m,
            "mass_kg": data.mass_kg,
            "max_speed_mps": data.max_speed_mps,
            "accel_mps2": data.accel_mps2,
            "g_mps2": data.g_mps2,
        }.items()
        if v is not None
    }
    elev = dataclasses.replace(elevator, **overrides)
    config = elev.make_config(data.start_floor, data.end_floor)
    return elev, config, build_ride_profile(config)


@app.get("/api/elevator")
async def get_elevator():
    return dataclasses.asdict(elevator)


@app.post("/api/profile")
async def post_profile(data: RideInput):
    _, _, profile = _ride(data)
    return profile.to_dict()


@app.post("/api/sample")
async def post_sample(data: SampleInput):
    elev, config, profile = _ride(data)
    st = sample_state_at_time(profile, data.t, config)
    return {
        "state": st.to_dict(),
        "readout": build_readout(st, config, elev).to_dict(),
    }


@app.post("/api/trace")
async def post_trace(data: TraceInput):
    _, config, profile = _ride(data)
    if profile.total_time / data.dt > MAX_TRACE_SAMPLES:
        raise HTTPException(
            status_code=400,
            detail=f"trace would exceed {MAX_TRACE_SAMPLES} samples; use a larger dt",
        )
    trace = run_ride(profile, config, dt=data.dt)

    # 결과를 JSON 변환
    return {
        "profile_type": profile.profile_type.value,
        "total_time": profile.total_time,
        "trace": {
            "t": trace["t"].tolist(),
            "y": trace["y"].tolist(),
            "v": trace["v"].tolist(),
            "a": trace["a"].tolist(),
            "fn": trace["fn"].tolist(),
            "phase": trace["phase"],
        },
    }


@app.post("/api/hints")
async def post_hints(data: HintInput) -> List[str]:
    ctx = HintContext(
        direction=data.direction,
        prediction_initial=data.prediction_initial,
        phase=data.phase,
        velocity=data.velocity,
        acceleration=data.acceleration,
        sensation=data.sensation,
    )
    return get_formative_hints(ctx)


def handle_command(driver: RideDriver, data: dict, now: float) -> bool:
    kind = data.get("type")
    if kind == "go":
        try:
            floor = int(data.get("floor"))
        except (TypeError, ValueError):
            return False
        return driver.request_ride(floor, now)
    if kind == "pause":
        return driver.toggle_pause(now)
    if kind == "reset":
        return driver.reset()
    if DEBUG:
        print(f"[WS] unknown command: {kind}")
    return False


@app.websocket("/ws")
async def ws_endpoint(ws: WebSocket):
    await ws.accept()

    driver = RideDriver(elevator)

    # 전송 속도: 30Hz
    send_interval = 1.0 / 30.0
    tick_interval = 1.0 / 60.0

    # ---- 분리된 비동기 루프들 ----
    async def recv_loop():
        try:
            while True:
                msg = await ws.receive_text()
                try:
                    data = json.loads(msg)
                except json.JSONDecodeError:
                    if DEBUG:
                        print("[WS] invalid JSON received.")
                    continue
                if not isinstance(data, dict):
                    continue
                accepted = handle_command(driver, data, time.monotonic())
                if DEBUG:
                    print(f"[WS] {data} -> accepted={accepted}, state={driver.state.value}")
        except WebSocketDisconnect:
            if DEBUG:
                print("[WS] disconnected (recv_loop).")
        except asyncio.CancelledError:
            pass

    async def sim_loop():
        while True:
            driver.tick(time.monotonic())
            await asyncio.sleep(tick_interval)

    async def send_loop():
        try:
            while True:
                await ws.send_text(json.dumps({"type": "state", "payload": driver.snapshot()}))
                await asyncio.sleep(send_interval)
        except WebSocketDisconnect:
            if DEBUG:
                print("[WS] disconnected (send_loop).")
        except asyncio.CancelledError:
            pass
        except Exception as e:
            # 클라이언트가 먼저 닫은 경우 등
            if DEBUG:
                print(f"[WS] error during send: {e}")

    tasks = [
        asyncio.create_task(recv_loop()),
        asyncio.create_task(sim_loop()),
        asyncio.create_task(send_loop()),
    ]

    try:
        await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for t in tasks:
            t.cancel()
        try:
            await ws.close()
        except RuntimeError:
            pass


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
