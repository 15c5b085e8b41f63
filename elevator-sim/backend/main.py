import os
import threading
import time

from flask import Flask, request, jsonify
from flask_cors import CORS
from flask_socketio import SocketIO

from liftcore.driver import DriverState, RideDriver
from liftcore.models import Elevator

DEBUG = False

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
ELEVATOR_JSON_PATH = os.path.join(BASE_DIR, "data", "elevator.json")

app = Flask(__name__)
CORS(app, supports_credentials=True)  # CORS 인증 지원

socketio = SocketIO(app, cors_allowed_origins="*")

# 교실 화면 1대 = 드라이버 1개
driver = RideDriver(Elevator.from_json(ELEVATOR_JSON_PATH))
driver_lock = threading.Lock()

FRAME_INTERVAL = 1.0 / 30.0


@app.before_request
def before_request_func():
    # OPTIONS 요청에 대해 200 응답 처리 (CORS 프리플라이트 대응)
    if request.method == "OPTIONS":
        return "", 200


# 제어 API: POST /control
@app.route("/control", methods=["POST"])
def control():
    data = request.get_json(silent=True) or {}
    action = data.get("action")
    now = time.monotonic()

    with driver_lock:
        if action == "go":
            try:
                floor = int(data.get("floor"))
            except (TypeError, ValueError):
                return jsonify({"error": "floor must be an integer"}), 400
            accepted = driver.request_ride(floor, now)
        elif action == "pause":
            accepted = driver.toggle_pause(now)
        elif action == "reset":
            accepted = driver.reset()
        else:
            return jsonify({"error": f"unknown action: {action}"}), 400

        snap = driver.snapshot()

    if DEBUG:
        print(f"[Ride] action={action} accepted={accepted} state={snap['driver_state']}")

    snap["accepted"] = accepted
    return jsonify(snap)


# 상태 조회 API: GET /state
@app.route("/state", methods=["GET"])
def get_state():
    with driver_lock:
        return jsonify(driver.snapshot())


def sim_loop():
    while True:
        with driver_lock:
            running = driver.state is DriverState.RUNNING
            if running:
                driver.tick(time.monotonic())
                snap = driver.snapshot()

        if running:
            if DEBUG:
                st = snap["state"]
                print(f"t={st['t']:.2f}s, y={st['y']:.2f}m, v={st['v']:.2f}m/s, phase={st['phase']}")
            socketio.emit("state", snap)

        socketio.sleep(FRAME_INTERVAL)


# WebSocket 연결 시 이벤트
@socketio.on("connect")
def handle_connect():
    if DEBUG:
        print("✅ 클라이언트 연결됨")
    with driver_lock:
        snap = driver.snapshot()
    socketio.emit("state", snap)


if __name__ == "__main__":
    socketio.start_background_task(sim_loop)
    # Flask-SocketIO 서버 실행 (0.0.0.0:8080)
    socketio.run(app, host="0.0.0.0", port=8080)
