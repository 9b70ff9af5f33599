from typing import Optional

from flask import Flask, request, jsonify

from config import DEFAULT_RING_BITS
from errors import ChordError, InvalidParameter, RingFull, DuplicateId, NotFound, EmptyRing
from logger import Logger
from simulation import ChordSimulation

app = Flask(__name__)
logger = Logger.get_logger("server")

STATUS_CODES = {
    InvalidParameter: 400,
    EmptyRing: 400,
    NotFound: 404,
    RingFull: 409,
    DuplicateId: 409,
}

# ---------- Flask routes bound to a global simulation instance ----------

sim: Optional[ChordSimulation] = None


@app.errorhandler(ChordError)
def chord_error(e: ChordError):
    status = STATUS_CODES.get(type(e), 400)
    logger.warning(f"[HTTP] {request.method} {request.path} -> {status} {type(e).__name__}: {e}")
    return jsonify({"error": type(e).__name__, "message": str(e)}), status


def _body() -> dict:
    body = request.get_json(force=True, silent=True)
    if body is None:
        if request.get_data():
            raise InvalidParameter("request body is not valid JSON")
        return {}
    if not isinstance(body, dict):
        raise InvalidParameter("request body must be a JSON object")
    return body


def _int_field(body: dict, name: str, required: bool = True) -> Optional[int]:
    value = body.get(name)
    if value is None:
        if required:
            raise InvalidParameter(f"missing field '{name}'")
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameter(f"field '{name}' must be an integer, got {value!r}")
    return value


@app.route("/ping", methods=["POST"])
def ping():
    return jsonify({"ok": True})


@app.route("/snapshot", methods=["GET"])
def snapshot_route():
    return jsonify(sim.snapshot())


@app.route("/add_node", methods=["POST"])
def add_node_route():
    node_id = _int_field(_body(), "id", required=False)
    with sim.locked():
        node_id = sim.add_node(node_id)
        snap = sim.snapshot()
    return jsonify({"id": node_id, "snapshot": snap})


@app.route("/remove_node", methods=["POST"])
def remove_node_route():
    node_id = _int_field(_body(), "id", required=False)
    with sim.locked():
        if node_id is None:
            node_id = sim.remove_random_node()
        else:
            sim.remove_node(node_id)
        snap = sim.snapshot()
    return jsonify({"id": node_id, "snapshot": snap})


@app.route("/set_bits", methods=["POST"])
def set_bits_route():
    bits = _int_field(_body(), "bits")
    with sim.locked():
        sim.set_bits(bits)
        snap = sim.snapshot()
    return jsonify(snap)


@app.route("/lookup", methods=["POST"])
def lookup_route():
    body = _body()
    start = _int_field(body, "start")
    if "key" in body:
        key = body["key"]
        if not isinstance(key, str):
            raise InvalidParameter(f"field 'key' must be a string, got {key!r}")
        route = sim.lookup_key(key, start)
    else:
        route = sim.lookup(_int_field(body, "target"), start)
    return jsonify(route.to_dict())


@app.route("/metrics", methods=["GET"])
def metrics_route():
    return jsonify(sim.metrics.snapshot())


def start_server(host: str, port: int, bits: int = DEFAULT_RING_BITS,
                 seed: Optional[int] = None, nodes: int = 0):
    global sim
    sim = ChordSimulation(bits=bits, seed=seed)
    if nodes:
        sim.add_random_nodes(nodes)
    logger.info(f"[SYSTEM] Serving {sim.bits}-bit ring with {len(sim.ring)} nodes on {host}:{port}")
    app.run(host=host, port=port, threaded=True)
