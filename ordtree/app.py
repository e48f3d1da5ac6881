import os
from typing import Any, Dict, List, Optional

from flask import Flask, Response, jsonify, request

from ordtree.indexing import OrderedTree, TreePreconditionError

app = Flask(__name__)

NONE_DELETES = os.environ.get("ORDTREE_NONE_DELETES", "0").strip() == "1"
DEFAULT_SEED_KEYS = os.environ.get("ORDTREE_SEED_KEYS", "")
HOST = os.environ.get("ORDTREE_HOST", "127.0.0.1")
PORT = int(os.environ.get("ORDTREE_PORT", "5000"))

tree = OrderedTree(none_deletes=NONE_DELETES)

STATE: Dict[str, Any] = {"seeded": False, "seed_keys": []}


def ok(data=None, **extra):
    payload = {"ok": True}
    if data is not None:
        payload["data"] = data
    payload.update(extra)
    return jsonify(payload)

def err(message: str, status: int = 400, **extra):
    payload = {"ok": False, "error": message}
    payload.update(extra)
    return jsonify(payload), status

def text(body: str):
    return Response(body, mimetype="text/plain")

def parse_seed_keys(raw: str) -> List[str]:
    """Split a comma-separated key list, dropping blanks."""
    return [k.strip() for k in (raw or "").split(",") if k.strip()]

def warm_start(raw_keys: Optional[str] = None):
    """Seed the tree from ORDTREE_SEED_KEYS (value = key)."""
    keys = parse_seed_keys(DEFAULT_SEED_KEYS if raw_keys is None else raw_keys)
    STATE["seed_keys"] = keys

    if not keys:
        app.logger.info("[warm_start] No seed keys provided.")
        return

    for key in keys:
        tree.put(key, key)
    STATE["seeded"] = True
    app.logger.info("[warm_start] Seeded %d keys, tree size %d, height %d",
                    len(keys), tree.size(), tree.height())


@app.get("/api/status")
def api_status():
    return ok({
        "size": tree.size(),
        "height": tree.height(),
        "is_empty": tree.is_empty(),
        "none_deletes": NONE_DELETES,
        "seeded": STATE["seeded"],
        "seed_keys": STATE["seed_keys"],
    })


@app.get("/api/tree/<key>")
def api_get(key: str):
    value = tree.get(key)
    if value is None:
        return err("key not found", 404)
    return ok({"key": key, "value": value})

@app.put("/api/tree/<key>")
def api_put(key: str):
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or "value" not in data:
        return err("JSON body with a 'value' field required")

    try:
        previous = tree.put(key, data["value"])
    except ValueError as e:
        app.logger.warning("Rejected put for %r: %s", key, e)
        return err(str(e))
    return ok({"key": key, "previous": previous, "size": tree.size()})

@app.delete("/api/tree/<key>")
def api_delete(key: str):
    removed = tree.delete(key)
    if removed is None:
        return err("key not found", 404)
    return ok({"key": key, "removed": removed, "size": tree.size()})

@app.post("/api/tree/delete_max")
def api_delete_max():
    if tree.is_empty():
        app.logger.warning("Rejected delete_max on an empty tree")
        return err("tree is empty", 409)
    removed = tree.select(tree.size() - 1)
    tree.delete_max()
    return ok({"removed_key": removed, "size": tree.size()})

@app.get("/api/tree/<key>/floor")
def api_floor(key: str):
    try:
        floor = tree.floor_of_subtree(key)
    except KeyError:
        return err("key not found", 404)
    except TreePreconditionError as e:
        return err(str(e), 409)
    return ok({"key": key, "floor": floor})


@app.get("/api/select/<rank>")
def api_select(rank: str):
    try:
        rank_int = int(rank)
    except ValueError:
        return err("rank must be an integer")

    key = tree.select(rank_int)
    if key is None:
        return err("rank out of range", 404, size=tree.size())
    return ok({"rank": rank_int, "key": key})

@app.get("/api/median")
def api_median():
    key = tree.median()
    if key is None:
        return err("tree is empty", 404)
    return ok({"median": key, "size": tree.size()})


@app.get("/api/render/inorder")
def api_render_inorder():
    return text(tree.print_keys_in_order())

@app.get("/api/render/pretty")
def api_render_pretty():
    return text(tree.pretty_print_keys())


if __name__ == "__main__":
    warm_start()
    # single-process demo: the tree is not thread-safe
    app.run(host=HOST, port=PORT, debug=True, use_reloader=False, threaded=False)
