"""
Star Canton Layout Optimizer — Flask Application
=================================================
JSON API over the layout layers: classify, generate, optimize, measure.
"""
from __future__ import annotations
import logging
import sys
import os
sys.path.insert(0, os.path.dirname(__file__))

from flask import Flask, request, jsonify
from typing import List, Optional

from spangled import config
from spangled.kinds import LayoutKind, classify, count_stars
from spangled.generator import generate_star_layouts
from spangled.optimizer import (
    DEFAULT_CANTON_FACTOR, NoLayoutFound,
    find_best_star_layout, layout_score, run_layout_search
)
from spangled.geometry import (
    DEFAULT_N_STRIPES, Measurements, coordinates_from_layout, star_bounding_box
)

log = logging.getLogger(__name__)

app = Flask(__name__)


# ── Request parsing ──────────────────────────────────────────────────────────

def _json_body() -> dict:
    d = request.json
    if d is None:
        return {}
    if not isinstance(d, dict):
        raise ValueError("request body must be a JSON object")
    return d


def _parse_n_stars(d: dict) -> int:
    raw = d.get("n_stars")
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError("'n_stars' must be an integer")
    if raw > config.MAX_STARS:
        raise ValueError(f"'n_stars' must not exceed {config.MAX_STARS}")
    return raw


def _parse_canton_factor(d: dict) -> float:
    raw = d.get("canton_factor", DEFAULT_CANTON_FACTOR)
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValueError("'canton_factor' must be a number")
    if not raw > 0:
        raise ValueError("'canton_factor' must be positive")
    return float(raw)


def _parse_kinds(d: dict) -> Optional[List[LayoutKind]]:
    raw = d.get("kinds")
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise ValueError("'kinds' must be a list of layout kind names")
    try:
        return [LayoutKind(str(k).upper()) for k in raw]
    except ValueError:
        valid = ", ".join(k.value for k in LayoutKind)
        raise ValueError(f"Unknown layout kind in {raw}; expected some of: {valid}")


def _parse_layout(d: dict) -> tuple:
    raw = d.get("layout")
    if (not isinstance(raw, list) or len(raw) != 4
            or not all(isinstance(v, int) and not isinstance(v, bool) and v >= 0 for v in raw)):
        raise ValueError("'layout' must be a list of four non-negative integers")
    return tuple(raw)


def _bad_request(err: Exception):
    log.warning("Rejected %s: %s", request.path, err)
    return jsonify({"error": str(err)}), 400


# ── Layer 1: Classifier API ──────────────────────────────────────────────────

@app.route("/api/kinds", methods=["GET"])
def list_kinds():
    return jsonify({"kinds": [{"name": k.value, "description": k.description}
                              for k in LayoutKind]})


@app.route("/api/layouts/classify", methods=["POST"])
def classify_layout():
    try:
        d = _json_body()
        layout = _parse_layout(d)
        kind = classify(layout)
    except ValueError as e:  # includes InvalidLayout
        return _bad_request(e)
    return jsonify({"layout": list(layout), "kind": kind.value,
                    "n_stars": count_stars(layout)})


# ── Layer 2: Generator API ───────────────────────────────────────────────────

@app.route("/api/layouts/generate", methods=["POST"])
def generate_layouts():
    try:
        d = _json_body()
        n_stars = _parse_n_stars(d)
        kinds = _parse_kinds(d)
    except ValueError as e:
        return _bad_request(e)

    layouts = [{"layout": list(layout), "kind": classify(layout).value}
               for layout in generate_star_layouts(n_stars, kinds=kinds)]
    return jsonify({"n_stars": n_stars, "n_layouts": len(layouts), "layouts": layouts})


# ── Layer 3: Optimizer API ───────────────────────────────────────────────────

@app.route("/api/layouts/best", methods=["POST"])
def best_layout():
    """
    Body JSON:
      n_stars: int
      canton_factor: float (canton width / height, default 247/175)
      kinds: list of kind names (optional filter)
    """
    try:
        d = _json_body()
        n_stars = _parse_n_stars(d)
        canton_factor = _parse_canton_factor(d)
        kinds = _parse_kinds(d)
    except ValueError as e:
        return _bad_request(e)

    try:
        layout = find_best_star_layout(n_stars, canton_factor=canton_factor, kinds=kinds)
    except NoLayoutFound as e:
        return jsonify({"error": str(e)}), 404

    return jsonify({
        "n_stars": n_stars,
        "canton_factor": canton_factor,
        "layout": list(layout),
        "kind": classify(layout).value,
        "score": round(layout_score(layout, canton_factor), 6),
    })


@app.route("/api/layouts/ranked", methods=["POST"])
def ranked_layouts():
    """All layouts, best fit first. An empty ranking is not an error."""
    try:
        d = _json_body()
        n_stars = _parse_n_stars(d)
        canton_factor = _parse_canton_factor(d)
        kinds = _parse_kinds(d)
    except ValueError as e:
        return _bad_request(e)

    report = run_layout_search(n_stars, canton_factor=canton_factor, kinds=kinds)
    return jsonify(report.summary())


# ── Layer 4: Measurements API ────────────────────────────────────────────────

@app.route("/api/flag", methods=["POST"])
def flag():
    """
    Best layout plus the flag's measurements and relative star coordinates.
    Body JSON: same as /api/layouts/best, plus
      n_stripes: int (default 13)
      proportional_star_size: bool (default true)
    """
    try:
        d = _json_body()
        n_stars = _parse_n_stars(d)
        canton_factor = _parse_canton_factor(d)
        kinds = _parse_kinds(d)
        n_stripes = d.get("n_stripes", DEFAULT_N_STRIPES)
        if isinstance(n_stripes, bool) or not isinstance(n_stripes, int) \
                or not 1 <= n_stripes <= config.MAX_STRIPES:
            raise ValueError(f"'n_stripes' must be an integer between 1 and {config.MAX_STRIPES}")
        proportional = d.get("proportional_star_size", True)
        if not isinstance(proportional, bool):
            raise ValueError("'proportional_star_size' must be true or false")
    except ValueError as e:
        return _bad_request(e)

    try:
        layout = find_best_star_layout(n_stars, canton_factor=canton_factor, kinds=kinds)
    except NoLayoutFound as e:
        return jsonify({"error": str(e)}), 404

    measurements = Measurements.generate(star_layout=layout, n_stripes=n_stripes,
                                         proportional_star_size=proportional)
    coords = coordinates_from_layout(layout, n_stripes=n_stripes,
                                     proportional_star_size=proportional)
    return jsonify({
        "layout": list(layout),
        "kind": classify(layout).value,
        "measurements": measurements.to_dict(),
        "stars": {
            "n": int(coords.shape[0]),
            "coordinates": coords.round(6).tolist(),
            "bounding_box": star_bounding_box(coords),
        },
    })


if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)
