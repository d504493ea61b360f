import json
import logging

import jsonschema
from flask import Blueprint, Response, current_app, jsonify, request

from restyle_core.core.llm import StyleGenerationError
from restyle_core.core.session import SessionBusyError
from restyle_core.core.util import is_hex_color

logger = logging.getLogger(__name__)

bp = Blueprint("api", __name__, url_prefix="/api")

MISSING_KEY_MESSAGE = "Missing OPENAI_API_KEY in env"

GENERATE_REQUEST_SCHEMA = {
    "type": "object",
    "properties": {
        "prompt": {"type": "string"},
        "overrides": {"type": "object"},
    },
}

PICKERS_SCHEMA = {
    "type": "object",
    "properties": {
        role: {"type": "string"} for role in ("water", "land", "roads", "buildings", "labels")
    },
}


def _state():
    return current_app.extensions["restyle"]


def _json_body(schema):
    """Return the parsed JSON body, or raise ValueError with a short message."""
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        raise ValueError(e.message) from e
    return data


@bp.route("/generate-style", methods=["POST"])
def generate_style():
    """Ask the language model for a style; overrides always win."""
    generator = _state()["generator"]
    if generator is None:
        return jsonify({"error": MISSING_KEY_MESSAGE}), 500
    try:
        body = _json_body(GENERATE_REQUEST_SCHEMA)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    prompt = body.get("prompt") or ""
    overrides = body.get("overrides") or {}
    try:
        style = generator.generate(prompt, overrides)
    except StyleGenerationError as e:
        logger.error("generate-style error: %s", e)
        return jsonify({"error": str(e)}), 500
    return jsonify({"style": style.to_dict()})


@bp.route("/apply-style", methods=["POST"])
def apply_style():
    """Apply picker colors to the session map as a manual style."""
    session = _state()["session"]
    try:
        pickers = _json_body(PICKERS_SCHEMA)
        pickers = {role: color for role, color in pickers.items() if role in session.controls}
        invalid = sorted(role for role, color in pickers.items() if not is_hex_color(color))
        if invalid:
            raise ValueError(f"Invalid color format for {', '.join(invalid)}. Colors must be hex strings like #RRGGBB")
        report = session.apply_manual(pickers)
    except SessionBusyError as e:
        return jsonify({"error": str(e)}), 409
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({
        "style": {**session.read_pickers(), "name": report.style_name},
        "report": report.to_dict(),
        "controls": session.read_pickers(),
    })


@bp.route("/ai-style", methods=["POST"])
def ai_style():
    """Generate a style from a prompt and apply it to the session map."""
    state = _state()
    if state["generator"] is None:
        return jsonify({"error": MISSING_KEY_MESSAGE}), 500
    session = state["session"]
    try:
        body = _json_body(GENERATE_REQUEST_SCHEMA)
        report = session.apply_prompt(body.get("prompt") or "")
    except SessionBusyError as e:
        return jsonify({"error": str(e)}), 409
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except StyleGenerationError as e:
        return jsonify({"error": str(e)}), 500
    return jsonify({"report": report.to_dict(), "controls": session.read_pickers()})


@bp.route("/pickers/<role>/pin", methods=["DELETE"])
def unpin_picker(role):
    session = _state()["session"]
    try:
        session.unpin(role)
    except ValueError:
        return jsonify({"error": f"Unknown role: {role}"}), 404
    return jsonify({"pinned": sorted(session.pinned)})


@bp.route("/style.json", methods=["GET"])
def download_style():
    """Current style document as a downloadable attachment."""
    document = _state()["session"].export_document()
    return Response(
        json.dumps(document, indent=2),
        mimetype="application/json",
        headers={"Content-Disposition": "attachment; filename=maplibre-style.json"},
    )


@bp.route("/roles", methods=["GET"])
def roles():
    session = _state()["session"]
    return jsonify({
        "keywords": session.keywords.to_dict(),
        "controls": session.read_pickers(),
        "pinned": sorted(session.pinned),
    })
