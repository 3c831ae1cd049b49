import asyncio
import logging

from flask import Flask, jsonify, request, send_from_directory

from tg_lookup.config import Settings
from tg_lookup.errors import ConfigurationError, RequestValidationError
from tg_lookup.lookup import build_inputs, run_lookup
from tg_lookup.platform import open_platform

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

app = Flask(__name__)


def parse_lookup_request(data):
    """Return (phones, names) from a decoded JSON body or raise RequestValidationError."""
    if not isinstance(data, dict):
        raise RequestValidationError('Use POST with JSON body: {"phones": [...], "names": [...]}')
    phones = data.get("phones")
    if not isinstance(phones, list) or not phones:
        raise RequestValidationError('"phones" must be a non-empty array')
    if not all(isinstance(p, str) for p in phones):
        raise RequestValidationError('"phones" must contain only strings')
    names = data.get("names")
    if not isinstance(names, list):
        names = []
    return phones, names


async def lookup(settings, inputs):
    async with open_platform(settings) as platform:
        return await run_lookup(platform, inputs, settings)


def get_settings():
    if "settings" not in app.config:
        app.config["settings"] = Settings.from_env()
    return app.config["settings"]


@app.route("/")
def index():
    return "Telegram lookup service is running\n", 200, {"Content-Type": "text/plain; charset=utf-8"}


@app.route("/lookup", methods=["POST"])
def lookup_phones():
    try:
        phones, names = parse_lookup_request(request.get_json(silent=True))
    except RequestValidationError as e:
        return jsonify({"success": False, "error": str(e)}), 400

    try:
        settings = get_settings()
        settings.require_credentials()
        results = asyncio.run(lookup(settings, build_inputs(phones, names)))
    except ConfigurationError as e:
        logger.error("Lookup unavailable: %s", e)
        return jsonify({"success": False, "error": str(e)}), 500
    except Exception as e:
        logger.exception("Lookup failed")
        return jsonify({"success": False, "error": str(e)}), 500

    return jsonify({"success": True, "results": [r.to_dict() for r in results]})


@app.route("/photos/<path:filename>")
def photo(filename):
    try:
        settings = get_settings()
    except ConfigurationError as e:
        logger.error("Photo serving unavailable: %s", e)
        return jsonify({"success": False, "error": str(e)}), 500
    return send_from_directory(settings.photo_dir.resolve(), filename)


@app.errorhandler(405)
def method_not_allowed(e):
    return jsonify({"success": False, "error": 'Use POST with JSON body: {"phones": [...], "names": [...]}'}), 405


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000)
