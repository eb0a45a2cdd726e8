# -*- coding: utf-8 -*-
"""
Flask HTTP entry point for the voice expense interpreter.

Routes:
- GET  /api/health                       liveness check
- POST /api/interpret                    {"transcript", "default_currency"}
- GET  /api/currency/resolve?text=...    currency mentioned in text
- GET  /api/category/classify?text=...   expense category of text
"""

import logging

from flask import Flask, jsonify, request

from voice_expense import __version__, config
from voice_expense.parser.extract_category import classify
from voice_expense.processor import process_transcript
from voice_expense.shared.currency_resolver import resolve

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize Flask app
app = Flask(__name__)


def _bad_request(message: str):
    return jsonify({"error": message}), 400


@app.route("/api/health", methods=['GET'])
def health():
    """Health check endpoint"""
    return jsonify({"status": "ok", "version": __version__}), 200


@app.route("/api/interpret", methods=['POST'])
def interpret_transcript():
    """
    Interpret a transcript into an expense proposal.

    Returns 200 with the result, also for transcripts that need correction
    (is_error=true); 400 when the request body has no transcript.
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict) or "transcript" not in payload:
        return _bad_request("missing field: transcript")

    transcript = payload.get("transcript")
    if transcript is not None and not isinstance(transcript, str):
        return _bad_request("transcript must be a string")

    default_currency = payload.get("default_currency")
    if default_currency is not None and not isinstance(default_currency, str):
        return _bad_request("default_currency must be a string")

    logger.info(f"Interpret request ({len(transcript or '')} chars)")
    result = process_transcript(transcript, default_currency)
    return jsonify(result.to_dict()), 200


@app.route("/api/currency/resolve", methods=['GET'])
def resolve_currency():
    text = request.args.get("text")
    if text is None:
        return _bad_request("missing query parameter: text")

    currency = resolve(text)
    if currency is None:
        return jsonify({"text": text, "currency": None}), 200
    return jsonify({
        "text": text,
        "currency": {
            "code": currency.code,
            "symbol": currency.symbol,
            "display_name": currency.display_name,
        },
    }), 200


@app.route("/api/category/classify", methods=['GET'])
def classify_category():
    text = request.args.get("text")
    if text is None:
        return _bad_request("missing query parameter: text")
    return jsonify({"text": text, "category": classify(text).value}), 200


# For local testing
if __name__ == "__main__":
    app.run(debug=True, port=5000)
