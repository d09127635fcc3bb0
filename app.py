# Standard library imports
import logging
import logging.config
import time
from datetime import datetime, timezone

# Third-party imports
from flask import Flask, jsonify, request

import config
from phishlens.heuristics.email_analysis import (
    EMPTY_EMAIL_MESSAGE,
    AnalysisError,
    analyze_email_content,
)

logging.config.dictConfig(config.LOGGING)
logger = logging.getLogger("app")

# Initialize Flask app
app = Flask(__name__)
app.config["MAX_EMAIL_SIZE"] = config.MAX_EMAIL_SIZE
app.config["ANALYSIS_DELAY_SECONDS"] = config.ANALYSIS_DELAY_SECONDS


# Security headers
@app.after_request
def add_security_headers(resp):
    resp.headers["X-Content-Type-Options"] = "nosniff"
    resp.headers["X-Frame-Options"] = "DENY"
    resp.headers["Referrer-Policy"] = "no-referrer"
    resp.headers["Cache-Control"] = "no-store"
    resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"
    return resp


def _email_text_from_request() -> str:
    """Accept JSON {"email": "..."} or a raw text body."""
    if request.is_json:
        data = request.get_json(silent=True) or {}
        value = data.get("email") if isinstance(data, dict) else None
        return value if isinstance(value, str) else ""
    return request.get_data(as_text=True) or ""


@app.route("/api/analyze", methods=["POST"])
def analyze_email():
    email_text = _email_text_from_request()

    if len(email_text.encode("utf-8")) > app.config["MAX_EMAIL_SIZE"]:
        return jsonify({"ok": False, "error": "Email is too large to analyze"}), 413
    if not email_text.strip():
        return jsonify({"ok": False, "error": EMPTY_EMAIL_MESSAGE}), 400

    delay = app.config["ANALYSIS_DELAY_SECONDS"]
    if delay > 0:
        time.sleep(delay)

    try:
        report = analyze_email_content(email_text)
    except AnalysisError as e:
        return jsonify({"ok": False, "error": str(e)}), 500

    logger.info(f"Analyzed email ({len(email_text)} chars): risk level {report.risk_level}")
    return jsonify({"ok": True, "report": report.as_dict()})


@app.route("/api/health")
def health():
    return jsonify({"status": "ok", "time": datetime.now(timezone.utc).isoformat()})


if __name__ == "__main__":
    logger.info("Starting app...")
    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)
