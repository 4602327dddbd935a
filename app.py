import os
import logging
from flask import Flask, jsonify
from dotenv import load_dotenv

from config import LOG_LEVEL
from routes import convert_bp

load_dotenv()
logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO),
                    format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = Flask(__name__)
app.json.sort_keys = False

# Register conversion Blueprint
app.register_blueprint(convert_bp)


# ==================== ROUTES ====================

@app.route("/health")
def health():
    """Liveness probe"""
    return jsonify({"status": "ok"})


@app.errorhandler(404)
def not_found(e):
    return jsonify({"error": "not_found", "message": "Unknown endpoint"}), 404


@app.errorhandler(405)
def method_not_allowed(e):
    return jsonify({"error": "method_not_allowed", "message": "Use POST with a JSON body"}), 405


if __name__ == "__main__":
    app.run(host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "5000")),
            debug=os.getenv("FLASK_DEBUG", "0") == "1")
