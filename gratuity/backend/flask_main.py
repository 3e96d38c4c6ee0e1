"""
Main Flask application - Controller layer.
Handles routes, request parsing, and delegates to the gratuity service layer.
"""
import os
import logging
from dotenv import load_dotenv
from datetime import date
from flask import Flask, request, jsonify
from flask.json.provider import DefaultJSONProvider
from flask_cors import CORS

import gratuity_service

load_dotenv()

# Logging (stdlib only)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
logger = logging.getLogger(__name__)

# Configuration
FRONTEND_ORIGIN = os.getenv("FRONTEND_ORIGIN", "http://localhost:3001")
PORT = int(os.getenv("FLASK_MAIN_PORT", "8000"))

# Custom JSON encoder to handle date objects
class CustomJSONProvider(DefaultJSONProvider):
    def default(self, obj):
        if isinstance(obj, date):
            return obj.isoformat()
        return super().default(obj)

app = Flask(__name__)
app.json = CustomJSONProvider(app)

# The calculator form is served from a separate frontend origin
CORS(app,
     resources={r"/*": {"origins": FRONTEND_ORIGIN}},
     allow_headers=["Content-Type"],
     expose_headers=["Content-Type"])


def get_form_body():
    """Read the JSON body, treating a missing or malformed body as an empty form."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return {}
    return body

# ==================== API ENDPOINTS ====================

@app.route("/")
def root():
    return jsonify({"message": "UAE Gratuity Calculator API"})

# ==================== GRATUITY ENDPOINTS ====================

@app.route("/gratuity/rules")
def get_rules():
    """List the supported gratuity rules"""
    return jsonify(gratuity_service.list_rules())

@app.route("/gratuity/calculate", methods=["POST"])
def calculate_gratuity():
    """Calculate end of service gratuity from the submitted form"""
    body = get_form_body()

    try:
        result = gratuity_service.calculate_gratuity(body)
        return jsonify(result)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

@app.route("/gratuity/duration", methods=["POST"])
def calculate_duration():
    """Break the span between two dates into years, months and days of service"""
    body = get_form_body()

    try:
        result = gratuity_service.calculate_service_duration_between(
            body.get('startDate'),
            body.get('endDate')
        )
        return jsonify(result)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=PORT, debug=True)
