"""
Itinerary Converter - API Routes
JSON endpoints wrapping the converter: preview, *I lines, availability, VI*.

Every endpoint takes ``{"text": "...", "options": {...}}``.
"""

import logging

from flask import Blueprint, request, jsonify

from converter import (
    ConversionError,
    availability_commands,
    build_availability_command,
    convert_text_to_i,
    convert_vi_to_i,
    parse_preview,
)

logger = logging.getLogger(__name__)

# Create blueprint
convert_bp = Blueprint('convert', __name__, url_prefix='/api')

_PREVIEW_CHARS = 160


# ==================== HELPER FUNCTIONS ====================

def read_payload():
    """Return (text, options) from the JSON body, or raise ConversionError."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ConversionError("invalid_request", "Body must be a JSON object")
    options = data.get('options') or {}
    if not isinstance(options, dict):
        raise ConversionError("invalid_request", "'options' must be an object")
    return data.get('text') or '', options


def failure(err, text=''):
    snippet = ' | '.join(line.strip() for line in text.splitlines() if line.strip())[:_PREVIEW_CHARS]
    logger.warning("Conversion failed (%s): %s -- input: %s", err.reason, err.message, snippet)
    return jsonify(err.to_dict()), 400


# ==================== CONVERSION ROUTES ====================

@convert_bp.route('/preview', methods=['POST'])
def preview():
    """Segments and journeys found in the text."""
    text = ''
    try:
        text, options = read_payload()
        return jsonify(parse_preview(text, options).to_dict())
    except ConversionError as e:
        return failure(e, text)


@convert_bp.route('/itinerary', methods=['POST'])
def itinerary():
    """*I command lines."""
    text = ''
    try:
        text, options = read_payload()
        return jsonify({"text": convert_text_to_i(text, options)})
    except ConversionError as e:
        return failure(e, text)


@convert_bp.route('/availability', methods=['POST'])
def availability():
    text = ''
    try:
        text, options = read_payload()
        return jsonify({"command": build_availability_command(text, options)})
    except ConversionError as e:
        return failure(e, text)


@convert_bp.route('/availability/journeys', methods=['POST'])
def availability_by_journey():
    """One availability command per journey."""
    text = ''
    try:
        text, options = read_payload()
        return jsonify({"commands": availability_commands(text, options)})
    except ConversionError as e:
        return failure(e, text)


@convert_bp.route('/vi', methods=['POST'])
def vi_display():
    """VI* display → *I command lines."""
    text = ''
    try:
        text, options = read_payload()
        return jsonify(convert_vi_to_i(text, options))
    except ConversionError as e:
        return failure(e, text)
