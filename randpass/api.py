import logging

from flask import Flask, jsonify, request

from .errors import PasswordGenerationError, ValidationError
from .generator import GenerationOptions, PasswordGenerator

logger = logging.getLogger(__name__)

app = Flask(__name__)

_BOOL_FIELDS = ("lowercase", "uppercase", "numbers", "symbols",
                "exclude_similar_characters", "strict")


def _options_from_json(data: dict) -> GenerationOptions:
    defaults = GenerationOptions()
    fields = {}
    length = data.get("length", defaults.length)
    if not isinstance(length, int) or isinstance(length, bool):
        raise ValidationError("length must be an integer")
    fields["length"] = length
    for name in _BOOL_FIELDS:
        value = data.get(name, getattr(defaults, name))
        if not isinstance(value, bool):
            raise ValidationError(f"{name} must be a boolean")
        fields[name] = value
    for name in ("exclude", "symbols_string"):
        value = data.get(name)
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"{name} must be a string")
        fields[name] = value
    fields["exclude"] = fields["exclude"] or ""
    return GenerationOptions(**fields)


@app.route('/')
def home():
    return jsonify({
        "message": "randpass API is running"
    })


@app.route('/generate', methods=['POST'])
def generate_route():
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return jsonify({'error': 'request body must be a JSON object'}), 400
    # one generator per request, the random buffer is not shared between threads
    generator = PasswordGenerator()
    try:
        options = _options_from_json(data)
        if "count" in data:
            count = data["count"]
            return jsonify({'passwords': generator.generate_multiple(count, options)})
        return jsonify({'password': generator.generate(options)})
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    except PasswordGenerationError as e:
        logger.error("password generation failed: %s", e)
        return jsonify({'error': str(e)}), 500
