from __future__ import annotations
from flask import Flask, request, jsonify, Response
from services.api.orchestrator import ARTIFACT_NAMES, calculate, calculate_form
from services.config.env import get_api_config
from services.config.logger import setup_logging
from services.formatting.locales import LOCALES
from services.roi.assumptions import DEFAULT_INPUTS, inputs_to_dict

import io
import logging
import zipfile

import time
import json
from collections import deque
from pathlib import Path

OPENAPI_PATH = Path(__file__).with_name("openapi.json")

app = Flask(__name__)
logger = logging.getLogger(__name__)

# Configuration helpers (overridable via app.config in tests)

def _get_api_key() -> str | None:
    if 'API_KEY' in app.config:
        return app.config.get('API_KEY')
    return get_api_config().api_key


def _get_rate_limit() -> tuple[int, float]:
    n = app.config.get('RATE_LIMIT_N')
    w = app.config.get('RATE_LIMIT_WINDOW_SEC')
    if n is None or w is None:
        cfg = get_api_config()
        n = cfg.rate_limit_n if n is None else n
        w = cfg.rate_limit_window_sec if w is None else w
    return int(n), float(w)

def _trust_forwarded_for() -> bool:
    if 'TRUST_X_FORWARDED_FOR' in app.config:
        return bool(app.config.get('TRUST_X_FORWARDED_FOR'))
    return get_api_config().trust_forwarded_for

# ip -> request timestamps inside the window; stale ips are swept on each check
_recent: dict[str, deque[float]] = {}


def _client_ip() -> str:
    # X-Forwarded-For is client-controlled; only honour it behind a trusted proxy
    xff = request.headers.get('X-Forwarded-For')
    if xff and _trust_forwarded_for():
        return xff.split(',')[0].strip()
    return request.remote_addr or 'anon'


def _sweep(now: float, window: float) -> None:
    stale = [ip for ip, dq in _recent.items() if not dq or now - dq[-1] > window]
    for ip in stale:
        del _recent[ip]


def _check_api_key():
    api_key = _get_api_key()
    if api_key:
        provided = request.headers.get('X-API-Key')
        if provided != api_key:
            return jsonify({'error': 'unauthorized'}), 401
    return None


def _check_rate_limit(ip: str):
    # Allow if rate limiting disabled or N <= 0
    n, window = _get_rate_limit()
    if n <= 0:
        return None
    now = time.time()
    _sweep(now, window)
    dq = _recent.setdefault(ip, deque(maxlen=100))
    # Drop old entries outside window
    while dq and now - dq[0] > window:
        dq.popleft()
    if len(dq) >= n:
        retry = max(0.0, window - (now - dq[0]))
        resp = jsonify({'error': 'rate_limited'})
        resp.status_code = 429
        resp.headers['Retry-After'] = f"{retry:.2f}"
        return resp
    dq.append(now)
    return None

@app.before_request
def _auth_and_rate_limit():
    # Only enforce for calculation routes
    if request.path.startswith('/calculate'):
        unauthorized = _check_api_key()
        if unauthorized is not None:
            return unauthorized
        if request.method == 'POST':
            rl = _check_rate_limit(_client_ip())
            if rl is not None:
                return rl
    return None


def _calculate_from_request(build=calculate):
    """Returns (calculation, None) or (None, error response)."""
    payload = request.get_json(force=True, silent=True)
    if payload is None:
        if request.get_data(cache=True).strip():
            return None, (jsonify({'error': 'body must be valid JSON'}), 400)
        payload = {}
    if not isinstance(payload, dict):
        return None, (jsonify({'error': 'body must be a JSON object'}), 400)
    try:
        return build(payload), None
    except KeyError:
        logger.warning("unsupported locale: %r", payload.get('locale'))
        return None, (jsonify({'error': 'unsupported_locale'}), 400)
    except ValueError as e:
        logger.warning("rejected inputs: %s", e)
        return None, (jsonify({'error': str(e)}), 400)


@app.get('/defaults')
def get_defaults():
    return jsonify({'inputs': inputs_to_dict(DEFAULT_INPUTS)})


@app.get('/locales')
def get_locales():
    return jsonify({'locales': [f.code for f in LOCALES.values()]})


@app.post('/calculate')
def post_calculate():
    calc, err = _calculate_from_request()
    if err is not None:
        return err
    return jsonify(calc.to_dict())


@app.post('/calculate/form')
def post_calculate_form():
    calc, err = _calculate_from_request(calculate_form)
    if err is not None:
        return err
    return jsonify(calc.to_dict())


@app.post('/calculate/artifacts/<name>')
def post_artifact(name: str):
    if name not in ARTIFACT_NAMES:
        return jsonify({'error': 'artifact_not_found'}), 404
    calc, err = _calculate_from_request()
    if err is not None:
        return err
    body = calc.artifacts()[name]
    if name.endswith('.csv'):
        mimetype = 'text/csv'
    elif name.endswith('.md'):
        mimetype = 'text/markdown'
    else:
        mimetype = 'application/octet-stream'
    return Response(body, mimetype=mimetype)


@app.post('/calculate/download.zip')
def post_download_zip():
    calc, err = _calculate_from_request()
    if err is not None:
        return err
    # Build zip in memory
    mem = io.BytesIO()
    with zipfile.ZipFile(mem, mode='w', compression=zipfile.ZIP_DEFLATED) as zf:
        for name, body in calc.artifacts().items():
            zf.writestr(name, body)
    mem.seek(0)
    return Response(mem.getvalue(), mimetype='application/zip', headers={
        'Content-Disposition': 'attachment; filename="roi.zip"'
    })


@app.get('/openapi.json')
def get_openapi():
    try:
        spec = json.loads(OPENAPI_PATH.read_text())
    except (OSError, ValueError):
        return jsonify({'error': 'openapi_not_found'}), 404
    return jsonify(spec)


if __name__ == '__main__':
    setup_logging()
    app.run(host='0.0.0.0', port=8000)
