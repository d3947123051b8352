"""
SSTV encoding routes.

Provides REST endpoints to list transmit modes and to encode an uploaded
image into a WAV transmission.
"""

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request

from sstvtx.config import DEFAULT_MODE, MAX_UPLOAD_MB, RESIZE_INPUT, SAMPLE_RATE, WAV_CHANNELS
from sstvtx.encoder import ALL_MODES, FormatDescriptor, SSTVEncoder, get_mode_by_name
from sstvtx.encoder.exceptions import SSTVError
from sstvtx.encoder.imaging import load_rgba
from sstvtx.logging import get_logger

logger = get_logger('sstvtx.routes.sstv')

sstv_bp = Blueprint('sstv', __name__, url_prefix='/api/sstv')

MAX_SAMPLE_RATE = 192000


def _mode_to_dict(mode: FormatDescriptor) -> dict:
    width, height = mode.image_size
    return {
        'name': mode.name,
        'family': mode.family.value if mode.family else None,
        'vis_code': mode.vis_value,
        'width': width,
        'height': height,
        'nominal_duration': round(mode.nominal_duration, 3),
    }


@sstv_bp.route('/modes', methods=['GET'])
def list_modes() -> Response:
    """List all supported transmit modes."""
    modes = sorted(ALL_MODES.values(), key=lambda m: m.name)
    return jsonify({
        'status': 'success',
        'modes': [_mode_to_dict(m) for m in modes],
    })


@sstv_bp.route('/modes/<name>', methods=['GET'])
def get_mode_info(name: str) -> Response:
    """Get a single mode by name or alias."""
    mode = get_mode_by_name(name)
    if mode is None:
        return jsonify({'status': 'error', 'message': f'Unknown mode: {name}'}), 404
    return jsonify({'status': 'success', 'mode': _mode_to_dict(mode)})


@sstv_bp.route('/encode', methods=['POST'])
def encode() -> Response:
    """Encode an uploaded image into a WAV file.

    Form fields: ``image`` (file), ``mode`` (optional name or alias,
    defaults to ``SSTVTX_DEFAULT_MODE``),
    ``sample_rate`` (optional, Hz).
    """
    upload = request.files.get('image')
    if upload is None:
        return jsonify({'status': 'error', 'message': 'No image provided'}), 400

    mode_name = request.form.get('mode') or DEFAULT_MODE
    mode = get_mode_by_name(mode_name)
    if mode is None:
        return jsonify({'status': 'error', 'message': f'Unknown mode: {mode_name}'}), 404

    try:
        sample_rate = int(request.form.get('sample_rate', SAMPLE_RATE))
    except ValueError:
        return jsonify({'status': 'error', 'message': 'Invalid sample rate'}), 400
    if not 0 < sample_rate <= MAX_SAMPLE_RATE:
        return jsonify({'status': 'error', 'message': 'Invalid sample rate'}), 400

    data = upload.read(MAX_UPLOAD_MB * 1024 * 1024 + 1)
    if len(data) > MAX_UPLOAD_MB * 1024 * 1024:
        return jsonify({'status': 'error', 'message': 'Image too large'}), 400

    try:
        pixels = load_rgba(data, mode, resize=RESIZE_INPUT)
        wav = SSTVEncoder(mode).wav(pixels, sample_rate, WAV_CHANNELS)
    except SSTVError as e:
        logger.warning(f'SSTV encode rejected: {e}')
        return jsonify({'status': 'error', 'message': str(e)}), 400

    logger.info(f'Encoded {upload.filename or "upload"} as {mode.name}')
    return Response(
        wav,
        mimetype='audio/wav',
        headers={'Content-Disposition': f'attachment; filename=sstv_{mode.name}.wav'},
    )
