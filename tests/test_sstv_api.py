"""API endpoint tests for SSTV encoding routes."""

import io

import pytest
from flask import Flask
from PIL import Image

from sstvtx.routes.sstv import sstv_bp


@pytest.fixture
def app():
    """Create Flask application for testing."""
    app = Flask(__name__)
    app.register_blueprint(sstv_bp)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


def png_upload(size=(64, 48)):
    buf = io.BytesIO()
    Image.new('RGB', size, color=(0, 0, 255)).save(buf, format='PNG')
    buf.seek(0)
    return buf, 'card.png'


class TestModeEndpoints:
    """Tests for mode listing."""

    def test_list_modes(self, client):
        response = client.get('/api/sstv/modes')
        assert response.status_code == 200
        data = response.get_json()
        assert data['status'] == 'success'
        assert len(data['modes']) == 13
        names = [m['name'] for m in data['modes']]
        assert 'Martin1' in names
        assert 'PD290' in names

    def test_get_mode_by_alias(self, client):
        response = client.get('/api/sstv/modes/m1')
        assert response.status_code == 200
        mode = response.get_json()['mode']
        assert mode['name'] == 'Martin1'
        assert mode['family'] == 'martin'
        assert mode['vis_code'] == 44
        assert (mode['width'], mode['height']) == (320, 256)

    def test_unknown_mode(self, client):
        response = client.get('/api/sstv/modes/Robot36')
        assert response.status_code == 404
        assert response.get_json()['status'] == 'error'


class TestEncodeEndpoint:
    """Tests for image-to-WAV encoding."""

    def test_encode_returns_wav(self, client):
        response = client.post('/api/sstv/encode', data={
            'image': png_upload(),
            'mode': 'Martin2',
            'sample_rate': '1000',
        }, content_type='multipart/form-data')
        assert response.status_code == 200
        assert response.mimetype == 'audio/wav'
        assert response.data[:4] == b'RIFF'
        assert 'sstv_Martin2.wav' in response.headers['Content-Disposition']

    def test_missing_image(self, client):
        response = client.post('/api/sstv/encode', data={'mode': 'Martin2'},
                               content_type='multipart/form-data')
        assert response.status_code == 400

    def test_unknown_mode(self, client):
        response = client.post('/api/sstv/encode', data={
            'image': png_upload(),
            'mode': 'Robot36',
        }, content_type='multipart/form-data')
        assert response.status_code == 404

    @pytest.mark.parametrize('rate', ['abc', '0', '-8000', '1000000'])
    def test_invalid_sample_rate(self, client, rate):
        response = client.post('/api/sstv/encode', data={
            'image': png_upload(),
            'mode': 'Martin2',
            'sample_rate': rate,
        }, content_type='multipart/form-data')
        assert response.status_code == 400

    def test_unreadable_image(self, client):
        response = client.post('/api/sstv/encode', data={
            'image': (io.BytesIO(b'garbage'), 'card.png'),
            'mode': 'Martin2',
            'sample_rate': '1000',
        }, content_type='multipart/form-data')
        assert response.status_code == 400
        assert response.get_json()['status'] == 'error'

    def test_encode_uses_default_mode(self, client):
        response = client.post('/api/sstv/encode', data={
            'image': png_upload(),
            'sample_rate': '1000',
        }, content_type='multipart/form-data')
        assert response.status_code == 200
        assert response.mimetype == 'audio/wav'
        assert 'sstv_Martin1.wav' in response.headers['Content-Disposition']
