"""Integration tests for serving API endpoints."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from ovr_text_classifier.models.ovr.training import train_from_config


@pytest.fixture
def model_dir(training_config: Path) -> Path:
    """Train a model and return its artifact directory."""
    return Path(train_from_config(training_config)['artifact_dir'])


@pytest.fixture
def serving_config(tmp_path: Path, model_dir: Path) -> Path:
    """Create a serving config file."""
    config_path = tmp_path / 'serving.yaml'
    config_content = f"""
model:
  path: {model_dir}

server:
  host: 0.0.0.0
  port: 8001

validation:
  max_text_bytes: 200

batch:
  max_items: 3

logging:
  mode: requests
"""
    config_path.write_text(config_content, encoding='utf-8')
    return config_path


@pytest.fixture
def client(serving_config: Path, monkeypatch: pytest.MonkeyPatch):
    """Create a test client with configured app."""
    monkeypatch.setenv('OTC_SERVING_CONFIG', str(serving_config))

    # Remove cached app module to force re-import with new env var
    modules_to_remove = [key for key in sys.modules if 'ovr_text_classifier.serving' in key]
    for module in modules_to_remove:
        del sys.modules[module]

    from fastapi.testclient import TestClient

    from ovr_text_classifier.serving.app import app

    with TestClient(app) as test_client:
        yield test_client


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_returns_ok(self, client) -> None:
        response = client.get('/health')
        assert response.status_code == 200
        assert response.json()['status'] == 'ok'

    def test_ready_returns_ready(self, client) -> None:
        response = client.get('/ready')
        assert response.status_code == 200
        data = response.json()
        assert data['status'] == 'ready'
        assert data['model_loaded'] is True


class TestModelInfoEndpoint:
    def test_model_info_returns_metadata(self, client) -> None:
        response = client.get('/model/info')
        assert response.status_code == 200
        data = response.json()
        assert data['model_name'] == 'test_ovr'
        assert data['classes'] == ['cooking', 'finance', 'sports']
        assert data['feature_dimension'] > 0
        assert data['algorithm']['max_iterations'] == 200


class TestPredictEndpoint:
    def test_predict_ranks_classes(self, client) -> None:
        response = client.post(
            '/predict',
            json={'texts': ['the striker scored a goal', 'bake the bread']},
        )
        assert response.status_code == 200
        data = response.json()

        assert isinstance(data, list)
        assert len(data) == 2
        assert data[0]['results'][0]['class_name'] == 'sports'
        assert data[1]['results'][0]['class_name'] == 'cooking'
        for prediction in data:
            probabilities = [item['probability'] for item in prediction['results']]
            assert probabilities == sorted(probabilities, reverse=True)
            assert all(0.001 < p <= 1.0 for p in probabilities)
            assert prediction['model_version'].endswith('_001')

    def test_predict_rejects_empty_text(self, client) -> None:
        response = client.post('/predict', json={'texts': ['   ']})
        assert response.status_code == 422

    def test_predict_rejects_oversized_text(self, client) -> None:
        response = client.post('/predict', json={'texts': ['word ' * 100]})
        assert response.status_code == 400
        assert 'exceeds maximum size' in response.json()['detail']

    def test_predict_rejects_large_batch(self, client) -> None:
        response = client.post('/predict', json={'texts': ['a', 'b', 'c', 'd']})
        assert response.status_code == 400
        assert 'Batch size' in response.json()['detail']
