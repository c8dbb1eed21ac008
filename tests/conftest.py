import os
import tempfile

# Los logs de profiling de los tests van a una carpeta temporal
os.environ.setdefault('COFOODIE_LOGS_DIR', tempfile.mkdtemp(prefix='cofoodie-logs-'))

import pytest
import requests

from cofoodie.app_container import AppContainer
from cofoodie.config import Settings
from cofoodie.main import create_app


ENDPOINT_URL = 'http://endpoint.test/'


class _FlaskResponse:
    """Respuesta con la forma mínima de requests.Response."""

    def __init__(self, werkzeug_response):
        self.status_code = werkzeug_response.status_code
        self.text = werkzeug_response.get_data(as_text=True)

    @property
    def ok(self):
        return self.status_code < 400


class FlaskClientSession:
    """
    Sesión HTTP que envía los POST al test_client de Flask.
    Permite probar RemoteStorageBackend contra el endpoint real sin red.
    """

    def __init__(self, client):
        self.client = client
        self.calls = []

    def post(self, url, data=None, headers=None, timeout=None, allow_redirects=True):
        self.calls.append(data)
        return _FlaskResponse(self.client.post('/', data=data, headers=headers))


class BrokenSession:
    """Sesión que simula el endpoint caído."""

    def post(self, *args, **kwargs):
        raise requests.ConnectionError('endpoint unreachable')


class StaticSession:
    """Sesión que siempre devuelve el mismo estado y cuerpo."""

    def __init__(self, status_code, text):
        self.status_code = status_code
        self.text = text

    def post(self, *args, **kwargs):
        response = _FlaskResponse.__new__(_FlaskResponse)
        response.status_code = self.status_code
        response.text = self.text
        return response


@pytest.fixture
def settings(tmp_path):
    return Settings(
        script_url='',
        data_dir=str(tmp_path / 'data'),
        workbook_file=str(tmp_path / 'server' / 'workbook.json'),
        lock_timeout=5,
    )


@pytest.fixture
def local_container(settings):
    return AppContainer(settings)


@pytest.fixture
def local_storage(local_container):
    return local_container.storage


@pytest.fixture
def endpoint_container(settings):
    return AppContainer(settings)


@pytest.fixture
def app(endpoint_container):
    flask_app = create_app(endpoint_container)
    flask_app.config['TESTING'] = True
    return flask_app


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c


@pytest.fixture
def http_session(client):
    return FlaskClientSession(client)


@pytest.fixture
def remote_container(tmp_path, http_session):
    remote_settings = Settings(
        script_url=ENDPOINT_URL,
        data_dir=str(tmp_path / 'client'),
        workbook_file=str(tmp_path / 'unused.json'),
    )
    return AppContainer(remote_settings, http_session=http_session)


@pytest.fixture
def remote_storage(remote_container):
    return remote_container.storage
