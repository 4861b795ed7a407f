import os, sys, pytest
# Ensure backend directory is on path so 'admin_panel' and 'tests' can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
from admin_panel import create_app
from admin_panel.extensions import EXTENSION_KEY
from tests.fake_api import FakeRemoteApi, SUPER_ADMIN_PHONE, VALID_OTP

TEST_CONFIG = {
    'DATABASE_URL': 'sqlite+pysqlite:///:memory:',
    'API_BASE_URL': 'http://api.test',
    'JWT_SECRET_KEY': 'test-secret-key-that-is-long-enough-for-hs256',
}


@pytest.fixture()
def fake_api():
    return FakeRemoteApi()


@pytest.fixture()
def app_instance(fake_api):
    app = create_app(dict(TEST_CONFIG, API_TRANSPORT=fake_api.transport()))
    yield app
    app.extensions[EXTENSION_KEY]['api'].close()


@pytest.fixture()
def client(app_instance):
    return app_instance.test_client()


@pytest.fixture()
def panel(app_instance):
    """Collaborators registered by create_app (session, login_flow, api, ...)."""
    return app_instance.extensions[EXTENSION_KEY]


def login(client, phone=SUPER_ADMIN_PHONE, otp=VALID_OTP):
    resp = client.post('/auth/send-otp', json={'phone': phone})
    assert resp.status_code == 200, resp.get_json()
    return client.post('/auth/verify-otp', json={'otp': otp})


@pytest.fixture()
def admin_headers(client):
    resp = login(client)
    assert resp.status_code == 200, resp.get_json()
    return {'Authorization': f"Bearer {resp.get_json()['access_token']}"}
