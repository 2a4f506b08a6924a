# tests/conftest.py
import pytest

from app import create_app, db
from app.utils.tokens import issue_token
from config import TestingConfig

SHOP_A = 'shop-a'
SHOP_B = 'shop-b'
ADMIN_UID = 'admin-1'


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def gateway(app_ctx):
    return app_ctx.extensions['documents']


def tenant_headers(uid=SHOP_A):
    return {'x-user-id': uid}


@pytest.fixture
def admin_headers(app):
    with app.app_context():
        app.extensions['documents'].put(ADMIN_UID, 'users', ADMIN_UID, {
            'uid': ADMIN_UID,
            'email': 'admin@repairdesk.in',
            'name': 'Admin',
            'role': 'admin',
        })
        token = issue_token(ADMIN_UID, role='admin')
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def customer(client):
    response = client.post('/api/customers', json={
        'name': 'Asha',
        'phone': '9876543210',
    }, headers=tenant_headers())
    assert response.status_code == 201
    return response.get_json()['customer']


@pytest.fixture
def device(client, customer):
    response = client.post('/api/devices', json={
        'customerId': customer['id'],
        'deviceType': 'mobile',
        'brand': 'X',
        'model': 'Y',
    }, headers=tenant_headers())
    assert response.status_code == 201
    return response.get_json()['device']


@pytest.fixture
def job_card(client, customer, device):
    response = client.post('/api/jobcards', json={
        'customerId': customer['id'],
        'deviceId': device['id'],
        'problemDescription': 'Screen cracked and touch not working',
        'laborCost': '500',
        'partsCost': '1500',
        'deliveryDate': '2025-02-01',
    }, headers=tenant_headers())
    assert response.status_code == 201
    return response.get_json()['jobCard']
