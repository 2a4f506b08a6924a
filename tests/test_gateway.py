# tests/test_gateway.py
import pytest

from app.utils.errors import MissingTenant, NotFound
from conftest import SHOP_A, SHOP_B


def test_create_then_get(gateway):
    doc_id = gateway.create(SHOP_A, 'customers', {'name': 'Asha', 'phone': '9876543210'})
    record = gateway.get(SHOP_A, 'customers', doc_id)
    assert record['id'] == doc_id
    assert record['_id'] == doc_id
    assert record['name'] == 'Asha'
    assert record['createdAt'].endswith('Z')
    assert record['createdAt'] == record['updatedAt']


def test_server_timestamps_override_client_values(gateway):
    doc_id = gateway.create(SHOP_A, 'customers', {
        'name': 'Asha', 'id': 'forged', 'createdAt': '2000-01-01T00:00:00Z',
    })
    record = gateway.get(SHOP_A, 'customers', doc_id)
    assert record['id'] == doc_id
    assert not record['createdAt'].startswith('2000')


def test_documents_are_isolated_per_tenant(gateway):
    doc_id = gateway.create(SHOP_A, 'customers', {'name': 'Asha'})
    assert gateway.exists(SHOP_A, 'customers', doc_id)
    assert not gateway.exists(SHOP_B, 'customers', doc_id)
    with pytest.raises(NotFound):
        gateway.get(SHOP_B, 'customers', doc_id)
    assert gateway.list(SHOP_B, 'customers') == []
    with pytest.raises(NotFound):
        gateway.delete(SHOP_B, 'customers', doc_id)


def test_missing_tenant_is_rejected(gateway):
    with pytest.raises(MissingTenant):
        gateway.create('', 'customers', {'name': 'Asha'})
    with pytest.raises(MissingTenant):
        gateway.list(None, 'customers')


def test_update_merges_fields(gateway):
    doc_id = gateway.create(SHOP_A, 'customers', {'name': 'Asha', 'phone': '9876543210'})
    updated = gateway.update(SHOP_A, 'customers', doc_id, {'phone': '9123456780', 'id': 'other'})
    assert updated['name'] == 'Asha'
    assert updated['phone'] == '9123456780'
    assert updated['id'] == doc_id
    assert gateway.get(SHOP_A, 'customers', doc_id)['phone'] == '9123456780'


def test_update_missing_document(gateway):
    with pytest.raises(NotFound) as excinfo:
        gateway.update(SHOP_A, 'jobCards', 'nope', {'status': 'paid'})
    assert excinfo.value.message == 'Job card not found'


def test_delete_twice_raises_not_found(gateway):
    doc_id = gateway.create(SHOP_A, 'devices', {'brand': 'X'})
    gateway.delete(SHOP_A, 'devices', doc_id)
    with pytest.raises(NotFound):
        gateway.delete(SHOP_A, 'devices', doc_id)


def test_list_is_newest_first_by_default(gateway):
    first = gateway.create(SHOP_A, 'customers', {'name': 'First'})
    second = gateway.create(SHOP_A, 'customers', {'name': 'Second'})
    third = gateway.create(SHOP_A, 'customers', {'name': 'Third'})
    assert [record['id'] for record in gateway.list(SHOP_A, 'customers')] == [third, second, first]
    assert [record['id'] for record in gateway.list(SHOP_A, 'customers', descending=False)] == [
        first, second, third,
    ]
    assert len(gateway.list(SHOP_A, 'customers', limit=2)) == 2


def test_list_orders_by_payload_field(gateway):
    gateway.create(SHOP_A, 'expenses', {'description': 'b', 'date': '2025-01-10'})
    gateway.create(SHOP_A, 'expenses', {'description': 'c'})
    gateway.create(SHOP_A, 'expenses', {'description': 'a', 'date': '2025-01-20'})
    records = gateway.list(SHOP_A, 'expenses', order_field='date', descending=True)
    assert [record['description'] for record in records] == ['a', 'b', 'c']


def test_put_keeps_creation_time(gateway):
    created = gateway.put(SHOP_A, 'company', 'profile', {'companyName': 'Asrock'})
    replaced = gateway.put(SHOP_A, 'company', 'profile', {'companyName': 'Asrock Mobiles'})
    assert replaced['id'] == 'profile'
    assert replaced['companyName'] == 'Asrock Mobiles'
    assert replaced['createdAt'] == created['createdAt']
    assert len(gateway.list(SHOP_A, 'company')) == 1


def test_cross_tenant_reads(gateway):
    gateway.put(SHOP_A, 'users', SHOP_A, {'email': 'a@shopmail.in'})
    gateway.put(SHOP_B, 'users', SHOP_B, {'email': 'b@shopmail.in'})
    assert {record['id'] for record in gateway.list_all('users')} == {SHOP_A, SHOP_B}
    assert gateway.find('users', SHOP_B)['email'] == 'b@shopmail.in'
    with pytest.raises(NotFound):
        gateway.find('users', 'ghost')
