# tests/test_api_admin.py
from conftest import ADMIN_UID, SHOP_A, tenant_headers

from app.utils.tokens import issue_token


def seed_account(app, uid, **fields):
    account = {'uid': uid, 'email': f'{uid}@shopmail.in', 'name': uid.title(), 'role': 'user'}
    account.update(fields)
    with app.app_context():
        app.extensions['documents'].put(uid, 'users', uid, account)


def test_admin_routes_need_a_token(client):
    response = client.get('/api/admin/users')
    assert response.status_code == 401

    # The tenant header alone never grants admin access
    seed_account(client.application, 'boss', role='admin')
    assert client.get('/api/admin/users', headers=tenant_headers('boss')).status_code == 401


def test_garbage_token_is_rejected(client):
    response = client.get('/api/admin/stats', headers={'Authorization': 'Bearer not-a-jwt'})
    assert response.status_code == 401


def test_token_signed_with_other_key_is_rejected(app, client):
    seed_account(app, ADMIN_UID, role='admin')
    with app.app_context():
        token = issue_token(ADMIN_UID, role='admin', secret='some-other-secret')
    response = client.get('/api/admin/users', headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == 401


def test_role_comes_from_the_stored_account(app, client):
    # A token claiming admin does not help a plain user
    seed_account(app, SHOP_A, role='user')
    with app.app_context():
        token = issue_token(SHOP_A, role='admin')
    response = client.get('/api/admin/users', headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == 403


def test_list_users(app, client, admin_headers):
    seed_account(app, SHOP_A, shopName='Asrock')
    users = client.get('/api/admin/users', headers=admin_headers).get_json()['users']
    by_uid = {user['uid']: user for user in users}
    assert set(by_uid) == {ADMIN_UID, SHOP_A}
    assert by_uid[SHOP_A]['shopName'] == 'Asrock'
    assert by_uid[SHOP_A]['loginCount'] == 0


def test_change_role(app, client, admin_headers):
    seed_account(app, SHOP_A)
    response = client.put('/api/admin/users', json={'uid': SHOP_A, 'role': 'admin'}, headers=admin_headers)
    assert response.get_json() == {'success': True, 'message': 'User role updated'}
    with app.app_context():
        assert app.extensions['documents'].get(SHOP_A, 'users', SHOP_A)['role'] == 'admin'

    response = client.put('/api/admin/users', json={'uid': SHOP_A, 'role': 'owner'}, headers=admin_headers)
    assert response.status_code == 400

    response = client.put('/api/admin/users', json={'uid': 'ghost', 'role': 'user'}, headers=admin_headers)
    assert response.status_code == 404


def test_delete_user(app, client, admin_headers):
    seed_account(app, SHOP_A)
    response = client.delete('/api/admin/users', headers=admin_headers)
    assert response.status_code == 400
    assert response.get_json()['errors'] == [{'field': 'uid', 'message': 'Missing uid'}]

    assert client.delete(f'/api/admin/users?uid={SHOP_A}', headers=admin_headers).status_code == 200
    assert client.delete(f'/api/admin/users?uid={SHOP_A}', headers=admin_headers).status_code == 404


def test_create_user(client, admin_headers):
    payload = {'name': 'Ravi', 'email': 'ravi@shopmail.in', 'shopName': 'Ravi Mobiles'}
    response = client.post('/api/admin/users/create', json=payload, headers=admin_headers)
    assert response.status_code == 201
    user = response.get_json()['user']
    assert user['role'] == 'user'
    assert user['uid']

    response = client.post('/api/admin/users/create', json=dict(payload, email='RAVI@shopmail.in'),
                           headers=admin_headers)
    assert response.status_code == 409
    assert response.get_json() == {'error': 'Email already in use'}


def test_subscription_stats_and_update(app, client, admin_headers):
    seed_account(app, SHOP_A, subscription={'planId': 'pro', 'status': 'active'})
    seed_account(app, 'shop-c', subscription={'planId': 'basic', 'status': 'expired'})

    stats = client.get('/api/admin/subscriptions', headers=admin_headers).get_json()
    assert stats['byStatus']['active'] == 1
    assert stats['byStatus']['expired'] == 1
    assert stats['withoutSubscription'] == 1
    assert stats['monthlyRevenue'] == 700

    response = client.put('/api/admin/subscriptions', json={
        'uid': 'shop-c',
        'subscription': {'plan': 'elite', 'status': 'active', 'endDate': '2099-01-01'},
    }, headers=admin_headers)
    assert response.status_code == 200

    subscription = client.get('/api/subscription', headers=tenant_headers('shop-c')).get_json()
    assert subscription['subscription']['planId'] == 'elite'
    assert subscription['isActive'] is True
    assert subscription['features']['maxThemes'] == 20

    response = client.put('/api/admin/subscriptions', json={
        'uid': 'shop-c', 'subscription': {'status': 'paused'},
    }, headers=admin_headers)
    assert response.status_code == 400


def test_dashboard_stats(app, client, admin_headers):
    seed_account(app, SHOP_A)
    client.post('/api/activity', json={'userEmail': 'shop-a@shopmail.in'}, headers=tenant_headers())

    stats = client.get('/api/admin/stats', headers=admin_headers).get_json()
    assert stats['totalUsers'] == 2
    assert stats['newUsersThisMonth'] == 2
    assert stats['loginsThisMonth'] == 1
    assert stats['activeUsers'] == 1
    assert stats['roleDistribution'] == {'admin': 1, 'user': 1}
    assert len(stats['monthlyTrend']) == 12
    assert stats['monthlyTrend'][-1]['logins'] == 1


def test_recent_activity(client, admin_headers):
    for _ in range(3):
        client.post('/api/activity', json={'userEmail': 'a@shopmail.in'}, headers=tenant_headers())

    activities = client.get('/api/admin/activity?limit=2', headers=admin_headers).get_json()['activities']
    assert len(activities) == 2
    assert activities[0]['userId'] == SHOP_A
    assert activities[0]['action'] == 'login'
    assert activities[0]['timestamp'] >= activities[1]['timestamp']
