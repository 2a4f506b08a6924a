# tests/test_permissions.py
import pytest

from app.models import Caller
from app.utils.errors import Forbidden, Unauthorized
from app.utils.permissions import authorize, enforce


class Anonymous:
    is_authenticated = False


def test_missing_caller_is_unauthenticated():
    assert authorize(None, 'read', 'shop-a').reason == 'unauthenticated'
    assert authorize(Anonymous(), 'read', 'shop-a').reason == 'unauthenticated'


def test_owner_may_act_on_own_tenant():
    decision = authorize(Caller('shop-a'), 'read', 'shop-a')
    assert decision.allowed
    assert decision.reason == 'owner'


def test_other_tenant_is_forbidden():
    decision = authorize(Caller('shop-a'), 'read', 'shop-b')
    assert not decision.allowed
    assert decision.reason == 'forbidden'


def test_admin_only_for_admin_actions():
    admin = Caller('admin-1', role='admin', via='token')
    assert authorize(admin, 'list_accounts', None) == (True, 'admin')
    assert authorize(admin, 'change_role', 'shop-b').allowed
    # Admins get no blanket access to another shop's documents
    assert not authorize(admin, 'read', 'shop-b').allowed


def test_user_cannot_take_admin_actions():
    assert not authorize(Caller('shop-a', via='token'), 'view_stats', None).allowed


def test_enforce_maps_decisions_to_errors():
    enforce(authorize(Caller('shop-a'), 'read', 'shop-a'))
    with pytest.raises(Unauthorized):
        enforce(authorize(None, 'read', 'shop-a'))
    with pytest.raises(Forbidden):
        enforce(authorize(Caller('shop-a'), 'read', 'shop-b'))


def test_caller_from_account_defaults_role():
    caller = Caller.from_account('shop-a', None)
    assert caller.role == 'user'
    assert not caller.is_admin
    assert not caller.has_token
    assert caller.get_id() == 'shop-a'
