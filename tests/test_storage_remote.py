import json

import pytest

from cofoodie.app_container import AppContainer
from cofoodie.config import Settings
from cofoodie.models import AdminAccount, Employee, Order, OrderItem, OrderStatus, SessionRole
from cofoodie.repositories import RemoteStorageBackend
from cofoodie.services import DuplicateUsernameError

from conftest import ENDPOINT_URL, BrokenSession, StaticSession


def make_order(order_id, date_str='2024-01-01', label='訂餐'):
    return Order(
        id=order_id,
        employee_name='李美華',
        items=[OrderItem(id=f'{order_id}-1', name='雞腿飯', note='', price=110)],
        total_amount=110,
        timestamp=1,
        status=OrderStatus.PENDING,
        date_str=date_str,
        category_label=label,
    )


def sent_actions(http_session):
    return [json.loads(body.decode('utf-8'))['action'] for body in http_session.calls]


def offline_storage(tmp_path, session):
    settings = Settings(script_url=ENDPOINT_URL, data_dir=str(tmp_path / 'offline'))
    return AppContainer(settings, http_session=session).storage


# =========================================================================
# OPERACIONES CONTRA EL ENDPOINT
# =========================================================================

def test_remote_backend_is_selected(remote_container, remote_storage):
    assert isinstance(remote_container.backend, RemoteStorageBackend)
    assert remote_storage.use_cloud


def test_fresh_endpoint_is_empty(remote_storage):
    assert remote_storage.get_orders() == []
    assert remote_storage.get_employees() == []
    assert remote_storage.get_admin_accounts() == []


def test_save_order_uses_append_action(remote_storage, http_session):
    order = make_order('1')
    remote_storage.save_order(order)
    assert sent_actions(http_session) == ['SAVE_ORDER']
    assert remote_storage.get_orders() == [order]


def test_updates_replace_whole_collection(remote_storage, http_session):
    remote_storage.save_employees([Employee('1', 'A'), Employee('2', 'B')])
    remote_storage.update_employee(Employee('2', 'B2'))
    remote_storage.delete_employee('1')

    assert [(e.id, e.name) for e in remote_storage.get_employees()] == [('2', 'B2')]
    assert 'UPDATE_ALL_EMPLOYEES' in sent_actions(http_session)


def test_delete_orders_by_context_over_endpoint(remote_storage):
    keep = make_order('2', '2024-01-01', '訂飲料')
    remote_storage.save_order(make_order('1', '2024-01-01', '訂餐'))
    remote_storage.save_order(keep)

    remote_storage.delete_orders_by_context('2024-01-01', '訂餐')

    assert remote_storage.get_orders() == [keep]


def test_toggle_payment_over_endpoint(remote_storage):
    remote_storage.save_order(make_order('1'))
    remote_storage.toggle_order_payment('1')
    assert remote_storage.get_orders()[0].is_paid is True


def test_duplicate_admin_over_endpoint(remote_storage):
    remote_storage.add_admin_account(AdminAccount('1', 'amy', 'pw', 'Amy'))
    with pytest.raises(DuplicateUsernameError):
        remote_storage.add_admin_account(AdminAccount('2', 'amy', 'pw2', 'Amy 2'))
    assert [a.id for a in remote_storage.get_admin_accounts()] == ['1']


def test_frontend_password_merges_config(remote_storage, client, http_session):
    body = json.dumps({'action': 'UPDATE_CONFIG', 'data': {'theme': 'dark'}})
    client.post('/', data=body, headers={'Content-Type': 'text/plain'})

    assert remote_storage.get_frontend_password() == '24664941'
    remote_storage.set_frontend_password('5555')

    assert remote_storage.get_frontend_password() == '5555'
    assert remote_storage.get_config() == {'theme': 'dark', 'frontendPassword': '5555'}
    assert 'UPDATE_CONFIG' in sent_actions(http_session)


def test_admin_settings_are_fixed_in_cloud_mode(remote_storage):
    remote_storage.set_google_bound(False)
    settings = remote_storage.get_admin_settings()
    assert settings.is_google_bound is True
    assert settings.google_account_name == 'Cloud Mode'


def test_session_never_reaches_endpoint(remote_storage, http_session):
    remote_storage.set_session(SessionRole.ADMIN, 'sysop')
    assert remote_storage.get_session().user_id == 'sysop'
    assert http_session.calls == []


def test_check_connection_against_live_endpoint(remote_storage):
    assert remote_storage.check_database_connection() is True


# =========================================================================
# FALLOS DEL ENDPOINT
# =========================================================================

def test_unreachable_endpoint_reads_as_empty(tmp_path):
    storage = offline_storage(tmp_path, BrokenSession())
    assert storage.get_orders() == []
    assert storage.get_config() == {}
    assert storage.get_frontend_password() == '24664941'
    assert storage.check_database_connection() is False


def test_unreachable_endpoint_writes_do_not_raise(tmp_path):
    storage = offline_storage(tmp_path, BrokenSession())
    storage.save_order(make_order('1'))
    storage.save_employees([Employee('1', 'A')])


def test_http_error_status_reads_as_empty(tmp_path):
    storage = offline_storage(tmp_path, StaticSession(500, 'Internal Server Error'))
    assert storage.get_employees() == []
    assert storage.check_database_connection() is False


def test_non_json_response_counts_as_success(tmp_path):
    backend = RemoteStorageBackend(ENDPOINT_URL, session=StaticSession(200, '<html>ok</html>'))
    assert backend.api_call('SAVE_ORDER', {}) == {'success': True}
    assert backend.load_collection('orders') == []


def test_error_payload_reads_as_empty(tmp_path):
    error = json.dumps({'status': 'error', 'message': 'Unknown Action: X'})
    storage = offline_storage(tmp_path, StaticSession(200, error))
    assert storage.get_orders() == []
    assert storage.get_config() == {}
