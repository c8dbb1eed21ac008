import json
import threading

from cofoodie.repositories import SheetRepository
from cofoodie.services import EndpointService
from cofoodie.services.endpoint_service import HEALTH_TEXT


def post_action(client, action, data=None):
    body = json.dumps({'action': action, 'data': data}, ensure_ascii=False)
    r = client.post('/', data=body.encode('utf-8'), headers={'Content-Type': 'text/plain;charset=utf-8'})
    assert r.status_code == 200
    return r.get_json()


def test_health_text(client):
    r = client.get('/')
    assert r.status_code == 200
    assert r.get_data(as_text=True) == HEALTH_TEXT


def test_empty_workbook_returns_all_collections(client):
    data = post_action(client, 'GET_ALL_DATA')
    assert data == {
        'orders': [],
        'menus': [],
        'employees': [],
        'announcements': [],
        'admins': [],
        'config': {},
    }


def test_unknown_action_returns_error_payload(client):
    assert post_action(client, 'DROP_EVERYTHING') == {
        'status': 'error',
        'message': 'Unknown Action: DROP_EVERYTHING',
    }


def test_malformed_body_returns_error_payload_with_200(client):
    r = client.post('/', data=b'{not json', headers={'Content-Type': 'text/plain'})
    assert r.status_code == 200
    assert r.get_json()['status'] == 'error'


def test_save_order_appends_row_with_readable_columns(client, endpoint_container):
    order = {
        'id': '1', 'employeeName': '王小明', 'items': [], 'totalAmount': 120,
        'timestamp': 1, 'status': 'PENDING', 'dateStr': '2024-01-01',
        'categoryLabel': '訂餐', 'isPaid': True,
    }
    assert post_action(client, 'SAVE_ORDER', order) == {'success': True}

    rows = endpoint_container.sheet_repo.get_rows('Orders')
    assert len(rows) == 1
    assert json.loads(rows[0][0]) == order
    assert rows[0][1:] == ['2024-01-01', '王小明', '訂餐', 120, 'PENDING', 'Paid']
    assert post_action(client, 'GET_ALL_DATA')['orders'] == [order]


def test_replace_collection_overwrites_sheet(client):
    post_action(client, 'UPDATE_ALL_EMPLOYEES', [{'id': '1', 'name': 'A'}, {'id': '2', 'name': 'B'}])
    post_action(client, 'UPDATE_ALL_EMPLOYEES', [{'id': '2', 'name': 'B'}])
    assert post_action(client, 'GET_ALL_DATA')['employees'] == [{'id': '2', 'name': 'B'}]

    post_action(client, 'UPDATE_ALL_EMPLOYEES', [])
    assert post_action(client, 'GET_ALL_DATA')['employees'] == []


def test_update_config_replaces_whole_map(client):
    post_action(client, 'UPDATE_CONFIG', {'frontendPassword': '1111', 'theme': 'dark'})
    post_action(client, 'UPDATE_CONFIG', {'frontendPassword': '2222'})
    assert post_action(client, 'GET_ALL_DATA')['config'] == {'frontendPassword': '2222'}


def test_readable_columns_are_never_read_back(client, endpoint_container):
    post_action(client, 'UPDATE_ALL_MENUS', [{'id': 'M1', 'label': '訂餐', 'config': {'shopName': '阿嬤'}}])
    repo = endpoint_container.sheet_repo
    row = repo.get_rows('Menus')[0]
    assert row[1:] == ['訂餐', '阿嬤']

    repo.replace_rows('Menus', [[row[0], 'edited by hand', 'ignored']])
    assert post_action(client, 'GET_ALL_DATA')['menus'] == [
        {'id': 'M1', 'label': '訂餐', 'config': {'shopName': '阿嬤'}}
    ]


def test_unparseable_rows_are_skipped(client, endpoint_container):
    endpoint_container.sheet_repo.ensure_sheets(['Announcements'])
    endpoint_container.sheet_repo.replace_rows('Announcements', [
        ['garbage'],
        [json.dumps({'id': '1', 'content': 'ok', 'isActive': True})],
        [],
    ])
    assert post_action(client, 'GET_ALL_DATA')['announcements'] == [
        {'id': '1', 'content': 'ok', 'isActive': True}
    ]


def test_concurrent_writes_to_different_collections_do_not_interleave(tmp_path):
    repo = SheetRepository(str(tmp_path / 'workbook.json'))
    service = EndpointService(repo, lock_timeout=30)

    inside = []
    overlaps = []
    guard = threading.Lock()
    original_replace = repo.replace_rows

    def tracking_replace(sheet, rows):
        with guard:
            if inside:
                overlaps.append((inside[0], sheet))
            inside.append(sheet)
        try:
            original_replace(sheet, rows)
        finally:
            with guard:
                inside.remove(sheet)

    repo.replace_rows = tracking_replace

    results = []

    def writer(action, payload):
        for _ in range(10):
            results.append(service.handle_raw(json.dumps({'action': action, 'data': payload})))

    threads = [
        threading.Thread(target=writer, args=('UPDATE_ALL_EMPLOYEES', [{'id': '1', 'name': 'A'}])),
        threading.Thread(target=writer, args=('UPDATE_ALL_ORDERS', [{'id': 'o1', 'dateStr': '2024-01-01'}])),
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert overlaps == []
    assert results == [{'success': True}] * 20
    data = service.handle_raw(json.dumps({'action': 'GET_ALL_DATA'}))
    assert data['employees'] == [{'id': '1', 'name': 'A'}]
    assert data['orders'] == [{'id': 'o1', 'dateStr': '2024-01-01'}]


def test_non_object_request_is_an_error(tmp_path):
    service = EndpointService(SheetRepository(str(tmp_path / 'wb.json')))
    assert service.handle_raw('[1, 2, 3]')['status'] == 'error'
