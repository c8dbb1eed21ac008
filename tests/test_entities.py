import json

import pytest

from cofoodie.models import (
    AdminAccount,
    Announcement,
    Employee,
    MenuCategory,
    MenuConfig,
    MenuOption,
    Order,
    OrderItem,
    OrderStatus,
)


ORDER_RECORD = {
    'id': '1704096000000',
    'employeeName': '王小明',
    'items': [
        {'id': 'i1', 'name': '排骨飯', 'note': '不要辣', 'price': 100},
        {'id': 'i2', 'name': '紅茶', 'note': '', 'price': 20},
    ],
    'totalAmount': 120,
    'timestamp': 1704096000000,
    'status': 'PENDING',
    'dateStr': '2024-01-01',
    'categoryLabel': '訂餐',
    'isPaid': False,
}

MENU_RECORD = {
    'id': 'MENU_1',
    'label': '訂飲料',
    'config': {
        'imageUrl': 'https://example.com/menu.png',
        'shopName': '五桐號',
        'date': '2024-01-01',
        'cutoffTime': '14:00',
        'options': [{'id': 'drink_1', 'label': '紅茶', 'price': 20}],
    },
}


@pytest.mark.parametrize('cls, record', [
    (Order, ORDER_RECORD),
    (MenuCategory, MENU_RECORD),
    (Employee, {'id': '1', 'name': '李美華'}),
    (Announcement, {'id': '1', 'content': '今日下午茶', 'isActive': False}),
    (AdminAccount, {'id': 'a1', 'username': 'amy', 'password': 'pw', 'name': 'Amy', 'isSuperAdmin': False}),
])
def test_record_survives_decode_and_encode(cls, record):
    assert cls.from_dict(record).to_dict() == record
    # ida y vuelta por el texto que realmente se guarda
    assert cls.from_dict(json.loads(json.dumps(cls.from_dict(record).to_dict()))).to_dict() == record


def test_order_optional_fields_are_omitted_when_unset():
    order = Order(id='1', employee_name='王小明', date_str='2024-01-01')
    data = order.to_dict()
    assert 'categoryLabel' not in data
    assert 'isPaid' not in data
    assert Order.from_dict(data) == order


def test_order_parses_status_and_items():
    order = Order.from_dict(ORDER_RECORD)
    assert order.status is OrderStatus.PENDING
    assert order.items[0] == OrderItem(id='i1', name='排骨飯', note='不要辣', price=100)
    assert order.paid is False


def test_unknown_status_is_kept_verbatim():
    record = dict(ORDER_RECORD, status='REFUNDED')
    order = Order.from_dict(record)
    assert order.status == 'REFUNDED'
    assert order.to_dict() == record


@pytest.mark.parametrize('cls, record', [
    (Order, dict(ORDER_RECORD, source='kiosk')),
    (OrderItem, {'id': 'i1', 'name': '排骨飯', 'note': '', 'price': 100, 'spicy': 2}),
    (MenuCategory, dict(MENU_RECORD, pinned=True)),
    (MenuConfig, dict(MENU_RECORD['config'], theme='dark')),
    (MenuOption, {'id': 'o1', 'label': '雞腿飯', 'price': 110, 'soldOut': True}),
    (Employee, {'id': '1', 'name': '李美華', 'dept': 'ops'}),
    (Announcement, {'id': '1', 'content': '今日下午茶', 'isActive': True, 'color': 'red'}),
    (AdminAccount, {
        'id': 'a1', 'username': 'amy', 'password': 'pw', 'name': 'Amy',
        'isSuperAdmin': False, 'lastLogin': 1704096000000,
    }),
])
def test_unknown_keys_are_preserved(cls, record):
    assert cls.from_dict(record).to_dict() == record


def test_total_amount_is_not_recomputed_from_items():
    record = dict(ORDER_RECORD, totalAmount=999)
    assert Order.from_dict(record).to_dict()['totalAmount'] == 999


def test_menu_config_without_optional_fields():
    config = MenuConfig(image_url='x.png', shop_name='阿嬤', date='2024-01-02')
    assert config.to_dict() == {'imageUrl': 'x.png', 'shopName': '阿嬤', 'date': '2024-01-02'}
    with_options = MenuConfig(options=[MenuOption(id='o1', label='雞腿飯', price=110)])
    assert with_options.to_dict()['options'] == [{'id': 'o1', 'label': '雞腿飯', 'price': 110}]
