from models import db
from models.cart import CartItem
from app.version import API_PREFIX


def add(client, headers, book_id, quantity=1):
    return client.post(f"{API_PREFIX}/cart/add", json={'book_id': book_id, 'quantity': quantity}, headers=headers)


def test_add_merges_into_single_row(client, auth_headers, make_book):
    headers = auth_headers()
    book_id = make_book(stock_quantity=10)
    assert add(client, headers, book_id, 2).status_code == 200
    assert add(client, headers, book_id, 3).status_code == 200
    resp = add(client, headers, book_id, 4)
    assert resp.get_json()['data']['quantity'] == 9

    rows = CartItem.query.filter_by(book_id=book_id).all()
    assert len(rows) == 1
    assert rows[0].quantity == 9


def test_add_beyond_stock_leaves_cart_unchanged(client, auth_headers, make_book):
    headers = auth_headers()
    book_id = make_book(stock_quantity=5)
    add(client, headers, book_id, 4)
    resp = add(client, headers, book_id, 2)
    assert resp.status_code == 409
    body = resp.get_json()
    assert body['code'] == 'insufficient_stock'
    assert 'Dune' in body['message']
    assert CartItem.query.one().quantity == 4


def test_add_single_request_beyond_stock(client, auth_headers, make_book):
    headers = auth_headers()
    book_id = make_book(stock_quantity=1)
    resp = add(client, headers, book_id, 2)
    assert resp.status_code == 409
    assert CartItem.query.count() == 0


def test_add_unknown_book(client, auth_headers):
    resp = add(client, auth_headers(), 4242)
    assert resp.status_code == 404
    assert resp.get_json()['code'] == 'not_found'


def test_add_rejects_non_positive_quantity(client, auth_headers, make_book):
    book_id = make_book()
    resp = add(client, auth_headers(), book_id, 0)
    assert resp.status_code == 400
    assert CartItem.query.count() == 0


def test_get_cart_includes_books(client, auth_headers, make_book):
    headers = auth_headers()
    first = make_book(title='Dune')
    second = make_book(title='Emma')
    add(client, headers, first, 1)
    add(client, headers, second, 2)
    data = client.get(f"{API_PREFIX}/cart", headers=headers).get_json()['data']
    assert [(ci['book']['title'], ci['quantity']) for ci in data] == [('Dune', 1), ('Emma', 2)]


def test_update_quantity(client, auth_headers, make_book):
    headers = auth_headers()
    book_id = make_book(stock_quantity=3)
    item_id = add(client, headers, book_id, 1).get_json()['data']['id']

    resp = client.post(f"{API_PREFIX}/cart/update", json={'cart_item_id': item_id, 'quantity': 3}, headers=headers)
    assert resp.status_code == 200
    assert db.session.get(CartItem, item_id).quantity == 3

    resp = client.post(f"{API_PREFIX}/cart/update", json={'cart_item_id': item_id, 'quantity': 4}, headers=headers)
    assert resp.status_code == 409
    db.session.expire_all()
    assert db.session.get(CartItem, item_id).quantity == 3


def test_remove_is_idempotent(client, auth_headers, make_book):
    headers = auth_headers()
    item_id = add(client, headers, make_book(), 1).get_json()['data']['id']

    first = client.post(f"{API_PREFIX}/cart/remove", json={'cart_item_id': item_id}, headers=headers)
    assert first.get_json()['data'] == {'removed': True}
    assert db.session.get(CartItem, item_id) is None

    second = client.post(f"{API_PREFIX}/cart/remove", json={'cart_item_id': item_id}, headers=headers)
    assert second.status_code == 200
    assert second.get_json()['data'] == {'removed': False}
    assert db.session.get(CartItem, item_id) is None


def test_cart_lines_are_private(client, auth_headers, make_book):
    owner = auth_headers('owner@example.com')
    other = auth_headers('other@example.com')
    item_id = add(client, owner, make_book(), 1).get_json()['data']['id']

    resp = client.post(f"{API_PREFIX}/cart/update", json={'cart_item_id': item_id, 'quantity': 2}, headers=other)
    assert resp.status_code == 404
    resp = client.post(f"{API_PREFIX}/cart/remove", json={'cart_item_id': item_id}, headers=other)
    assert resp.get_json()['data'] == {'removed': False}
    assert client.get(f"{API_PREFIX}/cart", headers=other).get_json()['data'] == []
    assert db.session.get(CartItem, item_id).quantity == 1
