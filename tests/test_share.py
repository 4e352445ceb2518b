import base64
import json
import logging
from datetime import date
from urllib.parse import parse_qs, urlsplit

import pytest

from conftest import make_expense
from expense_tracker.errors import ShareLinkError
from expense_tracker.folder_store import FolderStore
from expense_tracker.models import Folder
from expense_tracker.share import (
    build_share_link,
    decode_snapshot,
    encode_snapshot,
    load_shared_state,
)


def _folders():
    return (
        Folder(id=1700000000000, name='Home', expenses=(
            make_expense(1700000000001, 1700000000000, amount=500, category='Rent',
                         when=date(2024, 3, 1), description='March', payment_method='UPI',
                         tags=('monthly',)),
        )),
        Folder(id=1700000000100, name='Café trip ☕', expenses=()),
    )


def test_round_trip_reproduces_identical_folders():
    snapshot = decode_snapshot(encode_snapshot(_folders()))

    assert snapshot.folders == _folders()
    assert snapshot.expenses[0]['folderName'] == 'Home'


def test_payload_is_base64_json_with_folders_and_expenses():
    payload = json.loads(base64.b64decode(encode_snapshot(_folders())).decode('utf-8'))

    assert set(payload) == {'folders', 'expenses'}
    assert payload['folders'][0]['expenses'][0]['folderId'] == 1700000000000
    assert payload['expenses'][0]['paymentMethod'] == 'UPI'


def test_share_link_replaces_query_and_round_trips():
    link = build_share_link('http://localhost:8501/Folders?foo=bar', _folders())
    parts = urlsplit(link)

    assert parts.path == '/Folders'
    params = parse_qs(parts.query)
    assert list(params) == ['shared']
    assert decode_snapshot(params['shared'][0]).folders == _folders()


def test_decode_tolerates_plus_signs_turned_into_spaces():
    # six ">" bytes always contain an aligned triple, which encodes as "Pj4+"
    encoded = encode_snapshot((Folder(id=5, name=">>>>>>", expenses=()),))
    assert "+" in encoded
    mangled = encoded.replace('+', ' ')

    assert decode_snapshot(mangled).folders == decode_snapshot(encoded).folders


@pytest.mark.parametrize('payload', [
    '',
    'not base64!!',
    base64.b64encode(b'{not json').decode(),
    base64.b64encode(b'[]').decode(),
    base64.b64encode(json.dumps({'folders': []}).encode()).decode(),
    base64.b64encode(json.dumps({'folders': [{'id': 1}], 'expenses': []}).encode()).decode(),
])
def test_decode_rejects_malformed_payloads(payload):
    with pytest.raises(ShareLinkError):
        decode_snapshot(payload)


def test_decode_rejects_dangling_folder_reference():
    folders = [{'id': 1, 'name': 'A', 'expenses': [
        {'id': 2, 'title': 't', 'amount': 1, 'category': 'Rent', 'date': '2024-01-01', 'folderId': 9},
    ]}]
    payload = base64.b64encode(json.dumps({'folders': folders, 'expenses': []}).encode()).decode()
    with pytest.raises(ShareLinkError):
        decode_snapshot(payload)


def test_load_shared_state_replaces_store():
    store = FolderStore([Folder(id=1, name='Mine')])

    loaded = load_shared_state(store, {'shared': encode_snapshot(_folders())})

    assert loaded is True
    assert store.folders == _folders()


def test_load_shared_state_without_param_is_noop():
    store = FolderStore([Folder(id=1, name='Mine')])
    assert load_shared_state(store, {}) is False
    assert store.folders[0].name == 'Mine'


def test_malformed_shared_state_is_logged_and_ignored(caplog):
    store = FolderStore([Folder(id=1, name='Mine')])
    seen = []
    store.subscribe(seen.append)

    with caplog.at_level(logging.ERROR, logger='expense_tracker.share'):
        loaded = load_shared_state(store, {'shared': ['garbage%%%']})

    assert loaded is False
    assert store.folders[0].name == 'Mine'
    assert seen == []
    assert 'Error loading shared data' in caplog.text


def _payload(folders):
    return base64.b64encode(json.dumps({'folders': folders, 'expenses': []}).encode()).decode()


def _expense_record(expense_id, amount=1, category='Rent', **extra):
    record = {'id': expense_id, 'title': 't', 'amount': amount, 'category': category,
              'date': '2024-01-01', 'folderId': 1}
    record.update(extra)
    return record


@pytest.mark.parametrize('payload', [
    base64.b64encode(b'{"folders":[{"id":1e999,"name":"x","expenses":[]}],"expenses":[]}').decode(),
    base64.b64encode(b'{"folders":' + b'[' * 100000).decode(),
])
def test_decode_wraps_overflow_and_deep_nesting(payload):
    with pytest.raises(ShareLinkError):
        decode_snapshot(payload)


def test_overflowing_and_deeply_nested_links_leave_store_untouched(caplog):
    store = FolderStore([Folder(id=1, name='Mine')])
    links = [
        base64.b64encode(b'{"folders":[{"id":1e999,"name":"x","expenses":[]}],"expenses":[]}').decode(),
        base64.b64encode(b'{"folders":' + b'[' * 100000).decode(),
    ]

    with caplog.at_level(logging.ERROR, logger='expense_tracker.share'):
        results = [load_shared_state(store, {'shared': link}) for link in links]

    assert results == [False, False]
    assert store.folders == (Folder(id=1, name='Mine'),)
    assert caplog.text.count('Error loading shared data') == 2


@pytest.mark.parametrize('records', [
    [_expense_record(2), _expense_record(2, title='again')],
    [_expense_record(2, amount=-5)],
    [_expense_record(2, amount=float('nan'))],
    [_expense_record(2, category='Nope')],
    [_expense_record(2, paymentMethod='Cheque')],
])
def test_decode_rejects_records_the_form_would_reject(records):
    with pytest.raises(ShareLinkError):
        decode_snapshot(_payload([{'id': 1, 'name': 'A', 'expenses': records}]))


def test_decode_rejects_expense_id_repeated_across_folders():
    folders = [
        {'id': 1, 'name': 'A', 'expenses': [_expense_record(2)]},
        {'id': 3, 'name': 'B', 'expenses': [_expense_record(2, folderId=3)]},
    ]
    with pytest.raises(ShareLinkError):
        decode_snapshot(_payload(folders))
