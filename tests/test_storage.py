import json
from datetime import date

import pytest

from conftest import make_expense
from expense_tracker.errors import StorageError
from expense_tracker.folder_store import FolderStore
from expense_tracker.models import Folder
from expense_tracker.storage import LocalStorage, load_folders, persist_on_change, save_folders


def test_missing_file_means_no_folders(tmp_path):
    storage = LocalStorage(tmp_path / 'local_storage.json')
    assert load_folders(storage) == ()


def test_save_then_load_round_trip(tmp_path):
    storage = LocalStorage(tmp_path / 'nested' / 'local_storage.json')
    folders = (Folder(id=1, name='Home', expenses=(make_expense(2, 1, when=date(2024, 1, 5)),)),)

    save_folders(folders, storage)

    assert load_folders(storage) == folders
    raw = json.loads((tmp_path / 'nested' / 'local_storage.json').read_text(encoding='utf-8'))
    assert raw['expenseFolders'][0]['expenses'][0]['date'] == '2024-01-05'


def test_other_keys_are_preserved(tmp_path):
    storage = LocalStorage(tmp_path / 'local_storage.json')
    storage.set_item('theme', 'dark')
    save_folders((), storage)

    assert storage.get_item('theme') == 'dark'
    storage.remove_item('theme')
    assert storage.get_item('theme') is None


def test_corrupt_file_raises_storage_error(tmp_path):
    path = tmp_path / 'local_storage.json'
    path.write_text('{oops', encoding='utf-8')

    with pytest.raises(StorageError):
        load_folders(LocalStorage(path))


def test_malformed_folders_raise_storage_error(tmp_path):
    storage = LocalStorage(tmp_path / 'local_storage.json')
    storage.set_item('expenseFolders', [{'name': 'no id'}])

    with pytest.raises(StorageError):
        load_folders(storage)


def test_legacy_records_without_optional_fields_load(tmp_path):
    storage = LocalStorage(tmp_path / 'local_storage.json')
    storage.set_item('expenseFolders', [{
        'id': 1, 'name': 'Home',
        'expenses': [{'id': 2, 'title': 'Rent', 'amount': 500, 'category': 'Rent',
                      'date': '2024-02-01', 'folderId': 1}],
    }])

    expense = load_folders(storage)[0].expenses[0]
    assert expense.tags == ()
    assert expense.payment_method is None


def test_store_changes_are_persisted(tmp_path, id_factory):
    storage = LocalStorage(tmp_path / 'local_storage.json')
    store = FolderStore(id_factory=id_factory)
    store.subscribe(persist_on_change(storage))

    folder = store.add_folder('Home')
    store.add_expense(folder.id, make_expense(5, folder.id))

    assert load_folders(storage) == store.folders
    store.delete_folder(folder.id)
    assert load_folders(storage) == ()


def test_overflowing_id_raises_storage_error(tmp_path):
    path = tmp_path / 'local_storage.json'
    path.write_text('{"expenseFolders": [{"id": 1e999, "name": "x", "expenses": []}]}', encoding='utf-8')

    with pytest.raises(StorageError):
        load_folders(LocalStorage(path))
