import importlib.util
from pathlib import Path

from expense_tracker.folder_store import FolderStore

PAGE_PATH = Path(__file__).resolve().parents[1] / 'expense_tracker' / 'pages' / '1_📁_Folders.py'


def _load_page_module():
    spec = importlib.util.spec_from_file_location('folders_page_test', PAGE_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_submit_rename_leaves_rename_mode():
    module = _load_page_module()
    store = FolderStore(id_factory=lambda: 1)
    folder = store.add_folder('Home')
    state = {module.RENAME_KEY: folder.id}

    assert module._submit_rename(store, state, folder.id, 'Flat') is True
    assert store.get_folder(folder.id).name == 'Flat'
    assert module.RENAME_KEY not in state


def test_blank_rename_keeps_rename_mode():
    module = _load_page_module()
    store = FolderStore(id_factory=lambda: 1)
    folder = store.add_folder('Home')
    state = {module.RENAME_KEY: folder.id}

    assert module._submit_rename(store, state, folder.id, '  ') is False
    assert state[module.RENAME_KEY] == folder.id
    assert store.get_folder(folder.id).name == 'Home'
