from datetime import date

import pytest

from conftest import make_expense
from expense_tracker.aggregator import (
    SummaryCache,
    current_month_bounds,
    flatten_expenses,
    monthly_category_totals,
    quick_summary,
    recent_expenses,
)
from expense_tracker.categories import CATEGORIES
from expense_tracker.models import Folder

TODAY = date(2024, 2, 15)


def _folders():
    home = Folder(id=1, name='Home', expenses=(
        make_expense(11, 1, amount=500, category='Rent', when=date(2024, 2, 1)),
        make_expense(12, 1, amount=40, category='Grocery', when=date(2024, 2, 29)),
        make_expense(13, 1, amount=25, category='Grocery', when=date(2024, 1, 31)),
    ))
    trip = Folder(id=2, name='Trip', expenses=(
        make_expense(21, 2, amount=120, category='Travel', when=date(2024, 3, 1)),
        make_expense(22, 2, amount=60, category='Outside Food', when=date(2024, 2, 10)),
        make_expense(23, 2, amount=15, category='Grocery', when=date(2024, 2, 11)),
    ))
    return (home, trip)


def test_flatten_keeps_folder_then_insertion_order():
    flat = flatten_expenses(_folders())

    assert list(flat['id']) == [11, 12, 13, 21, 22, 23]
    assert list(flat['folderName']) == ['Home'] * 3 + ['Trip'] * 3
    assert 'folderId' in flat.columns


def test_flatten_empty_has_columns():
    flat = flatten_expenses([])
    assert flat.empty
    assert 'folderName' in flat.columns


def test_recent_is_first_five_in_insertion_order_not_by_date():
    recent = recent_expenses(flatten_expenses(_folders()))

    assert list(recent['id']) == [11, 12, 13, 21, 22]


def test_current_month_bounds():
    assert current_month_bounds(TODAY) == (date(2024, 2, 1), date(2024, 2, 29))
    assert current_month_bounds(date(2023, 12, 31)) == (date(2023, 12, 1), date(2023, 12, 31))


def test_monthly_totals_include_both_month_endpoints_and_every_category():
    totals = monthly_category_totals(flatten_expenses(_folders()), TODAY)

    assert list(totals.index) == list(CATEGORIES)
    assert totals['Rent'] == pytest.approx(500.0)
    assert totals['Grocery'] == pytest.approx(55.0)  # Feb 29 + Feb 11, not Jan 31
    assert totals['Outside Food'] == pytest.approx(60.0)
    assert totals['Travel'] == 0.0
    assert totals['Healthcare'] == 0.0


def test_monthly_totals_sum_matches_month_total():
    flat = flatten_expenses(_folders())
    totals = monthly_category_totals(flat, TODAY)
    in_month = [
        row.amount for row in flat.itertuples()
        if date(2024, 2, 1) <= row.date <= date(2024, 2, 29)
    ]

    assert totals.sum() == pytest.approx(sum(in_month))


def test_monthly_totals_single_rent_example():
    today = date.today()
    folder = Folder(id=1, name='Home', expenses=(
        make_expense(1, 1, amount=500, category='Rent', when=today.replace(day=1), title='Rent'),
    ))
    totals = monthly_category_totals(flatten_expenses([folder]))

    assert round(totals['Rent'], 2) == 500.00
    assert (totals.drop('Rent') == 0).all()


def test_monthly_totals_ignore_unknown_categories():
    folder = Folder(id=1, name='Old', expenses=(
        make_expense(1, 1, amount=9, category='Legacy', when=TODAY),
    ))
    totals = monthly_category_totals(flatten_expenses([folder]), TODAY)

    assert 'Legacy' not in totals.index
    assert totals.sum() == 0.0


def test_monthly_totals_empty_frame():
    totals = monthly_category_totals(flatten_expenses([]), TODAY)
    assert len(totals) == len(CATEGORIES)
    assert totals.sum() == 0.0


def test_quick_summary_two_folders_example():
    folders = (
        Folder(id=1, name='A', expenses=(make_expense(1, 1, amount=10, category='Rent'),)),
        Folder(id=2, name='B', expenses=(make_expense(2, 2, amount=20, category='Travel'),)),
    )
    summary = quick_summary(folders)

    assert round(summary['total'], 2) == 30.00
    assert summary['category_count'] == 2
    assert summary['folder_count'] == 2
    assert summary['folder_names'] == ['A', 'B']


def test_summary_cache_recomputes_only_after_store_change(store):
    cache = SummaryCache(store)
    first = cache.expenses()
    assert cache.expenses() is first

    folder = store.add_folder('Home')
    store.add_expense(folder.id, make_expense(1, folder.id, amount=12))

    refreshed = cache.expenses()
    assert refreshed is not first
    assert cache.summary()['total'] == pytest.approx(12.0)
    assert cache.monthly_totals().sum() == pytest.approx(12.0)

    cache.close()
    assert cache.summary()['folder_count'] == 1
    store.add_folder('Other')
    # detached cache keeps serving the last computed views
    assert cache.summary()['folder_count'] == 1


def test_summary_cache_memoizes_workbook_until_store_change(store):
    cache = SummaryCache(store)
    first = cache.workbook()
    assert cache.workbook() is first

    folder = store.add_folder('Home')
    store.add_expense(folder.id, make_expense(1, folder.id, amount=12))

    assert cache.workbook() is not first
    assert cache.workbook()[:2] == b'PK'
