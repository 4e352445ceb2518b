"""Expense Editor - turn raw form input into an ``Expense``.

The Streamlit form collects plain strings; :func:`build_expense` is the only
place they are validated and converted.  Editing keeps the original ``id``
and ``folderId`` and replaces everything else.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, List, Optional, Union

from .categories import is_category, is_payment_method
from .errors import ValidationError
from .models import Expense, clean_tags, new_id, parse_date

REQUIRED_FIELDS = ('title', 'amount', 'category', 'date')


@dataclass
class ExpenseForm:
    """Raw values as entered in the expense form."""
    title: str = ''
    amount: Union[str, float, int, None] = ''
    category: str = ''
    date: Union[str, date, None] = None
    description: str = ''
    payment_method: str = ''
    tags: str = ''

    @classmethod
    def blank(cls, today: Optional[date] = None) -> 'ExpenseForm':
        return cls(date=today or date.today())

    @classmethod
    def from_expense(cls, expense: Expense) -> 'ExpenseForm':
        return cls(
            title=expense.title,
            amount=expense.amount,
            category=expense.category,
            date=expense.date,
            description=expense.description or '',
            payment_method=expense.payment_method or '',
            tags=', '.join(expense.tags),
        )


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def missing_fields(form: ExpenseForm) -> List[str]:
    """Return the required fields left empty, in form order."""
    return [name for name in REQUIRED_FIELDS if _is_blank(getattr(form, name))]


def parse_amount(value: Union[str, float, int]) -> float:
    """Parse a decimal amount; negative and non-finite values are rejected."""
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"Amount must be a number, got {value!r}", ['amount']) from None
    if not amount.is_finite():
        raise ValidationError(f"Amount must be a number, got {value!r}", ['amount'])
    if amount < 0:
        raise ValidationError("Amount cannot be negative", ['amount'])
    return float(amount)


def build_expense(
    form: ExpenseForm,
    folder_id: int,
    editing: Optional[Expense] = None,
    id_factory: Callable[[], int] = new_id,
) -> Expense:
    """Validate ``form`` and produce a new expense or the edited replacement.

    Raises:
        ValidationError: if a required field is empty or a value is invalid.
            ``error.fields`` names the offending fields.
    """
    missing = missing_fields(form)
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}", missing)

    amount = parse_amount(form.amount)
    category = form.category.strip()
    if not is_category(category):
        raise ValidationError(f"Unknown category {form.category!r}", ['category'])
    payment_method = (form.payment_method or '').strip() or None
    if payment_method is not None and not is_payment_method(payment_method):
        raise ValidationError(f"Unknown payment method {form.payment_method!r}", ['payment_method'])
    try:
        expense_date = parse_date(form.date)
    except ValueError:
        raise ValidationError(f"Invalid date {form.date!r}", ['date']) from None

    if editing is not None:
        expense_id, owner = editing.id, editing.folder_id
    else:
        expense_id, owner = id_factory(), folder_id

    return Expense(
        id=expense_id,
        title=form.title.strip(),
        amount=amount,
        category=category,
        date=expense_date,
        folder_id=owner,
        description=(form.description or '').strip() or None,
        payment_method=payment_method,
        tags=clean_tags(form.tags),
    )
