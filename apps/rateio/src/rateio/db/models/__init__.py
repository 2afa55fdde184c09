"""ORM models for the rateio domain."""

from rateio.db.models.expense import (
    Expense,
    ExpensePaidFor,
    ExpenseSubItem,
    ExpenseSubItemPaidFor,
    LeaseBuyInPayment,
)
from rateio.db.models.group import Group
from rateio.db.models.participant import Participant

__all__ = [
    "Expense",
    "ExpensePaidFor",
    "ExpenseSubItem",
    "ExpenseSubItemPaidFor",
    "Group",
    "LeaseBuyInPayment",
    "Participant",
]
