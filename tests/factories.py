"""Record factories for ledger tests."""

from freight_ledger.data.models import Charge, Expense, Transaction


def txn(transaction_type: str, amount, method: str = "cash", **kwargs) -> Transaction:
    return Transaction(type=transaction_type, amount=amount, payment_method=method, **kwargs)


def expense(amount, method: str = "cash", **kwargs) -> Expense:
    return Expense(amount=amount, payment_method=method, **kwargs)


def charge(amount, charged_to: str = "party", status: str = "paid", **kwargs) -> Charge:
    return Charge(amount=amount, charged_to=charged_to, status=status, **kwargs)
