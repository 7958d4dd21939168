"""
Unit of Work: chạy nhiều bước ghi DB trong đúng 1 transaction.

    unit_of_work('default',
        lambda: ledger.debit(...),
        lambda: purchases.record_purchase(...),
    )

Bước nào raise exception thì toàn bộ các bước trước đó bị rollback.
"""

from django.db import transaction


def unit_of_work(using, *steps):
    """
    Chạy lần lượt các callable trong 1 transaction.atomic().

    Returns:
        list: kết quả của từng bước, theo thứ tự
    """
    with transaction.atomic(using=using):
        return [step() for step in steps]
