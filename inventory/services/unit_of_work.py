from django.db import transaction

from inventory.services.ledger import MovementLedger
from inventory.services.stock import StockRepository


class UnitOfWork:
    """One atomic scope shared by the stock repository and the movement ledger.

    Usage:
        with UnitOfWork() as uow:
            uow.stock.adjust_stock(product.pk, -2)
            uow.ledger.append(...)

    Entering the same UnitOfWork again (an engine called from inside another
    use case) opens a savepoint, so the outer scope still commits or rolls
    back everything together.
    """

    def __init__(self, stock=None, ledger=None):
        self.stock = stock or StockRepository()
        self.ledger = ledger or MovementLedger()
        self._blocks = []

    def __enter__(self):
        block = transaction.atomic()
        block.__enter__()
        self._blocks.append(block)
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        block = self._blocks.pop()
        return block.__exit__(exc_type, exc_value, traceback)

    def on_commit(self, func):
        transaction.on_commit(func)
