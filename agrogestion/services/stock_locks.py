import threading
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List


class StockLockRegistry:
    """
    Un lock por producto. Los locks de una venta se toman en orden de id
    para que dos ventas con productos cruzados no se bloqueen mutuamente.
    """

    def __init__(self):
        self._locks: Dict[int, threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, product_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(product_id)
            if lock is None:
                lock = self._locks[product_id] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, product_ids: Iterable[int]) -> Iterator[None]:
        acquired: List[threading.Lock] = []
        try:
            for product_id in sorted(set(product_ids)):
                lock = self._lock_for(product_id)
                lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()


stock_locks = StockLockRegistry()
