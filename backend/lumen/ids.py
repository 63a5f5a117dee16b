"""
Geradores de identificadores inteiros para as entidades do armazenamento.
"""

import threading
import time
from typing import Callable

IdGenerator = Callable[[], int]


class TimestampIdGenerator:
    """
    Gera ids a partir do timestamp atual em milissegundos.

    Dois ids pedidos no mesmo milissegundo não colidem: o gerador devolve
    sempre um valor estritamente maior que o anterior.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            candidate = int(self._clock() * 1000)
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return candidate
