from typing import Hashable, Optional


class KeyedTrigger:
    """Fires once per distinct key value.

    ``fire(key)`` returns True the first time it sees ``key`` after a
    different one (or after ``reset``), and False for repeats.
    """

    _UNSET = object()

    def __init__(self):
        self._current = self._UNSET

    @property
    def current(self) -> Optional[Hashable]:
        return None if self._current is self._UNSET else self._current

    def fire(self, key: Hashable) -> bool:
        if self._current is not self._UNSET and self._current == key:
            return False
        self._current = key
        return True

    def reset(self) -> None:
        self._current = self._UNSET
