"""
Variable store for #id references

Maps non-negative integer ids to float values. Reading an id that was never
written yields 0.0. Values may be written by assignment expressions or by an
external real-time source between lines (see VariableStore.update).
"""

from typing import Dict, Iterator, Mapping, Optional
import logging


logger = logging.getLogger(__name__)

DEFAULT_VALUE = 0.0


class VariableStore:
    """Integer-keyed store of float values"""

    def __init__(self, initial: Optional[Mapping[int, float]] = None):
        self._values: Dict[int, float] = {}
        if initial:
            self.update(initial)

    def get(self, var_id: int) -> float:
        """Value of #var_id, 0.0 when unset"""
        return self._values.get(var_id, DEFAULT_VALUE)

    def set(self, var_id: int, value: float) -> float:
        """Store value under #var_id, replacing any previous value"""
        _check_id(var_id)
        value = float(value)
        self._values[var_id] = value
        logger.debug("#%d = %r", var_id, value)
        return value

    def update(self, values: Mapping[int, float]):
        """Write several values at once (real-time feed)"""
        for var_id, value in values.items():
            self.set(var_id, value)

    def clear(self):
        self._values.clear()

    def snapshot(self) -> Dict[int, float]:
        """Copy of all set values"""
        return dict(self._values)

    def __contains__(self, var_id: object) -> bool:
        return var_id in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._values))

    def __repr__(self) -> str:
        return f"VariableStore({self._values!r})"


def _check_id(var_id: int):
    if isinstance(var_id, bool) or not isinstance(var_id, int) or var_id < 0:
        raise ValueError(f"Variable id must be a non-negative integer, got {var_id!r}")


__all__ = ['VariableStore', 'DEFAULT_VALUE']
