# (C) 2024 Irreducible Inc.

from __future__ import annotations

import logging
import threading
import warnings
from typing import TYPE_CHECKING, Generic, TypeVar

import numpy as np

from .errors import NonGeneratorWarning

if TYPE_CHECKING:
    from .finite_field import FiniteField

logger = logging.getLogger(__name__)

R = TypeVar("R")

# fields at least this large are not accelerated by default; the table has one entry per element.
ZECH_DEFAULT_MAX_ORDER = 2**16


class ZechTable(Generic[R]):
    """Discrete logarithm and antilogarithm tables of a field, w.r.t. a generator g of its group of units.

    logs[i] == k iff the element with index i equals gᵏ, for 0 ≤ k < q − 1, and antilogs[k] == gᵏ. Zero has no
    logarithm, so logs[0] stays -1 and zero operands never go through the table.
    """

    def __init__(self, logs: np.ndarray, antilogs: list[R]) -> None:
        self.logs = logs
        self.antilogs = antilogs
        self.group_order = len(antilogs)

    @classmethod
    def build(cls, field: FiniteField[R]) -> ZechTable[R]:
        g = field.primitive_element()
        one = field.one()
        group_order = field.order - 1
        logs = np.full(field.order, -1, dtype=np.int64)
        antilogs: list[R] = []
        power = one
        for k in range(group_order):
            if k > 0 and power == one:
                raise ValueError(f"primitive element has order {k}, not {group_order}")
            logs[field.to_index(power)] = k
            antilogs.append(power)
            power = field.multiply_direct(power, g)
        assert power == one, "the group of units must have order q - 1"
        return cls(logs, antilogs)

    def log(self, field: FiniteField[R], elem: R) -> int:
        k = int(self.logs[field.to_index(elem)])
        if k < 0:
            raise ValueError("zero has no discrete logarithm")
        return k

    def multiply(self, field: FiniteField[R], left: R, right: R) -> R:
        i = field.to_index(left)
        j = field.to_index(right)
        if i == 0 or j == 0:
            return field.zero()
        return self.antilogs[(int(self.logs[i]) + int(self.logs[j])) % self.group_order]


class ZechAccelerator:
    """The acceleration flag of one field, plus a build-once slot for its Zech table.

    The flag can be flipped at any time. The table is built on the first multiplication after acceleration is enabled
    on a field whose primitive element is a generator; concurrent first users wait on the lock, so the table is built
    once and never observed half-built. Disabling keeps the table around.
    """

    def __init__(self, field: FiniteField) -> None:
        self._field = field
        self._lock = threading.Lock()
        self._table: ZechTable | None = None
        self._valid: bool | None = None
        self.enabled = False

    def confirm_generator(self) -> bool:
        if self._valid is None:
            self._valid = self._field.is_generator(self._field.primitive_element())
        return self._valid

    @property
    def active(self) -> bool:
        return self.enabled and bool(self._valid)

    def enable(self) -> None:
        valid = self.confirm_generator()
        was_enabled, self.enabled = self.enabled, True
        if not valid and not was_enabled:
            warnings.warn(
                f"primitive element of {self._field!r} does not generate its multiplicative group; "
                + "multiplication will not use Zech logarithms",
                NonGeneratorWarning,
                stacklevel=3,
            )

    def disable(self) -> None:
        self.enabled = False

    def table(self) -> ZechTable | None:
        if not self.active:
            return None
        table = self._table
        if table is None:
            with self._lock:
                if self._table is None:
                    logger.debug("building Zech table for %r (%d elements)", self._field, self._field.order)
                    self._table = ZechTable.build(self._field)
                table = self._table
        return table


def apply_construction_policy(field: FiniteField, requested: bool | None) -> None:
    """Decides, once, whether a freshly constructed field multiplies through Zech logarithms.

    requested=None applies the default policy: accelerate small fields of odd characteristic whose primitive element
    is a generator. True behaves like an explicit enable, including the warning; False leaves acceleration off.
    """
    accelerator = field.zech
    if requested is None:
        accelerator.enabled = (
            field.order < ZECH_DEFAULT_MAX_ORDER and field.characteristic != 2 and accelerator.confirm_generator()
        )
        logger.debug("Zech multiplication for %r defaults to %s", field, "on" if accelerator.enabled else "off")
    elif requested:
        accelerator.enable()
