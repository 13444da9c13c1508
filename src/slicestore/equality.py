"""Identity and one-level structural equality.

Consumers use these to decide whether a selected slice of state actually
changed. :func:`shallow_equal` never recurses: nested containers are compared
by identity only.
"""

from __future__ import annotations

import math
from typing import Any

from slicestore._records import is_record, record_items

_PRIMITIVES = (type(None), bool, int, float, complex, str, bytes)


def _same_float(a: float, b: float) -> bool:
    if math.isnan(a) and math.isnan(b):
        return True
    # 0.0 and -0.0 compare equal but are not the same value.
    return a == b and math.copysign(1.0, a) == math.copysign(1.0, b)


def is_identical(a: Any, b: Any) -> bool:
    """Return ``True`` when *a* and *b* are the same value.

    Objects are identical only when they are the same object. Primitives of
    the same type are identical when they are equal, with NaN identical to
    itself and ``0.0`` distinct from ``-0.0``. ``True`` is not identical
    to ``1``.
    """
    if a is b:
        return True
    if type(a) is not type(b) or not isinstance(a, _PRIMITIVES):
        return False
    if isinstance(a, float):
        return _same_float(a, b)
    if isinstance(a, complex):
        return _same_float(a.real, b.real) and _same_float(a.imag, b.imag)
    return bool(a == b)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def shallow_equal(a: Any, b: Any) -> bool:
    """Compare two records (or two sequences) one level deep.

    - identical inputs are equal;
    - two records are equal when they have the same key set and every value
      is identical;
    - two lists (or two tuples) are equal when they have the same length and
      every item is identical;
    - any other combination is unequal.
    """
    if is_identical(a, b):
        return True

    if is_record(a) and is_record(b):
        items_a = record_items(a)
        items_b = record_items(b)
        if len(items_a) != len(items_b):
            return False
        for key, value in items_a.items():
            if key not in items_b or not is_identical(value, items_b[key]):
                return False
        return True

    if _is_sequence(a) and type(a) is type(b):
        if len(a) != len(b):
            return False
        return all(is_identical(x, y) for x, y in zip(a, b, strict=True))

    return False
