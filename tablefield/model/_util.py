import copy
from collections.abc import Mapping, Set
from datetime import date, time, timedelta
from enum import Enum
from numbers import Number
from types import MappingProxyType

from tablefield.objects import CYCLE, UNSET, FrozenDict

_IMMUTABLE_TYPES = (
  str, bytes, bool, Number, date, time, timedelta, Enum, frozenset, range, type)


def is_nan(value):
  """True for float NaN, and for anything else that is not equal to itself (e.g. ``Decimal("NaN")``)."""
  # pylint: disable=comparison-with-itself
  return isinstance(value, Number) and not isinstance(value, bool) and value != value


def is_empty(value):
  """True for values that mean "nothing meaningful": UNSET, None and NaN."""
  return value is UNSET or value is None or is_nan(value)


def is_sequence(value):
  """Lists and tuples. Strings and bytes are not sequences here."""
  return isinstance(value, (list, tuple))


def value_dup(data):
  """Structural copy of JSON-like data: dicts and lists are copied, everything else is shared."""
  if isinstance(data, dict):
    obj = {}
    for key in data:
      obj[key] = value_dup(data[key])
    return obj
  elif isinstance(data, list):
    return [value_dup(item) for item in data]
  else:
    return data


def deep_equal(a, b):
  """
  Structural equality of two values.

  Mappings are equal when they have the same keys and equal values, in any order.
  Lists and tuples are equal when their items are equal pairwise.
  A bool is never equal to a number, two NaNs are equal, and UNSET is only equal to itself.
  """
  # pylint: disable=too-many-return-statements
  if a is b:
    return True
  if a is UNSET or b is UNSET:
    return False
  if isinstance(a, bool) or isinstance(b, bool):
    return isinstance(a, bool) and isinstance(b, bool) and a == b
  if is_nan(a) or is_nan(b):
    return is_nan(a) and is_nan(b)
  if isinstance(a, Mapping) and isinstance(b, Mapping):
    if set(a.keys()) != set(b.keys()):
      return False
    return all(deep_equal(a[key], b[key]) for key in a)
  if is_sequence(a) and is_sequence(b):
    if len(a) != len(b):
      return False
    return all(deep_equal(x, y) for x, y in zip(a, b))
  if isinstance(a, Mapping) or isinstance(b, Mapping) or is_sequence(a) or is_sequence(b):
    return False
  return a == b


def deep_equal_unordered(a, b):
  """
  Like :any:`deep_equal` for two sequences, but ignores the order of their items.
  Only the outermost level is unordered; nested sequences are still compared in order.
  """
  if len(a) != len(b):
    return False
  remaining = list(b)
  for item in a:
    for i, other in enumerate(remaining):
      if deep_equal(item, other):
        del remaining[i]
        break
    else:
      return False
  return True


def deep_freeze(value, passthrough=()):
  """
  Immutable snapshot of :samp:`value`. The input is never modified.

  * Lists and tuples become tuples, mappings become :any:`FrozenDict`, sets become frozensets.
  * Other objects with a ``__dict__`` become a :any:`FrozenDict` of their attributes.
  * UNSET, None, NaN, immutable scalars and already-frozen mappings are returned as they are.
  * Instances of the :samp:`passthrough` classes are returned as they are.

  Repeated references freeze to the same result.
  A reference back to a value that is still being frozen (a cycle) becomes :any:`CYCLE`,
  so the result never holds a mutable part of the input.
  """
  frozen = {}
  in_progress = set()

  def handle(value):
    # pylint: disable=too-many-return-statements
    if is_empty(value):
      return value
    if isinstance(value, _IMMUTABLE_TYPES):
      return value
    if isinstance(value, (FrozenDict, MappingProxyType)):
      return value
    if passthrough and isinstance(value, passthrough):
      return value

    key = id(value)
    if key in frozen:
      return frozen[key]
    if key in in_progress:
      return CYCLE

    in_progress.add(key)
    try:
      if is_sequence(value):
        result = tuple(handle(item) for item in value)
      elif isinstance(value, Mapping):
        result = FrozenDict((k, handle(v)) for k, v in value.items())
      elif isinstance(value, Set):
        result = frozenset(handle(item) for item in value)
      elif isinstance(value, bytearray):
        result = bytes(value)
      elif hasattr(value, "__dict__"):
        result = FrozenDict((k, handle(v)) for k, v in vars(value).items())
      else:
        result = copy.deepcopy(value)
    finally:
      in_progress.discard(key)

    frozen[key] = result
    return result

  return handle(value)
