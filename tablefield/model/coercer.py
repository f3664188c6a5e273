""":any:`Coercer` and the shape rules that :any:`Field.save_value` dispatches on."""

from abc import abstractmethod
from datetime import date, datetime, timezone
from numbers import Number

from iso8601 import ParseError, parse_date

from ._util import is_sequence


class Shape(object):
  """
  The shapes a baseline value can have.
  :any:`Field.save_value` coerces a new value toward the shape of the field's original value.
  """
  TEXT = "text"
  BOOLEAN = "boolean"
  NUMERIC = "numeric"
  SEQUENCE = "sequence"
  OTHER = "other"

  def __init__(self):
    raise TypeError


def shape_of(value):
  """Gets the :any:`Shape` of a value. ``bool`` is checked before numbers, since it is one."""
  if isinstance(value, bool):
    return Shape.BOOLEAN
  if isinstance(value, Number):
    return Shape.NUMERIC
  if isinstance(value, str):
    return Shape.TEXT
  if is_sequence(value):
    return Shape.SEQUENCE
  return Shape.OTHER


def same_shape(value, baseline):
  """
  True if :samp:`value` needs no coercion to match :samp:`baseline`.
  Two values of shape OTHER only match if :samp:`value` is an instance of the baseline's class.
  """
  shape = shape_of(baseline)
  if shape_of(value) != shape:
    return False
  return shape != Shape.OTHER or isinstance(value, type(baseline))


def to_text(value):
  return str(value)


def to_boolean(value):
  return bool(value)


def to_number(value):
  """
  Converts a value to a number.
  Strings that look like integers become ints; other numeric strings become floats;
  blank strings become 0. Anything that can't be converted becomes NaN.
  """
  if isinstance(value, bool):
    return int(value)
  if isinstance(value, Number):
    return value
  if isinstance(value, (str, bytes)):
    text = value.decode("utf-8", "replace") if isinstance(value, bytes) else value
    text = text.strip()
    if not text:
      return 0
    try:
      return int(text)
    except ValueError:
      pass
  try:
    return float(value)
  except (TypeError, ValueError):
    return float("nan")


def to_sequence(value):
  """A list: sequences are copied, anything else is wrapped."""
  if is_sequence(value):
    return list(value)
  return [value]


class Coercer(object):
  """
  A Coercer sits inside a :any:`Field` and handles baselines of shape OTHER.

  Text, boolean, numeric and sequence baselines are handled by the field itself.
  For anything else the field calls :any:`coerce`, so a field kind with a richer
  baseline (a date, a mapping, a custom object) supplies a Coercer instead of
  overriding :any:`Field.save_value`.

  Give a field a Coercer with ``config={"coercer": ...}``,
  or by setting ``coercer`` on a :any:`Field` subclass.
  """

  @abstractmethod
  def coerce(self, value, baseline):
    """
    Converts :samp:`value` toward the shape of :samp:`baseline`.

    Only called when the value is not empty and does not already match the baseline.
    Must not modify either argument.
    """
    pass # pragma: no cover


class DefaultCoercer(Coercer):
  """
  Used when nothing else is configured.
  Parses ISO 8601 strings and timestamps for date and datetime baselines;
  returns every other value unchanged.
  """

  def coerce(self, value, baseline):
    if isinstance(baseline, datetime):
      return self._to_datetime(value)
    if isinstance(baseline, date):
      converted = self._to_datetime(value)
      return converted.date() if isinstance(converted, datetime) else converted
    return value

  @staticmethod
  def _to_datetime(value):
    if isinstance(value, str):
      try:
        return parse_date(value)
      except ParseError:
        return value
    if isinstance(value, Number) and not isinstance(value, bool):
      try:
        return datetime.fromtimestamp(value, timezone.utc)
      except (OverflowError, OSError, ValueError):
        return value
    if isinstance(value, date):
      return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return value


DEFAULT_COERCER = DefaultCoercer()
"""Shared :any:`DefaultCoercer`."""
