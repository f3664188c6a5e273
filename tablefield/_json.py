from base64 import urlsafe_b64encode
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from json import JSONEncoder, dumps

from tablefield.objects import UNSET


def to_json(value, pretty=False, sort_keys=False):
  """
  Renders a field value as JSON text.
  Never fails: values the encoder does not know are rendered with :func:`repr`,
  and so is the whole value if it can't be encoded at all (cycles, keys that
  aren't strings or numbers, keys that can't be sorted).
  """
  if value is UNSET:
    return "undefined"
  try:
    if pretty:
      return dumps(value, cls=_FieldJSONEncoder, sort_keys=True, indent=2, separators=(",", ": "))
    return dumps(value, cls=_FieldJSONEncoder, sort_keys=sort_keys, separators=(",", ":"))
  except (TypeError, ValueError):
    return repr(value)


class _FieldJSONEncoder(JSONEncoder):
  """Converts dates, bytes, sets, records and fields to JSON."""
  # pylint: disable=method-hidden,arguments-differ,too-many-return-statements

  def default(self, obj):
    # Imported here because model imports this module.
    from tablefield.model.field import Field
    from tablefield.model.record import Record

    if obj is UNSET:
      return "undefined"
    elif isinstance(obj, Field):
      return obj.value
    elif isinstance(obj, Record):
      return obj.to_dict()
    elif isinstance(obj, (datetime, date, time)):
      return obj.isoformat()
    elif isinstance(obj, (bytes, bytearray)):
      return urlsafe_b64encode(bytes(obj)).decode("utf-8")
    elif isinstance(obj, (set, frozenset)):
      return sorted(obj, key=repr)
    elif isinstance(obj, Decimal):
      return str(obj)
    elif isinstance(obj, Enum):
      return obj.value
    else:
      return repr(obj)
