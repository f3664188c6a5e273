"""
:any:`Record` and :any:`Table`, the parts of the hierarchy a :any:`Field` reports through.

A field never owns its record. It only reads ``record.id``, ``record.table``,
``record.table.name`` and ``record.table.base`` to describe where a diagnostic came from,
and tolerates any of them being missing.
"""

from tablefield._json import to_json


class Table(object):
  """A named table inside a base."""

  def __init__(self, name, base=None):
    self.name = name
    """Name of the table."""
    self.base = base
    """Identifier of the base the table belongs to. May be None."""

  def __repr__(self):
    return "Table(name=%r, base=%r)" % (self.name, self.base)


class Record(object):
  """
  Base class for row-like entities that hold fields.

  Subclasses supply the storage; fields recognize anything deriving from
  this class as a record and never freeze, copy or re-wrap it.
  """

  def __init__(self, id=None, table=None, fields=None):
    # pylint: disable=redefined-builtin
    self.id = id
    """Identifier of the record. None until the record has been saved."""
    self.table = table
    """The :any:`Table` this record belongs to. May be None."""
    self.fields = {} if fields is None else fields
    """Dict {field_name: :any:`Field`}."""

  def to_dict(self):
    """JSON-compatible view of the record: its id and the value of each field."""
    return {
      "id": self.id,
      "fields": dict((name, field.value) for name, field in self.fields.items()),
    }

  def stringify(self, indent=None):
    """Renders :any:`to_dict` as JSON text; pretty-printed when :samp:`indent` is given."""
    return to_json(self.to_dict(), pretty=indent is not None)

  def __repr__(self):
    return "%s(id=%r)" % (self.__class__.__name__, self.id)
