from os import environ
from unittest import TestCase
from unittest.mock import patch

from tablefield.diagnostics import set_fatal_handler
from tablefield.model.field import Field
from tablefield.model.record import Record, Table
from tablefield.objects import UNSET

_ENV_KEYS = ("TABLEFIELD_DEBUG", "TABLEFIELD_IGNORE_FIELD_ERRORS")


class TextField(Field):
  """A field kind that finishes initializing, so its errors are raised rather than fatal."""

  def __init__(self, name, value=UNSET, config=None):
    super(TextField, self).__init__(name, value, config)
    self.type = "text"


def make_record(record_id="rec123", table_name="People", base="appBase"):
  return Record(record_id, Table(table_name, base))


class FieldTestCase(TestCase):
  """
  Records fatal field errors instead of exiting,
  and runs without any TABLEFIELD_* environment variables.
  """

  def setUp(self):
    super(FieldTestCase, self).setUp()

    env = patch.dict(environ)
    env.start()
    self.addCleanup(env.stop)
    for key in _ENV_KEYS:
      environ.pop(key, None)

    self.fatal_errors = []
    previous = set_fatal_handler(self.fatal_errors.append)
    self.addCleanup(set_fatal_handler, previous)

  def assertLogsErrors(self):
    return self.assertLogs("tablefield.diagnostics", level="ERROR")
