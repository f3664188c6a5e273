"""
Formatting and delivery of :any:`Field` errors and warnings.

Diagnostics are logged to the ``tablefield.diagnostics`` logger.
Set ``TABLEFIELD_DEBUG`` in the environment to also log every
:any:`Field.save_value` computation at DEBUG level.
"""
import sys
from inspect import isroutine
from logging import getLogger
from numbers import Number
from os import environ

from tablefield._json import to_json
from tablefield.objects import UNSET

logger = getLogger(__name__)

_FALSE_STRINGS = ("", "0", "false", "no", "off")

_FATAL_EXPLANATION = (
  "Fields which fail to initialize will cause a lot of problems later on.\n"
  "Because the field failed to initialize, there is a good possibility that data which wasn't "
  "allowed with your field config came in from the remote source.\n"
  "This can happen if a number field is strict with a precision of 2 and 12.888 was stored remotely: "
  "the remote UI shows 12.89, but its API sends 12.888.\n"
  "To prevent failures throughout the API, exiting with status code %i.")


def _env_flag(name):
  return environ.get(name, "").strip().lower() not in _FALSE_STRINGS


def debug_enabled():
  """True if ``TABLEFIELD_DEBUG`` is set to something other than a false-like string."""
  return _env_flag("TABLEFIELD_DEBUG")


def ignore_field_errors_by_default():
  """
  True if ``TABLEFIELD_IGNORE_FIELD_ERRORS`` is set.
  Fields whose config doesn't mention ``__ignoreFieldErrors__`` then log errors instead of raising.
  """
  return _env_flag("TABLEFIELD_IGNORE_FIELD_ERRORS")


#region Field info

def type_name(value):
  """Name of the kind of a value, in the vocabulary of the diagnostics block."""
  # pylint: disable=too-many-return-statements
  if value is UNSET:
    return "undefined"
  if isinstance(value, (list, tuple)):
    return "array"
  if isinstance(value, bool):
    return "boolean"
  if isinstance(value, Number):
    return "number"
  if isinstance(value, str):
    return "string"
  if isinstance(value, type) or isroutine(value):
    return "function"
  return "object"


def render_received(received):
  """Renders the value a diagnostic is about."""
  # Imported here because model imports this module.
  from tablefield.model.field import Field
  from tablefield.model.record import Record

  if isinstance(received, Record):
    return received.stringify(indent=2)
  if isinstance(received, Field):
    return "null" if received.value is None else received.to_string(False)
  return to_json(received, pretty=True)


def show_field_info(field, received=UNSET):
  """
  Builds the ``=====FIELD INFO=====`` block describing :samp:`field` and the value it received.
  Every line is present even if the record, table or base is missing.
  """
  from tablefield.model._util import is_empty

  record = field.record
  table = getattr(record, "table", None) if record else None
  base = getattr(table, "base", None) if table is not None else None
  table_name = getattr(table, "name", None) if table is not None else None
  record_id = getattr(record, "id", None) if record else None

  parts = ["=====FIELD INFO====="]
  log = parts.append
  log("Base: %s" % base)
  log("Table: %s" % table_name)
  log("Record: %s" % record_id)
  log("Field: %s" % field.name)
  log("Strict: %s" % ("true" if field.config.get("strict") is True else "false"))
  log("Received: %s" % render_received(received))
  log("Type: %s" % type_name(received))
  if not is_empty(received):
    log("Class: %s" % type(received).__name__)
  log("=====FIELD INFO=====")

  return "\n".join(parts)

#endregion

#region Fatal handler

def exit_process(fatal_error):
  """
  The default fatal handler.
  Logs why the process can't continue, then exits with :samp:`fatal_error.exit_status`.
  """
  logger.critical(_FATAL_EXPLANATION, fatal_error.exit_status)
  sys.exit(fatal_error.exit_status)


_fatal_handler = exit_process


def set_fatal_handler(handler):
  """
  Replaces the function called with a :any:`FatalFieldError` when a field fails
  before it has a ``type``. Returns the previous handler.

  A handler may raise, exit, or return; if it returns, :any:`Field.error` returns
  the logged error to its caller. Pass :any:`exit_process` to restore the default.
  """
  global _fatal_handler # pylint: disable=global-statement
  previous = _fatal_handler
  _fatal_handler = handler
  return previous


def get_fatal_handler():
  return _fatal_handler


def handle_fatal(fatal_error):
  _fatal_handler(fatal_error)

#endregion
