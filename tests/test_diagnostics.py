from datetime import date
from os import environ

from tablefield import diagnostics
from tablefield.diagnostics import (exit_process, get_fatal_handler, set_fatal_handler,
                                    show_field_info, type_name)
from tablefield.errors import FatalFieldError, FieldError, UninitializedFieldError, error_class_for
from tablefield.model.field import Field
from tablefield.model.record import Record
from tablefield.objects import UNSET

from .helpers import FieldTestCase, TextField, make_record


class FieldInfoTest(FieldTestCase):
  def test_full_block(self):
    field = TextField("Name", "Alice", {"__record__": make_record()})
    self.assertEqual(show_field_info(field, 42), "\n".join([
      "=====FIELD INFO=====",
      "Base: appBase",
      "Table: People",
      "Record: rec123",
      "Field: Name",
      "Strict: false",
      "Received: 42",
      "Type: number",
      "Class: int",
      "=====FIELD INFO=====",
    ]))

  def test_without_record(self):
    info = show_field_info(Field("Name", "Alice", {"strict": True}), "x").split("\n")
    self.assertEqual(info[1:5], ["Base: None", "Table: None", "Record: None", "Field: Name"])
    self.assertEqual(info[5], "Strict: true")
    self.assertEqual(info[6], 'Received: "x"')

  def test_record_without_table(self):
    field = Field("Name", "Alice", {"__record__": Record("rec9")})
    info = show_field_info(field, "x").split("\n")
    self.assertEqual(info[1:4], ["Base: None", "Table: None", "Record: rec9"])

  def test_nothing_received(self):
    info = show_field_info(Field("Name", "Alice"))
    self.assertIn("\nReceived: undefined\nType: undefined\n=====FIELD INFO=====", info)
    self.assertNotIn("Class:", info)

  def test_none_received(self):
    info = show_field_info(Field("Name", "Alice"), None)
    self.assertIn("\nReceived: null\nType: object\n=====FIELD INFO=====", info)

  def test_nan_received(self):
    self.assertNotIn("Class:", show_field_info(Field("Name", "Alice"), float("nan")))

  def test_list_received(self):
    info = show_field_info(Field("Name", "Alice"), [1, 2])
    self.assertIn("\nReceived: [\n  1,\n  2\n]\nType: array\nClass: list\n", info)

  def test_field_received(self):
    other = Field("Other", "Bob")
    self.assertIn("\nReceived: Bob\nType: object\nClass: Field\n", show_field_info(other, other))
    empty = Field("Empty")
    self.assertIn("\nReceived: null\n", show_field_info(other, empty))

  def test_record_received(self):
    record = make_record()
    record.fields["Name"] = Field("Name", "Alice")
    info = show_field_info(Field("Name", "Alice"), record)
    self.assertIn('"Name": "Alice"', info)
    self.assertIn('"id": "rec123"', info)
    self.assertIn("\nClass: Record\n", info)

  def test_type_name(self):
    self.assertEqual(type_name(UNSET), "undefined")
    self.assertEqual(type_name(None), "object")
    self.assertEqual(type_name((1,)), "array")
    self.assertEqual(type_name(True), "boolean")
    self.assertEqual(type_name(1.5), "number")
    self.assertEqual(type_name("x"), "string")
    self.assertEqual(type_name(len), "function")
    self.assertEqual(type_name(Field), "function")
    self.assertEqual(type_name({}), "object")
    self.assertEqual(type_name(date(2020, 1, 1)), "object")


class ErrorChannelTest(FieldTestCase):
  def test_raised_once_typed(self):
    field = TextField("Name", "Alice", {"__record__": make_record()})
    with self.assertRaises(error_class_for("TextField")) as cm:
      field.error("bad value", 42)
    error = cm.exception
    self.assertEqual(error.message, "bad value")
    self.assertEqual(error.received, 42)
    self.assertIn("Record: rec123", error.field_info)
    self.assertTrue(str(error).startswith("bad value\n=====FIELD INFO====="))
    self.assertEqual(self.fatal_errors, [])

  def test_ignored_when_configured(self):
    field = TextField("Name", "Alice", {"__ignoreFieldErrors__": True})
    with self.assertLogsErrors() as cm:
      error = field.error("bad value", 42)
    self.assertIsInstance(error, error_class_for("TextField"))
    self.assertIn("TextFieldError: bad value", cm.records[0].getMessage())
    self.assertEqual(self.fatal_errors, [])

  def test_cyclic_received_value(self):
    cyclic = [1]
    cyclic.append(cyclic)
    field = TextField("Name", "Alice")
    with self.assertRaises(error_class_for("TextField")) as cm:
      field.type = cyclic
    self.assertIs(cm.exception.received, cyclic)
    self.assertIn("\nReceived: [1, [...]]\nType: array\nClass: list\n", cm.exception.field_info)

  def test_force_throw(self):
    field = TextField("Name", "Alice", {"__ignoreFieldErrors__": True})
    self.assertRaises(FieldError, lambda: field.error("bad value", 42, force_throw=True))

  def test_ignored_from_environment(self):
    environ["TABLEFIELD_IGNORE_FIELD_ERRORS"] = "1"
    field = TextField("Name", "Alice")
    with self.assertLogsErrors():
      field.error("bad value")
    explicit = TextField("Name", "Alice", {"__ignoreFieldErrors__": False})
    self.assertRaises(FieldError, lambda: explicit.error("bad value"))

  def test_false_like_environment(self):
    environ["TABLEFIELD_IGNORE_FIELD_ERRORS"] = "false"
    self.assertRaises(FieldError, lambda: TextField("Name", "Alice").error("bad value"))

  def test_untyped_is_fatal(self):
    field = Field("Name", "Alice")
    with self.assertLogsErrors() as cm:
      error = field.error("bad value", 42)
    self.assertIsInstance(error, UninitializedFieldError)
    self.assertIn("UninitializedFieldError: bad value", cm.records[0].getMessage())
    self.assertEqual(len(self.fatal_errors), 1)
    fatal = self.fatal_errors[0]
    self.assertIsInstance(fatal, FatalFieldError)
    self.assertIs(fatal.cause, error)
    self.assertEqual(fatal.exit_status, 2)
    self.assertEqual(fatal.message, "bad value")

  def test_untyped_is_fatal_even_if_ignored(self):
    field = Field("Name", "Alice", {"__ignoreFieldErrors__": True})
    with self.assertLogsErrors():
      field.error("bad value", force_throw=True)
    self.assertEqual(len(self.fatal_errors), 1)

  def test_default_handler_exits(self):
    set_fatal_handler(exit_process)
    with self.assertLogsErrors() as logs:
      with self.assertRaises(SystemExit) as cm:
        Field("", "Alice")
    self.assertEqual(cm.exception.code, 2)
    self.assertEqual([r.levelname for r in logs.records], ["ERROR", "CRITICAL"])
    self.assertIn("exiting with status code 2", logs.records[-1].getMessage())

  def test_handler_may_raise(self):
    def supervisor(fatal):
      raise fatal
    set_fatal_handler(supervisor)
    with self.assertLogsErrors():
      self.assertRaises(FatalFieldError, lambda: Field("a", 1, ["not", "a", "mapping"]))

  def test_set_fatal_handler_returns_previous(self):
    current = get_fatal_handler()
    handler = lambda fatal: None
    self.assertIs(set_fatal_handler(handler), current)
    self.assertIs(get_fatal_handler(), handler)


class WarningChannelTest(FieldTestCase):
  def test_warning(self):
    field = TextField("Name", "Alice", {"__record__": make_record()})
    with self.assertLogs("tablefield.diagnostics", level="WARNING") as cm:
      self.assertIsNone(field.warning("suspicious value", "x"))
    message = cm.records[0].getMessage()
    self.assertTrue(message.startswith("TextFieldWarning: suspicious value\n=====FIELD INFO====="))
    self.assertIn("Table: People", message)
    self.assertEqual(cm.records[0].levelname, "WARNING")

  def test_warning_with_unencodable_value(self):
    field = Field("Data", "x")
    for received in ({1: "a", "b": 2}, {(1, 2): "a"}):
      with self.assertLogs("tablefield.diagnostics", level="WARNING") as cm:
        field.warning("odd value", received)
      self.assertIn("\nReceived: %r\nType: object\n" % (received,), cm.records[0].getMessage())

  def test_warning_before_type(self):
    with self.assertLogs("tablefield.diagnostics", level="WARNING") as cm:
      Field("Name", "Alice").warning("suspicious value")
    self.assertTrue(cm.records[0].getMessage().startswith("UninitializedFieldWarning: "))
    self.assertEqual(self.fatal_errors, [])


class DebugLoggingTest(FieldTestCase):
  def test_coercion_is_logged(self):
    environ["TABLEFIELD_DEBUG"] = "1"
    field = Field("Name", "Alice")
    field.value = 42
    with self.assertLogs("tablefield.diagnostics", level="DEBUG") as cm:
      self.assertEqual(field.save_value, "42")
    self.assertEqual(cm.records[0].getMessage(), "Field Name: coerced 42 to '42'")

  def test_flags(self):
    self.assertFalse(diagnostics.debug_enabled())
    environ["TABLEFIELD_DEBUG"] = "off"
    self.assertFalse(diagnostics.debug_enabled())
    environ["TABLEFIELD_DEBUG"] = "yes"
    self.assertTrue(diagnostics.debug_enabled())
    self.assertFalse(diagnostics.ignore_field_errors_by_default())
