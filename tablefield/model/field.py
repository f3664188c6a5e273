from collections.abc import Mapping

from tablefield import diagnostics
from tablefield.errors import FatalFieldError, UninitializedFieldError, error_class_for
from tablefield.objects import UNSET
from .coercer import (DEFAULT_COERCER, Shape, same_shape, shape_of, to_boolean, to_number,
                      to_sequence, to_text)
from .record import Record
from ._util import (deep_equal, deep_equal_unordered, deep_freeze, is_empty, is_nan, is_sequence,
                    value_dup)


class Field(object):
  """
  One named value of a :any:`Record`.

  A Field remembers the value it was created with (:any:`original_value`)
  and tracks the current :any:`value` separately. When the record is saved,
  :any:`save_value` coerces the current value toward the shape of the original one,
  and :any:`changed` tells whether anything needs to be written at all::

    field = Field("Name", "Alice")
    field.value = 42
    field.save_value # "42"
    field.changed    # True

  Options in :samp:`config`:

  * ``strict``: if True, :any:`save_value` is the value as assigned, without coercion.
  * ``primary``: if True, this is the primary field of its record.
  * ``__record__``: the :any:`Record` the field belongs to. Only used in diagnostics.
  * ``__ignoreFieldErrors__``: if True, :any:`error` logs instead of raising.
  * ``coercer``: a :any:`Coercer` for baselines that aren't text, booleans, numbers or lists.

  Field kinds subclass this and set :any:`type` once they are initialized.
  Until then every :any:`error` is treated as fatal.
  """

  coercer = DEFAULT_COERCER
  """:any:`Coercer` used when the config doesn't give one."""

  def __init__(self, name, value=UNSET, config=None):
    if not isinstance(name, str):
      raise UninitializedFieldError(
        "The 'name' of a Field was not set to a String. Received: %r (%s)" %
        (name, type(name).__name__), received=name)

    if isinstance(config, Mapping):
      config = dict(config)
      if config.get("strict") is not True:
        config["strict"] = False
    elif config is None:
      config = {"strict": False}

    self._name = UNSET
    self._config = UNSET
    self._type = UNSET
    self._value = UNSET

    self.name = name
    self.config = config
    if value is not UNSET:
      self.value = value
    self._original_value = value_dup(value)

  #region Properties
  @property
  def name(self):
    return self._name

  @name.setter
  def name(self, name):
    if self._name is not UNSET:
      self.error("name can not be changed!", name)
    elif self._check_name(name):
      self._name = name

  @property
  def config(self):
    """The field's own copy of its configuration. Empty if it was never set."""
    return {} if self._config is UNSET else self._config

  @config.setter
  def config(self, config):
    if self._config is not UNSET:
      self.error("config can not be changed!", config)
    elif not isinstance(config, Mapping):
      self.error("config should be key-value Object.", config)
    else:
      self._config = config

  @property
  def type(self):
    """Kind of the field, set once by the field kind's constructor. UNSET until then."""
    return self._type

  @type.setter
  def type(self, kind):
    if self._type is not UNSET:
      self.error("type can not be changed!", kind)
    else:
      self._type = kind

  @property
  def value(self):
    """
    The current value.
    0 and False are returned as they are; UNSET, None, "" and NaN read as None.
    """
    return _normalize(self._value)

  @value.setter
  def value(self, value):
    self._value = value

  @property
  def original_value(self):
    """
    A copy of the value the field was created with.
    Neither assigning :any:`value` nor modifying it in place changes it.
    """
    return self._original_value

  @property
  def record(self):
    """The :any:`Record` from ``config["__record__"]``, or UNSET."""
    return self.config.get("__record__", UNSET)

  @record.setter
  def record(self, _):
    return

  @property
  def save_value(self):
    """
    The value to persist: :any:`value` coerced toward the shape of :any:`original_value`.
    Empty values clear the field (None). This never modifies the field.
    """
    value = self.value
    if self.config.get("strict") is True:
      return value
    if value is None:
      return None

    original = self._original_value
    if original is UNSET or same_shape(value, original):
      return value
    if is_empty(value):
      return None

    saved = self._coerce(value, original)
    if diagnostics.debug_enabled():
      diagnostics.logger.debug("Field %s: coerced %r to %r", self._name, value, saved)
    return saved

  @save_value.setter
  def save_value(self, _):
    return

  @property
  def changed(self):
    """True if :any:`save_value` differs from :any:`original_value`. The order of list items is ignored."""
    original = self._original_value
    value = self.value
    saved = self.save_value
    if is_sequence(original) and is_sequence(value):
      return not deep_equal_unordered(original, saved)
    if saved is None and _normalize(original) is None:
      return False
    return not self._same(original, saved) and not deep_equal(original, value)

  @changed.setter
  def changed(self, _):
    return

  @property
  def frozen_value(self):
    """An immutable snapshot of :any:`value`. Records and fields inside it are left as they are."""
    return deep_freeze(self.value, passthrough=(Record, Field))
  #endregion

  def is_primary(self):
    return self.config.get("primary") is True

  def copy(self):
    """
    A new field of the same class with the same name, value and config.
    The copy keeps this field's :any:`original_value`, so it reports the same :any:`changed`.
    """
    copy = self.__class__(self.name, value_dup(self._value), dict(self.config))
    copy._original_value = value_dup(self._original_value)
    return copy

  def to_string(self, include_name=True):
    """
    ``"name: value"``, or just the value.
    Raises TypeError if the field is empty.
    """
    value = self.value
    if value is None:
      raise TypeError("Field %s has no value to render." % self._name)
    return "%s%s" % ("%s: " % self._name if include_name is True else "", value)

  def __str__(self):
    return self.to_string()

  def __repr__(self):
    return "%s(name=%r, value=%r)" % (self.__class__.__name__, self._name, self.value)

  #region Diagnostics
  def error(self, message, received=UNSET, force_throw=False):
    """
    Reports an error.

    Raised if the field has a :any:`type` and either :samp:`force_throw` is True
    or the config doesn't ask to ignore field errors. Otherwise the error is logged
    and returned. If the field has no type yet, the fatal handler is called after logging
    (see :any:`set_fatal_handler`).
    """
    error = self._build_error(message, received)
    if self._type is not UNSET and (force_throw is True or not self._ignores_errors()):
      raise error

    diagnostics.logger.error("%s: %s", error.__class__.__name__, error)
    if self._type is UNSET:
      diagnostics.handle_fatal(FatalFieldError(error))
    return error

  def warning(self, message, received=UNSET):
    """Logs a warning. Never raises."""
    diagnostics.logger.warning(
      "%sWarning: %s\n%s", self._kind(), message, diagnostics.show_field_info(self, received))

  def _build_error(self, message, received):
    error_class = error_class_for(self._kind())
    return error_class(message, diagnostics.show_field_info(self, received), received)

  def _kind(self):
    return "UninitializedField" if self._type is UNSET else self.__class__.__name__

  def _ignores_errors(self):
    config = self.config
    if "__ignoreFieldErrors__" in config:
      return config["__ignoreFieldErrors__"] is True
    return diagnostics.ignore_field_errors_by_default()
  #endregion

  #region Private methods
  def _check_name(self, name):
    if not isinstance(name, str) or len(name) < 1:
      self.error("name must be a string with a minimum length of 1 character.", name)
      return False
    return True

  def _coerce(self, value, original):
    shape = shape_of(original)
    if shape == Shape.TEXT:
      return to_text(value)
    elif shape == Shape.BOOLEAN:
      return to_boolean(value)
    elif shape == Shape.NUMERIC:
      return to_number(value)
    elif shape == Shape.SEQUENCE:
      return to_sequence(value)
    else:
      return self._coercer().coerce(value, original)

  def _coercer(self):
    return self.config.get("coercer") or self.coercer

  @staticmethod
  def _same(a, b):
    """Identity for containers, equality for everything else."""
    if isinstance(a, (dict, list, tuple, set)) or isinstance(b, (dict, list, tuple, set)):
      return a is b
    if isinstance(a, bool) != isinstance(b, bool):
      return False
    return a is b or a == b
  #endregion


def _normalize(value):
  """How a stored value reads back: 0 and False as they are, UNSET, None, "" and NaN as None."""
  if value is False or (isinstance(value, (int, float)) and not is_nan(value) and value == 0):
    return value
  if value is UNSET or value is None or is_nan(value) or (isinstance(value, str) and value == ""):
    return None
  return value
