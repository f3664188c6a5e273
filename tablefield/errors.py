"""Error types that :any:`Field` methods raise or report."""


class FieldError(Exception):
  """
  Error reported by a :any:`Field`.

  The class name of a reported error is ``<Kind>Error``,
  where ``<Kind>`` is the class name of the field that reported it,
  or ``UninitializedField`` if the field never got a ``type``.
  See :any:`error_class_for`.
  """

  def __init__(self, message, field_info=None, received=None):
    description = message if field_info is None else "%s\n%s" % (message, field_info)
    super(FieldError, self).__init__(description)
    self.message = message
    """The message passed to :any:`Field.error`, without the field info block."""
    self.field_info = field_info
    """The ``=====FIELD INFO=====`` block describing where the error happened. May be None."""
    self.received = received
    """The value that caused the error."""


class UninitializedFieldError(FieldError):
  """Reported by a field that has no ``type`` yet, or that was given a bad name."""
  pass


class FatalFieldError(FieldError):
  """
  A field failed while it was still initializing.

  This is not raised by :any:`Field.error` itself.
  It is passed to the fatal handler (see :any:`set_fatal_handler`),
  whose default exits the process with :samp:`exit_status`.
  """

  exit_status = 2

  def __init__(self, cause):
    super(FatalFieldError, self).__init__(cause.message, cause.field_info, cause.received)
    self.cause = cause
    """The :any:`FieldError` that was logged before this was created."""


_error_classes = {
  "Field": FieldError,
  "UninitializedField": UninitializedFieldError,
}


def error_class_for(kind):
  """
  Gets the error class named ``<kind>Error``, creating and caching it if needed.
  Created classes subclass :any:`FieldError`.
  """
  cls = _error_classes.get(kind)
  if cls is None:
    cls = type("%sError" % kind, (FieldError,), {"__module__": __name__})
    _error_classes[kind] = cls
  return cls
