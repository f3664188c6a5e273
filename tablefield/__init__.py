__title__ = "tablefield"
__version__ = "1.0.0"
__author__ = "tablefield contributors"
__license__ = "MPL 2.0"
__copyright__ = "2026 tablefield contributors"

from tablefield.diagnostics import exit_process, set_fatal_handler
from tablefield.errors import FatalFieldError, FieldError, UninitializedFieldError, error_class_for
from tablefield.model.coercer import DEFAULT_COERCER, Coercer, DefaultCoercer, Shape
from tablefield.model.field import Field
from tablefield.model.record import Record, Table
from tablefield.objects import CYCLE, UNSET, FrozenDict
