"""
Marker values and immutable containers shared by :any:`Field` and its helpers.
"""


class _Unset(object):
  """
  Type of :any:`UNSET`.
  There is exactly one instance; compare with ``is``.
  """
  _instance = None

  def __new__(cls):
    if cls._instance is None:
      cls._instance = super(_Unset, cls).__new__(cls)
    return cls._instance

  def __bool__(self):
    return False

  def __repr__(self):
    return "UNSET"

  def __copy__(self):
    return self

  def __deepcopy__(self, memo):
    return self

  def __reduce__(self):
    return (_Unset, ())


UNSET = _Unset()
"""
A value that was never assigned.
Distinct from ``None``, which is a value that was deliberately cleared.
"""


class _Cycle(object):
  """Type of :any:`CYCLE`."""
  _instance = None

  def __new__(cls):
    if cls._instance is None:
      cls._instance = super(_Cycle, cls).__new__(cls)
    return cls._instance

  def __repr__(self):
    return "CYCLE"

  def __copy__(self):
    return self

  def __deepcopy__(self, memo):
    return self

  def __reduce__(self):
    return (_Cycle, ())


CYCLE = _Cycle()
"""Stands in for a reference back to a container that contains it, in frozen values."""


class FrozenDict(dict):
  """
  A dict that refuses modification after construction.

  It is still a dict, so it compares equal to plain dicts with the same items
  and serializes the same way.
  """
  __slots__ = ("_frozen",)

  def __init__(self, *args, **kwargs):
    if getattr(self, "_frozen", False):
      self._immutable()
    super(FrozenDict, self).__init__(*args, **kwargs)
    self._frozen = True

  def _immutable(self, *args, **kwargs):
    # pylint: disable=unused-argument
    raise TypeError("%s is frozen and can not be modified." % self.__class__.__name__)

  __setitem__ = _immutable
  __delitem__ = _immutable
  clear = _immutable
  pop = _immutable
  popitem = _immutable
  setdefault = _immutable
  update = _immutable
  __ior__ = _immutable

  def __copy__(self):
    return self

  def __deepcopy__(self, memo):
    return self

  def __reduce__(self):
    return (FrozenDict, (dict(self),))

  def __hash__(self):
    return hash(frozenset(self.items()))

  def __repr__(self):
    return "FrozenDict(%s)" % dict.__repr__(self)
