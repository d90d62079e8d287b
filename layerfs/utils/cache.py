''' Memoize a resolve function for at most ttl seconds, failures included,
so a layer which doesn't have a path isn't asked again on every lookup.
'''
import time
import typing as t
import dataclasses

T = t.TypeVar('T')

@dataclasses.dataclass
class Result(t.Generic[T]):
  expires: float
  val: t.Optional[T] = None
  err: t.Optional[BaseException] = None

class TTLCache(t.Generic[T]):
  def __init__(self, resolve: t.Callable[[str], T], ttl: float = 60):
    self._resolve = resolve
    self._ttl = ttl
    self._store: t.Dict[str, Result[T]] = {}

  def _lookup(self, key: str) -> t.Optional[Result[T]]:
    item = self._store.get(key)
    if item is not None and time.monotonic() > item.expires:
      del self._store[key]
      return None
    return item

  def __call__(self, key: str) -> T:
    item = self._lookup(key)
    if item is None:
      expires = time.monotonic() + self._ttl
      try:
        item = Result(expires, val=self._resolve(key))
      except Exception as err:
        item = Result(expires, err=err)
      self._store[key] = item
    if item.err is not None:
      raise item.err
    return item.val

  def __setitem__(self, key: str, val: T):
    self._store[key] = Result(time.monotonic() + self._ttl, val=val)

  def discard(self, key: str):
    self._store.pop(key, None)
