''' Rooted posix paths which layers are addressed with
'''
import pathlib
import typing as t

class SafePurePosixPath_:
  def __init__(self, path: pathlib.PurePosixPath = pathlib.PurePosixPath('/')):
    self._path = path
  def __hash__(self):
    return hash(self._path)
  def __eq__(self, other):
    return isinstance(other, SafePurePosixPath_) and self._path == other._path
  @property
  def parent(self):
    return SafePurePosixPath_(self._path.parent)
  @property
  def name(self) -> str:
    return self._path.name
  @property
  def parts(self) -> t.Tuple[str, ...]:
    return self._path.parts
  @property
  def is_root(self) -> bool:
    return self._path == self._path.parent
  def joinpath(self, *other):
    p = self
    for op in other:
      p = p / op
    return p
  def __truediv__(self, subpath: 'PathLike'):
    p = self._path
    sp = subpath if isinstance(subpath, (pathlib.PurePosixPath, SafePurePosixPath_)) else pathlib.PurePosixPath(str(subpath))
    for part in sp.parts:
      if part == '..': p = p.parent
      elif part in ['//', '/', '.', '']: pass
      else: p = p / part
    return SafePurePosixPath_(p)
  def __str__(self) -> str:
    return str(self._path)
  def __repr__(self) -> str:
    return f"SafePurePosixPath({repr(str(self._path))})"

PathLike: t.TypeAlias = bytes | str | pathlib.PurePosixPath | SafePurePosixPath_

def SafePurePosixPath(path: PathLike = None) -> SafePurePosixPath_:
  ''' This ensures the path will always be /something
  It's not possible to go above the root, // or /./ does nothing, etc..
  '''
  if not path:
    return SafePurePosixPath_()
  if isinstance(path, bytes):
    path = path.decode()
  if isinstance(path, SafePurePosixPath_):
    return path
  return SafePurePosixPath_() / path

def pathparent(path: str):
  parent, sep, _name = str(path).rstrip('/').rpartition('/')
  if parent == '': return sep or ''
  else: return parent

def pathname(path: str):
  _parent, sep, name = str(path).rstrip('/').rpartition('/')
  if not name: return sep or ''
  else: return name
