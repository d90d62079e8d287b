''' Handles returned when opening a path.

A handle is either a `File` or a directory (`DirectoryHandle`), told apart by its
`type`, which is decided once when the path is resolved.
'''
import logging
import dataclasses
import typing as t
from layerfs.spec import UFS, FileStat, FileType, FileSeekWhence
from layerfs.utils.pathlib import SafePurePosixPath_

logger = logging.getLogger(__name__)

@dataclasses.dataclass(frozen=True)
class DirEntry:
  ''' An entry of a directory listing, attributed to the layer which provided it
  '''
  name: str
  path: SafePurePosixPath_
  ufs: UFS = dataclasses.field(repr=False, compare=False)

  def info(self) -> FileStat:
    return self.ufs.info(self.path)

  def is_dir(self) -> bool:
    return self.info()['type'] == 'directory'

  def is_file(self) -> bool:
    return self.info()['type'] == 'file'

class Handle:
  type: t.ClassVar[FileType]

  def stat(self) -> FileStat:
    raise NotImplementedError()
  def read(self, amnt: int = -1) -> bytes:
    raise NotImplementedError()
  def close(self):
    raise NotImplementedError()

  def __enter__(self):
    return self

  def __exit__(self, *args):
    self.close()

class File(Handle):
  type = 'file'

  def __init__(self, ufs: UFS, path: SafePurePosixPath_, fd: int):
    self._ufs = ufs
    self._path = path
    self._fd = fd

  def __repr__(self) -> str:
    return f"File({self._ufs!r}, {str(self._path)!r})"

  @property
  def name(self) -> str:
    return self._path.name

  def stat(self):
    return self._ufs.info(self._path)
  def read(self, amnt = -1):
    return self._ufs.read(self._fd, amnt)
  def seek(self, pos: int, whence: FileSeekWhence = 0):
    return self._ufs.seek(self._fd, pos, whence)
  def close(self):
    return self._ufs.close(self._fd)

class DirectoryHandle(Handle):
  ''' Pages through a snapshot of the directory's entries.

  The snapshot is taken on the first `readdir` and consumed from then on,
   there is no rewind.
  '''
  type = 'directory'

  def __init__(self):
    self._entries: t.Optional[t.Tuple[DirEntry, ...]] = None
    self._cursor = 0

  def _scan(self) -> t.Iterable[DirEntry]:
    raise NotImplementedError()

  def readdir(self, n: int = -1) -> t.List[DirEntry]:
    ''' Return the next (at most) n entries, all the remaining ones when n <= 0.

    When n > 0 and the directory is exhausted, raises EOFError.
    When n <= 0 and the directory is exhausted, returns an empty list.
    '''
    if self._entries is None:
      self._entries = tuple(self._scan())
      self._cursor = 0
    remaining = len(self._entries) - self._cursor
    if remaining == 0:
      if n > 0: raise EOFError()
      return []
    end = len(self._entries) if n <= 0 else self._cursor + min(n, remaining)
    batch = list(self._entries[self._cursor:end])
    self._cursor = end
    return batch

  def __iter__(self) -> t.Iterator[DirEntry]:
    yield from self.readdir()

  def close(self):
    self._entries = None
    self._cursor = 0

class Directory(DirectoryHandle):
  ''' A real directory in a single filesystem
  '''
  def __init__(self, ufs: UFS, path: SafePurePosixPath_):
    super().__init__()
    self._ufs = ufs
    self._path = path

  def __repr__(self) -> str:
    return f"Directory({self._ufs!r}, {str(self._path)!r})"

  @property
  def name(self) -> str:
    return self._path.name

  def _scan(self):
    for name in self._ufs.ls(self._path):
      yield DirEntry(name, self._path / name, self._ufs)

  def stat(self):
    return self._ufs.info(self._path)
  def read(self, amnt = -1):
    raise IsADirectoryError(str(self._path))

def open_handle(ufs: UFS, path: SafePurePosixPath_) -> Handle:
  ''' Open a path of a single filesystem as a File, or as a Directory when it is one
  '''
  try:
    fd = ufs.open(path, 'rb')
  except IsADirectoryError:
    logger.debug(f"{ufs!r}: {str(path)!r} is a directory")
    return Directory(ufs, path)
  return File(ufs, path, fd)
