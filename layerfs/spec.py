''' The read-only interface every layer backend implements
'''
import typing as t
from layerfs.utils.pathlib import SafePurePosixPath_

FileOpenMode = t.Literal['rb']
FileSeekWhence = t.Literal[0, 1, 2]
FileType = t.Literal['file', 'directory']

class _FileStatExtra(t.TypedDict, total=False):
  name: str
  mode: int

class FileStat(_FileStatExtra):
  type: FileType
  size: int
  atime: t.Optional[float]
  ctime: t.Optional[float]
  mtime: t.Optional[float]

class UFS:
  ''' A generic class interface for the filesystems which can be stacked as layers.

  Paths are always rooted `SafePurePosixPath`s, missing paths raise `FileNotFoundError`
  and opening a directory raises `IsADirectoryError`.
  '''
  CHUNK_SIZE = 5*1024

  @staticmethod
  def from_dict(*, cls, **kwargs):
    import importlib
    mod, _, name = cls.rpartition('.')
    cls = getattr(importlib.import_module(mod), name)
    if cls.from_dict is UFS.from_dict: return cls(**kwargs)
    else: return cls.from_dict(**kwargs)

  def to_dict(self) -> t.Dict[str, t.Any]:
    cls = self.__class__
    return dict(cls=f"{cls.__module__}.{cls.__name__}")

  # essential
  def ls(self, path: SafePurePosixPath_) -> t.List[str]:
    raise NotImplementedError()
  def info(self, path: SafePurePosixPath_) -> FileStat:
    raise NotImplementedError()

  def open(self, path: SafePurePosixPath_, mode: FileOpenMode = 'rb') -> int:
    raise NotImplementedError()
  def seek(self, fd: int, pos: int, whence: FileSeekWhence = 0):
    raise NotImplementedError()
  def read(self, fd: int, amnt: int = -1) -> bytes:
    raise NotImplementedError()
  def close(self, fd: int):
    raise NotImplementedError()

  # optional
  def start(self):
    pass
  def stop(self):
    pass

  def cat(self, path: SafePurePosixPath_) -> t.Iterator[bytes]:
    fd = self.open(path, 'rb')
    try:
      while True:
        buf = self.read(fd, self.CHUNK_SIZE)
        if not buf: break
        yield buf
    finally:
      self.close(fd)

  def __enter__(self):
    self.start()
    return self

  def __exit__(self, *args):
    self.stop()

  def __repr__(self) -> str:
    return f"UFS({repr(self.to_dict())})"
