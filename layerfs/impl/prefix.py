''' A filesystem view of a sub-path in another.
All operations stay within the path prefix.

Usage:
ufs = Prefix(UFS(), '/some/subpath/')
ufs = subdir(UFS(), 'some', 'subpath')
'''

import errno
import logging
import os
from layerfs.spec import UFS
from layerfs.utils.pathlib import SafePurePosixPath, PathLike

logger = logging.getLogger(__name__)

class Prefix(UFS):
  def __init__(self, ufs: UFS, prefix: PathLike = '/'):
    super().__init__()
    self._ufs = ufs
    self._prefix = SafePurePosixPath(prefix)

  @staticmethod
  def from_dict(*, ufs, prefix):
    return Prefix(
      ufs=UFS.from_dict(**ufs),
      prefix=prefix,
    )

  def to_dict(self):
    return dict(super().to_dict(),
      ufs=self._ufs.to_dict(),
      prefix=str(self._prefix),
    )

  def ls(self, path):
    return self._ufs.ls(self._prefix / path)
  def info(self, path):
    return self._ufs.info(self._prefix / path)
  def open(self, path, mode = 'rb'):
    return self._ufs.open(self._prefix / path, mode)
  def seek(self, fd, pos, whence = 0):
    return self._ufs.seek(fd, pos, whence)
  def read(self, fd, amnt = -1):
    return self._ufs.read(fd, amnt)
  def close(self, fd):
    return self._ufs.close(fd)

  def start(self):
    self._ufs.start()

  def stop(self):
    self._ufs.stop()

def subdir(ufs: UFS, *parts: PathLike) -> Prefix:
  ''' Scope `ufs` to the directory found by joining `parts`.
  Raises FileNotFoundError when it doesn't exist, NotADirectoryError when it's a file.
  '''
  prefix = SafePurePosixPath().joinpath(*parts)
  if ufs.info(prefix)['type'] != 'directory':
    raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(prefix))
  logger.debug(f"subdir({ufs!r}, {str(prefix)!r})")
  return Prefix(ufs, prefix)

def must_subdir(ufs: UFS, *parts: PathLike) -> Prefix:
  ''' Like `subdir` but for call sites where a missing directory is a configuration bug
  '''
  try:
    return subdir(ufs, *parts)
  except OSError as err:
    raise RuntimeError(f"can't find subdirectory {list(map(str, parts))}: {err}") from err
