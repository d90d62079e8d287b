''' The host filesystem, read-only. Combine with `Prefix` to root it somewhere.

Usage:
ufs = Prefix(Local(), '/usr/share/myapp')
'''
import os
import stat
import itertools
from layerfs.spec import UFS

class Local(UFS):
  def __init__(self):
    super().__init__()
    self._cfd = iter(itertools.count(start=5))
    self._fds = {}
  def ls(self, path):
    return os.listdir(str(path))
  def info(self, path):
    info = os.stat(str(path))
    if stat.S_ISDIR(info.st_mode):
      type = 'directory'
    elif stat.S_ISREG(info.st_mode):
      type = 'file'
    else:
      raise NotImplementedError(str(path))
    return {
      'type': type,
      'size': info.st_size,
      'atime': info.st_atime,
      'ctime': info.st_ctime,
      'mtime': info.st_mtime,
      'mode': info.st_mode,
    }
  def open(self, path, mode = 'rb'):
    if mode != 'rb': raise NotImplementedError(mode)
    fh = open(str(path), mode)
    fd = next(self._cfd)
    self._fds[fd] = fh
    return fd
  def seek(self, fd, pos, whence = 0):
    return self._fds[fd].seek(pos, whence)
  def read(self, fd, amnt = -1):
    return self._fds[fd].read(amnt)
  def close(self, fd):
    return self._fds.pop(fd).close()
