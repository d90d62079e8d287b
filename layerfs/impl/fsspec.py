''' Any fsspec filesystem as a read-only layer

Usage:
from fsspec.implementations.zip import ZipFileSystem
ufs = FSSpec(ZipFileSystem('assets.zip'))
'''
import time
import json
import fsspec
import logging
import itertools
import functools
from datetime import datetime
from layerfs.spec import UFS
from layerfs.utils.cache import TTLCache
from layerfs.utils.pathlib import pathname, pathparent

logger = logging.getLogger(__name__)

def _timestamp(value):
  if isinstance(value, datetime): return value.timestamp()
  return value

def fsspec_info_to_ufs_info(info):
  now = time.time()
  return {
    'type': info['type'],
    'size': info.get('size') or 0,
    'atime': _timestamp(info.get('atime', now)),
    'ctime': _timestamp(info.get('ctime', info.get('created', info.get('CreationDate', now)))),
    'mtime': _timestamp(info.get('mtime', info.get('modified', info.get('LastModified', now)))),
  }

def fsspec_ls(fs, path: str):
  detail = fs.ls(path, detail=True)
  ret = {
    pathname(item['name']): fsspec_info_to_ufs_info(item)
    for item in detail
    if pathparent(item['name']) == path
  }
  logger.debug(f"ls({path!r}) -> {list(ret)}")
  return ret

def fsspec_info(fs, path: str):
  return fsspec_info_to_ufs_info(fs.info(path))

class FSSpec(UFS):
  def __init__(self, fs: fsspec.AbstractFileSystem, ttl=60):
    super().__init__()
    self._ttl = ttl
    self._fs = fs
    self._cfd = iter(itertools.count(start=5))
    self._fds = {}
    self._ls_cache = TTLCache(resolve=functools.partial(fsspec_ls, self._fs), ttl=ttl)
    self._info_cache = TTLCache(resolve=functools.partial(fsspec_info, self._fs), ttl=ttl)

  @staticmethod
  def from_dict(*, fs, ttl):
    return FSSpec(
      fs=fsspec.AbstractFileSystem.from_json(json.dumps(fs)),
      ttl=ttl,
    )

  def to_dict(self):
    return dict(super().to_dict(),
      fs=json.loads(self._fs.to_json()),
      ttl=self._ttl,
    )

  def _path(self, path) -> str:
    return self._fs.root_marker + str(path)[1:]

  def ls(self, path):
    if self.info(path)['type'] != 'directory': raise NotADirectoryError(path)
    listing = self._ls_cache(self._path(path))
    for p, info in listing.items():
      self._info_cache[self._path(path / p)] = info
    return list(listing.keys())

  def info(self, path):
    info = self._info_cache(self._path(path))
    if info is None: raise FileNotFoundError(path)
    return info

  def open(self, path, mode = 'rb'):
    if mode != 'rb': raise NotImplementedError(mode)
    # some implementations happily open directories
    if self.info(path)['type'] == 'directory': raise IsADirectoryError(path)
    fd = next(self._cfd)
    self._fds[fd] = self._fs.open(self._path(path), mode)
    return fd
  def seek(self, fd, pos, whence = 0):
    return self._fds[fd].seek(pos, whence)
  def read(self, fd, amnt = -1):
    return self._fds[fd].read(amnt)
  def close(self, fd):
    return self._fds.pop(fd).close()
