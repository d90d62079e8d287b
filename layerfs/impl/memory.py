''' An in-memory read-only filesystem, built from a flat mapping of files

Usage:
ufs = Memory({ 'config/database': 'sqlite', 'index.html': b'<html/>' })
'''
import io
import time
import itertools
import dataclasses
import typing as t
from layerfs.spec import UFS, FileStat
from layerfs.utils.pathlib import SafePurePosixPath, SafePurePosixPath_, PathLike

@dataclasses.dataclass
class MemoryInode:
  info: FileStat
  content: bytes = bytes()

class Memory(UFS):
  def __init__(self, files: t.Optional[t.Mapping[PathLike, bytes | str]] = None):
    '''
    files: dict
      A mapping from [file path]: content, parent directories are implied
    '''
    super().__init__()
    root = SafePurePosixPath()
    self._inodes: dict[SafePurePosixPath_, MemoryInode] = {
      root: MemoryInode({ 'type': 'directory', 'size': 0, 'atime': None, 'ctime': None, 'mtime': None }),
    }
    self._dirs: dict[SafePurePosixPath_, set[str]] = { root: set() }
    self._cfd = iter(itertools.count(start=5))
    self._fds: dict[int, io.BytesIO] = {}
    for path, content in (files or {}).items():
      self._add(SafePurePosixPath(path), content.encode() if isinstance(content, str) else content)

  def _mkdirs(self, path: SafePurePosixPath_):
    if path in self._dirs: return
    if path in self._inodes: raise NotADirectoryError(path)
    self._mkdirs(path.parent)
    self._inodes[path] = MemoryInode({ 'type': 'directory', 'size': 0, 'atime': None, 'ctime': None, 'mtime': None })
    self._dirs[path] = set()
    self._dirs[path.parent].add(path.name)

  def _add(self, path: SafePurePosixPath_, content: bytes):
    if path in self._dirs: raise IsADirectoryError(path)
    self._mkdirs(path.parent)
    now = time.time()
    self._inodes[path] = MemoryInode({ 'type': 'file', 'size': len(content), 'atime': now, 'ctime': now, 'mtime': now }, content)
    self._dirs[path.parent].add(path.name)

  def to_dict(self):
    return dict(super().to_dict(),
      files={
        str(path): inode.content
        for path, inode in self._inodes.items()
        if inode.info['type'] == 'file'
      },
    )

  def ls(self, path):
    try: return list(self._dirs[path])
    except KeyError: raise FileNotFoundError(path)

  def info(self, path):
    try: return self._inodes[path].info
    except KeyError: raise FileNotFoundError(path)

  def open(self, path, mode = 'rb'):
    if mode != 'rb': raise NotImplementedError(mode)
    if path not in self._inodes: raise FileNotFoundError(path)
    if path in self._dirs: raise IsADirectoryError(path)
    fd = next(self._cfd)
    self._fds[fd] = io.BytesIO(self._inodes[path].content)
    return fd

  def seek(self, fd, pos, whence = 0):
    return self._fds[fd].seek(pos, whence)
  def read(self, fd, amnt = -1):
    return self._fds[fd].read(amnt)
  def close(self, fd):
    self._fds.pop(fd).close()
