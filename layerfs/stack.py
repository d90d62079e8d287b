''' Stack filesystems as layers, the most recently added one wins.

Usage:
stack = LayerStack()
stack.add(Prefix(Local(), '/usr/share/myapp'), name='defaults')
stack.add(Prefix(Local(), '/home/me/.config/myapp'), name='user')
stack.read_text('config/database')   # the user's, when they have one
stack.listdir('config')              # names from both

Layers may only be added while nothing is being read through the stack.
'''
import os
import errno
import logging
import dataclasses
import typing as t
from layerfs.spec import UFS, FileStat
from layerfs.handle import Handle, open_handle
from layerfs.directory import MergedDirectory
from layerfs.utils.pathlib import SafePurePosixPath, SafePurePosixPath_

logger = logging.getLogger(__name__)

ROOT = '/'

@dataclasses.dataclass(frozen=True)
class Layer:
  ufs: UFS
  name: str

class LayerStack:
  def __init__(self, layers: t.Iterable[Layer] = ()):
    '''
    layers: highest priority first
    '''
    self._layers: t.List[Layer] = list(layers)

  @staticmethod
  def from_dict(*, layers):
    return LayerStack(
      Layer(ufs=UFS.from_dict(**layer['ufs']), name=layer['name'])
      for layer in layers
    )

  def to_dict(self):
    return dict(
      layers=[
        dict(name=layer.name, ufs=layer.ufs.to_dict())
        for layer in self._layers
      ],
    )

  def __repr__(self) -> str:
    return f"LayerStack({[layer.name for layer in self._layers]!r})"

  @property
  def layers(self) -> t.Tuple[Layer, ...]:
    return tuple(self._layers)

  def add(self, ufs: UFS, name: t.Optional[str] = None) -> Layer:
    ''' Put `ufs` on top of the stack, it will shadow the paths of all the layers before it
    name: a label for the layer, only used for diagnostics
    '''
    layer = Layer(ufs=ufs, name=name or f"{ufs.__class__.__name__}#{len(self._layers)}")
    self._layers.insert(0, layer)
    logger.debug(f"added layer {layer.name} ({len(self._layers)} layers)")
    return layer

  def open(self, path: str) -> Handle:
    ''' Open `path` in the first layer which has it. Directories are merged across layers.
    '''
    layers = self.layers
    if SafePurePosixPath(path).is_root:
      # '/', '//', '/.' name the composed root which isn't addressable, '.', '', './' are the stack itself
      if path.startswith(ROOT):
        raise PermissionError(errno.EPERM, os.strerror(errno.EPERM), path)
      return MergedDirectory(layers, path)
    err = None
    for layer in layers:
      try:
        handle = open_handle(layer.ufs, SafePurePosixPath(path))
      except OSError as e:
        logger.debug(f"{layer.name}: {path!r} {e!r}")
        err = e
        continue
      try:
        info = handle.stat()
      except OSError as e:
        logger.debug(f"{layer.name}: stat {path!r} failed, treating as a file {e!r}")
        return handle
      if info['type'] == 'directory':
        return MergedDirectory(layers, path, handle)
      return handle
    if err is None:
      raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
    raise err

  # conveniences
  def read_bytes(self, path: str) -> bytes:
    with self.open(path) as fh:
      return fh.read()

  def read_text(self, path: str, encoding='utf-8') -> str:
    return self.read_bytes(path).decode(encoding)

  def exists(self, path: str) -> bool:
    try:
      self.open(path).close()
      return True
    except FileNotFoundError:
      return False

  def listdir(self, path: str = '.') -> t.List[str]:
    with self.open(path) as fh:
      if fh.type != 'directory':
        raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), path)
      return [entry.name for entry in fh.readdir()]

  def walk(self, path: str = '.', dirfirst=True) -> t.Iterator[t.Tuple[SafePurePosixPath_, FileStat]]:
    '''
    :params dirfirst: Controls whether the directories are yielded before or after their contents

    dirfirst=True: / /a/ /a/b /a/c ...
    dirfirst=False: ... /a/b /a/c /a/ /
    '''
    with self.open(path) as fh:
      info = fh.stat()
      if fh.type != 'directory':
        yield SafePurePosixPath(path), info
        return
      entries = fh.readdir()
    if dirfirst: yield SafePurePosixPath(path), info
    Q = [(entry, False) for entry in entries]
    while Q:
      entry, empty = Q.pop()
      i = entry.info()
      if i['type'] != 'directory' or empty:
        yield entry.path, i
      else:
        if dirfirst:
          yield entry.path, i
        else:
          Q += [(entry, True)]
        with self.open(str(entry.path)[1:]) as d:
          Q += [(e, False) for e in d.readdir()]
    if not dirfirst: yield SafePurePosixPath(path), info

  def start(self):
    for layer in reversed(self._layers):
      layer.ufs.start()

  def stop(self):
    for layer in self._layers:
      layer.ufs.stop()

  def __enter__(self):
    self.start()
    return self

  def __exit__(self, *args):
    self.stop()
