''' A directory which is the union of the same directory in every layer
'''
import io
import stat
import logging
import typing as t
from layerfs.spec import FileStat
from layerfs.handle import DirEntry, DirectoryHandle, Handle
from layerfs.utils.pathlib import SafePurePosixPath

if t.TYPE_CHECKING:
  from layerfs.stack import Layer

logger = logging.getLogger(__name__)

DEFAULT_DIRECTORY_MODE = stat.S_IFDIR | 0o755

def synthetic_info(name: str) -> FileStat:
  ''' Metadata for a directory which has no real counterpart in any layer
  '''
  return {
    'type': 'directory',
    'name': name,
    'size': 0,
    'mode': DEFAULT_DIRECTORY_MODE,
    'atime': 0.0,
    'ctime': 0.0,
    'mtime': 0.0,
  }

class MergedDirectory(DirectoryHandle):
  '''
  layers: the layers at the time of opening, highest priority first
  name: the path as it was requested
  handle: the real directory of the first layer which had one, used for `stat`
  '''
  def __init__(self, layers: t.Sequence['Layer'], name: str, handle: t.Optional[Handle] = None):
    super().__init__()
    self._layers = tuple(layers)
    self._name = name
    self._path = SafePurePosixPath(name)
    self._handle = handle

  def __repr__(self) -> str:
    return f"MergedDirectory({self._name!r}, layers={[layer.name for layer in self._layers]!r})"

  @property
  def name(self) -> str:
    return self._name

  @property
  def is_virtual(self) -> bool:
    return self._handle is None

  def _scan(self):
    # names are claimed by the first layer which lists them
    merged: t.Dict[str, DirEntry] = {}
    for layer in self._layers:
      try:
        names = layer.ufs.ls(self._path)
      except OSError as err:
        logger.debug(f"{layer.name}: skipping {str(self._path)!r} ({err!r})")
        continue
      for name in names:
        if name not in merged:
          merged[name] = DirEntry(name, self._path / name, layer.ufs)
    return merged.values()

  def stat(self):
    if self._handle is None:
      return synthetic_info(self._name)
    return self._handle.stat()

  def read(self, amnt = -1):
    if self._handle is None:
      raise io.UnsupportedOperation(f"{self._name!r} is a virtual directory")
    return self._handle.read(amnt)

  def close(self):
    super().close()
    if self._handle is not None:
      return self._handle.close()
