''' Layers configured by url

Usage:
stack = stack_from_urls([
  'file:///usr/share/myapp',      # defaults
  'file:///home/me/.config/myapp', # overrides
])
'''
import logging
import functools
import typing as t
from layerfs.spec import UFS
from layerfs.stack import LayerStack
from layerfs.utils.url import parse_url, URLParsed

logger = logging.getLogger(__name__)

protos: t.Dict[t.Optional[str], t.Callable[[URLParsed], UFS]] = {}
def register_proto_handler(proto: t.Optional[str]):
  def decorator(func):
    protos[proto] = func
    return func
  return decorator

@functools.lru_cache()
def ufs_local():
  from layerfs.impl.local import Local
  return Local()

@register_proto_handler(None)
@register_proto_handler('file')
def proto_file(url: URLParsed):
  from layerfs.impl.prefix import Prefix
  return Prefix(ufs_local(), url['path'])

@functools.lru_cache()
def ufs_memory():
  from layerfs.impl.fsspec import FSSpec
  from fsspec.implementations.memory import MemoryFileSystem
  return FSSpec(MemoryFileSystem())

@register_proto_handler('memory')
def proto_memory(url: URLParsed):
  from layerfs.impl.prefix import Prefix
  return Prefix(ufs_memory(), url['path'])

def ufs_from_url(url: str, protos=protos) -> UFS:
  '''
  Usage:
  ufs = ufs_from_url('file:///usr/share/myapp')
  '''
  url_parsed = parse_url(url)
  if url_parsed['proto'] not in protos:
    raise NotImplementedError(url_parsed['proto'])
  return protos[url_parsed['proto']](url_parsed)

def stack_from_urls(urls: t.Iterable[str], protos=protos) -> LayerStack:
  ''' Build a stack from urls ordered from lowest to highest priority
  '''
  stack = LayerStack()
  for url in urls:
    stack.add(ufs_from_url(url, protos=protos), name=url)
  logger.debug(f"{stack!r}")
  return stack
