import pytest
from layerfs.stack import LayerStack
from layerfs.impl.memory import Memory
from layerfs.impl.prefix import Prefix, subdir, must_subdir
from layerfs.utils.pathlib import SafePurePosixPath

from layerfs.tests.fixtures import make_layer

def test_prefix():
  backing = Memory({ 'A/x': 'a', 'B/x': 'b' })
  ufs = Prefix(backing, '/A')
  assert ufs.ls(SafePurePosixPath()) == ['x']
  assert b''.join(ufs.cat(SafePurePosixPath('x'))) == b'a'
  # can't escape the prefix
  with pytest.raises(FileNotFoundError):
    ufs.open(SafePurePosixPath('../B/x'))

def test_subdir(make_layer):
  backing = make_layer({ 'layer0/x': '0', 'layer1/x': '1', 'layer1/deeper/y': 'y', 'file': 'f' })
  assert set(subdir(backing, 'layer1').ls(SafePurePosixPath())) == {'x', 'deeper'}
  assert subdir(backing, 'layer1', 'deeper').ls(SafePurePosixPath()) == ['y']
  assert set(subdir(backing).ls(SafePurePosixPath())) == {'layer0', 'layer1', 'file'}
  with pytest.raises(FileNotFoundError):
    subdir(backing, 'layer2')
  with pytest.raises(NotADirectoryError):
    subdir(backing, 'file')

def test_must_subdir():
  backing = Memory({ 'layer0/x': '0' })
  assert must_subdir(backing, 'layer0').ls(SafePurePosixPath()) == ['x']
  with pytest.raises(RuntimeError, match="can't find subdirectory") as exc:
    must_subdir(backing, 'layer', '2')
  assert isinstance(exc.value.__cause__, FileNotFoundError)

def test_stack_of_subdirectories():
  assets = Memory({
    'layer0/layer0': 'layer0',
    'layer1/layer1': 'layer1',
    'layer1/application.html.tpl': 'layer1',
    'layer2/layer2': 'layer2',
    'layer2/config/database': 'layer2',
  })
  stack = LayerStack()
  stack.add(must_subdir(Memory({ 'layer0/layer0': 'layer0', 'layer0/config/database': 'layer0' }), 'layer0'))
  stack.add(must_subdir(assets, 'layer1'))
  stack.add(must_subdir(assets, 'layer2'))
  assert stack.read_text('layer0') == 'layer0'
  assert stack.read_text('application.html.tpl') == 'layer1'
  assert stack.read_text('config/database') == 'layer2'
  with stack.open('config') as d:
    pages = []
    while True:
      try:
        pages.append(d.readdir(1))
      except EOFError:
        break
  assert [[e.name for e in page] for page in pages] == [['database']]
