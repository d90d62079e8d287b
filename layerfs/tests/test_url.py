import uuid
import pytest
from layerfs.url import ufs_from_url, stack_from_urls
from layerfs.utils.url import parse_url

def test_url_parse():
  assert parse_url('file:///usr/share/app#frag') == dict(
    proto='file',
    path='/usr/share/app',
    fragment='frag',
  )
  assert parse_url('memory://bucket/prefix') == dict(
    proto='memory',
    path='bucket/prefix',
    fragment=None,
  )
  assert parse_url('/just/a/path') == dict(
    proto=None,
    path='/just/a/path',
    fragment=None,
  )

def test_unknown_proto():
  with pytest.raises(NotImplementedError):
    ufs_from_url('gopher://somewhere')

def test_stack_from_file_urls(tmp_path):
  (tmp_path/'defaults'/'config').mkdir(parents=True)
  (tmp_path/'defaults'/'config'/'database').write_text('sqlite')
  (tmp_path/'defaults'/'config'/'cache').write_text('none')
  (tmp_path/'user'/'config').mkdir(parents=True)
  (tmp_path/'user'/'config'/'database').write_text('postgres')
  urls = [f"file://{tmp_path/'defaults'}", str(tmp_path/'user')]
  stack = stack_from_urls(urls)
  assert [layer.name for layer in stack.layers] == urls[::-1]
  assert stack.read_text('config/database') == 'postgres'
  assert stack.read_text('config/cache') == 'none'
  assert set(stack.listdir('config')) == {'database', 'cache'}

def test_stack_from_memory_urls():
  from fsspec.implementations.memory import MemoryFileSystem
  fs = MemoryFileSystem()
  root = f"/{uuid.uuid4()}"
  fs.pipe_file(f"{root}/defaults/x", b'default')
  fs.pipe_file(f"{root}/defaults/y", b'default')
  fs.pipe_file(f"{root}/user/x", b'user')
  try:
    stack = stack_from_urls([f"memory:/{root}/defaults", f"memory:/{root}/user"])
    assert stack.read_text('x') == 'user'
    assert stack.read_text('y') == 'default'
    assert set(stack.listdir()) == {'x', 'y'}
  finally:
    fs.rm(root, recursive=True)
