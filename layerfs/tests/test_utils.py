import pytest

def test_safe_path():
  from layerfs.utils.pathlib import SafePurePosixPath
  assert str(SafePurePosixPath()) == '/'
  assert str(SafePurePosixPath('.')) == '/'
  assert str(SafePurePosixPath('a/b')) == '/a/b'
  assert str(SafePurePosixPath('/a/./b//c')) == '/a/b/c'
  assert str(SafePurePosixPath('../../a')) == '/a'
  assert SafePurePosixPath('a/b').parent == SafePurePosixPath('a')
  assert SafePurePosixPath('a/b').name == 'b'
  assert SafePurePosixPath('a/b').parts == ('/', 'a', 'b')
  assert SafePurePosixPath('a') != '/a'
  assert SafePurePosixPath().is_root
  assert not SafePurePosixPath('a').is_root
  assert str(SafePurePosixPath().joinpath('a', 'b/c')) == '/a/b/c'

def test_pathname_pathparent():
  from layerfs.utils.pathlib import pathname, pathparent
  assert pathname('/a/b/') == 'b'
  assert pathparent('/a/b') == '/a'
  assert pathparent('/a') == '/'

def test_ttl_cache():
  from layerfs.utils.cache import TTLCache
  calls = []
  def resolve(key):
    calls.append(key)
    if key == 'missing': raise FileNotFoundError(key)
    return key.upper()
  cache = TTLCache(resolve=resolve, ttl=60)
  assert cache('a') == 'A'
  assert cache('a') == 'A'
  with pytest.raises(FileNotFoundError): cache('missing')
  with pytest.raises(FileNotFoundError): cache('missing')
  assert calls == ['a', 'missing']
  cache['b'] = 'preset'
  assert cache('b') == 'preset'
  cache.discard('a')
  assert cache('a') == 'A'
  assert calls == ['a', 'missing', 'a']

def test_ttl_cache_expires():
  from layerfs.utils.cache import TTLCache
  calls = []
  cache = TTLCache(resolve=calls.append, ttl=-1)
  cache('a')
  cache('a')
  assert calls == ['a', 'a']
