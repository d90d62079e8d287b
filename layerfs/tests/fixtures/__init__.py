import pytest
import pathlib
import contextlib

@pytest.fixture(params=[
  p.stem
  for p in pathlib.Path(__file__).parent.glob('[!_]*.py')
])
def make_layer(request):
  ''' Build layers from `{path: content}` mappings with each backend of the fixtures directory,
  so that the stack is tested uniformly over all of them
  '''
  import importlib
  factory = contextlib.contextmanager(importlib.import_module(f"layerfs.tests.fixtures.{request.param}").ufs)
  with contextlib.ExitStack() as stack:
    yield lambda files={}: stack.enter_context(factory(files))
