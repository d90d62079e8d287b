import re
import typing as t

class URLParsed(t.TypedDict):
  proto: t.Optional[str]
  path: str
  fragment: t.Optional[str]

url_expr = re.compile(r'((?P<proto>[^:/]+)://)?(?P<path>[^#]*)(#(?P<fragment>.*))?')

def parse_url(url: str) -> URLParsed:
  ''' Separate the protocol, path and fragment of a layer url
   (proto:///some/path#fragment_section)
  '''
  m = url_expr.fullmatch(url)
  if not m: raise ValueError(f"Invalid url: {url}")
  return m.groupdict()
