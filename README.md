# slashlib

Self-contained building blocks for a small dynamic web runtime: a class
model, CGI/FastCGI request handling, codecs, digests, English inflection
and TCP sockets. Everything uses only the Python standard library.

Install with the test extra to run the test suite:

```
pip install -e .[test]
pytest
```

## Modules

| Module | Purpose |
| --- | --- |
| `slashlib.objmodel` | Classes with superclasses, containers, instance methods, constants, singleton classes and file paths derived from class names |
| `slashlib.platform` | Path resolution against a working directory, existence and type checks, a 32-bit random seed |
| `slashlib.base64codec` | Base64 encoder and a lenient decoder |
| `slashlib.inflect` | English ordinals and pluralisation |
| `slashlib.http_status` | HTTP reason phrases and status lines |
| `slashlib.digests` | MD5, SHA-1, SHA-224/256/384/512 and Whirlpool hex digests |
| `slashlib.jsoncodec` | JSON parsing with a nesting limit; compact dumping that rejects self-containing structures |
| `slashlib.cgiapi` | `StreamApi`: request input/output over binary streams, in CGI or FastCGI mode (`ApiType`) |
| `slashlib.cgirequest` | `RequestInfo` built from a CGI environment, hashbang detection, header-name conversion |
| `slashlib.cgi` | Option parsing (`CgiOptions`), help text, header writing and POST body reading |
| `slashlib.lineinput` | Prompted reading of one line |
| `slashlib.sockets` | `TCPSocket` and `TCP6Socket` with buffered line reading |

## Examples

### Object model

```python
from slashlib.objmodel import ClassRegistry, camel_case_to_underscore

registry = ClassRegistry()
net = registry.define_class("Net")
client = registry.define_class("HttpClient", container=net)

client.full_name()    # "Net::HttpClient"
client.file_path()    # "net/http_client"

client.set_constant("TIMEOUT", 30)
client.get_constant("TIMEOUT")       # 30
client.set_constant("TIMEOUT", 60)   # raises ConstantError (already defined)
client.get_constant("lower")         # raises ConstantError (must start with a capital)

client.define_method("init", lambda self, url: self.ivars.update(url=url))
obj = client.new("http://localhost/")
obj.ivars["url"]                     # "http://localhost/"

camel_case_to_underscore("HTTPRequestParser")   # "httprequest_parser"
```

`SlClass.new` raises `ArityError` when arguments are passed to a class that
has no `init` method. `class_of` skips singleton classes; `is_a` follows the
superclass chain.

### Status lines and inflection

```python
from slashlib.http_status import status_text, format_status_line
from slashlib.inflect import ordinalize, pluralize

status_text(404)          # "Not Found"
format_status_line(404)   # "404 Not Found"
format_status_line(299)   # "299"

ordinalize(22)            # "22nd"
pluralize("Child")        # "Children"
pluralize("sheep")        # "sheep"
pluralize("box")          # "boxes"
```

### Codecs and digests

```python
from slashlib import base64codec, jsoncodec
from slashlib.digests import algorithm

base64codec.encode("hi")        # "aGk="
base64codec.decode("aGk=")      # b"hi"  (characters outside the alphabet are skipped)

jsoncodec.parse('{"a": [1, 2]}')          # {"a": [1, 2]}
jsoncodec.parse("[[[]]]", max_depth=2)    # raises JSONParseError
jsoncodec.dump({"a": [1, 2.5, None]})     # '{"a":[1,2.5,null]}'

algorithm("sha256").hex_digest("")
# "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
```

`jsoncodec.dump` converts dict keys to strings, calls `to_json()` on other
objects and raises `JSONDumpError` for values without it or for structures
that contain themselves.

### CGI requests

```python
from slashlib.cgiapi import ApiType
from slashlib.cgirequest import load_request_info, hashbang_length
from slashlib.cgi import parse_arguments, write_headers, read_post_data

info = load_request_info(ApiType.CGI, {
    "REQUEST_URI": "/a?x=1",
    "QUERY_STRING": "x=1",
    "HTTP_USER_AGENT": "demo",
})
info.real_uri        # "/a"
info.http_headers    # [("User-Agent", "demo")]

hashbang_length(b"#!/usr/bin/slash\nprint")   # 17

options = parse_arguments(["prog", "-I", "lib", "-c", "4", "app.sl", "x"], environ={})
options.incpaths, options.fcgi_num_childs, options.script_filename, options.script_options
# (["lib"], 4, "app.sl", ["x"])

chunks = []
write_headers(chunks.append, 200, [("X-A", "1")])
"".join(chunks)
# "Status: 200 OK\r\nX-A: 1\r\nContent-Type: text/html; charset=utf-8\r\n\r\n"
```

In FastCGI mode `load_request_info` finds the script by trimming
`PATH_TRANSLATED` until the `file_exists` callback accepts it, and the
trimmed tail becomes the path info. `read_post_data` reads `CONTENT_LENGTH`
bytes through a callback such as `StreamApi.read_in` and raises
`ValueError("Invalid Request")` for a negative or out-of-range length.
`parse_arguments` raises `OptionsError` for a missing or non-positive option
value.

### Sockets

```python
from slashlib.sockets import TCPSocket

with TCPSocket() as sock:
    sock.connect("localhost", 8080)
    sock.write(b"GET / HTTP/1.0\r\n\r\n")
    first_line = sock.read_line()
```

`read` caps a request at 65535 bytes and returns `None` once the peer has
closed; operations on a closed socket raise `SocketClosedError`, other
failures `SocketError`.

## What this package does not do

It contains no script language: there is no lexer, parser, compiler or
interpreter to run scripts, and no command-line program, interactive shell
or CGI/FastCGI server process. The pieces above (option parsing, request
information, header output, line input) are the parts such a front end
would be built from, but the package does not start or serve anything by
itself.