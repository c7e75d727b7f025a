# gocu

A small command-line HTTP client for sending requests with little typing. Requests carry `Content-Type: application/json` by default, and JSON in request and response bodies is printed indented by two spaces. Values can be saved as named variables and used as `{{name}}` placeholders in a URL, a body or a header value.

It uses only the Python standard library.

## Installation

```
pip install .
```

This installs the `gocu` command. `python -m gocu.cli` runs the same program.

## Sending requests

```
gocu https://api.example.com/items
gocu -X post -d '{"name": "widget"}' https://api.example.com/items
gocu -X PUT -H "Authorization: Bearer token" -d '{"name": "gadget"}' https://api.example.com/items/1
gocu -X delete https://api.example.com/items/1
```

Options:

- `-X`, `--request`: the HTTP method. It can be GET, POST, PUT, PATCH or DELETE, in any case. The default is GET.
- `-d`, `--data`: the request body. An empty body sends no body at all.
- `-H`, `--header`: a header written as `Name: value`. The part before the first colon is the name. The rest, with surrounding spaces removed, is the value. You can give this option more than once. `Content-Type: application/json` is always set unless a `-H` option replaces it.

gocu first prints the request: the method and URL on one line, then each header as `Name: value`, then the body. It then sends the request and prints a blank line, the response status (for example `200 OK`), and the response body. Error statuses such as `404 Not Found` are printed in the same way.

If the method is not supported or the request cannot be made, for example because the host cannot be reached, gocu prints an error to standard error and exits with status 1.

## Variables

A placeholder such as `{{host}}` is replaced with the saved value of the variable `host`. Placeholders work in the URL, in the body and in header values. If a placeholder names a variable that does not exist, gocu prints an error and exits with status 1 without sending anything.

```
gocu vars add host https://api.example.com
gocu vars add auth "Bearer token"
gocu -H "Authorization: {{auth}}" {{host}}/items
```

Commands for managing variables:

```
gocu vars ls              # list all saved variables as NAME=VALUE
gocu vars get NAME        # print one variable's value
gocu vars add NAME VALUE  # add a new variable; an existing one is not overwritten
gocu vars mod NAME VALUE  # change the value of an existing variable
gocu vars rm NAME         # remove a variable
gocu vars clear           # remove every variable
```

`gocu vars ls` prints `No variables saved` when there are none. When a `vars` command fails, for example when you add a name that already exists, the message is printed on standard output. Changes are logged with a timestamp on standard error.

Variables are stored in a file named `gocu.cache` in your user cache directory:

- Linux and other Unix systems: `$XDG_CACHE_HOME`, or `~/.cache` if that is not set
- macOS: `~/Library/Caches`
- Windows: `%LOCALAPPDATA%`

The file is created when it is first needed. Every change is written to the file right away.

## Using it from Python

```python
from gocu.cache import VariableStore, VariableError, default_cache_path
from gocu.client import RequestInfo, RequestError, send_request, prettify_json

store = VariableStore(default_cache_path())
store.add("host", "https://api.example.com")
print(store.variables())

response = send_request(RequestInfo(method="GET", url=store.get("host") + "/items"))
print(response.status)
print(response.data)

print(prettify_json('{"a": [1, 2]}').decode())
```

- `gocu.cache.VariableStore(path)` keeps variables in a cache file. Its methods are `variables()`, `get(name)`, `add(name, value)`, `modify(name, value)`, `remove(name)` and `clear()`. They raise `VariableError` when a variable is missing, already exists, or the file cannot be read or written. `parse_cache_content` and `format_cache_content` convert between the file's text and a dictionary.
- `gocu.client.send_request(info)` sends a `RequestInfo(method, url, data, headers)` and returns a `Response(status, data)`. It raises `ValueError` for an unsupported method and `RequestError` when the request cannot be made. `get`, `post`, `put`, `patch` and `delete` send one method directly.
- `gocu.client.prettify_json(data)` indents JSON by two spaces and keeps every token as written. It returns empty bytes for input that is not valid JSON.
- `gocu.cli` provides `main(argv=None)`, which returns the exit status, and the helpers `extract_placeholders`, `replace_vars`, `extract_headers`, `format_request_info` and `format_response`.

## What it does not do

- Only JSON bodies are shown. A request or response body that is not valid JSON, such as HTML or plain text, is printed as an empty line.
- Response headers are not printed, and the response body is not saved to a file.
- There are no options for timeouts, redirects, authentication, proxies or TLS settings. Redirects are followed by default.
- Methods other than GET, POST, PUT, PATCH and DELETE are rejected.
- Variable names and values cannot contain the zero-width space character (U+200B), because the cache file uses it as a separator.