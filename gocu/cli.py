"""Command line entry point: send HTTP requests and manage placeholder variables."""

from __future__ import annotations

import argparse
import logging
import re
import sys
from collections.abc import Iterable, Sequence

from gocu.cache import VariableError, VariableStore
from gocu.client import RequestError, RequestInfo, Response, prettify_json, send_request

_PLACEHOLDER = re.compile(r"\{\{.+?\}\}")
_DEFAULT_HEADERS = {"Content-Type": "application/json"}
_LOG_HANDLER_NAME = "gocu-cli"
_LOG_FORMAT = "%(asctime)s %(message)s"
_LOG_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


class _Parser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit status 1."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def extract_placeholders(text: str) -> list[str]:
    """Return every ``{{name}}`` placeholder found in text, in order."""
    return _PLACEHOLDER.findall(text)


def replace_vars(text: str, store: VariableStore) -> str:
    """Substitute each placeholder in text with the value of its variable."""
    if not text:
        return text
    for placeholder in extract_placeholders(text):
        name = placeholder.replace("{{", "", 1).replace("}}", "", 1)
        text = text.replace(placeholder, store.get(name))
    return text


def extract_headers(header_flags: Iterable[str], store: VariableStore) -> dict[str, str]:
    """Build the request headers from ``Name: value`` flags, JSON content type by default."""
    headers = dict(_DEFAULT_HEADERS)
    for flag in header_flags:
        name, *rest = flag.split(":")
        headers[name] = replace_vars(":".join(rest).strip(), store)
    return headers


def format_request_info(info: RequestInfo) -> str:
    """Describe the request about to be sent: request line, headers and body."""
    lines = [f"{info.method} {info.url}"]
    lines.extend(f"{name}: {value}" for name, value in info.headers.items())
    lines.append(prettify_json(info.data).decode("utf-8", errors="replace"))
    return "\n".join(lines)


def format_response(response: Response) -> str:
    """Describe a response: a blank line, the status, then the body."""
    return "\n".join(["", response.status, response.data])


def _configure_logging() -> logging.Logger:
    """Send informational log messages to the current stderr, timestamped."""
    logger = logging.getLogger()
    for handler in list(logger.handlers):
        if handler.get_name() == _LOG_HANDLER_NAME:
            logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_LOG_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _LOG_DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    return logger


def _request_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="gocu",
        description="Gocu is a curl copycat, a CLI http client focused on simplicity "
        "and ease of use. Use 'gocu vars' to manage the variables used as placeholders.",
    )
    parser.add_argument("url", help="URL to request; {{name}} placeholders are replaced")
    parser.add_argument("-X", "--request", default="GET", help="HTTP method to use")
    parser.add_argument("-d", "--data", default="", help="Data to send in the body of the request")
    parser.add_argument(
        "-H",
        "--header",
        action="append",
        default=[],
        help="Header to add to the request",
    )
    return parser


def _vars_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="gocu vars", description="Manage the variables used as placeholders")
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("ls", help="Lists all saved variables")
    get_cmd = commands.add_parser("get", help="Gets a variable value")
    get_cmd.add_argument("name")
    add_cmd = commands.add_parser("add", help="Adds a new variable")
    add_cmd.add_argument("name")
    add_cmd.add_argument("value")
    mod_cmd = commands.add_parser("mod", help="Modifies a variable value")
    mod_cmd.add_argument("name")
    mod_cmd.add_argument("value")
    rm_cmd = commands.add_parser("rm", help="Removes a variable")
    rm_cmd.add_argument("name")
    commands.add_parser("clear", help="Removes all saved variables")
    return parser


def _run_request(args: Sequence[str], store: VariableStore) -> int:
    options = _request_parser().parse_args(args)
    try:
        info = RequestInfo(
            method=options.request.upper(),
            url=replace_vars(options.url, store),
            data=replace_vars(options.data, store),
            headers=extract_headers(options.header, store),
        )
    except VariableError as err:
        print(err, file=sys.stderr)
        return 1

    print(format_request_info(info))
    try:
        response = send_request(info)
    except (RequestError, ValueError) as err:
        print(err, file=sys.stderr)
        return 1
    print(format_response(response))
    return 0


def _list_variables(store: VariableStore) -> None:
    variables = store.variables()
    if not variables:
        print("No variables saved")
        return
    for name, value in variables.items():
        print(f"{name}={value}")


def _run_vars(args: Sequence[str], store: VariableStore) -> int:
    options = _vars_parser().parse_args(args)
    try:
        if options.command == "ls":
            _list_variables(store)
        elif options.command == "get":
            print(store.get(options.name))
        elif options.command == "add":
            store.add(options.name, options.value)
        elif options.command == "mod":
            store.modify(options.name, options.value)
        elif options.command == "rm":
            store.remove(options.name)
        elif options.command == "clear":
            store.clear()
    except VariableError as err:
        print(err)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line interface and return its exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    _configure_logging()
    store = VariableStore()
    if args and args[0] == "vars":
        return _run_vars(args[1:], store)
    return _run_request(args, store)


if __name__ == "__main__":
    sys.exit(main())