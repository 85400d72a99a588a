"""Builtin module tables for Node.js and Python."""

from __future__ import annotations

import sys

NODE_BUILTINS: frozenset[str] = frozenset(
    {
        "assert",
        "async_hooks",
        "buffer",
        "child_process",
        "cluster",
        "console",
        "constants",
        "crypto",
        "dgram",
        "diagnostics_channel",
        "dns",
        "domain",
        "events",
        "fs",
        "http",
        "http2",
        "https",
        "inspector",
        "module",
        "net",
        "os",
        "path",
        "perf_hooks",
        "process",
        "punycode",
        "querystring",
        "readline",
        "repl",
        "stream",
        "string_decoder",
        "sys",
        "timers",
        "tls",
        "trace_events",
        "tty",
        "url",
        "util",
        "v8",
        "vm",
        "wasi",
        "worker_threads",
        "zlib",
    }
)

# Modules removed from recent interpreters still count as standard library.
_LEGACY_STDLIB = frozenset(
    {
        "aifc",
        "asynchat",
        "asyncore",
        "audioop",
        "binhex",
        "cgi",
        "cgitb",
        "chunk",
        "crypt",
        "distutils",
        "imghdr",
        "imp",
        "lib2to3",
        "mailcap",
        "msilib",
        "nis",
        "nntplib",
        "ossaudiodev",
        "parser",
        "pipes",
        "smtpd",
        "sndhdr",
        "spwd",
        "sunau",
        "symbol",
        "telnetlib",
        "uu",
        "xdrlib",
    }
)

PYTHON_STDLIB: frozenset[str] = frozenset(sys.stdlib_module_names) | _LEGACY_STDLIB


def is_node_builtin(specifier: str) -> bool:
    """``fs``, ``fs/promises`` and any ``node:``-prefixed specifier."""
    if specifier.startswith("node:"):
        return True
    return specifier.split("/", 1)[0] in NODE_BUILTINS


def is_python_builtin(specifier: str) -> bool:
    """True when the top-level package of an absolute import is stdlib."""
    if specifier.startswith("."):
        return False
    return specifier.split(".", 1)[0] in PYTHON_STDLIB


__all__ = ["NODE_BUILTINS", "PYTHON_STDLIB", "is_node_builtin", "is_python_builtin"]
