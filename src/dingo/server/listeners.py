"""Listener acquisition: TCP, TLS and Unix domain sockets.

Each function binds and returns a ``Listener`` or raises the underlying
``OSError``/``ssl.SSLError``. Nothing here retries. Binding up front
surfaces "address in use" and bad certificate files at startup, before
the server runner takes over.
"""

import contextlib
import os
import socket
import ssl
from dataclasses import dataclass

DEFAULT_BACKLOG = 128


@dataclass(frozen=True, slots=True)
class Listener:
    """A bound, listening socket and the address it was bound with."""

    sock: socket.socket
    host: str | None = None
    port: int | None = None
    uds: str | None = None
    uds_mode: int | None = None
    ssl_certfile: str | None = None
    ssl_keyfile: str | None = None
    ssl_context: ssl.SSLContext | None = None

    @property
    def is_tls(self) -> bool:
        return self.ssl_context is not None

    def close(self) -> None:
        self.sock.close()


def _tcp_socket(host: str, port: int) -> socket.socket:
    sock = socket.create_server((host, port), backlog=DEFAULT_BACKLOG)
    return sock


def tcp_listener(host: str, port: int) -> Listener:
    """Bind a plain TCP listener on ``host:port`` (port 0 picks one)."""
    sock = _tcp_socket(host, port)
    bound_host, bound_port = sock.getsockname()[:2]
    return Listener(sock=sock, host=bound_host, port=bound_port)


def tls_listener(host: str, port: int, certfile: str, keyfile: str) -> Listener:
    """Bind a TCP listener whose connections are wrapped in TLS.

    The certificate/key pair is loaded before binding, so a bad pair
    never leaves a socket behind.
    """
    context = ssl.create_default_context(ssl.Purpose.CLIENT_AUTH)
    context.set_alpn_protocols(["http/1.1"])
    context.load_cert_chain(certfile, keyfile)

    sock = _tcp_socket(host, port)
    bound_host, bound_port = sock.getsockname()[:2]
    return Listener(
        sock=context.wrap_socket(sock, server_side=True),
        host=bound_host,
        port=bound_port,
        ssl_certfile=certfile,
        ssl_keyfile=keyfile,
        ssl_context=context,
    )


def unix_listener(path: str, mode: int) -> Listener:
    """Bind a Unix domain socket at *path* and ``chmod`` it to *mode*.

    A stale socket file at *path* is removed first.
    """
    with contextlib.suppress(FileNotFoundError):
        os.remove(path)

    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        sock.bind(path)
        os.chmod(path, mode)
        sock.listen(DEFAULT_BACKLOG)
    except OSError:
        sock.close()
        raise
    return Listener(sock=sock, uds=path, uds_mode=mode)
