"""Server runner — hands the dispatcher to a pounce ASGI server.

Connection handling, keep-alive and timeouts all belong to pounce. The
listener passed in decides where pounce binds: host/port, TLS files, or
a Unix socket path.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dingo.server.listeners import Listener

if TYPE_CHECKING:
    from dingo.app import Dispatcher
    from dingo.config import DingoConfig

logger = logging.getLogger("dingo.server")


def server_options(listener: Listener, config: DingoConfig) -> dict[str, object]:
    """Translate a listener and config into pounce ``ServerConfig`` options."""
    options: dict[str, object] = {
        "workers": config.workers,
        "log_level": config.log_level,
        "keep_alive_timeout": config.keep_alive_timeout,
        "request_timeout": config.request_timeout,
        "max_request_size": config.max_body_size,
    }
    if listener.uds is not None:
        options["uds"] = listener.uds
        options["uds_permissions"] = (
            listener.uds_mode if listener.uds_mode is not None else config.unix_socket_mode
        )
    else:
        options["host"] = listener.host
        options["port"] = listener.port
    if listener.is_tls:
        options["ssl_certfile"] = listener.ssl_certfile
        options["ssl_keyfile"] = listener.ssl_keyfile
    return options


def run_server(app: Dispatcher, listener: Listener, *, config: DingoConfig) -> None:
    """Serve *app* on the address *listener* was bound to. Blocks.

    The bound socket is closed right before pounce binds the same
    address, so the pair never competes for it.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    options = server_options(listener, config)
    listener.close()

    where = listener.uds or f"{listener.host}:{listener.port}"
    logger.info("serving on %s%s", where, " (tls)" if listener.is_tls else "")

    server = Server(ServerConfig(**options), app)
    server.run()
