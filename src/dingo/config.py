"""Settings for a Dispatcher: where to listen, how pounce runs, templates, limits."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class DingoConfig:
    """Everything a dispatcher reads at startup. Frozen.

    Typical overrides::

        config = DingoConfig(port=3000, template_dir="views")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    workers: int = 1
    log_level: str = "info"
    keep_alive_timeout: float = 5.0
    request_timeout: float = 30.0

    # TLS (optional)
    ssl_certfile: str | None = None
    ssl_keyfile: str | None = None

    # Unix domain socket (optional, replaces host/port when set)
    unix_socket: str | None = None
    unix_socket_mode: int = 0o660

    # Templates
    template_dir: str | Path = "templates"
    autoescape: bool = True

    # Limits
    max_body_size: int = 1 << 20  # 1 MB
