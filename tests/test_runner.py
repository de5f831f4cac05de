"""Tests for dingo.server.runner — handing the dispatcher to pounce."""

import logging
from unittest import mock

import pytest

from dingo.app import Dispatcher
from dingo.config import DingoConfig
from dingo.server.listeners import Listener
from dingo.server.runner import run_server, server_options


def _listener(**kwargs: object) -> Listener:
    return Listener(sock=mock.Mock(), **kwargs)  # type: ignore[arg-type]


class TestServerOptions:
    def test_tcp(self) -> None:
        config = DingoConfig(workers=4, log_level="debug", keep_alive_timeout=2.0)
        options = server_options(_listener(host="0.0.0.0", port=8080), config)
        assert options == {
            "workers": 4,
            "log_level": "debug",
            "keep_alive_timeout": 2.0,
            "request_timeout": 30.0,
            "max_request_size": 1 << 20,
            "host": "0.0.0.0",
            "port": 8080,
        }

    def test_unix_socket(self) -> None:
        options = server_options(_listener(uds="/run/dingo.sock"), DingoConfig())
        assert options["uds"] == "/run/dingo.sock"
        assert "host" not in options
        assert "port" not in options

    def test_unix_socket_mode(self) -> None:
        config = DingoConfig(unix_socket_mode=0o600)
        options = server_options(_listener(uds="/run/dingo.sock"), config)
        assert options["uds_permissions"] == 0o600

    def test_listener_socket_mode_wins(self) -> None:
        listener = _listener(uds="/run/dingo.sock", uds_mode=0o640)
        options = server_options(listener, DingoConfig(unix_socket_mode=0o600))
        assert options["uds_permissions"] == 0o640

    def test_no_socket_mode_for_tcp(self) -> None:
        options = server_options(_listener(host="127.0.0.1", port=80), DingoConfig())
        assert "uds_permissions" not in options

    def test_max_body_size(self) -> None:
        config = DingoConfig(max_body_size=8 << 20)
        options = server_options(_listener(host="127.0.0.1", port=80), config)
        assert options["max_request_size"] == 8 << 20

    def test_tls(self) -> None:
        listener = _listener(
            host="127.0.0.1",
            port=8443,
            ssl_certfile="cert.pem",
            ssl_keyfile="key.pem",
            ssl_context=mock.Mock(),
        )
        options = server_options(listener, DingoConfig())
        assert options["ssl_certfile"] == "cert.pem"
        assert options["ssl_keyfile"] == "key.pem"

    def test_no_tls_files_without_context(self) -> None:
        options = server_options(_listener(host="127.0.0.1", port=80), DingoConfig())
        assert "ssl_certfile" not in options


class TestRunServer:
    def test_hands_app_to_pounce(self, caplog: pytest.LogCaptureFixture) -> None:
        app = Dispatcher()
        listener = _listener(host="127.0.0.1", port=8000)
        config = DingoConfig()

        with (
            mock.patch("pounce.config.ServerConfig") as server_config,
            mock.patch("pounce.server.Server") as server,
            caplog.at_level(logging.INFO, logger="dingo.server"),
        ):
            run_server(app, listener, config=config)

        server_config.assert_called_once_with(**server_options(listener, config))
        server.assert_called_once_with(server_config.return_value, app)
        server.return_value.run.assert_called_once_with()
        listener.sock.close.assert_called_once_with()
        assert "serving on 127.0.0.1:8000" in caplog.text

    def test_serve_acquires_listener(self) -> None:
        app = Dispatcher(DingoConfig(host="127.0.0.1", port=0))
        app.static_route("/", lambda ctx: ctx.write("hi"), "GET")

        with mock.patch("dingo.server.runner.run_server") as run:
            app.serve()

        run.assert_called_once()
        (served_app, listener), kwargs = run.call_args
        assert served_app is app
        assert listener.port > 0
        assert kwargs == {"config": app.config}
        listener.close()
        with pytest.raises(RuntimeError):
            app.static_route("/late/", lambda ctx: None, "GET")

    def test_serve_uses_given_listener(self) -> None:
        listener = _listener(host="127.0.0.1", port=9999)
        app = Dispatcher(listener=listener)

        with mock.patch("dingo.server.runner.run_server") as run:
            app.serve()

        assert run.call_args.args[1] is listener
