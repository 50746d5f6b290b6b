# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket
import threading
import time
from contextlib import suppress
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from alive.config import CheckSettings, HttpSettings
from alive.models import ProbeState
from alive.runtime import Alive


class _Handler(BaseHTTPRequestHandler):
    def do_GET(self):  # noqa: N802
        if self.path == "/ok":
            self.send_response(200)
            self.end_headers()
            self.wfile.write(b"hello")
        elif self.path == "/missing":
            body = b"not found"
            self.send_response(404)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)
        elif self.path == "/slow":
            time.sleep(1.0)
            self.send_response(200)
            self.end_headers()
        else:
            self.send_response(500)
            self.send_header("Content-Length", "0")
            self.end_headers()

    def log_message(self, format, *args):  # noqa: A002
        return None


@pytest.fixture
def local_server():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}"
    finally:
        server.shutdown()
        server.server_close()


def _trickle_headers(conn: socket.socket, stop: threading.Event) -> None:
    with conn, suppress(OSError):
        conn.recv(65536)
        conn.sendall(b"HTTP/1.1 200 OK\r\n")
        # Each line lands well inside the read timeout; the headers never end.
        for _ in range(40):
            if stop.wait(0.1):
                return
            conn.sendall(b"X-Pad: a\r\n")


@pytest.fixture
def trickle_server():
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen()
    listener.settimeout(0.05)
    stop = threading.Event()

    def accept_loop():
        while not stop.is_set():
            try:
                conn, _ = listener.accept()
            except OSError:
                continue
            threading.Thread(target=_trickle_headers, args=(conn, stop), daemon=True).start()

    thread = threading.Thread(target=accept_loop, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{listener.getsockname()[1]}/"
    finally:
        stop.set()
        thread.join(timeout=1.0)
        listener.close()


@pytest.fixture
def alive():
    with Alive(settings=CheckSettings(concurrency=4), http_settings=HttpSettings(trust_env=False)) as checker:
        yield checker


def _closed_port() -> int:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


def test_up_without_declared_length(local_server, alive):
    [outcome] = alive.check([f"{local_server}/ok"], 2.5)
    assert outcome.state is ProbeState.UP
    assert outcome.status_code == 200
    assert outcome.content_length is None
    assert outcome.note is None
    assert outcome.latency > 0


def test_warn_with_declared_length(local_server, alive):
    [outcome] = alive.check([f"{local_server}/missing"], 2.5)
    assert outcome.state is ProbeState.WARN
    assert outcome.status_code == 404
    assert outcome.content_length == 9


def test_connection_refused(alive):
    [outcome] = alive.check([f"http://127.0.0.1:{_closed_port()}/"], 2.0)
    assert outcome.state is ProbeState.DOWN
    assert outcome.note == "refused"
    assert outcome.status_code is None


def test_unresolvable_host_is_dns(monkeypatch, alive):
    real_getaddrinfo = socket.getaddrinfo

    def fake_getaddrinfo(host, *args, **kwargs):
        if host == "does-not-resolve.invalid":
            raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")
        return real_getaddrinfo(host, *args, **kwargs)

    monkeypatch.setattr(socket, "getaddrinfo", fake_getaddrinfo)
    [outcome] = alive.check(["http://does-not-resolve.invalid"], 2.0)
    assert outcome.state is ProbeState.DOWN
    assert outcome.note == "dns"


def test_slow_response_times_out(local_server, alive):
    started = time.perf_counter()
    [outcome] = alive.check([f"{local_server}/slow"], 0.2)
    assert time.perf_counter() - started < 0.9
    assert outcome.state is ProbeState.DOWN
    assert outcome.note == "timeout"
    assert outcome.latency >= 0.2


def test_trickled_headers_are_cut_off_at_timeout(trickle_server, alive):
    started = time.perf_counter()
    [outcome] = alive.check([trickle_server], 0.3)
    elapsed = time.perf_counter() - started
    assert outcome.state is ProbeState.DOWN
    assert outcome.note == "timeout"
    assert elapsed < 1.0


def test_trickled_headers_share_one_timeout_across_workers(trickle_server, alive):
    targets = [f"{trickle_server}?n={index}" for index in range(4)]
    started = time.perf_counter()
    outcomes = alive.check(targets, 0.3)
    elapsed = time.perf_counter() - started
    assert [o.note for o in outcomes] == ["timeout"] * 4
    assert elapsed < 1.0


def test_invalid_target_records_no_latency(alive):
    [outcome] = alive.check(["htp:/bad"], 2.0)
    assert outcome.state is ProbeState.INVALID
    assert outcome.note == "bad url"
    assert outcome.latency is None


def test_mixed_batch_in_sorted_order(local_server, alive):
    raw = [f"{local_server}/slow", " ", f"{local_server}/ok", "not a url", f"{local_server}/missing", f"{local_server}/ok"]
    outcomes = alive.check(raw, 0.3)
    assert [o.target for o in outcomes] == sorted({r.strip() for r in raw if r.strip()})
    states = {o.target: o.state for o in outcomes}
    assert states[f"{local_server}/ok"] is ProbeState.UP
    assert states[f"{local_server}/missing"] is ProbeState.WARN
    assert states[f"{local_server}/slow"] is ProbeState.DOWN
    assert states["not a url"] is ProbeState.INVALID


def test_empty_input_returns_nothing(alive):
    assert alive.check([], 1.0) == []
    assert alive.check(["", "   "], 1.0) == []
