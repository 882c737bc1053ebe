# tests/test_prober.py
import errno
import socket
import time

import pytest

from udp_ping.discovery.prober import Prober, run_prober
from udp_ping.discovery.responder import Responder
from udp_ping.errors import BindError, ReceiveError, SendError, SocketConfigError

from tests.helpers import FakeSocket, loopback_config


def test_round_trip_with_responder():
    """A probe sent straight to a Responder yields exactly its identifier."""
    with Responder(loopback_config(port=0, hostname="host-A")) as responder:
        responder.open()
        with Prober(loopback_config(port=responder.port)) as prober:
            prober.open()
            prober.send_probe()
            assert responder.handle_one() is True
            replies = prober.collect()
        port = responder.port

    assert len(replies) == 1
    assert replies[0].text == "host-A"
    assert replies[0].host == "127.0.0.1"
    assert replies[0].port == port


def test_probe_payload_is_ping(silent_peer):
    prober = Prober(loopback_config(port=silent_peer.getsockname()[1]))
    try:
        prober.open()
        prober.send_probe()
        silent_peer.settimeout(1.0)
        data, addr = silent_peer.recvfrom(512)
    finally:
        prober.close()

    assert data == b"PING"


def test_empty_network_completes(silent_peer, capsys):
    config = loopback_config(port=silent_peer.getsockname()[1])

    start = time.monotonic()
    replies = run_prober(config)
    elapsed = time.monotonic() - start

    assert replies == []
    assert elapsed >= config.window
    assert elapsed < config.window + config.poll_interval + 1.0
    out = capsys.readouterr().out
    assert "Broadcast PING" in out
    assert out.rstrip().endswith("[client] Done.")


def test_reports_every_reply_in_order(client_sock):
    """Two responders, and one answering twice, are all reported."""
    other = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    other.bind(("127.0.0.1", 0))
    other_port = other.getsockname()[1]
    try:
        with Prober(loopback_config()) as prober:
            prober.open()
            prober.window.start()
            client_sock.sendto(b"host-A", prober.address)
            other.sendto(b"host-B", prober.address)
            client_sock.sendto(b"host-A", prober.address)
            replies = prober.collect()
    finally:
        other.close()

    assert [r.text for r in replies] == ["host-A", "host-B", "host-A"]
    assert replies[0].endpoint == "127.0.0.1:%d" % client_sock.getsockname()[1]
    assert replies[1].endpoint == "127.0.0.1:%d" % other_port


def test_reply_printed_with_sender(client_sock, capsys):
    with Prober(loopback_config()) as prober:
        prober.open()
        client_sock.sendto(b"host-A", prober.address)
        prober.collect()

    port = client_sock.getsockname()[1]
    assert f"[client] 127.0.0.1:{port} -> host-A" in capsys.readouterr().out


def test_invalid_utf8_reply_decoded_leniently(client_sock):
    with Prober(loopback_config(), verbose=False) as prober:
        prober.open()
        client_sock.sendto(b"bad\xffname", prober.address)
        replies = prober.collect()

    assert replies[0].text == "bad�name"


def test_long_reply_truncated_to_buffer(client_sock):
    with Prober(loopback_config(buffer_size=8), verbose=False) as prober:
        prober.open()
        client_sock.sendto(b"a-very-long-host-name", prober.address)
        replies = prober.collect()

    assert replies[0].text == "a-very-l"


def test_quiet_mode_prints_nothing(silent_peer, capsys):
    run_prober(loopback_config(port=silent_peer.getsockname()[1]), verbose=False)
    assert capsys.readouterr().out == ""


def test_timeouts_keep_waiting_until_window_closes():
    """Timeouts inside the window do not end collection early."""
    prober = Prober(loopback_config(window=0.2), verbose=False)
    prober._sock = FakeSocket(
        [socket.timeout(), socket.timeout(), (b"late", ("10.0.0.2", 34254))]
    )
    prober.window.start()

    replies = prober.collect()

    assert [r.text for r in replies] == ["late"]
    assert prober.window.is_closed


def test_receive_error_is_fatal():
    prober = Prober(loopback_config(), verbose=False)
    prober._sock = FakeSocket([ConnectionRefusedError(errno.ECONNREFUSED, "refused")])

    with pytest.raises(ReceiveError):
        prober.collect()


def test_bind_error():
    # TEST-NET-3 address, not assigned locally
    prober = Prober(loopback_config(bind_address="203.0.113.1"))
    with pytest.raises(BindError):
        prober.open()


def test_broadcast_option_failure(monkeypatch):
    def refuse(self, *args):
        raise OSError(errno.EACCES, "denied")

    monkeypatch.setattr(socket.socket, "setsockopt", refuse)
    prober = Prober(loopback_config())
    with pytest.raises(SocketConfigError):
        prober.open()


def test_send_error_does_not_start_window(monkeypatch):
    def refuse(self, *args):
        raise OSError(errno.ENETUNREACH, "unreachable")

    monkeypatch.setattr(socket.socket, "sendto", refuse)
    prober = Prober(loopback_config())
    try:
        with pytest.raises(SendError):
            prober.send_probe()
        assert not prober.window.started
    finally:
        prober.close()


def test_run_closes_socket_on_error(monkeypatch):
    prober = Prober(loopback_config(bind_address="203.0.113.1"))
    with pytest.raises(BindError):
        prober.run()
    assert prober._sock is None
