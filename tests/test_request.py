"""Tests for the ADB host request codec."""

import socket

import pytest

from adb_projector.core.request import check_response, encode_request, is_okay, send_request
from adb_projector.core.socket import ADBSocket


@pytest.fixture
def socket_pair():
    client, peer = socket.socketpair()
    adb_socket = ADBSocket.from_socket(client)
    yield adb_socket, peer
    adb_socket.close()
    peer.close()


def test_encode_known_services():
    assert encode_request("host:transport-usb") == b"0012host:transport-usb"
    assert encode_request("framebuffer:") == b"000Cframebuffer:"


@pytest.mark.parametrize("length", [0, 1, 15, 16, 255, 4096, 0xFFFF])
def test_encode_length_prefix(length):
    service = "x" * length
    encoded = encode_request(service)

    assert len(encoded) == 4 + length
    assert int(encoded[:4], 16) == length
    assert encoded[4:] == service.encode("ascii")


def test_encode_rejects_long_service():
    with pytest.raises(ValueError):
        encode_request("x" * 0x10000)


@pytest.mark.parametrize("status, expected", [
    (b"OKAY", True),
    (b"OxxY", True),
    (b"O\x00\x00Y", True),
    (b"FAIL", False),
    (b"OKAX", False),
    (b"oKAY", False),
    (b"OKA", False),
])
def test_lenient_status(status, expected):
    assert is_okay(status) is expected


def test_strict_status():
    assert is_okay(b"OKAY", strict=True)
    assert not is_okay(b"OxxY", strict=True)


def test_send_request_writes_encoded_bytes(socket_pair):
    sock, peer = socket_pair
    send_request(sock, "framebuffer:")

    assert peer.recv(64) == b"000Cframebuffer:"


def test_check_response_reads_only_status(socket_pair):
    sock, peer = socket_pair
    peer.sendall(b"FAILrest")

    assert check_response(sock) is False
    assert sock.read_all(4) == b"rest"


def test_check_response_okay(socket_pair):
    sock, peer = socket_pair
    peer.sendall(b"OKAY")

    assert check_response(sock) is True
