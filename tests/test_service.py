"""Tests for the framebuffer handshake over a socket pair."""

import socket
import struct

import pytest

from adb_projector.core.framebuffer import (
    FramebufferService,
    HeaderLayoutTable,
    RawFrame,
    UnsupportedProtocolVersionError,
)
from adb_projector.core.socket import ADBSocket, SocketReadError
from fake_adb import recv_exact, v1_header


@pytest.fixture
def socket_pair():
    client, peer = socket.socketpair()
    peer.settimeout(2.0)
    adb_socket = ADBSocket.from_socket(client)
    yield adb_socket, peer
    adb_socket.close()
    peer.close()


def test_select_target_sends_usb_transport(socket_pair):
    sock, peer = socket_pair
    peer.sendall(b"OKAY")

    assert FramebufferService().select_target(sock) is True
    assert recv_exact(peer, 22) == b"0012host:transport-usb"


def test_select_target_fail_reads_nothing_more(socket_pair):
    sock, peer = socket_pair
    peer.sendall(b"FAIL" + b"left")

    assert FramebufferService().select_target(sock) is False
    assert sock.read_all(4) == b"left"


def test_request_framebuffer_refused(socket_pair):
    sock, peer = socket_pair
    peer.sendall(b"FAIL" + b"left")

    assert FramebufferService().request_framebuffer(sock) is None
    assert recv_exact(peer, 16) == b"000Cframebuffer:"
    assert sock.read_all(4) == b"left"


@pytest.mark.parametrize("version", [1, 2, 16])
def test_read_header_consumes_exact_length(socket_pair, version):
    sock, peer = socket_pair
    table = HeaderLayoutTable()
    words = table.header_size_for_version(version)
    values = [0] * words
    # size/width/height sit after bpp (and color space in version 2)
    first = {1: 1, 2: 2, 16: 0}[version]
    values[first:first + 3] = [4, 2, 1]
    if version != 16:
        values[0] = 16
    peer.sendall(struct.pack(f"<{words + 1}I", version, *values) + b"tail")

    header = FramebufferService(table).read_header(sock)

    assert header.version == version
    assert (header.size, header.width, header.height) == (4, 2, 1)
    assert sock.read_all(4) == b"tail"


def test_read_header_unknown_version(socket_pair):
    sock, peer = socket_pair
    peer.sendall(struct.pack("<I", 5) + b"tail")

    with pytest.raises(UnsupportedProtocolVersionError):
        FramebufferService().read_header(sock)
    assert sock.read_all(4) == b"tail"


def test_read_header_eof(socket_pair):
    sock, peer = socket_pair
    peer.sendall(v1_header(2, 1)[:20])
    peer.close()

    with pytest.raises(SocketReadError, match="EOF"):
        FramebufferService().read_header(sock)


def test_full_handshake(socket_pair):
    sock, peer = socket_pair
    pixels = b"\x00\xf8\xe0\x07"
    peer.sendall(b"OKAY" + v1_header(2, 1))
    service = FramebufferService()

    header = service.request_framebuffer(sock)
    assert (header.width, header.height, header.bpp, header.size) == (2, 1, 16, 4)

    peer.sendall(pixels)
    frame = service.read_payload(sock, header)

    assert recv_exact(peer, 16) == b"000Cframebuffer:"
    assert recv_exact(peer, 1) == b"\x00"
    assert frame == RawFrame(header=header, pixels=pixels)
    assert len(frame.pixels) == header.size


def test_strict_service_rejects_lenient_match(socket_pair):
    sock, peer = socket_pair
    peer.sendall(b"OxxY")

    assert FramebufferService(strict_response=True).select_target(sock) is False
