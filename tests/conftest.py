"""Shared pytest fixtures."""

import base64
import io

import pytest
from rich.console import Console

PDF_BYTES = b"%PDF-1.4\n" + bytes(range(256)) * 2
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + bytes(range(200))


def wrap_base64(data: bytes) -> bytes:
    return base64.encodebytes(data).rstrip(b"\n")


PLAIN_MESSAGE = b"""From alice@example.com Mon Jan 15 10:00:00 2024
From: Alice <alice@example.com>
To: Bob <bob@example.com>
Subject: Lunch
Date: Mon, 15 Jan 2024 10:00:00 +0000
Content-Type: text/plain; charset=utf-8

Are we still on for lunch?
"""

NESTED_MESSAGE = (
    b"""From alice@example.com Tue Jan 16 09:30:00 2024
From: Alice <alice@example.com>
To: Bob <bob@example.com>
Subject: Report
Date: Tue, 16 Jan 2024 09:30:00 +0100
MIME-Version: 1.0
Content-Type: multipart/mixed; boundary="outer-B1"

This is a multi-part message in MIME format.

--outer-B1
Content-Type: multipart/alternative; boundary="inner-B2"

--inner-B2
Content-Type: text/plain; charset=utf-8

Hello Bob, the report is attached.
--inner-B2
Content-Type: text/html; charset=utf-8

<p>Hello Bob, the report is attached.</p>
--inner-B2--

--outer-B1
Content-Type: application/pdf; name="a.pdf"
Content-Disposition: attachment; filename="a.pdf"
Content-Transfer-Encoding: base64

"""
    + wrap_base64(PDF_BYTES)
    + b"""
--outer-B1--
"""
)

IMAGE_MESSAGE = (
    b"""From carol@example.com Wed Jan 17 12:00:00 2024
From: Carol <carol@example.com>
To: Bob <bob@example.com>
Subject: Logo
Date: Wed, 17 Jan 2024 12:00:00 +0000
MIME-Version: 1.0
Content-Type: multipart/mixed; boundary=simple42

--simple42
Content-Type: text/plain; charset=utf-8

Here is the new logo.
--simple42
Content-Type: image/png; name="logo.png"
Content-Transfer-Encoding: base64

"""
    + wrap_base64(PNG_BYTES)
    + b"""
--simple42--
"""
)


@pytest.fixture
def plain_message() -> bytes:
    return PLAIN_MESSAGE


@pytest.fixture
def nested_message() -> bytes:
    return NESTED_MESSAGE


@pytest.fixture
def image_message() -> bytes:
    return IMAGE_MESSAGE


@pytest.fixture
def quiet_console() -> Console:
    """A console that renders progress into memory instead of the terminal."""
    return Console(file=io.StringIO())
