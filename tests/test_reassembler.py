from mbox2eml.models import Attachment, MimePart
from mbox2eml.reassembler import attachment_marker, line_ending, reassemble

PREAMBLE = b"Subject: hi\nContent-Type: multipart/mixed; boundary=B1\n\n"


def text_part(body: bytes, eol: bytes = b"\n") -> MimePart:
    return MimePart(
        raw_headers=b"Content-Type: text/plain" + eol + eol,
        body=body,
        content_type="text/plain",
    )


def test_attachment_marker():
    attachment = Attachment(filename="a.pdf", content=b"x" * 42, content_type="application/pdf")

    marker = attachment_marker(attachment, "email_000000003_attachment_0_a.pdf.gz")

    assert marker == (
        "[Attachment extracted: a.pdf (42 bytes) "
        "saved as attachments/email_000000003_attachment_0_a.pdf.gz]"
    )


def test_text_parts_only():
    result = reassemble(PREAMBLE, [text_part(b"one"), text_part(b"two")], [], b"B1")

    assert result == (
        PREAMBLE
        + b"--B1\nContent-Type: text/plain\n\none\n"
        + b"--B1\nContent-Type: text/plain\n\ntwo\n"
        + b"--B1--\n"
    )


def test_attachment_markers_follow_text_parts():
    attachments = [
        (Attachment("a.pdf", b"12345", "application/pdf"), "email_000000001_attachment_0_a.pdf.gz"),
        (Attachment("b.png", b"123", "image/png"), "email_000000001_attachment_1_b.png"),
    ]

    result = reassemble(PREAMBLE, [text_part(b"body")], attachments, b"B1")

    assert result.startswith(PREAMBLE + b"--B1\nContent-Type: text/plain\n\nbody\n")
    assert result.endswith(
        b"--B1\nContent-Type: text/plain; charset=utf-8\n\n"
        b"[Attachment extracted: a.pdf (5 bytes) saved as attachments/email_000000001_attachment_0_a.pdf.gz]\n"
        b"[Attachment extracted: b.png (3 bytes) saved as attachments/email_000000001_attachment_1_b.png]\n"
        b"--B1--\n"
    )


def test_preserves_crlf():
    preamble = PREAMBLE.replace(b"\n", b"\r\n")
    attachments = [(Attachment("a.bin", b"1"), "email_000000000_attachment_0_a.bin.gz")]

    result = reassemble(preamble, [text_part(b"hi", b"\r\n")], attachments, b"B1")

    assert line_ending(preamble) == b"\r\n"
    assert b"\n" not in result.replace(b"\r\n", b"")
    assert result.endswith(b"--B1--\r\n")


def test_non_ascii_filename_in_marker():
    attachments = [(Attachment("résumé.pdf", b"1"), "email_000000000_attachment_0_résumé.pdf.gz")]

    result = reassemble(PREAMBLE, [], attachments, b"B1")

    assert "résumé.pdf (1 bytes)".encode() in result
