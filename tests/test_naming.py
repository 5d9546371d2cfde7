from datetime import datetime, timezone

import pytest

from mbox2eml.models import Attachment
from mbox2eml.naming import (
    attachment_filename,
    is_already_compressed,
    message_filename,
    safe_filename,
)


def test_attachment_filename_precompressed_has_no_gz_suffix():
    attachment = Attachment("logo.png", b"\x89PNG", "image/png")
    assert attachment_filename(1, 0, attachment) == "email_000000001_attachment_0_logo.png"


def test_attachment_filename_compressible_gets_gz_suffix():
    attachment = Attachment("report.csv", b"a,b", "text/csv")
    assert attachment_filename(42, 3, attachment) == "email_000000042_attachment_3_report.csv.gz"


def test_attachment_filename_without_compression():
    attachment = Attachment("report.csv", b"a,b", "text/csv")
    assert attachment_filename(42, 3, attachment, compress=False) == "email_000000042_attachment_3_report.csv"


@pytest.mark.parametrize(
    "filename, content_type",
    [
        ("photo.JPG", ""),
        ("archive.tar.gz", "application/octet-stream"),
        ("movie.mkv", ""),
        ("scan", "image/tiff"),
        ("bundle", "application/zip"),
        ("data", "application/gzip"),
    ],
)
def test_already_compressed(filename, content_type):
    assert is_already_compressed(filename, content_type)


@pytest.mark.parametrize(
    "filename, content_type",
    [("report.csv", "text/csv"), ("doc.pdf", "application/pdf"), ("notes", "")],
)
def test_not_compressed(filename, content_type):
    assert not is_already_compressed(filename, content_type)


def test_safe_filename_strips_path_components():
    result = safe_filename("../../etc/passwd")
    assert "/" not in result
    assert not result.startswith(".")


def test_safe_filename_replaces_control_characters():
    assert safe_filename("bad\r\nname:1.txt") == "bad__name_1.txt"


def test_safe_filename_never_empty():
    assert safe_filename("...") == "attachment"


def test_message_filename():
    timestamp = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
    assert message_filename(timestamp, 7, 1234) == "1705312800.M7P1234_mbox2eml:2,S.eml"
    assert message_filename(timestamp, 7, 1234, compress=True) == "1705312800.M7P1234_mbox2eml:2,S.eml.gz"
