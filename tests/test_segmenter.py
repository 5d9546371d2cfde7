import io

from mbox2eml.segmenter import iter_messages, read_mbox


def split(data: bytes) -> list[bytes]:
    return list(iter_messages(io.BytesIO(data)))


def test_one_record_per_separator_line(plain_message, nested_message, image_message):
    data = plain_message + nested_message + image_message

    records = split(data)

    assert len(records) == 3
    assert records == [plain_message, nested_message, image_message]
    assert b"".join(records) == data


def test_no_separator_yields_nothing():
    assert split(b"Subject: orphan\n\nno envelope line here\n") == []


def test_empty_stream_yields_nothing():
    assert split(b"") == []


def test_content_before_first_separator_is_discarded():
    records = split(b"junk line\nFrom a@b Mon Jan 1 00:00:00 2024\nbody\n")

    assert records == [b"From a@b Mon Jan 1 00:00:00 2024\nbody\n"]


def test_last_record_flushed_without_trailing_newline():
    records = split(b"From a@b x\none\nFrom c@d y\ntwo")

    assert records == [b"From a@b x\none\n", b"From c@d y\ntwo"]


def test_from_header_is_not_a_separator():
    data = b"From a@b x\nFrom: Alice <a@b>\nfrom lowercase\n\nbody\n"

    assert split(data) == [data]


def test_separator_is_matched_anywhere_a_line_starts():
    data = b"From a@b x\n\nFrom here on, everything changes.\n"

    records = split(data)

    assert len(records) == 2
    assert records[1] == b"From here on, everything changes.\n"


def test_iter_messages_is_lazy():
    def lines():
        yield b"From first\n"
        yield b"body\n"
        yield b"From second\n"
        raise AssertionError("read past the second separator")

    records = iter_messages(lines())

    assert next(records) == b"From first\nbody\n"


def test_read_mbox(tmp_path, plain_message, image_message):
    path = tmp_path / "chunk_0.mbox"
    path.write_bytes(plain_message + image_message)

    assert read_mbox(path) == [plain_message, image_message]
