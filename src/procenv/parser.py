"""Decoding of null-delimited procfs records."""

NUL = b"\x00"


def parse_record(data: bytes) -> list[str]:
    """
    Split a raw ``environ``/``cmdline`` record into its fields.

    A single trailing NUL terminator is dropped before splitting, so
    ``b"a\\0b\\0"`` and ``b"a\\0b"`` both give ``["a", "b"]``. Empty input
    gives no fields, while ``b"\\0"`` gives one empty field.

    Bytes are not validated: undecodable sequences survive as surrogate
    escapes and can be recovered with ``field.encode("utf-8", "surrogateescape")``.
    """
    if not data:
        return []
    if data[-1:] == NUL:
        data = data[:-1]
    return [part.decode("utf-8", errors="surrogateescape") for part in data.split(NUL)]
