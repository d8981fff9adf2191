import pytest

from sipdigest import (
    HashResult,
    InvalidInputType,
    InvalidKeyLength,
    InvalidOutputFormat,
    InvalidRoundConfiguration,
    SipHashError,
    initialize_state,
    siphash,
    siphash_many,
    siphash_r,
    try_siphash,
)

KEY = b"0123456789ABCDEF"

# Reference SipHash-2-4 outputs for key 00..0f and message 00..(n-1), as
# little-endian digest bytes.
SIPHASH_VECTORS = {
    0: "310e0edd47db6f72",
    1: "fd67dc93c539f874",
    2: "5a4fa9d909806c0d",
    3: "2d7efbd796666785",
    4: "b7877127e09427cf",
    5: "8da699cd64557618",
    6: "cee3fe586e46c9cb",
    7: "37d1018bf50002ab",
    8: "6224939a79f5f593",
    15: "e545be4961ca29a1",
    16: "db9bc2577fcc2a3f",
    31: "42c341d8fa92d832",
    32: "ce7cf2722f512771",
    63: "724506eb4c328a95",
}


def vector_int(hex_le):
    return int.from_bytes(bytes.fromhex(hex_le), byteorder="little")


def test_siphash_vectors_match_reference():
    key = bytes(range(16))
    for length, expected_hex in SIPHASH_VECTORS.items():
        assert siphash(key, bytes(range(length))) == vector_int(expected_hex)


def test_hello_raw_and_hex():
    assert siphash(KEY, b"hello") == 4402678656023170274
    assert siphash(KEY, b"hello", output="hex") == "3D1974E948748CE2"
    assert int("3D1974E948748CE2", 16) == 4402678656023170274


def test_exact_block_multiple():
    assert siphash(KEY, b"abcdefgh", output="hex") == "1AE57886F899E65F"


def test_multi_block_with_tail():
    assert siphash(KEY, b"my long strings", output="hex") == "1323400B0804036D"


def test_hex_is_zero_padded_by_default():
    assert siphash(KEY, b"zymotechnics", output="hex") == "09B57037CD3F8F0C"
    assert siphash(KEY, b"zymotechnics", output="hex", padding=False) == "9B57037CD3F8F0C"


def test_hex_lower_case():
    assert siphash(KEY, b"hello", output="hex", case="lower") == "3d1974e948748ce2"


def test_custom_rounds():
    assert siphash(KEY, b"hello", c=4, d=8) == 14986662229302055855
    assert siphash(KEY, b"hello", c=1, d=1) != siphash(KEY, b"hello")


def test_empty_message():
    digest = siphash(KEY, b"")
    assert 0 <= digest < 2**64
    assert siphash(KEY, b"", output="hex") == format(digest, "016X")


@pytest.mark.parametrize("length", [0, 1, 7, 8, 9, 15, 16, 63])
def test_boundary_lengths(length):
    message = bytes(range(length))
    digest = siphash(KEY, message)
    assert 0 <= digest < 2**64
    assert siphash(KEY, message) == digest


def test_formatting_never_changes_digest():
    raw = siphash(KEY, b"zymotechnics")
    for case in ("upper", "lower"):
        for padding in (True, False):
            text = siphash(KEY, b"zymotechnics", output="hex", case=case, padding=padding)
            assert int(text, 16) == raw


def test_bytes_like_messages_agree():
    expected = siphash(KEY, b"hello")
    assert siphash(KEY, bytearray(b"hello")) == expected
    assert siphash(KEY, memoryview(b"hello")) == expected
    assert siphash(bytearray(KEY), b"hello") == expected


def test_cached_state_matches_raw_key():
    state = initialize_state(KEY)
    for length in (0, 1, 7, 8, 9, 15, 16, 63, 200):
        message = bytes(range(length % 256)) * (1 + length // 256)
        assert siphash(state, message) == siphash(KEY, message)
    # reuse does not mutate the cached state
    assert initialize_state(KEY) == state


def test_siphash_r_rotates_arguments():
    assert siphash_r(b"hello", KEY) == 4402678656023170274
    assert siphash_r(b"hello", KEY, output="hex") == "3D1974E948748CE2"


def test_siphash_many_uses_one_state():
    messages = [b"hello", b"abcdefgh", b""]
    assert siphash_many(KEY, messages) == [siphash(KEY, m) for m in messages]
    assert siphash_many(KEY, [b"abcdefgh"], output="hex") == ["1AE57886F899E65F"]


@pytest.mark.parametrize("key", [b"0123456789ABCDE", b"0123456789ABCDEF0", b""])
def test_rejects_bad_key_length(key):
    with pytest.raises(InvalidKeyLength):
        siphash(key, b"hello")
    # still a ValueError for callers catching builtins
    with pytest.raises(ValueError):
        initialize_state(key)


def test_rejects_non_bytes_key():
    with pytest.raises(InvalidInputType):
        siphash("0123456789ABCDEF", b"hello")  # type: ignore


@pytest.mark.parametrize("message", ["hello", 123, None, {"test": "one"}])
def test_rejects_non_bytes_message(message):
    with pytest.raises(InvalidInputType) as excinfo:
        siphash(KEY, message)  # type: ignore
    assert isinstance(excinfo.value, TypeError)


@pytest.mark.parametrize("c, d", [(0, 4), (2, 0), (-1, 4), (2, -3), (True, 4), (2.0, 4)])
def test_rejects_bad_rounds(c, d):
    with pytest.raises(InvalidRoundConfiguration):
        siphash(KEY, b"hello", c, d)


def test_rejects_unknown_output_options():
    with pytest.raises(InvalidOutputFormat):
        siphash(KEY, b"hello", output="base64")
    with pytest.raises(InvalidOutputFormat):
        siphash(KEY, b"hello", output="hex", case="title")


def test_try_siphash_success():
    result = try_siphash(KEY, b"hello", output="hex")
    assert result.ok
    assert result.error is None
    assert result.unwrap() == "3D1974E948748CE2"


def test_try_siphash_reports_errors():
    result = try_siphash(b"short", b"hello")
    assert not result.ok
    assert isinstance(result.error, InvalidKeyLength)
    with pytest.raises(InvalidKeyLength):
        result.unwrap()

    assert isinstance(try_siphash(KEY, b"hello", 0).error, InvalidRoundConfiguration)
    assert isinstance(try_siphash(KEY, "hello").error, InvalidInputType)  # type: ignore


def test_error_hierarchy():
    for exc in (InvalidKeyLength, InvalidRoundConfiguration, InvalidInputType, InvalidOutputFormat):
        assert issubclass(exc, SipHashError)
    assert HashResult(value=1).ok
