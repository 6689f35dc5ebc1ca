import hashlib

import pytest

from hashsalt.hashing import (
    HashAlgorithm,
    InvalidInputError,
    MissingInputError,
    SaltConflictError,
    UnsupportedAlgorithmError,
    compute_hash,
    verify_hash,
)
from hashsalt.ipc_schema import HashResult

# FIPS 180 test vectors for "abc"
ABC_VECTORS = {
    "MD5": "900150983CD24FB0D6963F7D28E17F72",
    "SHA1": "A9993E364706816ABA3E25717850C26C9CD0D89D",
    "SHA256": "BA7816BF8F01CFEA414140DE5DAE2223B00361A396177A9CB410FF61F20015AD",
    "SHA512": (
        "DDAF35A193617ABACC417349AE20413112E6FA4E89A97EA20A9EEEE64B55D39A"
        "2192992A274FC1A836BA3C23A3FEEBBD454D4423643CE80E2A9AC94FA54CA49F"
    ),
}


def test_md5_hello():
    assert compute_hash(["Hello"], "MD5") == ["8B1A9953C4611296A827ABF8C47804D7"]


@pytest.mark.parametrize("algorithm,expected", ABC_VECTORS.items())
def test_reference_vectors(algorithm, expected):
    assert compute_hash(["abc"], algorithm) == [expected]


@pytest.mark.parametrize(
    "algorithm,length", [("MD5", 32), ("SHA1", 40), ("SHA256", 64), ("SHA512", 128)]
)
def test_digest_is_uppercase_hex_of_native_length(algorithm, length):
    digest = compute_hash(["some input"], algorithm)[0]
    assert len(digest) == length
    assert digest == digest.upper()
    int(digest, 16)


def test_default_algorithm_is_sha256():
    assert compute_hash(["hello world"]) == [
        "B94D27B9934D3E08A52E52D7DA7DABFAC484EFE37A5380EE9088F7ACE2EFCDE9"
    ]


def test_unicode_is_hashed_as_utf8():
    text = "пароль"
    expected = hashlib.sha1(text.encode("utf-8")).hexdigest().upper()
    assert compute_hash([text], "SHA1") == [expected]


@pytest.mark.parametrize("name", ["md5", "Sha-1", "sha256", "SHA_512", HashAlgorithm.SHA1])
def test_algorithm_name_is_normalized(name):
    assert len(compute_hash(["x"], name)) == 1


def test_single_string_is_one_item():
    assert compute_hash("Hello", "MD5") == ["8B1A9953C4611296A827ABF8C47804D7"]


def test_batch_without_salt_returns_bare_strings_in_order():
    results = compute_hash(["a", "b", "c"], "MD5")
    assert results == [hashlib.md5(s.encode()).hexdigest().upper() for s in "abc"]


def test_fixed_salt_is_appended():
    salted = compute_hash(["Hello"], "MD5", salt="X")
    assert len(salted) == 1
    record = salted[0]
    assert isinstance(record, HashResult)
    assert record.hash == compute_hash(["HelloX"], "MD5")[0]
    assert record.salt == "X"
    assert record.algorithm == "MD5"
    assert record.id == 1


def test_fixed_salt_batch_ids_are_one_based_and_increasing():
    results = compute_hash(["a", "b", "c"], "SHA256", salt="pepper")
    assert [r.id for r in results] == [1, 2, 3]
    assert all(r.salt == "pepper" for r in results)


def test_ids_restart_for_every_call():
    compute_hash(["a", "b"], "MD5", salt="s")
    assert [r.id for r in compute_hash(["c"], "MD5", salt="s")] == [1]


def test_random_salt_round_trip():
    results = compute_hash(["Hello", "World"], "SHA512", use_random_salt=True)
    for record, text in zip(results, ["Hello", "World"]):
        assert len(record.salt) == 14
        assert compute_hash([text + record.salt], "SHA512") == [record.hash]


def test_random_salt_is_drawn_per_item():
    results = compute_hash(["same", "same"], "MD5", use_random_salt=True)
    assert results[0].salt != results[1].salt
    assert results[0].hash != results[1].hash


def test_random_salt_differs_between_calls():
    first = compute_hash(["Hello"], "SHA256", use_random_salt=True)[0]
    second = compute_hash(["Hello"], "SHA256", use_random_salt=True)[0]
    assert first.hash != second.hash


def test_empty_salt_means_no_salt():
    assert compute_hash(["Hello"], "MD5", salt="") == ["8B1A9953C4611296A827ABF8C47804D7"]


def test_empty_sequence_yields_empty_output():
    assert compute_hash([], "MD5") == []
    assert compute_hash([], "MD5", use_random_salt=True) == []


def test_unsupported_algorithm_is_rejected():
    with pytest.raises(UnsupportedAlgorithmError):
        compute_hash(["Hello"], "SHA3")


def test_unsupported_algorithm_rejected_before_consuming_input():
    consumed = []

    def strings():
        consumed.append(True)
        yield "Hello"

    with pytest.raises(UnsupportedAlgorithmError):
        compute_hash(strings(), "SHA3")
    assert consumed == []


def test_salt_conflict_is_rejected():
    with pytest.raises(SaltConflictError):
        compute_hash(["Hello"], "MD5", salt="X", use_random_salt=True)


def test_missing_input_is_rejected():
    with pytest.raises(MissingInputError):
        compute_hash(None, "MD5")


def test_config_errors_are_value_errors():
    with pytest.raises(ValueError):
        compute_hash(["Hello"], "CRC32")


def test_errors_are_logged(caplog):
    import logging

    logger = logging.getLogger("hashsalt_test")
    with caplog.at_level(logging.ERROR, logger="hashsalt_test"):
        with pytest.raises(SaltConflictError):
            compute_hash(["x"], "MD5", salt="s", use_random_salt=True, logger=logger)
    assert "взаимоисключающие" in caplog.text


def test_digests_logged_but_not_inputs(caplog):
    import logging

    logger = logging.getLogger("hashsalt_test")
    with caplog.at_level(logging.DEBUG, logger="hashsalt_test"):
        compute_hash(["secret-password"], "MD5", salt="pepper", logger=logger)
    assert "secret-password" not in caplog.text
    assert "pepper" not in caplog.text
    assert compute_hash(["secret-passwordpepper"], "MD5")[0] in caplog.text


def test_verify_hash_matches_case_insensitive():
    assert verify_hash("Hello", "8b1a9953c4611296a827abf8c47804d7", "MD5")


def test_verify_hash_with_salt():
    expected = compute_hash(["HelloX"], "SHA1")[0]
    assert verify_hash("Hello", expected, "SHA1", salt="X")
    assert not verify_hash("Hello", expected, "SHA1")


def test_verify_hash_rejects_malformed_expected():
    with pytest.raises(ValueError):
        verify_hash("Hello", "abc", "MD5")
    with pytest.raises(ValueError):
        verify_hash("Hello", "Z" * 32, "MD5")


def test_hex_length_property():
    assert HashAlgorithm.MD5.hex_length == 32
    assert HashAlgorithm.SHA512.hex_length == 128


def test_lone_surrogate_input_is_rejected_without_partial_output():
    with pytest.raises(InvalidInputError, match="#2"):
        compute_hash(["Hello", "\ud800"], "MD5")


def test_surrogate_escaped_salt_is_rejected():
    with pytest.raises(InvalidInputError):
        compute_hash(["Hello"], "SHA256", salt="\udcff")


def test_invalid_input_is_a_config_error():
    with pytest.raises(ValueError):
        verify_hash("\udcff", "0" * 32, "MD5")
