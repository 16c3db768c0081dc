"""
Engine contract tests, run against both the direct and the subtle engine.
"""

import pickle
from array import array

import pytest

from crypter import (
    Crypter,
    DecryptionError,
    DecryptionErrorKind,
    DirectCipherEngine,
    EncryptionError,
    EncryptionErrorKind,
    EnvelopeLayout,
    InvalidSecret,
    SubtleCipherEngine,
)
from tests.helpers import AAD, SECRET, VALUE, run

ENGINES = [DirectCipherEngine, SubtleCipherEngine]


@pytest.fixture(params=ENGINES, ids=["direct", "subtle"])
def engine_class(request):
    return request.param


@pytest.fixture
def engine(engine_class):
    return engine_class(SECRET)


class TestConstructor:
    def test_accepts_non_empty_string(self, engine_class):
        assert isinstance(engine_class(SECRET), engine_class)

    def test_accepts_non_empty_bytes(self, engine_class):
        assert isinstance(engine_class(SECRET.encode()), engine_class)

    @pytest.mark.parametrize("secret", ["", b"", None, 0])
    def test_rejects_invalid_secret(self, engine_class, secret):
        with pytest.raises(InvalidSecret):
            engine_class(secret)

    def test_secret_is_not_exposed(self, engine):
        assert SECRET not in repr(engine)
        assert not hasattr(engine, "secret")
        assert not hasattr(engine, "_secret")

    def test_cannot_be_pickled(self, engine):
        with pytest.raises(TypeError):
            pickle.dumps(engine)

    def test_default_alias(self):
        assert Crypter is DirectCipherEngine


class TestEncrypt:
    def test_distinct_output_same_instance(self, engine):
        first = run(engine.encrypt(VALUE))
        second = run(engine.encrypt(VALUE))
        assert first != second
        assert first[:64] != second[:64]
        assert first[64:80] != second[64:80]

    def test_distinct_output_distinct_instances(self, engine_class):
        first = run(engine_class(SECRET).encrypt(VALUE))
        second = run(engine_class(SECRET).encrypt(VALUE))
        assert first != second

    def test_empty_value(self, engine):
        encrypted = run(engine.encrypt(b""))
        assert isinstance(encrypted, bytes)
        assert len(encrypted) == 64 + 16 + 16

    def test_envelope_size(self, engine):
        encrypted = run(engine.encrypt(VALUE))
        assert len(encrypted) == 96 + len(VALUE)

    def test_accepts_bytearray_and_memoryview(self, engine):
        assert isinstance(run(engine.encrypt(bytearray(VALUE))), bytes)
        assert isinstance(run(engine.encrypt(memoryview(VALUE))), bytes)

    @pytest.mark.parametrize("value", [123, "", "text", None])
    def test_rejects_non_bytes_value(self, engine, value):
        result = run(engine.encrypt(value))
        assert isinstance(result, EncryptionError)
        assert result.kind is EncryptionErrorKind.INVALID_VALUE

    @pytest.mark.parametrize("aad", [b"", bytearray(), 0, "ctx", object()])
    def test_rejects_invalid_aad(self, engine, aad):
        result = run(engine.encrypt(VALUE, aad))
        assert isinstance(result, EncryptionError)
        assert result.kind is EncryptionErrorKind.INVALID_AAD

    def test_primitive_failure_is_unknown(self, engine, monkeypatch):
        def broken_seal(self, *args, **kwargs):
            raise OverflowError("data too large")

        monkeypatch.setattr(engine.backend_class, "seal", broken_seal)
        result = run(engine.encrypt(VALUE))
        assert isinstance(result, EncryptionError)
        assert result.kind is EncryptionErrorKind.UNKNOWN


class TestDecrypt:
    def test_round_trip_same_instance(self, engine):
        encrypted = run(engine.encrypt(VALUE))
        assert run(engine.decrypt(encrypted)) == VALUE

    def test_round_trip_same_secret(self, engine_class):
        encrypted = run(engine_class(SECRET).encrypt(VALUE))
        assert run(engine_class(SECRET).decrypt(encrypted)) == VALUE

    def test_round_trip_bytes_secret_matches_text_secret(self, engine_class):
        encrypted = run(engine_class(SECRET).encrypt(VALUE))
        assert run(engine_class(SECRET.encode("utf-8")).decrypt(encrypted)) == VALUE

    def test_round_trip_empty_value(self, engine):
        encrypted = run(engine.encrypt(b""))
        assert run(engine.decrypt(encrypted)) == b""

    def test_round_trip_large_value(self, engine):
        value = bytes(range(256)) * 4096
        encrypted = run(engine.encrypt(value))
        assert run(engine.decrypt(encrypted)) == value

    def test_round_trip_with_aad(self, engine):
        encrypted = run(engine.encrypt(VALUE, AAD))
        assert run(engine.decrypt(encrypted, AAD)) == VALUE

    @pytest.mark.parametrize("value", [123, "", None, b"\x00" * 95])
    def test_rejects_invalid_value(self, engine, value):
        result = run(engine.decrypt(value))
        assert isinstance(result, DecryptionError)
        assert result.kind is DecryptionErrorKind.INVALID_VALUE

    def test_wide_item_memoryview_is_measured_in_bytes(self, engine):
        aad = b"tenant42"
        encrypted = run(engine.encrypt(VALUE, aad))
        assert len(encrypted) % 2 == 0
        view = memoryview(array("H", encrypted))
        assert len(view) < engine.minimum_envelope_length <= view.nbytes
        wide_aad = memoryview(array("H", aad))
        assert run(engine.decrypt(view, wide_aad)) == VALUE

    def test_wide_item_memoryview_plaintext(self, engine):
        encrypted = run(engine.encrypt(memoryview(array("I", b"abcdefgh"))))
        assert run(engine.decrypt(encrypted)) == b"abcdefgh"

    def test_rejects_empty_aad(self, engine):
        encrypted = run(engine.encrypt(VALUE, AAD))
        result = run(engine.decrypt(encrypted, b""))
        assert isinstance(result, DecryptionError)
        assert result.kind is DecryptionErrorKind.INVALID_AAD

    def test_wrong_secret(self, engine_class):
        encrypted = run(engine_class(SECRET).encrypt(VALUE))
        wrong = engine_class(SECRET.replace("secure", "insecure"))
        result = run(wrong.decrypt(encrypted))
        assert isinstance(result, DecryptionError)
        assert result.kind is DecryptionErrorKind.FAILED

    def test_wrong_aad(self, engine):
        encrypted = run(engine.encrypt(VALUE, AAD))
        result = run(engine.decrypt(encrypted, VALUE))
        assert result.kind is DecryptionErrorKind.FAILED

    def test_missing_aad(self, engine):
        encrypted = run(engine.encrypt(VALUE, AAD))
        result = run(engine.decrypt(encrypted))
        assert result.kind is DecryptionErrorKind.FAILED

    def test_unexpected_aad(self, engine):
        encrypted = run(engine.encrypt(VALUE))
        result = run(engine.decrypt(encrypted, AAD))
        assert result.kind is DecryptionErrorKind.FAILED

    @pytest.mark.parametrize(
        "position",
        [0, 12, 63, 64, 70, 79, 80, 88, 95, 96, 100, -1],
        ids=lambda p: f"byte{p}",
    )
    def test_tampering_is_detected(self, engine, position):
        encrypted = bytearray(run(engine.encrypt(VALUE)))
        encrypted[position] ^= 0x01
        result = run(engine.decrypt(bytes(encrypted)))
        assert isinstance(result, DecryptionError)
        assert result.kind is DecryptionErrorKind.FAILED

    def test_truncated_ciphertext(self, engine):
        encrypted = run(engine.encrypt(VALUE))
        result = run(engine.decrypt(encrypted[:-1]))
        assert result.kind is DecryptionErrorKind.FAILED

    def test_failure_messages_are_identical(self, engine_class):
        encrypted = run(engine_class(SECRET).encrypt(VALUE, AAD))
        wrong_secret = run(engine_class("wrong-secret").decrypt(encrypted, AAD))
        wrong_aad = run(engine_class(SECRET).decrypt(encrypted, b"other"))
        assert str(wrong_secret) == str(wrong_aad)
        assert wrong_secret.kind is wrong_aad.kind


class TestExampleScenario:
    def test_hello_world(self):
        engine = DirectCipherEngine("correct-horse-battery-staple")
        encrypted = run(engine.encrypt(b"hello world"))
        assert len(encrypted) == 107
        assert run(engine.decrypt(encrypted)) == b"hello world"

        wrong = DirectCipherEngine("wrong-secret")
        assert isinstance(run(wrong.decrypt(encrypted)), DecryptionError)


class TestCombinedLayout:
    def test_subtle_native_layout_round_trip(self):
        engine = SubtleCipherEngine(SECRET, layout=EnvelopeLayout.TAG_AFTER_CIPHERTEXT)
        assert engine.minimum_envelope_length == 80
        encrypted = run(engine.encrypt(VALUE))
        assert len(encrypted) == 96 + len(VALUE)
        assert run(engine.decrypt(encrypted)) == VALUE

    def test_subtle_native_layout_short_body_fails_authentication(self):
        engine = SubtleCipherEngine(SECRET, layout=EnvelopeLayout.TAG_AFTER_CIPHERTEXT)
        assert run(engine.decrypt(b"\x00" * 79)).kind is DecryptionErrorKind.INVALID_VALUE
        assert run(engine.decrypt(b"\x00" * 85)).kind is DecryptionErrorKind.FAILED

    def test_direct_engine_reads_combined_layout(self):
        subtle = SubtleCipherEngine(SECRET, layout=EnvelopeLayout.TAG_AFTER_CIPHERTEXT)
        direct = DirectCipherEngine(SECRET, layout=EnvelopeLayout.TAG_AFTER_CIPHERTEXT)
        assert direct.minimum_envelope_length == 96
        encrypted = run(subtle.encrypt(VALUE, AAD))
        assert run(direct.decrypt(encrypted, AAD)) == VALUE
