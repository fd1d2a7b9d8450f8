from __future__ import annotations

import pytest

from conftest import RecordingAllocator, WrappedProvider
from cryptokat import Dispatcher, Outcome, registry
from cryptokat.errors import (
    BufferOverrunError,
    InvalidVectorError,
    KeySetupMismatchError,
    OperationFailedError,
    VectorMismatchError,
)
from cryptokat.faults import FaultPolicy
from cryptokat.interfaces import CipherRequest, KeyRejected, ProviderError, TransformFlags
from cryptokat.registry import RegistryEntry
from cryptokat.runners import RunContext
from cryptokat.runners import cipher as cipher_runner
from cryptokat.scatter import scatter
from cryptokat.scratch import ScratchPool
from cryptokat.vectors.schema import CipherSuite, CipherVector, h

CIPHER_ENTRIES = [e.name for e in registry if e.category == "cipher"]

FIPS197_KEY = bytes(range(16))
FIPS197_PT = h("00112233445566778899aabbccddeeff")
FIPS197_CT = h("69c4e0d86a7b0430d8cdb78070b4c55a")


def _entry(*encrypt: CipherVector, decrypt=()) -> RegistryEntry:
    suite = CipherSuite(encrypt=tuple(encrypt), decrypt=tuple(decrypt))
    return RegistryEntry("ecb(aes)", "cipher", suite, cipher_runner.test_cipher)


@pytest.mark.parametrize("name", CIPHER_ENTRIES)
def test_cipher_entries_pass(ctx: RunContext, name: str) -> None:
    cipher_runner.test_cipher(ctx, registry.get(name), name)
    assert ctx.pool.outstanding == 0


@pytest.mark.parametrize("name", ["cbc-aes-pyca", "cbc-des3-pyca", "ctr-aes-pyca"])
def test_cipher_entries_pass_with_deferred_completion(ctx: RunContext, name: str) -> None:
    cipher_runner.test_cipher(ctx, registry.get(name), name, TransformFlags.ASYNC)


def test_aes128_fips197_in_place(provider) -> None:
    handle = provider.allocate("ecb-aes-pyca")
    provider.set_key(handle, FIPS197_KEY)
    buf = bytearray(FIPS197_PT)
    view = memoryview(buf)
    provider.encrypt(handle, CipherRequest([view], [view], 16, bytearray(16)))
    assert bytes(buf) == FIPS197_CT
    provider.decrypt(handle, CipherRequest([view], [view], 16, bytearray(16)))
    assert bytes(buf) == FIPS197_PT


def test_cbc_round_trip(provider) -> None:
    key = h("c286696d887c9aa0611bbb3e2025a45a")
    iv = h("562e17996d093d28ddb3ba695a2e6f58")
    plaintext = bytes(range(64))
    handle = provider.allocate("cbc(aes)")
    provider.set_key(handle, key)
    buf = bytearray(plaintext)
    view = memoryview(buf)
    provider.encrypt(handle, CipherRequest([view], [view], 64, bytearray(iv)))
    assert bytes(buf) != plaintext
    provider.decrypt(handle, CipherRequest([view], [view], 64, bytearray(iv)))
    assert bytes(buf) == plaintext


def _generic_vectors(predicate):
    return [
        (e.name, i)
        for e in registry
        if e.category == "cipher" and not e.name.endswith("-pyca")
        for i, v in enumerate(e.suite.encrypt)
        if predicate(v)
    ]


def _crypt(provider, handle, segments, nbytes, iv, encrypt=True) -> None:
    req = CipherRequest(list(segments), list(segments), nbytes, bytearray(iv))
    if encrypt:
        provider.encrypt(handle, req)
    else:
        provider.decrypt(handle, req)


@pytest.mark.parametrize("name,index", _generic_vectors(lambda v: not v.fail))
def test_every_accepted_key_round_trips(provider, name: str, index: int) -> None:
    v = registry.get(name).suite.encrypt[index]
    handle = provider.allocate(name)
    provider.set_key(handle, v.key[:v.key_size])
    buf = bytearray(v.input)
    view = memoryview(buf)
    _crypt(provider, handle, [view], len(buf), v.padded_iv())
    assert bytes(buf) == v.result
    _crypt(provider, handle, [view], len(buf), v.padded_iv(), encrypt=False)
    assert bytes(buf) == v.input


@pytest.mark.parametrize("name,index", _generic_vectors(lambda v: v.chunked and not v.fail))
def test_every_chunked_vector_matches_contiguous(provider, name: str, index: int) -> None:
    v = registry.get(name).suite.encrypt[index]
    handle = provider.allocate(name)
    provider.set_key(handle, v.key[:v.key_size])
    contiguous = bytearray(v.input)
    _crypt(provider, handle, [memoryview(contiguous)], len(contiguous), v.padded_iv())
    with ScratchPool().pages() as arena:
        layout = scatter(arena, v.taps, v.input, guard=True)
        _crypt(provider, handle, layout.views, layout.nbytes, v.padded_iv())
        chunked = layout.gather()
    assert chunked == bytes(contiguous) == v.result


def _failing_setkey(handle, key):
    raise ProviderError("engine fault during setkey")


def test_provider_error_in_setkey_is_a_rejection(wrapped: WrappedProvider) -> None:
    wrapped.after["set_key"] = _failing_setkey
    with pytest.raises(KeySetupMismatchError) as info:
        cipher_runner.test_cipher(RunContext(provider=wrapped), registry.get("ecb(aes)"), "ecb-aes-pyca")
    assert info.value.index == 0
    assert wrapped.allocated == wrapped.freed == 1

    vector = CipherVector(key=FIPS197_KEY, input=FIPS197_PT, result=FIPS197_CT, fail=True)
    cipher_runner.test_cipher(RunContext(provider=wrapped), _entry(vector), "ecb-aes-pyca")


def test_provider_error_in_setkey_fails_both_entries(wrapped: WrappedProvider) -> None:
    wrapped.after["set_key"] = _failing_setkey
    report = Dispatcher(RunContext(provider=wrapped)).run_test("ecb-aes-pyca", "ecb(aes)")
    assert report.outcome is Outcome.FAILED
    assert len(report.entries) == 2
    assert all(isinstance(err, KeySetupMismatchError) for err in report.errors)


def test_unexpected_exception_from_operation_fails_the_run(wrapped: WrappedProvider) -> None:
    def _backend_bug(handle, req):
        raise ValueError("bad iv length from backend")

    wrapped.after["encrypt"] = _backend_bug
    report = Dispatcher(RunContext(provider=wrapped)).run_test("cbc-aes-pyca", "cbc(aes)")
    assert report.outcome is Outcome.FAILED
    assert len(report.entries) == 2
    for err in report.errors:
        assert isinstance(err, OperationFailedError)
        assert isinstance(err.__cause__, ValueError)
        assert err.algorithm in ("cbc(aes)", "cbc-aes-pyca")
    assert wrapped.allocated == wrapped.freed == 2


def test_expected_rejection_that_is_accepted_fails(ctx: RunContext) -> None:
    vector = CipherVector(key=FIPS197_KEY, input=FIPS197_PT, result=FIPS197_CT, fail=True)
    with pytest.raises(KeySetupMismatchError) as info:
        cipher_runner.test_cipher(ctx, _entry(vector), "ecb-aes-pyca")
    assert info.value.direction == "encryption"
    assert info.value.index == 0


def test_unexpected_rejection_fails(ctx: RunContext) -> None:
    vector = CipherVector(key=bytes(20), input=FIPS197_PT, result=FIPS197_CT)
    with pytest.raises(KeySetupMismatchError):
        cipher_runner.test_cipher(ctx, _entry(vector), "ecb-aes-pyca")


def test_weak_key_only_refused_when_requested(provider) -> None:
    weak = h("0123456789abcdef 0123456789abcdef fedcba9876543210")
    handle = provider.allocate("ecb-des3-pyca")
    provider.set_key(handle, weak)
    provider.set_flags(handle, TransformFlags.REQ_WEAK_KEY)
    with pytest.raises(KeyRejected):
        provider.set_key(handle, weak)
    provider.clear_flags(handle)
    provider.set_key(handle, weak)

    # the shipped table carries a weak-key vector that must be refused
    ctx = RunContext(provider=provider)
    cipher_runner.test_cipher(ctx, registry.get("ecb(des3_ede)"), "ecb-des3-pyca")


def test_fault_id_injects_into_every_key_length(provider) -> None:
    ctx = RunContext(provider=provider, faults=FaultPolicy.parse("ecb-des3"))
    with pytest.raises(VectorMismatchError) as info:
        cipher_runner.test_cipher(ctx, registry.get("ecb(des3_ede)"), "ecb-des3-pyca")
    assert info.value.index == 0


def test_key_length_override_targets_one_vector(provider) -> None:
    ctx = RunContext(provider=provider, faults=FaultPolicy.parse("ecb-aes-pyca:192"))
    with pytest.raises(VectorMismatchError) as info:
        cipher_runner.test_cipher(ctx, registry.get("ecb-aes-pyca"), "ecb-aes-pyca")
    assert info.value.index == 1
    assert info.value.direction == "encryption"


def test_key_length_override_with_no_matching_vector_passes(provider) -> None:
    ctx = RunContext(provider=provider, faults=FaultPolicy.parse("ecb-aes-pyca:512"))
    cipher_runner.test_cipher(ctx, registry.get("ecb-aes-pyca"), "ecb-aes-pyca")


def test_fault_injection_reaches_chunked_vectors(provider) -> None:
    vector = CipherVector(
        key=FIPS197_KEY, input=FIPS197_PT * 2, result=FIPS197_CT * 2, taps=(20, 12)
    )
    ctx = RunContext(provider=provider, faults=FaultPolicy.parse("ecb-aes-pyca:128"))
    with pytest.raises(VectorMismatchError) as info:
        cipher_runner.test_cipher(ctx, _entry(vector), "ecb-aes-pyca")
    assert info.value.chunk == 0


def test_chunk_mismatch_names_the_chunk(wrapped: WrappedProvider) -> None:
    def _corrupt_last_chunk(handle, req):
        req.dst[-1][-1] ^= 0x01

    wrapped.after["encrypt"] = _corrupt_last_chunk
    vector = CipherVector(
        key=FIPS197_KEY, input=FIPS197_PT * 2, result=FIPS197_CT * 2, taps=(8, 8, 16)
    )
    ctx = RunContext(provider=wrapped)
    with pytest.raises(VectorMismatchError) as info:
        cipher_runner.test_cipher(ctx, _entry(vector), "ecb-aes-pyca")
    assert info.value.chunk == 2
    assert wrapped.allocated == wrapped.freed == 1


def test_write_past_a_chunk_is_an_overrun(
    wrapped: WrappedProvider, recording_allocator: RecordingAllocator
) -> None:
    def _spill(handle, req):
        # chunk 0 sits at page 0, offset 32
        recording_allocator.pages[0][32 + len(req.dst[0])] = 0xAA

    wrapped.after["encrypt"] = _spill
    vector = CipherVector(
        key=FIPS197_KEY, input=FIPS197_PT * 2, result=FIPS197_CT * 2, taps=(16, 16)
    )
    ctx = RunContext(provider=wrapped, pool=ScratchPool(allocator=recording_allocator))
    with pytest.raises(BufferOverrunError) as info:
        cipher_runner.test_cipher(ctx, _entry(vector), "ecb-aes-pyca")
    assert info.value.chunk == 0
    assert ctx.pool.outstanding == 0


def test_oversized_input_is_invalid(ctx: RunContext) -> None:
    vector = CipherVector(key=FIPS197_KEY, input=bytes(4112), result=bytes(4112))
    with pytest.raises(InvalidVectorError):
        cipher_runner.test_cipher(ctx, _entry(vector), "ecb-aes-pyca")


def test_missing_decrypt_table_is_skipped(ctx: RunContext) -> None:
    vector = CipherVector(key=FIPS197_KEY, input=FIPS197_PT, result=FIPS197_CT)
    cipher_runner.test_cipher(ctx, _entry(vector), "ecb-aes-pyca")
