from collections import Counter

import pytest

from randpass.entropy import RandomByteSource, UnbiasedSampler, RANDOM_BATCH_SIZE
from randpass.errors import RandomSourceError


def test_refills_in_batches():
    calls = []

    def randbytes(n):
        calls.append(n)
        return bytes(range(n))

    source = RandomByteSource(randbytes, batch_size=4)
    values = [source.next_byte() for _ in range(9)]
    assert values == [0, 1, 2, 3, 0, 1, 2, 3, 0]
    assert calls == [4, 4, 4]


def test_default_batch_size():
    calls = []

    def randbytes(n):
        calls.append(n)
        return bytes(n)

    source = RandomByteSource(randbytes)
    for _ in range(RANDOM_BATCH_SIZE):
        source.next_byte()
    assert calls == [256]
    source.next_byte()
    assert calls == [256, 256]


@pytest.mark.parametrize("error", [OSError, NotImplementedError])
def test_source_failure_is_wrapped(error):
    def randbytes(n):
        raise error("no entropy")

    source = RandomByteSource(randbytes)
    with pytest.raises(RandomSourceError) as exc:
        source.next_byte()
    assert isinstance(exc.value.__cause__, error)


def test_short_read_raises():
    source = RandomByteSource(lambda n: b"\x00", batch_size=8)
    with pytest.raises(RandomSourceError):
        source.next_byte()


def test_rejects_values_above_limit():
    # bound 52: limit = 256 - 256 % 52 = 208
    source = RandomByteSource(lambda n: bytes([250, 208, 7]), batch_size=3)
    sampler = UnbiasedSampler(source)
    assert sampler.next_index(52) == 7


def test_bound_one_is_always_zero():
    sampler = UnbiasedSampler(RandomByteSource(lambda n: bytes([255, 3]), batch_size=2))
    assert [sampler.next_index(1) for _ in range(4)] == [0, 0, 0, 0]


def test_invalid_bound():
    with pytest.raises(ValueError):
        UnbiasedSampler().next_index(0)


def test_exact_uniformity_over_one_full_cycle():
    # every byte value once per batch; the 208 accepted values hit each residue 4 times
    sampler = UnbiasedSampler(RandomByteSource(lambda n: bytes(range(n))))
    counts = Counter(sampler.next_index(52) for _ in range(208))
    assert set(counts) == set(range(52))
    assert set(counts.values()) == {4}


def test_bound_above_256_reads_two_bytes():
    # bound 300: limit = 65536 - 65536 % 300 = 65400, so 0xFFFF is rejected
    source = RandomByteSource(lambda n: bytes([0xFF, 0xFF, 0x01, 0x2D]), batch_size=4)
    assert UnbiasedSampler(source).next_index(300) == 1


def test_chi_squared_no_modulo_bias():
    trials = 100_000
    bound = 52
    sampler = UnbiasedSampler()
    counts = Counter(sampler.next_index(bound) for _ in range(trials))
    assert set(counts) == set(range(bound))
    expected = trials / bound
    chi2 = sum((counts[i] - expected) ** 2 / expected for i in range(bound))
    # 51 degrees of freedom; p(chi2 > 120) is far below 1e-6
    assert chi2 < 120
