import threading

import pytest

from vectortile.lazy import LazySequence


def counting_source(n, calls):
    for i in range(n):
        calls.append(i)
        yield i * i


def test_nothing_computed_until_consumed():
    calls = []
    seq = LazySequence(counting_source(5, calls))
    assert calls == []
    assert seq[1] == 1
    assert calls == [0, 1]
    assert seq.evaluated == 2


def test_reiteration_uses_cache():
    calls = []
    seq = LazySequence(counting_source(4, calls))
    first = list(seq)
    second = list(seq)
    assert first == second == [0, 1, 4, 9]
    assert calls == [0, 1, 2, 3]
    assert seq.done


def test_len_bool_and_negative_index():
    seq = LazySequence(iter([3, 4]))
    assert seq
    assert len(seq) == 2
    assert seq[-1] == 4
    assert not LazySequence([])
    with pytest.raises(IndexError):
        seq[5]


def test_error_is_memoized():
    def source():
        yield 1
        raise ValueError("boom")

    seq = LazySequence(source())
    assert seq[0] == 1
    with pytest.raises(ValueError, match="boom"):
        seq.force()
    # the generator is dead; the same error comes back instead of a short sequence
    with pytest.raises(ValueError, match="boom"):
        list(seq)
    assert seq[0] == 1


def test_concurrent_readers_compute_each_element_once():
    calls = []
    seq = LazySequence(counting_source(200, calls))
    results = []
    barrier = threading.Barrier(8)

    def reader():
        barrier.wait()
        results.append(list(seq))

    threads = [threading.Thread(target=reader) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert calls == list(range(200))
    assert all(r == [i * i for i in range(200)] for r in results)


def test_interrupt_is_memoized_too():
    def source():
        yield 1
        raise KeyboardInterrupt

    seq = LazySequence(source())
    with pytest.raises(KeyboardInterrupt):
        seq.force()
    # the generator died mid-way; a later read must not pass for a complete sequence
    with pytest.raises(KeyboardInterrupt):
        list(seq)
    assert not seq.done
    assert seq[0] == 1
