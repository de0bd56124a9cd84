from typing import Collection, Sequence, Set, Tuple, TypeVar
from more_itertools import windowed

T = TypeVar("T")


def spans(seq: Collection[T], length: int) -> Set[Tuple[T, ...]]:
    """Return all the contiguous spans of ``seq`` of exactly the given
    length

    .. note::

        if ``length`` is greater than the length of ``seq``, or if
        ``length`` is not positive, the returned set is empty.

    :param seq:
    :param length:
    """
    if length <= 0 or length > len(seq):
        return set()
    return {tuple(span) for span in windowed(seq, length)}  # type: ignore


def share_run(seq1: Sequence[T], seq2: Sequence[T], run_len: int) -> bool:
    """Check if two sequences share a contiguous, ordered run of
    ``run_len`` elements.

    Sharing a run of ``n`` elements implies sharing a run of any
    length below ``n``, so checking spans of exactly ``run_len`` is
    enough.
    """
    if run_len <= 0:
        return False
    spans1 = spans(seq1, run_len)
    if len(spans1) == 0:
        return False
    return not spans1.isdisjoint(spans(seq2, run_len))
