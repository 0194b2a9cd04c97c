import operator
from collections import Counter
from collections.abc import Callable, Hashable, Iterable, Iterator, Set
from typing import Any, Generic

from typing_extensions import Self, TypeVar

T = TypeVar("T", bound=Hashable)


class MultisetException(Exception):
    """
    Base class for the errors raised by a Multiset.
    """

    pass


class InvalidArgumentException(MultisetException, ValueError):
    """
    An InvalidArgumentException is raised when a count, scale factor or
    capacity hint is negative. The multiset is never modified when this
    is raised.
    """

    pass


def _check_non_negative(value: int, name: str) -> int:
    value = operator.index(value)
    if value < 0:
        raise InvalidArgumentException(f"{name} must be non-negative, got {value}")
    return value


def _tally(other: Iterable[Any]) -> Counter[Any]:
    """
    Return the occurrence counts of `other`.
    A Multiset is used as is, any other iterable is counted one by one
    (mappings count each of their keys once).
    """
    if isinstance(other, Multiset):
        return other.counter
    return Counter(iter(other))


def _tally_storable(other: Iterable[Any]) -> tuple[Counter[Any], int]:
    """
    Like `_tally`, but values that can never be stored in a multiset
    (unhashable ones) are left out instead of raising.

    Returns the counts and the number of values that were left out.
    """
    if isinstance(other, Multiset):
        return other.counter, 0
    counts: Counter[Any] = Counter()
    skipped = 0
    for item in other:
        try:
            counts[item] += 1
        except TypeError:
            skipped += 1
    return counts, skipped


class Multiset(Generic[T]):
    """
    In mathematics, a multiset (or bag, or mset) is a modification of the concept of a
    set that, unlike a set, allows for multiple instances for each of its elements.
    The number of instances given for each element is called the multiplicity of
    that element in the multiset.

    The multiplicities are stored in a Counter. Only strictly positive
    multiplicities are kept, an element that drops to zero is removed.

    Mutating methods (add, delete, merge, subtract, scale, clear) return the
    multiset itself so calls can be chained:

        Multiset([1, 2]).add(2).merge([3, 4])  # Multiset{1, 2, 2, 3, 4}

    The algebra operators (|, &, +, -, ^, *) leave their operands untouched
    and return a new multiset.

    A Multiset is not safe for concurrent mutation.
    """

    counter: Counter[T]

    def __init__(
        self, iterable: Iterable[T] | None = None, initial_capacity: int | None = None
    ):
        """
        Initialize the multiset with an optional iterable.

        `initial_capacity` is accepted as a sizing hint. Dicts can not be
        pre-sized, so apart from validation it has no effect.
        """
        if initial_capacity is not None:
            _check_non_negative(initial_capacity, "initial_capacity")
        if iterable is None:
            self.counter = Counter()
        elif isinstance(iterable, Multiset):
            self.counter = Counter(iterable.counter)
        else:
            self.counter = _tally(iterable)

    @classmethod
    def _from_counter(cls, counter: Counter[T]) -> Self:
        result = cls()
        result.counter = +counter
        return result

    # Mutators

    def add(self, item: T, count: int = 1) -> Self:
        """
        Increment the multiplicity of `item` by `count`.

            Multiset([1, 2, 3]).add(4, 2)  # Multiset{1, 2, 3, 4, 4}
        """
        count = _check_non_negative(count, "count")
        if count:
            self.counter[item] += count
        return self

    def delete(self, item: Any, count: int = 1) -> Self:
        """
        Decrement the multiplicity of `item` by `count`.
        The item is removed once its multiplicity reaches zero; deleting an
        item that is not present does nothing.

            Multiset([4, 4, 5]).delete(4, 2)  # Multiset{5}
        """
        count = _check_non_negative(count, "count")
        current = self.multiplicity(item)
        if current == 0 or count == 0:
            return self
        if current > count:
            self.counter[item] = current - count
        else:
            del self.counter[item]
        return self

    def merge(self, other: Iterable[T]) -> Self:
        """
        Add every element of `other`. A multiset argument adds its
        multiplicities, any other iterable adds one per occurrence.
        """
        self.counter.update(_tally(other))
        return self

    def subtract(self, other: Iterable[Any]) -> Self:
        """
        Remove every element of `other`, the inverse of `merge`.
        Elements that are not present, including values that could never
        be stored, are ignored like in `delete`.
        """
        counts, _ = _tally_storable(other)
        self.counter -= counts
        return self

    def scale(self, factor: int) -> Self:
        """
        Multiply the multiplicity of every element by `factor`.
        A factor of zero clears the multiset.

            Multiset([1, 2, 2]).scale(2)  # Multiset{1, 1, 2, 2, 2, 2}
        """
        factor = _check_non_negative(factor, "factor")
        if factor == 0:
            return self.clear()
        for item in self.counter:
            self.counter[item] *= factor
        return self

    def clear(self) -> Self:
        """Remove all elements"""
        self.counter.clear()
        return self

    # Queries

    def multiplicity(self, item: Any) -> int:
        """
        Return the count of an item in the multiset.
        Items that can not be stored at all (unhashable values) have a
        multiplicity of 0.
        """
        try:
            return self.counter.get(item, 0)
        except TypeError:
            return 0

    def unique(self) -> list[T]:
        """Return the distinct elements, in order of first insertion"""
        return list(self.counter)

    @property
    def unique_count(self) -> int:
        return len(self.counter)

    def is_empty(self) -> bool:
        return not self.counter

    def items(self) -> Iterator[tuple[T, int]]:
        """Iterate over the multiset as (element, multiplicity) pairs"""
        return iter(self.counter.items())

    def intersects(self, other: Iterable[Any]) -> bool:
        """
        Return True if the multiset has any element in common with `other`.
        """
        if not isinstance(other, Multiset):
            return any(item in self for item in other)
        # walk the side with the fewest distinct elements
        if self.unique_count <= other.unique_count:
            small, large = self, other
        else:
            small, large = other, self
        return any(item in large.counter for item in small.counter)

    def _fits_in(self, counts: Counter[Any]) -> bool:
        for item, count in self.counter.items():
            if counts[item] < count:
                return False
        return True

    def _covers(self, counts: Counter[Any]) -> bool:
        for item, count in counts.items():
            if self.counter[item] < count:
                return False
        return True

    def is_subset(self, other: Iterable[Any]) -> bool:
        """Check if this multiset is a subset of another multiset"""
        counts, _ = _tally_storable(other)
        return self._fits_in(counts)

    def is_superset(self, other: Iterable[Any]) -> bool:
        """
        Check if this multiset is a superset of another multiset.
        An iterable holding values that can never be stored (unhashable
        ones) is never covered.
        """
        counts, skipped = _tally_storable(other)
        return not skipped and self._covers(counts)

    def is_proper_subset(self, other: Iterable[Any]) -> bool:
        """
        A proper subset is a subset with fewer elements, so
        Multiset([1, 2]) is a proper subset of Multiset([1, 1, 2]).
        """
        counts, skipped = _tally_storable(other)
        return len(self) < counts.total() + skipped and self._fits_in(counts)

    def is_proper_superset(self, other: Iterable[Any]) -> bool:
        counts, skipped = _tally_storable(other)
        return not skipped and len(self) > counts.total() and self._covers(counts)

    # Algebra

    def copy(self) -> Self:
        """Return an independent copy of the multiset"""
        return self._from_counter(self.counter)

    dup = copy
    __copy__ = copy

    def union(self, other: Iterable[T]) -> Self:
        """
        Return a new multiset that is the union of this and another multiset.
        Each element gets the largest of its two multiplicities.
        """
        return self._from_counter(self.counter | _tally(other))

    def intersection(self, other: Iterable[Any]) -> Self:
        """
        Return a new multiset that is the intersection of this and another multiset.
        Each element gets the smallest of its two multiplicities.

        A plain iterable is treated as a collection of candidates: every
        element it contains keeps its full multiplicity from this multiset,
        however often it is repeated in `other`.
        """
        if isinstance(other, Multiset):
            return self._from_counter(self.counter & other.counter)
        result = type(self)()
        for item in other:
            if item in result:
                continue
            count = self.multiplicity(item)
            if count:
                result.counter[item] = count
        return result

    def sum(self, other: Iterable[T]) -> Self:
        """Return a new multiset holding the elements of both"""
        return self.copy().merge(other)

    def difference(self, other: Iterable[Any]) -> Self:
        """Return a new multiset that is the difference of this and another multiset"""
        return self.copy().subtract(other)

    def symmetric_difference(self, other: Iterable[T]) -> Self:
        """
        Return a new multiset where each element gets the absolute
        difference between its two multiplicities.
        """
        counts = _tally(other)
        return self._from_counter((self.counter - counts) + (counts - self.counter))

    def each(self, callback: Callable[[T], object]) -> Self:
        """Call `callback` once for every occurrence of every element"""
        for item in self:
            callback(item)
        return self

    # Operators

    def __or__(self, other: object) -> Self:
        if not isinstance(other, Iterable):
            return NotImplemented
        return self.union(other)

    def __and__(self, other: object) -> Self:
        if not isinstance(other, Iterable):
            return NotImplemented
        return self.intersection(other)

    def __add__(self, other: object) -> Self:
        if not isinstance(other, Iterable):
            return NotImplemented
        return self.sum(other)

    def __sub__(self, other: object) -> Self:
        if not isinstance(other, Iterable):
            return NotImplemented
        return self.difference(other)

    def __xor__(self, other: object) -> Self:
        if not isinstance(other, Iterable):
            return NotImplemented
        return self.symmetric_difference(other)

    def __mul__(self, factor: object) -> Self:
        if not isinstance(factor, int):
            return NotImplemented
        return self.copy().scale(factor)

    __rmul__ = __mul__

    def __lshift__(self, item: T) -> Self:
        """`ms << item` adds a single item in place, like `add`"""
        return self.add(item)

    def __iadd__(self, other: object) -> Self:
        if not isinstance(other, Iterable):
            return NotImplemented
        return self.merge(other)

    def __isub__(self, other: object) -> Self:
        if not isinstance(other, Iterable):
            return NotImplemented
        return self.subtract(other)

    def __imul__(self, factor: object) -> Self:
        if not isinstance(factor, int):
            return NotImplemented
        return self.scale(factor)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Multiset):
            return NotImplemented
        return self.is_subset(other)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Multiset):
            return NotImplemented
        return self.is_proper_subset(other)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Multiset):
            return NotImplemented
        return self.is_superset(other)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Multiset):
            return NotImplemented
        return self.is_proper_superset(other)

    def __eq__(self, other: object) -> bool:
        """
        Two multisets are equal when they hold the same multiplicities.

        A plain set is equal when the sizes match and every member of the
        set is in the multiset, so Multiset([1, 2]) is equal to {1, 2} while
        Multiset([1, 1]) is equal to neither {1} nor {1, 2}.
        """
        if isinstance(other, Multiset):
            return self.counter == other.counter
        if isinstance(other, Set):
            return len(self) == len(other) and all(item in self for item in other)
        return NotImplemented

    # mutable, like set
    __hash__ = None  # type: ignore[assignment]

    def __contains__(self, item: object) -> bool:
        """Check if an element is in the multiset"""
        return self.multiplicity(item) > 0

    def __len__(self) -> int:
        """Total number of elements, duplicates included"""
        return self.counter.total()

    def __bool__(self) -> bool:
        return bool(self.counter)

    def __iter__(self) -> Iterator[T]:
        """
        Lazily yield every element as many times as its multiplicity,
        equal elements next to each other.
        """
        return self.counter.elements()

    def __repr__(self) -> str:
        """String representation of the multiset"""
        return f"{type(self).__name__}{{{', '.join(repr(item) for item in self)}}}"
