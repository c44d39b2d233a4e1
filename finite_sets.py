from typing import Self
from typing import Optional, Iterator, Iterable, Any, Generic, TypeVar
import itertools

T = TypeVar('T')
G = TypeVar('G')

__all__ = [
	'FiniteSet',
]


# FINITE SET
# ----------

class FiniteSet(Generic[T]):
	'''
	finite mathematical set, backed by a duplicate-free list.

	elements keep their insertion order: it is irrelevant to equality but
	gives every element a stable index (`s[i]`, `s.index_of(x)`), which is
	what Cayley tables and the power set construction rely on.

	elements only need to support `==`. when they are also hashable, a
	hash index is kept alongside the list so membership is O(1); as soon
	as an unhashable element shows up (e.g. sets of sets) membership falls
	back to linear scans.

	sets are mutable (`add_element`, `delete_element`) and therefore not
	hashable. every other operation returns a new set.
	'''

	_elements: list[T]
	_lookup: Optional[set]

	def __init__(self, elements: Iterable[T] = ()):
		self._elements = []
		self._lookup = set()
		for x in elements:
			self.add_element(x)

	@classmethod
	def null_set(cls) -> Self:
		''' the empty set '''
		return cls()

	@property
	def elements(self) -> list[T]:
		''' copy of the underlying elements, in index order '''
		return list(self._elements)

	def clone(self) -> Self:
		new = type(self)()
		new._elements = list(self._elements)
		new._lookup = None if self._lookup is None else set(self._lookup)
		return new

	# mutation

	def _index_element(self, x: T):
		if self._lookup is None:
			return
		try:
			self._lookup.add(x)
		except TypeError:
			self._lookup = None

	def add_element(self, x: T):
		''' adds `x` unless an equal element is already present '''
		if x in self:
			return
		self.add_element_without_check(x)

	def add_element_without_check(self, x: T):
		'''
		appends `x` without looking for duplicates. the caller guarantees
		`x` is not in the set already, otherwise the set is left invalid.
		'''
		self._elements.append(x)
		self._index_element(x)

	def delete_element(self, index: int):
		''' deletes the element at position `index` '''
		if not (0 <= index < len(self._elements)):
			raise IndexError(f'element index {index} out of range')
		del self._elements[index]
		# rebuild rather than discard, equal elements may hash to the same entry
		self._lookup = set()
		for x in self._elements:
			self._index_element(x)

	# sequence protocol

	def cardinality(self) -> int:
		return len(self._elements)

	def __len__(self) -> int:
		return len(self._elements)

	def __iter__(self) -> Iterator[T]:
		return iter(self._elements)

	def __getitem__(self, index: int) -> T:
		if not isinstance(index, int):
			raise TypeError(f'element indices must be integers, not {type(index)}')
		if not (0 <= index < len(self._elements)):
			raise IndexError(f'element index {index} out of range')
		return self._elements[index]

	def __setitem__(self, index: int, x: T):
		if not (0 <= index < len(self._elements)):
			raise IndexError(f'element index {index} out of range')
		if any(i != index and y == x for i, y in enumerate(self._elements)):
			raise ValueError(f'element {x!r} is already in the set')
		self._elements[index] = x
		self._lookup = set()
		for y in self._elements:
			self._index_element(y)

	def __contains__(self, x: Any) -> bool:
		if self._lookup is not None:
			try:
				return x in self._lookup
			except TypeError:
				pass
		return any(y == x for y in self._elements)

	def index_of(self, x: T) -> int:
		''' position of `x` in the set, or -1 if it's not there '''
		for i, y in enumerate(self._elements):
			if y == x:
				return i
		return -1

	# set algebra

	def union(self, other: 'FiniteSet[T]') -> Self:
		if not len(self):
			return other.clone()
		if not len(other):
			return self.clone()
		new = self.clone()
		for x in other:
			new.add_element(x)
		return new

	def intersection(self, other: 'FiniteSet[T]') -> Self:
		new = type(self)()
		if not len(self) or not len(other):
			return new
		for x in self:
			if x in other:
				new.add_element_without_check(x)
		return new

	def difference(self, other: 'FiniteSet[T]') -> Self:
		''' set-theoretic difference `self \\ other` '''
		if not len(self) or not len(other):
			return self.clone()
		new = type(self)()
		for x in self:
			if x not in other:
				new.add_element_without_check(x)
		return new

	subtract = difference

	def is_subset_of(self, other: 'FiniteSet[T]') -> bool:
		return all(x in other for x in self)

	def is_proper_subset_of(self, other: 'FiniteSet[T]') -> bool:
		return len(self) < len(other) and self.is_subset_of(other)

	def is_superset_of(self, *others: 'FiniteSet[T]') -> bool:
		''' whether every one of `others` is a subset of this set '''
		return all(other.is_subset_of(self) for other in others)

	def power_set(self) -> 'FiniteSet[FiniteSet[T]]':
		'''
		set of all subsets (2^n of them, only meant for small sets).

		picks the first element x and recurses:
		P(S) = P(S \\ {x}) ∪ { A ∪ {x} : A ∈ P(S \\ {x}) }
		'''
		family: FiniteSet[FiniteSet[T]] = FiniteSet()
		if not len(self):
			family.add_element_without_check(type(self)())
			return family
		x = self._elements[0]
		rest = self.difference(type(self)([x]))
		smaller = rest.power_set()
		for subset in smaller:
			family.add_element_without_check(subset)
		for subset in smaller:
			extended = subset.clone()
			extended.add_element_without_check(x)
			family.add_element_without_check(extended)
		return family

	def direct_product(self, other: 'FiniteSet[G]') -> 'FiniteSet[tuple[T, G]]':
		''' cartesian product, as a set of `(a, b)` pairs; empty if either set is '''
		product: FiniteSet[tuple[T, G]] = FiniteSet()
		for pair in itertools.product(self, other):
			product.add_element_without_check(pair)
		return product

	# operators

	def __or__(self, other: 'FiniteSet[T]') -> Self:
		if not isinstance(other, FiniteSet):
			return NotImplemented
		return self.union(other)

	def __and__(self, other: 'FiniteSet[T]') -> Self:
		if not isinstance(other, FiniteSet):
			return NotImplemented
		return self.intersection(other)

	def __sub__(self, other: 'FiniteSet[T]') -> Self:
		if not isinstance(other, FiniteSet):
			return NotImplemented
		return self.difference(other)

	def __le__(self, other: 'FiniteSet[T]') -> bool:
		if not isinstance(other, FiniteSet):
			return NotImplemented
		return self.is_subset_of(other)

	def __lt__(self, other: 'FiniteSet[T]') -> bool:
		if not isinstance(other, FiniteSet):
			return NotImplemented
		return self.is_proper_subset_of(other)

	def __ge__(self, other: 'FiniteSet[T]') -> bool:
		if not isinstance(other, FiniteSet):
			return NotImplemented
		return other.is_subset_of(self)

	def __gt__(self, other: 'FiniteSet[T]') -> bool:
		if not isinstance(other, FiniteSet):
			return NotImplemented
		return other.is_proper_subset_of(self)

	# equality (unordered)

	def equals(self, other: 'FiniteSet[T]') -> bool:
		return len(self) == len(other) and self.is_subset_of(other)

	def __eq__(self, other: Any):
		if not isinstance(other, FiniteSet):
			return NotImplemented
		return self.equals(other)

	def __ne__(self, other: Any):
		if not isinstance(other, FiniteSet):
			return NotImplemented
		return not self.equals(other)

	__hash__ = None  # type: ignore[assignment]

	# formatting

	def __repr__(self):
		return '{' + ', '.join(map(repr, self._elements)) + '}'
