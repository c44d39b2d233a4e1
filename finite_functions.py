from typing import Self
from abc import ABC, abstractmethod
from typing import Optional, Callable, Iterable, Any, Generic, Mapping, TypeVar, Union
import itertools
import threading

from finite_sets import FiniteSet

T = TypeVar('T')
G = TypeVar('G')
S = TypeVar('S')

__all__ = [
	'MathMap', 'TableMap', 'CompositionMap', 'RuleMap',
	'PropertyCache',
	'FiniteFunction',
	'FiniteBinaryOperation',
	'FiniteLeftExternalBinaryOperation',
]


# MAPS
# ----

class MathMap(ABC, Generic[T, G]):
	'''
	a (possibly partial) rule assigning outputs to inputs. maps carry no
	domain: `FiniteFunction` pairs one with a domain and a codomain, and
	checks it's total over that domain.

	applying a map to an input it doesn't define raises ValueError.
	'''

	@abstractmethod
	def apply_map(self, x: T) -> G:
		''' the output assigned to `x` '''

	def __call__(self, x: T) -> G:
		return self.apply_map(x)

class TableMap(MathMap[T, G]):
	''' map given by its graph, a collection of `(input, output)` pairs with unique inputs '''

	_pairs: list[tuple[T, G]]
	_table: Optional[dict]

	def __init__(self, pairs: Union[Iterable[tuple[T, G]], Mapping[T, G]]):
		if isinstance(pairs, Mapping):
			pairs = pairs.items()
		self._pairs = []
		self._table = {}
		for x, y in pairs:
			try:
				known = self.apply_map(x)
			except ValueError:
				pass
			else:
				if known != y:
					raise ValueError(f'input {x!r} is assigned both {known!r} and {y!r}')
				continue
			self._pairs.append((x, y))
			if self._table is not None:
				try:
					self._table[x] = y
				except TypeError:
					self._table = None

	@property
	def pairs(self) -> list[tuple[T, G]]:
		return list(self._pairs)

	def apply_map(self, x: T) -> G:
		if self._table is not None:
			try:
				return self._table[x]
			except KeyError:
				raise ValueError(f'{x!r} is not a valid input for this map') from None
			except TypeError:
				pass
		for k, v in self._pairs:
			if k == x:
				return v
		raise ValueError(f'{x!r} is not a valid input for this map')

	def __repr__(self):
		return f'TableMap({self._pairs!r})'

class CompositionMap(MathMap[T, G]):
	''' `outer ∘ inner`: applies `inner` first, then `outer` '''

	def __init__(self, inner: MathMap[T, Any], outer: MathMap[Any, G]):
		self.inner = inner
		self.outer = outer

	def apply_map(self, x: T) -> G:
		return self.outer.apply_map(self.inner.apply_map(x))

	def __repr__(self):
		return f'CompositionMap({self.inner!r}, {self.outer!r})'

class RuleMap(MathMap[T, G]):
	'''
	map given by a Python callable. the callable is trusted to be pure;
	exceptions it raises are reported as undefined inputs.
	'''

	def __init__(self, rule: Callable[[T], G]):
		self.rule = rule

	def apply_map(self, x: T) -> G:
		try:
			return self.rule(x)
		except (TypeError, ValueError, KeyError, IndexError, ArithmeticError) as e:
			raise ValueError(f'{x!r} is not a valid input for this map') from e

	def __repr__(self):
		return f'RuleMap({self.rule!r})'


# PROPERTY CACHE
# --------------

class PropertyCache:
	'''
	lazily filled `name -> bool` map of derived properties.

	entries are only ever added: once a property is known it's never
	recomputed nor overwritten, which is sound because every object using
	this is immutable after construction. externally known facts can be
	merged in, but never replace an existing entry.

	the lock is re-entrant because computing one property often queries others.
	'''

	_properties: dict[str, bool]
	_lock: threading.RLock

	def _init_properties(self, known_properties: Optional[Mapping[str, bool]] = None):
		self._properties = {}
		self._lock = threading.RLock()
		if known_properties:
			self._merge_properties(known_properties)

	def _merge_properties(self, known_properties: Mapping[str, bool]):
		with self._lock:
			for key, value in known_properties.items():
				self._properties.setdefault(key, bool(value))

	def _known(self, key: str) -> Optional[bool]:
		with self._lock:
			return self._properties.get(key)

	def _record(self, key: str, value: bool) -> bool:
		with self._lock:
			return self._properties.setdefault(key, bool(value))

	def _property(self, key: str, compute: Callable[[], bool]) -> bool:
		with self._lock:
			value = self._properties.get(key)
			if value is None:
				value = self._record(key, compute())
			return value

	@property
	def properties(self) -> dict[str, bool]:
		''' copy of the currently known properties '''
		with self._lock:
			return dict(self._properties)


# FINITE FUNCTION
# ---------------

class FiniteFunction(PropertyCache, Generic[T, G]):
	'''
	total function between two finite sets.

	construction checks that the relation sends every domain element into
	the codomain, so a malformed function can't exist. functions are
	immutable: `domain` and `codomain` hand out copies.

	injectivity, surjectivity and bijectivity are computed on demand and
	cached under those names in `properties`.
	'''

	_domain: FiniteSet[T]
	_codomain: FiniteSet[G]
	_relation: MathMap[T, G]
	_image: Optional[FiniteSet[G]]
	_inverse: Optional['FiniteFunction[G, T]']

	def __init__(self, domain: FiniteSet[T], codomain: FiniteSet[G], relation: MathMap[T, G],
			known_properties: Optional[Mapping[str, bool]] = None):
		for x in domain:
			y = relation.apply_map(x)
			if y not in codomain:
				raise ValueError(f'the codomain does not contain {y!r}, the output for {x!r}')
		self._domain = domain.clone()
		self._codomain = codomain.clone()
		self._relation = relation
		self._image = None
		self._inverse = None
		self._init_properties(known_properties)

	@property
	def domain(self) -> FiniteSet[T]:
		return self._domain.clone()

	@property
	def codomain(self) -> FiniteSet[G]:
		return self._codomain.clone()

	@property
	def relation(self) -> MathMap[T, G]:
		return self._relation

	def apply_map(self, x: T) -> G:
		if x not in self._domain:
			raise ValueError(f'the domain does not contain {x!r}')
		# outputs were checked against the codomain at construction
		return self._relation.apply_map(x)

	def __call__(self, x: T) -> G:
		return self.apply_map(x)

	def composition(self, inner: 'FiniteFunction[S, T]') -> 'FiniteFunction[S, G]':
		'''
		composition `self ∘ inner`, in which this function is the outer one.

		the result is only marked injective / surjective / bijective when
		both functions are already known to be; nothing is evaluated for it.
		'''
		if inner._codomain != self._domain:
			raise ValueError('the codomain of the inner function must equal the domain of this function')
		known = {}
		for key in ('injective', 'surjective', 'bijective'):
			if self._known(key) and inner._known(key):
				known[key] = True
		return FiniteFunction(inner._domain, self._codomain,
			CompositionMap(inner.relation, self.relation), known)

	def restriction(self, new_domain: FiniteSet[T]) -> Optional['FiniteFunction[T, G]']:
		''' this function restricted to `new_domain`, or None if that's not a subset of the domain '''
		if not new_domain.is_subset_of(self._domain):
			return None
		known = {'injective': True} if self._known('injective') else {}
		return FiniteFunction(new_domain, self._codomain, self.relation, known)

	# equality

	def equivalent_maps(self, other: MathMap[T, G], test_domain: FiniteSet[T], test_codomain: FiniteSet[G]) -> bool:
		'''
		whether `other` agrees with this function's relation over `test_domain`,
		with every output landing in `test_codomain`
		'''
		for x in test_domain:
			try:
				y = other.apply_map(x)
			except ValueError:
				return False
			if y not in test_codomain or y != self._relation.apply_map(x):
				return False
		return True

	def equals(self, other: 'FiniteFunction[T, G]') -> bool:
		if other._domain != self._domain or other._codomain != self._codomain:
			return False
		return all(self._relation.apply_map(x) == other.relation.apply_map(x) for x in self._domain)

	def __eq__(self, other: Any):
		if not isinstance(other, FiniteFunction):
			return NotImplemented
		return self.equals(other)

	def __ne__(self, other: Any):
		if not isinstance(other, FiniteFunction):
			return NotImplemented
		return not self.equals(other)

	__hash__ = None  # type: ignore[assignment]

	# images

	def image_set(self) -> FiniteSet[G]:
		with self._lock:
			if self._image is None:
				self._image = FiniteSet(map(self._relation.apply_map, self._domain))
			return self._image.clone()

	def inverse_image_set(self, result_set: FiniteSet[G]) -> FiniteSet[T]:
		return FiniteSet(x for x in self._domain if self._relation.apply_map(x) in result_set)

	# injectivity & co.

	def is_injective(self) -> bool:
		return self._property('injective', lambda: len(self.image_set()) == len(self._domain))

	def is_surjective(self) -> bool:
		return self._property('surjective', lambda: self._codomain.is_subset_of(self.image_set()))

	def is_bijective(self) -> bool:
		return self._property('bijective', lambda: self.is_injective() and self.is_surjective())

	def inverse_function(self) -> Optional['FiniteFunction[G, T]']:
		''' the inverse function, or None if this function isn't bijective '''
		with self._lock:
			if self._inverse is None:
				if not self.is_bijective():
					return None
				swapped = TableMap((self._relation.apply_map(x), x) for x in self._domain)
				self._inverse = FiniteFunction(self._codomain, self._domain, swapped,
					{'injective': True, 'surjective': True, 'bijective': True})
			return self._inverse

	def __repr__(self):
		return f'{type(self).__name__}({self._domain!r} -> {self._codomain!r}, {self.relation!r})'


# BINARY OPERATIONS
# -----------------

_MISSING = object() # not computed yet
_ABSENT = object() # computed, and there's none

class FiniteBinaryOperation(FiniteFunction[tuple[T, T], T]):
	'''
	closed binary operation on a finite set: a function from
	`codomain × codomain` to `codomain`. the domain is always derived from
	the codomain and can't be given independently.

	operands are passed as `(a, b)` pairs, or to `operate(a, b)`.
	'''

	_identity: Any
	_cayley_table: Optional[tuple[tuple[int, ...], ...]]

	def __init__(self, codomain: FiniteSet[T], relation: MathMap[tuple[T, T], T],
			known_properties: Optional[Mapping[str, bool]] = None):
		super().__init__(codomain.direct_product(codomain), codomain, relation, known_properties)
		self._identity = _MISSING
		self._cayley_table = None

	@classmethod
	def from_rule(cls, codomain: FiniteSet[T], rule: Callable[[T, T], T], **kwargs) -> Self:
		''' operation computed by `rule(a, b)` '''
		return cls(codomain, RuleMap(lambda pair: rule(*pair)), **kwargs)

	@classmethod
	def from_table(cls, elements: Iterable[T], rows: Iterable[Iterable[T]], **kwargs) -> Self:
		'''
		operation given by its Cayley table: `rows[i][j]` is the result of
		`elements[i]` operated with `elements[j]`
		'''
		elements = list(elements)
		rows = [list(row) for row in rows]
		if len(rows) != len(elements) or any(len(row) != len(elements) for row in rows):
			raise ValueError('the table must be square, with one row and column per element')
		pairs = ( ((a, b), rows[i][j]) for (i, a), (j, b) in itertools.product(enumerate(elements), repeat=2) )
		return cls(FiniteSet(elements), TableMap(pairs), **kwargs)

	def apply_map(self, x: tuple[T, T]) -> T:
		if not (isinstance(x, tuple) and len(x) == 2):
			raise ValueError(f'binary operations take (a, b) pairs, not {x!r}')
		a, b = x
		if a not in self._codomain or b not in self._codomain:
			raise ValueError(f'the domain does not contain {x!r}')
		return self.relation.apply_map(x)

	def operate(self, a: T, b: T) -> T:
		return self.apply_map((a, b))

	def equals(self, other: FiniteFunction) -> bool:
		# the domain follows from the codomain, no need to compare it
		if not isinstance(other, FiniteBinaryOperation):
			return super().equals(other)
		if other._codomain != self._codomain:
			return False
		return all(self.relation.apply_map(x) == other.relation.apply_map(x) for x in self._domain)

	# identity & inverses

	def has_identity(self) -> bool:
		'''
		whether there's an identity element `e`, i.e. `a∘e = e∘a = a` for every `a`.
		the element found is then available as `identity`.
		'''
		with self._lock:
			if self._identity is _MISSING:
				self._identity = _ABSENT
				for e in self._codomain:
					if all(self.operate(a, e) == a and self.operate(e, a) == a for a in self._codomain):
						self._identity = e
						break
				self._record('identity', self._identity is not _ABSENT)
			return self._identity is not _ABSENT

	@property
	def identity(self) -> Optional[T]:
		''' the identity element, or None if there is none '''
		return self._identity if self.has_identity() else None

	def inverse_element(self, a: T) -> Optional[T]:
		''' the element `b` with `a∘b = b∘a = e`, or None if `a` has no inverse '''
		if a not in self._codomain:
			raise ValueError(f'{a!r} is not an element of the operation\'s set')
		if not self.has_identity():
			raise ValueError('inverses are only defined for operations with an identity element')
		e = self._identity
		for b in self._codomain:
			if self.operate(a, b) == e and self.operate(b, a) == e:
				return b
		return None

	def has_inverses(self) -> bool:
		return self._property('hasinverses', lambda:
			self.has_identity() and all(self.inverse_element(a) is not None for a in self._codomain))

	# table-based properties

	def cayley_table(self) -> tuple[tuple[int, ...], ...]:
		'''
		multiplication table as element indices: `table[i][j]` is the index of
		`codomain[i] ∘ codomain[j]` in the codomain
		'''
		with self._lock:
			if self._cayley_table is None:
				elements = self._codomain.elements
				self._cayley_table = tuple(
					tuple(self._codomain.index_of(self.operate(a, b)) for b in elements)
					for a in elements )
			return self._cayley_table

	def is_idempotent(self) -> bool:
		return self._property('idempotent', lambda: all(self.operate(a, a) == a for a in self._codomain))

	def is_commutative(self) -> bool:
		def compute():
			table = self.cayley_table()
			return all(table[i][j] == table[j][i]
				for i in range(len(table)) for j in range(i + 1, len(table)))
		return self._property('commutative', compute)

	def is_associative(self) -> bool:
		''' checks `a∘(b∘c) = (a∘b)∘c` for every triple, on the Cayley table '''
		def compute():
			table = self.cayley_table()
			n = len(table)
			return all(table[table[a][b]][c] == table[a][table[b][c]]
				for a in range(n) for b in range(n) for c in range(n))
		return self._property('associative', compute)

	# substructures

	def is_closed(self, subset: FiniteSet[T]) -> bool:
		''' whether operating elements of `subset` (a subset of the codomain) never leaves it '''
		return all(self.operate(a, b) in subset for a in subset for b in subset)

	def restriction(self, new_set: FiniteSet[T]) -> Optional[Self]:
		'''
		the operation restricted to `new_set`, or None if `new_set` is not a
		subset of the codomain or is not closed under the operation.

		the restriction keeps whatever is known to hold for commutativity,
		associativity and idempotence. identity and inverses are not carried
		over, callers have to check them on the result.
		'''
		if not new_set.is_subset_of(self._codomain) or not self.is_closed(new_set):
			return None
		known = { k: True for k in ('commutative', 'associative', 'idempotent') if self._known(k) }
		return type(self)(new_set, self.relation, known)

	def __repr__(self):
		return f'{type(self).__name__}({self._codomain!r}, {self.relation!r})'

class FiniteLeftExternalBinaryOperation(FiniteFunction[tuple[S, T], T]):
	'''
	left external operation: scalars from one set acting on elements of
	another, `scalars × codomain → codomain`.
	'''

	_left_identity: Any

	def __init__(self, scalars: FiniteSet[S], codomain: FiniteSet[T], relation: MathMap[tuple[S, T], T],
			known_properties: Optional[Mapping[str, bool]] = None):
		super().__init__(scalars.direct_product(codomain), codomain, relation, known_properties)
		self._scalars = scalars.clone()
		self._left_identity = _MISSING

	@property
	def scalars(self) -> FiniteSet[S]:
		return self._scalars.clone()

	def has_left_identity(self) -> bool:
		''' whether some scalar `s` leaves every element fixed, `s·x = x` '''
		with self._lock:
			if self._left_identity is _MISSING:
				self._left_identity = _ABSENT
				for s in self._scalars:
					if all(self.relation.apply_map((s, x)) == x for x in self._codomain):
						self._left_identity = s
						break
				self._record('left identity', self._left_identity is not _ABSENT)
			return self._left_identity is not _ABSENT

	@property
	def left_identity(self) -> Optional[S]:
		return self._left_identity if self.has_left_identity() else None
