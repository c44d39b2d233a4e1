from typing import Self
from typing import Optional, ClassVar, Callable, Iterator, Iterable, Any, Generic, Mapping, TypeVar, Union
from fractions import Fraction
import logging
import math
import re

from finite_sets import FiniteSet
from finite_functions import PropertyCache, RuleMap, TableMap, FiniteFunction, FiniteBinaryOperation

T = TypeVar('T')
G = TypeVar('G')

logger = logging.getLogger(__name__)

__all__ = [
	'FiniteMagma', 'FiniteSemigroup', 'FiniteMonoid', 'FiniteGroup',
	'find_factors', 'properties_subset',
	'SUBGROUP_CLOSED', 'QUOTIENT_CLOSED', 'PRODUCT_CLOSED',
	'cyclic_group',
]

def find_factors(n: int) -> list[int]:
	''' positive divisors of `n`, in ascending order '''
	if not (isinstance(n, int) and n > 0):
		raise ValueError(f'can only factor positive integers, not {n!r}')
	small = [ d for d in range(1, math.isqrt(n) + 1) if n % d == 0 ]
	return small + [ n // d for d in reversed(small) if d * d != n ]

def properties_subset(names: Iterable[str], properties: Mapping[str, bool]) -> dict[str, bool]:
	''' the properties among `names` that are known to be true '''
	return { name: True for name in names if properties.get(name) }

# curated lists of properties that are inherited by subgroups, quotients and direct products
SUBGROUP_CLOSED = ('abelian', 'cyclic', 'dedekind', 'metabelian', 'metanilpotent', 'nilpotent', 'solvable', 't*-group')
QUOTIENT_CLOSED = SUBGROUP_CLOSED + ('ambivalent', 'perfect')
PRODUCT_CLOSED = ('abelian', 'ambivalent', 'metabelian', 'nilpotent', 'perfect', 'solvable')

_NO_ELEMENT = object()


# MAGMA
# -----

class FiniteMagma(PropertyCache, Generic[T]):
	'''
	finite set together with a binary operation closed over it.

	this is the bottom of the ladder magma → semigroup → monoid → group.
	each level's constructor runs the previous level's checks and adds its
	own, so an instance of any of these classes is guaranteed to satisfy
	the axioms of its level. structures are immutable.

	derived facts are cached in `properties`, keyed by lowercase name.
	'''

	_set: FiniteSet[T]
	_operation: FiniteBinaryOperation[T]
	_squares: Optional[FiniteSet[T]]

	def __init__(self, my_set: FiniteSet[T], operation: FiniteBinaryOperation[T],
			known_properties: Optional[Mapping[str, bool]] = None):
		# the operation's domain is codomain × codomain by construction
		if not FiniteMagma.is_magma(my_set, operation):
			raise ValueError('the codomain of the operation is not the set of the structure')
		self._set = my_set.clone()
		self._operation = operation
		self._squares = None
		self._init_properties(known_properties)

	@staticmethod
	def is_magma(my_set: FiniteSet[T], operation: FiniteBinaryOperation[T]) -> bool:
		return operation.codomain == my_set

	@property
	def set(self) -> FiniteSet[T]:
		return self._set.clone()

	@property
	def operation(self) -> FiniteBinaryOperation[T]:
		return self._operation

	# equality (same set, same operation)

	def __eq__(self, other: Any):
		if not isinstance(other, FiniteMagma):
			return NotImplemented
		return self._set == other._set and self.operation == other.operation

	def __ne__(self, other: Any):
		if not isinstance(other, FiniteMagma):
			return NotImplemented
		return not self == other

	def __hash__(self):
		# equal structures have equal sizes; the elements themselves may be unhashable
		return hash(len(self._set))

	# sequence protocol

	def __len__(self) -> int:
		return len(self._set)

	def __iter__(self) -> Iterator[T]:
		return iter(self._set)

	def __contains__(self, x: Any) -> bool:
		return x in self._set

	def apply_operation(self, pair: tuple[T, T]) -> T:
		return self._operation.apply_map(pair)

	def multiply(self, a: T, b: T) -> T:
		return self._operation.operate(a, b)

	def set_of_square_elements(self) -> FiniteSet[T]:
		''' elements `a∘a`, i.e. the image of the diagonal map '''
		with self._lock:
			if self._squares is None:
				diagonal = FiniteFunction(self._set, self._set, RuleMap(lambda a: self.multiply(a, a)))
				self._squares = diagonal.image_set()
			return self._squares.clone()

	def __repr__(self):
		return f'{type(self).__name__}({self._set!r})'


# SEMIGROUP
# ---------

class FiniteSemigroup(FiniteMagma[T]):
	''' magma with an associative operation '''

	def __init__(self, my_set: FiniteSet[T], operation: FiniteBinaryOperation[T],
			known_properties: Optional[Mapping[str, bool]] = None):
		super().__init__(my_set, operation, known_properties)
		if not operation.is_associative():
			raise ValueError('the operation is not associative')

	@staticmethod
	def is_semigroup(structure: Union[FiniteMagma[T], FiniteSet[T]],
			operation: Optional[FiniteBinaryOperation[T]] = None) -> bool:
		''' either `is_semigroup(magma)` or `is_semigroup(set, operation)` '''
		if operation is None:
			return structure.operation.is_associative()
		return FiniteMagma.is_magma(structure, operation) and operation.is_associative()

	def is_band(self) -> bool:
		''' every element is idempotent '''
		return self._property('band', self.operation.is_idempotent)

	def is_semilattice(self) -> bool:
		''' commutative band '''
		return self._property('semilattice', lambda: self.is_band() and self.operation.is_commutative())


# MONOID
# ------

class FiniteMonoid(FiniteSemigroup[T]):
	''' semigroup with an identity element '''

	def __init__(self, my_set: FiniteSet[T], operation: FiniteBinaryOperation[T],
			known_properties: Optional[Mapping[str, bool]] = None):
		super().__init__(my_set, operation, known_properties)
		if not operation.has_identity():
			raise ValueError('the operation does not have an identity element')
		self._identity = operation.identity

	@staticmethod
	def is_monoid(structure: Union[FiniteSemigroup[T], FiniteSet[T]],
			operation: Optional[FiniteBinaryOperation[T]] = None) -> bool:
		''' either `is_monoid(semigroup)` or `is_monoid(set, operation)` '''
		if operation is None:
			return structure.operation.has_identity()
		return FiniteSemigroup.is_semigroup(structure, operation) and operation.has_identity()

	@property
	def identity(self) -> T:
		return self._identity

	def _check_function(self, codomain: 'FiniteMonoid[G]', function: FiniteFunction[T, G]):
		if function.domain != self._set:
			raise ValueError('the domain of the function is not the set of this structure')
		if function.codomain != codomain._set:
			raise ValueError('the codomain of the function is not the set of the given structure')

	def is_homomorphism(self, codomain: 'FiniteMonoid[G]', function: FiniteFunction[T, G]) -> bool:
		''' whether `f(a∘b) = f(a)∘f(b)` for every pair, and `f(1) = 1` '''
		self._check_function(codomain, function)
		for a in self._set:
			for b in self._set:
				if function(self.multiply(a, b)) != codomain.multiply(function(a), function(b)):
					return False
		return function(self.identity) == codomain.identity

	def is_isomorphism(self, codomain: 'FiniteMonoid[G]', function: FiniteFunction[T, G]) -> bool:
		''' bijective homomorphism '''
		self._check_function(codomain, function)
		return function.is_bijective() and self.is_homomorphism(codomain, function)


# GROUP
# -----

class FiniteGroup(FiniteMonoid[T]):
	'''
	finite group: monoid where every element has an inverse.

	the group-theoretic properties (`is_abelian()`, `is_dedekind()`, ...)
	are computed on first use and cached under their lowercase name
	('abelian', 'dedekind', 't-group', ...). facts known in advance can be
	passed as `known_properties`; derived groups (subgroups, center,
	quotients, products) get seeded this way with whatever their parent
	knows to be inherited, see `SUBGROUP_CLOSED` and friends.

	most of the algorithms here are brute force, and meant for small groups.
	'''

	CLOSURE_ITERATION_CAP: ClassVar[int] = 3000
	''' rounds `generated_set()` runs before giving up on a closure '''

	ENUMERATION_LIMIT: ClassVar[Optional[int]] = 16
	''' largest order for which `set_of_all_subgroups()` runs its power set enumeration (None for no limit) '''

	_all_subgroups: Optional[FiniteSet['FiniteGroup[T]']]
	_all_normal_subgroups: Optional[FiniteSet['FiniteGroup[T]']]

	def __init__(self, my_set: FiniteSet[T], operation: FiniteBinaryOperation[T],
			known_properties: Optional[Mapping[str, bool]] = None):
		super().__init__(my_set, operation, known_properties)
		if not operation.has_inverses():
			raise ValueError('the operation does not have inverses for every element')
		self._all_subgroups = None
		self._all_normal_subgroups = None

	@classmethod
	def trivial(cls, identity: T = 0) -> Self:
		''' the trivial group `{identity}` '''
		my_set = FiniteSet([identity])
		operation = FiniteBinaryOperation(my_set, TableMap({ (identity, identity): identity }))
		return cls(my_set, operation, { 'abelian': True, 'cyclic': True })

	@staticmethod
	def is_group(structure: Union[FiniteMonoid[T], FiniteSet[T]],
			operation: Optional[FiniteBinaryOperation[T]] = None) -> bool:
		''' either `is_group(monoid)` or `is_group(set, operation)` '''
		if operation is None:
			return structure.operation.has_inverses()
		return FiniteMonoid.is_monoid(structure, operation) and operation.has_inverses()

	# elements

	def _check_element(self, *elements: T):
		for x in elements:
			if x not in self._set:
				raise ValueError(f'{x!r} is not an element of the group')

	def _elements_of(self, subgroup: Union['FiniteGroup[T]', FiniteSet[T]]) -> FiniteSet[T]:
		return subgroup._set if isinstance(subgroup, FiniteGroup) else subgroup

	def order(self, element: Any = _NO_ELEMENT) -> int:
		'''
		`order()` is the order of the group (amount of elements it has).

		`order(g)` is the order of element `g`, the lowest positive `k` with
		`g^k = e`. only the divisors of the group's order are tried, since
		the element's order has to be one of them.
		'''
		if element is _NO_ELEMENT:
			return len(self._set)
		self._check_element(element)
		if element == self.identity:
			return 1
		for k in find_factors(len(self._set)):
			if self.power(element, k) == self.identity:
				return k
		raise AssertionError(f'{element!r} has no order dividing the group\'s, the operation is not a group')

	def inverse(self, g: T) -> T:
		self._check_element(g)
		return self.operation.inverse_element(g)

	def power(self, g: T, k: int) -> T:
		''' `g^k` (negative exponents allowed), using exponentiation by squaring '''
		self._check_element(g)
		if not isinstance(k, int):
			raise TypeError(f'exponents must be integers, not {type(k)}')
		# for negative exponents, invert the base
		if k < 0:
			g = self.inverse(g)
			k = -k
		result = self.identity
		mult = g
		while k:
			if k & 1: result = self.multiply(result, mult)
			k >>= 1
			if not k: break
			mult = self.multiply(mult, mult)
		return result

	def commutator(self, g: T, h: T) -> T:
		''' `[g, h] = g⁻¹ h⁻¹ g h`: the identity exactly when g and h commute '''
		self._check_element(g, h)
		g_inv, h_inv = self.inverse(g), self.inverse(h)
		return self.multiply(self.multiply(self.multiply(g_inv, h_inv), g), h)

	def conjugacy_class(self, g: T) -> FiniteSet[T]:
		''' `{ x g x⁻¹ : x ∈ G }` '''
		self._check_element(g)
		return FiniteSet( self.multiply(self.multiply(x, g), self.inverse(x)) for x in self._set )

	def is_conjugate(self, a: T, b: T) -> bool:
		''' whether `x a x⁻¹ = b` for some `x` '''
		self._check_element(a, b)
		return any( self.multiply(self.multiply(x, a), self.inverse(x)) == b for x in self._set )

	def set_of_all_conjugacy_classes(self) -> FiniteFunction[T, FiniteSet[T]]:
		''' function sending every element to its conjugacy class '''
		pairs = [ (g, self.conjugacy_class(g)) for g in self._set ]
		classes: FiniteSet[FiniteSet[T]] = FiniteSet( c for _, c in pairs )
		return FiniteFunction(self._set, classes, TableMap(pairs), { 'surjective': True })

	def conjugacy_classes(self) -> FiniteSet[FiniteSet[T]]:
		''' the partition of the group into conjugacy classes '''
		return self.set_of_all_conjugacy_classes().codomain

	# generation

	def generated_set(self, generators: Iterable[T],
			operation: Optional[Union[Callable[[T, T], T], FiniteBinaryOperation[T]]] = None) -> Optional[FiniteSet[T]]:
		'''
		smallest superset of `generators` closed under `operation` (the group
		operation by default).

		each round adds the products of every pair of current elements. if no
		fixed point is reached after `CLOSURE_ITERATION_CAP` rounds, returns None.
		'''
		if operation is None:
			operation = self.multiply
		elif isinstance(operation, FiniteBinaryOperation):
			operation = operation.operate
		current = FiniteSet(generators)
		count = len(current)
		for _ in range(self.CLOSURE_ITERATION_CAP):
			fresh = FiniteSet( operation(a, b) for a in current for b in current ) - current
			if not len(fresh):
				return current
			current = current | fresh
		logger.warning('closure of %d generators did not converge after %d rounds',
			count, self.CLOSURE_ITERATION_CAP)
		return None

	def generated_subgroup(self, generators: Iterable[T]) -> Optional['FiniteGroup[T]']:
		''' subgroup generated by `generators` (the trivial subgroup if there are none) '''
		generators = FiniteSet(generators)
		self._check_element(*generators)
		generators.add_element(self.identity)
		closure = self.generated_set(generators)
		if closure is None:
			return None
		return self._subgroup_on(closure, self.subgroup_closed_properties())

	def generates_group(self, g: T) -> bool:
		''' whether `g` alone generates the whole group '''
		return self.order(g) == self.order()

	def _subgroup_on(self, my_set: FiniteSet[T], known: Mapping[str, bool]) -> Optional['FiniteGroup[T]']:
		operation = self.operation.restriction(my_set)
		if operation is None or not FiniteGroup.is_group(my_set, operation):
			return None
		return FiniteGroup(my_set, operation, known)

	# derived subgroups

	def center(self) -> FiniteSet[T]:
		''' elements that commute with every element of the group '''
		e = self.identity
		return FiniteSet( g for g in self._set if all(self.commutator(g, h) == e for h in self._set) )

	def center_group(self) -> 'FiniteGroup[T]':
		''' the center as a group (which is always abelian) '''
		known = self.subgroup_closed_properties()
		known['abelian'] = True
		center = self._subgroup_on(self.center(), known)
		assert center is not None, 'the center is always a subgroup'
		return center

	def trivial_subgroup(self) -> 'FiniteGroup[T]':
		known = self.subgroup_closed_properties()
		known.update(abelian=True, cyclic=True)
		trivial = self._subgroup_on(FiniteSet([self.identity]), known)
		assert trivial is not None
		return trivial

	def derived_subgroup(self) -> Optional['FiniteGroup[T]']:
		'''
		commutator subgroup: generated by `[g, h]` for every pair. None if the
		closure doesn't converge (which never happens for an actual group).
		'''
		if self._known('abelian'):
			return self.trivial_subgroup()
		commutators = FiniteSet( self.commutator(g, h) for g in self._set for h in self._set )
		closure = self.generated_set(commutators)
		if closure is None:
			return None
		return self._subgroup_on(closure, self.subgroup_closed_properties())

	def derived_series(self) -> list['FiniteGroup[T]']:
		''' `G ⊇ G' ⊇ G'' ⊇ ...` up to (and including) the first term equal to its derived subgroup '''
		series = [self]
		while True:
			derived = series[-1].derived_subgroup()
			if derived is None or derived.order() == series[-1].order():
				return series
			series.append(derived)

	def upper_central_series(self) -> list['FiniteGroup[T]']:
		''' `{e} = Z₀ ⊆ Z₁ ⊆ ...`, where `Zᵢ₊₁ = { g : [g, h] ∈ Zᵢ for every h }`, until it stabilizes '''
		known = self.subgroup_closed_properties()
		series = [self.trivial_subgroup()]
		while True:
			previous = series[-1]._set
			following = FiniteSet( g for g in self._set if all(self.commutator(g, h) in previous for h in self._set) )
			if len(following) == len(previous):
				return series
			term = self._subgroup_on(following, known)
			assert term is not None, 'terms of the upper central series are subgroups'
			series.append(term)

	# cosets & subgroups

	def left_coset(self, subgroup: Union['FiniteGroup[T]', FiniteSet[T]], g: T) -> FiniteSet[T]:
		''' `gH = { g h : h ∈ H }` '''
		self._check_element(g)
		return FiniteSet( self.multiply(g, h) for h in self._elements_of(subgroup) )

	def right_coset(self, subgroup: Union['FiniteGroup[T]', FiniteSet[T]], g: T) -> FiniteSet[T]:
		''' `Hg = { h g : h ∈ H }` '''
		self._check_element(g)
		return FiniteSet( self.multiply(h, g) for h in self._elements_of(subgroup) )

	def is_subgroup_of(self, other: 'FiniteGroup[T]') -> bool:
		'''
		whether this group's set is contained in `other`'s and its operation
		is the restriction of `other`'s. if so, the properties `other` passes
		on to its subgroups become known for this group too.
		'''
		if not self._set.is_subset_of(other._set):
			return False
		restricted = other.operation.restriction(self._set)
		if restricted is None or restricted != self.operation:
			return False
		self._merge_properties(other.subgroup_closed_properties())
		return True

	def is_proper_subgroup_of(self, other: 'FiniteGroup[T]') -> bool:
		return self.order() < other.order() and self.is_subgroup_of(other)

	def is_maximal_subgroup_of(self, other: 'FiniteGroup[T]') -> bool:
		''' proper subgroup with no other proper subgroup of `other` strictly in between '''
		if not self.is_proper_subgroup_of(other):
			return False
		return not any(
			self.order() < k.order() < other.order() and self._set.is_subset_of(k._set)
			for k in other.set_of_all_subgroups() )

	def is_normal_subgroup_of(self, other: 'FiniteGroup[T]') -> bool:
		''' subgroup whose left and right cosets coincide, `gH = Hg` for every `g` '''
		if not self.is_subgroup_of(other):
			return False
		if self.order() == other.order() or self.subgroup_index(other) == 2:
			return True
		if other._known('abelian') or other._known('dedekind'):
			return True
		return all( other.left_coset(self, g) == other.right_coset(self, g) for g in other._set )

	def subgroup_index(self, other: 'FiniteGroup[T]') -> Fraction:
		'''
		the index `[G : H] = |G| / |H|` of this group `H` in `other`.

		the ratio of the two orders is read as the conventional index, the
		order of `other` over the order of this group, so it is at least 1.
		'''
		return Fraction(other.order(), self.order())

	def quotient_group(self, normal_subgroup: 'FiniteGroup[T]') -> 'FiniteGroup[FiniteSet[T]]':
		'''
		quotient `G / N`, whose elements are the cosets of `N` and where
		`(aN)(bN) = (ab)N`. raises ValueError unless `N` is a normal subgroup.
		'''
		if not normal_subgroup.is_normal_subgroup_of(self):
			raise ValueError('can only take the quotient by a normal subgroup')
		cosets: FiniteSet[FiniteSet[T]] = FiniteSet( self.left_coset(normal_subgroup, g) for g in self._set )
		def coset_product(a: FiniteSet[T], b: FiniteSet[T]) -> FiniteSet[T]:
			product = self.multiply(a[0], b[0])
			return next( c for c in cosets if product in c )
		operation = FiniteBinaryOperation.from_rule(cosets, coset_product)
		return FiniteGroup(cosets, operation, self.quotient_closed_properties())

	def direct_product(self, other: 'FiniteGroup[G]') -> 'FiniteGroup[tuple[T, G]]':
		''' `G × H`, operating on `(g, h)` pairs componentwise '''
		pairs = self._set.direct_product(other._set)
		def product(x: tuple[T, G], y: tuple[T, G]) -> tuple[T, G]:
			return (self.multiply(x[0], y[0]), other.multiply(x[1], y[1]))
		known = properties_subset(self.product_closed_properties(), other.product_closed_properties())
		# a product of cyclic groups is cyclic iff their orders are coprime
		if self._known('cyclic') and other._known('cyclic') and math.gcd(self.order(), other.order()) == 1:
			known['cyclic'] = True
		return FiniteGroup(pairs, FiniteBinaryOperation.from_rule(pairs, product), known)

	# FIXME: building the lattice from cyclic subgroups would avoid the power set
	def set_of_all_subgroups(self) -> FiniteSet['FiniteGroup[T]']:
		'''
		every subgroup of this group, found by brute force: every subset
		containing the identity whose size divides the order (Lagrange) is
		tested for being a group under the restricted operation.

		this is exponential in the order of the group, and refuses to run
		above `ENUMERATION_LIMIT`. the result is cached; callers get their
		own copy of the set.
		'''
		with self._lock:
			if self._all_subgroups is None:
				self._all_subgroups = self._enumerate_subgroups()
			return self._all_subgroups.clone()

	def _enumerate_subgroups(self) -> FiniteSet['FiniteGroup[T]']:
		n = self.order()
		if self.ENUMERATION_LIMIT is not None and n > self.ENUMERATION_LIMIT:
			raise ValueError(f'refusing to enumerate the subgroups of a group of order {n} (limit is {self.ENUMERATION_LIMIT})')
		e = self.identity
		candidates = (self._set - FiniteSet([e])).power_set()
		logger.debug('enumerating subgroups of a group of order %d: %d candidate subsets', n, len(candidates))
		known = self.subgroup_closed_properties()
		subgroups: FiniteSet[FiniteGroup[T]] = FiniteSet()
		for candidate in candidates:
			candidate.add_element_without_check(e)
			if n % len(candidate):
				continue
			subgroup = self._subgroup_on(candidate, known)
			if subgroup is not None:
				subgroups.add_element_without_check(subgroup)
		logger.debug('found %d subgroups', len(subgroups))
		return subgroups

	def set_of_all_normal_subgroups(self) -> FiniteSet['FiniteGroup[T]']:
		with self._lock:
			if self._all_normal_subgroups is None:
				subgroups = self.set_of_all_subgroups()
				if not (self._known('abelian') or self._known('dedekind')):
					subgroups = FiniteSet( h for h in subgroups if h.is_normal_subgroup_of(self) )
				self._all_normal_subgroups = subgroups
			return self._all_normal_subgroups.clone()

	def set_of_all_maximal_subgroups(self) -> FiniteSet['FiniteGroup[T]']:
		return FiniteSet( h for h in self.set_of_all_subgroups() if h.is_maximal_subgroup_of(self) )

	def perfect_core(self) -> 'FiniteGroup[T]':
		'''
		largest perfect subgroup. if several perfect subgroups share the
		largest order, the first one in enumeration order is returned.
		'''
		perfect = [ h for h in self.set_of_all_subgroups() if h.is_perfect() ]
		# the trivial subgroup is perfect, so the list is never empty
		return max(perfect, key=lambda h: h.order())

	# properties

	def subgroup_closed_properties(self) -> dict[str, bool]:
		return properties_subset(SUBGROUP_CLOSED, self.properties)

	def quotient_closed_properties(self) -> dict[str, bool]:
		return properties_subset(QUOTIENT_CLOSED, self.properties)

	def product_closed_properties(self) -> dict[str, bool]:
		return properties_subset(PRODUCT_CLOSED, self.properties)

	def _has_prime_order(self) -> bool:
		return len(find_factors(self.order())) == 2

	def is_abelian(self) -> bool:
		return self._property('abelian', self.operation.is_commutative)

	def is_ambivalent(self) -> bool:
		''' every element is conjugate to its inverse '''
		return self._property('ambivalent', lambda:
			all(self.is_conjugate(g, self.inverse(g)) for g in self._set))

	def is_cyclic(self) -> bool:
		''' some element generates the group '''
		return self._property('cyclic', lambda: any(self.generates_group(g) for g in self._set))

	def is_dedekind(self) -> bool:
		''' every subgroup is normal '''
		def compute():
			if self.is_abelian():
				return True
			if self._known('nilpotent') and self._known('t-group'):
				return True
			return len(self.set_of_all_normal_subgroups()) == len(self.set_of_all_subgroups())
		return self._property('dedekind', compute)

	def is_hamiltonian(self) -> bool:
		''' non-abelian Dedekind group '''
		return self._property('hamiltonian', lambda: self.is_dedekind() and not self.is_abelian())

	def is_perfect(self) -> bool:
		''' the group equals its derived subgroup '''
		def compute():
			if self._known('abelian'):
				return self.order() == 1
			derived = self.derived_subgroup()
			return derived is not None and derived.order() == self.order()
		return self._property('perfect', compute)

	def is_hypoabelian(self) -> bool:
		''' the perfect core is trivial '''
		def compute():
			if self._known('solvable'):
				return True
			hypoabelian = self.perfect_core().order() == 1
			if not hypoabelian:
				# solvable groups are hypoabelian
				self._record('solvable', False)
			return hypoabelian
		return self._property('hypoabelian', compute)

	def is_simple(self) -> bool:
		''' nontrivial, and its only normal subgroups are `{e}` and itself '''
		def compute():
			if self.order() == 1:
				return False
			if self._known('abelian'):
				return self._has_prime_order()
			return len(self.set_of_all_normal_subgroups()) == 2
		return self._property('simple', compute)

	def is_solvable(self) -> bool:
		''' the derived series reaches the trivial group '''
		def compute():
			if self._known('abelian') or self._known('nilpotent'):
				return True
			return self.derived_series()[-1].order() == 1
		return self._property('solvable', compute)

	def is_nilpotent(self) -> bool:
		''' the upper central series reaches the whole group '''
		def compute():
			if self.is_abelian():
				return True
			return self.upper_central_series()[-1].order() == self.order()
		return self._property('nilpotent', compute)

	def is_metabelian(self) -> bool:
		''' the derived subgroup is abelian '''
		def compute():
			if self._known('abelian'):
				return True
			derived = self.derived_subgroup()
			return derived is not None and derived.is_abelian()
		return self._property('metabelian', compute)

	def is_metanilpotent(self) -> bool:
		''' some normal subgroup `N` is nilpotent with `G / N` nilpotent as well '''
		def compute():
			if self.is_nilpotent():
				return True
			return any( n.is_nilpotent() and self.quotient_group(n).is_nilpotent()
				for n in self.set_of_all_normal_subgroups() )
		return self._property('metanilpotent', compute)

	def is_t_group(self) -> bool:
		''' normality is transitive: normal subgroups of normal subgroups are normal '''
		def compute():
			if self._known('dedekind') or self._known('t*-group') or self.is_abelian():
				return True
			return all( m.is_normal_subgroup_of(self)
				for n in self.set_of_all_normal_subgroups()
				for m in n.set_of_all_normal_subgroups() )
		return self._property('t-group', compute)

	def is_t_star_group(self) -> bool:
		''' every subgroup is a T-group '''
		def compute():
			if self._known('dedekind') or self.is_abelian():
				return True
			return all( h.is_t_group() for h in self.set_of_all_subgroups() )
		return self._property('t*-group', compute)


# CYCLIC GROUPS
# -------------

def cyclic_group(n: int) -> FiniteGroup[int]:
	''' `Z/nZ`: integers `0 .. n-1` under addition modulo `n` '''
	if not (isinstance(n, int) and n > 0):
		raise ValueError(f'cyclic groups need a positive order, not {n!r}')
	elements = FiniteSet(range(n))
	operation = FiniteBinaryOperation.from_rule(elements, lambda a, b: (a + b) % n,
		known_properties={ 'commutative': True, 'associative': True })
	return FiniteGroup(elements, operation, { 'abelian': True, 'cyclic': True })


# AUTOMAGICAL GROUP CREATION
# --------------------------

PREFIXES: dict[str, Callable[[int], FiniteGroup]] = {
	'Z': cyclic_group,
}

def __getattr__(name: str):
	''' `groups.Z4` and the like build (and keep) the group on first access '''
	if (m := re.fullmatch(r'(\D+)(\d+)', name)) and (factory := PREFIXES.get(m.group(1))) is not None:
		group = factory(int(m.group(2)))
		globals()[name] = group
		return group
	raise AttributeError(f'module {__name__!r} has no attribute {name!r}')
