import itertools

import pytest

from finite_sets import FiniteSet
from finite_functions import *


# SETS
# ----

def test_add_element_is_idempotent():
	s = FiniteSet([1, 2, 3])
	s.add_element(2)
	assert s.cardinality() == 3
	s.add_element(4)
	assert s.elements == [1, 2, 3, 4]
	assert FiniteSet([1, 1, 2, 1]).elements == [1, 2]

def test_delete_and_index():
	s = FiniteSet('abc')
	assert s.index_of('b') == 1 and s.index_of('z') == -1
	s.delete_element(1)
	assert s.elements == ['a', 'c'] and 'b' not in s
	with pytest.raises(IndexError):
		s.delete_element(2)
	with pytest.raises(IndexError):
		s[5]
	with pytest.raises(ValueError):
		s[0] = 'c'
	s[0] = 'x'
	assert s == FiniteSet('xc')

def test_set_algebra():
	for a, b in itertools.product([FiniteSet(), FiniteSet([1]), FiniteSet([1, 2, 3]), FiniteSet([3, 4])], repeat=2):
		union, inter, diff = a.union(b), a.intersection(b), a.difference(b)
		assert union.is_superset_of(a, b)
		assert inter.is_subset_of(a) and inter.is_subset_of(b)
		assert diff.is_subset_of(a) and not len(diff & b)
		assert (a | b) == union and (a & b) == inter and (a - b) == diff
		assert len(union) == len(a) + len(b) - len(inter)

def test_set_equality_is_unordered():
	assert FiniteSet([1, 2, 3]) == FiniteSet([3, 1, 2])
	assert FiniteSet([1, 2]) != FiniteSet([1, 2, 3])
	assert FiniteSet([1, 2]) != FiniteSet([1, 3])
	assert FiniteSet([1, 2]) < FiniteSet([2, 3, 1])
	assert not FiniteSet([1, 2]) < FiniteSet([2, 1])
	assert FiniteSet([1, 2]) <= FiniteSet([2, 1])
	assert FiniteSet() == FiniteSet.null_set()

def test_power_set():
	for n in range(6):
		s = FiniteSet(range(n))
		family = s.power_set()
		assert family.cardinality() == 2 ** n
		assert all(subset.is_subset_of(s) for subset in family)
		assert FiniteSet() in family and s in family
	# sets of sets only use equality
	assert FiniteSet([FiniteSet([1, 2])]).index_of(FiniteSet([2, 1])) == 0

def test_direct_product():
	a, b = FiniteSet([1, 2]), FiniteSet('xyz')
	product = a.direct_product(b)
	assert product.cardinality() == 6
	assert (2, 'y') in product and ('y', 2) not in product
	assert not len(a.direct_product(FiniteSet()))
	assert not len(FiniteSet().direct_product(b))

def test_clone_is_independent():
	s = FiniteSet([1, 2])
	t = s.clone()
	t.add_element(3)
	assert s.cardinality() == 2 and t.cardinality() == 3


# FUNCTIONS
# ---------

def bijection():
	return FiniteFunction(FiniteSet([1, 2, 3]), FiniteSet('abc'), TableMap({ 1: 'b', 2: 'c', 3: 'a' }))

def test_construction_checks_codomain():
	with pytest.raises(ValueError):
		FiniteFunction(FiniteSet([1, 2]), FiniteSet('a'), TableMap({ 1: 'a', 2: 'b' }))
	with pytest.raises(ValueError):
		FiniteFunction(FiniteSet([1, 2]), FiniteSet('a'), TableMap({ 1: 'a' }))
	with pytest.raises(ValueError):
		TableMap([(1, 'a'), (1, 'b')])

def test_apply_map():
	f = bijection()
	assert f(1) == 'b' and f.apply_map(3) == 'a'
	with pytest.raises(ValueError):
		f(4)

def test_injective_surjective():
	f = bijection()
	assert f.is_injective() and f.is_surjective() and f.is_bijective()
	assert f.properties == { 'injective': True, 'surjective': True, 'bijective': True }

	square = FiniteFunction(FiniteSet([-1, 0, 1]), FiniteSet([0, 1, 2]), RuleMap(lambda x: x * x))
	assert not square.is_injective()
	assert not square.is_surjective()
	assert not square.is_bijective()
	assert square.inverse_function() is None
	assert square.image_set() == FiniteSet([0, 1])
	assert square.inverse_image_set(FiniteSet([1])) == FiniteSet([-1, 1])
	assert square.inverse_image_set(FiniteSet([2])) == FiniteSet()

def test_inverse_composes_to_identity():
	f = bijection()
	g = f.inverse_function()
	assert g is not None and g is f.inverse_function()
	assert all(g(f(x)) == x for x in f.domain)
	left, right = g.composition(f), f.composition(g)
	assert all(left(x) == x for x in f.domain)
	assert all(right(y) == y for y in f.codomain)
	assert left.properties == { 'injective': True, 'surjective': True, 'bijective': True }

def test_composition():
	f = FiniteFunction(FiniteSet([0, 1, 2]), FiniteSet([0, 1]), RuleMap(lambda x: x % 2))
	g = FiniteFunction(FiniteSet([0, 1]), FiniteSet('ab'), TableMap({ 0: 'a', 1: 'b' }))
	h = g.composition(f)
	assert [h(x) for x in range(3)] == ['a', 'b', 'a']
	# nothing was known about either function, nothing is known about the composition
	assert h.properties == {}
	with pytest.raises(ValueError):
		f.composition(g)

def test_restriction():
	f = bijection()
	assert f.restriction(FiniteSet([1, 4])) is None
	r = f.restriction(FiniteSet([1, 2]))
	assert r.properties == {}
	f.is_injective()
	r = f.restriction(FiniteSet([1, 2]))
	assert r.properties == { 'injective': True }
	assert r.image_set() == FiniteSet('bc')
	assert not r.is_surjective()

def test_function_equality():
	f = bijection()
	assert f == FiniteFunction(FiniteSet([3, 2, 1]), FiniteSet('cba'), RuleMap({ 1: 'b', 2: 'c', 3: 'a' }.__getitem__))
	assert f != FiniteFunction(FiniteSet([1, 2, 3]), FiniteSet('abc'), TableMap({ 1: 'a', 2: 'b', 3: 'c' }))
	assert f.equivalent_maps(TableMap({ 1: 'b', 2: 'c' }), FiniteSet([1, 2]), FiniteSet('bc'))
	assert not f.equivalent_maps(TableMap({ 1: 'b', 2: 'c' }), FiniteSet([1, 2, 3]), f.codomain)
	assert not f.equivalent_maps(TableMap({ 1: 'b' }), FiniteSet([1]), FiniteSet('a'))


# BINARY OPERATIONS
# -----------------

def addition(n):
	return FiniteBinaryOperation.from_rule(FiniteSet(range(n)), lambda a, b: (a + b) % n)

def test_operation_domain():
	op = addition(3)
	assert op.domain == FiniteSet(range(3)).direct_product(FiniteSet(range(3)))
	assert op((1, 2)) == 0 and op.operate(2, 2) == 1
	with pytest.raises(ValueError):
		op((1, 3))
	with pytest.raises(ValueError):
		op(1)
	with pytest.raises(ValueError):
		FiniteBinaryOperation.from_rule(FiniteSet(range(3)), lambda a, b: a + b)

def test_identity_and_inverses():
	op = addition(4)
	assert op.has_identity() and op.identity == 0
	assert [op.inverse_element(a) for a in range(4)] == [0, 3, 2, 1]
	assert op.has_inverses()
	with pytest.raises(ValueError):
		op.inverse_element(7)

	mul = FiniteBinaryOperation.from_rule(FiniteSet(range(4)), lambda a, b: a * b % 4)
	assert mul.identity == 1
	assert mul.inverse_element(3) == 3 and mul.inverse_element(2) is None
	assert not mul.has_inverses()

	left_zero = FiniteBinaryOperation.from_rule(FiniteSet('ab'), lambda a, b: a)
	assert not left_zero.has_identity() and left_zero.identity is None
	assert not left_zero.has_inverses()
	with pytest.raises(ValueError):
		left_zero.inverse_element('a')

def test_table_properties():
	op = addition(3)
	assert op.cayley_table() == ((0, 1, 2), (1, 2, 0), (2, 0, 1))
	assert op.is_commutative() and op.is_associative() and not op.is_idempotent()

	maximum = FiniteBinaryOperation.from_rule(FiniteSet(range(3)), max)
	assert maximum.is_idempotent() and maximum.is_commutative() and maximum.is_associative()

	subtraction = FiniteBinaryOperation.from_rule(FiniteSet(range(3)), lambda a, b: (a - b) % 3)
	assert not subtraction.is_commutative() and not subtraction.is_associative()

	left_zero = FiniteBinaryOperation.from_rule(FiniteSet('ab'), lambda a, b: a)
	assert left_zero.is_associative() and not left_zero.is_commutative()

def test_from_table():
	op = FiniteBinaryOperation.from_table('eab', [
		'eab',
		'aeb',
		'bba',
	])
	assert op.operate('a', 'b') == 'b' and op.operate('b', 'b') == 'a'
	assert op.identity == 'e'
	assert not op.is_associative()
	with pytest.raises(ValueError):
		FiniteBinaryOperation.from_table('ab', ['ab'])

def test_operation_restriction():
	op = addition(4)
	op.is_commutative()
	assert op.restriction(FiniteSet([0, 1])) is None
	assert op.restriction(FiniteSet([0, 5])) is None
	half = op.restriction(FiniteSet([0, 2]))
	assert half is not None and half.codomain == FiniteSet([0, 2])
	assert half.properties == { 'commutative': True }
	assert half.identity == 0 and half.has_inverses()

def test_operation_known_properties():
	op = FiniteBinaryOperation.from_rule(FiniteSet(range(3)), lambda a, b: (a - b) % 3,
		known_properties={ 'commutative': False })
	assert not op.is_commutative()
	assert op == FiniteBinaryOperation.from_rule(FiniteSet([2, 1, 0]), lambda a, b: (a + 2 * b) % 3)
	assert op != addition(3)

def test_left_external_operation():
	scalars, vectors = FiniteSet([0, 1, 2]), FiniteSet(range(3))
	scale = FiniteLeftExternalBinaryOperation(scalars, vectors, RuleMap(lambda p: p[0] * p[1] % 3))
	assert scale((2, 2)) == 1
	assert scale.has_left_identity() and scale.left_identity == 1
	shift = FiniteLeftExternalBinaryOperation(FiniteSet([1, 2]), vectors, RuleMap(lambda p: (p[0] + p[1]) % 3))
	assert not shift.has_left_identity() and shift.left_identity is None
