from fractions import Fraction
import itertools
import logging
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

import groups
from finite_sets import FiniteSet
from finite_functions import FiniteFunction, FiniteBinaryOperation, RuleMap
from groups import *


# sample groups

def compose(a: tuple[int, ...], b: tuple[int, ...]) -> tuple[int, ...]:
	''' `a ∘ b` for permutations in tuple form (b is performed first) '''
	return tuple( a[j] for j in b )

def permutation_group(generators: list[tuple[int, ...]]) -> FiniteGroup:
	elements = set(generators)
	while True:
		fresh = { compose(a, b) for a in elements for b in elements } - elements
		if not fresh:
			break
		elements |= fresh
	my_set = FiniteSet(sorted(elements))
	return FiniteGroup(my_set, FiniteBinaryOperation.from_rule(my_set, compose))

def symmetric_group(n: int) -> FiniteGroup:
	my_set = FiniteSet(itertools.permutations(range(n)))
	return FiniteGroup(my_set, FiniteBinaryOperation.from_rule(my_set, compose))

def dihedral_group() -> FiniteGroup:
	''' symmetries of a square (order 8) '''
	return permutation_group([(1, 2, 3, 0), (0, 3, 2, 1)])

UNITS = {
	('i', 'i'): (-1, '1'), ('j', 'j'): (-1, '1'), ('k', 'k'): (-1, '1'),
	('i', 'j'): (1, 'k'), ('j', 'k'): (1, 'i'), ('k', 'i'): (1, 'j'),
	('j', 'i'): (-1, 'k'), ('k', 'j'): (-1, 'i'), ('i', 'k'): (-1, 'j'),
}

def quaternion_product(a, b):
	if a[1] == '1' or b[1] == '1':
		sign, unit = 1, (b[1] if a[1] == '1' else a[1])
	else:
		sign, unit = UNITS[a[1], b[1]]
	return (a[0] * b[0] * sign, unit)

def quaternion_group() -> FiniteGroup:
	my_set = FiniteSet(itertools.product([1, -1], '1ijk'))
	return FiniteGroup(my_set, FiniteBinaryOperation.from_rule(my_set, quaternion_product))

def klein_group(**kwargs) -> FiniteGroup:
	my_set = FiniteSet(range(4))
	return FiniteGroup(my_set, FiniteBinaryOperation.from_rule(my_set, lambda a, b: a ^ b), **kwargs)

def orders(family: FiniteSet) -> list[int]:
	return sorted(h.order() for h in family)


# STRUCTURE LADDER
# ----------------

def test_magma():
	my_set = FiniteSet(range(3))
	subtraction = FiniteBinaryOperation.from_rule(my_set, lambda a, b: (a - b) % 3)
	magma = FiniteMagma(my_set, subtraction)
	assert magma.apply_operation((0, 1)) == 2
	assert magma.set_of_square_elements() == FiniteSet([0])
	assert not FiniteSemigroup.is_semigroup(magma)
	with pytest.raises(ValueError):
		FiniteSemigroup(my_set, subtraction)
	with pytest.raises(ValueError):
		FiniteMagma(FiniteSet(range(4)), subtraction)
	assert not FiniteMagma.is_magma(FiniteSet(range(4)), subtraction)

def test_semigroup():
	my_set = FiniteSet(range(3))
	maximum = FiniteSemigroup(my_set, FiniteBinaryOperation.from_rule(my_set, max))
	assert maximum.is_band() and maximum.is_semilattice()
	assert maximum.properties == { 'band': True, 'semilattice': True }

	left_zero = FiniteSemigroup(my_set, FiniteBinaryOperation.from_rule(my_set, lambda a, b: a))
	assert left_zero.is_band() and not left_zero.is_semilattice()
	assert not FiniteMonoid.is_monoid(left_zero)
	with pytest.raises(ValueError):
		FiniteMonoid(my_set, left_zero.operation)

def test_monoid():
	my_set = FiniteSet(range(4))
	product = FiniteBinaryOperation.from_rule(my_set, lambda a, b: a * b % 4)
	monoid = FiniteMonoid(my_set, product)
	assert monoid.identity == 1
	assert FiniteMonoid.is_monoid(my_set, product)
	assert not FiniteGroup.is_group(monoid)
	with pytest.raises(ValueError):
		FiniteGroup(my_set, product)

def test_homomorphisms():
	z4, z2 = cyclic_group(4), cyclic_group(2)
	reduction = FiniteFunction(z4.set, z2.set, RuleMap(lambda x: x % 2))
	assert z4.is_homomorphism(z2, reduction)
	assert not z4.is_isomorphism(z2, reduction)
	negation = FiniteFunction(z4.set, z4.set, RuleMap(lambda x: 3 * x % 4))
	assert z4.is_isomorphism(z4, negation)
	shift = FiniteFunction(z4.set, z4.set, RuleMap(lambda x: (x + 1) % 4))
	assert not z4.is_homomorphism(z4, shift)
	with pytest.raises(ValueError):
		z2.is_homomorphism(z2, reduction)

def test_structural_equality():
	assert cyclic_group(4) == cyclic_group(4)
	assert cyclic_group(4) != cyclic_group(5)
	assert klein_group() != cyclic_group(4)
	assert symmetric_group(3) == permutation_group([(1, 0, 2), (1, 2, 0)])

def test_structures_hand_out_copies():
	g = cyclic_group(4)
	g.set.add_element(7)
	g.operation.codomain.delete_element(0)
	g.operation.domain.delete_element(0)
	assert g.order() == 4 and 7 not in g
	assert g.operation.codomain == g.set == FiniteSet(range(4))
	assert g.operation.domain.cardinality() == 16
	assert g.multiply(0, 3) == 3

	f = FiniteFunction(g.set, g.set, RuleMap(lambda x: x))
	f.domain.add_element(9)
	f.codomain.delete_element(1)
	assert f.domain == f.codomain == FiniteSet(range(4))
	assert f.is_bijective()


# ELEMENTS
# --------

def test_cyclic_group():
	g = groups.Z4
	assert g is groups.Z4
	assert g.order() == 4
	assert [g.order(x) for x in g] == [1, 4, 2, 4]
	assert g.is_cyclic() and g.is_abelian()
	assert g.set_of_all_subgroups().cardinality() == 3
	assert orders(g.set_of_all_subgroups()) == [1, 2, 4]
	with pytest.raises(AttributeError):
		groups.Q8
	with pytest.raises(ValueError):
		cyclic_group(0)

@pytest.mark.parametrize('n', [1, 2, 5, 6, 12])
def test_element_orders_divide(n):
	g = cyclic_group(n)
	assert FiniteSet(g.order(x) for x in g) == FiniteSet(find_factors(n))
	assert g.is_cyclic()

@pytest.mark.parametrize('group', [symmetric_group(3), dihedral_group(), quaternion_group(), cyclic_group(6)])
def test_power_and_order(group):
	e = group.identity
	for g in group:
		k = group.order(g)
		assert group.order() % k == 0
		assert group.power(g, k) == e
		assert all(group.power(g, j) != e for j in range(1, k))
		assert group.power(g, -1) == group.inverse(g)
		assert group.power(g, 0) == e
		assert group.power(g, k + 1) == g

def test_find_factors():
	assert find_factors(1) == [1]
	assert find_factors(12) == [1, 2, 3, 4, 6, 12]
	assert find_factors(16) == [1, 2, 4, 8, 16]
	with pytest.raises(ValueError):
		find_factors(0)

def test_non_members_are_rejected():
	g = symmetric_group(3)
	with pytest.raises(ValueError):
		g.order((0, 1))
	with pytest.raises(ValueError):
		g.commutator((0, 1, 2), 5)
	with pytest.raises(ValueError):
		g.conjugacy_class('x')
	with pytest.raises(ValueError):
		g.left_coset(g.trivial_subgroup(), (3, 2, 1, 0))

def test_conjugacy():
	g = symmetric_group(3)
	transposition, rotation = (1, 0, 2), (1, 2, 0)
	assert g.conjugacy_class(transposition) == FiniteSet([(1, 0, 2), (0, 2, 1), (2, 1, 0)])
	assert g.conjugacy_class(g.identity) == FiniteSet([g.identity])
	assert g.is_conjugate(rotation, (2, 0, 1))
	assert not g.is_conjugate(rotation, transposition)
	classes = g.set_of_all_conjugacy_classes()
	assert classes(rotation) == FiniteSet([(1, 2, 0), (2, 0, 1)])
	assert classes.domain == g.set
	assert orders_of_classes(g) == [1, 2, 3]
	assert g.is_ambivalent()

def orders_of_classes(g):
	return sorted(map(len, g.conjugacy_classes()))

def test_commutators_and_center():
	g = symmetric_group(3)
	assert g.commutator((1, 0, 2), (1, 0, 2)) == g.identity
	assert g.commutator((1, 0, 2), (1, 2, 0)) != g.identity
	assert g.center().cardinality() == 1
	center = g.center_group()
	assert center.properties['abelian'] and center.is_subgroup_of(g)

	d4 = dihedral_group()
	assert d4.center() == FiniteSet([(0, 1, 2, 3), (2, 3, 0, 1)])
	q8 = quaternion_group()
	assert q8.center() == FiniteSet([(1, '1'), (-1, '1')])
	assert cyclic_group(5).center() == cyclic_group(5).set

def test_generated_set():
	g = dihedral_group()
	rotation = (1, 2, 3, 0)
	assert g.generated_set([rotation]) == FiniteSet([(1, 2, 3, 0), (2, 3, 0, 1), (3, 0, 1, 2), (0, 1, 2, 3)])
	assert g.generated_set([]) == FiniteSet()
	assert g.generated_subgroup([]).order() == 1
	assert g.generated_subgroup([rotation, (0, 3, 2, 1)]) == g
	assert g.generates_group(rotation) is False
	assert cyclic_group(7).generates_group(3)

def test_generated_set_cap(monkeypatch, caplog):
	z8 = cyclic_group(8)
	monkeypatch.setattr(FiniteGroup, 'CLOSURE_ITERATION_CAP', 1)
	with caplog.at_level(logging.WARNING, logger='groups'):
		assert z8.generated_set([1]) is None
	assert 'did not converge' in caplog.text
	caplog.clear()
	with caplog.at_level(logging.WARNING, logger='groups'):
		assert z8.generated_set( x for x in [1, 3] ) is None
	assert 'closure of 2 generators' in caplog.text
	# custom maps are accepted too
	z8 = cyclic_group(8)
	assert z8.generated_set([2], z8.operation) is None
	monkeypatch.setattr(FiniteGroup, 'CLOSURE_ITERATION_CAP', 3000)
	assert z8.generated_set([2], lambda a, b: a * b % 8) == FiniteSet([2, 4, 0])


# SUBGROUPS
# ---------

def test_trivial_group():
	g = FiniteGroup.trivial()
	assert g.order() == 1 and g.identity == 0
	assert g.is_abelian() and g.is_cyclic()
	assert not g.is_simple()
	assert g.is_perfect() and g.is_hypoabelian()
	subgroups = g.set_of_all_subgroups()
	assert subgroups.cardinality() == 1 and subgroups[0] == g

def test_symmetric_group():
	g = symmetric_group(3)
	assert g.order() == 6
	assert not g.is_abelian()
	assert not g.is_cyclic()
	assert not g.is_simple()
	assert orders(g.set_of_all_subgroups()) == [1, 2, 2, 2, 3, 6]
	assert orders(g.set_of_all_normal_subgroups()) == [1, 3, 6]
	assert orders(g.set_of_all_maximal_subgroups()) == [2, 2, 2, 3]
	assert not g.is_dedekind() and not g.is_hamiltonian()
	assert g.is_solvable() and not g.is_nilpotent()
	assert g.is_metabelian() and g.is_metanilpotent()
	assert g.is_t_group() and g.is_t_star_group()
	assert not g.is_perfect() and g.is_hypoabelian()
	assert g.perfect_core().order() == 1

def test_derived_subgroup():
	g = symmetric_group(3)
	derived = g.derived_subgroup()
	assert derived.set == FiniteSet([(0, 1, 2), (1, 2, 0), (2, 0, 1)])
	assert derived.is_normal_subgroup_of(g)
	assert orders(g.derived_series()) == [1, 3, 6]
	assert cyclic_group(6).derived_subgroup().order() == 1
	assert klein_group().derived_subgroup() == klein_group().trivial_subgroup()

def test_lagrange():
	for g in [symmetric_group(3), dihedral_group(), quaternion_group(), cyclic_group(12)]:
		for h in g.set_of_all_subgroups():
			assert h.is_subgroup_of(g)
			assert g.order() % h.order() == 0
			assert h.subgroup_index(g) == Fraction(g.order(), h.order())
			assert h.subgroup_index(g) * h.order() == g.order()

def test_subgroup_relations():
	g = symmetric_group(3)
	a3 = g.derived_subgroup()
	reflection = g.generated_subgroup([(1, 0, 2)])
	trivial = g.trivial_subgroup()
	assert trivial.is_proper_subgroup_of(reflection)
	assert reflection.is_maximal_subgroup_of(g) and a3.is_maximal_subgroup_of(g)
	assert not trivial.is_maximal_subgroup_of(g)
	assert not g.is_proper_subgroup_of(g) and g.is_subgroup_of(g)
	assert not reflection.is_normal_subgroup_of(g)
	assert a3.is_normal_subgroup_of(g) and a3.subgroup_index(g) == 2
	assert not reflection.is_subgroup_of(a3)
	# same set, different operation (with (1, 2, 0) as identity)
	r_inv = (2, 0, 1)
	shifted = FiniteGroup(a3.set, FiniteBinaryOperation.from_rule(a3.set, lambda a, b: compose(compose(a, b), r_inv)))
	assert shifted.identity == (1, 2, 0)
	assert not shifted.is_subgroup_of(g)
	other = FiniteGroup(FiniteSet([0, 1]), FiniteBinaryOperation.from_rule(FiniteSet([0, 1]), lambda a, b: a ^ b))
	assert not other.is_subgroup_of(cyclic_group(4))

def test_cosets():
	g = symmetric_group(3)
	reflection = g.generated_subgroup([(1, 0, 2)])
	rotation = (1, 2, 0)
	left, right = g.left_coset(reflection, rotation), g.right_coset(reflection, rotation)
	assert left.cardinality() == right.cardinality() == 2
	assert left != right
	a3 = g.derived_subgroup()
	assert g.left_coset(a3, (1, 0, 2)) == g.right_coset(a3.set, (1, 0, 2))

def test_subgroup_caches_are_copies():
	g = dihedral_group()
	first = g.set_of_all_subgroups()
	assert first.cardinality() == 10
	first.delete_element(0)
	assert g.set_of_all_subgroups().cardinality() == 10
	normal = g.set_of_all_normal_subgroups()
	assert orders(normal) == [1, 2, 4, 4, 4, 8]
	normal.add_element(FiniteGroup.trivial())
	assert g.set_of_all_normal_subgroups().cardinality() == 6

def test_concurrent_first_queries():
	g = symmetric_group(3)
	subgroups = list(g.set_of_all_subgroups())
	start = threading.Barrier(4)
	def race(query):
		start.wait()
		return query()
	queries = [
		g.is_dedekind,
		g.is_t_star_group,
		lambda: [ h.is_normal_subgroup_of(g) for h in subgroups ],
		g.set_of_all_normal_subgroups,
	]
	with ThreadPoolExecutor(max_workers=4) as pool:
		dedekind, t_star, normal, normal_subgroups = pool.map(race, queries, timeout=60)

	reference = symmetric_group(3)
	assert dedekind is False and dedekind == reference.is_dedekind()
	assert t_star == reference.is_t_star_group()
	assert sum(normal) == 3 and orders(normal_subgroups) == [1, 3, 6]
	assert all( g.properties[key] == value for key, value in reference.properties.items() if key in g.properties )

def test_enumeration_limit(monkeypatch):
	monkeypatch.setattr(FiniteGroup, 'ENUMERATION_LIMIT', 4)
	with pytest.raises(ValueError):
		dihedral_group().set_of_all_subgroups()
	assert cyclic_group(4).set_of_all_subgroups().cardinality() == 3


# PROPERTIES
# ----------

def test_quaternion_group():
	q8 = quaternion_group()
	assert not q8.is_abelian()
	assert q8.set_of_all_subgroups().cardinality() == 6
	assert q8.is_dedekind() and q8.is_hamiltonian()
	assert q8.is_ambivalent()
	assert q8.is_nilpotent() and q8.is_solvable()
	assert q8.is_t_group()
	assert not q8.is_simple() and not q8.is_cyclic()

def test_dihedral_group():
	d4 = dihedral_group()
	assert not d4.is_abelian()
	assert not d4.is_dedekind()
	assert not d4.is_t_group() and not d4.is_t_star_group()
	assert d4.is_nilpotent() and d4.is_metabelian()
	assert orders(d4.upper_central_series()) == [1, 2, 8]
	assert orders(d4.set_of_all_maximal_subgroups()) == [4, 4, 4]

def test_simple_groups():
	assert cyclic_group(5).is_simple()
	assert not cyclic_group(4).is_simple()
	assert not cyclic_group(1).is_simple()
	# no shortcut without the seeded 'abelian'
	z5 = cyclic_group(5)
	assert FiniteGroup(z5.set, z5.operation).is_simple()

def test_seeded_abelian_group_skips_enumeration(monkeypatch):
	calls = []
	def counting(self):
		calls.append(self)
		raise AssertionError('subgroups should not be enumerated')
	monkeypatch.setattr(FiniteGroup, 'set_of_all_subgroups', counting)
	g = klein_group(known_properties={ 'abelian': True })
	assert g.is_dedekind()
	assert not g.is_hamiltonian()
	assert g.is_t_group() and g.is_solvable() and g.is_nilpotent()
	assert calls == []

def test_shortcuts_from_seeded_properties(monkeypatch):
	monkeypatch.setattr(FiniteGroup, 'set_of_all_subgroups', lambda self: pytest.fail('enumerated'))
	g = symmetric_group(3)
	seeded = FiniteGroup(g.set, g.operation, { 'nilpotent': True, 't-group': True })
	# seeded facts are trusted, even wrong ones
	assert seeded.is_dedekind()
	solvable = FiniteGroup(g.set, g.operation, { 'solvable': True })
	assert solvable.is_hypoabelian()

def test_known_properties_never_overwritten():
	g = klein_group(known_properties={ 'cyclic': True })
	assert g.is_cyclic()
	assert g.properties['cyclic']
	g._merge_properties({ 'cyclic': False, 'simple': False })
	assert g.properties['cyclic'] and not g.properties['simple']

def test_non_hypoabelian_group_is_recorded_non_solvable(monkeypatch):
	# the smallest such group has order 60, so pretend S3 is its own perfect core
	monkeypatch.setattr(FiniteGroup, 'perfect_core', lambda self: self)
	g = symmetric_group(3)
	assert not g.is_hypoabelian()
	assert g.properties['solvable'] is False

def test_closed_property_lists():
	q8 = quaternion_group()
	q8.is_abelian(); q8.is_dedekind(); q8.is_nilpotent(); q8.is_ambivalent(); q8.is_hamiltonian()
	assert q8.subgroup_closed_properties() == { 'dedekind': True, 'nilpotent': True }
	assert q8.quotient_closed_properties() == { 'dedekind': True, 'nilpotent': True, 'ambivalent': True }
	assert q8.product_closed_properties() == { 'nilpotent': True, 'ambivalent': True }
	assert properties_subset(['a', 'b', 'c'], { 'a': True, 'b': False }) == { 'a': True }

def test_subgroups_inherit_properties():
	q8 = quaternion_group()
	seeded = FiniteGroup(q8.set, q8.operation, { 'nilpotent': True })
	assert all(h.properties.get('nilpotent') for h in seeded.set_of_all_subgroups())
	q8.is_dedekind()
	for h in q8.set_of_all_subgroups():
		assert h.is_subgroup_of(q8)
		assert h.properties.get('dedekind')
	center = cyclic_group(6).center_group()
	assert center.properties['cyclic'] and center.properties['abelian']
	reflection = symmetric_group(3).generated_subgroup([(1, 0, 2)])
	fresh = FiniteGroup(reflection.set, reflection.operation)
	z = symmetric_group(3)
	z.is_solvable()
	assert fresh.is_subgroup_of(z)
	assert fresh.properties.get('solvable')


# QUOTIENTS & PRODUCTS
# --------------------

def test_quotient_group():
	g = symmetric_group(3)
	g.is_solvable()
	a3 = g.derived_subgroup()
	quotient = g.quotient_group(a3)
	assert quotient.order() == 2
	assert quotient.identity == a3.set
	assert quotient.properties.get('solvable')
	assert quotient.is_abelian() and quotient.is_cyclic()
	with pytest.raises(ValueError):
		g.quotient_group(g.generated_subgroup([(1, 0, 2)]))

	z4 = cyclic_group(4)
	half = z4.generated_subgroup([2])
	z2 = z4.quotient_group(half)
	assert z2.order() == 2 and z2.properties['cyclic']
	assert z2.multiply(FiniteSet([1, 3]), FiniteSet([1, 3])) == FiniteSet([0, 2])
	assert z4.quotient_group(z4).order() == 1

def test_direct_product():
	z6 = cyclic_group(2).direct_product(cyclic_group(3))
	assert z6.order() == 6
	assert z6.properties == { 'abelian': True, 'cyclic': True }
	assert z6.is_cyclic() and z6.identity == (0, 0)

	v4 = cyclic_group(2).direct_product(cyclic_group(2))
	assert 'cyclic' not in v4.properties
	assert not v4.is_cyclic() and v4.is_abelian()
	assert v4.set_of_all_subgroups().cardinality() == 5

	mixed = symmetric_group(3).direct_product(cyclic_group(2))
	assert mixed.order() == 12
	assert mixed.properties == {}
	assert orders_of_classes(mixed) == [1, 1, 2, 2, 3, 3]
