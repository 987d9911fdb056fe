import itertools
import math

import pytest
from hypothesis import given, strategies as st

import grouptable
import permgroups
from permgroups import Direction, Group, GroupError, GroupErrorKind, Parity, PermutationElement, error_message

MAX_ORDER = PermutationElement.MAX_ORDER

@st.composite
def elements(draw, min_order=1, max_order=MAX_ORDER):
	n = draw(st.integers(min_value=min_order, max_value=max_order))
	return PermutationElement(draw(st.permutations(range(n))))

@st.composite
def element_triples(draw):
	n = draw(st.integers(min_value=1, max_value=MAX_ORDER))
	return tuple(PermutationElement(draw(st.permutations(range(n)))) for _ in range(3))

def verify_group(G: Group):
	assert G.is_consistent() == GroupErrorKind.OK
	assert G.check_closure() == GroupErrorKind.OK
	values = [e.value for e in G]
	assert values == sorted(values)
	assert len(set(values)) == len(values) == len(G)
	assert values[0] == G.identity_value == G.identity.create_identity()

def rotations(ident: str) -> set[str]:
	return { ident[k:] + ident[:k] for k in range(len(ident)) }


# ELEMENTS
# --------

@given(elements())
def test_identity_laws(e):
	ident = PermutationElement.identity(e.order)
	assert ident * e == e
	assert e * ident == e
	assert (ident * e).value == e.value

@given(elements())
def test_inverse_laws(e):
	ident = PermutationElement.identity(e.order)
	assert e * e.inv == ident
	assert e.inv * e == ident
	assert e.inv == e ** -1

@given(element_triples())
def test_associativity(triple):
	a, b, c = triple
	assert (a * b) * c == a * (b * c)

@given(elements())
def test_round_trip(e):
	assert str(PermutationElement(str(e))) == str(e)
	assert PermutationElement(list(e.points)).value == e.value

@given(elements())
def test_parity_matches_cycle_decomposition(e):
	transpositions = sum(len(c) - 1 for c in e.cycles())
	assert e.is_odd() == bool(transpositions % 2)
	assert e.is_even() != e.is_odd()

@given(elements())
def test_period(e):
	k = e.period()
	assert e ** k == PermutationElement.identity(e.order)
	assert all(e ** i != PermutationElement.identity(e.order) for i in range(1, k))

def test_composition_convention():
	a, b = PermutationElement('102'), PermutationElement('021')
	# b first, then a
	assert (a * b).value == '120'
	assert (b * a).value == '201'
	assert (PermutationElement('120') * PermutationElement('201')).value == '012'

def test_in_place_composition():
	a = PermutationElement('1230')
	b = a.copy()
	b *= a
	assert b.value == '2301'
	assert a.value == '1230'
	assert b.inverse == '2301'

def test_inverse():
	e = PermutationElement('120')
	assert e.inverse == '201'
	assert e.inv.value == '201'
	assert PermutationElement('3102').inverse == '2130'

def test_identity_is_even():
	for n in range(1, MAX_ORDER + 1):
		ident = PermutationElement.identity(n)
		assert ident.value == ''.join(map(str, range(n)))
		assert ident.parity is Parity.EVEN
		assert PermutationElement(ident.value).is_even()

def test_transpositions_are_odd():
	for n in range(2, MAX_ORDER + 1):
		for i, j in itertools.combinations(range(n), 2):
			value = list(range(n))
			value[i], value[j] = value[j], value[i]
			assert PermutationElement(value).is_odd()
	assert PermutationElement('120').is_even()

def test_uninitialized_element():
	e = PermutationElement()
	assert e.order == 0
	with pytest.raises(GroupError) as info:
		e.is_odd()
	assert info.value.kind == GroupErrorKind.UNINITIALIZED_ELEMENT
	with pytest.raises(GroupError) as info:
		e.inverse
	assert info.value.kind == GroupErrorKind.UNDEFINED_GROUP_ORDER

def test_set_order():
	e = PermutationElement('3102')
	e.set_order(5)
	assert e.value == e.inverse == '01234'
	assert e.is_even()
	e.set_order(0)
	assert e.order == 0 and e.is_even()
	with pytest.raises(GroupError) as info:
		e.set_order(MAX_ORDER + 1)
	assert info.value.kind == GroupErrorKind.ELEMENT_OVERFLOW

@pytest.mark.parametrize('value, kind', [
	('', GroupErrorKind.ELEMENT_VALUE_NULL),
	('0124', GroupErrorKind.ELEMENT_VALUE_OUT_OF_RANGE),
	('0a12', GroupErrorKind.ELEMENT_VALUE_OUT_OF_RANGE),
	([0, 10, 1], GroupErrorKind.ELEMENT_VALUE_OUT_OF_RANGE),
	('0013', GroupErrorKind.ELEMENT_VALUE_DUPLICATED),
	('012345678', GroupErrorKind.ELEMENT_OVERFLOW),
])
def test_set_element_rejects(value, kind):
	e = PermutationElement('3201')
	assert PermutationElement.check_element_values(value) == kind
	with pytest.raises(GroupError) as info:
		e.set_element(value)
	assert info.value.kind == kind
	assert e.value == '3201'
	assert e.inverse == '2310'
	assert e.is_odd()

def test_set_element_missing_value():
	e = PermutationElement('3201')
	with pytest.raises(GroupError) as info:
		e.set_element('012', order=4)
	assert info.value.kind == GroupErrorKind.ELEMENT_VALUE_MISSING
	assert e.value == '3201'
	e.set_element('1032', order=4)
	assert e.value == '1032'

def test_incompatible_elements():
	a, b = PermutationElement('01'), PermutationElement('012')
	with pytest.raises(GroupError) as info:
		a == b
	assert info.value.kind == GroupErrorKind.INCOMPATIBLE_GROUP_ELEMENT
	# the other comparisons only look at the values
	assert a != b
	assert a < b and b > a
	with pytest.raises(GroupError) as info:
		a *= b
	assert info.value.kind == GroupErrorKind.INCOMPATIBLE_GROUP_ELEMENT
	assert a.value == '01'

def test_cycles():
	e = PermutationElement('1032')
	assert e.cycles() == [[0, 1], [2, 3]]
	assert e.cycle_type() == (2, 2)
	assert PermutationElement('1203').cycles(fixpoints=False) == [[0, 1, 2]]
	assert PermutationElement.from_cycles(4, [0, 1, 2]).value == '1203'
	assert PermutationElement.from_cycles(4, [0, 1], [2, 3]) == e
	assert e(2) == 3
	assert PermutationElement.from_cycles(3, []).value == '012'
	assert PermutationElement.from_cycles(4, [], [1, 3]).value == '0321'
	with pytest.raises(GroupError) as info:
		PermutationElement.from_cycles(4, [0, 1], [1, 2])
	assert info.value.kind == GroupErrorKind.ELEMENT_VALUE_DUPLICATED

def test_powers():
	e = PermutationElement('1230')
	assert e.period() == 4
	assert (e ** 2).value == '2301'
	assert (e ** -1).value == e.inverse == '3012'
	assert (e ** 4).value == '0123'


# GROUPS
# ------

def test_generate_Cn():
	G = Group()
	G.generate_Cn(6)
	assert len(G) == 6
	assert { e.value for e in G } == rotations('012345')
	assert G.identity_value == '012345'
	verify_group(G)

def test_generate_Cn_direction():
	left, right = Group(), Group()
	left.generate_Cn(5, Direction.LEFT)
	right.generate_Cn(5, 'right')
	assert [e.value for e in left] == [e.value for e in right]
	with pytest.raises(GroupError) as info:
		left.generate_Cn(5, 'up')
	assert info.value.kind == GroupErrorKind.BAD_ROTATION_DIRECTION
	assert len(left) == 5

def test_generate_Cn_needs_vertices():
	with pytest.raises(GroupError) as info:
		Group().generate_Cn(0)
	assert info.value.kind == GroupErrorKind.UNDEFINED_GROUP_ORDER

def test_generate_Sn():
	G = Group()
	G.generate_Sn(3)
	assert len(G) == 6
	assert [e.value for e in G] == [''.join(map(str, p)) for p in itertools.permutations(range(3))]
	verify_group(G)
	for n in range(1, 7):
		G.generate_Sn(n)
		assert len(G) == math.factorial(n)
	G.generate_Sn(5)
	verify_group(G)

def test_generate_Sn_bad_orders():
	with pytest.raises(GroupError) as info:
		Group().generate_Sn(0)
	assert info.value.kind == GroupErrorKind.ELEMENT_VALUE_NULL
	with pytest.raises(GroupError) as info:
		Group().generate_Sn(MAX_ORDER + 1)
	assert info.value.kind == GroupErrorKind.ELEMENT_OVERFLOW

def test_generate_An():
	G = Group()
	G.generate_An(4)
	assert len(G) == 12
	assert all(e.is_even() for e in G)
	verify_group(G)
	for n in range(2, 7):
		G.generate_An(n)
		assert len(G) == math.factorial(n) // 2
	G.generate_An(1)
	assert [e.value for e in G] == ['0']

def test_generate_Dn():
	G = Group()
	G.generate_Dn(4)
	assert len(G) == 8
	assert { e.value for e in G } == rotations('0123') | { '0321', '1032', '2103', '3210' }
	verify_group(G)
	G.generate_Dn(3)
	assert len(G) == 6
	assert { e.value for e in G } == { ''.join(map(str, p)) for p in itertools.permutations(range(3)) }
	# as permutations, the smallest polygons collapse onto their rotations
	G.generate_Dn(1)
	assert [e.value for e in G] == ['0']
	G.generate_Dn(2)
	assert [e.value for e in G] == ['01', '10']

@pytest.mark.parametrize('n', range(3, MAX_ORDER + 1))
def test_generate_Dn_sizes(n):
	G = Group()
	G.generate_Dn(n)
	assert len(G) == 2 * n
	verify_group(G)
	reflections = [e for e in G if e.value not in rotations(G.identity_value)]
	assert len(reflections) == n
	assert all(e.period() == 2 for e in reflections)

def test_generate_from_seed():
	G = Group()
	G.generate(PermutationElement('1230'))
	assert { e.value for e in G } == rotations('0123')
	verify_group(G)
	G.generate(PermutationElement('102'))
	assert [e.value for e in G] == ['012', '102']
	G.generate(PermutationElement('012'))
	assert [e.value for e in G] == ['012']

@given(elements())
def test_generate_from_any_seed(e):
	before = e.value
	G = Group()
	G.generate(e)
	assert len(G) == e.period()
	assert e.value == before
	assert G.is_consistent() == GroupErrorKind.OK
	assert e in G

def test_generate_from_file():
	G = Group()
	G.generate_Cn(3)
	with pytest.raises(GroupError) as info:
		G.generate_from_file('group.txt')
	assert info.value.kind == GroupErrorKind.UNIMPLEMENTED_FUNCTION
	assert len(G) == 3

def test_queries():
	G = Group()
	G.generate_Sn(3)
	assert G.order == G.size() == 6
	assert G.degree == 3
	assert G.get_element(0).value == '012'
	assert G.get_element(5).value == '210'
	assert G.get_element(6) is None
	assert G[1].value == '021'
	with pytest.raises(GroupError) as info:
		G[6]
	assert info.value.kind == GroupErrorKind.INDEX_OUT_OF_BOUNDS
	# handed out elements are copies
	e = G[1]
	e.set_order(3)
	assert G[1].value == '021'

def test_erase_and_clear():
	G = Group()
	G.generate_Cn(4)
	G.erase()
	assert len(G) == 0
	assert G.identity_value == '0123'
	assert G.is_consistent() == GroupErrorKind.MISSING_IDENTITY
	G.clear()
	assert G.degree == 0
	assert G.identity_value == ''

def test_building_element_by_element():
	G = Group()
	assert G.add_element(PermutationElement('102'))
	assert G.degree == 3
	assert G.is_consistent() == GroupErrorKind.MISSING_IDENTITY
	assert G.add_element(PermutationElement('012'))
	assert not G.add_element(PermutationElement('102'))
	assert len(G) == 2
	verify_group(G)
	assert G.add_element(PermutationElement('120'))
	assert G.is_consistent() == GroupErrorKind.OK
	assert G.check_closure() == GroupErrorKind.MISSING_ELEMENT
	with pytest.raises(GroupError) as info:
		G.add_element(PermutationElement('0123'))
	assert info.value.kind == GroupErrorKind.ORDER_MISMATCH
	with pytest.raises(GroupError) as info:
		G.set_degree(4)
	assert info.value.kind == GroupErrorKind.GROUP_ORDER_CANNOT_BE_RESET

def test_delete_element():
	G = Group()
	G.generate_Cn(3)
	G.delete_element(1)
	assert [e.value for e in G] == ['012', '201']
	with pytest.raises(GroupError) as info:
		G.delete_element(2)
	assert info.value.kind == GroupErrorKind.INDEX_OUT_OF_BOUNDS

def test_cayley_table():
	G = Group()
	G.generate_Cn(3)
	table = G.cayley_table()
	values = [e.value for e in G]
	assert table[0] == values
	assert [row[0] for row in table] == values
	for row in table:
		assert sorted(row) == values

def test_automagical_groups():
	assert len(permgroups.S4) == 24
	assert len(permgroups.A5) == 60
	assert len(permgroups.D5) == 10
	assert len(permgroups.C7) == 7
	with pytest.raises(AttributeError):
		permgroups.X3
	assert not hasattr(permgroups, 'S9')
	assert getattr(permgroups, 'D0', None) is None
	with pytest.raises(AttributeError):
		permgroups.C0


# ERRORS
# ------

def test_error_messages():
	assert len({ error_message(kind) for kind in GroupErrorKind }) == len(GroupErrorKind)
	assert error_message(99) == error_message(GroupErrorKind.UNKNOWN_ERROR)
	assert error_message(-1) == error_message(GroupErrorKind.UNKNOWN_ERROR)
	assert GroupError(42).kind == GroupErrorKind.UNKNOWN_ERROR
	e = GroupError(GroupErrorKind.ELEMENT_VALUE_DUPLICATED, "'0013'")
	assert e.message == 'element value duplicated'
	assert str(e) == "element value duplicated: '0013'"


# COMMAND LINE
# ------------

def test_cli_table(capsys):
	assert grouptable.main(['-s', '3']) == 0
	lines = capsys.readouterr().out.splitlines()
	assert len(lines) == 7
	assert lines[0] == '    | 012 | 021 | 102 | 120 | 201 | 210'
	assert lines[1] == '012 | 012 | 021 | 102 | 120 | 201 | 210'

def test_cli_cyclic(capsys):
	assert grouptable.main(['-c', '1230']) == 0
	assert len(capsys.readouterr().out.splitlines()) == 5

def test_cli_errors(capsys):
	assert grouptable.main(['-c', '112']) == 1
	assert 'element value duplicated' in capsys.readouterr().err
	assert grouptable.main(['-f', 'group.txt']) == 1
	assert 'unimplemented function' in capsys.readouterr().err
	assert grouptable.main(['-r', '4', '--direction', 'up']) == 1
	assert 'bad rotation direction' in capsys.readouterr().err

def test_cli_parity(capsys):
	assert grouptable.main(['-s', '3', '-p']) == 0
	assert capsys.readouterr().out.splitlines() == [
		'Element Inverse Parity',
		'012 012 Even',
		'021 021 Odd',
		'102 102 Odd',
		'120 201 Even',
		'201 120 Even',
		'210 210 Odd',
	]
