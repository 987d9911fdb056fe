from typing import Self
from typing import Optional, ClassVar, Iterator, Iterable, Sequence, Any, TypeVar, Union
import bisect
import collections
import copy
import enum
import logging
import math
import operator
import re

T = TypeVar('T')

logger = logging.getLogger(__name__)

def circular_pairwise(x: Iterable[T]) -> Iterator[tuple[T, T]]:
	''' like pairwise, but with a trailing (last, first) entry '''
	x = iter(x)
	start = next(x)
	e1 = start
	for e2 in x:
		yield (e1, e2)
		e1 = e2
	yield (e1, start)

__all__ = [
	'GroupErrorKind', 'GroupError', 'error_message',
	'Parity', 'Direction',
	'PermutationElement',
	'Group',
]


# ERRORS
# ------

class GroupErrorKind(enum.IntEnum):
	'''
	kind of failure reported by elements and groups.

	the numeric codes are stable and are what command line drivers print;
	`OK` (0) is falsy, so the non-raising probes (`check_element_values`,
	`is_consistent`, `check_closure`) can be used as `if kind: ...`.
	'''
	OK                          =  0
	ELEMENT_VALUE_OUT_OF_RANGE  =  1  # a value is not below the element order
	ELEMENT_VALUE_DUPLICATED    =  2
	ELEMENT_VALUE_MISSING       =  3
	ELEMENT_VALUE_NULL          =  4  # empty value
	INCOMPATIBLE_GROUP_ELEMENT  =  5  # arithmetic between elements of different order
	ELEMENT_OVERFLOW            =  6  # order above PermutationElement.MAX_ORDER
	UNDEFINED_GROUP_ORDER       =  7
	MISSING_ELEMENT             =  8
	ORDER_MISMATCH              =  9
	GROUP_ORDER_CANNOT_BE_RESET = 10
	MISSING_IDENTITY            = 11
	INDEX_OUT_OF_BOUNDS         = 12
	BAD_ROTATION_DIRECTION      = 13
	UNIMPLEMENTED_FUNCTION      = 14
	UNINITIALIZED_ELEMENT       = 15
	UNKNOWN_ERROR               = 16

_MESSAGES: tuple[str, ...] = (
	'no error',
	'element value out of range',
	'element value duplicated',
	'element value missing',
	'element value is empty',
	'incompatible group element',
	'element overflow',
	'undefined group order',
	'missing element',
	'order mismatch',
	'group order cannot be reset',
	'missing identity',
	'index out of bounds',
	'bad rotation direction',
	'unimplemented function',
	'uninitialized element',
	'unknown error',
)

def error_message(code: Union[GroupErrorKind, int]) -> str:
	''' human readable message for an error kind; unrecognised codes map to the unknown error '''
	try:
		kind = GroupErrorKind(code)
	except ValueError:
		kind = GroupErrorKind.UNKNOWN_ERROR
	return _MESSAGES[kind]

class GroupError(Exception):
	'''
	the exception raised by every operation of this module.

	`kind` is always a `GroupErrorKind` (integer codes outside the table are
	normalised to `UNKNOWN_ERROR`) and `message` its text. an optional `detail`
	names the offending value and is appended to `str(error)`.
	'''

	kind: GroupErrorKind
	message: str
	detail: Optional[str]

	def __init__(self, kind: Union[GroupErrorKind, int], detail: Optional[str] = None):
		try:
			kind = GroupErrorKind(kind)
		except ValueError:
			kind = GroupErrorKind.UNKNOWN_ERROR
		self.kind = kind
		self.message = error_message(kind)
		self.detail = detail
		super().__init__(self.message if detail is None else f'{self.message}: {detail}')


# PERMUTATION ELEMENT
# -------------------

class Parity(enum.IntEnum):
	EVEN = 0
	ODD = 1

class PermutationElement:
	'''
	a single permutation of `{0, ..., order-1}`.

	the value is kept in its textual encoding: a string of `order` decimal
	digits where the digit at position `i` is the image of point `i`. so
	'120' maps 0 → 1, 1 → 2 and 2 → 0.

	unlike the values of a frozen group type, elements are mutable: they are
	assigned with `set_element` / `set_order` and composed in place with `*=`.
	every successful assignment recomputes the inverse and the parity, and a
	rejected assignment leaves the element untouched.

	the implemented operation follows usual left action notation, meaning
	`a * b` is equivalent to the composition `a ∘ b` of their associated
	functions (b is performed first, then a).

	a freshly constructed element without value has order 0 (undefined), and
	asking for its parity raises `UNINITIALIZED_ELEMENT`.
	'''

	MAX_ORDER: ClassVar[int] = 8
	''' maximum amount of points an element may permute '''

	_value: str
	_inverse: str
	_parity: Optional[Parity]

	def __init__(self, value: Union[str, Sequence[int], None] = None):
		self._value = ''
		self._inverse = ''
		self._parity = None
		if value is not None:
			self.set_element(value)

	@classmethod
	def identity(cls, order: int) -> Self:
		''' the identity element of the given order '''
		result = cls()
		result.set_order(order)
		return result

	# accessors

	@property
	def order(self) -> int:
		''' amount of points permuted (0 if undefined) '''
		return len(self._value)

	@property
	def value(self) -> str:
		return self._value

	@property
	def points(self) -> tuple[int, ...]:
		''' the value as a tuple of images '''
		return tuple(map(int, self._value))

	@property
	def inverse(self) -> str:
		''' value of the inverse permutation '''
		if not self.order:
			raise GroupError(GroupErrorKind.UNDEFINED_GROUP_ORDER)
		return self._inverse

	@property
	def inv(self) -> Self:
		''' inverse element. equivalent to the notation `x ** -1` '''
		return type(self)(self.inverse)

	@property
	def parity(self) -> Parity:
		if self._parity is None:
			raise GroupError(GroupErrorKind.UNINITIALIZED_ELEMENT)
		return self._parity

	def is_odd(self) -> bool:
		return self.parity is Parity.ODD

	def is_even(self) -> bool:
		return self.parity is Parity.EVEN

	def create_identity(self) -> str:
		''' identity value for this element's order '''
		return ''.join(map(str, range(self.order)))

	# assignment

	@classmethod
	def check_element_values(cls, value: Union[str, Sequence[int]], order: Optional[int] = None) -> GroupErrorKind:
		'''
		validates a candidate value without raising for bad values, returning
		`OK` or the kind of the first problem found.

		by default the order is the length of the value. if `order` is given,
		the value is validated as a permutation of that many points instead,
		so a value that is too short reports the points it misses.
		'''
		points = _points(value)
		if not points:
			return GroupErrorKind.ELEMENT_VALUE_NULL
		if order is None:
			order = len(points)
		if max(order, len(points)) > cls.MAX_ORDER:
			return GroupErrorKind.ELEMENT_OVERFLOW
		seen = [False] * max(order, 0)
		for j in points:
			if not 0 <= j < order:
				return GroupErrorKind.ELEMENT_VALUE_OUT_OF_RANGE
			if seen[j]:
				return GroupErrorKind.ELEMENT_VALUE_DUPLICATED
			seen[j] = True
		if not all(seen):
			return GroupErrorKind.ELEMENT_VALUE_MISSING
		return GroupErrorKind.OK

	def set_element(self, value: Union[str, Sequence[int]], order: Optional[int] = None):
		'''
		assigns a new value, given as its textual encoding or as a sequence of
		integer images. see `check_element_values()` for the meaning of `order`.

		raises GroupError if the value is not a permutation; the element is left
		unchanged in that case.
		'''
		points = _points(value)
		kind = self.check_element_values(points, order)
		if kind:
			raise GroupError(kind, repr(value))
		self._assign(''.join(map(str, points)))

	def set_order(self, order: int):
		''' resets this element to the identity of the given order '''
		if not isinstance(order, int):
			raise TypeError(f'element orders must be integers, not {type(order)}')
		if order < 0:
			raise GroupError(GroupErrorKind.UNDEFINED_GROUP_ORDER, repr(order))
		if order > self.MAX_ORDER:
			raise GroupError(GroupErrorKind.ELEMENT_OVERFLOW, repr(order))
		self._value = self._inverse = ''.join(map(str, range(order)))
		self._parity = Parity.EVEN

	def clear(self):
		''' returns this element to the undefined state of a fresh element '''
		self._value = ''
		self._inverse = ''
		self._parity = None

	def _assign(self, value: str):
		self._value = value
		self._create_inverse()

	def _create_inverse(self):
		# sort a working copy of the value by exchanges, replaying each exchange
		# on the identity: once the copy is sorted, the replayed sequence is the
		# inverse, and the amount of exchanges gives the parity.
		if not self.order:
			raise GroupError(GroupErrorKind.UNDEFINED_GROUP_ORDER)
		work = list(self._value)
		inverse = list(self.create_identity())
		odd = False
		for i in range(len(work) - 1):
			for j in range(i + 1, len(work)):
				if work[i] > work[j]:
					work[i], work[j] = work[j], work[i]
					inverse[i], inverse[j] = inverse[j], inverse[i]
					odd = not odd
		self._inverse = ''.join(inverse)
		self._parity = Parity(odd)

	def copy(self) -> Self:
		return copy.copy(self)

	# formatting

	def __str__(self):
		return self._value

	def __repr__(self):
		name = type(self).__name__
		return name + (f'({self._value!r})' if self._value else '()')

	# core group operations

	def _check_compatible(self, other: 'PermutationElement'):
		if other.order != self.order:
			raise GroupError(GroupErrorKind.INCOMPATIBLE_GROUP_ELEMENT, f'order {self.order} and order {other.order}')

	def __imul__(self, other: Self) -> Self:
		if not isinstance(other, PermutationElement):
			return NotImplemented
		self._check_compatible(other)
		if not self.order:
			raise GroupError(GroupErrorKind.UNDEFINED_GROUP_ORDER)
		self._assign(''.join( self._value[int(j)] for j in other._value ))
		return self

	def __mul__(self, other: Self) -> Self:
		if not isinstance(other, PermutationElement):
			return NotImplemented
		result = self.copy()
		result *= other
		return result

	def __pow__(self, x: int) -> Self:
		if not isinstance(x, int):
			return NotImplemented
		if not self.order:
			raise GroupError(GroupErrorKind.UNDEFINED_GROUP_ORDER)
		result = [-1] * self.order
		for cycle in self.cycles_iter():
			for i in range(len(cycle)):
				result[cycle[i]] = cycle[(i + x) % len(cycle)]
		return type(self)(result)

	# comparison. equality refuses elements of different order, the other
	# comparisons only look at the values (so orders may differ)

	__hash__ = None  # type: ignore[assignment]

	def __eq__(self, other):
		if not isinstance(other, PermutationElement):
			return NotImplemented
		self._check_compatible(other)
		return self._value == other._value

	def __ne__(self, other):
		if not isinstance(other, PermutationElement):
			return NotImplemented
		return self._value != other._value

	def __lt__(self, other):
		if not isinstance(other, PermutationElement):
			return NotImplemented
		return self._value < other._value

	def __le__(self, other):
		if not isinstance(other, PermutationElement):
			return NotImplemented
		return self._value <= other._value

	def __gt__(self, other):
		if not isinstance(other, PermutationElement):
			return NotImplemented
		return self._value > other._value

	def __ge__(self, other):
		if not isinstance(other, PermutationElement):
			return NotImplemented
		return self._value >= other._value

	# cycle decomposition

	def cycles_iter(self) -> Iterator[list[int]]:
		''' like cycles(sort=False), but yields an iterator over the discovered cycles '''
		seen = 0
		while True:
			# consult start of next cycle to extract
			pending = ~seen
			start_bit = pending & ~(pending - 1)
			start = start_bit.bit_length() - 1
			if not (start < self.order):
				break
			# extract cycle
			cursor, cycle = start, []
			while True:
				cycle.append(cursor)
				seen |= 1 << cursor
				cursor = int(self._value[cursor])
				if cursor == start: break
			yield cycle

	def cycles(self, sort=True, fixpoints=True) -> list[list[int]]:
		'''
		expresses this permutation as a product of disjoint cycles, each
		beginning with its minimal element.

		parameters:
		 - sort: if True, sort discovered cycles by descending size (cycles of the
		   same size are still ordered by ascending minimal element).
		 - fixpoints: if False, filter out 1-cycles (fixed points).
		'''
		cycles = self.cycles_iter()
		if not fixpoints:
			cycles = filter(lambda x: len(x) != 1, cycles)
		if sort:
			cycles = sorted(cycles, key=len, reverse=True)
		return list(cycles)

	def cycle_type(self) -> tuple[int, ...]:
		''' returns the cycle type (a partition of the order) in descending order '''
		return tuple(sorted(map(len, self.cycles_iter()), reverse=True))

	def period(self) -> int:
		''' lowest non-zero `x` satisfying `self ** x` == identity '''
		if not self.order:
			raise GroupError(GroupErrorKind.UNDEFINED_GROUP_ORDER)
		return math.lcm(*map(len, self.cycles_iter()))

	@classmethod
	def from_cycles(cls, order: int, *cycles: Iterable[int]) -> Self:
		''' construct a permutation of `order` points from disjoint cycles; unmentioned points are fixed '''
		if not 0 < order <= cls.MAX_ORDER:
			raise GroupError(GroupErrorKind.ELEMENT_OVERFLOW if order > 0 else GroupErrorKind.UNDEFINED_GROUP_ORDER, repr(order))
		result = [-1] * order
		for cycle in cycles:
			cycle = list(cycle)
			if not cycle:
				continue
			for i, j in circular_pairwise(cycle):
				if not (isinstance(i, int) and 0 <= i < order):
					raise GroupError(GroupErrorKind.ELEMENT_VALUE_OUT_OF_RANGE, repr(i))
				if result[i] != -1:
					raise GroupError(GroupErrorKind.ELEMENT_VALUE_DUPLICATED, repr(i))
				result[i] = j
		for i, j in enumerate(result):
			if j == -1:
				result[i] = i
		return cls(result)

	# group action

	def __call__(self, x: int) -> int:
		''' interprets this permutation as a function from N_n to N_n '''
		if not (isinstance(x, int) and 0 <= x < self.order):
			raise GroupError(GroupErrorKind.ELEMENT_VALUE_OUT_OF_RANGE, repr(x))
		return int(self._value[x])

def _points(value: Any) -> list[int]:
	''' decodes a candidate value into a list of images; non-digit characters decode to -1 '''
	if isinstance(value, PermutationElement):
		value = value.value
	if isinstance(value, str):
		return [ord(c) - ord('0') if '0' <= c <= '9' else -1 for c in value]
	points = list(value)
	for j in points:
		if not isinstance(j, int):
			raise TypeError(f'element values must be integers, not {type(j)}')
	return points


# GROUP
# -----

class Direction(enum.Enum):
	''' direction in which the polygon's vertices are rotated '''
	LEFT = 'left'
	RIGHT = 'right'

def _direction(direction: Union[Direction, str]) -> Direction:
	if isinstance(direction, Direction):
		return direction
	if isinstance(direction, str):
		try:
			return Direction(direction.lower())
		except ValueError:
			pass
	raise GroupError(GroupErrorKind.BAD_ROTATION_DIRECTION, repr(direction))

class Group:
	'''
	a finite permutation group, held as an ordered set of unique elements.

	elements are kept in ascending order of their values, so iteration (and
	indexing) is deterministic and the identity, when present, comes first.
	the group owns its elements: `add_element` stores a copy, and queries hand
	out copies.

	a group built element by element need not be closed; the `generate*`
	methods always produce a complete group, and `is_consistent()` and
	`check_closure()` verify it.

	note that `order` here is the amount of elements, while `degree` is the
	amount of points every element permutes.
	'''

	_elements: list[PermutationElement]
	_identity: PermutationElement

	def __init__(self):
		self._elements = []
		self._identity = PermutationElement()

	# formatting

	def __str__(self):
		return ''.join(f'<{e}>' for e in self._elements)

	def __repr__(self):
		return f'<{type(self).__name__} of {len(self)} elements on {self.degree} points>'

	# accessors

	@property
	def degree(self) -> int:
		''' amount of points permuted by the elements (0 if not known yet) '''
		return self._identity.order

	@property
	def order(self) -> int:
		''' amount of elements currently in the group '''
		return len(self._elements)

	def size(self) -> int:
		return len(self._elements)

	def __len__(self) -> int:
		return len(self._elements)

	@property
	def identity(self) -> PermutationElement:
		return self._identity.copy()

	@property
	def identity_value(self) -> str:
		return self._identity.value

	def get_element(self, index: int) -> Optional[PermutationElement]:
		''' returns (a copy of) the element at `index`, or None if there's no such element '''
		if not isinstance(index, int):
			raise TypeError(f'element indices must be integers, not {type(index)}')
		if not 0 <= index < len(self._elements):
			return None
		return self._elements[index].copy()

	def __getitem__(self, index: int) -> PermutationElement:
		e = self.get_element(index)
		if e is None:
			raise GroupError(GroupErrorKind.INDEX_OUT_OF_BOUNDS, repr(index))
		return e

	def __iter__(self) -> Iterator[PermutationElement]:
		return (e.copy() for e in list(self._elements))

	def _find(self, value: str) -> int:
		return bisect.bisect_left(self._elements, value, key=operator.attrgetter('value'))

	def __contains__(self, e: Any) -> bool:
		if not isinstance(e, PermutationElement):
			return False
		i = self._find(e.value)
		return i < len(self._elements) and self._elements[i].value == e.value

	# building up

	def erase(self):
		''' removes the elements, keeping identity and degree '''
		self._elements.clear()

	def clear(self):
		''' removes the elements and forgets identity and degree '''
		self._elements.clear()
		self._identity.clear()

	def set_degree(self, degree: int):
		''' fixes the amount of points permuted, (re)creating the identity '''
		if self._elements and degree != self.degree:
			raise GroupError(GroupErrorKind.GROUP_ORDER_CANNOT_BE_RESET, f'{self.degree} to {degree}')
		self._identity.set_order(degree)

	def _insert(self, e: PermutationElement) -> bool:
		# takes ownership of `e`
		i = self._find(e.value)
		if i < len(self._elements) and self._elements[i].value == e.value:
			return False
		self._elements.insert(i, e)
		return True

	def add_element(self, e: PermutationElement) -> bool:
		'''
		adds (a copy of) an element, returning False if it was already present.

		the first element added to a group without degree fixes the degree;
		after that, elements must have matching order.
		'''
		if not isinstance(e, PermutationElement):
			raise TypeError(f'groups hold PermutationElement, not {type(e)}')
		if not e.order:
			raise GroupError(GroupErrorKind.UNDEFINED_GROUP_ORDER)
		if not self.degree:
			self.set_degree(e.order)
		elif e.order != self.degree:
			raise GroupError(GroupErrorKind.ORDER_MISMATCH, f'{e!r} in a group of degree {self.degree}')
		return self._insert(e.copy())

	def delete_element(self, index: int):
		if not isinstance(index, int):
			raise TypeError(f'element indices must be integers, not {type(index)}')
		if not 0 <= index < len(self._elements):
			raise GroupError(GroupErrorKind.INDEX_OUT_OF_BOUNDS, repr(index))
		del self._elements[index]

	# generation

	def generate(self, seed: PermutationElement):
		''' generates the cyclic group of the powers of `seed` '''
		if not isinstance(seed, PermutationElement):
			raise TypeError(f'seeds must be PermutationElement, not {type(seed)}')
		if not seed.order:
			raise GroupError(GroupErrorKind.UNDEFINED_GROUP_ORDER)
		seed = seed.copy()
		self.clear()
		self.set_degree(seed.order)
		ident = self.identity
		self._insert(ident.copy())
		accumulator = seed.copy()
		while accumulator != ident:
			self._insert(accumulator.copy())
			accumulator *= seed
		logger.debug('generated cyclic group of %s: %d elements', seed, len(self))

	def generate_Sn(self, order: int):
		''' generates the symmetric group: all permutations of `order` points '''
		self.clear()
		self.set_degree(order)
		self._permute(list(self.identity_value), 0, order - 1)
		logger.debug('generated S%d: %d elements', order, len(self))

	def _permute(self, a: list[str], l: int, r: int):
		if not a:
			raise GroupError(GroupErrorKind.ELEMENT_VALUE_NULL)
		if l == r:
			self._insert(PermutationElement(''.join(a)))
			return
		for i in range(l, r + 1):
			a[l], a[i] = a[i], a[l]
			self._permute(a, l + 1, r)
			a[l], a[i] = a[i], a[l]

	def generate_An(self, order: int):
		''' generates the alternating group: the even permutations of `order` points '''
		self.generate_Sn(order)
		even: list[PermutationElement] = []
		odd: list[PermutationElement] = []
		for e in self._elements:
			(odd if e.is_odd() else even).append(e)
		self._elements = even
		logger.debug('generated A%d: %d elements (%d odd dropped)', order, len(even), len(odd))

	def generate_Cn(self, vertices: int, direction: Union[Direction, str] = Direction.LEFT):
		''' generates the rotations of a regular polygon with `vertices` vertices '''
		direction = _direction(direction)
		if not isinstance(vertices, int):
			raise TypeError(f'vertex counts must be integers, not {type(vertices)}')
		if vertices <= 0:
			raise GroupError(GroupErrorKind.UNDEFINED_GROUP_ORDER, repr(vertices))
		self.clear()
		self.set_degree(vertices)
		ident = self.identity_value
		value = collections.deque(ident)
		step = -1 if direction is Direction.LEFT else 1
		while True:
			self._insert(PermutationElement(''.join(value)))
			value.rotate(step)
			if ''.join(value) == ident:
				break
		logger.debug('generated C%d rotating %s: %d elements', vertices, direction.value, len(self))

	def generate_Dn(self, vertices: int):
		'''
		generates the symmetries of a regular polygon with `vertices` vertices:
		its rotations plus one reflection per symmetry axis.

		with an odd amount of vertices every axis goes through a vertex and the
		midpoint of the opposite edge. with an even amount, half of the axes go
		through two opposite vertices and the other half through the midpoints of
		two opposite edges. either way there are `vertices` reflections, and the
		group has `2 * vertices` elements (for 3 or more vertices).
		'''
		self.generate_Cn(vertices)
		n = vertices
		if n % 2:
			for idx in range(n):
				self._insert(self._reflection(idx + 1, idx - 1, n // 2))
		else:
			for idx in range(n // 2):
				# axis through vertex idx
				self._insert(self._reflection(idx + 1, idx - 1, (n - 2) // 2))
				# axis between vertices idx-1 and idx
				self._insert(self._reflection(idx, idx - 1, n // 2))
		logger.debug('generated D%d: %d elements', n, len(self))

	def _reflection(self, right: int, left: int, steps: int) -> PermutationElement:
		''' exchanges the points under two pointers walking in opposite directions from the identity '''
		n = self.degree
		value = list(self.identity_value)
		right %= n
		left %= n
		for _ in range(steps):
			value[right], value[left] = value[left], value[right]
			right = (right + 1) % n
			left = (left - 1) % n
		return PermutationElement(''.join(value))

	def generate_from_file(self, source: Any):
		raise GroupError(GroupErrorKind.UNIMPLEMENTED_FUNCTION, 'reading a group from a file')

	# consistency

	def is_consistent(self) -> GroupErrorKind:
		''' checks the first element is the identity. this is a cheap probe, see check_closure() '''
		if not self._elements or not self.degree:
			return GroupErrorKind.MISSING_IDENTITY
		if self._elements[0].value != self.identity_value:
			return GroupErrorKind.MISSING_IDENTITY
		return GroupErrorKind.OK

	def check_closure(self) -> GroupErrorKind:
		''' like is_consistent(), but also checks every product and every inverse is present '''
		kind = self.is_consistent()
		if kind:
			return kind
		values = { e.value for e in self._elements }
		for a in self._elements:
			if a.inverse not in values:
				return GroupErrorKind.MISSING_ELEMENT
			for b in self._elements:
				if (a * b).value not in values:
					return GroupErrorKind.MISSING_ELEMENT
		return GroupErrorKind.OK

	def cayley_table(self) -> list[list[str]]:
		''' multiplication table: `table[i][j]` is the value of `self[i] * self[j]` '''
		return [ [ (a * b).value for b in self._elements ] for a in self._elements ]


# AUTOMAGICAL GROUP CREATION
# --------------------------

PREFIXES = {
	'S': Group.generate_Sn,
	'A': Group.generate_An,
	'C': Group.generate_Cn,
	'D': Group.generate_Dn,
}

def __getattr__(name: str):
	''' `permgroups.D4` and friends return a freshly generated group '''
	if (m := re.fullmatch(r'(\D)(\d+)', name)) and (gen := PREFIXES.get(m.group(1))) != None:
		group = Group()
		try:
			gen(group, int(m.group(2)))
		except GroupError as e:
			raise AttributeError(f'module {__name__!r} has no attribute {name!r}') from e
		return group
	raise AttributeError(f'module {__name__!r} has no attribute {name!r}')
