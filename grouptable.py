'''
prints the multiplication table of a permutation group.

exactly one generator must be chosen:

	grouptable -c 1230     # cyclic group generated by an element
	grouptable -s 3        # symmetric group S3
	grouptable -a 4        # alternating group A4
	grouptable -d 5        # dihedral group D5 (rotations and reflections)
	grouptable -r 6        # rotations of a hexagon
	grouptable -s 3 -p     # S3 listed with inverses and parities

the header row lists the elements; the row for element `a` holds `a * b` for
every element `b` of the header. with -p, each element is instead listed
with its inverse and whether it is even or odd.
'''

from typing import Optional, Sequence
import argparse
import logging
import sys

from permgroups import Group, GroupError, PermutationElement

logger = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog='grouptable', description='print the multiplication table of a permutation group')
	gen = parser.add_mutually_exclusive_group(required=True)
	gen.add_argument('-a', '--alternating', type=int, metavar='ORDER', help='the alternating group An (even subgroup of Sn)')
	gen.add_argument('-c', '--cyclic', metavar='ELEMENT', help='the group generated by cycling on an element, e.g. 1230')
	gen.add_argument('-d', '--dihedral', type=int, metavar='VERTICES', help='the dihedral group Dn (polygon rotations and reflections)')
	gen.add_argument('-f', '--file', metavar='FILENAME', help='read the group from a file (not supported yet)')
	gen.add_argument('-r', '--rotation', type=int, metavar='VERTICES', help='the polygon rotation group Cn')
	gen.add_argument('-s', '--permutation', type=int, metavar='ORDER', help='the symmetric group Sn')
	parser.add_argument('--direction', default='left', help='rotation direction for -r, left or right (default: left)')
	parser.add_argument('-p', '--parity', action='store_true', help='list each element with its inverse and parity instead of the table')
	parser.add_argument('-v', '--verbose', action='store_true', help='log what is being generated')
	return parser

def generate_group(args: argparse.Namespace) -> Group:
	group = Group()
	if args.cyclic is not None:
		group.generate(PermutationElement(args.cyclic))
	elif args.permutation is not None:
		group.generate_Sn(args.permutation)
	elif args.alternating is not None:
		group.generate_An(args.alternating)
	elif args.dihedral is not None:
		group.generate_Dn(args.dihedral)
	elif args.rotation is not None:
		group.generate_Cn(args.rotation, args.direction)
	else:
		group.generate_from_file(args.file)
	return group

def format_table(group: Group) -> list[str]:
	values = [ e.value for e in group ]
	lines = [ ' ' * group.degree + ''.join(f' | {v}' for v in values) ]
	for value, row in zip(values, group.cayley_table()):
		lines.append(value + ''.join(f' | {c}' for c in row))
	return lines

def format_parity(group: Group) -> list[str]:
	lines = [ 'Element Inverse Parity' ]
	for e in group:
		lines.append(f'{e.value} {e.inverse} {"Odd" if e.is_odd() else "Even"}')
	return lines

def main(argv: Optional[Sequence[str]] = None) -> int:
	args = build_parser().parse_args(argv)
	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format='%(name)s: %(message)s',
	)
	try:
		group = generate_group(args)
	except GroupError as e:
		logger.debug('generation failed', exc_info=True)
		print(f'Error creating a group: {int(e.kind)}: {e}', file=sys.stderr)
		return 1
	for line in (format_parity if args.parity else format_table)(group):
		print(line)
	return 0

if __name__ == '__main__':
	sys.exit(main())
