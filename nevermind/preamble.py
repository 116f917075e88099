"""
The built-in functions every Nevermind program can see without importing anything.
The name resolver treats the same set of names as predefined.

Signatures are built per checker, from that checker's own Fresh source,
so the quantified variables never collide with anything the checker mints later.
"""
from .algebra import NevermindType, INT, STRING, UNIT, Arrow, ListOf
from .schemes import Fresh, TypeScheme, generalize, monomorphic
from .environment import TypeEnvironment

def _for_anything(fresh: Fresh, result: NevermindType) -> TypeScheme:
	a = fresh.variable("a")
	return generalize(Arrow([a], result), ())

def signatures(fresh: Fresh) -> dict[str, TypeScheme]:
	return {
		"print": _for_anything(fresh, UNIT),
		"println": _for_anything(fresh, UNIT),
		"len": _for_anything(fresh, INT),
		"str": _for_anything(fresh, STRING),
		"int": _for_anything(fresh, INT),
		"input": monomorphic(Arrow([STRING], STRING)),
		"range": monomorphic(Arrow([INT, INT], ListOf(INT))),
	}

def install(env: TypeEnvironment, fresh: Fresh):
	for name, scheme in signatures(fresh).items():
		env.insert(name, scheme)
