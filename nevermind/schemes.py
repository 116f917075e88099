"""
Type variables come from a Fresh source, one per checker, so no two checkers
ever share numbers and no number is ever handed out twice within a session.

A TypeScheme is a type with some of its variables held open for re-use:
every use of the scheme gets brand-new variables in their place.
"""
from typing import NamedTuple, Iterable, Optional
from .algebra import NevermindType, TypeVariable, free_vars, substitute


class VariableNames:
	"""
	Display names for type variables, purely for the benefit of error messages.
	Naming a variable twice keeps the later name.
	"""
	def __init__(self):
		self._names: dict[int, str] = {}
	def name(self, nr: int, name: str): self._names[nr] = name
	def get(self, nr: int, default=None) -> Optional[str]: return self._names.get(nr, default)
	def __contains__(self, nr: int): return nr in self._names


class Fresh:
	""" Monotonic source of never-before-seen type variables. """
	def __init__(self):
		self._counter = 0
		self.names = VariableNames()

	def nr(self) -> int:
		nr = self._counter
		self._counter += 1
		return nr

	def variable(self, name: Optional[str] = None) -> TypeVariable:
		v = TypeVariable(self.nr())
		if name is not None:
			self.names.name(v.nr, name)
		return v

	def several(self, n: int) -> list[TypeVariable]:
		return [self.variable() for _ in range(n)]

	def issued(self) -> int:
		""" How many variables have been handed out so far """
		return self._counter


class TypeScheme(NamedTuple):
	quantified: tuple[int, ...]
	body: NevermindType

	def is_monomorphic(self) -> bool: return not self.quantified

	def __str__(self):
		if self.quantified:
			return "forall %s. %s" % (" ".join("t%d" % nr for nr in self.quantified), self.body)
		return str(self.body)


def monomorphic(ty: NevermindType) -> TypeScheme:
	return TypeScheme((), ty)

def generalize(ty: NevermindType, ambient_free: Iterable[int]) -> TypeScheme:
	"""
	Quantify over exactly those variables free in the type but not
	free in the surroundings. The body comes back untouched.
	"""
	quantified = free_vars(ty) - set(ambient_free)
	return TypeScheme(tuple(sorted(quantified)), ty)

def instantiate(scheme: TypeScheme, fresh: Fresh) -> NevermindType:
	""" This is where let-polymorphism comes from. """
	if not scheme.quantified:
		return scheme.body
	gamma = {nr: fresh.variable() for nr in scheme.quantified}
	return substitute(scheme.body, gamma)
