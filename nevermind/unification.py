"""
The unifier keeps one substitution for the whole of a checking run
and grows it as it learns which type each variable must stand for.

Bindings are stored as given. The fixed-point chase happens on the way
out, in apply(), so a variable bound to another bound variable always
resolves all the way through.
"""
from typing import Mapping, Optional, Union
from .location import Span, NOWHERE
from .algebra import NevermindType, TypeVariable, Arrow, Chase, substitute
from .errors import TypeMismatch, ArityMismatch, OccursCheckFailed

class Unifier:
	substitution: dict[int, NevermindType]

	def __init__(self, names: Optional[Mapping[int, str]] = None):
		self.substitution = {}
		self._names = names

	def apply(self, ty: NevermindType) -> NevermindType:
		return ty.visit(Chase(self.substitution)) if self.substitution else ty

	def unify(self, ty1: NevermindType, ty2: NevermindType, span: Span = NOWHERE):
		"""
		Make the two types the same or raise trying. On a mismatch, the left side
		is what was expected and the right side is what was found.
		"""
		def enq(a, b): self.unify(a, b, span)
		a, b = self.apply(ty1), self.apply(ty2)
		if a == b:
			return
		elif isinstance(a, TypeVariable):
			self.bind_var(a, b, span)
		elif isinstance(b, TypeVariable):
			self.bind_var(b, a, span)
		elif a.phylum() == b.phylum():
			if isinstance(a, Arrow) and len(a.params) != len(b.params):
				raise ArityMismatch(len(b.params), len(a.params), span=span)
			a.unify_with(b, enq)
		else:
			raise TypeMismatch(a, b, span, self._names)

	def bind_var(self, var: TypeVariable, ty: NevermindType, span: Span = NOWHERE):
		if var.nr in self.substitution:
			return self.unify(var, ty, span)
		ty = self.apply(ty)
		if ty == var:
			return
		if ty.mentions(var.nr):
			raise OccursCheckFailed(var.nr, ty, span, self._names)
		self.substitution[var.nr] = ty

	def compose(self, other: Union["Unifier", Mapping[int, NevermindType]]):
		"""
		Fold another substitution into this one. What we already knew gets
		rewritten in light of the other; what only the other knew gets added.
		"""
		if isinstance(other, Unifier):
			other = other.substitution
		for nr, ty in self.substitution.items():
			self.substitution[nr] = substitute(ty, other)
		for nr, ty in other.items():
			self.substitution.setdefault(nr, ty)
