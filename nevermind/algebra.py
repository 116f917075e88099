"""
The algebra of Nevermind types.
  --  Simple and working is better than stuck in the mud.  --

Design Note:
-------------
Types are immutable values. Two types are equal when they have the same shape,
and two type variables are equal exactly when they carry the same number.
A variable's display name lives elsewhere (see schemes.VariableNames)
because it is decoration for error messages, not part of the type.
"""
from typing import Sequence, Mapping, Optional

class NevermindType:
	def visit(self, visitor: "TypeVisitor"): raise NotImplementedError(type(self))
	def phylum(self): raise NotImplementedError(type(self))
	def poll(self, seen: set): raise NotImplementedError(type(self))
	def mentions(self, nr: int) -> bool: raise NotImplementedError(type(self))
	def unify_with(self, other, enq): pass
	def _key(self) -> tuple: raise NotImplementedError(type(self))
	def __eq__(self, other): return type(self) is type(other) and self._key() == other._key()
	def __hash__(self): return hash((type(self), self._key()))
	def __str__(self): return render(self)

#########################

class TypeVariable(NevermindType):
	""" Nothing but a number. The checker's Fresh source hands these out. """
	def __init__(self, nr: int):
		assert nr >= 0, nr
		self.nr = nr
	def __repr__(self): return "<t%d>" % self.nr
	def _key(self): return self.nr
	def visit(self, visitor): return visitor.on_variable(self)
	def phylum(self): return TypeVariable
	def poll(self, seen: set): seen.add(self.nr)
	def mentions(self, nr): return nr == self.nr

class Atom(NevermindType):
	""" There are exactly six of these, made once, just below. """
	def __init__(self, name: str): self.name = name
	def __repr__(self): return self.name
	def _key(self): return self.name
	def visit(self, visitor): return visitor.on_atom(self)
	def phylum(self): return self
	def poll(self, seen: set): pass
	def mentions(self, nr): return False

INT = Atom("Int")
FLOAT = Atom("Float")
STRING = Atom("String")
BOOL = Atom("Bool")
NULL = Atom("Null")
UNIT = Atom("Unit")

class Arrow(NevermindType):
	def __init__(self, params: Sequence[NevermindType], result: NevermindType):
		self.params, self.result = tuple(params), result
	def __repr__(self): return "Arrow(%r, %r)" % (self.params, self.result)
	def _key(self): return self.params, self.result
	def visit(self, visitor): return visitor.on_arrow(self)
	def phylum(self): return Arrow
	def unify_with(self, other, enq):
		# The caller has already seen that the arities agree.
		for x, y in zip(self.params, other.params): enq(x, y)
		enq(self.result, other.result)
	def poll(self, seen: set):
		for p in self.params: p.poll(seen)
		self.result.poll(seen)
	def mentions(self, nr):
		return any(p.mentions(nr) for p in self.params) or self.result.mentions(nr)

class ListOf(NevermindType):
	def __init__(self, element: NevermindType): self.element = element
	def __repr__(self): return "ListOf(%r)" % (self.element,)
	def _key(self): return self.element,
	def visit(self, visitor): return visitor.on_list(self)
	def phylum(self): return ListOf
	def unify_with(self, other, enq): enq(self.element, other.element)
	def poll(self, seen: set): self.element.poll(seen)
	def mentions(self, nr): return self.element.mentions(nr)

class MapOf(NevermindType):
	""" Keys are always strings, so only the value type is recorded. """
	def __init__(self, value: NevermindType): self.value = value
	def __repr__(self): return "MapOf(%r)" % (self.value,)
	def _key(self): return self.value,
	def visit(self, visitor): return visitor.on_map(self)
	def phylum(self): return MapOf
	def unify_with(self, other, enq): enq(self.value, other.value)
	def poll(self, seen: set): self.value.poll(seen)
	def mentions(self, nr): return self.value.mentions(nr)

class Product(NevermindType):
	""" Tuples. Different lengths are different phyla. """
	def __init__(self, fields: Sequence[NevermindType]): self.fields = tuple(fields)
	def __repr__(self): return "Product(%r)" % (self.fields,)
	def _key(self): return self.fields
	def visit(self, visitor): return visitor.on_product(self)
	def phylum(self): return Product, len(self.fields)
	def unify_with(self, other, enq):
		# Structural Equivalence
		for x, y in zip(self.fields, other.fields): enq(x, y)
	def poll(self, seen: set):
		for f in self.fields: f.poll(seen)
	def mentions(self, nr): return any(f.mentions(nr) for f in self.fields)

class Nominal(NevermindType):
	"""
	A user-defined type, known here only by its name.
	The unifier leaves these closed: same name, same type.
	"""
	def __init__(self, name: str): self.name = name
	def __repr__(self): return "Nominal(%r)" % self.name
	def _key(self): return self.name
	def visit(self, visitor): return visitor.on_nominal(self)
	def phylum(self): return Nominal, self.name
	def poll(self, seen: set): pass
	def mentions(self, nr): return False

#########################

class TypeVisitor:
	def on_variable(self, v: TypeVariable): pass
	def on_atom(self, a: Atom): pass
	def on_arrow(self, a: Arrow): pass
	def on_list(self, l: ListOf): pass
	def on_map(self, m: MapOf): pass
	def on_product(self, p: Product): pass
	def on_nominal(self, n: Nominal): pass

class Render(TypeVisitor):
	""" Return a string representation of the term. """
	def __init__(self, names: Optional[Mapping[int, str]] = None):
		self.names = names
	def on_variable(self, v: TypeVariable):
		name = self.names.get(v.nr) if self.names is not None else None
		return name or "t%d" % v.nr
	def on_atom(self, a: Atom): return a.name
	def on_arrow(self, a: Arrow):
		return "(%s) -> %s" % (", ".join(p.visit(self) for p in a.params), a.result.visit(self))
	def on_list(self, l: ListOf): return "[%s]" % l.element.visit(self)
	def on_map(self, m: MapOf): return "{String: %s}" % m.value.visit(self)
	def on_product(self, p: Product):
		return "(%s)" % (", ".join(f.visit(self) for f in p.fields))
	def on_nominal(self, n: Nominal): return n.name

class Rewrite(TypeVisitor):
	""" One hop of substitution: whatever the mapping says, taken at its word. """
	def __init__(self, gamma: Mapping[int, NevermindType]):
		self.gamma = gamma
	def on_variable(self, v: TypeVariable): return self.gamma.get(v.nr, v)
	def on_atom(self, a: Atom): return a
	def on_arrow(self, a: Arrow):
		return Arrow([p.visit(self) for p in a.params], a.result.visit(self))
	def on_list(self, l: ListOf): return ListOf(l.element.visit(self))
	def on_map(self, m: MapOf): return MapOf(m.value.visit(self))
	def on_product(self, p: Product): return Product([f.visit(self) for f in p.fields])
	def on_nominal(self, n: Nominal): return n

class Chase(Rewrite):
	"""
	Rewrite to a fixed point: a variable bound to something that mentions
	other bound variables gets those resolved too. The occurs check is what
	keeps this from going around in circles.
	"""
	def on_variable(self, v: TypeVariable):
		term = v
		while isinstance(term, TypeVariable) and term.nr in self.gamma:
			term = self.gamma[term.nr]
		if isinstance(term, TypeVariable):
			return term
		return term.visit(self)

#########################

def free_vars(ty: NevermindType) -> set[int]:
	seen = set()
	ty.poll(seen)
	return seen

def substitute(ty: NevermindType, mapping: Mapping[int, NevermindType]) -> NevermindType:
	return ty.visit(Rewrite(mapping)) if mapping else ty

def render(ty: NevermindType, names: Optional[Mapping[int, str]] = None) -> str:
	return ty.visit(Render(names))
