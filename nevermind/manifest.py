"""
Type annotations, as written, say what a type looks like in syntax.
This maps that syntax into the algebra of types the checker works with.

Several kinds of annotation parse fine but have no counterpart in the algebra
(Set, Option, Result, unions, intersections and generic applications);
asking for one of those is a CannotInfer error rather than a silent guess.
"""
from boozetools.support.foundation import Visitor
from . import syntax
from .algebra import NevermindType, INT, FLOAT, STRING, BOOL, NULL, UNIT, Arrow, ListOf, MapOf, Product, Nominal
from .errors import TypeMismatch, CannotInfer

PRIMITIVES = {
	"Int": INT, "UInt": INT,
	"Int64": INT, "UInt64": INT,
	"Int32": INT, "UInt32": INT,
	"Float": FLOAT, "Float64": FLOAT, "Float32": FLOAT,
	"Bool": BOOL, "String": STRING,
	"Char": INT,  # as with character literals
	"Unit": UNIT,
	"Null": NULL,
}

class Translator(Visitor):
	def tour(self, items): return tuple(map(self.visit, items))

	def visit_PrimitiveSpec(self, ps: syntax.PrimitiveSpec):
		try: return PRIMITIVES[ps.name]
		except KeyError:
			raise CannotInfer("unknown primitive type '%s'" % ps.name, span=ps.span) from None

	def visit_NamedSpec(self, ns: syntax.NamedSpec):
		return Nominal(ns.name)

	def visit_ListSpec(self, ls: syntax.ListSpec):
		return ListOf(self.visit(ls.element))

	def visit_MapSpec(self, ms: syntax.MapSpec):
		key = self.visit(ms.key)
		if key != STRING:
			raise TypeMismatch(STRING, key, ms.key.span)
		return MapOf(self.visit(ms.value))

	def visit_TupleSpec(self, ts: syntax.TupleSpec):
		return Product(self.tour(ts.elements))

	def visit_ArrowSpec(self, a: syntax.ArrowSpec):
		return Arrow(self.tour(a.params), self.visit(a.result))

	def visit_ConstructedSpec(self, cs: syntax.ConstructedSpec):
		raise CannotInfer("%s annotations are not supported" % cs.head, span=cs.span)

def translate(annotation: syntax.TypeAnnotation) -> NevermindType:
	return Translator().visit(annotation)
