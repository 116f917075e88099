"""
The set of parse-nodes in simple form.
The parser (which lives elsewhere) calls these constructors bottom-up,
and the name-resolver has already vouched for every name by the time
the type-checker walks the result.

Every node carries a span for error reporting. Nodes built by hand,
as in the tests, may leave it out and get NOWHERE instead.
"""
from typing import Optional, Any, Sequence
from .location import Span, NOWHERE


class Phrase:
	span: Span

class Statement(Phrase): pass
class Expression(Phrase): pass
class Pattern(Phrase): pass
class TypeAnnotation(Phrase): pass

#######################################################################
#  Type annotations, as written in the source text.

class PrimitiveSpec(TypeAnnotation):
	""" Int, UInt, Int64, Float32, Bool, String, Char, Unit, Null and friends """
	def __init__(self, name: str, span: Span = NOWHERE):
		self.name, self.span = name, span
	def __repr__(self): return self.name

class NamedSpec(TypeAnnotation):
	""" A bare identifier in type context: some user-defined type """
	def __init__(self, name: str, span: Span = NOWHERE):
		self.name, self.span = name, span
	def __repr__(self): return self.name

class ListSpec(TypeAnnotation):
	def __init__(self, element: TypeAnnotation, span: Span = NOWHERE):
		self.element, self.span = element, span

class MapSpec(TypeAnnotation):
	def __init__(self, key: TypeAnnotation, value: TypeAnnotation, span: Span = NOWHERE):
		self.key, self.value, self.span = key, value, span

class TupleSpec(TypeAnnotation):
	def __init__(self, elements: Sequence[TypeAnnotation], span: Span = NOWHERE):
		self.elements, self.span = tuple(elements), span

class ArrowSpec(TypeAnnotation):
	def __init__(self, params: Sequence[TypeAnnotation], result: TypeAnnotation, span: Span = NOWHERE):
		self.params, self.result, self.span = tuple(params), result, span

class ConstructedSpec(TypeAnnotation):
	"""
	Set[T], Option[T], Result[T, E], unions, intersections and generic
	applications: the parser knows them, but the type model has no home for them.
	"""
	def __init__(self, head: str, arguments: Sequence[TypeAnnotation], span: Span = NOWHERE):
		self.head, self.arguments, self.span = head, tuple(arguments), span
	def __repr__(self): return "%s[%s]" % (self.head, ", ".join(map(repr, self.arguments)))

#######################################################################
#  Bits that show up inside expressions and statements

class Parameter(Phrase):
	def __init__(self, name: str, type_annotation: Optional[TypeAnnotation] = None, default_value: Optional[Expression] = None, span: Span = NOWHERE):
		self.name = name
		self.type_annotation = type_annotation
		self.default_value = default_value
		self.span = span
	def __repr__(self): return "<:%s:%s>" % (self.name, self.type_annotation)

class MatchArm(Phrase):
	def __init__(self, pattern: Pattern, body: Expression, guard: Optional[Expression] = None):
		self.pattern, self.body, self.guard = pattern, body, guard
	@property
	def span(self) -> Span: return self.pattern.span.merge(self.body.span)

#######################################################################
#  Expressions

class Literal(Expression):
	"""
	The Python value tells the type: int, float, str, bool, or None for null.
	"""
	def __init__(self, value: Any, span: Span = NOWHERE):
		self.value, self.span = value, span
	def __str__(self): return "<Literal %r>" % (self.value,)

class Char(Literal):
	""" Character literals are integers, as far as the type system cares. """
	def __init__(self, value: str, span: Span = NOWHERE):
		assert len(value) == 1, value
		super().__init__(value, span)

class Variable(Expression):
	def __init__(self, name: str, span: Span = NOWHERE):
		self.name, self.span = name, span
	def __str__(self): return self.name

class BinaryForm(Expression):
	def __init__(self, lhs: Expression, op: str, rhs: Expression, span: Span = NOWHERE):
		self.lhs, self.op, self.rhs, self.span = lhs, op, rhs, span
	def __str__(self): return "(%s %s %s)" % (self.lhs, self.op, self.rhs)

class Binary(BinaryForm):
	""" + - * / % ** ++ """

class Comparison(BinaryForm):
	""" == != < <= > >= """

class Logical(BinaryForm):
	""" and, or """

class Unary(Expression):
	def __init__(self, op: str, operand: Expression, span: Span = NOWHERE):
		self.op, self.operand, self.span = op, operand, span
	def __str__(self): return "(%s%s)" % (self.op, self.operand)

class Call(Expression):
	def __init__(self, callee: Expression, args: Sequence[Expression], span: Span = NOWHERE):
		self.callee, self.args, self.span = callee, list(args), span
	def __str__(self): return "%s(%s)" % (self.callee, ', '.join(map(str, self.args)))

class Pipeline(Expression):
	""" stage |> stage |> stage """
	def __init__(self, stages: Sequence[Expression], span: Span = NOWHERE):
		assert len(stages) >= 1
		self.stages, self.span = list(stages), span
	def __str__(self): return " |> ".join(map(str, self.stages))

class Lambda(Expression):
	def __init__(self, params: Sequence[Parameter], body: Expression, span: Span = NOWHERE):
		self.params, self.body, self.span = list(params), body, span

class IfExpr(Expression):
	def __init__(self, condition: Expression, then_part: Expression, else_part: Expression, span: Span = NOWHERE):
		self.condition, self.then_part, self.else_part, self.span = condition, then_part, else_part, span
	def __str__(self): return "(if %s then %s else %s)" % (self.condition, self.then_part, self.else_part)

class Block(Expression):
	def __init__(self, statements: Sequence[Statement], span: Span = NOWHERE):
		self.statements, self.span = list(statements), span

class ListLiteral(Expression):
	def __init__(self, elements: Sequence[Expression], span: Span = NOWHERE):
		self.elements, self.span = list(elements), span
	def __str__(self): return "[%s]" % ", ".join(map(str, self.elements))

class MapLiteral(Expression):
	def __init__(self, entries: Sequence[tuple[Expression, Expression]], span: Span = NOWHERE):
		self.entries, self.span = list(entries), span

class MatchExpr(Expression):
	def __init__(self, scrutinee: Expression, arms: Sequence[MatchArm], span: Span = NOWHERE):
		self.scrutinee, self.arms, self.span = scrutinee, list(arms), span

class Index(Expression):
	def __init__(self, container: Expression, index: Expression, span: Span = NOWHERE):
		self.container, self.index, self.span = container, index, span
	def __str__(self): return "%s[%s]" % (self.container, self.index)

#######################################################################
#  Statements

class Let(Statement):
	def __init__(self, name: str, value: Expression, is_mutable: bool = False, type_annotation: Optional[TypeAnnotation] = None, span: Span = NOWHERE):
		self.name = name
		self.value = value
		self.is_mutable = is_mutable
		self.type_annotation = type_annotation
		self.span = span
	def __repr__(self): return "{%s %s}" % ("var" if self.is_mutable else "let", self.name)

class Function(Statement):
	def __init__(self, name: str, params: Sequence[Parameter], body: Expression, return_type: Optional[TypeAnnotation] = None, span: Span = NOWHERE):
		self.name = name
		self.params = list(params)
		self.body = body
		self.return_type = return_type
		self.span = span
	def __repr__(self): return "{fn|%s(%s)}" % (self.name, ", ".join(map(repr, self.params)))

class TypeAlias(Statement):
	def __init__(self, name: str, type_params: Sequence[str], definition: TypeAnnotation, span: Span = NOWHERE):
		self.name, self.type_params, self.definition, self.span = name, tuple(type_params), definition, span

class IfStmt(Statement):
	def __init__(self, condition: Expression, then_branch: Sequence[Statement], else_branch: Optional[Sequence[Statement]] = None, span: Span = NOWHERE):
		self.condition = condition
		self.then_branch = list(then_branch)
		self.else_branch = None if else_branch is None else list(else_branch)
		self.span = span

class While(Statement):
	def __init__(self, condition: Expression, body: Sequence[Statement], span: Span = NOWHERE):
		self.condition, self.body, self.span = condition, list(body), span

class For(Statement):
	def __init__(self, variable: Pattern, iterable: Expression, body: Sequence[Statement], span: Span = NOWHERE):
		self.variable, self.iterable, self.body, self.span = variable, iterable, list(body), span

class MatchStmt(Statement):
	def __init__(self, scrutinee: Expression, arms: Sequence[MatchArm], span: Span = NOWHERE):
		self.scrutinee, self.arms, self.span = scrutinee, list(arms), span

class Return(Statement):
	def __init__(self, value: Optional[Expression] = None, span: Span = NOWHERE):
		self.value, self.span = value, span

class Break(Statement):
	def __init__(self, span: Span = NOWHERE): self.span = span

class Continue(Statement):
	def __init__(self, span: Span = NOWHERE): self.span = span

class ExprStmt(Statement):
	def __init__(self, expr: Expression, span: Optional[Span] = None):
		self.expr = expr
		self.span = expr.span if span is None else span

class Import(Statement):
	def __init__(self, module: str, symbols: Optional[Sequence[str]] = None, span: Span = NOWHERE):
		self.module, self.symbols, self.span = module, symbols, span

class Class(Statement):
	""" Members are whatever the parser produced; the type-checker does not look inside yet. """
	def __init__(self, name: str, extends: Optional[str] = None, members: Sequence[Any] = (), span: Span = NOWHERE):
		self.name, self.extends, self.members, self.span = name, extends, list(members), span

#######################################################################
#  Patterns

class Wildcard(Pattern):
	def __init__(self, span: Span = NOWHERE): self.span = span

class NamePattern(Pattern):
	def __init__(self, name: str, span: Span = NOWHERE):
		self.name, self.span = name, span

class LiteralPattern(Pattern):
	def __init__(self, literal: Literal, span: Optional[Span] = None):
		self.literal = literal
		self.span = literal.span if span is None else span

class OrPattern(Pattern):
	def __init__(self, alternatives: Sequence[Pattern], span: Span = NOWHERE):
		self.alternatives, self.span = list(alternatives), span

class TuplePattern(Pattern):
	def __init__(self, elements: Sequence[Pattern], span: Span = NOWHERE):
		self.elements, self.span = list(elements), span

class ListPattern(Pattern):
	def __init__(self, elements: Sequence[Pattern], span: Span = NOWHERE):
		self.elements, self.span = list(elements), span

class ConsPattern(Pattern):
	""" head :: tail """
	def __init__(self, head: Pattern, tail: Pattern, span: Span = NOWHERE):
		self.head, self.tail, self.span = head, tail, span

class FieldPattern(Phrase):
	def __init__(self, name: str, pattern: Pattern, shorthand: bool = False, span: Span = NOWHERE):
		self.name, self.pattern, self.shorthand, self.span = name, pattern, shorthand, span

class StructPattern(Pattern):
	def __init__(self, name: str, fields: Sequence[FieldPattern], span: Span = NOWHERE):
		self.name, self.fields, self.span = name, list(fields), span

class RangePattern(Pattern):
	def __init__(self, start: Pattern, end: Pattern, span: Span = NOWHERE):
		self.start, self.end, self.span = start, end, span
