"""
The type checker walks a program in order, inferring a type for every
expression and checking every statement as it goes.

One checker owns one environment, one unifier and one source of fresh
variables, all for the duration of a single program. Nothing is shared
between checkers, so independent programs may be checked side by side.

The first failure ends the run: whatever went wrong propagates as a
TypeCheckError carrying the span of the phrase that was being checked.
The type_check() function at the bottom is the seam where such an error
becomes an entry in a Report.
"""
# ----------------------------------------------------------------

from typing import Optional, Sequence
from boozetools.support.foundation import Visitor
from . import syntax, preamble
from .location import Span
from .algebra import (
	NevermindType, TypeVariable, INT, FLOAT, STRING, BOOL, NULL, UNIT,
	Arrow, ListOf, MapOf, Product, Nominal, render,
)
from .schemes import Fresh, generalize, instantiate, monomorphic
from .environment import TypeEnvironment
from .unification import Unifier
from .errors import TypeCheckError, TypeMismatch, UndefinedVariable, ArityMismatch
from .manifest import translate
from .diagnostics import Report


class TypeChecker(Visitor):
	fresh: Fresh
	env: TypeEnvironment
	unifier: Unifier

	def __init__(self, report: Optional[Report] = None):
		self._report = report if report is not None else Report(verbose=0)
		self.fresh = Fresh()
		self.env = TypeEnvironment()
		self.unifier = Unifier(self.fresh.names)
		preamble.install(self.env, self.fresh)

	def check(self, statements: Sequence[syntax.Statement]) -> NevermindType:
		return self.unifier.apply(self._sequence(statements))

	def check_statement(self, stmt: syntax.Statement) -> NevermindType:
		return self.visit(stmt)

	def infer_expression(self, expr: syntax.Expression) -> NevermindType:
		return self.visit(expr)

	def check_pattern(self, pattern: syntax.Pattern, expected: NevermindType):
		self.visit(pattern, self.unifier.apply(expected))

	###################################################################
	#  Helpers

	def _unify(self, expected: NevermindType, found: NevermindType, span: Span):
		self.unifier.unify(expected, found, span)

	def _sequence(self, statements) -> NevermindType:
		result = UNIT
		for stmt in statements:
			result = self.check_statement(stmt)
		return result

	def _scoped_sequence(self, statements) -> NevermindType:
		with self.env.scope():
			return self._sequence(statements)

	def _bind(self, name: str, ty: NevermindType, span: Span):
		"""
		Generalize against whatever is free in the environment right now,
		with everything learned so far taken into account, then install.
		"""
		ty = self.unifier.apply(ty)
		scheme = generalize(ty, self.env.free_vars(self.unifier.apply))
		self.env.insert(name, scheme, span)
		if scheme.quantified:
			self._report.info("Generalized", name, ":", render(ty, self.fresh.names), "over", len(scheme.quantified))

	def _parameter_types(self, params: Sequence[syntax.Parameter]) -> list[NevermindType]:
		types = []
		for p in params:
			if p.type_annotation is None:
				typ = self.fresh.variable()
			else:
				typ = translate(p.type_annotation)
			if p.default_value is not None:
				self._unify(typ, self.infer_expression(p.default_value), p.default_value.span)
			types.append(typ)
		return types

	def _bind_parameters(self, params: Sequence[syntax.Parameter], types: Sequence[NevermindType]):
		for p, typ in zip(params, types):
			self.env.insert(p.name, monomorphic(typ), p.span)

	def _call_site(self, callee_type: NevermindType, arguments: Sequence[tuple[NevermindType, Span]], span: Span) -> NevermindType:
		params = self.fresh.several(len(arguments))
		result = self.fresh.variable()
		self._unify(Arrow(params, result), callee_type, span)
		for param, (typ, at) in zip(params, arguments):
			self._unify(param, typ, at)
		return self.unifier.apply(result)

	def _match(self, scrutinee: syntax.Expression, arms: Sequence[syntax.MatchArm]) -> NevermindType:
		subject = self.infer_expression(scrutinee)
		parts = []
		for arm in arms:
			with self.env.scope():
				self.check_pattern(arm.pattern, subject)
				if arm.guard is not None:
					self._unify(BOOL, self.infer_expression(arm.guard), arm.guard.span)
				parts.append(self.infer_expression(arm.body))
		if not parts:
			return UNIT
		for arm, other in zip(arms[1:], parts[1:]):
			self._unify(parts[0], other, arm.span)
		return self.unifier.apply(parts[0])

	def _condition(self, expr: syntax.Expression):
		self._unify(BOOL, self.infer_expression(expr), expr.span)

	###################################################################
	#  Statements

	def visit_Let(self, let: syntax.Let):
		typ = self.infer_expression(let.value)
		if let.type_annotation is not None:
			self._unify(translate(let.type_annotation), typ, let.value.span)
		# Mutability makes no difference to the type.
		self._bind(let.name, typ, let.span)
		return UNIT

	def visit_Function(self, fn: syntax.Function):
		# The function's own name is not in scope within its body.
		# The return-type annotation, if any, is not enforced.
		param_types = self._parameter_types(fn.params)
		with self.env.scope():
			self._bind_parameters(fn.params, param_types)
			result = self.infer_expression(fn.body)
		self._bind(fn.name, Arrow(param_types, result), fn.span)
		return UNIT

	def visit_TypeAlias(self, ta: syntax.TypeAlias): return UNIT
	def visit_Import(self, im: syntax.Import): return UNIT
	def visit_Class(self, cls: syntax.Class): return UNIT

	def visit_IfStmt(self, stmt: syntax.IfStmt):
		self._condition(stmt.condition)
		then_type = self._scoped_sequence(stmt.then_branch)
		if stmt.else_branch is None:
			return UNIT
		else_type = self._scoped_sequence(stmt.else_branch)
		self._unify(then_type, else_type, stmt.span)
		return self.unifier.apply(then_type)

	def visit_While(self, stmt: syntax.While):
		self._condition(stmt.condition)
		self._scoped_sequence(stmt.body)
		return UNIT

	def visit_For(self, stmt: syntax.For):
		element = self.fresh.variable()
		self._unify(ListOf(element), self.infer_expression(stmt.iterable), stmt.iterable.span)
		with self.env.scope():
			self.check_pattern(stmt.variable, element)
			self._sequence(stmt.body)
		return UNIT

	def visit_MatchStmt(self, stmt: syntax.MatchStmt):
		return self._match(stmt.scrutinee, stmt.arms)

	def visit_Return(self, stmt: syntax.Return):
		if stmt.value is not None:
			self.infer_expression(stmt.value)
		return UNIT

	def visit_Break(self, stmt: syntax.Break): return UNIT
	def visit_Continue(self, stmt: syntax.Continue): return UNIT

	def visit_ExprStmt(self, stmt: syntax.ExprStmt):
		return self.infer_expression(stmt.expr)

	###################################################################
	#  Expressions

	def visit_Literal(self, expr: syntax.Literal):
		value = expr.value
		if value is None: return NULL
		if isinstance(value, bool): return BOOL
		if isinstance(value, int): return INT
		if isinstance(value, float): return FLOAT
		if isinstance(value, str): return STRING
		raise TypeError(value)

	def visit_Char(self, expr: syntax.Char): return INT

	def visit_Variable(self, expr: syntax.Variable):
		scheme = self.env.lookup(expr.name)
		if scheme is None:
			raise UndefinedVariable(expr.name, span=expr.span)
		return instantiate(scheme, self.fresh)

	def visit_Binary(self, expr: syntax.Binary):
		# Any two operands that agree will do. There is no numeric constraint.
		lhs = self.infer_expression(expr.lhs)
		self._unify(lhs, self.infer_expression(expr.rhs), expr.span)
		return self.unifier.apply(lhs)

	def visit_Comparison(self, expr: syntax.Comparison):
		lhs = self.infer_expression(expr.lhs)
		self._unify(lhs, self.infer_expression(expr.rhs), expr.span)
		return BOOL

	def visit_Logical(self, expr: syntax.Logical):
		self._condition(expr.lhs)
		self._condition(expr.rhs)
		return BOOL

	def visit_Unary(self, expr: syntax.Unary):
		return self.infer_expression(expr.operand)

	def visit_Call(self, expr: syntax.Call):
		callee = self.infer_expression(expr.callee)
		arguments = [(self.infer_expression(a), a.span) for a in expr.args]
		return self._call_site(callee, arguments, expr.span)

	def visit_Pipeline(self, expr: syntax.Pipeline):
		first = expr.stages[0]
		typ, at = self.infer_expression(first), first.span
		for stage in expr.stages[1:]:
			typ = self._call_site(self.infer_expression(stage), [(typ, at)], stage.span)
			at = stage.span
		return typ

	def visit_Lambda(self, expr: syntax.Lambda):
		# Never generalized here. A lambda only becomes polymorphic by way of a let.
		param_types = self._parameter_types(expr.params)
		with self.env.scope():
			self._bind_parameters(expr.params, param_types)
			result = self.infer_expression(expr.body)
		return self.unifier.apply(Arrow(param_types, result))

	def visit_IfExpr(self, expr: syntax.IfExpr):
		self._condition(expr.condition)
		then_type = self.infer_expression(expr.then_part)
		self._unify(then_type, self.infer_expression(expr.else_part), expr.span)
		return self.unifier.apply(then_type)

	def visit_Block(self, expr: syntax.Block):
		return self._scoped_sequence(expr.statements)

	def visit_ListLiteral(self, expr: syntax.ListLiteral):
		if not expr.elements:
			return ListOf(self.fresh.variable())
		first = self.infer_expression(expr.elements[0])
		for elt in expr.elements[1:]:
			self._unify(first, self.infer_expression(elt), elt.span)
		return ListOf(self.unifier.apply(first))

	def visit_MapLiteral(self, expr: syntax.MapLiteral):
		if not expr.entries:
			return MapOf(self.fresh.variable())
		value_type = None
		for key, value in expr.entries:
			self._unify(STRING, self.infer_expression(key), key.span)
			typ = self.infer_expression(value)
			if value_type is None:
				value_type = typ
			else:
				self._unify(value_type, typ, value.span)
		return MapOf(self.unifier.apply(value_type))

	def visit_MatchExpr(self, expr: syntax.MatchExpr):
		return self._match(expr.scrutinee, expr.arms)

	def visit_Index(self, expr: syntax.Index):
		# Yes, the container's own type, not its element type.
		container = self.infer_expression(expr.container)
		self.infer_expression(expr.index)
		return container

	###################################################################
	#  Patterns: each visit receives the expected type, already resolved.

	def visit_Wildcard(self, pattern: syntax.Wildcard, expected: NevermindType): pass

	def visit_NamePattern(self, pattern: syntax.NamePattern, expected: NevermindType):
		self.env.insert(pattern.name, monomorphic(expected), pattern.span)

	def visit_LiteralPattern(self, pattern: syntax.LiteralPattern, expected: NevermindType):
		self._unify(expected, self.infer_expression(pattern.literal), pattern.span)

	def visit_TuplePattern(self, pattern: syntax.TuplePattern, expected: NevermindType):
		arity = len(pattern.elements)
		if isinstance(expected, TypeVariable):
			shape = Product(self.fresh.several(arity))
			self._unify(expected, shape, pattern.span)
			expected = shape
		if not isinstance(expected, Product):
			raise TypeMismatch(Product(self.fresh.several(arity)), expected, pattern.span, self.fresh.names)
		if len(expected.fields) != arity:
			raise ArityMismatch(len(expected.fields), arity, span=pattern.span)
		for sub, typ in zip(pattern.elements, expected.fields):
			self.check_pattern(sub, typ)

	def _list_element(self, pattern: syntax.Pattern, expected: NevermindType) -> NevermindType:
		if isinstance(expected, TypeVariable):
			shape = ListOf(self.fresh.variable())
			self._unify(expected, shape, pattern.span)
			return shape.element
		if not isinstance(expected, ListOf):
			raise TypeMismatch(ListOf(self.fresh.variable()), expected, pattern.span, self.fresh.names)
		return expected.element

	def visit_ListPattern(self, pattern: syntax.ListPattern, expected: NevermindType):
		element = self._list_element(pattern, expected)
		for sub in pattern.elements:
			self.check_pattern(sub, element)

	def visit_ConsPattern(self, pattern: syntax.ConsPattern, expected: NevermindType):
		element = self._list_element(pattern, expected)
		self.check_pattern(pattern.head, element)
		self.check_pattern(pattern.tail, ListOf(element))

	def visit_StructPattern(self, pattern: syntax.StructPattern, expected: NevermindType):
		# User types have no structure here, so the fields can be anything.
		self._unify(expected, Nominal(pattern.name), pattern.span)
		for field in pattern.fields:
			self.check_pattern(field.pattern, self.fresh.variable())

	def visit_OrPattern(self, pattern: syntax.OrPattern, expected: NevermindType):
		"""
		Every alternative must fit the same expected type. The first one binds
		its names directly; each later one binds into a scratch scope, and its
		names are then reconciled with what the first one bound.
		"""
		first, *rest = pattern.alternatives
		self.check_pattern(first, expected)
		for alt in rest:
			with self.env.scope():
				self.check_pattern(alt, expected)
				bound = [(name, self.env.lookup(name)) for name in self.env.current_names()]
			for name, scheme in bound:
				if self.env.in_current_scope(name):
					self._unify(self.env.lookup(name).body, scheme.body, alt.span)
				else:
					self.env.insert(name, scheme, alt.span)

	def visit_RangePattern(self, pattern: syntax.RangePattern, expected: NevermindType):
		self.check_pattern(pattern.start, INT)
		self.check_pattern(pattern.end, INT)
		self._unify(expected, INT, pattern.span)


def type_check(statements: Sequence[syntax.Statement], report: Report) -> Optional[NevermindType]:
	"""
	Check a whole program. On success, return its type. On failure,
	file the (one and only) error with the report and return None.
	"""
	checker = TypeChecker(report)
	try:
		return checker.check(statements)
	except TypeCheckError as e:
		report.type_error(e)
		return None
