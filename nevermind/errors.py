"""
Things that go wrong while inferring types.

Each kind of failure is its own exception class. The class name is the
taxonomy tag (see TypeCheckError.kind) and the gripe is the message template.
Every error knows where it happened, and may carry notes pointing elsewhere,
for example at the earlier definition of a duplicated name.
"""
from typing import NamedTuple, Optional, Mapping
from .location import Span, NOWHERE
from .algebra import NevermindType, TypeVariable, render

class Note(NamedTuple):
	message: str
	span: Optional[Span] = None

class TypeCheckError(Exception):
	gripe: str
	span: Span
	notes: list[Note]

	def __init__(self, *details, span: Span = NOWHERE):
		self.span = span
		self.notes = []
		self.message = self.gripe % details
		super().__init__(self.message)

	@property
	def kind(self) -> str: return type(self).__name__

	def with_note(self, message: str, span: Optional[Span] = None) -> "TypeCheckError":
		self.notes.append(Note(message, span))
		return self

class TypeMismatch(TypeCheckError):
	gripe = "expected %s, found %s"
	def __init__(self, expected: NevermindType, found: NevermindType, span: Span = NOWHERE, names: Optional[Mapping[int, str]] = None):
		self.expected, self.found = expected, found
		super().__init__(render(expected, names), render(found, names), span=span)

class UndefinedVariable(TypeCheckError):
	gripe = "cannot find value '%s' in this scope"
	def __init__(self, name: str, span: Span = NOWHERE):
		self.name = name
		super().__init__(name, span=span)

class DuplicateDefinition(TypeCheckError):
	gripe = "name '%s' is already defined in this scope"
	def __init__(self, name: str, span: Span = NOWHERE):
		self.name = name
		super().__init__(name, span=span)

class InvalidScope(TypeCheckError):
	gripe = "cannot exit the global scope"

class ArityMismatch(TypeCheckError):
	gripe = "expected %d argument%s, found %d"
	def __init__(self, expected: int, found: int, span: Span = NOWHERE):
		self.expected, self.found = expected, found
		super().__init__(expected, "" if expected == 1 else "s", found, span=span)

class NotAFunction(TypeCheckError):
	gripe = "%s is not a function"
	def __init__(self, typ: NevermindType, span: Span = NOWHERE, names: Optional[Mapping[int, str]] = None):
		self.typ = typ
		super().__init__(render(typ, names), span=span)

class CannotInfer(TypeCheckError):
	gripe = "cannot infer type: %s"
	def __init__(self, reason: str, span: Span = NOWHERE):
		self.reason = reason
		super().__init__(reason, span=span)

class RecursiveType(TypeCheckError):
	gripe = "recursive types are not supported"

class OccursCheckFailed(TypeCheckError):
	gripe = "infinite type: %s"
	def __init__(self, nr: int, within: NevermindType, span: Span = NOWHERE, names: Optional[Mapping[int, str]] = None):
		self.nr, self.within = nr, within
		super().__init__(render(TypeVariable(nr), names), span=span)
		self.with_note("it would have to contain itself, as in %s" % render(within, names))
