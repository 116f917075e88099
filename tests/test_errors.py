import unittest

from nevermind.location import Span, NOWHERE
from nevermind.algebra import INT, STRING, ListOf, TypeVariable
from nevermind.errors import (
	TypeCheckError, TypeMismatch, UndefinedVariable, DuplicateDefinition, InvalidScope,
	ArityMismatch, NotAFunction, CannotInfer, RecursiveType, OccursCheckFailed, Note,
)

class TaxonomyTests(unittest.TestCase):

	def test_messages_and_kinds(self):
		for error, kind, message in [
			(TypeMismatch(INT, ListOf(STRING)), "TypeMismatch", "expected Int, found [String]"),
			(UndefinedVariable("x"), "UndefinedVariable", "cannot find value 'x' in this scope"),
			(DuplicateDefinition("x"), "DuplicateDefinition", "name 'x' is already defined in this scope"),
			(InvalidScope(), "InvalidScope", "cannot exit the global scope"),
			(ArityMismatch(1, 3), "ArityMismatch", "expected 1 argument, found 3"),
			(ArityMismatch(0, 1), "ArityMismatch", "expected 0 arguments, found 1"),
			(NotAFunction(INT), "NotAFunction", "Int is not a function"),
			(CannotInfer("no idea"), "CannotInfer", "cannot infer type: no idea"),
			(RecursiveType(), "RecursiveType", "recursive types are not supported"),
			(OccursCheckFailed(3, ListOf(TypeVariable(3))), "OccursCheckFailed", "infinite type: t3"),
		]:
			with self.subTest(kind=kind):
				self.assertIsInstance(error, TypeCheckError)
				self.assertEqual(kind, error.kind)
				self.assertEqual(message, error.message)
				self.assertEqual(message, str(error))
				self.assertEqual(NOWHERE, error.span)

	def test_notes_accumulate(self):
		error = UndefinedVariable("x", span=Span(1, 2))
		self.assertIs(error, error.with_note("first").with_note("second", Span(5, 6)))
		self.assertEqual([Note("first", None), Note("second", Span(5, 6))], error.notes)

	def test_occurs_check_explains_itself(self):
		error = OccursCheckFailed(3, ListOf(TypeVariable(3)))
		self.assertEqual(["it would have to contain itself, as in [t3]"], [n.message for n in error.notes])

	def test_names_in_messages(self):
		error = TypeMismatch(TypeVariable(4), INT, names={4: "a"})
		self.assertEqual("expected a, found Int", error.message)
		self.assertEqual(TypeVariable(4), error.expected)

if __name__ == '__main__':
	unittest.main()
