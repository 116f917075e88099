import unittest

from nevermind.location import Span
from nevermind.algebra import TypeVariable, INT, STRING, Arrow
from nevermind.schemes import monomorphic, generalize
from nevermind.environment import TypeEnvironment
from nevermind.errors import DuplicateDefinition, InvalidScope

INT_SCHEME, STRING_SCHEME = monomorphic(INT), monomorphic(STRING)

class ScopeTests(unittest.TestCase):

	def setUp(self) -> None:
		self.env = TypeEnvironment()

	def test_scope_leaves_no_trace(self):
		self.env.enter_scope()
		self.env.insert("x", INT_SCHEME)
		self.env.exit_scope()
		self.assertIsNone(self.env.lookup("x"))

	def test_scope_restores_outer_binding(self):
		self.env.insert("x", STRING_SCHEME)
		self.env.enter_scope()
		self.env.insert("x", INT_SCHEME)
		self.env.exit_scope()
		self.assertEqual(STRING_SCHEME, self.env.lookup("x"))

	def test_shadowing(self):
		self.env.insert("x", INT_SCHEME)
		self.env.enter_scope()
		self.assertFalse(self.env.in_current_scope("x"))
		self.env.insert("x", STRING_SCHEME)
		self.assertTrue(self.env.in_current_scope("x"))
		self.assertEqual(STRING, self.env.lookup("x").body)
		self.env.exit_scope()
		self.assertEqual(INT, self.env.lookup("x").body)

	def test_outer_names_visible_inside(self):
		self.env.insert("x", INT_SCHEME)
		self.env.enter_scope()
		self.env.enter_scope()
		self.assertEqual(INT_SCHEME, self.env.lookup("x"))
		self.assertEqual(3, self.env.depth())

	def test_duplicate_in_same_scope(self):
		self.env.insert("x", INT_SCHEME, Span(4, 5))
		with self.assertRaises(DuplicateDefinition) as ctx:
			self.env.insert("x", STRING_SCHEME, Span(20, 21))
		err = ctx.exception
		self.assertEqual("x", err.name)
		self.assertEqual(Span(20, 21), err.span)
		self.assertEqual("name 'x' is already defined in this scope", err.message)
		self.assertEqual(1, len(err.notes))
		self.assertEqual("previous definition is here", err.notes[0].message)
		self.assertEqual(Span(4, 5), err.notes[0].span)
		# The original stays put.
		self.assertEqual(INT_SCHEME, self.env.lookup("x"))

	def test_cannot_leave_global_scope(self):
		with self.assertRaises(InvalidScope):
			self.env.exit_scope()
		self.env.enter_scope()
		self.env.exit_scope()
		with self.assertRaises(InvalidScope):
			self.env.exit_scope()
		self.assertEqual(1, self.env.depth())

	def test_current_names(self):
		self.env.insert("x", INT_SCHEME)
		self.env.enter_scope()
		self.env.insert("y", INT_SCHEME)
		self.env.insert("z", INT_SCHEME)
		self.assertEqual(["y", "z"], self.env.current_names())

	def test_scope_pops_even_on_error(self):
		with self.assertRaises(DuplicateDefinition):
			with self.env.scope():
				self.env.insert("x", INT_SCHEME)
				self.env.insert("x", STRING_SCHEME)
		self.assertEqual(1, self.env.depth())
		self.assertIsNone(self.env.lookup("x"))
		with self.env.scope() as inner:
			self.assertIs(self.env, inner)
			self.assertEqual(2, self.env.depth())
		self.assertEqual(1, self.env.depth())

class FreeVariableTests(unittest.TestCase):

	def test_collects_across_live_scopes(self):
		env = TypeEnvironment()
		env.insert("f", generalize(Arrow([TypeVariable(0)], TypeVariable(0)), set()))
		env.enter_scope()
		env.insert("p", monomorphic(TypeVariable(1)))
		env.enter_scope()
		env.insert("q", monomorphic(TypeVariable(2)))
		self.assertEqual({0, 1, 2}, env.free_vars())
		env.exit_scope()
		self.assertEqual({0, 1}, env.free_vars())

	def test_rewrite_first(self):
		env = TypeEnvironment()
		env.insert("p", monomorphic(TypeVariable(1)))
		self.assertEqual({5}, env.free_vars(lambda t: TypeVariable(5)))
		self.assertEqual(set(), env.free_vars(lambda t: INT))

if __name__ == '__main__':
	unittest.main()
