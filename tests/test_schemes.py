import unittest

from nevermind.algebra import TypeVariable, INT, STRING, Arrow, ListOf, free_vars, render
from nevermind.schemes import Fresh, TypeScheme, generalize, instantiate, monomorphic
from nevermind.unification import Unifier

class FreshTests(unittest.TestCase):

	def test_never_repeats(self):
		fresh = Fresh()
		seen = [fresh.variable().nr for _ in range(50)]
		self.assertEqual(len(seen), len(set(seen)))
		self.assertEqual(50, fresh.issued())

	def test_each_source_is_its_own(self):
		self.assertEqual(Fresh().variable(), Fresh().variable())

	def test_names_latest_wins(self):
		fresh = Fresh()
		v = fresh.variable("a")
		fresh.names.name(v.nr, "b")
		fresh.names.name(v.nr, "b")
		self.assertEqual("b", fresh.names.get(v.nr))
		self.assertEqual("[b]", render(ListOf(v), fresh.names))
		self.assertNotIn(fresh.variable().nr, fresh.names)

class SchemeTests(unittest.TestCase):

	def setUp(self) -> None:
		self.fresh = Fresh()
		self.a, self.b, self.c = self.fresh.several(3)

	def test_generalize_respects_ambient(self):
		typ = Arrow([self.a, self.b], self.c)
		scheme = generalize(typ, {self.b.nr})
		self.assertEqual((self.a.nr, self.c.nr), scheme.quantified)
		self.assertIs(typ, scheme.body)

	def test_generalize_closed_type(self):
		scheme = generalize(Arrow([INT], STRING), set())
		self.assertTrue(scheme.is_monomorphic())

	def test_monomorphic(self):
		scheme = monomorphic(self.a)
		self.assertEqual(TypeScheme((), self.a), scheme)
		self.assertEqual(self.a, instantiate(scheme, self.fresh))

	def test_instantiate_mints_new_variables(self):
		scheme = generalize(Arrow([self.a], self.a), set())
		first = instantiate(scheme, self.fresh)
		second = instantiate(scheme, self.fresh)
		self.assertNotEqual(first, second)
		for inst in (first, second):
			self.assertTrue(free_vars(inst).isdisjoint({self.a.nr, self.b.nr, self.c.nr}))
			self.assertEqual(inst.params[0], inst.result)
		self.assertTrue(free_vars(first).isdisjoint(free_vars(second)))

	def test_instantiate_leaves_unquantified_alone(self):
		scheme = generalize(Arrow([self.a], self.b), {self.b.nr})
		inst = instantiate(scheme, self.fresh)
		self.assertEqual(self.b, inst.result)
		self.assertNotEqual(self.a, inst.params[0])

	def test_round_trip_unifies_with_original(self):
		for typ, ambient in [
			(Arrow([self.a], self.a), set()),
			(Arrow([self.a, ListOf(self.b)], self.c), {self.c.nr}),
			(ListOf(Arrow([INT], self.b)), set()),
			(STRING, set()),
		]:
			with self.subTest(typ=str(typ)):
				inst = instantiate(generalize(typ, ambient), self.fresh)
				Unifier().unify(inst, typ)

if __name__ == '__main__':
	unittest.main()
