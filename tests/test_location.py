import unittest
from pathlib import Path

from nevermind.location import Span, NOWHERE

class SpanTests(unittest.TestCase):

	def test_merge_covers_both(self):
		self.assertEqual(Span(3, 20), Span(3, 8).merge(Span(12, 20)))
		self.assertEqual(Span(3, 20), Span(12, 20).merge(Span(3, 8)))

	def test_merge_ignores_nowhere(self):
		here = Span(5, 9, Path("a.nm"))
		self.assertEqual(here, here.merge(NOWHERE))
		self.assertEqual(here, NOWHERE.merge(here))
		self.assertEqual(NOWHERE, NOWHERE.merge(NOWHERE))

	def test_width(self):
		self.assertEqual(4, Span(5, 9).width())
		self.assertEqual(1, Span(5, 5).width())

if __name__ == '__main__':
	unittest.main()
