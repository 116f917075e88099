import io
import tempfile
import unittest
from contextlib import redirect_stderr
from pathlib import Path

from nevermind import syntax as s
from nevermind.location import Span
from nevermind.algebra import INT, STRING, ListOf
from nevermind.checker import type_check
from nevermind.diagnostics import Report, TooManyIssues

HETEROGENEOUS = 'let xs = [1, "s"]\n'

def _heterogeneous(path=None):
	elements = [s.Literal(1, Span(10, 11, path)), s.Literal("s", Span(13, 16, path))]
	return [s.Let("xs", s.ListLiteral(elements, Span(9, 17, path)), span=Span(0, 17, path))]

class ReportTests(unittest.TestCase):

	def test_success_leaves_report_clean(self):
		report = Report()
		program = [s.Let("xs", s.ListLiteral([s.Literal(1)])), s.ExprStmt(s.Variable("xs"))]
		self.assertEqual(ListOf(INT), type_check(program, report))
		self.assertTrue(report.ok())
		self.assertEqual("", report.as_text())

	def test_error_with_picture(self):
		report = Report()
		report.attach_source(HETEROGENEOUS)
		self.assertIsNone(type_check(_heterogeneous(), report))
		self.assertTrue(report.sick())
		text = report.as_text()
		self.assertTrue(text.startswith("error: expected Int, found String"), text)
		self.assertIn('let xs = [1, "s"]', text)
		self.assertIn("^", text)

	def test_error_without_source(self):
		report = Report()
		type_check([s.ExprStmt(s.Variable("nope"))], report)
		self.assertEqual("error: cannot find value 'nope' in this scope", report.as_text())
		self.assertEqual(1, len(report.issues()))

	def test_source_from_file(self):
		with tempfile.TemporaryDirectory() as folder:
			path = Path(folder) / "hetero.nm"
			path.write_text(HETEROGENEOUS, encoding="utf-8")
			report = Report()
			type_check(_heterogeneous(path), report)
			text = report.as_text()
		self.assertIn(str(path), text)
		self.assertIn('let xs = [1, "s"]', text)

	def test_note_follows_error(self):
		text = "let x = 1\nlet x = 2\n"
		program = [
			s.Let("x", s.Literal(1), span=Span(0, 9)),
			s.Let("x", s.Literal(2), span=Span(10, 19)),
		]
		report = Report()
		report.attach_source(text)
		type_check(program, report)
		lines = report.as_text().splitlines()
		self.assertEqual("error: name 'x' is already defined in this scope", lines[0])
		notes = [i for i, line in enumerate(lines) if line.startswith("note: ")]
		self.assertEqual(1, len(notes))
		self.assertEqual("note: previous definition is here", lines[notes[0]])
		self.assertTrue(any("let x = 1" in line for line in lines[notes[0]:]))

	def test_max_issues(self):
		report = Report(max_issues=1)
		with self.assertRaises(TooManyIssues):
			type_check([s.ExprStmt(s.Variable("nope"))], report)

	def test_reset(self):
		report = Report()
		type_check([s.ExprStmt(s.Variable("nope"))], report)
		report.reset()
		self.assertTrue(report.ok())

	def test_assert_no_issues(self):
		report = Report()
		type_check([s.ExprStmt(s.Literal("fine"))], report)
		report.assert_no_issues("should be fine")
		type_check([s.ExprStmt(s.Variable("nope"))], report)
		with redirect_stderr(io.StringIO()) as err, self.assertRaises(AssertionError):
			report.assert_no_issues("not fine")
		self.assertIn("cannot find value 'nope'", err.getvalue())

class VerbosityTests(unittest.TestCase):

	PROGRAM = [
		s.Let("f", s.Lambda([s.Parameter("y")], s.Variable("y"))),
		s.Let("n", s.Literal("quiet")),
	]

	def test_quiet(self):
		with redirect_stderr(io.StringIO()) as err:
			self.assertEqual(STRING.name, str(type_check(self.PROGRAM + [s.ExprStmt(s.Variable("n"))], Report(verbose=0))))
		self.assertEqual("", err.getvalue())

	def test_verbose_traces_generalization(self):
		with redirect_stderr(io.StringIO()) as err:
			type_check(self.PROGRAM, Report(verbose=1))
		output = err.getvalue()
		self.assertIn("Generalized f", output)
		self.assertNotIn("Generalized n", output)

if __name__ == '__main__':
	unittest.main()
