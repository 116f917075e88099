import sys
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional
from boozetools.support.failureprone import SourceText, illustration

from .location import Span
from .errors import TypeCheckError

class TooManyIssues(Exception):
	pass

class Report:
	"""
	Collects issues for the driver to show once checking is over.
	The type checker contributes at most one, since it stops at the first.
	"""
	_issues: list["Pic"]

	def __init__(self, *, verbose: int = 0, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues
		self._sources: dict[Optional[Path], SourceText] = {}

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)
	def issues(self) -> list["Pic"]: return list(self._issues)

	def issue(self, it: Any):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def attach_source(self, text: str, path: Optional[Path] = None):
		"""
		Source text for spans, so the report can draw pictures.
		Text with no path serves every span that has no path either.
		"""
		self._sources[path] = SourceText(text, filename=None if path is None else str(path))

	def _source_for(self, path: Optional[Path]) -> Optional[SourceText]:
		if path in self._sources:
			return self._sources[path]
		if path is None:
			return None
		return _fetch(path)

	def type_error(self, error: TypeCheckError):
		""" File a type error: the message, a picture of the place, then any notes. """
		pic = Pic("error: " + error.message, [self._annotate(error.span)])
		for note in error.notes:
			anns = [] if note.span is None else [self._annotate(note.span)]
			pic.followed_by(Pic("note: " + note.message, anns))
		self.issue(pic)

	def _annotate(self, span: Span, caption: str = "") -> "Annotation":
		source = None if span.is_synthetic() else self._source_for(span.path)
		return Annotation(span, source, caption)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		for i in self._issues:
			print(i.as_text(), file=sys.stderr)
		sys.stderr.flush()

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(message)

	def as_text(self) -> str:
		return '\n'.join(i.as_text() for i in self._issues)


class Annotation:
	path: Optional[Path]
	span: Span
	caption: str
	def __init__(self, span: Span, source: Optional[SourceText], caption: str = ""):
		self.path = span.path
		self.span = span
		self.source = source
		self.caption = caption
	def illustrate(self):
		row, col = self.source.find_row_col(self.span.start)
		single_line = self.source.line_of_text(row)
		return illustration(single_line, col, self.span.width(), prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro: str, anns: list[Annotation], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
		self._sequel: list[Pic] = []
	@property
	def intro(self) -> str: return self._intro
	def followed_by(self, pic: "Pic"): self._sequel.append(pic)
	def as_text(self):
		lines = [self._intro]
		path = None
		for ann in self._anns:
			if ann.source is None:
				continue
			if ann.path != path:
				path = ann.path
				lines.append("  --> %s" % path)
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		lines.extend(pic.as_text() for pic in self._sequel)
		return '\n'.join(lines)

@lru_cache(5)
def _fetch(path) -> SourceText:
	with open(path, "r", encoding="utf-8") as fh:
		return SourceText(fh.read(), filename=str(path))
