"""
I want a simple, light-weight way to pass around points and spans within source text.
The concept is simple: Use character offsets, optionally tagged with the file they came from.
"""
from pathlib import Path
from typing import NamedTuple, Optional

class Span(NamedTuple):
	""" Aimed at whatever prints error messages """
	start: int
	stop: int
	path: Optional[Path] = None
	
	def width(self) -> int: return max(self.stop - self.start, 1)
	def is_synthetic(self) -> bool: return self.start == self.stop == 0 and self.path is None
	
	def merge(self, other: "Span") -> "Span":
		if other.is_synthetic(): return self
		if self.is_synthetic(): return other
		assert self.path == other.path
		return Span(min(self.start, other.start), max(self.stop, other.stop), self.path)

# Synthetic nodes (built-ins, test fixtures) come from nowhere in particular.
NOWHERE = Span(0, 0)
