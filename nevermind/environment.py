"""
The type environment: a stack of name-spaces with support for nested scopes.
Scope zero is the global scope and lives as long as the environment does.
"""
from contextlib import contextmanager
from typing import Callable, Iterable, Optional
from .location import Span, NOWHERE
from .algebra import NevermindType, free_vars
from .schemes import TypeScheme
from .errors import DuplicateDefinition, InvalidScope

class AlreadyExists(KeyError): pass

class Layer:
	""" Lightly enhanced dictionary: It does not like duplicate keys. """
	_locate: dict[str, Span]
	_scheme: dict[str, TypeScheme]

	def __init__(self):
		self._locate, self._scheme = {}, {}

	def __contains__(self, key: str) -> bool:
		return key in self._scheme

	def scheme(self, key: str) -> Optional[TypeScheme]:
		return self._scheme.get(key)

	def locate(self, key: str) -> Span:
		return self._locate[key]

	def mount(self, key: str, span: Span, scheme: TypeScheme) -> TypeScheme:
		if key in self._scheme:
			raise AlreadyExists(key)
		else:
			self._locate[key] = span
			self._scheme[key] = scheme
			return scheme

	def each_name(self) -> Iterable[str]:
		return self._scheme.keys()

	def each_scheme(self) -> Iterable[TypeScheme]:
		return self._scheme.values()


class TypeEnvironment:
	def __init__(self):
		self._scopes = [Layer()]

	def depth(self) -> int: return len(self._scopes)

	def enter_scope(self):
		self._scopes.append(Layer())

	def exit_scope(self):
		if len(self._scopes) == 1:
			raise InvalidScope()
		self._scopes.pop()

	@contextmanager
	def scope(self):
		""" A nested scope that is popped again however the block exits. """
		self.enter_scope()
		try: yield self
		finally: self.exit_scope()

	def insert(self, name: str, scheme: TypeScheme, span: Span = NOWHERE):
		top = self._scopes[-1]
		try:
			top.mount(name, span, scheme)
		except AlreadyExists:
			prior = top.locate(name)
			error = DuplicateDefinition(name, span=span)
			raise error.with_note("previous definition is here", None if prior.is_synthetic() else prior)

	def lookup(self, name: str) -> Optional[TypeScheme]:
		for layer in reversed(self._scopes):
			if name in layer:
				return layer.scheme(name)
		return None

	def in_current_scope(self, name: str) -> bool:
		return name in self._scopes[-1]

	def current_names(self) -> list[str]:
		return list(self._scopes[-1].each_name())

	def free_vars(self, rewrite: Optional[Callable[[NevermindType], NevermindType]] = None) -> set[int]:
		"""
		Every variable free in any live binding. If a rewrite is supplied
		(typically the unifier's apply), each body goes through it first.
		"""
		seen = set()
		for layer in self._scopes:
			for scheme in layer.each_scheme():
				body = scheme.body if rewrite is None else rewrite(scheme.body)
				seen.update(free_vars(body))
		return seen
