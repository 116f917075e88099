"""
Type inference for the Nevermind language.

The parser and name-resolver live elsewhere. This package takes the tree they
produce and either finds a type for it or explains why there is none.
"""
