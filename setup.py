"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='nevermind-lang',
	version='0.1.0',
	packages=['nevermind', ],
	license='MIT',
	description='Hindley-Milner type inference for the Nevermind language',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Compilers",
	],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	],
)
