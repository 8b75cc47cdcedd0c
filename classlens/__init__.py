""" Inspect compiled java class files in pure Python.

Example usage:

>>> from classlens.api import analyze
>>> with open('Hello.class', 'rb') as f:
...     result = analyze(f.read())
>>> print(result.summary)

"""

# Define version here. Used in docs, and setup script:
__version_info__ = (0, 1, 0)
__version__ = '.'.join(map(str, __version_info__))
