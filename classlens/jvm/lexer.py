""" Pygments lexer for the bytecode listings and summaries produced by
classlens, so they can be shown with syntax coloring.
"""

from pygments import highlight as _highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import RegexLexer, words
from pygments.token import (
    Text,
    Comment,
    Keyword,
    Name,
    Number,
    Punctuation,
    Generic,
)
from .opcodes import name_to_op


# Longest names first, so that iload_0 is not matched as iload.
_mnemonics = sorted(name_to_op, key=len, reverse=True)
_wide_mnemonics = sorted(
    ("{}_w".format(name) for name in name_to_op), key=len, reverse=True
)


class JavaBytecodeLexer(RegexLexer):
    """ Lexer for classlens summaries and method disassembly. """

    name = "Java bytecode (classlens)"
    aliases = ["classlens", "javabytecode"]
    filenames = ["*.jbc"]

    tokens = {
        "root": [
            # Comments with the constant pool description:
            (r"//.*?$", Comment.Single),
            # Headings of the reports:
            (
                r"^(Bytecode for method:|Class:|Superclass:|Version:|"
                r"Interfaces:|Max stack:|Exception table:).*$",
                Generic.Heading,
            ),
            (r"^--- \w+ ---$", Generic.Subheading),
            (r"^-+$", Generic.Subheading),
            (r"^\(.*\)$", Generic.Emph),
            # Left margin byte offsets: "   12: "
            (r"^\s*\d+:(?=\s)", Name.Label),
            (r"#\d+", Name.Constant),
            (words(_wide_mnemonics, suffix=r"\b"), Keyword),
            (words(_mnemonics, suffix=r"\b"), Keyword),
            (r"\bdefault\b", Keyword),
            (r"[-+]?\d+", Number),
            (r"[a-zA-Z_$][\w$.]*(?:\[\])*", Name),
            (r"[,:(){}\[\]<>\"]", Punctuation),
            (r"\s+", Text),
            (r".", Text),
        ],
    }


def highlight(text):
    """ Color the text for a terminal. """
    return _highlight(text, JavaBytecodeLexer(), TerminalFormatter())
