import unittest

from pygments.token import Keyword, Comment, Name, Generic, Number

from classlens.jvm.lexer import JavaBytecodeLexer, highlight


class LexerTestCase(unittest.TestCase):
    def tokens(self, text):
        lexer = JavaBytecodeLexer()
        return [
            (token, value) for token, value in lexer.get_tokens(text)
            if value.strip()]

    def test_instruction(self):
        tokens = self.tokens('    1: invokespecial #2 // Method Object."<init>"')
        self.assertEqual([
            (Name.Label, '    1:'),
            (Keyword, 'invokespecial'),
            (Name.Constant, '#2'),
            (Comment.Single, '// Method Object."<init>"'),
        ], tokens)

    def test_longest_mnemonic_wins(self):
        tokens = self.tokens('    0: iload_0\n    1: iload_w 300\n')
        self.assertIn((Keyword, 'iload_0'), tokens)
        self.assertIn((Keyword, 'iload_w'), tokens)
        self.assertIn((Number, '300'), tokens)

    def test_headings(self):
        tokens = self.tokens('Class:       Hello\n--- Methods ---\n')
        self.assertEqual([
            (Generic.Heading, 'Class:       Hello'),
            (Generic.Subheading, '--- Methods ---'),
        ], tokens)

    def test_highlight(self):
        text = highlight('    0: return\n')
        self.assertIn('return', text)
        self.assertIn('\x1b[', text)


if __name__ == '__main__':
    unittest.main()
