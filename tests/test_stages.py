"""
Test suite for the compiler stage dump.
"""

import io
import unittest

from nisp import LexError, ParseError, debug_stages


class TestDebugStages(unittest.TestCase):
    def test_sections(self):
        """Every phase gets a headed section."""
        report = debug_stages("(+ 1 2)")
        self.assertIn("=== Token Stream ===\nToken(OPAREN, '(', 1:0)", report)
        self.assertIn("Token(INTEGER, '2', 1:5)", report)
        self.assertIn(
            "=== Syntax Tree ===\nApplication(operator=SymbolRef(name='+')", report
        )
        self.assertIn("=== Rendered ===\n(+ 1 2)\n", report)
        self.assertIn("=== Lowered ===\n10, 2, 10, 1, 2\n", report)

    def test_writes_to_stream(self):
        out = io.StringIO()
        report = debug_stages("(f x)", out=out)
        self.assertEqual(out.getvalue(), report)

    def test_errors_propagate(self):
        out = io.StringIO()
        with self.assertRaises(LexError):
            debug_stages("(f #)", out=out)
        with self.assertRaises(ParseError):
            debug_stages("(f x", out=out)
        self.assertEqual(out.getvalue(), "")


if __name__ == "__main__":
    unittest.main()
