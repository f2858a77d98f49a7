"""Unit tests for parser module."""

import json
import math
import unittest
from unittest import mock

from calcbrain import config
from calcbrain.parser import (
    dumps_program,
    format_number,
    from_property_list,
    loads_program,
    parse_token,
    to_property_list,
    tokenize,
)
from calcbrain.types import Operand, Operator, ValidationError


class TestTokens(unittest.TestCase):
    """Test token parsing."""

    def test_numbers_become_operands(self):
        self.assertEqual(parse_token("3"), Operand(3.0))
        self.assertEqual(parse_token(" -2.5 "), Operand(-2.5))
        self.assertEqual(parse_token("1e3"), Operand(1000.0))

    def test_symbols_become_operators(self):
        self.assertEqual(parse_token("+"), Operator("+"))
        self.assertEqual(parse_token("π"), Operator("π"))
        # "e" is the constant, not a number
        self.assertEqual(parse_token("e"), Operator("e"))

    def test_special_float_spellings(self):
        self.assertEqual(parse_token("inf"), Operand(math.inf))
        self.assertTrue(math.isnan(parse_token("nan").value))

    def test_empty_token_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            parse_token("   ")
        self.assertEqual(ctx.exception.code, "EMPTY_TOKEN")

    def test_tokenize(self):
        self.assertEqual(
            tokenize("3 + 4   =\n"),
            [Operand(3.0), Operator("+"), Operand(4.0), Operator("=")],
        )
        self.assertEqual(tokenize(""), [])


class TestFormatting(unittest.TestCase):
    """Test number formatting."""

    def test_integral_values_have_no_fraction(self):
        self.assertEqual(format_number(35.0), "35")
        self.assertEqual(format_number(0.0), "0")
        self.assertEqual(format_number(-3.0), "-3")

    def test_fractional_values(self):
        self.assertEqual(format_number(0.5), "0.5")
        self.assertEqual(format_number(math.pi), "3.14159265359")

    def test_explicit_precision(self):
        self.assertEqual(format_number(math.pi, precision=3), "3.14")

    def test_config_precision(self):
        with mock.patch.object(config, "OUTPUT_PRECISION", 4):
            self.assertEqual(format_number(math.e), "2.718")

    def test_special_values(self):
        self.assertEqual(format_number(math.inf), "inf")
        self.assertEqual(format_number(-math.inf), "-inf")
        self.assertEqual(format_number(math.nan), "nan")

    def test_non_numeric_fallback(self):
        self.assertEqual(format_number("abc"), "abc")


class TestProgramCodec(unittest.TestCase):
    """Test property-list and JSON program conversion."""

    def test_to_property_list(self):
        program = [Operand(3.0), Operator("+"), Operand(4.0)]
        self.assertEqual(to_property_list(program), [3.0, "+", 4.0])

    def test_from_property_list_skips_malformed(self):
        items = [1, "√", None, True, {"x": 1}, 2.5, "="]
        self.assertEqual(
            from_property_list(items),
            [Operand(1.0), Operator("√"), Operand(2.5), Operator("=")],
        )

    def test_from_property_list_accepts_typed_entries(self):
        items = [Operand(2.0), Operator("x")]
        self.assertEqual(from_property_list(items), items)

    def test_dumps_program(self):
        text = dumps_program([Operand(3.0), Operator("π")])
        self.assertEqual(text, '[3.0, "π"]')
        self.assertEqual(json.loads(text), [3.0, "π"])

    def test_loads_program(self):
        self.assertEqual(
            loads_program('[9, "√", false, null, "="]'),
            [Operand(9.0), Operator("√"), Operator("=")],
        )

    def test_loads_non_finite_operands(self):
        entries = loads_program(dumps_program([Operand(math.inf)]))
        self.assertEqual(entries, [Operand(math.inf)])

    def test_loads_invalid_json(self):
        with self.assertRaises(ValidationError) as ctx:
            loads_program("[1, 2")
        self.assertEqual(ctx.exception.code, "INVALID_PROGRAM")

    def test_loads_non_array(self):
        with self.assertRaises(ValidationError) as ctx:
            loads_program('{"program": [1]}')
        self.assertEqual(ctx.exception.code, "INVALID_PROGRAM")

    def test_loads_too_long(self):
        with mock.patch.object(config, "MAX_PROGRAM_LENGTH", 2):
            with self.assertRaises(ValidationError) as ctx:
                loads_program('[1, "+", 2]')
        self.assertEqual(ctx.exception.code, "TOO_LONG")


if __name__ == "__main__":
    unittest.main()
