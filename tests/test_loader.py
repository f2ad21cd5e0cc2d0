"""
Program loader tests.

The loader maps the eight command characters to Instructions and drops
everything else; it never validates bracket balance.
"""

import pytest
from bfvm.loader import Instruction, parse_program, format_program


class TestCommandMapping:
    def test_each_command_character(self):
        """Every command character maps to its own instruction."""
        cases = [
            (">", Instruction.INC_PTR),
            ("<", Instruction.DEC_PTR),
            ("+", Instruction.INC_DATA),
            ("-", Instruction.DEC_DATA),
            (",", Instruction.INPUT),
            (".", Instruction.OUTPUT),
            ("[", Instruction.FORWARD),
            ("]", Instruction.BACK),
        ]
        for char, expected in cases:
            assert parse_program(char) == (expected,), f"{char!r} -> {expected}"

    def test_order_is_preserved(self):
        assert parse_program("+>-<") == (
            Instruction.INC_DATA, Instruction.INC_PTR,
            Instruction.DEC_DATA, Instruction.DEC_PTR,
        )


class TestComments:
    def test_empty_source(self):
        assert parse_program("") == ()

    @pytest.mark.parametrize("text", [
        "hello world",
        "this is a comment\nwith newlines\tand tabs",
        "0123456789 !@#$%^&*()_=",
    ])
    def test_all_comment_source_is_empty(self, text):
        """Text with no command characters produces no instructions at all."""
        assert parse_program(text) == ()

    def test_comments_take_no_slot(self):
        """Comment characters are dropped, not turned into placeholders."""
        program = parse_program("a+b+c")
        assert len(program) == 2
        assert program == (Instruction.INC_DATA, Instruction.INC_DATA)


class TestInputs:
    def test_generator_of_chars(self):
        chars = (c for c in "+[-]")
        assert format_program(parse_program(chars)) == "+[-]"

    def test_unbalanced_brackets_load(self):
        """Bracket balance is not checked at load time."""
        assert parse_program("]][[") == (
            Instruction.BACK, Instruction.BACK,
            Instruction.FORWARD, Instruction.FORWARD,
        )

    def test_format_strips_comments(self):
        assert format_program(parse_program("add two: +  + .  done")) == "++."
