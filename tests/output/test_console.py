"""Tests for the StringIO-backed console helpers."""

from rich.text import Text

from instr.domain.types import LinkKind
from instr.output.console import INSTR_THEME, create_console, get_output, style_for_kind


class TestConsole:
    def test_renders_to_buffer(self) -> None:
        console = create_console()
        console.print(Text("hello"))
        assert get_output(console) == "hello\n"

    def test_every_kind_has_a_style(self) -> None:
        for kind in LinkKind:
            assert style_for_kind(kind) in INSTR_THEME.styles
