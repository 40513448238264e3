from __future__ import annotations

import pytest

from menukit.config import configure
from menukit.menu import (
    INPUT_TITLE,
    NOT_A_NUMBER,
    Entry,
    MenuEntry,
    MenuNavigator,
    prompt_confirmation,
    prompt_menu_entry,
)
from menukit.render import Region
from menukit.signals import BACK_REQUEST, EXIT_REQUEST

from tests.helpers import press


class Distro:
    """Entry implemented outside the library, only label() and is_default()."""

    def __init__(self, name: str, default: bool = False):
        self.name = name
        self.default = default

    def label(self) -> str:
        return self.name

    def is_default(self) -> bool:
        return self.default


THREE = [Distro("openSUSE", default=True), Distro("Ubuntu"), Distro("Fedora")]
TWELVE = [MenuEntry(f"entry{i}") for i in range(1, 13)]


def _pick(entries, *keys, **kwargs):
    return prompt_menu_entry("Menu", "Pick one", entries, press(*keys), **kwargs)


@pytest.mark.parametrize("number, expected", [("0", "openSUSE"), ("1", "Ubuntu"), ("2", "Fedora")])
def test_pick_by_number(number, expected) -> None:
    entry, signal = _pick(THREE, number, "<Enter>")
    assert signal is None
    assert entry.label() == expected


def test_returns_the_callers_entry_object() -> None:
    entry, _ = _pick(THREE, "1", "<Enter>")
    assert entry is THREE[1]


def test_not_a_number_then_correct(recorder) -> None:
    entry, signal = _pick(THREE, "a", "<Enter>", "<Backspace>", "2", "<Enter>")
    assert (entry, signal) == (THREE[2], None)
    assert any(f.title == INPUT_TITLE and f.footer == NOT_A_NUMBER for f in recorder.frames)


def test_out_of_range_then_correct(recorder) -> None:
    entry, _ = _pick(THREE, "3", "<Enter>", "<Backspace>", "1", "<Enter>")
    assert entry is THREE[1]
    assert any(f.footer == "Input is out of range. Choose 0-2." for f in recorder.frames)


def test_huge_number_is_out_of_range(recorder) -> None:
    keys = ["9"] * 5000 + ["<Enter>"] + ["<Backspace>"] * 5000 + ["2", "<Enter>"]
    entry, signal = _pick(THREE, *keys)
    assert (entry, signal) == (THREE[2], None)
    assert any(f.footer == "Input is out of range. Choose 0-2." for f in recorder.frames)


@pytest.mark.parametrize("number", ["10", "00010", "0" * 5000 + "10"])
def test_number_just_past_the_page_is_out_of_range(number) -> None:
    assert _pick(TWELVE, *number, "<Enter>", "<Escape>") == (None, BACK_REQUEST)


def test_many_leading_zeros_are_accepted() -> None:
    entry, _ = _pick(TWELVE, *("0" * 5000 + "3"), "<Enter>")
    assert entry.label() == "entry4"


def test_empty_submission_is_rejected() -> None:
    entry, _ = _pick(THREE, "<Enter>", "0", "<Enter>")
    assert entry is THREE[0]


def test_leading_zeros_are_accepted() -> None:
    entry, _ = _pick(THREE, "0", "2", "<Enter>")
    assert entry is THREE[2]


def test_digits_are_page_relative() -> None:
    entry, _ = _pick(TWELVE, "<PageDown>", "0", "<Enter>")
    assert entry.label() == "entry11"

    entry, _ = _pick(TWELVE, "<End>", "1", "<Enter>")
    assert entry.label() == "entry12"


def test_number_off_the_visible_page_is_rejected(recorder) -> None:
    entry, _ = _pick(TWELVE, "<End>", "5", "<Enter>", "<Backspace>", "0", "<Enter>")
    assert entry.label() == "entry11"
    assert any(f.footer == "Input is out of range. Choose 0-1." for f in recorder.frames)


@pytest.mark.parametrize(
    "keys, expected",
    [
        (["<MouseWheelDown>"], "entry11"),
        (["<Right>"], "entry11"),
        (["<Down>"], "entry11"),
        (["<PageDown>", "<PageDown>", "<PageDown>"], "entry11"),
        (["<PageDown>", "<PageUp>"], "entry1"),
        (["<MouseWheelDown>", "<MouseWheelUp>"], "entry1"),
        (["<Left>"], "entry1"),
        (["<End>", "<Home>"], "entry1"),
        (["<End>", "<Up>"], "entry1"),
    ],
)
def test_paging_keys(keys, expected) -> None:
    entry, _ = _pick(TWELVE, *keys, "0", "<Enter>")
    assert entry.label() == expected


def test_paging_keeps_the_typed_number() -> None:
    entry, _ = _pick(TWELVE, "1", "<PageDown>", "<Enter>")
    assert entry.label() == "entry12"


def test_rejected_submission_keeps_the_page() -> None:
    nav = MenuNavigator("Menu", "", TWELVE)
    result = nav.run(press("<PageDown>", "9", "<Enter>", "<Escape>"))
    assert result == (None, BACK_REQUEST)
    assert nav.window.index == 1


def test_escape_and_interrupt() -> None:
    assert _pick(THREE, "<Escape>") == (None, BACK_REQUEST)
    assert _pick(THREE, "1", "<Escape>") == (None, BACK_REQUEST)
    assert _pick(THREE, "<C-d>") == (None, EXIT_REQUEST)
    assert _pick(THREE, "<PageDown>", "<C-c>") == (None, EXIT_REQUEST)


def test_closed_stream_is_an_exit_request() -> None:
    assert _pick(THREE, "1") == (None, EXIT_REQUEST)


def test_list_frame(recorder) -> None:
    prompt_menu_entry("Boot", "Choose an entry\nby number", THREE, press("<Escape>"))
    frame = recorder.last("Boot")
    assert frame.body[:3] == ("Choose an entry", "by number", "")
    assert frame.body[3:6] == ("[0] openSUSE *", "[1] Ubuntu", "[2] Fedora")
    assert frame.footer == ""
    # page size rows plus the description and its separator
    assert frame.region.height == 10 + 1 + 2


def test_footer_names_the_page(recorder) -> None:
    prompt_menu_entry("Boot", "", TWELVE, press("<End>", "<Escape>"))
    frame = recorder.last("Boot")
    assert frame.body[:2] == ("[0] entry11", "[1] entry12")
    assert frame.footer == "Page 2/2  (PgUp/PgDn to change page)"
    assert frame.region.height == 10


def test_input_line_is_drawn_below_the_list(recorder) -> None:
    region = Region(3, 2, 40, 1)
    prompt_menu_entry("Boot", "", THREE, press("7", "<Escape>"), page_size=4, region=region)
    list_frame = recorder.last("Boot")
    input_frame = recorder.last(INPUT_TITLE)
    assert list_frame.region == Region(3, 2, 40, 4)
    assert input_frame.region == Region(3, 2 + 4 + 3, 40, 1)
    assert input_frame.body == ("7",)


def test_no_redraw_when_page_does_not_move(recorder) -> None:
    prompt_menu_entry("Boot", "", THREE, press("<PageDown>", "<PageUp>", "<Escape>"))
    assert len([f for f in recorder.frames if f.title == "Boot"]) == 1


def test_default_marker_from_config(tmp_path, recorder) -> None:
    app = tmp_path / "menukit.toml"
    app.write_text('[ui.theme]\ndefault_marker = "(default)"\n', encoding="utf-8")
    configure(app_config_path=app)
    prompt_menu_entry("Boot", "", THREE, press("<Escape>"))
    assert recorder.last("Boot").body[0] == "[0] openSUSE (default)"


def test_page_size_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("MENUKIT_PAGE_SIZE", "5")
    configure()
    entry, _ = _pick(TWELVE, "<End>", "1", "<Enter>")
    assert entry.label() == "entry12"
    entry, _ = _pick(TWELVE, "<PageDown>", "4", "<Enter>")
    assert entry.label() == "entry10"


def test_no_entries(recorder) -> None:
    assert _pick([], "0", "<Enter>", "<Escape>") == (None, BACK_REQUEST)
    assert recorder.last(INPUT_TITLE).footer == "There are no entries to choose from."


def test_entry_protocol() -> None:
    assert isinstance(MenuEntry("x"), Entry)
    assert isinstance(THREE[0], Entry)
    assert not isinstance(object(), Entry)


def test_zero_page_size_is_rejected() -> None:
    with pytest.raises(ValueError):
        MenuNavigator("Menu", "", THREE, page_size=0)


@pytest.mark.parametrize(
    "keys, expected",
    [
        (["0", "<Enter>"], (True, None)),
        (["1", "<Enter>"], (False, None)),
        (["0", "<Backspace>", "1", "<Enter>"], (False, None)),
        (["<Enter>", "0", "<Enter>"], (True, None)),
        (["2", "<Enter>", "<Backspace>", "0", "<Enter>"], (True, None)),
        (["<PageDown>", "0", "<Enter>"], (True, None)),
        (["<Escape>"], (False, BACK_REQUEST)),
        (["<C-d>"], (False, EXIT_REQUEST)),
        ([], (False, EXIT_REQUEST)),
    ],
)
def test_prompt_confirmation(keys, expected) -> None:
    assert prompt_confirmation("Continue?", press(*keys)) == expected


def test_confirmation_frame(recorder) -> None:
    prompt_confirmation("Continue?", press("<Enter>", "<Escape>"))
    assert recorder.last("Continue?").body == ("[0] Yes", "[1] No")
    assert recorder.last(INPUT_TITLE).footer == NOT_A_NUMBER
