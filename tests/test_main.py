from __future__ import annotations

import pytest

from menukit.__main__ import BOOT_ENTRIES, main, run

from tests.helpers import press


@pytest.fixture(autouse=True)
def quiet_terminal(devnull_output):
    yield


def test_boot_walkthrough(recorder) -> None:
    keys = ["0", "<Enter>", "0", "<Enter>", "n", "o", "<Enter>", "<End>", "<Escape>"]
    assert run(press(*keys)) == 0
    title = f"{BOOT_ENTRIES[0].label()} - kernel command line"
    frame = recorder.last(title)
    assert frame is not None
    assert frame.body[-1] == "no"
    assert frame.body[0] == "splash=silent"


def test_escape_at_menu() -> None:
    assert run(press("<Escape>")) == 0


def test_interrupt_at_menu() -> None:
    assert run(press("<C-d>")) == 1


def test_declining_returns_to_menu(recorder) -> None:
    keys = ["0", "<Enter>", "1", "<Enter>", "<Escape>"]
    assert run(press(*keys)) == 0
    assert [f.title for f in recorder.frames].count("Boot menu") == 2


def test_back_from_parameters_returns_to_menu(recorder) -> None:
    keys = ["2", "<Enter>", "0", "<Enter>", "<Escape>", "<C-d>"]
    assert run(press(*keys)) == 1
    assert [f.title for f in recorder.frames].count("Boot menu") == 2


def test_interrupt_in_viewer() -> None:
    assert run(press("0", "<Enter>", "0", "<Enter>", "<Enter>", "<C-d>")) == 1


def test_page_size_option(recorder) -> None:
    assert run(press("<End>", "<Escape>"), page_size=5) == 0
    assert recorder.last("Boot menu").body[3] == f"[0] {BOOT_ENTRIES[10].label()}"


def test_main_rejects_bad_page_size() -> None:
    with pytest.raises(SystemExit):
        main(["--page-size", "0"])
