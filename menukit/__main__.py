"""
Demo: pick a boot entry, confirm it, add kernel parameters, review the
resulting command line.

    python -m menukit [--page-size N] [--log-file PATH] [--log-level LEVEL]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from .ansi import clear_screen, show_cursor
from .editor import always_valid, process_input
from .events import EventSource, EventStream, as_event_stream
from .input import RawInput
from .menu import MenuEntry, prompt_confirmation, prompt_menu_entry
from .render import Renderer, default_region
from .signals import BACK_REQUEST, EXIT_REQUEST
from .viewer import display_result

logger = logging.getLogger("menukit")

BOOT_ENTRIES = [
    MenuEntry("openSUSE Leap 15.2 KDE Live", default=True, value=(
        "splash=silent quiet root=live:CDLABEL=openSUSE_Leap_15.2_KDE_Live "
        "rd.live.image rd.live.overlay.persistent rd.live.overlay.cowfs=ext4"
    )),
    MenuEntry("openSUSE Leap 15.2 KDE Live (safe graphics)", value=(
        "splash=silent root=live:CDLABEL=openSUSE_Leap_15.2_KDE_Live rd.live.image nomodeset"
    )),
    MenuEntry("Ubuntu 20.04 Desktop", value="boot=casper quiet splash"),
    MenuEntry("Ubuntu 20.04 Desktop (safe graphics)", value="boot=casper nomodeset quiet splash"),
    MenuEntry("Fedora Workstation Live 33", value="root=live:CDLABEL=Fedora-WS-Live-33 rd.live.image quiet"),
    MenuEntry("Debian 10 Live", value="boot=live components quiet splash"),
    MenuEntry("Arch Linux", value="archisobasedir=arch archisolabel=ARCH_202010"),
    MenuEntry("Memory test", value="memtest86+"),
    MenuEntry("Boot from first hard disk", value="chain.c32 hd0"),
    MenuEntry("Rescue system", value="rescue=1 splash=silent"),
    MenuEntry("Firmware setup", value="fwsetup"),
    MenuEntry("Power off", value="poweroff"),
]


def run(events: EventSource, *, page_size: Optional[int] = None, renderer: Optional[Renderer] = None) -> int:
    """Walk through the boot prompts. Returns the process exit status."""
    stream = as_event_stream(events)
    while True:
        clear_screen()
        entry, signal = prompt_menu_entry(
            "Boot menu",
            "Select an entry by number and press Enter.\nEsc leaves, Ctrl-D aborts.",
            BOOT_ENTRIES,
            stream,
            page_size=page_size,
            renderer=renderer,
        )
        if signal is not None:
            return 1 if signal is EXIT_REQUEST else 0

        clear_screen()
        accept, signal = prompt_confirmation(f"Boot {entry.label()}?", stream, renderer=renderer)
        if signal is EXIT_REQUEST:
            return 1
        if signal is BACK_REQUEST or not accept:
            continue

        clear_screen()
        extra, _, signal = process_input(
            "Additional kernel parameters (optional)",
            default_region(1),
            always_valid,
            stream,
            renderer=renderer,
        )
        if signal is EXIT_REQUEST:
            return 1
        if signal is BACK_REQUEST:
            continue

        params: List[str] = str(entry.value).split() + extra.split()
        logger.info("boot entry %r with %d parameters", entry.label(), len(params))

        clear_screen()
        _, signal = display_result(params, stream, title=f"{entry.label()} - kernel command line", renderer=renderer)
        return 1 if signal is EXIT_REQUEST else 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="menukit", description="Boot menu prompt demo")
    parser.add_argument("--page-size", type=int, default=None, help="entries per menu page")
    parser.add_argument("--log-file", default=None, help="write debug logging to this file")
    parser.add_argument("--log-level", default="DEBUG", help="logging level for --log-file")
    args = parser.parse_args(argv)

    if args.page_size is not None and args.page_size <= 0:
        parser.error("--page-size must be positive")

    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=getattr(logging, str(args.log_level).upper(), logging.DEBUG),
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    if not sys.stdin.isatty():
        parser.error("an interactive terminal is required")

    with RawInput() as inp:
        try:
            return run(EventStream(inp.events()), page_size=args.page_size)
        finally:
            clear_screen()
            show_cursor()


if __name__ == "__main__":
    sys.exit(main())
