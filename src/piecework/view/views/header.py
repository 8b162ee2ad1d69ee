# SPDX-License-Identifier: MIT

from typing import Optional

from rich import print
from rich.padding import Padding

from piecework.view.state import get_show_header


def header(sub_header: Optional[str] = None, user_name: Optional[str] = None) -> None:
    """Print the application header.

    Args:
        sub_header: Optional sub-header text to display
        user_name: Greets the user by name when set
    """
    if not get_show_header():
        return

    print(Padding("[dark_orange]piecework[/dark_orange]", (1, 0, 0, 1)))
    if user_name:
        print(Padding(f"[plum1]hello, {user_name}[/plum1]", (0, 1)))
    if sub_header is not None:
        print(Padding(f"[sandy_brown]{sub_header}[/sandy_brown]", (0, 1)))
