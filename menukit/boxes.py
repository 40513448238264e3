"""
Box drawing helpers.
"""

from dataclasses import dataclass
from typing import Dict, List

from .utils import pad_string, truncate_string


@dataclass(frozen=True)
class BoxStyle:
    tl: str
    tr: str
    bl: str
    br: str
    h: str
    v: str


_BOX_STYLES: Dict[str, BoxStyle] = {
    "ascii": BoxStyle(tl="+", tr="+", bl="+", br="+", h="-", v="|"),
    "single": BoxStyle(tl="┌", tr="┐", bl="└", br="┘", h="─", v="│"),
    "double": BoxStyle(tl="╔", tr="╗", bl="╚", br="╝", h="═", v="║"),
}


def get_box_style(name: str) -> BoxStyle:
    return _BOX_STYLES.get(name, _BOX_STYLES["single"])


def box_lines(width: int, rows: List[str], style: str = "single", title: str = "") -> List[str]:
    """Frame plain-text rows in a box, title set into the top border.

    Rows are cut or padded to the inner width. Returns [] when the box would
    be narrower than its borders.
    """
    if width < 2:
        return []

    st = get_box_style(style)
    inner = width - 2

    top = st.h * inner
    if title and inner > 2:
        label = " " + truncate_string(title, inner - 2, ellipsis="") + " "
        top = label + top[len(label):]

    lines = [st.tl + top + st.tr]
    for row in rows:
        lines.append(st.v + pad_string(truncate_string(row, inner, ellipsis=""), inner) + st.v)
    lines.append(st.bl + (st.h * inner) + st.br)
    return lines
