# src/taskpad/client/render.py

from __future__ import annotations

from dataclasses import dataclass

from .state import ClientState, TaskFilter, Theme

BAR_WIDTH = 24


@dataclass(frozen=True, slots=True)
class Palette:
    text: str
    accent: str
    muted: str
    danger: str
    reset: str = "\033[0m"


PALETTES: dict[Theme, Palette] = {
    Theme.LIGHT: Palette(text="\033[30m", accent="\033[32m", muted="\033[90m", danger="\033[31m"),
    Theme.DARK: Palette(text="\033[97m", accent="\033[92m", muted="\033[37m", danger="\033[91m"),
}

_PLAIN = Palette(text="", accent="", muted="", danger="", reset="")


def _progress_bar(ratio: float, width: int = BAR_WIDTH) -> str:
    filled = round(max(0.0, min(1.0, ratio)) * width)
    return "█" * filled + "░" * (width - filled)


def render_board(state: ClientState, *, color: bool = True) -> str:
    """
    Render the whole board as text.

    Numbers in front of tasks are 1-based positions in the filtered list;
    the console commands accept them in place of ids.
    """
    p = PALETTES[state.theme] if color else _PLAIN
    lines: list[str] = []

    # The icon shows what the theme switch would change to.
    switch_icon = "🌙" if state.theme is Theme.LIGHT else "☀️"
    lines.append(f"{p.text}✨ Task Manager{p.reset}   {switch_icon}")

    total = len(state.tasks)
    done = state.completed_count
    lines.append(f"{p.accent}{_progress_bar(state.progress)}{p.reset}")
    lines.append(f"{p.muted}{done} / {total} completed{p.reset}")

    filters = []
    for f in TaskFilter:
        label = f.value.upper()
        filters.append(f"{p.accent}[{label}]{p.reset}" if f is state.filter else f" {label} ")
    lines.append("  ".join(filters))

    if state.notice:
        lines.append(f"{p.danger}! {state.notice}{p.reset}")

    visible = state.filtered_tasks
    if not visible:
        lines.append("📭")
        lines.append(f"{p.text}No tasks found{p.reset}")
        lines.append(f"{p.muted}Stay productive ✨{p.reset}")
        return "\n".join(lines)

    for i, t in enumerate(visible, start=1):
        if t.completed:
            check = f"{p.accent}(✓){p.reset}"
            text = f"{p.muted}{t.text}{p.reset}"
            delete_hint = f"  {p.danger}🗑{p.reset}"
        else:
            check = "( )"
            text = f"{p.text}{t.text}{p.reset}"
            delete_hint = ""
        lines.append(f"{i:>3}. {check} {text}{delete_hint}")

    return "\n".join(lines)
