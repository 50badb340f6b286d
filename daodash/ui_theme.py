"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (tabs/panels/chrome). The pygments style used
for raw JSON output remains a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers and views."""

    name: str
    reset: str
    app_name: str
    active_tab: str
    inactive_tab: str
    tab_separator: str
    separator: str
    status_bar: str
    border: str
    panel_title: str
    section_header: str
    label: str
    cursor: str
    selected: str
    status_approved: str
    status_voting: str
    status_draft: str
    status_rejected: str
    bool_true: str
    bool_false: str
    bar_filled: str
    bar_empty: str

    def paint(self, style: str, text: str) -> str:
        """Wrap ``text`` in ``style`` unless the style is empty."""
        if not style or not text:
            return text
        return f"{style}{text}{self.reset}"


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    app_name="\033[1;38;2;243;95;242m",
    active_tab="\033[1;97;48;2;148;57;230m",
    inactive_tab="\033[2m",
    tab_separator="\033[2m",
    separator="\033[2m",
    status_bar="\033[7m",
    border="\033[2m",
    panel_title="\033[1;38;2;148;57;230m",
    section_header="\033[1;38;2;148;57;230m",
    label="\033[2m",
    cursor="\033[38;2;243;95;242m",
    selected="\033[1m",
    status_approved="\033[38;2;68;248;189m",
    status_voting="\033[38;2;0;240;255m",
    status_draft="\033[38;2;245;196;52m",
    status_rejected="\033[31m",
    bool_true="\033[38;2;68;248;189m",
    bool_false="\033[2m",
    bar_filled="\033[38;2;0;240;255m",
    bar_empty="\033[2m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    app_name="\033[1;38;5;45m",
    active_tab="\033[1;97;48;5;24m",
    inactive_tab="\033[2;38;5;110m",
    tab_separator="\033[2;38;5;31m",
    separator="\033[2;38;5;31m",
    status_bar="\033[7m",
    border="\033[2;38;5;31m",
    panel_title="\033[1;38;5;45m",
    section_header="\033[1;38;5;45m",
    label="\033[2;38;5;110m",
    cursor="\033[38;5;39m",
    selected="\033[1m",
    status_approved="\033[38;5;84m",
    status_voting="\033[38;5;117m",
    status_draft="\033[38;5;215m",
    status_rejected="\033[38;5;203m",
    bool_true="\033[38;5;84m",
    bool_false="\033[2;38;5;110m",
    bar_filled="\033[38;5;45m",
    bar_empty="\033[2;38;5;24m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    app_name="",
    active_tab="",
    inactive_tab="",
    tab_separator="",
    separator="",
    status_bar="",
    border="",
    panel_title="",
    section_header="",
    label="",
    cursor="",
    selected="",
    status_approved="",
    status_voting="",
    status_draft="",
    status_rejected="",
    bool_true="",
    bool_false="",
    bar_filled="",
    bar_empty="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
