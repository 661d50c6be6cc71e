"""Main menu and the small confirm and note prompts of the interactive screens."""

from __future__ import annotations

from dataclasses import dataclass, field

from giftbot.styles import (
    STYLE_DIM,
    STYLE_MENU_CURSOR,
    STYLE_MENU_DESC,
    STYLE_MENU_ITEM,
    STYLE_MENU_SELECTED,
)

MENU_RUN = "run"
MENU_RUN_DRY_RUN = "dry-run"
MENU_CHECK = "check"
MENU_ADD_ACCOUNT = "add-account"
MENU_BACKUP = "backup"
MENU_SERVICE_INSTALL = "install-service"
MENU_SERVICE_UNINSTALL = "uninstall-service"
MENU_VIEW_LOGS = "view-logs"
MENU_UPDATE = "update"
MENU_SETUP = "setup"
MENU_QUIT = "quit"


@dataclass(frozen=True)
class MenuItem:
    label: str
    desc: str
    key: str


@dataclass
class Menu:
    """A vertical list of actions with a cursor; ``chosen`` holds the picked key."""

    items: list[MenuItem] = field(default_factory=list)
    cursor: int = 0
    chosen: str = ""

    def handle_key(self, key: str) -> str:
        """Apply a key press and return the chosen action key, or ''."""
        if key in ("up", "w"):
            self.cursor = max(self.cursor - 1, 0) if self.cursor > 0 else self.cursor
        elif key in ("down", "s"):
            if self.cursor < len(self.items) - 1:
                self.cursor += 1
        elif key in ("home", "g"):
            self.cursor = 0
        elif key in ("end", "G"):
            self.cursor = len(self.items) - 1
        elif key == "enter":
            if 0 <= self.cursor < len(self.items):
                self.chosen = self.items[self.cursor].key
        elif key in ("q", "esc"):
            self.chosen = MENU_QUIT
        return self.chosen

    def render(self) -> str:
        rows = []
        for i, item in enumerate(self.items):
            if i == self.cursor:
                rows.append(
                    STYLE_MENU_CURSOR.render("▸ ")
                    + STYLE_MENU_SELECTED.render(item.label)
                    + "  "
                    + STYLE_MENU_DESC.render(item.desc)
                )
            else:
                rows.append("  " + STYLE_MENU_ITEM.render(item.label))
        return "".join(row + "\n" for row in rows)


def build_menu(
    service_installed: bool,
    service_active: bool,
    update_version: str | None = None,
) -> Menu:
    """The main menu for the current service and update state."""
    if service_active:
        items = [MenuItem("View service logs", "tail the background service log", MENU_VIEW_LOGS)]
    else:
        items = [
            MenuItem("Run bot", "start scanning and entering giveaways", MENU_RUN),
            MenuItem("Dry run", "scan without entering any giveaways", MENU_RUN_DRY_RUN),
        ]
    items += [
        MenuItem("Check accounts", "validate cookies and show points", MENU_CHECK),
        MenuItem("Add an account", "capture a new cookie interactively", MENU_ADD_ACCOUNT),
        MenuItem("Back up config", "create a backup archive", MENU_BACKUP),
    ]
    if service_installed:
        items.append(
            MenuItem("Uninstall service", "remove the background service", MENU_SERVICE_UNINSTALL)
        )
    else:
        items.append(
            MenuItem("Install service", "set up as a background service", MENU_SERVICE_INSTALL)
        )
    if update_version:
        items.append(
            MenuItem(f"Update to {update_version}", "download and apply the update", MENU_UPDATE)
        )
    items += [
        MenuItem("Setup wizard", "reconfigure from scratch", MENU_SETUP),
        MenuItem("Quit", "exit the application", MENU_QUIT),
    ]
    return Menu(items=items)


def _heading(title: str, description: str, *, blank_before_description: bool) -> list[str]:
    parts = ["\n"]
    if title:
        parts.append("  " + STYLE_MENU_SELECTED.render(title) + "\n")
    if blank_before_description:
        parts.append("\n")
    if description:
        parts.extend("  " + STYLE_DIM.render(line) + "\n" for line in description.split("\n"))
    if not blank_before_description:
        parts.append("\n")
    return parts


@dataclass
class ConfirmField:
    """A two-option prompt; ``value`` is True when the first option is picked."""

    title: str
    description: str = ""
    affirm: str = "Yes"
    deny: str = "No"
    cursor: int = 0
    done: bool = False
    value: bool = False
    cancelled: bool = False

    def handle_key(self, key: str) -> None:
        if key in ("up", "w", "left", "a"):
            self.cursor = 0
        elif key in ("down", "s", "right", "d"):
            self.cursor = 1
        elif key == "enter":
            self.done = True
            self.value = self.cursor == 0
        elif key in ("esc", "q"):
            self.cancelled = True

    def render(self) -> str:
        parts = _heading(self.title, self.description, blank_before_description=False)
        for i, option in enumerate((self.affirm, self.deny)):
            if i == self.cursor:
                parts.append("  " + STYLE_MENU_CURSOR.render("▸ ") + STYLE_MENU_SELECTED.render(option) + "\n")
            else:
                parts.append("    " + STYLE_MENU_ITEM.render(option) + "\n")
        return "".join(parts)


@dataclass
class NoteField:
    """An informational screen dismissed with enter or space."""

    title: str
    description: str = ""
    done: bool = False
    cancelled: bool = False

    def handle_key(self, key: str) -> None:
        if key in ("enter", " "):
            self.done = True
        elif key in ("esc", "q"):
            self.cancelled = True

    def render(self) -> str:
        return "".join(_heading(self.title, self.description, blank_before_description=True))