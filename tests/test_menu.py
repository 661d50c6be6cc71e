import re

from giftbot.menu import ConfirmField, Menu, MenuItem, NoteField, build_menu

ANSI = re.compile(r"\x1b\[[0-9;]*m")


def plain(text):
    return ANSI.sub("", text)


def keys(menu):
    return [item.key for item in menu.items]


def test_menu_idle_without_service():
    menu = build_menu(False, False, None)
    assert keys(menu) == [
        "run",
        "dry-run",
        "check",
        "add-account",
        "backup",
        "install-service",
        "setup",
        "quit",
    ]


def test_menu_with_active_service_and_update():
    menu = build_menu(True, True, "v2.0.0")
    assert keys(menu)[0] == "view-logs"
    assert "run" not in keys(menu)
    assert "uninstall-service" in keys(menu)
    update = next(item for item in menu.items if item.key == "update")
    assert update.label == "Update to v2.0.0"
    assert keys(menu)[-2:] == ["setup", "quit"]


def test_menu_navigation_and_choice():
    menu = build_menu(False, False)
    menu.handle_key("up")
    assert menu.cursor == 0
    menu.handle_key("down")
    assert menu.handle_key("enter") == "dry-run"


def test_menu_end_and_quit_keys():
    menu = build_menu(False, False)
    menu.handle_key("G")
    assert menu.cursor == len(menu.items) - 1
    menu.handle_key("down")
    assert menu.cursor == len(menu.items) - 1
    assert menu.handle_key("enter") == "quit"
    other = build_menu(False, False)
    assert other.handle_key("esc") == "quit"


def test_menu_render_marks_cursor():
    menu = build_menu(False, False)
    rows = plain(menu.render()).splitlines()
    assert len(rows) == len(menu.items)
    assert "▸" in rows[0] and "Run bot" in rows[0]
    assert "start scanning and entering giveaways" in rows[0]
    assert "▸" not in rows[1]


def test_empty_menu_enter_chooses_nothing():
    menu = Menu()
    assert menu.handle_key("enter") == ""


def test_confirm_field_choices():
    first = ConfirmField("Save config?", "", "Save", "Cancel")
    first.handle_key("enter")
    assert first.done and first.value is True

    second = ConfirmField("Save config?", "", "Save", "Cancel")
    second.handle_key("down")
    second.handle_key("enter")
    assert second.done and second.value is False

    third = ConfirmField("Save config?")
    third.handle_key("esc")
    assert third.cancelled and not third.done


def test_confirm_field_render():
    field = ConfirmField("Save config?", "line one\nline two", "Save", "Cancel")
    rows = plain(field.render()).splitlines()
    save_row = next(row for row in rows if "Save" in row and "config" not in row)
    cancel_row = next(row for row in rows if "Cancel" in row)
    assert "▸" in save_row
    assert "▸" not in cancel_row
    assert any("line two" in row for row in rows)


def test_note_field():
    note = NoteField("Global defaults", "first\nsecond")
    note.handle_key(" ")
    assert note.done
    other = NoteField("Global defaults")
    other.handle_key("q")
    assert other.cancelled and not other.done
    text = plain(NoteField("Title", "first\nsecond").render())
    assert "Title" in text and "second" in text


def test_menu_item_fields():
    item = MenuItem("Quit", "exit the application", "quit")
    menu = Menu(items=[item])
    assert menu.handle_key("enter") == "quit"