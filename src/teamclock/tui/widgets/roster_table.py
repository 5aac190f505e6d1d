"""Roster table widget."""

from collections.abc import Sequence
from typing import Any

from textual.coordinate import Coordinate
from textual.widgets import DataTable

from teamclock.tui.presentation import Column, Row

# Session navigation keys mapped to DataTable actions
NAVIGATION_ACTIONS = {
    "up": "cursor_up",
    "down": "cursor_down",
    "pageup": "page_up",
    "pagedown": "page_down",
    "home": "scroll_top",
    "end": "scroll_bottom",
}


class RosterTable(DataTable[str]):
    """Row-cursor table of coworkers.

    The table never takes focus: keys reach it only as navigation effects
    from the session, so search keystrokes cannot move the cursor.
    """

    can_focus = False

    DEFAULT_CSS = """
    RosterTable {
        height: auto;
        border: solid $surface-lighten-2;
    }
    """

    def __init__(self, columns: Sequence[Column], **kwargs: Any) -> None:
        super().__init__(cursor_type="row", **kwargs)
        self._column_specs = tuple(columns)
        self._displayed_rows: tuple[Row, ...] = ()

    def on_mount(self) -> None:
        self._ensure_columns()

    def _ensure_columns(self) -> None:
        if not self.columns:
            for column in self._column_specs:
                self.add_column(column.title, width=column.width)

    def show_rows(self, rows: Sequence[Row]) -> None:
        """Display rows, keeping the cursor when the roster is unchanged.

        Rows for the same people in the same order are updated cell by cell;
        any other change rebuilds the table.
        """
        self._ensure_columns()
        new_rows = tuple(rows)
        if new_rows == self._displayed_rows:
            return

        if self._same_people(new_rows):
            for row_index, (old, new) in enumerate(zip(self._displayed_rows, new_rows)):
                for column_index, (old_cell, new_cell) in enumerate(zip(old, new)):
                    if old_cell != new_cell:
                        self.update_cell_at(
                            Coordinate(row_index, column_index), new_cell
                        )
        else:
            cursor_row = self.cursor_row
            self.clear()
            for row in new_rows:
                self.add_row(*row)
            if new_rows:
                self.move_cursor(row=min(cursor_row, len(new_rows) - 1))
        self._displayed_rows = new_rows

    def _same_people(self, rows: tuple[Row, ...]) -> bool:
        """Check rows name the same handles in the same order as shown."""
        if len(rows) != len(self._displayed_rows):
            return False
        return all(old[:3] == new[:3] for old, new in zip(self._displayed_rows, rows))

    def navigate(self, key: str) -> None:
        """Move the cursor for a navigation key."""
        action = NAVIGATION_ACTIONS.get(key)
        if action is not None:
            getattr(self, f"action_{action}")()

    @property
    def shown_rows(self) -> tuple[Row, ...]:
        """Rows currently displayed."""
        return self._displayed_rows
