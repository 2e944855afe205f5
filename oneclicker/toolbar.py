"""The machine toolbar: buy buttons that unlock with the balance, plus a delete tool."""

from dataclasses import dataclass
from typing import Optional

from .machines import Machine

LOCKED_LABEL = "???"
LOCKED_ICON = "locked.png"
DELETE_LABEL = "Delete"
DELETE_ICON = "delete.png"
SELECTED_OFFSET = 12.0
RESTING_OFFSET = 0.0


@dataclass
class ToolbarButton:
    """One toolbar entry; `machine` is None for the delete tool."""

    machine: Optional[Machine]
    cost_text: str
    enabled: bool = False
    selected: bool = False
    label: str = LOCKED_LABEL
    icon: str = LOCKED_ICON
    offset_target: float = RESTING_OFFSET

    @property
    def is_delete(self):
        return self.machine is None


class Toolbar:
    """The bottom panel of buttons and the balance display above the field."""

    def __init__(self):
        self.buttons = [
            ToolbarButton(machine, cost_text=str(machine.cost())) for machine in Machine.list()
        ]
        self.buttons.append(
            ToolbarButton(
                None,
                cost_text=" ",
                enabled=True,
                label=DELETE_LABEL,
                icon=DELETE_ICON,
            )
        )
        self.money_text = "0"
        self._last_coins = None

    @property
    def selected(self):
        """Index of the selected button, or None when nothing is selected."""
        return next((index for index, button in enumerate(self.buttons) if button.selected), None)

    def update_balance(self, coins):
        """Refresh the display and unlock affordable machines; False if the balance is unchanged."""
        if coins == self._last_coins:
            return False
        self._last_coins = coins
        self.money_text = str(coins)

        for button in self.buttons:
            machine = button.machine
            if machine is None:
                continue
            affordable = coins >= machine.cost()
            if affordable:
                button.label = machine.name()
            button.icon = machine.image_name() if affordable else LOCKED_ICON
            button.enabled = affordable
        return True

    def select(self, index):
        """Click a button; return the selection changes it causes (index, None, or nothing)."""
        if not 0 <= index < len(self.buttons):
            raise IndexError(f"no toolbar button at index {index}")
        button = self.buttons[index]
        if not button.enabled:
            return []
        return [None] if button.selected else [index]

    def apply_selection(self, selected):
        """Mark the given button (or none) as selected and raise it above the others."""
        for index, button in enumerate(self.buttons):
            button.selected = selected is not None and index == selected
            button.offset_target = SELECTED_OFFSET if button.selected else RESTING_OFFSET