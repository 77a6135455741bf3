"""
Line edit that only accepts decimal numbers.

Typing and pasting are filtered by `NumericValidator`; the comma, period
and keypad-decimal keys all insert the configured decimal separator (once).
"""
from __future__ import annotations

import math

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeyEvent, QValidator
from PySide6.QtWidgets import QLineEdit, QWidget

from concavehull.model.numeric import format_decimal, is_valid_numeric_input, parse_decimal

_INTERMEDIATE = ("", "-")


class NumericValidator(QValidator):
    def __init__(self, allow_negative: bool = True, decimal_separator: str = ".", parent=None) -> None:
        super().__init__(parent)
        self.allow_negative = allow_negative
        self.decimal_separator = decimal_separator

    def validate(self, text: str, pos: int):
        if not is_valid_numeric_input(text, self.allow_negative, self.decimal_separator):
            return QValidator.State.Invalid, text, pos
        if text in _INTERMEDIATE or text in (self.decimal_separator, "-" + self.decimal_separator):
            return QValidator.State.Intermediate, text, pos
        return QValidator.State.Acceptable, text, pos


class NumericLineEdit(QLineEdit):
    """QLineEdit with numeric masking."""

    _SEPARATOR_KEYS = (Qt.Key.Key_Comma, Qt.Key.Key_Period)

    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        allow_negative: bool = True,
        decimal_separator: str = ".",
    ) -> None:
        super().__init__(parent)
        self._validator = NumericValidator(allow_negative, decimal_separator, self)
        self.setValidator(self._validator)

    @property
    def decimal_separator(self) -> str:
        return self._validator.decimal_separator

    def set_decimal_separator(self, separator: str) -> None:
        """Switch the separator, converting the current text."""
        old = self._validator.decimal_separator
        if separator == old:
            return
        text = self.text().replace(old, separator)
        self._validator.decimal_separator = separator
        self.setText(text)

    def value(self) -> float:
        """Current value, NaN when the field does not hold a complete number."""
        try:
            return parse_decimal(self.text(), self.decimal_separator)
        except ValueError:
            return math.nan

    def set_value(self, value: float) -> None:
        if value is None or math.isnan(value):
            self.clear()
        else:
            self.setText(format_decimal(value, self.decimal_separator))

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if event.key() in self._SEPARATOR_KEYS:
            self._insert_separator()
            event.accept()
            return
        if event.key() == Qt.Key.Key_Minus and not self._minus_allowed():
            event.accept()
            return
        super().keyPressEvent(event)

    def _minus_allowed(self) -> bool:
        if not self._validator.allow_negative:
            return False
        start = self.selectionStart() if self.hasSelectedText() else self.cursorPosition()
        if start != 0:
            return False
        remaining = self.text()
        if self.hasSelectedText():
            remaining = remaining[:start] + remaining[start + len(self.selectedText()):]
        return not remaining.startswith("-")

    def _insert_separator(self) -> None:
        sep = self.decimal_separator
        text = self.text()
        if self.hasSelectedText():
            start = self.selectionStart()
            text = text[:start] + text[start + len(self.selectedText()):]
        else:
            start = self.cursorPosition()

        if sep in text:
            return

        self.setText(text[:start] + sep + text[start:])
        self.setCursorPosition(start + len(sep))
