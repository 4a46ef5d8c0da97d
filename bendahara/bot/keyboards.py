"""Keyboard factory helpers."""

from typing import Optional, Union

from telegram import KeyboardButton, ReplyKeyboardMarkup, ReplyKeyboardRemove

from ..constants import MENU_ROWS
from .router import KEYBOARD_MENU, KEYBOARD_REMOVE


class KeyboardFactory:
    """Builds reply keyboards."""

    @staticmethod
    def menu_keyboard() -> ReplyKeyboardMarkup:
        keyboard = [[KeyboardButton(label) for label in row] for row in MENU_ROWS]
        return ReplyKeyboardMarkup(keyboard, resize_keyboard=True, is_persistent=True)

    @staticmethod
    def remove_keyboard() -> ReplyKeyboardRemove:
        return ReplyKeyboardRemove()

    def for_hint(self, hint: Optional[str]) -> Optional[Union[ReplyKeyboardMarkup, ReplyKeyboardRemove]]:
        if hint == KEYBOARD_MENU:
            return self.menu_keyboard()
        if hint == KEYBOARD_REMOVE:
            return self.remove_keyboard()
        return None


__all__ = ["KeyboardFactory"]
