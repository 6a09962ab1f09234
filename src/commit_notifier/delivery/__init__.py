"""Notification delivery backends."""

from .telegram import DeliveryError, TelegramNotifier

__all__ = ["DeliveryError", "TelegramNotifier"]
