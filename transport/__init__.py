"""Outbound transports: Telegram Bot API and the resume backend."""
