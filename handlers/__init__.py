"""
handlers/ - Presentation Layer
================================
Telegram bot handlers. Each handler parses the command, delegates to
UserService, and sends the response back to the chat.
No business logic lives here.
"""
