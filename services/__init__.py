"""
services/ - Business Logic Layer
================================
Services enforce business rules and coordinate repositories.
They know nothing about Telegram; handlers call them and render the results.
"""
