"""
COMMANDS - Write operations (CQRS)

Commands change state. Each command has:
- Command class: Parameters for the write
- Handler class: Executes the write

Subfolders:
- users/         → register (email, phone), update, delete
- conversations/ → initiate, join, remove
- messages/      → post_message
"""
