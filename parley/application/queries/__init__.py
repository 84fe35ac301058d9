"""
QUERIES - Read operations (CQRS)

Queries retrieve data without modifying state. Each query has:
- Query class: Parameters for the read
- Handler class: Executes the read

Subfolders:
- users/         → get_user, lookup_user (email, phone), validate_user_ids
- conversations/ → existing_conversation_id, get_conversation_ids,
                   get_conversation_users, get_conversation, get_conversation_history
"""
