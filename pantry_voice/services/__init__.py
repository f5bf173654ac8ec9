from pantry_voice.services import (
    command_builder,
    interpreter,
    inventory_client,
    inventory_stats,
    query_engine,
    reminder_service,
    session_controller,
)


__all__ = [
    "command_builder",
    "interpreter",
    "inventory_client",
    "inventory_stats",
    "query_engine",
    "reminder_service",
    "session_controller",
]
