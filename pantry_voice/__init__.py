"""pantry-voice - voice command interpreter for a household food inventory."""
