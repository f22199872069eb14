"""Schema documents and validators for brickwork payloads."""
