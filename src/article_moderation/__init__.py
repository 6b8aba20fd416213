"""Article moderation: lifecycle orchestration across summary, content and remote services."""
