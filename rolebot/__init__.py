"""Discord bot for self-assigned roles in a guild's role channel."""
