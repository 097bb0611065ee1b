"""API layer: HTTP routes, WebSocket channel and command handling."""
