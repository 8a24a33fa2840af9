"""HTTP and WebSocket front end for game sessions."""
