"""Server side of dingo: request pipeline, error recovery, ASGI I/O,
listener acquisition and the external server runner."""
