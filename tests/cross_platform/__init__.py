"""Browser, viewport, network and performance scenarios."""
