"""Infrastructure layer: protocol codec, serial transport, clock and output."""
