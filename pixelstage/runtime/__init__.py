"""Engine runtime: clock, schedulers, frame loop and engine context."""
