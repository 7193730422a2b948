"""Grid-based stable fluids simulator that renders every frame to an image."""
