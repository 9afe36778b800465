"""Default parameters for the viewer and runners."""
