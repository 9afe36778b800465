"""Command-line runners: headless simulation and step benchmark."""
