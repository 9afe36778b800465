"""Configuration for the 2D toroidal boids viewer and runners."""

WINDOW = {
    "width": 1200,
    "height": 900,
    "title": "Toroidal Boids"
}

CAMERA = {
    "min_zoom": 0.25,
    "max_zoom": 20.0,
    "keyboard_pan_speed": 0.6,    # Fraction of the visible width per second
    "keyboard_zoom_speed": 1.5,   # Zoom factor per second
    "wheel_zoom_step": 1.15,
    "zoom_smoothing": 8.0
}

GRID = {
    "border_color": (0.35, 0.35, 0.45),
    "cell_color": (0.12, 0.12, 0.16),
    "show_cells": False
}

# SimConfig fields; anything omitted keeps its default
SIMULATION = {
    "width": 5000.0,
    "height": 5000.0,
    "n_agents": 10000,
    "speed": 200.0,
    "perception": 80.0,
    "separation_dist": 20.0,
    "w_sep": 80.0,
    "w_align": 110.0,
    "w_coh": 10.0,
    "fov_deg": 80.0,
    "max_force": 1000.0,
    "dt": 0.02,
}

RUN = {
    "seed": None,
    "workers": None,              # None = all numba threads
    "max_ticks_per_frame": 4,     # Drop simulated time rather than spiral on slow frames
}

RENDER = {
    "size": 12.0,                 # Triangle length in world units
    "width_ratio": 0.45,
    "color": (0.3, 0.9, 1.0),
}

COLORS = {
    "background": (0.0, 0.0, 0.0, 1.0),
    "text": (230, 230, 230)
}
