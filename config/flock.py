"""Configuration for the terrain flocking simulation."""

WINDOW = {
    "width": 1280,
    "height": 720,
    "title": "Terrain Flock"
}

CAMERA = {
    "fov": 60.0,
    "near_clip": 0.1,
    "far_clip": 2000.0,
    "initial_position": (-60.0, 60.0, 120.0),
    "min_radius": 20.0,    # Orbit distance limits
    "max_radius": 400.0,
    "min_phi": -89.0,
    "max_phi": 89.0,
    "keyboard_rotate_speed": 60.0,
    "keyboard_zoom_speed": 80.0,
    "mouse_sensitivity": 0.3,
    "damping": 8.0
}

CHASE_CAMERA = {
    "fov": 70.0,
    "follow_distance": 12.0,   # Behind the bird along its heading
    "follow_height": 4.0,
    "look_ahead": 8.0,
    "smoothing": 5.0           # Exponential approach rate (per second)
}

TERRAIN = {
    "size_factor": 2.2,        # Mesh side = world_size * size_factor
    "segments": 240,
    "color": (0.18, 0.36, 0.25)
}

WATER = {
    "center": (40.0, 0.1, -20.0),
    "radius": 90.0,
    "segments": 64,
    "color": (0.35, 0.71, 0.9),
    "base_opacity": 0.8,
    "ripple_opacity": 0.04,
    "ripple_speed": 2.0,
    "sway_angle": 0.08,
    "sway_speed": 0.2,
    "ripples": True            # Animate opacity and sway
}

SKY = {
    "radius": 1200.0,
    "slices": 32,
    "stacks": 16,
    "top_color": (0.063, 0.157, 0.267),
    "bottom_color": (0.043, 0.09, 0.157)
}

SUN = {
    "position": (-90.0, 160.0, 50.0),
    "diffuse": (0.95, 0.96, 1.0, 1.0),
    "ambient": (0.45, 0.5, 0.58, 1.0)   # Stand-in for the hemisphere fill light
}

DECORATIONS = {
    "pond_center": (40.0, -20.0),       # x, z
    "rocks": {
        "count": 40,
        "spread": 180.0,
        "radius": 2.8,
        "scale": (0.6, 1.6),
        "sink": 0.5,
        "color": (0.61, 0.65, 0.71)
    },
    "trees": {
        "attempts": 160,                # Attempts inside the pond clearing are skipped
        "pond_clearance": 50.0,
        "scale": (0.8, 1.4),
        "trunk": (0.4, 0.8, 6.0),       # top radius, bottom radius, height
        "leaves": (3.0, 9.0, 8.5),      # radius, height, centre height
        "trunk_color": (0.55, 0.35, 0.17),
        "leaf_color": (0.18, 0.56, 0.36)
    },
    "grass": {
        "count": 1800,
        "pond_clearance": 60.0,
        "lift": 0.1,
        "scale": (0.6, 1.4),
        "blade": (0.4, 3.0),            # width, height
        "color": (0.35, 0.75, 0.43)
    }
}

FLOCK = {
    "population": 120,
    "max_speed": 38.0,
    "perception_radius": 32.0,
    "separation_radius": 10.0,
    "align_strength": 0.14,
    "cohesion_strength": 0.09,
    "separation_strength": 0.4,
    "terrain_avoid": 22.0,
    "sky_lift": 0.6,
    "world_size": 260.0,
    "wind_strength": 1.2,
}

# Live-tuning ranges: (min, max, step). Parameters missing here are fixed.
TUNING = {
    "population": (50, 240, 1),
    "max_speed": (10.0, 70.0, 1.0),
    "perception_radius": (10.0, 80.0, 1.0),
    "separation_radius": (4.0, 30.0, 1.0),
    "align_strength": (0.05, 0.4, 0.01),
    "cohesion_strength": (0.02, 0.2, 0.01),
    "separation_strength": (0.1, 1.0, 0.05),
    "wind_strength": (0.0, 3.0, 0.05),
}

SPAWN = {
    "position_min": (-50.0, 16.0, -50.0),
    "position_max": (50.0, 64.0, 50.0),
    "velocity_min": (-8.0, -2.0, -8.0),
    "velocity_max": (8.0, 2.0, 8.0),
}

PHYSICS = {
    "terrain_clearance": 6.0,       # Desired height above ground
    "terrain_scale": 0.02,
    "wind_time_freq_x": 0.1,
    "wind_time_freq_z": 0.12,
    "wind_spatial_freq": 0.01,
    "wind_damping": 0.02,
    "frame_rate": 60.0,             # Coefficients are tuned against this baseline
    "vertical_fraction": 0.6,
    "altitude_floor": 10.0,
    "separation_epsilon": 0.001,
    "velocity_epsilon": 1e-6,
    "max_frame_dt": 0.05,
}

BIRDS = {
    "hue_base": 0.55,
    "hue_spread": 0.08,
    "hue_step": 0.31,
    "saturation": 0.55,
    "lightness_min": 0.65,
    "lightness_jitter": 0.1,
}

COLORS = {
    "background": (0.04, 0.08, 0.13, 1.0),
    "fog": (0.05, 0.106, 0.165, 1.0),
    "fog_density": 0.0022,
    "text": (0.9, 0.9, 0.9)
}
