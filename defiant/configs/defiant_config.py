"""
Configuration for the Defiant game session, the headless environment and the window
"""

# Session parameters (keyword arguments of GameSession)
SESSION_CONFIG = {
    "world_size": 6000,
    "asteroid_count": 30,
    "respawn_delay": 3.0,  # seconds of real time
    "wave_interval": 300,  # idle ticks between waves
}

# Headless environment parameters (keyword arguments of DefiantEnv)
ENV_CONFIG = {
    "dt": 1 / 60,  # simulated seconds per step, drives the respawn clock
    "max_steps": 36000,  # 10 minutes at 60 FPS
    "k_enemies": 5,
}

# Window parameters (keyword arguments of DefiantWindow)
WINDOW_CONFIG = {
    "width": 1280,
    "height": 720,
    "title": "Star Trek: Deep Space Nine - USS Defiant",
    "update_rate": 1 / 60,
    "star_count": 600,
    "nebula_count": 8,
}
