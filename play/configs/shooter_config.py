"""
Configuration for the cheese shooter
Game tuning, window, leaderboard and headless simulation settings
"""

# Session parameters (fed to GameSession(**SESSION_CONFIG))
SESSION_CONFIG = {
    "lives": 5,
    "initial_sprites": 4,
    "countdown_from": 3,
    "countdown_tick": 1000.0,      # ms per countdown tick
    "fire_cooldown": 500.0,        # ms between shots
    "player_speed": 100.0,         # px per frame while an arrow is held
    "bullet_speed": 10.0,          # px per frame, upward
    "projectile_speed": 7.0,       # px per frame, downward
    "initial_drop_interval": 2000.0,
    "drop_scaling_factor": 0.8,    # drop interval multiplier per score band
    "difficulty_band": 5,          # score points per band
    "end_delay": 500.0,            # ms from final explosion to GAME OVER
    "game_over_fade": 0.02,        # GAME OVER opacity per frame
    "leaderboard_delay": 1000.0,   # ms from GAME OVER to leaderboard
}

# ==============================================================================
# WINDOW
# ==============================================================================

WINDOW_CONFIG = {
    "width": 1280,
    "height": 800,
    "title": "$PARM",
    "assets_dir": None,            # directory with fonts/images/sounds, optional
    "update_rate": 1 / 60,
    "music_volume": 0.6,           # background loop, paused by F1
}

# ==============================================================================
# LEADERBOARD
# ==============================================================================

LEADERBOARD_CONFIG = {
    "path": "./highscores.json",
    "limit": 10,
    "submit_url": "https://parmbot-29ed122e8ba4.herokuapp.com/submit_score/",
    "submit_timeout": 10.0,        # seconds
}

# ==============================================================================
# HEADLESS SIMULATION
# ==============================================================================

SIMULATION_CONFIG = {
    "width": 1280,
    "height": 800,
    "frame_ms": 1000 / 60,
    "max_steps": 3600,             # 60 seconds at 60 FPS
    "k_sprites": 4,
    "k_projectiles": 5,
    "life_penalty": 1.0,
}

EXPERIMENT_CONFIG = {
    "seeds": [42, 123, 456],
    "n_episodes": 10,
}
