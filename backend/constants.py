# backend/constants.py
"""Application constants - single source of truth for configuration values."""

# Draw modes
MODE_RANDOM = "random"
MODE_BY_SKILL = "by-skill"
DRAW_MODES = [MODE_RANDOM, MODE_BY_SKILL]

# Skill balancing is hidden from the admin screen, so plain shuffling is the default
DEFAULT_DRAW_MODE = MODE_RANDOM

# Team format presets shown on the draw screen
# "<n>teams-<size>vs<size>": n teams with <size> players each
TEAM_FORMATS = {
    "2teams-3vs3": {"name": "2 Teams (3x3)", "number_of_teams": 2, "max_players_per_team": 3},
    "2teams-4vs4": {"name": "2 Teams (4x4)", "number_of_teams": 2, "max_players_per_team": 4},
    "2teams-5vs5": {"name": "2 Teams (5x5)", "number_of_teams": 2, "max_players_per_team": 5},
    "2teams-6vs6": {"name": "2 Teams (6x6)", "number_of_teams": 2, "max_players_per_team": 6},
    "3teams-3vs3": {"name": "3 Teams (3x3)", "number_of_teams": 3, "max_players_per_team": 3},
    "3teams-4vs4": {"name": "3 Teams (4x4)", "number_of_teams": 3, "max_players_per_team": 4},
    "4teams-3vs3": {"name": "4 Teams (3x3)", "number_of_teams": 4, "max_players_per_team": 3},
}
DEFAULT_TEAM_FORMAT = "2teams-6vs6"

TEAM_NAME_PREFIX = "Team"
OVERFLOW_TEAM_NAME = "Extra Team"

VISITOR_NAME_PREFIX = "Visitor"
VISITOR_ID_PREFIX = "visitor-"
VISITORS_MAX = 30

# Player skill attributes, rated 0..10
ATTRIBUTE_NAMES = {
    "serve": "Serve",
    "passing": "Passing",
    "attack": "Attack",
    "block": "Block",
    "defense": "Defense",
    "setting": "Setting",
    "fitness": "Fitness",
}
ATTRIBUTE_MIN = 0
ATTRIBUTE_MAX = 10

# MVP voting: points per podium rank, anything below rank 2 earns the last value
MVP_RANK_POINTS = {1: 3, 2: 2}
MVP_DEFAULT_POINTS = 1
MVP_PODIUM_SIZE = 3

# Weekly game created every Saturday
WEEKLY_GAME_WEEKDAY = 5  # Monday is 0
WEEKLY_GAME_TIME = "19:00"
WEEKLY_GAME_LOCATION = "Arena Tunel - Court 01"
WEEKLY_GAME_MAX_PLAYERS = 18
WEEKLY_GAME_CREATED_BY = "system"
