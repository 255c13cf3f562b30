from .direction import Position, Direction, Action, turn
from .stage import Stage
from .snake import Snake
from .food import Region, place_food
from .engine import Game, CellType, Outcome
from .config import load_config, make_game
