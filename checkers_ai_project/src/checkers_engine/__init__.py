"""
跳棋引擎

英式跳棋(8x8)的规则引擎和简单电脑对手。
包括棋盘表示、走法生成、走法执行、回合控制和吃子优先的随机对手。
"""

__version__ = "0.1.0"
__author__ = "Checkers AI Team"

from .rules_engine import CheckersBoard, Move, Side, RuleEngine, MoveExecutor, BoardValidator
from .game_interface import CheckersGame, RandomOpponent, MoveResult, RuleViolation, TurnPhase
from .config import ConfigManager, GameConfig, SystemConfig
from .utils import setup_logger, setup_logger_from_config, get_logger, CheckersError

__all__ = [
    "__version__", "__author__",
    "CheckersBoard", "Move", "Side", "RuleEngine", "MoveExecutor", "BoardValidator",
    "CheckersGame", "RandomOpponent", "MoveResult", "RuleViolation", "TurnPhase",
    "ConfigManager", "GameConfig", "SystemConfig",
    "setup_logger", "setup_logger_from_config", "get_logger", "CheckersError"
]
